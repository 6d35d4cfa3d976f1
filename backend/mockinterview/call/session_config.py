from __future__ import annotations

import copy
from dataclasses import dataclass, field

from mockinterview.interview.behavioral import BehavioralQuestionSelector

DEFAULT_ROLE = "Software Engineer"
DEFAULT_PROFILE_TYPE = "Mixed"

INTERVIEWER_BASE_PROMPT = """You are a professional job interviewer conducting a real-time voice interview with a candidate. Your goal is to assess their qualifications, motivation, and fit for the role.

Interview Guidelines:
Follow the structured question flow:
{{questions}}

Engage naturally and react appropriately:
Listen actively to responses and acknowledge them before moving forward.
Ask brief follow-up questions if a response is vague or requires more detail.
Keep the conversation flowing smoothly while maintaining control.

Be professional, yet warm and welcoming:
Use official yet friendly language.
Keep responses concise and to the point, like in a real voice interview.
Avoid robotic phrasing. Sound natural and conversational.

Answer the candidate's questions professionally:
If asked about the role, company, or expectations, provide a clear and relevant answer.
If unsure, redirect the candidate to HR for more details.

Conclude the interview properly:
Thank the candidate for their time.
Inform them that the company will reach out soon with feedback.
End the conversation on a polite and positive note.

- Be sure to be professional and polite.
- Keep all your responses short and simple. Use official language, but be kind and welcoming.
- This is a voice conversation, so keep your responses short, like in a real conversation. Don't ramble for too long."""

DEFAULT_FIRST_MESSAGE = (
    "Hello! Thank you for taking the time to speak with me today. "
    "I'm excited to learn more about you and your experience."
)

FIRST_MESSAGES = {
    "Technical": (
        "Hello! I'm your interviewer today. I'll be asking you technical questions to assess your "
        "programming skills, problem-solving abilities, and technical knowledge. Please speak clearly "
        "and take your time with your responses."
    ),
    "Behavioral": (
        "Hello! I'm your interviewer today. I'll be asking you behavioral questions to assess your "
        "soft skills, past experiences, and how you handle various situations. Please speak clearly "
        "and take your time with your responses."
    ),
    "Mixed": (
        "Hello! I'm your interviewer today. I'll be asking you a mix of technical and behavioral "
        "questions to assess your skills, experience, and problem-solving abilities. Please speak "
        "clearly and take your time with your responses."
    ),
}

INTERVIEWER = {
    "name": "Interviewer",
    "firstMessage": DEFAULT_FIRST_MESSAGE,
    "transcriber": {
        "provider": "deepgram",
        "model": "nova-2",
        "language": "en",
    },
    "voice": {
        "provider": "11labs",
        "voiceId": "sarah",
        "stability": 0.4,
        "similarityBoost": 0.8,
        "speed": 0.9,
        "style": 0.5,
        "useSpeakerBoost": True,
    },
    "model": {
        "provider": "openai",
        "model": "gpt-4",
        "messages": [{"role": "system", "content": INTERVIEWER_BASE_PROMPT}],
    },
}

TECHNICAL_TYPES = {"Technical", "Mixed"}
BEHAVIORAL_TYPES = {"Behavioral", "Mixed"}


@dataclass
class SessionConfig:
    """What the voice platform needs to open a call: a saved assistant id or an inline assistant."""

    variable_values: dict = field(default_factory=dict)
    assistant_id: str | None = None
    assistant: dict | None = None

    def to_payload(self) -> dict:
        payload = {"variableValues": dict(self.variable_values)}
        if self.assistant_id:
            payload["assistantId"] = self.assistant_id
        if self.assistant is not None:
            payload["assistant"] = self.assistant
        return payload


def format_questions(questions: list[str] | None) -> str:
    return "\n".join(f"- {question}" for question in questions or [])


def build_job_profile_block(role: str | None, techstack: list[str] | None, interview_type: str | None) -> str:
    stack = ", ".join(techstack) if techstack else "General"
    return (
        "INTERVIEW JOB PROFILE:\n"
        f"- Role: {role or DEFAULT_ROLE}\n"
        f"- Tech Stack: {stack}\n"
        f"- Type: {interview_type or DEFAULT_PROFILE_TYPE}"
    )


def build_system_prompt(
    role: str | None,
    techstack: list[str] | None,
    interview_type: str | None,
    questions: list[str] | None,
    selector: BehavioralQuestionSelector | None = None,
) -> str:
    """Job profile, then technical questions, then behavioral questions, then the base instructions."""
    parts = [build_job_profile_block(role, techstack, interview_type)]

    if interview_type in TECHNICAL_TYPES and questions:
        parts.append(f"\n\nTECHNICAL QUESTIONS TO ASK:\n{format_questions(questions)}")

    if interview_type in BEHAVIORAL_TYPES:
        picked = (selector or BehavioralQuestionSelector()).for_role(role or DEFAULT_ROLE, 3)
        numbered = "\n".join(f"{index}. {item.question}" for index, item in enumerate(picked, start=1))
        parts.append(f"\n\nBEHAVIORAL QUESTIONS TO ASK:\n{numbered}")

    parts.append(f"\n\n{INTERVIEWER_BASE_PROMPT}")
    return "".join(parts)


def first_message_for(interview_type: str | None) -> str:
    # No per-type fallback: unknown types keep the platform greeting.
    return FIRST_MESSAGES.get(interview_type or "", INTERVIEWER["firstMessage"])


def build_interview_session(
    role: str | None,
    techstack: list[str] | None,
    interview_type: str | None,
    questions: list[str] | None,
    selector: BehavioralQuestionSelector | None = None,
) -> SessionConfig:
    assistant = copy.deepcopy(INTERVIEWER)
    assistant["name"] = f"{role} Interviewer" if role else INTERVIEWER["name"]
    assistant["firstMessage"] = first_message_for(interview_type)
    assistant["model"] = {
        "provider": "openai",
        "model": "gpt-4",
        "messages": [
            {
                "role": "system",
                "content": build_system_prompt(role, techstack, interview_type, questions, selector),
            }
        ],
    }
    return SessionConfig(
        variable_values={"questions": format_questions(questions)},
        assistant=assistant,
    )


def build_generate_session(assistant_id: str, user_name: str | None, user_id: str | None) -> SessionConfig:
    return SessionConfig(
        variable_values={"username": user_name, "userid": user_id},
        assistant_id=assistant_id,
    )
