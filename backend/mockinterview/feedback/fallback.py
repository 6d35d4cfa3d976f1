"""
Heuristic feedback used when the model cannot produce a valid evaluation.

Scores depend only on three checks over the raw transcript text, so the same
transcript always yields the same scores.
"""
import re

from mockinterview.db.interview_repo import utc_now_iso

FALLBACK_TOTAL_SCORE = 60

TECHNICAL_PATTERN = re.compile(r"react|node|javascript|typescript|api|database|algorithm|data structure", re.IGNORECASE)
PROBLEM_SOLVING_PATTERN = re.compile(r"problem|solve|approach|solution|method", re.IGNORECASE)
COMMUNICATION_MIN_CHARS = 100

FALLBACK_ASSESSMENT = (
    "Your interview has been completed successfully. While the AI feedback generation "
    "encountered a technical issue, your participation and responses were recorded. "
    "Consider retaking the interview for more detailed feedback."
)


def _content(message) -> str:
    if isinstance(message, dict):
        return str(message.get("content") or "")
    return str(getattr(message, "content", "") or "")


def transcript_signals(transcript) -> dict[str, bool]:
    text = " ".join(_content(message) for message in transcript)
    return {
        "technical": bool(TECHNICAL_PATTERN.search(text)),
        "problem_solving": bool(PROBLEM_SOLVING_PATTERN.search(text)),
        "communication": len(text) > COMMUNICATION_MIN_CHARS,
    }


def build_fallback_feedback(transcript, interview_id: str, user_id: str) -> dict:
    signals = transcript_signals(transcript)
    technical = signals["technical"]
    problem_solving = signals["problem_solving"]
    communication = signals["communication"]

    return {
        "interviewId": interview_id,
        "userId": user_id,
        "totalScore": FALLBACK_TOTAL_SCORE,
        "categoryScores": [
            {
                "name": "Technical Knowledge",
                "score": 65 if technical else 50,
                "comment": (
                    "You demonstrated some technical knowledge in your responses."
                    if technical
                    else "Technical concepts were not extensively discussed in this interview."
                ),
            },
            {
                "name": "Problem Solving",
                "score": 65 if problem_solving else 50,
                "comment": (
                    "You showed problem-solving thinking in your approach."
                    if problem_solving
                    else "Problem-solving scenarios were limited in this interview."
                ),
            },
            {
                "name": "Communication Skills",
                "score": 70 if communication else 60,
                "comment": (
                    "You communicated your thoughts clearly during the interview."
                    if communication
                    else "Communication assessment was limited due to interview length."
                ),
            },
            {
                "name": "Leadership & Teamwork",
                "score": 55,
                "comment": "Leadership and teamwork aspects were not extensively covered in this interview.",
            },
            {
                "name": "Adaptability & Learning",
                "score": 55,
                "comment": "Learning and adaptability aspects were not extensively covered in this interview.",
            },
        ],
        "strengths": [
            "Successfully completed the interview.",
            "Demonstrated technical knowledge." if technical else "Engaged in the interview process.",
            "Communicated effectively." if communication else "Participated actively in the conversation.",
        ],
        "areasForImprovement": [
            "Continue practicing technical concepts.",
            "Work on structured problem-solving approaches.",
            "Practice explaining complex topics clearly.",
        ],
        "finalAssessment": FALLBACK_ASSESSMENT,
        "createdAt": utc_now_iso(),
    }
