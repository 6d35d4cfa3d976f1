FEEDBACK_SYSTEM_PROMPT = (
    "You are a professional interviewer. Generate valid JSON feedback based strictly "
    "on the candidate's actual responses. Ensure all JSON syntax is correct."
)


def format_transcript(transcript) -> str:
    """One "- role: content" line per message, in conversation order."""
    lines = []
    for message in transcript:
        role = message["role"] if isinstance(message, dict) else message.role
        content = message["content"] if isinstance(message, dict) else message.content
        lines.append(f"- {role}: {content}\n")
    return "".join(lines)


def build_feedback_prompt(formatted_transcript: str) -> str:
    """
    Build the evaluation prompt for a finished mock interview.
    Called once per session, after the call ends.
    """

    return f"""
You are an AI interviewer analyzing a mock interview. Your task is to evaluate the candidate based on their responses in the transcript.

TRANSCRIPT:
{formatted_transcript}

EVALUATION INSTRUCTIONS:
1. Analyze the candidate's responses carefully
2. Score each category from 0-100 based on their performance
3. Provide specific feedback based on what they actually said
4. Identify concrete strengths from their responses
5. Identify specific areas for improvement based on their answers
6. Write a comprehensive final assessment

CATEGORIES TO EVALUATE:
- Technical Knowledge: How well they understand technical concepts, frameworks, and tools mentioned
- Problem Solving: Their approach to solving problems, logical thinking, and methodology
- Communication Skills: Clarity, articulation, how well they explain concepts
- Leadership & Teamwork: How they discuss collaboration, team dynamics, leadership experiences
- Adaptability & Learning: Their approach to learning new things, handling challenges

IMPORTANT: Base your evaluation ONLY on what the candidate actually said in the transcript. Do not make assumptions. If they didn't discuss certain topics, reflect that in your scoring and comments.

Return STRICT JSON only in this format:
{{
  "totalScore": 0-100,
  "categoryScores": [
    {{"name": "Technical Knowledge", "score": 0-100, "comment": "string"}},
    {{"name": "Problem Solving", "score": 0-100, "comment": "string"}},
    {{"name": "Communication Skills", "score": 0-100, "comment": "string"}},
    {{"name": "Leadership & Teamwork", "score": 0-100, "comment": "string"}},
    {{"name": "Adaptability & Learning", "score": 0-100, "comment": "string"}}
  ],
  "strengths": ["string"],
  "areasForImprovement": ["string"],
  "finalAssessment": "string"
}}
"""
