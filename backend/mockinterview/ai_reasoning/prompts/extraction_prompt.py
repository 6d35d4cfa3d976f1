EXTRACTION_SYSTEM_PROMPT = "You are an AI assistant extracting structured interview details from a transcript."


def build_extraction_prompt(formatted_transcript: str) -> str:
    return f"""
You are an AI assistant. Extract the following details from the interview transcript below:
- The job role/title the candidate is interviewing for (e.g., Software Engineer, Frontend Developer, etc.)
- The main tech stack discussed (as an array of technology names, e.g., ["react", "nodejs", "aws"])
- The type of interview (Technical, Behavioral, Mixed, etc.)

Transcript:
{formatted_transcript}

Respond in JSON format with keys: role, techstack, type.
"""
