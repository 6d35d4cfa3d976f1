import logging

from mockinterview.ai_reasoning.llm import generate_object
from mockinterview.ai_reasoning.prompts.extraction_prompt import EXTRACTION_SYSTEM_PROMPT, build_extraction_prompt
from mockinterview.ai_reasoning.prompts.feedback_prompt import format_transcript
from mockinterview.schemas import InterviewDetails

logger = logging.getLogger("mockinterview.interview.extraction")


async def extract_interview_details(transcript) -> InterviewDetails | None:
    """Role, tech stack and interview type pulled from a free-form call; None on any failure."""
    try:
        prompt = build_extraction_prompt(format_transcript(transcript))
        return await generate_object(prompt, InterviewDetails, system=EXTRACTION_SYSTEM_PROMPT)
    except Exception as exc:
        logger.warning("interview detail extraction failed | err=%s", exc)
        return None
