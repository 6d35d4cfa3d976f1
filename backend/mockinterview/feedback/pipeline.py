import logging
from dataclasses import dataclass

from mockinterview.ai_reasoning.llm import generate_object
from mockinterview.ai_reasoning.prompts.feedback_prompt import (
    FEEDBACK_SYSTEM_PROMPT,
    build_feedback_prompt,
    format_transcript,
)
from mockinterview.db.feedback_repo import save_feedback_async
from mockinterview.db.interview_repo import utc_now_iso
from mockinterview.db.store import JsonDocumentStore
from mockinterview.feedback.fallback import build_fallback_feedback
from mockinterview.schemas import FeedbackGeneration, round_half_up
from mockinterview.system_metrics import increment_metric

logger = logging.getLogger("mockinterview.feedback.pipeline")

DEFAULT_STRENGTHS = ["Interview completed successfully."]
DEFAULT_IMPROVEMENTS = ["Continue practicing to improve your skills."]
DEFAULT_ASSESSMENT = "Assessment completed based on your interview responses."


@dataclass
class FeedbackResult:
    success: bool
    feedback_id: str | None = None
    used_fallback: bool = False

    def to_dict(self) -> dict:
        payload = {"success": self.success}
        if self.feedback_id:
            payload["feedbackId"] = self.feedback_id
        return payload


def normalize_feedback(generated: FeedbackGeneration, interview_id: str, user_id: str) -> dict:
    scores = [item.score for item in generated.category_scores]
    # A zero total is treated as missing.
    total_score = generated.total_score or round_half_up(sum(scores) / len(scores))

    return {
        "interviewId": interview_id,
        "userId": user_id,
        "totalScore": total_score,
        "categoryScores": [item.model_dump() for item in generated.category_scores],
        "strengths": list(generated.strengths) or list(DEFAULT_STRENGTHS),
        "areasForImprovement": list(generated.areas_for_improvement) or list(DEFAULT_IMPROVEMENTS),
        "finalAssessment": generated.final_assessment or DEFAULT_ASSESSMENT,
        "createdAt": utc_now_iso(),
    }


async def create_feedback(
    interview_id: str,
    user_id: str,
    transcript,
    feedback_id: str | None = None,
    store: JsonDocumentStore | None = None,
) -> FeedbackResult:
    """
    Score a finished interview and write its feedback record.

    Passing `feedback_id` overwrites that record instead of creating a new one.
    Never raises: model failures fall back to heuristic feedback, and a failed
    fallback write is reported as success=False.
    """
    try:
        prompt = build_feedback_prompt(format_transcript(transcript))
        generated = await generate_object(prompt, FeedbackGeneration, system=FEEDBACK_SYSTEM_PROMPT)
        record = normalize_feedback(generated, interview_id, user_id)
        saved_id = await save_feedback_async(record, feedback_id, store)
        increment_metric("feedback_generated")
        logger.info("feedback saved | interview_id=%s feedback_id=%s", interview_id, saved_id)
        return FeedbackResult(success=True, feedback_id=saved_id)
    except Exception as exc:
        logger.warning("feedback generation failed, using fallback | interview_id=%s err=%s", interview_id, exc)

    try:
        record = build_fallback_feedback(transcript, interview_id, user_id)
        saved_id = await save_feedback_async(record, feedback_id, store)
    except Exception as exc:
        increment_metric("feedback_failures")
        logger.error("fallback feedback write failed | interview_id=%s err=%s", interview_id, exc)
        return FeedbackResult(success=False)

    increment_metric("feedback_fallbacks")
    logger.info("fallback feedback saved | interview_id=%s feedback_id=%s", interview_id, saved_id)
    return FeedbackResult(success=True, feedback_id=saved_id, used_fallback=True)
