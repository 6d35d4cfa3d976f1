import json
import logging

from mockinterview.ai_reasoning.llm import call_llm
from mockinterview.ai_reasoning.prompts.questions_prompt import build_questions_prompt
from mockinterview.db.interview_repo import create_interview_async
from mockinterview.db.store import JsonDocumentStore
from mockinterview.errors import PersistenceError
from mockinterview.interview.catalog import get_random_interview_cover
from mockinterview.schemas import CreateInterviewRequest, GenerateQuestionsRequest

logger = logging.getLogger("mockinterview.interview.questions")


def normalize_techstack(raw: str) -> list[str]:
    """Form input "React, Node ,," -> ["react", "node"]."""
    return [item.strip().lower() for item in str(raw or "").split(",") if item.strip()]


def split_techstack(raw: str) -> list[str]:
    return [item.strip() for item in str(raw or "").split(",") if item.strip()]


async def generate_questions(role: str, level: str, techstack: str, interview_type: str, amount: int) -> list[str]:
    prompt = build_questions_prompt(role, level, techstack, interview_type, amount)
    text = await call_llm(prompt)

    # The model is asked for a bare JSON array; anything else is a failure.
    questions = json.loads(text)
    if not isinstance(questions, list):
        raise ValueError("question generator did not return a JSON array")
    return [str(item) for item in questions]


async def generate_and_save_interview(req: GenerateQuestionsRequest, store: JsonDocumentStore | None = None) -> dict:
    questions = await generate_questions(req.role, req.level, req.techstack, req.type, req.amount)

    result = await create_interview_async(
        user_id=req.userid,
        role=req.role,
        interview_type=req.type,
        techstack=split_techstack(req.techstack),
        questions=questions,
        level=req.level,
        finalized=True,
        cover_image=get_random_interview_cover(),
        store=store,
    )
    if not result.get("success"):
        raise PersistenceError("could not save generated interview")

    logger.info("generated interview | user_id=%s questions=%s id=%s", req.userid, len(questions), result.get("id"))
    return result


async def create_interview_from_form(
    user_id: str, form: CreateInterviewRequest, store: JsonDocumentStore | None = None
) -> dict:
    """Create-page submission: same generation path, techstack normalized first."""
    req = GenerateQuestionsRequest(
        type=form.type,
        role=form.role,
        level=form.level,
        techstack=",".join(normalize_techstack(form.techstack)),
        amount=form.amount,
        userid=user_id,
    )
    return await generate_and_save_interview(req, store=store)
