import asyncio
import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse

from mockinterview.auth import get_user_id
from mockinterview.db.feedback_repo import get_feedback_by_interview_id
from mockinterview.db.interview_repo import (
    create_interview_async,
    get_interview_by_id,
    get_interviews_by_user_id,
    get_latest_interviews,
    reset_user_interviews,
)
from mockinterview.feedback.pipeline import create_feedback
from mockinterview.interview.catalog import get_available_static_companies, get_static_company_by_id, get_static_company_by_name
from mockinterview.interview.questions import create_interview_from_form
from mockinterview.schemas import CreateInterviewRequest, FeedbackRequest, StaticInterviewResponse
from mockinterview.system_metrics import increment_metric

router = APIRouter()
logger = logging.getLogger("mockinterview.api.interviews")


@router.get("/api/interviews")
def list_user_interviews(request: Request):
    user_id = get_user_id(request)
    return {"interviews": get_interviews_by_user_id(user_id)}


@router.get("/api/interviews/latest")
def list_latest_interviews(request: Request, limit: int = 20):
    user_id = get_user_id(request)
    limit = max(1, min(int(limit or 20), 100))
    return {"interviews": get_latest_interviews(user_id, limit=limit)}


@router.get("/api/interviews/static")
def list_static_companies(request: Request):
    user_id = get_user_id(request)
    available = get_available_static_companies(get_interviews_by_user_id(user_id))
    return {"companies": [company.to_dict() for company in available]}


@router.post("/api/interviews/static/{company}", response_model=StaticInterviewResponse)
async def prepare_static_interview(company: str, request: Request):
    """Create the interview record up front so the call finalizes it instead of extracting details."""
    user_id = get_user_id(request)
    static = get_static_company_by_id(company) or get_static_company_by_name(company)
    if static is None:
        raise HTTPException(status_code=404, detail="Company not found")

    result = await create_interview_async(
        user_id=user_id,
        role=static.role,
        interview_type=static.type,
        techstack=list(static.techstack),
        finalized=False,
        cover_image=static.cover_image,
    )
    if not result.get("success"):
        raise HTTPException(status_code=500, detail="Could not create interview")

    increment_metric("interviews_created")
    logger.info("static interview prepared | user_id=%s company=%s id=%s", user_id, static.id, result["id"])
    return StaticInterviewResponse(
        interview_id=result["id"],
        role=static.role,
        type=static.type,
        techstack=list(static.techstack),
        questions=[],
        cover_image=static.cover_image,
        description=static.description,
    )


@router.post("/api/interviews/create")
async def create_interview_route(form: CreateInterviewRequest, request: Request):
    user_id = get_user_id(request)
    try:
        result = await create_interview_from_form(user_id, form)
    except Exception as exc:
        increment_metric("question_generation_failures")
        logger.error("interview creation failed | user_id=%s err=%s", user_id, exc)
        return JSONResponse(status_code=500, content={"success": False, "error": str(exc)})

    increment_metric("interviews_created")
    return {"success": True, "interviewId": result["id"]}


@router.post("/api/interviews/reset")
async def reset_interviews(request: Request):
    user_id = get_user_id(request)
    result = await asyncio.to_thread(reset_user_interviews, user_id)
    if not result.get("success"):
        raise HTTPException(status_code=500, detail=result.get("error") or "Reset failed")
    return result


@router.get("/api/interviews/{interview_id}")
def read_interview(interview_id: str, request: Request):
    get_user_id(request)
    interview = get_interview_by_id(interview_id)
    if not interview:
        raise HTTPException(status_code=404, detail="Interview not found")
    return interview


@router.get("/api/interviews/{interview_id}/feedback")
def read_interview_feedback(interview_id: str, request: Request):
    user_id = get_user_id(request)
    feedback = get_feedback_by_interview_id(interview_id, user_id)
    if not feedback:
        raise HTTPException(status_code=404, detail="Feedback not found")
    return feedback


@router.post("/api/feedback")
async def submit_feedback(req: FeedbackRequest, request: Request):
    user_id = get_user_id(request)
    if get_interview_by_id(req.interview_id) is None:
        raise HTTPException(status_code=404, detail="Interview not found")

    result = await create_feedback(
        interview_id=req.interview_id,
        user_id=user_id,
        transcript=req.transcript,
        feedback_id=req.feedback_id,
    )
    return result.to_dict()
