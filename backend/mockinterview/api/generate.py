import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from mockinterview.interview.questions import generate_and_save_interview
from mockinterview.schemas import GenerateQuestionsRequest
from mockinterview.system_metrics import increment_metric

router = APIRouter()
logger = logging.getLogger("mockinterview.api.generate")


@router.post("/api/vapi/generate")
async def generate_interview(request: Request):
    # Every failure, including a malformed body, is reported in the same envelope.
    try:
        payload = await request.json()
        req = GenerateQuestionsRequest.model_validate(payload)
        await generate_and_save_interview(req)
    except Exception as exc:
        increment_metric("question_generation_failures")
        logger.error("question generation failed | err=%s", exc)
        return JSONResponse(status_code=500, content={"success": False, "error": str(exc)})

    increment_metric("questions_generated")
    return {"success": True}


@router.get("/api/vapi/generate")
def generate_liveness():
    return {"success": True, "data": "Thank you!"}
