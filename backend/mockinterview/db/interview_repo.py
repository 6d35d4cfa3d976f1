import asyncio
import logging
from datetime import datetime, timezone

from mockinterview.db.store import JsonDocumentStore, get_store
from mockinterview.errors import PersistenceError

logger = logging.getLogger("mockinterview.db.interview_repo")

INTERVIEWS = "interviews"
FEEDBACK = "feedback"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def create_interview(
    user_id: str,
    role: str,
    interview_type: str,
    techstack: list[str],
    questions: list[str] | None = None,
    level: str = "",
    finalized: bool = True,
    cover_image: str | None = None,
    store: JsonDocumentStore | None = None,
) -> dict:
    interview = {
        "userId": user_id,
        "role": role,
        "type": interview_type,
        "techstack": list(techstack or []),
        "questions": list(questions or []),
        "level": level or "",
        "createdAt": utc_now_iso(),
        "finalized": bool(finalized),
    }
    if cover_image:
        interview["coverImage"] = cover_image
    try:
        doc_id = (store or get_store()).collection(INTERVIEWS).create(interview)
    except PersistenceError as exc:
        logger.error("create_interview failed | user_id=%s err=%s", user_id, exc)
        return {"success": False}
    return {"success": True, "id": doc_id}


def finalize_interview(interview_id: str, store: JsonDocumentStore | None = None) -> dict:
    try:
        (store or get_store()).collection(INTERVIEWS).update(interview_id, {"finalized": True})
    except PersistenceError as exc:
        logger.error("finalize_interview failed | interview_id=%s err=%s", interview_id, exc)
        return {"success": False}
    return {"success": True}


def get_interview_by_id(interview_id: str, store: JsonDocumentStore | None = None) -> dict | None:
    data = (store or get_store()).collection(INTERVIEWS).get(interview_id)
    if data is None:
        return None
    return {"id": interview_id, **data}


def get_interviews_by_user_id(user_id: str, store: JsonDocumentStore | None = None) -> list[dict]:
    return (store or get_store()).collection(INTERVIEWS).query(
        filters=[("userId", "==", user_id)],
        order_by=("createdAt", "desc"),
    )


def get_latest_interviews(user_id: str, limit: int = 20, store: JsonDocumentStore | None = None) -> list[dict]:
    """Finalized interviews created by other users, newest first."""
    return (store or get_store()).collection(INTERVIEWS).query(
        filters=[("finalized", "==", True), ("userId", "!=", user_id)],
        order_by=("createdAt", "desc"),
        limit=limit,
    )


def reset_user_interviews(user_id: str, store: JsonDocumentStore | None = None) -> dict:
    target = store or get_store()
    try:
        interviews = target.collection(INTERVIEWS).query(filters=[("userId", "==", user_id)])
        for item in interviews:
            target.collection(INTERVIEWS).delete(item["id"])

        feedback = target.collection(FEEDBACK).query(filters=[("userId", "==", user_id)])
        for item in feedback:
            target.collection(FEEDBACK).delete(item["id"])
    except PersistenceError as exc:
        logger.error("reset_user_interviews failed | user_id=%s err=%s", user_id, exc)
        return {"success": False, "error": str(exc)}

    logger.info(
        "reset completed | user_id=%s interviews=%s feedback=%s",
        user_id,
        len(interviews),
        len(feedback),
    )
    return {
        "success": True,
        "deletedInterviews": len(interviews),
        "deletedFeedback": len(feedback),
    }


async def create_interview_async(*args, **kwargs) -> dict:
    return await asyncio.to_thread(create_interview, *args, **kwargs)


async def finalize_interview_async(interview_id: str, store: JsonDocumentStore | None = None) -> dict:
    return await asyncio.to_thread(finalize_interview, interview_id, store)
