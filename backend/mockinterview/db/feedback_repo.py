import asyncio

from mockinterview.db.interview_repo import FEEDBACK
from mockinterview.db.store import JsonDocumentStore, get_store


def save_feedback(record: dict, feedback_id: str | None = None, store: JsonDocumentStore | None = None) -> str:
    """
    Full replace when `feedback_id` is given, otherwise create.
    Raises PersistenceError; the feedback pipeline decides what that means.
    """
    collection = (store or get_store()).collection(FEEDBACK)
    if feedback_id:
        return collection.set(feedback_id, record)
    return collection.create(record)


def get_feedback_by_interview_id(interview_id: str, user_id: str, store: JsonDocumentStore | None = None) -> dict | None:
    rows = (store or get_store()).collection(FEEDBACK).query(
        filters=[("interviewId", "==", interview_id), ("userId", "==", user_id)],
        limit=1,
    )
    return rows[0] if rows else None


async def save_feedback_async(record: dict, feedback_id: str | None = None, store: JsonDocumentStore | None = None) -> str:
    return await asyncio.to_thread(save_feedback, record, feedback_id, store)
