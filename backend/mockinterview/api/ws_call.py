"""
Call relay socket.

The browser runs the voice platform SDK and relays its events here; this side
owns the CallController for the connection and tells the browser when to start
or stop the SDK, what to show, and where to go when the call is done.

Inbound:  {"type": "start"} | {"type": "end"} | {"type": "ping"}
          {"type": "event", "event": "<voice event>", "data": {...}}
Outbound: {"type": "session"} | {"type": "status"} | {"type": "caption"}
          {"type": "navigate"} | {"type": "error"} | {"type": "pong"}
          plus the relay commands {"type": "start", "config": ...} / {"type": "stop"}
"""
import asyncio
import json
import logging
import uuid

from fastapi import APIRouter, Request, WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from core.logger import log_event
from core.state import SessionMode
from mockinterview.auth import get_user_id, resolve_user_id_from_token
from mockinterview.call.controller import CallContext, CallController
from mockinterview.call.voice_client import RelayVoiceSession
from mockinterview.db.interview_repo import get_interview_by_id
from mockinterview.errors import ConfigurationError
from mockinterview.interview.questions import split_techstack
from mockinterview.session.registry import session_registry

router = APIRouter()
logger = logging.getLogger("mockinterview.api.ws_call")


def _websocket_token(websocket: WebSocket) -> str:
    auth_header = str(websocket.headers.get("authorization") or "").strip()
    token_from_header = auth_header.replace("Bearer ", "", 1).strip() if auth_header.lower().startswith("bearer ") else ""
    return (
        token_from_header
        or str(websocket.query_params.get("token") or "").strip()
        or str(websocket.query_params.get("access_token") or "").strip()
    )


def build_call_context(params, user_id: str) -> CallContext:
    """Call context from the connection's query string; a known interview id supplies its own profile."""
    raw_mode = str(params.get("mode") or SessionMode.INTERVIEW.value).strip().lower()
    try:
        mode = SessionMode(raw_mode)
    except ValueError:
        mode = SessionMode.INTERVIEW

    context = CallContext(
        user_name=str(params.get("user_name") or "").strip() or None,
        user_id=user_id,
        mode=mode,
        interview_id=str(params.get("interview_id") or "").strip() or None,
        feedback_id=str(params.get("feedback_id") or "").strip() or None,
        role=str(params.get("role") or "").strip() or None,
        techstack=split_techstack(params.get("techstack") or "") or None,
        interview_type=str(params.get("type") or "").strip() or None,
    )

    if context.interview_id:
        interview = get_interview_by_id(context.interview_id)
        if interview:
            context.role = interview.get("role") or context.role
            context.interview_type = interview.get("type") or context.interview_type
            context.techstack = list(interview.get("techstack") or []) or context.techstack
            context.questions = list(interview.get("questions") or [])
        else:
            logger.warning("unknown interview id on call connect | interview_id=%s", context.interview_id)
            context.interview_id = None
    return context


@router.websocket("/ws/call")
async def call_ws(websocket: WebSocket):
    session_id = str(uuid.uuid4())
    token = _websocket_token(websocket)
    if not token:
        await websocket.close(code=1008, reason="Unauthorized")
        return
    try:
        user_id = resolve_user_id_from_token(token)
    except Exception:
        await websocket.close(code=1008, reason="Unauthorized")
        return

    await websocket.accept()
    send_lock = asyncio.Lock()

    def _log_event(event: str, **fields):
        log_event("ws_call", event, session_id, **fields)

    async def _safe_send(payload: dict):
        if websocket.client_state != WebSocketState.CONNECTED:
            return
        try:
            encoded = json.dumps(payload)
        except Exception as exc:
            logger.warning("ws payload encode failed | session_id=%s err=%s", session_id, exc)
            return
        try:
            async with send_lock:
                await websocket.send_text(encoded)
        except Exception as exc:
            logger.warning("ws send failed | session_id=%s err=%s", session_id, exc)

    async def _navigate(path: str):
        await _safe_send({"type": "navigate", "session_id": session_id, "path": path})

    relay = RelayVoiceSession(send_fn=_safe_send)
    context = await asyncio.to_thread(build_call_context, websocket.query_params, user_id)
    controller = CallController(
        client=relay,
        context=context,
        navigate_fn=_navigate,
        session_id=session_id,
    )
    session_registry.register(session_id, controller, user_id=user_id)
    _log_event("connect", mode=context.mode.value, interview_id=context.interview_id)

    last_status: tuple | None = None
    last_caption = ""

    async def _sync_ui():
        nonlocal last_status, last_caption
        status = (controller.state.value, controller.is_speaking)
        if status != last_status:
            last_status = status
            await _safe_send({
                "type": "status",
                "session_id": session_id,
                "status": controller.state.value,
                "is_speaking": controller.is_speaking,
            })
        if controller.last_message != last_caption:
            last_caption = controller.last_message
            await _safe_send({"type": "caption", "session_id": session_id, "text": last_caption})

    await _safe_send({"type": "session", "session_id": session_id, "mode": context.mode.value})
    await _sync_ui()

    try:
        while True:
            text_payload = await websocket.receive_text()
            try:
                payload = json.loads(text_payload)
            except json.JSONDecodeError:
                await _safe_send({"type": "error", "error": "invalid_json"})
                continue
            if not isinstance(payload, dict):
                continue

            session_registry.touch(session_id)
            message_type = str(payload.get("type") or "").strip().lower()

            if message_type == "ping":
                await _safe_send({"type": "pong"})
                continue

            if message_type == "start":
                try:
                    started = await controller.start_call()
                except ConfigurationError as exc:
                    _log_event("start_rejected", reason="configuration")
                    await _safe_send({"type": "error", "error": "configuration", "message": str(exc)})
                    continue
                if not started:
                    await _safe_send({"type": "error", "error": "start_failed", "status": controller.state.value})
            elif message_type == "end":
                await controller.end_call()
            elif message_type == "event":
                relay.dispatch(payload)
            else:
                logger.debug("ignoring ws message | session_id=%s type=%s", session_id, message_type)
                continue

            await _sync_ui()
    except WebSocketDisconnect:
        _log_event("disconnect", status=controller.state.value)
    finally:
        controller.close()
        session_registry.mark_closed(session_id)


@router.get("/api/calls")
def list_user_calls(request: Request):
    user_id = get_user_id(request)
    return {"calls": session_registry.calls_for_user(user_id)}
