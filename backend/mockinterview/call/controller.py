from __future__ import annotations

import asyncio
import logging
import random
import uuid
from dataclasses import dataclass, field
from typing import Awaitable, Callable

from core.config import get_voice_assistant_id, get_voice_web_token
from core.logger import log_event
from core.state import CallStatus, SessionMode, VoiceErrorKind
from mockinterview.call import voice_client as events
from mockinterview.call.session_config import SessionConfig, build_generate_session, build_interview_session
from mockinterview.call.voice_client import VoiceSessionClient, classify_voice_error
from mockinterview.db.interview_repo import create_interview_async, finalize_interview_async
from mockinterview.db.store import JsonDocumentStore
from mockinterview.errors import ConfigurationError
from mockinterview.feedback.pipeline import FeedbackResult, create_feedback
from mockinterview.interview.behavioral import BehavioralQuestionSelector
from mockinterview.interview.extraction import extract_interview_details
from mockinterview.schemas import TranscriptMessage
from mockinterview.system_metrics import decrement_metric, increment_metric

logger = logging.getLogger("mockinterview.call.controller")

HOME_PATH = "/"
DEFAULT_INTERVIEW_ROLE = "Software Engineer"
DEFAULT_INTERVIEW_TYPE = "Technical"
DEFAULT_INTERVIEW_TECHSTACK = ("react", "nodejs", "aws")

NavigateFn = Callable[[str], Awaitable[None]]


def feedback_path(interview_id: str) -> str:
    return f"/interview/{interview_id}/feedback"


@dataclass
class CallContext:
    """Who is calling and which interview the call belongs to."""

    user_name: str | None = None
    user_id: str | None = None
    mode: SessionMode = SessionMode.INTERVIEW
    interview_id: str | None = None
    feedback_id: str | None = None
    questions: list[str] = field(default_factory=list)
    role: str | None = None
    techstack: list[str] | None = None
    interview_type: str | None = None


class CallController:
    """
    Lifecycle of one voice call: IDLE -> CONNECTING -> ACTIVE -> FINISHED.

    FINISHED is terminal; a new call needs a new controller. Entering FINISHED
    schedules finalization exactly once: the interview record is finalized or
    created, then feedback is generated (interview mode) and the caller is sent
    to the feedback page, or home.

    `is_speaking` tracks the assistant's speech and is independent of `state`.
    """

    def __init__(
        self,
        client: VoiceSessionClient,
        context: CallContext,
        store: JsonDocumentStore | None = None,
        navigate_fn: NavigateFn | None = None,
        rng: random.Random | None = None,
        session_id: str | None = None,
        web_token: str | None = None,
        assistant_id: str | None = None,
    ):
        self.client = client
        self.context = context
        self.session_id = session_id or str(uuid.uuid4())
        self.store = store
        self._navigate_fn = navigate_fn
        self._selector = BehavioralQuestionSelector(rng=rng)
        self._web_token = web_token
        self._assistant_id = assistant_id

        self.state = CallStatus.IDLE
        self.is_speaking = False
        self.transcript: list[TranscriptMessage] = []
        self.last_message = ""
        self.interview_id = context.interview_id
        self.last_error_kind: VoiceErrorKind | None = None
        self.session_config: SessionConfig | None = None
        self.feedback_result: FeedbackResult | None = None
        self.redirect_path: str | None = None
        self._finalize_task: asyncio.Task | None = None

        self._subscriptions = (
            (events.CALL_START, self._on_call_start),
            (events.CALL_END, self._on_call_end),
            (events.MESSAGE, self._on_message),
            (events.SPEECH_START, self._on_speech_start),
            (events.SPEECH_END, self._on_speech_end),
            (events.ERROR, self._on_error),
        )
        for event, handler in self._subscriptions:
            self.client.on(event, handler)

    def close(self) -> None:
        for event, handler in self._subscriptions:
            self.client.off(event, handler)

    # -------------------------
    # USER ACTIONS
    # -------------------------

    async def start_call(self) -> bool:
        if self.state != CallStatus.IDLE:
            logger.warning("start_call rejected | session_id=%s state=%s", self.session_id, self.state.value)
            return False

        self.session_config = self._build_session_config()
        self._set_state(CallStatus.CONNECTING, "start_call")
        increment_metric("calls_started")

        try:
            await self.client.start(self.session_config.to_payload())
        except Exception as exc:
            logger.error("voice session start failed | session_id=%s err=%s", self.session_id, exc)
            increment_metric("call_start_failures")
            if self.state == CallStatus.CONNECTING:
                self._set_state(CallStatus.IDLE, "start_failed")
            return False
        return True

    async def end_call(self) -> bool:
        # The explicit end is only offered once the call is live.
        if self.state != CallStatus.ACTIVE:
            return False
        try:
            await self.client.stop()
        except Exception as exc:
            logger.warning("voice session stop failed | session_id=%s err=%s", self.session_id, exc)
        # Finish without waiting for the platform's own call-end.
        self._enter_finished("end_call")
        return True

    async def wait_finalized(self) -> str | None:
        if self._finalize_task is not None:
            await self._finalize_task
        return self.redirect_path

    def _build_session_config(self) -> SessionConfig:
        token = self._web_token if self._web_token is not None else get_voice_web_token()
        if not token:
            log_event("call_controller", "config_error", self.session_id, missing="web_token")
            raise ConfigurationError("Voice web token is not configured")

        ctx = self.context
        if ctx.mode == SessionMode.GENERATE:
            assistant_id = self._assistant_id if self._assistant_id is not None else get_voice_assistant_id()
            if not assistant_id:
                log_event("call_controller", "config_error", self.session_id, missing="assistant_id")
                raise ConfigurationError("Voice assistant id is not configured")
            return build_generate_session(assistant_id, ctx.user_name, ctx.user_id)

        return build_interview_session(
            role=ctx.role,
            techstack=ctx.techstack,
            interview_type=ctx.interview_type,
            questions=ctx.questions,
            selector=self._selector,
        )

    # -------------------------
    # VOICE EVENTS
    # -------------------------

    def _on_call_start(self, _payload: dict) -> None:
        if self.state in (CallStatus.IDLE, CallStatus.CONNECTING):
            self._set_state(CallStatus.ACTIVE, "call-start")

    def _on_call_end(self, _payload: dict) -> None:
        self._enter_finished("call-end")

    def _on_message(self, payload: dict) -> None:
        if payload.get("type") != "transcript" or payload.get("transcriptType") != "final":
            return
        if self.state == CallStatus.FINISHED:
            logger.debug("transcript after finish ignored | session_id=%s", self.session_id)
            return
        try:
            message = TranscriptMessage(role=payload.get("role"), content=str(payload.get("transcript") or ""))
        except Exception as exc:
            logger.warning("malformed transcript event | session_id=%s err=%s", self.session_id, exc)
            return
        self.transcript.append(message)
        self.last_message = self.transcript[-1].content

    def _on_speech_start(self, _payload: dict) -> None:
        self.is_speaking = True

    def _on_speech_end(self, _payload: dict) -> None:
        self.is_speaking = False

    def _on_error(self, payload: dict) -> None:
        kind = classify_voice_error(payload)
        self.last_error_kind = kind
        increment_metric(f"call_errors_{kind.value}")
        log_event("call_controller", "voice_error", self.session_id, kind=kind.value, state=self.state.value)
        if self.state == CallStatus.FINISHED:
            return
        self._set_state(CallStatus.IDLE, f"error:{kind.value}")

    # -------------------------
    # STATE
    # -------------------------

    def _set_state(self, new_state: CallStatus, reason: str) -> None:
        previous = self.state
        if previous == new_state:
            return
        self.state = new_state
        if new_state == CallStatus.ACTIVE:
            increment_metric("calls_active")
        elif previous == CallStatus.ACTIVE:
            decrement_metric("calls_active")
        log_event(
            "call_controller",
            "state_change",
            self.session_id,
            previous=previous.value,
            current=new_state.value,
            reason=reason,
        )

    def _enter_finished(self, reason: str) -> None:
        if self.state == CallStatus.FINISHED:
            return
        self._set_state(CallStatus.FINISHED, reason)
        increment_metric("calls_finished")
        self._finalize_task = asyncio.get_running_loop().create_task(self._finalize())

    # -------------------------
    # FINALIZATION
    # -------------------------

    async def _finalize(self) -> None:
        try:
            path = await self._run_finalization()
        except Exception:
            logger.exception("finalization failed | session_id=%s", self.session_id)
            path = HOME_PATH
        await self._navigate(path)

    async def _run_finalization(self) -> str:
        ctx = self.context
        if not ctx.user_id:
            # Nothing can be saved without a user; leave quietly.
            log_event("call_controller", "finalize_skipped", self.session_id, reason="no_user")
            return HOME_PATH

        transcript = list(self.transcript)
        await self._save_interview(transcript)

        if ctx.mode == SessionMode.GENERATE:
            return HOME_PATH
        if not self.interview_id:
            logger.warning("no interview id for feedback | session_id=%s", self.session_id)
            return HOME_PATH

        self.feedback_result = await create_feedback(
            interview_id=self.interview_id,
            user_id=ctx.user_id,
            transcript=transcript,
            feedback_id=ctx.feedback_id,
            store=self.store,
        )
        if self.feedback_result.success and self.feedback_result.feedback_id:
            return feedback_path(self.interview_id)

        logger.error("feedback not saved | session_id=%s interview_id=%s", self.session_id, self.interview_id)
        return HOME_PATH

    async def _save_interview(self, transcript: list[TranscriptMessage]) -> None:
        ctx = self.context
        if not transcript:
            logger.warning("no transcript messages to save interview from | session_id=%s", self.session_id)
            return

        if self.interview_id:
            result = await finalize_interview_async(self.interview_id, self.store)
            if result.get("success"):
                increment_metric("interviews_finalized")
                log_event("call_controller", "interview_finalized", self.session_id, interview_id=self.interview_id)
            else:
                logger.error("failed to finalize interview | interview_id=%s", self.interview_id)
            return

        details = await extract_interview_details(transcript)
        if details is None:
            logger.warning("extraction failed, saving default interview | session_id=%s", self.session_id)
            role = ctx.role or DEFAULT_INTERVIEW_ROLE
            interview_type = ctx.interview_type or DEFAULT_INTERVIEW_TYPE
            techstack = list(ctx.techstack or DEFAULT_INTERVIEW_TECHSTACK)
        else:
            role, interview_type, techstack = details.role, details.type, list(details.techstack)

        result = await create_interview_async(
            user_id=ctx.user_id,
            role=role,
            interview_type=interview_type,
            techstack=techstack,
            finalized=True,
            store=self.store,
        )
        if not result.get("success"):
            logger.error("interview creation failed | session_id=%s", self.session_id)
            return

        self.interview_id = result["id"]
        increment_metric("interviews_created")
        log_event("call_controller", "interview_created", self.session_id, interview_id=self.interview_id)

    async def _navigate(self, path: str) -> None:
        self.redirect_path = path
        if self._navigate_fn is None:
            return
        try:
            await self._navigate_fn(path)
        except Exception as exc:
            logger.warning("navigate failed | session_id=%s path=%s err=%s", self.session_id, path, exc)
