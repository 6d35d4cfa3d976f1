"""
Voice session client seam.

The voice platform owns audio, turn taking and transcription. This backend only
sees two control calls (start, stop) and the platform's event stream:
call-start, call-end, message, speech-start, speech-end, error.
"""
from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from core.state import VoiceErrorKind

logger = logging.getLogger("mockinterview.call.voice_client")

CALL_START = "call-start"
CALL_END = "call-end"
MESSAGE = "message"
SPEECH_START = "speech-start"
SPEECH_END = "speech-end"
ERROR = "error"

VOICE_EVENTS = (CALL_START, CALL_END, MESSAGE, SPEECH_START, SPEECH_END, ERROR)

EventHandler = Callable[[dict], None]
SendFn = Callable[[dict], Awaitable[None]]


def classify_voice_error(error: Any) -> VoiceErrorKind:
    """
    Structured `kind` wins when the platform sends one. Otherwise this is a
    best-effort match on the error message text.
    """
    if isinstance(error, dict):
        kind = str(error.get("kind") or "").strip().lower()
        message = str(error.get("message") or "")
    else:
        kind = str(getattr(error, "kind", "") or "").strip().lower()
        message = str(getattr(error, "message", "") or error or "")

    if kind:
        try:
            return VoiceErrorKind(kind)
        except ValueError:
            logger.debug("unknown voice error kind %r, falling back to message text", kind)

    lowered = message.lower()
    if "ejection" in lowered:
        return VoiceErrorKind.EJECTION
    if "permission" in lowered:
        return VoiceErrorKind.PERMISSION
    if "network" in lowered:
        return VoiceErrorKind.NETWORK
    return VoiceErrorKind.UNCLASSIFIED


class VoiceSessionClient:
    """Handler registry plus the start/stop contract. One instance per call."""

    def __init__(self):
        self._handlers: dict[str, list[EventHandler]] = {event: [] for event in VOICE_EVENTS}

    def on(self, event: str, handler: EventHandler) -> None:
        if event not in self._handlers:
            raise ValueError(f"Unknown voice event: {event}")
        self._handlers[event].append(handler)

    def off(self, event: str, handler: EventHandler) -> None:
        try:
            self._handlers.get(event, []).remove(handler)
        except ValueError:
            logger.debug("handler not registered for %s", event)

    def emit(self, event: str, payload: dict | None = None) -> None:
        for handler in list(self._handlers.get(event, [])):
            try:
                handler(dict(payload or {}))
            except Exception as exc:
                logger.error("voice event handler failed | event=%s err=%s", event, exc)

    async def start(self, config: dict) -> None:
        raise NotImplementedError

    async def stop(self) -> None:
        raise NotImplementedError


class RelayVoiceSession(VoiceSessionClient):
    """
    The platform SDK runs in the browser. Start/stop commands are sent down the
    connection with `send_fn`; the browser posts SDK events back, which arrive
    here through `dispatch`.
    """

    def __init__(self, send_fn: SendFn):
        super().__init__()
        self._send_fn = send_fn

    async def start(self, config: dict) -> None:
        await self._send_fn({"type": "start", "config": config})

    async def stop(self) -> None:
        await self._send_fn({"type": "stop"})

    def dispatch(self, payload: dict) -> bool:
        event = str((payload or {}).get("event") or "").strip().lower()
        if event not in VOICE_EVENTS:
            logger.warning("ignoring unknown relayed voice event %r", event)
            return False
        data = payload.get("data")
        self.emit(event, data if isinstance(data, dict) else {})
        return True
