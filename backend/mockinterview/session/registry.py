from __future__ import annotations

import time
from dataclasses import dataclass, field
from threading import Lock

from core.state import CallStatus


@dataclass
class CallSession:
    """One relayed call. Status and interview id are read live from the controller."""

    session_id: str
    controller: object
    user_id: str | None = None
    opened_at: float = field(default_factory=time.time)
    last_seen_at: float = field(default_factory=time.time)
    closed_at: float | None = None

    @property
    def open(self) -> bool:
        return self.closed_at is None

    @property
    def status(self) -> CallStatus:
        return getattr(self.controller, "state", CallStatus.IDLE)

    def describe(self) -> dict:
        context = getattr(self.controller, "context", None)
        mode = getattr(context, "mode", None)
        return {
            "session_id": self.session_id,
            "user_id": self.user_id,
            "mode": getattr(mode, "value", mode),
            "interview_id": getattr(self.controller, "interview_id", None),
            "status": self.status.value,
            "open": self.open,
            "opened_at": self.opened_at,
            "last_seen_at": self.last_seen_at,
            "closed_at": self.closed_at,
        }


class CallSessionRegistry:
    """Calls relayed over /ws/call; closed calls linger until swept by `cleanup_closed`."""

    def __init__(self):
        self._lock = Lock()
        self._calls: dict[str, CallSession] = {}

    def register(self, session_id: str, controller, user_id: str | None = None) -> CallSession:
        call = CallSession(session_id=session_id, controller=controller, user_id=user_id)
        with self._lock:
            self._calls[session_id] = call
        return call

    def touch(self, session_id: str) -> None:
        with self._lock:
            call = self._calls.get(session_id)
            if call is not None:
                call.last_seen_at = time.time()

    def mark_closed(self, session_id: str) -> None:
        with self._lock:
            call = self._calls.get(session_id)
            if call is not None and call.open:
                call.closed_at = time.time()
                call.last_seen_at = call.closed_at

    def get(self, session_id: str) -> dict | None:
        with self._lock:
            call = self._calls.get(session_id)
            return call.describe() if call else None

    def calls_for_user(self, user_id: str) -> list[dict]:
        with self._lock:
            calls = [call.describe() for call in self._calls.values() if call.user_id == user_id]
        return sorted(calls, key=lambda item: item["opened_at"], reverse=True)

    def open_count(self) -> int:
        with self._lock:
            return sum(1 for call in self._calls.values() if call.open)

    def status_counts(self) -> dict[str, int]:
        """Open calls per CallStatus value, zeros included."""
        counts = {status.value: 0 for status in CallStatus}
        with self._lock:
            for call in self._calls.values():
                if call.open:
                    counts[call.status.value] += 1
        return counts

    def cleanup_closed(self, ttl_sec: float) -> int:
        cutoff = time.time() - max(30.0, float(ttl_sec or 900.0))
        removed = 0
        with self._lock:
            for session_id, call in list(self._calls.items()):
                if call.open or (call.closed_at or 0.0) > cutoff:
                    continue
                self._calls.pop(session_id, None)
                removed += 1
        return removed


session_registry = CallSessionRegistry()
