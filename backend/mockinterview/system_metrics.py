import threading
import time
from typing import Any


_lock = threading.Lock()
_started_at = time.time()
_metrics: dict[str, float] = {
    "calls_started": 0.0,
    "calls_active": 0.0,
    "calls_finished": 0.0,
    "call_start_failures": 0.0,
    "call_errors_permission": 0.0,
    "call_errors_network": 0.0,
    "call_errors_ejection": 0.0,
    "call_errors_unclassified": 0.0,
    "interviews_created": 0.0,
    "interviews_finalized": 0.0,
    "feedback_generated": 0.0,
    "feedback_fallbacks": 0.0,
    "feedback_failures": 0.0,
    "questions_generated": 0.0,
    "question_generation_failures": 0.0,
}


def increment_metric(name: str, amount: float = 1.0) -> None:
    key = str(name or "").strip()
    if not key:
        return
    with _lock:
        _metrics[key] = float(_metrics.get(key, 0.0)) + float(amount)


def decrement_metric(name: str, amount: float = 1.0) -> None:
    key = str(name or "").strip()
    if not key:
        return
    with _lock:
        next_value = float(_metrics.get(key, 0.0)) - float(amount)
        _metrics[key] = max(0.0, next_value)


def set_metric(name: str, value: float) -> None:
    key = str(name or "").strip()
    if not key:
        return
    with _lock:
        _metrics[key] = max(0.0, float(value))


def get_metric(name: str) -> float:
    with _lock:
        return float(_metrics.get(str(name or "").strip(), 0.0))


def get_metrics_snapshot(extra: dict[str, Any] | None = None) -> dict[str, Any]:
    with _lock:
        snapshot: dict[str, Any] = dict(_metrics)
    snapshot["uptime_sec"] = round(time.time() - _started_at, 3)
    if extra:
        snapshot.update(extra)
    return snapshot
