import json
import logging
import os
import time
from typing import Any

logger = logging.getLogger("mockinterview.events")

# Candidate speech and generated prompts never reach the logs; only their size does.
_REDACTED_KEYS = {"text", "transcript", "content", "prompt", "message", "system_prompt", "questions"}


def configure_logging(level: str | None = None) -> None:
	resolved = str(level or os.getenv("LOG_LEVEL") or "INFO").strip().upper()
	logging.basicConfig(
		level=getattr(logging, resolved, logging.INFO),
		format="%(asctime)s %(levelname)s %(name)s %(message)s",
	)


def _redact(value: Any) -> dict:
	if isinstance(value, (list, tuple)):
		return {"redacted": True, "items": len(value)}
	text = str(value or "")
	return {"redacted": True, "length": len(text)}


def _sanitize_value(key: str, value: Any) -> Any:
	normalized_key = str(key or "").lower()
	if normalized_key in _REDACTED_KEYS:
		return _redact(value)
	if isinstance(value, (str, int, float, bool)) or value is None:
		return value
	if isinstance(value, dict):
		return {str(k): _sanitize_value(str(k), v) for k, v in value.items()}
	if isinstance(value, (list, tuple, set)):
		return [_sanitize_value(normalized_key, item) for item in value]
	return str(value)


def log_event(component: str, event: str, session_id: str, **kwargs) -> None:
	payload = {
		"ts": round(time.time(), 3),
		"component": str(component or "mockinterview"),
		"event": str(event or "unknown"),
		"session_id": str(session_id or ""),
	}
	payload.update({str(k): _sanitize_value(str(k), v) for k, v in kwargs.items()})
	logger.info(json.dumps(payload, ensure_ascii=False, default=str))
