from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import asyncio
import logging
import os

from mockinterview.api.generate import router as generate_router
from mockinterview.api.interviews import router as interviews_router
from mockinterview.api.ws_call import router as call_ws_router
from mockinterview.auth import get_user_id
from mockinterview.session.registry import session_registry
from mockinterview.system_metrics import get_metrics_snapshot, set_metric
from core.config import QA_MODE
from core.logger import configure_logging

configure_logging()

app = FastAPI(title="Mock Interview Voice Backend")
logger = logging.getLogger("mockinterview.main")


def _get_allowed_origins() -> list[str]:
    raw = os.getenv("CORS_ALLOW_ORIGINS", "").strip()
    if not raw:
        return [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ]
    return [item.strip() for item in raw.split(",") if item.strip()]


_allowed_origins = _get_allowed_origins()

app.add_middleware(
    CORSMiddleware,
    allow_origins=_allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=False,
)

SESSION_CLEANUP_TTL_SEC = max(60, int(os.getenv("SESSION_CLEANUP_TTL_SEC", "1800")))
SESSION_CLEANUP_INTERVAL_SEC = max(30, int(os.getenv("SESSION_CLEANUP_INTERVAL_SEC", "120")))
_session_cleanup_task: asyncio.Task | None = None


@app.on_event("startup")
async def startup_banner():
    global _session_cleanup_task
    if QA_MODE:
        logger.info("[SYSTEM] QA_MODE ENABLED: documents kept in memory")
    logger.info("[SYSTEM] CORS allow_origins=%s", _allowed_origins)

    async def _session_cleanup_loop():
        while True:
            await asyncio.sleep(SESSION_CLEANUP_INTERVAL_SEC)
            removed = session_registry.cleanup_closed(SESSION_CLEANUP_TTL_SEC)
            if removed > 0:
                logger.info("[SYSTEM] cleaned closed call sessions=%s", removed)

    _session_cleanup_task = asyncio.create_task(_session_cleanup_loop())


@app.on_event("shutdown")
async def shutdown_handler():
    global _session_cleanup_task
    if _session_cleanup_task is not None:
        _session_cleanup_task.cancel()
        try:
            await _session_cleanup_task
        except asyncio.CancelledError:
            pass
        finally:
            _session_cleanup_task = None
    logger.info("[SYSTEM] shutdown complete")


@app.get("/healthz")
async def healthz():
    return {"status": "ok", "service": "backend"}


@app.get("/api/system/metrics")
def system_metrics_route(request: Request):
    get_user_id(request)
    set_metric("call_sessions_open", session_registry.open_count())
    return get_metrics_snapshot(extra={
        "call_sessions_by_status": session_registry.status_counts(),
        "session_cleanup_ttl_sec": SESSION_CLEANUP_TTL_SEC,
    })


app.include_router(generate_router)
app.include_router(interviews_router)
app.include_router(call_ws_router)
