import os
from pathlib import Path
from dotenv import load_dotenv

_BACKEND_ROOT = Path(__file__).resolve().parents[1]
_BACKEND_ENV_PATH = _BACKEND_ROOT / ".env"
load_dotenv(dotenv_path=_BACKEND_ENV_PATH, override=False)

OPENAI_API_KEY = str(os.getenv("OPENAI_API_KEY") or "").strip()
MODEL_NAME = str(os.getenv("MODEL_NAME") or "gpt-4o-mini").strip()
QA_MODE = os.getenv("QA_MODE", "false").lower() == "true"
ENVIRONMENT = str(os.getenv("ENV") or "development").strip().lower()
DATA_DIR = Path(os.getenv("DATA_DIR") or (_BACKEND_ROOT / "data"))

LLM_TIMEOUT_SEC = max(1.0, float(os.getenv("LLM_TIMEOUT_SEC", "30")))
LLM_RETRIES = max(0, int(os.getenv("LLM_RETRIES", "1")))


# Voice platform credentials are read lazily so a running process picks up
# rotated values and tests can monkeypatch them.
def get_voice_web_token() -> str:
    return str(os.getenv("VAPI_WEB_TOKEN") or os.getenv("NEXT_PUBLIC_VAPI_WEB_TOKEN") or "").strip()


def get_voice_assistant_id() -> str:
    return str(os.getenv("VAPI_ASSISTANT_ID") or os.getenv("NEXT_PUBLIC_VAPI_ASSISTANT_ID") or "").strip()
