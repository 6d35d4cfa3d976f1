import asyncio
import json
import logging
import os
import re
from typing import TypeVar

from openai import AsyncOpenAI
from pydantic import BaseModel, ValidationError

from core.config import LLM_RETRIES, LLM_TIMEOUT_SEC, MODEL_NAME, OPENAI_API_KEY
from mockinterview.errors import LLMError

logger = logging.getLogger("mockinterview.ai_reasoning.llm")

ModelT = TypeVar("ModelT", bound=BaseModel)

_client: AsyncOpenAI | None = None


def get_client() -> AsyncOpenAI:
    global _client
    if _client is None:
        _client = AsyncOpenAI(api_key=os.getenv("OPENAI_API_KEY") or OPENAI_API_KEY)
    return _client


async def call_llm(
    prompt: str,
    system: str | None = None,
    json_mode: bool = False,
    timeout_sec: float = LLM_TIMEOUT_SEC,
    retries: int = LLM_RETRIES,
    temperature: float = 0.4,
) -> str:
    """
    Sends prompt to the model and returns the raw text response.
    Raises LLMError once every attempt has failed.
    """
    if not str(prompt or "").strip():
        raise LLMError("empty prompt")

    messages = []
    if system:
        messages.append({"role": "system", "content": system})
    messages.append({"role": "user", "content": prompt})

    kwargs = {}
    if json_mode:
        kwargs["response_format"] = {"type": "json_object"}

    last_error: Exception | None = None
    for attempt in range(max(1, retries + 1)):
        try:
            response = await asyncio.wait_for(
                get_client().chat.completions.create(
                    model=os.getenv("MODEL_NAME") or MODEL_NAME,
                    messages=messages,
                    temperature=temperature,
                    **kwargs,
                ),
                timeout=timeout_sec,
            )
            message = response.choices[0].message.content
            text = str(message or "").strip()
            if not text:
                raise LLMError("empty completion")
            return text
        except asyncio.TimeoutError as exc:
            last_error = exc
            logger.warning("call_llm timeout | attempt=%s", attempt + 1)
        except Exception as exc:
            last_error = exc
            logger.warning("call_llm failure | attempt=%s err=%s", attempt + 1, exc)

        if attempt < retries:
            await asyncio.sleep(0.35 * (attempt + 1))

    raise LLMError(f"LLM call failed after {max(1, retries + 1)} attempt(s): {last_error}")


def extract_json_dict(text: str) -> dict | None:
    text = (text or "").strip()
    if not text:
        return None

    try:
        parsed = json.loads(text)
        return parsed if isinstance(parsed, dict) else None
    except Exception:
        pass

    fenced = re.search(r"```(?:json)?\s*(\{[\s\S]*?\})\s*```", text, re.IGNORECASE)
    if fenced:
        try:
            parsed = json.loads(fenced.group(1))
            return parsed if isinstance(parsed, dict) else None
        except Exception:
            pass

    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end != -1 and end > start:
        try:
            parsed = json.loads(text[start:end + 1])
            return parsed if isinstance(parsed, dict) else None
        except Exception:
            return None

    return None


async def generate_object(prompt: str, schema: type[ModelT], system: str | None = None, **kwargs) -> ModelT:
    """Structured generation: JSON mode plus pydantic validation against `schema`."""
    schema_hint = json.dumps(schema.model_json_schema(by_alias=True), ensure_ascii=False)
    full_prompt = f"{prompt.rstrip()}\n\nThe JSON must validate against this JSON Schema:\n{schema_hint}"
    text = await call_llm(full_prompt, system=system, json_mode=True, temperature=0.2, **kwargs)

    parsed = extract_json_dict(text)
    if parsed is None:
        raise LLMError("model output is not a JSON object")
    try:
        return schema.model_validate(parsed)
    except ValidationError as exc:
        raise LLMError(f"model output failed schema validation: {exc.error_count()} error(s)") from exc
