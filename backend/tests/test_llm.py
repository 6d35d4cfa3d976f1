import pytest


class _Msg:
    def __init__(self, content):
        self.content = content


class _Choice:
    def __init__(self, content):
        self.message = _Msg(content)


class _Response:
    def __init__(self, content):
        self.choices = [_Choice(content)]


class _FakeClient:
    """Minimal stand-in for AsyncOpenAI: client.chat.completions.create(...)."""

    def __init__(self, create):
        self.chat = type("Chat", (), {})()
        self.chat.completions = type("Completions", (), {})()
        self.chat.completions.create = create


@pytest.mark.asyncio
async def test_call_llm_blank_prompt_raises():
    from mockinterview.ai_reasoning.llm import call_llm
    from mockinterview.errors import LLMError

    with pytest.raises(LLMError):
        await call_llm("")


@pytest.mark.asyncio
async def test_call_llm_success_with_mock(monkeypatch: pytest.MonkeyPatch):
    from mockinterview.ai_reasoning import llm

    seen = {}

    async def _fake_create(*args, **kwargs):
        seen.update(kwargs)
        return _Response('{"ok": true}')

    monkeypatch.setattr(llm, "_client", _FakeClient(_fake_create))

    result = await llm.call_llm("return json", system="be terse", json_mode=True)
    assert result == '{"ok": true}'
    assert seen["response_format"] == {"type": "json_object"}
    assert seen["messages"][0] == {"role": "system", "content": "be terse"}


@pytest.mark.asyncio
async def test_call_llm_raises_after_failures(monkeypatch: pytest.MonkeyPatch):
    from mockinterview.ai_reasoning import llm
    from mockinterview.errors import LLMError

    attempts = []

    async def _boom(*args, **kwargs):
        attempts.append(1)
        raise RuntimeError("forced")

    monkeypatch.setattr(llm, "_client", _FakeClient(_boom))

    with pytest.raises(LLMError):
        await llm.call_llm("will fail", retries=1, timeout_sec=0.1)
    assert len(attempts) == 2


@pytest.mark.asyncio
async def test_call_llm_empty_completion_is_an_error(monkeypatch: pytest.MonkeyPatch):
    from mockinterview.ai_reasoning import llm
    from mockinterview.errors import LLMError

    async def _empty(*args, **kwargs):
        return _Response("   ")

    monkeypatch.setattr(llm, "_client", _FakeClient(_empty))

    with pytest.raises(LLMError):
        await llm.call_llm("anything", retries=0)


def test_extract_json_dict_variants():
    from mockinterview.ai_reasoning.llm import extract_json_dict

    assert extract_json_dict('{"a": 1}') == {"a": 1}
    assert extract_json_dict('```json\n{"a": 2}\n```') == {"a": 2}
    assert extract_json_dict('Here you go: {"a": 3} thanks') == {"a": 3}
    assert extract_json_dict("[1, 2]") is None
    assert extract_json_dict("") is None


@pytest.mark.asyncio
async def test_generate_object_validates_against_schema(monkeypatch: pytest.MonkeyPatch):
    from mockinterview.ai_reasoning import llm
    from mockinterview.errors import LLMError
    from mockinterview.schemas import InterviewDetails

    async def _ok(prompt, **kwargs):
        assert kwargs["json_mode"] is True
        assert "JSON Schema" in prompt
        return '{"role": "SRE", "techstack": ["k8s"], "type": "Technical"}'

    monkeypatch.setattr(llm, "call_llm", _ok)
    details = await llm.generate_object("extract", InterviewDetails)
    assert details == InterviewDetails(role="SRE", techstack=["k8s"], type="Technical")

    async def _missing_fields(prompt, **kwargs):
        return '{"role": "SRE"}'

    monkeypatch.setattr(llm, "call_llm", _missing_fields)
    with pytest.raises(LLMError):
        await llm.generate_object("extract", InterviewDetails)
