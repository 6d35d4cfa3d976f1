import random


def test_mixed_prompt_orders_profile_technical_behavioral_base():
    from mockinterview.call.session_config import INTERVIEWER_BASE_PROMPT, build_system_prompt
    from mockinterview.interview.behavioral import BehavioralQuestionSelector

    prompt = build_system_prompt(
        role="Frontend Engineer",
        techstack=["react", "typescript"],
        interview_type="Mixed",
        questions=["What is a hook?", "Explain reconciliation."],
        selector=BehavioralQuestionSelector(rng=random.Random(0)),
    )

    assert prompt.startswith("INTERVIEW JOB PROFILE:\n- Role: Frontend Engineer\n- Tech Stack: react, typescript\n- Type: Mixed")
    technical = prompt.index("TECHNICAL QUESTIONS TO ASK:")
    behavioral = prompt.index("BEHAVIORAL QUESTIONS TO ASK:")
    base = prompt.index(INTERVIEWER_BASE_PROMPT)
    assert technical < behavioral < base
    assert "- What is a hook?\n- Explain reconciliation." in prompt
    assert "\n1. " in prompt and "\n3. " in prompt


def test_technical_prompt_has_no_behavioral_block():
    from mockinterview.call.session_config import build_system_prompt

    prompt = build_system_prompt("Software Engineer", ["go"], "Technical", ["Explain goroutines."], None)

    assert "TECHNICAL QUESTIONS TO ASK:" in prompt
    assert "BEHAVIORAL QUESTIONS TO ASK:" not in prompt


def test_behavioral_prompt_skips_technical_questions():
    from mockinterview.call.session_config import build_system_prompt

    prompt = build_system_prompt("Software Engineer", None, "Behavioral", ["Explain goroutines."], None)

    assert "TECHNICAL QUESTIONS TO ASK:" not in prompt
    assert "BEHAVIORAL QUESTIONS TO ASK:" in prompt
    assert "- Tech Stack: General" in prompt


def test_first_message_per_type_and_platform_default():
    from mockinterview.call.session_config import DEFAULT_FIRST_MESSAGE, FIRST_MESSAGES, first_message_for

    assert first_message_for("Technical") == FIRST_MESSAGES["Technical"]
    assert first_message_for("Behavioral") == FIRST_MESSAGES["Behavioral"]
    assert first_message_for("Mixed") == FIRST_MESSAGES["Mixed"]
    assert first_message_for("System Design") == DEFAULT_FIRST_MESSAGE
    assert first_message_for(None) == DEFAULT_FIRST_MESSAGE


def test_interview_session_payload():
    from mockinterview.call.session_config import build_interview_session

    config = build_interview_session("Data Engineer", ["spark"], "Technical", ["Q1", "Q2"])
    payload = config.to_payload()

    assert payload["variableValues"] == {"questions": "- Q1\n- Q2"}
    assert "assistantId" not in payload
    assert payload["assistant"]["name"] == "Data Engineer Interviewer"
    system = payload["assistant"]["model"]["messages"][0]
    assert system["role"] == "system"
    assert "- Role: Data Engineer" in system["content"]


def test_generate_session_payload():
    from mockinterview.call.session_config import build_generate_session

    payload = build_generate_session("assistant-1", "Ada", "user-1").to_payload()

    assert payload == {"variableValues": {"username": "Ada", "userid": "user-1"}, "assistantId": "assistant-1"}
