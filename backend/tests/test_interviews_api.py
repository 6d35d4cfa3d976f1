import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def client():
    from mockinterview.main import app

    return TestClient(app)


def test_routes_require_bearer_token(client, store):
    assert client.get("/api/interviews").status_code == 401
    assert client.get("/api/interviews", headers={"Authorization": "Token abc"}).status_code == 401


def test_static_interview_preparation_creates_pending_record(client, store, auth_headers):
    response = client.post("/api/interviews/static/Google", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["role"] == "Software Engineer"
    assert body["type"] == "Mixed"
    assert body["techstack"] == ["react", "nodejs", "aws", "typescript"]
    assert body["questions"] == []

    saved = store.collection("interviews").get(body["interview_id"])
    assert saved["userId"] == "pytest-user"
    assert saved["finalized"] is False
    assert saved["coverImage"] == "/covers/adobe.png"


def test_static_interview_unknown_company(client, store, auth_headers):
    response = client.post("/api/interviews/static/initech", headers=auth_headers)
    assert response.status_code == 404


def test_static_listing_hides_completed_companies(client, store, auth_headers):
    from mockinterview.db.interview_repo import create_interview

    create_interview("pytest-user", "Frontend Engineer", "Mixed", ["react", "javascript", "php", "graphql"])

    response = client.get("/api/interviews/static", headers=auth_headers)

    names = [company["name"] for company in response.json()["companies"]]
    assert "Meta" not in names
    assert "Google" in names
    assert len(names) == 7


def test_interview_reads(client, store, auth_headers):
    from mockinterview.db.feedback_repo import save_feedback
    from mockinterview.db.interview_repo import create_interview

    mine = create_interview("pytest-user", "SRE", "Technical", ["k8s"])["id"]
    other = create_interview("someone-else", "QA", "Behavioral", [])["id"]
    save_feedback({"interviewId": mine, "userId": "pytest-user", "totalScore": 74})

    assert [row["id"] for row in client.get("/api/interviews", headers=auth_headers).json()["interviews"]] == [mine]
    assert [row["id"] for row in client.get("/api/interviews/latest", headers=auth_headers).json()["interviews"]] == [other]
    assert client.get(f"/api/interviews/{mine}", headers=auth_headers).json()["role"] == "SRE"
    assert client.get("/api/interviews/nope", headers=auth_headers).status_code == 404
    assert client.get(f"/api/interviews/{mine}/feedback", headers=auth_headers).json()["totalScore"] == 74
    assert client.get(f"/api/interviews/{other}/feedback", headers=auth_headers).status_code == 404


def test_reset_removes_only_callers_data(client, store, auth_headers):
    from mockinterview.db.interview_repo import create_interview, get_interviews_by_user_id

    create_interview("pytest-user", "SRE", "Technical", [])
    create_interview("pytest-user", "SRE", "Technical", [])
    create_interview("someone-else", "SRE", "Technical", [])

    response = client.post("/api/interviews/reset", headers=auth_headers)

    assert response.json() == {"success": True, "deletedInterviews": 2, "deletedFeedback": 0}
    assert get_interviews_by_user_id("pytest-user") == []
    assert len(get_interviews_by_user_id("someone-else")) == 1


def test_create_interview_normalizes_form_input(monkeypatch: pytest.MonkeyPatch, client, store, auth_headers):
    from mockinterview.interview import questions

    prompts = []

    async def _questions(prompt, **kwargs):
        prompts.append(prompt)
        return '["Q1", "Q2"]'

    monkeypatch.setattr(questions, "call_llm", _questions)

    response = client.post(
        "/api/interviews/create",
        headers=auth_headers,
        json={"role": "Backend Engineer", "type": "Technical", "level": "Mid", "techstack": " Python, Django ,, AWS "},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert "Number of Questions: 8" in prompts[0]
    assert "Tech Stack: python,django,aws" in prompts[0]

    saved = store.collection("interviews").get(body["interviewId"])
    assert saved["userId"] == "pytest-user"
    assert saved["techstack"] == ["python", "django", "aws"]
    assert saved["finalized"] is True


def test_create_interview_requires_auth_and_reports_failures(monkeypatch: pytest.MonkeyPatch, client, store, auth_headers):
    from mockinterview.interview import questions

    async def _not_a_list(prompt, **kwargs):
        return '{"questions": []}'

    monkeypatch.setattr(questions, "call_llm", _not_a_list)
    form = {"role": "SRE", "type": "Technical", "techstack": "k8s"}

    assert client.post("/api/interviews/create", json=form).status_code == 401

    response = client.post("/api/interviews/create", headers=auth_headers, json=form)
    assert response.status_code == 500
    assert response.json()["success"] is False
    assert store.collection("interviews").query() == []


def test_feedback_endpoint_runs_pipeline(monkeypatch: pytest.MonkeyPatch, client, store, auth_headers):
    from mockinterview.ai_reasoning import llm
    from mockinterview.db.interview_repo import create_interview
    from mockinterview.errors import LLMError

    async def _down(prompt, **kwargs):
        raise LLMError("down")

    monkeypatch.setattr(llm, "call_llm", _down)
    interview_id = create_interview("pytest-user", "SRE", "Technical", [])["id"]

    response = client.post(
        "/api/feedback",
        headers=auth_headers,
        json={"interviewId": interview_id, "transcript": [{"role": "user", "content": "I use React daily."}]},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    saved = store.collection("feedback").get(body["feedbackId"])
    assert saved["totalScore"] == 60
    assert saved["interviewId"] == interview_id


def test_feedback_endpoint_unknown_interview(client, store, auth_headers):
    response = client.post(
        "/api/feedback",
        headers=auth_headers,
        json={"interviewId": "missing", "transcript": []},
    )
    assert response.status_code == 404


def test_healthz_and_metrics(client, auth_headers):
    assert client.get("/healthz").json() == {"status": "ok", "service": "backend"}

    assert client.get("/api/system/metrics").status_code == 401
    metrics = client.get("/api/system/metrics", headers=auth_headers).json()
    assert "calls_started" in metrics
    assert "feedback_fallbacks" in metrics
    assert "uptime_sec" in metrics
    assert metrics["call_sessions_by_status"].keys() == {"idle", "connecting", "active", "finished"}
