import pytest


def test_collection_create_get_update_delete():
    from mockinterview.db.store import JsonDocumentStore
    from mockinterview.errors import PersistenceError

    store = JsonDocumentStore(None)
    interviews = store.collection("interviews")

    doc_id = interviews.create({"role": "SRE", "finalized": False})
    assert len(doc_id) == 20
    assert interviews.get(doc_id) == {"role": "SRE", "finalized": False}

    interviews.update(doc_id, {"finalized": True})
    assert interviews.get(doc_id)["finalized"] is True

    with pytest.raises(PersistenceError):
        interviews.update("missing", {"finalized": True})

    interviews.delete(doc_id)
    assert interviews.get(doc_id) is None


def test_returned_documents_are_copies():
    from mockinterview.db.store import JsonDocumentStore

    store = JsonDocumentStore(None)
    docs = store.collection("interviews")
    doc_id = docs.create({"techstack": ["go"]})

    docs.get(doc_id)["techstack"].append("rust")

    assert docs.get(doc_id)["techstack"] == ["go"]


def test_query_filters_orders_and_limits():
    from mockinterview.db.store import JsonDocumentStore

    docs = JsonDocumentStore(None).collection("interviews")
    docs.set("a", {"userId": "u1", "finalized": True, "createdAt": "2024-01-01"})
    docs.set("b", {"userId": "u2", "finalized": True, "createdAt": "2024-03-01"})
    docs.set("c", {"userId": "u3", "finalized": False, "createdAt": "2024-02-01"})
    docs.set("d", {"userId": "u4", "finalized": True, "createdAt": "2024-02-15"})

    rows = docs.query(
        filters=[("finalized", "==", True), ("userId", "!=", "u1")],
        order_by=("createdAt", "desc"),
        limit=5,
    )
    assert [row["id"] for row in rows] == ["b", "d"]
    assert docs.query(order_by=("createdAt", "asc"), limit=1)[0]["id"] == "a"


def test_unsupported_operator_raises():
    from mockinterview.db.store import JsonDocumentStore
    from mockinterview.errors import PersistenceError

    with pytest.raises(PersistenceError):
        JsonDocumentStore(None).collection("interviews").query(filters=[("score", ">", 3)])


def test_file_store_persists_between_instances(tmp_path):
    from mockinterview.db.store import JsonDocumentStore

    path = tmp_path / "documents.json"
    first = JsonDocumentStore(path)
    doc_id = first.collection("feedback").create({"totalScore": 72})

    second = JsonDocumentStore(path)
    assert second.collection("feedback").get(doc_id) == {"totalScore": 72}


def test_interview_repo_reads_and_reset(store):
    from mockinterview.db.interview_repo import (
        create_interview,
        finalize_interview,
        get_interviews_by_user_id,
        get_latest_interviews,
        reset_user_interviews,
    )
    from mockinterview.db.feedback_repo import get_feedback_by_interview_id, save_feedback

    mine = create_interview("me", "SRE", "Technical", ["k8s"], finalized=False)["id"]
    theirs = create_interview("them", "SRE", "Technical", ["k8s"], finalized=True)["id"]
    save_feedback({"interviewId": mine, "userId": "me", "totalScore": 70})

    assert [row["id"] for row in get_interviews_by_user_id("me")] == [mine]
    assert [row["id"] for row in get_latest_interviews("me")] == [theirs]
    assert get_latest_interviews("them") == []

    assert finalize_interview(mine) == {"success": True}
    assert finalize_interview("nope") == {"success": False}
    assert get_feedback_by_interview_id(mine, "me")["totalScore"] == 70
    assert get_feedback_by_interview_id(mine, "them") is None

    result = reset_user_interviews("me")
    assert result == {"success": True, "deletedInterviews": 1, "deletedFeedback": 1}
    assert get_interviews_by_user_id("me") == []
    assert [row["id"] for row in get_interviews_by_user_id("them")] == [theirs]


def _flaky_file_store(path, failures: int):
    """File-backed store whose first `failures` persists raise."""
    from mockinterview.db.store import JsonDocumentStore
    from mockinterview.errors import PersistenceError

    class _Store(JsonDocumentStore):
        def _persist(self, collections):
            if self.remaining > 0:
                self.remaining -= 1
                raise PersistenceError("disk full")
            super()._persist(collections)

    store = _Store(path)
    store.remaining = failures
    return store


def test_failed_write_leaves_memory_unchanged(tmp_path):
    from mockinterview.db.store import JsonDocumentStore
    from mockinterview.errors import PersistenceError

    path = tmp_path / "documents.json"
    store = _flaky_file_store(path, failures=0)
    interviews = store.collection("interviews")
    doc_id = interviews.create({"role": "SRE", "finalized": False})

    store.remaining = 3
    with pytest.raises(PersistenceError):
        interviews.create({"role": "QA"})
    with pytest.raises(PersistenceError):
        interviews.update(doc_id, {"finalized": True})
    with pytest.raises(PersistenceError):
        interviews.delete(doc_id)

    assert [row["id"] for row in interviews.query()] == [doc_id]
    assert interviews.get(doc_id) == {"role": "SRE", "finalized": False}
    assert JsonDocumentStore(path).collection("interviews").get(doc_id) == {"role": "SRE", "finalized": False}
