from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient


@pytest.fixture()
def client(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    db_path = tmp_path / "wrapcommand_api.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+pysqlite:///{db_path}")
    monkeypatch.setenv("WRAPCOMMAND_DB_AUTO_CREATE", "true")

    from services.api.app.main import app

    with TestClient(app) as c:
        yield c


def _create_conversation(client: TestClient, conversation_id: str, **contact: str) -> dict:
    resp = client.post("/v1/conversations", json={"id": conversation_id, **contact})
    assert resp.status_code == 200
    return resp.json()


def _append(client: TestClient, conversation_id: str, event_type: str, **extra: object) -> dict:
    body = {"event_type": event_type, "actor": extra.pop("actor", "system"), **extra}
    resp = client.post(f"/v1/conversations/{conversation_id}/events", json=body)
    assert resp.status_code == 200
    return resp.json()


def _status(client: TestClient, conversation_id: str) -> dict:
    resp = client.get(f"/v1/conversations/{conversation_id}/escalation-status")
    assert resp.status_code == 200
    return resp.json()


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_status_lifecycle_open_blocked_complete(client: TestClient) -> None:
    _create_conversation(client, "conv-1", contact_name="Pat", contact_email="pat@example.com")

    status = _status(client, "conv-1")
    assert status["status"] == "open"
    assert status["label"] == "Open"
    assert status["has_escalation"] is False
    assert status["summary"] == "No escalation sent"

    _append(client, "conv-1", "asset_uploaded", payload={"filename": "logo.pdf"})
    _append(client, "conv-1", "escalation_sent", subtype="jackson", actor="jordan_lee")

    status = _status(client, "conv-1")
    assert status["status"] == "blocked"
    assert status["color"] == "destructive"
    assert status["missing"] == [
        "Email not sent",
        "Quote not attached or dismissed",
        "File not reviewed",
    ]

    _append(client, "conv-1", "ai_response_sent")
    _append(client, "conv-1", "marked_no_quote_required", actor="admin")
    _append(client, "conv-1", "asset_reviewed", actor="admin")

    status = _status(client, "conv-1")
    assert status["status"] == "complete"
    assert status["label"] == "Complete"
    assert status["missing"] == []
    assert status["summary"] == "All requirements met - ready to close"
    assert status["requirements"] == {
        "email_sent": True,
        "quote_handled": True,
        "files_reviewed": True,
    }


def test_escalate_and_quote_endpoints_complete_the_escalation(client: TestClient) -> None:
    _create_conversation(client, "conv-2", contact_name="Robin")

    resp = client.post(
        "/v1/conversations/conv-2/escalations",
        json={
            "escalation_type": "design",
            "recipients": ["design@example.com"],
            "subject": "Design request",
            "body": "Customer uploaded artwork.",
            "customer_name": "Robin",
        },
    )
    assert resp.status_code == 200
    escalation, email = resp.json()
    assert escalation["event_type"] == "escalation_sent"
    assert escalation["title"] == "Escalation: Design Team"
    assert escalation["actor_label"] == "Jordan Lee AI"
    assert email["event_type"] == "email_sent"
    assert email["payload"]["email_sent_at"]

    _append(client, "conv-2", "asset_uploaded")

    resp = client.post(
        "/v1/conversations/conv-2/quotes",
        json={"quote_id": "q-9", "quote_number": "WPW-9", "total": 999.5},
    )
    assert resp.status_code == 200
    assert resp.json()["title"] == "Quote Attached: WPW-9"

    # Design routing counts as file review.
    status = _status(client, "conv-2")
    assert status["status"] == "complete"
    assert status["requirements"]["files_reviewed"] is True


def test_quote_endpoint_rejects_non_quote_type(client: TestClient) -> None:
    _create_conversation(client, "conv-3")

    resp = client.post(
        "/v1/conversations/conv-3/quotes",
        json={"event_type": "email_sent", "quote_id": "q-1", "quote_number": "WPW-1"},
    )
    assert resp.status_code == 422


def test_resolve_forces_complete_with_raw_requirements(client: TestClient) -> None:
    _create_conversation(client, "conv-4")
    _append(client, "conv-4", "escalation_sent")

    resp = client.post("/v1/conversations/conv-4/resolve", json={})
    assert resp.status_code == 200
    assert resp.json()["event_type"] == "marked_complete"
    assert resp.json()["title"] == "Escalation Complete"

    status = _status(client, "conv-4")
    assert status["status"] == "complete"
    assert status["missing"] == []
    assert status["requirements"] == {
        "email_sent": False,
        "quote_handled": False,
        "files_reviewed": True,
    }


def test_timeline_is_ordered_with_titles(client: TestClient) -> None:
    _create_conversation(client, "conv-5")
    _append(client, "conv-5", "escalation_sent", subtype="bulk")
    _append(client, "conv-5", "some_new_event_type", actor="casey")

    resp = client.get("/v1/conversations/conv-5/events")
    assert resp.status_code == 200
    timeline = resp.json()

    assert {e["title"] for e in timeline} == {"Escalation: Bulk/Fleet", "some new event type"}
    assert {e["actor_label"] for e in timeline} == {"System", "casey"}
    created = [e["created_at"] for e in timeline]
    assert created == sorted(created)


def test_escalation_queues(client: TestClient) -> None:
    _create_conversation(client, "conv-a", contact_name="Alex", contact_phone="555-0100")
    _append(client, "conv-a", "escalation_sent", subtype="quality_issue")

    _create_conversation(client, "conv-b", contact_name="Bo")
    _append(client, "conv-b", "escalation_sent", subtype="lance")
    _append(client, "conv-b", "email_sent")
    _append(client, "conv-b", "quote_drafted")

    _create_conversation(client, "conv-c")
    _append(client, "conv-c", "email_sent")

    resp = client.get("/v1/escalations")
    assert resp.status_code == 200
    rows = resp.json()
    assert [r["conversation_id"] for r in rows] == ["conv-a", "conv-b"]
    assert rows[0]["status"] == "blocked"
    assert rows[0]["label"] == "Blocked"
    assert rows[0]["contact_phone"] == "555-0100"
    assert rows[0]["priority"] == 1
    assert rows[1]["status"] == "complete"

    needs_action = client.get("/v1/escalations/needs-action").json()
    assert [r["conversation_id"] for r in needs_action] == ["conv-a"]
    assert needs_action[0]["missing"] == ["Email not sent", "Quote not attached or dismissed"]


def test_unknown_conversation_returns_404(client: TestClient) -> None:
    for method, path in (
        ("get", "/v1/conversations/missing/escalation-status"),
        ("get", "/v1/conversations/missing/events"),
    ):
        resp = getattr(client, method)(path)
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Conversation not found"

    resp = client.post(
        "/v1/conversations/missing/events", json={"event_type": "email_sent", "actor": "system"}
    )
    assert resp.status_code == 404

    resp = client.post("/v1/conversations/missing/resolve", json={})
    assert resp.status_code == 404


def test_duplicate_conversation_conflicts(client: TestClient) -> None:
    _create_conversation(client, "conv-dup")
    resp = client.post("/v1/conversations", json={"id": "conv-dup"})
    assert resp.status_code == 409


def test_event_body_validation(client: TestClient) -> None:
    _create_conversation(client, "conv-v")
    resp = client.post("/v1/conversations/conv-v/events", json={"event_type": "", "actor": "x"})
    assert resp.status_code == 422
