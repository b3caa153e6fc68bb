from __future__ import annotations

import pytest
from packages.shared.schemas.escalation import EscalationStatusV1
from services.api.app.services.presentation import (
    actor_label,
    event_title,
    status_color,
    status_label,
)


@pytest.mark.parametrize(
    ("status", "label", "color"),
    [
        (EscalationStatusV1.OPEN, "Open", "muted"),
        (EscalationStatusV1.BLOCKED, "Blocked", "destructive"),
        ("complete", "Complete", "success"),
    ],
)
def test_status_label_and_color(status: EscalationStatusV1 | str, label: str, color: str) -> None:
    assert status_label(status) == label
    assert status_color(status) == color


def test_unknown_status_is_rejected() -> None:
    with pytest.raises(ValueError):
        status_label("archived")


@pytest.mark.parametrize(
    ("event_type", "subtype", "payload", "title"),
    [
        ("escalation_sent", "design", None, "Escalation: Design Team"),
        ("escalation_sent", "vip", None, "Escalation: vip"),
        ("escalation_sent", None, None, "Escalation: General"),
        ("quote_attached", None, {"quote_number": "WPW-7"}, "Quote Attached: WPW-7"),
        ("quote_drafted", None, {}, "Quote Drafted: Quote"),
        ("asset_uploaded", None, {"filename": "logo.ai"}, "File Uploaded: logo.ai"),
        ("marked_complete", None, None, "Escalation Complete"),
        ("ai_response_sent", None, None, "AI Response"),
        ("call_scheduled", None, None, "call scheduled"),
    ],
)
def test_event_title(event_type: str, subtype: str | None, payload: dict | None, title: str) -> None:
    assert event_title(event_type, subtype, payload) == title


@pytest.mark.parametrize(
    ("actor", "label"),
    [
        ("jordan_lee", "Jordan Lee AI"),
        ("system", "System"),
        ("admin", "Admin"),
        ("human", "Admin"),
        ("casey", "casey"),
    ],
)
def test_actor_label(actor: str, label: str) -> None:
    assert actor_label(actor) == label
