"""Display labels for escalation status and timeline events.

Pure lookup tables. Nothing here re-derives status; callers pass the evaluator's output.
"""

from __future__ import annotations

from typing import Any

from packages.shared.schemas.escalation import EscalationStatusV1
from packages.shared.schemas.events import ActorV1, EventTypeV1

STATUS_LABELS: dict[EscalationStatusV1, str] = {
    EscalationStatusV1.OPEN: "Open",
    EscalationStatusV1.BLOCKED: "Blocked",
    EscalationStatusV1.COMPLETE: "Complete",
}

STATUS_COLORS: dict[EscalationStatusV1, str] = {
    EscalationStatusV1.OPEN: "muted",
    EscalationStatusV1.BLOCKED: "destructive",
    EscalationStatusV1.COMPLETE: "success",
}

SUBTYPE_LABELS: dict[str, str] = {
    "jackson": "Jackson (Operations)",
    "lance": "Lance (Graphics)",
    "design": "Design Team",
    "bulk": "Bulk/Fleet",
    "quality_issue": "Quality Issue",
    "unhappy": "Customer Concern",
}

# Titles that don't depend on the payload.
_STATIC_TITLES: dict[str, str] = {
    EventTypeV1.EMAIL_SENT: "Email Sent",
    EventTypeV1.EMAIL_DRAFTED: "Email Drafted",
    EventTypeV1.MARKED_NO_QUOTE_REQUIRED: "Quote Not Required",
    EventTypeV1.ASSET_REVIEWED: "File Reviewed",
    EventTypeV1.ASSET_REVIEW_REQUIRED: "File Review Required",
    EventTypeV1.MARKED_COMPLETE: "Escalation Complete",
    EventTypeV1.INTERNAL_NOTE: "Internal Note",
    EventTypeV1.AI_RESPONSE_SENT: "AI Response",
    "ai_response": "AI Response",
}


def status_label(status: EscalationStatusV1 | str) -> str:
    return STATUS_LABELS[EscalationStatusV1(status)]


def status_color(status: EscalationStatusV1 | str) -> str:
    return STATUS_COLORS[EscalationStatusV1(status)]


def event_title(event_type: str, subtype: str | None = None, payload: dict[str, Any] | None = None) -> str:
    payload = payload or {}

    if event_type == EventTypeV1.ESCALATION_SENT:
        label = SUBTYPE_LABELS.get(subtype or "") or subtype or "General"
        return f"Escalation: {label}"
    if event_type == EventTypeV1.QUOTE_ATTACHED:
        return f"Quote Attached: {payload.get('quote_number') or 'Quote'}"
    if event_type == EventTypeV1.QUOTE_DRAFTED:
        return f"Quote Drafted: {payload.get('quote_number') or 'Quote'}"
    if event_type == EventTypeV1.ASSET_UPLOADED:
        return f"File Uploaded: {payload.get('filename') or 'File'}"

    return _STATIC_TITLES.get(event_type, event_type.replace("_", " "))


def actor_label(actor: str) -> str:
    if actor == ActorV1.JORDAN_LEE:
        return "Jordan Lee AI"
    if actor == ActorV1.SYSTEM:
        return "System"
    if actor in {ActorV1.ADMIN, ActorV1.HUMAN}:
        return "Admin"
    return actor
