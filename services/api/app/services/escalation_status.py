"""Escalation status derived from a conversation's event log.

Completion is derived from events, not toggled. Each gate is an existence check over the
full event list, so the result depends only on which (event_type, subtype) pairs are
present, never on their order or count.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from packages.shared.schemas.escalation import (
    EscalationRequirementsV1,
    EscalationStatusResultV1,
    EscalationStatusV1,
)
from packages.shared.schemas.events import EscalationSubtypeV1, EventTypeV1

EMAIL_EVENT_TYPES = frozenset({EventTypeV1.EMAIL_SENT, EventTypeV1.AI_RESPONSE_SENT})
QUOTE_EVENT_TYPES = frozenset(
    {
        EventTypeV1.QUOTE_ATTACHED,
        EventTypeV1.QUOTE_DRAFTED,
        EventTypeV1.MARKED_NO_QUOTE_REQUIRED,
    }
)
FILE_NEED_EVENT_TYPES = frozenset({EventTypeV1.ASSET_UPLOADED, EventTypeV1.ASSET_REVIEW_REQUIRED})

MISSING_EMAIL = "Email not sent"
MISSING_QUOTE = "Quote not attached or dismissed"
MISSING_FILE_REVIEW = "File not reviewed"

SUMMARY_NO_ESCALATION = "No escalation sent"
SUMMARY_READY = "All requirements met - ready to close"
SUMMARY_MARKED_COMPLETE = "Marked complete"


def evaluate_escalation_status(events: Iterable[Any] | None) -> EscalationStatusResultV1:
    """Derive the escalation status for one conversation.

    ``events`` must hold every event recorded for the conversation, in any order. Items may
    be ORM rows, ``ConversationEventV1`` models or plain mappings; anything exposing
    ``event_type`` and ``subtype`` works. The function is total: ``None`` or malformed
    input yields the OPEN result, and unknown event types match no gate.
    """

    tags = _project(events)
    types = {event_type for event_type, _subtype in tags}

    if EventTypeV1.ESCALATION_SENT not in types:
        return EscalationStatusResultV1(
            status=EscalationStatusV1.OPEN,
            missing=[],
            has_escalation=False,
            requirements=EscalationRequirementsV1(),
            summary=SUMMARY_NO_ESCALATION,
        )

    email_sent = not types.isdisjoint(EMAIL_EVENT_TYPES)
    quote_handled = not types.isdisjoint(QUOTE_EVENT_TYPES)

    files_reviewed = True
    if not types.isdisjoint(FILE_NEED_EVENT_TYPES):
        # Routing to the design queue counts as review intake.
        files_reviewed = (
            EventTypeV1.ASSET_REVIEWED in types
            or (EventTypeV1.ESCALATION_SENT, EscalationSubtypeV1.DESIGN) in tags
        )

    requirements = EscalationRequirementsV1(
        email_sent=email_sent,
        quote_handled=quote_handled,
        files_reviewed=files_reviewed,
    )

    missing: list[str] = []
    if not email_sent:
        missing.append(MISSING_EMAIL)
    if not quote_handled:
        missing.append(MISSING_QUOTE)
    if not files_reviewed:
        missing.append(MISSING_FILE_REVIEW)

    if not missing:
        return EscalationStatusResultV1(
            status=EscalationStatusV1.COMPLETE,
            missing=[],
            has_escalation=True,
            requirements=requirements,
            summary=SUMMARY_READY,
        )

    if EventTypeV1.MARKED_COMPLETE in types:
        return EscalationStatusResultV1(
            status=EscalationStatusV1.COMPLETE,
            missing=[],
            has_escalation=True,
            requirements=requirements,
            summary=SUMMARY_MARKED_COMPLETE,
        )

    return EscalationStatusResultV1(
        status=EscalationStatusV1.BLOCKED,
        missing=missing,
        has_escalation=True,
        requirements=requirements,
        summary="Blocked: " + ", ".join(missing),
    )


def _project(events: Iterable[Any] | None) -> set[tuple[str, str | None]]:
    if events is None or isinstance(events, (str, bytes, Mapping)):
        return set()
    if not isinstance(events, Iterable):
        return set()

    tags: set[tuple[str, str | None]] = set()
    for event in events:
        if isinstance(event, Mapping):
            event_type = event.get("event_type")
            subtype = event.get("subtype")
        else:
            event_type = getattr(event, "event_type", None)
            subtype = getattr(event, "subtype", None)

        if not isinstance(event_type, str):
            continue
        tags.add((event_type, subtype if isinstance(subtype, str) else None))
    return tags
