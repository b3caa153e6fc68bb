"""Escalation work queues.

Both queues evaluate every escalated conversation from its full event log on each call.
Nothing is cached between calls.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime

from packages.shared.schemas.escalation import EscalationStatusV1
from packages.shared.schemas.events import ActorV1, EventTypeV1
from services.api.app.db.models import Conversation, ConversationEvent
from services.api.app.services.escalation_status import evaluate_escalation_status
from services.api.app.services.event_log import log_conversation_event, require_conversation
from sqlalchemy.orm import Session

DEFAULT_ESCALATION_TYPE = "general"
DEFAULT_PRIORITY = 10

# Lower sorts first.
TYPE_PRIORITY: dict[str, int] = {
    "quality_issue": 1,
    "unhappy_customer": 2,
    "bulk_inquiry": 3,
    "bulk_inquiry_with_email": 3,
    "bulk_order": 3,
    "design": 4,
    "jackson": 5,
    "lance": 5,
    "general": DEFAULT_PRIORITY,
}


@dataclass
class EscalationQueueItem:
    conversation_id: str
    contact_name: str
    contact_email: str
    contact_phone: str
    escalation_type: str
    escalated_at: datetime | None
    status: EscalationStatusV1
    priority: int
    missing: list[str] = field(default_factory=list)


def type_priority(escalation_type: str) -> int:
    return TYPE_PRIORITY.get(escalation_type, DEFAULT_PRIORITY)


def build_escalation_queue(db: Session) -> list[EscalationQueueItem]:
    """Every escalated conversation: blocked first, then type priority, then newest."""

    items = _collect_items(db, default_contact_name="Website Visitor")

    # Stable sorts, least significant key first.
    items.sort(key=lambda i: _ts(i.escalated_at), reverse=True)
    items.sort(key=lambda i: i.priority)
    items.sort(key=lambda i: i.status != EscalationStatusV1.BLOCKED)
    return items


def build_needs_action_queue(db: Session) -> list[EscalationQueueItem]:
    """Blocked escalations only, oldest first."""

    items = [
        i
        for i in _collect_items(db, default_contact_name="Unknown")
        if i.status == EscalationStatusV1.BLOCKED
    ]
    items.sort(key=lambda i: _ts(i.escalated_at))
    return items


def resolve_conversation(
    db: Session,
    conversation_id: str,
    *,
    actor: str = ActorV1.ADMIN,
    notes: str = "Quick resolved from escalations dashboard",
) -> ConversationEvent:
    require_conversation(db, conversation_id)
    return log_conversation_event(
        db,
        conversation_id,
        EventTypeV1.MARKED_COMPLETE,
        actor,
        {"resolution_notes": notes},
    )


def _collect_items(db: Session, *, default_contact_name: str) -> list[EscalationQueueItem]:
    escalations = (
        db.query(ConversationEvent)
        .filter(ConversationEvent.event_type == EventTypeV1.ESCALATION_SENT)
        .order_by(ConversationEvent.created_at.desc())
        .all()
    )

    # Most recent escalation per conversation, in first-seen order.
    latest: dict[str, ConversationEvent] = {}
    for e in escalations:
        latest.setdefault(e.conversation_id, e)

    if not latest:
        return []

    conversation_ids = list(latest)

    events_by_conversation: dict[str, list[ConversationEvent]] = defaultdict(list)
    for e in (
        db.query(ConversationEvent)
        .filter(ConversationEvent.conversation_id.in_(conversation_ids))
        .all()
    ):
        events_by_conversation[e.conversation_id].append(e)

    conversations = {
        c.id: c
        for c in db.query(Conversation).filter(Conversation.id.in_(conversation_ids)).all()
    }

    out: list[EscalationQueueItem] = []
    for conversation_id in conversation_ids:
        result = evaluate_escalation_status(events_by_conversation[conversation_id])
        escalation = latest[conversation_id]
        conversation = conversations.get(conversation_id)
        escalation_type = escalation.subtype or DEFAULT_ESCALATION_TYPE

        out.append(
            EscalationQueueItem(
                conversation_id=conversation_id,
                contact_name=(conversation.contact_name if conversation else None)
                or default_contact_name,
                contact_email=(conversation.contact_email if conversation else None) or "",
                contact_phone=(conversation.contact_phone if conversation else None) or "",
                escalation_type=escalation_type,
                escalated_at=escalation.created_at,
                status=result.status,
                priority=type_priority(escalation_type),
                missing=list(result.missing),
            )
        )
    return out


def _ts(value: datetime | None) -> float:
    if value is None:
        return 0.0
    # SQLite drops tzinfo on read; treat naive values as UTC.
    if value.tzinfo is None:
        return (value - datetime(1970, 1, 1)).total_seconds()
    return value.timestamp()
