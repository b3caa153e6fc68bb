"""Conversation event log.

This module is the only writer of ``conversation_events``. An action that does not write
an event did not happen as far as derived state is concerned.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any
from uuid import uuid4

from packages.shared.schemas.events import ActorV1, EventTypeV1
from services.api.app.db.models import Conversation, ConversationEvent
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

EMAIL_BODY_MAX_CHARS = 2000

QUOTE_EVENT_TYPES = frozenset({EventTypeV1.QUOTE_DRAFTED, EventTypeV1.QUOTE_ATTACHED})


class ConversationEventError(Exception):
    """Base class for event log errors."""


class ConversationEventValidationError(ConversationEventError):
    pass


class ConversationNotFoundError(ConversationEventError):
    def __init__(self, conversation_id: str) -> None:
        super().__init__(f"Conversation not found: {conversation_id}")
        self.conversation_id = conversation_id


def log_conversation_event(
    db: Session,
    conversation_id: str,
    event_type: str,
    actor: str,
    payload: dict[str, Any] | None = None,
    subtype: str | None = None,
    *,
    commit: bool = True,
) -> ConversationEvent:
    """Append one event to a conversation's log.

    ``None`` values are dropped from the payload before storing.
    """

    if not conversation_id:
        logger.error("Missing conversation_id")
        raise ConversationEventValidationError("Missing conversation_id")
    if not event_type:
        logger.error("Missing event_type")
        raise ConversationEventValidationError("Missing event_type")
    if not actor:
        raise ConversationEventValidationError("Missing actor")

    clean_payload = {k: v for k, v in (payload or {}).items() if v is not None}

    event = ConversationEvent(
        id=uuid4().hex,
        conversation_id=conversation_id,
        event_type=event_type,
        subtype=subtype or None,
        actor=actor,
        payload_json=clean_payload,
        created_at=datetime.utcnow(),
    )
    db.add(event)
    if commit:
        db.commit()

    logger.info(
        "Logged %s%s for conversation %s...",
        event_type,
        f":{subtype}" if subtype else "",
        conversation_id[:8],
    )
    return event


def log_escalation_with_email(
    db: Session,
    conversation_id: str,
    escalation_type: str,
    *,
    recipients: list[str],
    subject: str,
    body: str,
    sent_at: str,
    customer_email: str | None = None,
    customer_name: str | None = None,
    message_excerpt: str | None = None,
    order_number: str | None = None,
) -> tuple[ConversationEvent, ConversationEvent]:
    """Record an escalation and the email that announced it, in one transaction."""

    escalation = log_conversation_event(
        db,
        conversation_id,
        EventTypeV1.ESCALATION_SENT,
        ActorV1.JORDAN_LEE,
        {
            "customer_email": customer_email,
            "customer_name": customer_name,
            "message_excerpt": message_excerpt,
            "order_number": order_number,
            "escalation_target": escalation_type,
            "priority": "high",
        },
        escalation_type,
        commit=False,
    )
    email = log_conversation_event(
        db,
        conversation_id,
        EventTypeV1.EMAIL_SENT,
        ActorV1.JORDAN_LEE,
        {
            "email_sent_to": recipients,
            "email_sent_at": sent_at,
            "email_subject": subject,
            "email_body": body[:EMAIL_BODY_MAX_CHARS],
            "customer_email": customer_email,
            "customer_name": customer_name,
        },
        escalation_type,
        commit=False,
    )
    db.commit()
    return escalation, email


def log_quote_event(
    db: Session,
    conversation_id: str,
    event_type: str,
    *,
    quote_id: str,
    quote_number: str,
    total: float | None = None,
    customer_email: str | None = None,
    customer_name: str | None = None,
    vehicle_info: str | None = None,
    actor: str = ActorV1.JORDAN_LEE,
) -> ConversationEvent:
    if event_type not in QUOTE_EVENT_TYPES:
        raise ConversationEventValidationError(f"Not a quote event type: {event_type!r}")

    return log_conversation_event(
        db,
        conversation_id,
        event_type,
        actor,
        {
            "quote_id": quote_id,
            "quote_number": quote_number,
            "quote_total": total,
            "customer_email": customer_email,
            "customer_name": customer_name,
            "metadata": {"vehicle": vehicle_info} if vehicle_info else None,
        },
    )


def list_conversation_events(db: Session, conversation_id: str) -> list[ConversationEvent]:
    """All events of one conversation, oldest first."""
    return (
        db.query(ConversationEvent)
        .filter(ConversationEvent.conversation_id == conversation_id)
        .order_by(ConversationEvent.created_at.asc(), ConversationEvent.id.asc())
        .all()
    )


def require_conversation(db: Session, conversation_id: str) -> Conversation:
    conversation = db.get(Conversation, conversation_id)
    if conversation is None:
        raise ConversationNotFoundError(conversation_id)
    return conversation

