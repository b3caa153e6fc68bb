"""Shared conversation event schema (v1).

The backend stores an append-only event log per conversation. Every action taken on a
conversation (escalating it, emailing the customer, attaching a quote, reviewing a file)
writes one event. Derived state such as escalation status is computed from these events.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class EventTypeV1:
    """Known event type tags.

    ``event_type`` is an open string tag, not an enum: producers may introduce new tags at
    any time and consumers must treat unknown tags as inert.
    """

    MESSAGE_RECEIVED = "message_received"
    ESCALATION_SENT = "escalation_sent"
    ESCALATION_BLOCKED = "escalation_blocked"
    EMAIL_SENT = "email_sent"
    EMAIL_DRAFTED = "email_drafted"
    AI_RESPONSE_SENT = "ai_response_sent"
    QUOTE_DRAFTED = "quote_drafted"
    QUOTE_ATTACHED = "quote_attached"
    MARKED_NO_QUOTE_REQUIRED = "marked_no_quote_required"
    ASSET_UPLOADED = "asset_uploaded"
    ASSET_REVIEW_REQUIRED = "asset_review_required"
    ASSET_REVIEWED = "asset_reviewed"
    MARKED_COMPLETE = "marked_complete"
    CLASSIFICATION_COMPLETED = "classification_completed"
    CALL_REQUESTED = "call_requested"
    CALL_SCHEDULED = "call_scheduled"
    CALL_COMPLETED = "call_completed"
    INTERNAL_NOTE = "internal_note"
    FAILED = "failed"


class EscalationSubtypeV1:
    JACKSON = "jackson"
    LANCE = "lance"
    DESIGN = "design"
    BULK = "bulk"
    QUALITY_ISSUE = "quality_issue"
    UNHAPPY = "unhappy"


class ActorV1:
    JORDAN_LEE = "jordan_lee"
    SYSTEM = "system"
    ADMIN = "admin"
    HUMAN = "human"


class ConversationEventV1(BaseModel):
    id: str
    conversation_id: str

    event_type: str
    subtype: str | None = None
    actor: str
    payload: dict[str, Any] = Field(default_factory=dict)
    created_at: str
