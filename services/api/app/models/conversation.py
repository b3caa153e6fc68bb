from __future__ import annotations

from typing import Any

from packages.shared.schemas.escalation import EscalationStatusResultV1
from packages.shared.schemas.events import ConversationEventV1
from pydantic import BaseModel, Field


class ConversationCreateRequest(BaseModel):
    id: str | None = None
    contact_name: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None


class ConversationOut(BaseModel):
    id: str
    contact_name: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    created_at: str


class EventCreateRequest(BaseModel):
    event_type: str = Field(..., min_length=1)
    subtype: str | None = None
    actor: str = Field(..., min_length=1)
    payload: dict[str, Any] = Field(default_factory=dict)


class TimelineEventOut(ConversationEventV1):
    title: str
    actor_label: str


class EscalationStatusOut(EscalationStatusResultV1):
    conversation_id: str
    label: str
    color: str


class ResolveRequest(BaseModel):
    actor: str = "admin"
    notes: str = "Quick resolved from escalations dashboard"


class EscalateRequest(BaseModel):
    escalation_type: str = Field(..., min_length=1)
    recipients: list[str] = Field(..., min_length=1)
    subject: str
    body: str
    sent_at: str | None = None

    customer_email: str | None = None
    customer_name: str | None = None
    message_excerpt: str | None = None
    order_number: str | None = None


class QuoteEventRequest(BaseModel):
    event_type: str = "quote_attached"
    quote_id: str
    quote_number: str
    total: float | None = None
    customer_email: str | None = None
    customer_name: str | None = None
    vehicle_info: str | None = None
    actor: str = "jordan_lee"
