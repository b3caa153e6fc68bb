from __future__ import annotations

from pydantic import BaseModel, Field


class EscalationQueueItemOut(BaseModel):
    conversation_id: str
    contact_name: str
    contact_email: str = ""
    contact_phone: str = ""

    escalation_type: str
    escalated_at: str | None = None
    priority: int

    status: str
    label: str
    color: str
    missing: list[str] = Field(default_factory=list)
