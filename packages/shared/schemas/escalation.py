"""Shared escalation status schema (v1).

Escalation status is a read model: it is never stored, only derived from a conversation's
event log. Clients render ``status`` as a badge and ``missing`` as a checklist.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class EscalationStatusV1(str, Enum):
    OPEN = "open"
    BLOCKED = "blocked"
    COMPLETE = "complete"


class EscalationRequirementsV1(BaseModel):
    email_sent: bool = False
    quote_handled: bool = False
    files_reviewed: bool = False


class EscalationStatusResultV1(BaseModel):
    status: EscalationStatusV1
    missing: list[str] = Field(default_factory=list)
    has_escalation: bool = False

    # Raw gate values. These are not adjusted when a manual override forces COMPLETE.
    requirements: EscalationRequirementsV1 = Field(default_factory=EscalationRequirementsV1)
    summary: str
