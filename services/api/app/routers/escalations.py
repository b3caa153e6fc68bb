from __future__ import annotations

from fastapi import APIRouter, Depends
from services.api.app.db.database import get_db
from services.api.app.models.escalation import EscalationQueueItemOut
from services.api.app.services.escalation_queue import (
    EscalationQueueItem,
    build_escalation_queue,
    build_needs_action_queue,
)
from services.api.app.services.presentation import status_color, status_label
from sqlalchemy.orm import Session

router = APIRouter()


@router.get("/v1/escalations", response_model=list[EscalationQueueItemOut])
def list_escalations(db: Session = Depends(get_db)) -> list[EscalationQueueItemOut]:
    return [_item_out(i) for i in build_escalation_queue(db)]


@router.get("/v1/escalations/needs-action", response_model=list[EscalationQueueItemOut])
def list_needs_action(db: Session = Depends(get_db)) -> list[EscalationQueueItemOut]:
    return [_item_out(i) for i in build_needs_action_queue(db)]


def _item_out(item: EscalationQueueItem) -> EscalationQueueItemOut:
    return EscalationQueueItemOut(
        conversation_id=item.conversation_id,
        contact_name=item.contact_name,
        contact_email=item.contact_email,
        contact_phone=item.contact_phone,
        escalation_type=item.escalation_type,
        escalated_at=item.escalated_at.isoformat() if item.escalated_at else None,
        priority=item.priority,
        status=item.status.value,
        label=status_label(item.status),
        color=status_color(item.status),
        missing=item.missing,
    )
