from __future__ import annotations

from datetime import datetime
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException
from services.api.app.db.database import get_db
from services.api.app.db.models import Conversation, ConversationEvent
from services.api.app.models.conversation import (
    ConversationCreateRequest,
    ConversationOut,
    EscalateRequest,
    EscalationStatusOut,
    EventCreateRequest,
    QuoteEventRequest,
    ResolveRequest,
    TimelineEventOut,
)
from services.api.app.services.escalation_queue import resolve_conversation
from services.api.app.services.escalation_status import evaluate_escalation_status
from services.api.app.services.event_log import (
    ConversationEventValidationError,
    ConversationNotFoundError,
    list_conversation_events,
    log_conversation_event,
    log_escalation_with_email,
    log_quote_event,
    require_conversation,
)
from services.api.app.services.presentation import (
    actor_label,
    event_title,
    status_color,
    status_label,
)
from sqlalchemy.orm import Session

router = APIRouter()


@router.post("/v1/conversations", response_model=ConversationOut)
def create_conversation(
    payload: ConversationCreateRequest, db: Session = Depends(get_db)
) -> ConversationOut:
    conversation_id = payload.id or uuid4().hex
    if db.get(Conversation, conversation_id) is not None:
        raise HTTPException(status_code=409, detail="Conversation already exists")

    conversation = Conversation(
        id=conversation_id,
        contact_name=payload.contact_name,
        contact_email=payload.contact_email,
        contact_phone=payload.contact_phone,
        created_at=datetime.utcnow(),
    )
    db.add(conversation)
    db.commit()

    return ConversationOut(
        id=conversation.id,
        contact_name=conversation.contact_name,
        contact_email=conversation.contact_email,
        contact_phone=conversation.contact_phone,
        created_at=conversation.created_at.isoformat(),
    )


@router.post("/v1/conversations/{conversation_id}/events", response_model=TimelineEventOut)
def append_event(
    conversation_id: str, payload: EventCreateRequest, db: Session = Depends(get_db)
) -> TimelineEventOut:
    _require(db, conversation_id)

    try:
        event = log_conversation_event(
            db,
            conversation_id,
            payload.event_type,
            payload.actor,
            payload.payload,
            payload.subtype,
        )
    except ConversationEventValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    return _timeline_item(event)


@router.post(
    "/v1/conversations/{conversation_id}/escalations", response_model=list[TimelineEventOut]
)
def escalate(
    conversation_id: str, payload: EscalateRequest, db: Session = Depends(get_db)
) -> list[TimelineEventOut]:
    _require(db, conversation_id)

    try:
        escalation, email = log_escalation_with_email(
            db,
            conversation_id,
            payload.escalation_type,
            recipients=payload.recipients,
            subject=payload.subject,
            body=payload.body,
            sent_at=payload.sent_at or datetime.utcnow().isoformat(),
            customer_email=payload.customer_email,
            customer_name=payload.customer_name,
            message_excerpt=payload.message_excerpt,
            order_number=payload.order_number,
        )
    except ConversationEventValidationError as e:
        db.rollback()
        raise HTTPException(status_code=422, detail=str(e)) from e

    return [_timeline_item(escalation), _timeline_item(email)]


@router.post("/v1/conversations/{conversation_id}/quotes", response_model=TimelineEventOut)
def record_quote(
    conversation_id: str, payload: QuoteEventRequest, db: Session = Depends(get_db)
) -> TimelineEventOut:
    _require(db, conversation_id)

    try:
        event = log_quote_event(
            db,
            conversation_id,
            payload.event_type,
            quote_id=payload.quote_id,
            quote_number=payload.quote_number,
            total=payload.total,
            customer_email=payload.customer_email,
            customer_name=payload.customer_name,
            vehicle_info=payload.vehicle_info,
            actor=payload.actor,
        )
    except ConversationEventValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    return _timeline_item(event)


@router.get(
    "/v1/conversations/{conversation_id}/events", response_model=list[TimelineEventOut]
)
def get_timeline(conversation_id: str, db: Session = Depends(get_db)) -> list[TimelineEventOut]:
    _require(db, conversation_id)
    return [_timeline_item(e) for e in list_conversation_events(db, conversation_id)]


@router.get(
    "/v1/conversations/{conversation_id}/escalation-status", response_model=EscalationStatusOut
)
def get_escalation_status(
    conversation_id: str, db: Session = Depends(get_db)
) -> EscalationStatusOut:
    _require(db, conversation_id)

    result = evaluate_escalation_status(list_conversation_events(db, conversation_id))
    return EscalationStatusOut(
        **result.model_dump(),
        conversation_id=conversation_id,
        label=status_label(result.status),
        color=status_color(result.status),
    )


@router.post("/v1/conversations/{conversation_id}/resolve", response_model=TimelineEventOut)
def resolve(
    conversation_id: str, payload: ResolveRequest, db: Session = Depends(get_db)
) -> TimelineEventOut:
    try:
        event = resolve_conversation(db, conversation_id, actor=payload.actor, notes=payload.notes)
    except ConversationNotFoundError as e:
        raise HTTPException(status_code=404, detail="Conversation not found") from e
    except ConversationEventValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    return _timeline_item(event)


def _require(db: Session, conversation_id: str) -> Conversation:
    try:
        return require_conversation(db, conversation_id)
    except ConversationNotFoundError as e:
        raise HTTPException(status_code=404, detail="Conversation not found") from e


def _timeline_item(event: ConversationEvent) -> TimelineEventOut:
    payload = dict(event.payload_json or {})
    return TimelineEventOut(
        id=event.id,
        conversation_id=event.conversation_id,
        event_type=event.event_type,
        subtype=event.subtype,
        actor=event.actor,
        payload=payload,
        created_at=event.created_at.isoformat(),
        title=event_title(event.event_type, event.subtype, payload),
        actor_label=actor_label(event.actor),
    )
