from __future__ import annotations

import argparse
from datetime import datetime

from packages.shared.schemas.events import ActorV1, EventTypeV1
from services.api.app.db.database import db_session
from services.api.app.db.init_db import init_db
from services.api.app.db.models import Conversation, ConversationEvent
from services.api.app.services.escalation_status import evaluate_escalation_status
from services.api.app.services.event_log import (
    list_conversation_events,
    log_conversation_event,
    log_escalation_with_email,
    log_quote_event,
)


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed a demo escalated conversation")
    parser.add_argument("--conversation-id", default="conv-demo-1")
    parser.add_argument("--contact-name", default="Demo Customer")
    parser.add_argument("--contact-email", default="demo@example.com")
    parser.add_argument("--escalation-type", default="design")
    parser.add_argument("--with-file", action="store_true", help="Also log an uploaded file")
    args = parser.parse_args()

    init_db()

    db = db_session()
    try:
        if db.get(Conversation, args.conversation_id) is None:
            db.add(
                Conversation(
                    id=args.conversation_id,
                    contact_name=args.contact_name,
                    contact_email=args.contact_email,
                )
            )
            db.commit()

        existing = (
            db.query(ConversationEvent)
            .filter(ConversationEvent.conversation_id == args.conversation_id)
            .limit(1)
            .count()
        )
        if existing == 0:
            log_escalation_with_email(
                db,
                args.conversation_id,
                args.escalation_type,
                recipients=["team@example.com"],
                subject=f"Escalation: {args.contact_name}",
                body="Customer asked for a full wrap quote on a 2022 Ford Transit.",
                sent_at=datetime.utcnow().isoformat(),
                customer_email=args.contact_email,
                customer_name=args.contact_name,
            )
            log_quote_event(
                db,
                args.conversation_id,
                EventTypeV1.QUOTE_DRAFTED,
                quote_id="q-demo-1",
                quote_number="WPW-1001",
                total=1850.0,
                customer_email=args.contact_email,
                customer_name=args.contact_name,
                vehicle_info="2022 Ford Transit",
            )
            if args.with_file:
                log_conversation_event(
                    db,
                    args.conversation_id,
                    EventTypeV1.ASSET_UPLOADED,
                    ActorV1.SYSTEM,
                    {"filename": "logo.pdf", "file_type": "application/pdf"},
                )

        result = evaluate_escalation_status(list_conversation_events(db, args.conversation_id))
    finally:
        db.close()

    print(f"Seeded conversation {args.conversation_id}: {result.status.value} ({result.summary})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
