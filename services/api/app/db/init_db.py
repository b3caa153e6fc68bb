from __future__ import annotations

import os
from pathlib import Path

from services.api.app.db.database import get_engine
from services.api.app.db.models import Base
from sqlalchemy.engine import make_url

_TRUTHY = {"1", "true", "yes", "y"}


def init_db() -> None:
    if os.getenv("WRAPCOMMAND_DB_AUTO_CREATE", "true").strip().lower() not in _TRUTHY:
        return

    engine = get_engine()
    _ensure_sqlite_dir(str(engine.url))
    Base.metadata.create_all(bind=engine)


def _ensure_sqlite_dir(url: str) -> None:
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite" or not parsed.database:
        return
    if parsed.database == ":memory:":
        return
    Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)
