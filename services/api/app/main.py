"""WrapCommand escalations API entrypoint."""

import logging
import os

from fastapi import FastAPI
from services.api.app.db.init_db import init_db
from services.api.app.routers.conversations import router as conversations_router
from services.api.app.routers.escalations import router as escalations_router

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())

app = FastAPI(title="WrapCommand Escalations API")

app.include_router(conversations_router)
app.include_router(escalations_router)


@app.on_event("startup")
def _startup() -> None:
    init_db()


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
