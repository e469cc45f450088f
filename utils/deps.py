from typing import Annotated
from fastapi import Depends, Request
from core.config import settings
from core.database import SessionLocal
from storage import Storage, SqlStorage


def get_storage(request: Request):
    """
    Yield the storage backend for one request.

    The in-memory store lives on ``app.state`` for the lifetime of the
    process; the relational store gets a fresh session per request.
    """
    if settings.STORAGE_BACKEND == "memory":
        yield request.app.state.storage
        return

    db = SessionLocal()
    try:
        yield SqlStorage(db)
    finally:
        db.close()


storage_dependency = Annotated[Storage, Depends(get_storage)]
