"""Shared FastAPI dependencies for the route modules."""

from __future__ import annotations

import logging
import threading

from fastapi import HTTPException, Request, status

from ..errors import StorageError
from ..persistence.local_store import LocalStore
from ..persistence.remote_store import build_remote_store
from ..services.data_service import DataService

logger = logging.getLogger(__name__)

_build_lock = threading.Lock()


def build_data_service() -> DataService:
    """Wire the configured local store and optional Supabase mirror together."""
    return DataService(local=LocalStore(), remote=build_remote_store())


def get_data_service(request: Request) -> DataService:
    state = request.app.state
    if getattr(state, "data_service", None) is None:
        with _build_lock:
            if getattr(state, "data_service", None) is None:
                try:
                    state.data_service = build_data_service()
                except StorageError as exc:
                    raise storage_failure("open the local store", exc) from exc
    return state.data_service


def storage_failure(action: str, exc: StorageError) -> HTTPException:
    logger.error(f"Failed to {action}: {exc}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}. Check that the local database is reachable and writable.",
    )
