"""Dashboard endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status

from ...errors import StorageError
from ...schemas.dashboard import DashboardStatsResponse, ResetVisitsResponse
from ...services.customers import compute_dashboard_stats
from ...services.data_service import DataService
from ..dependencies import get_data_service, storage_failure

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStatsResponse, status_code=status.HTTP_200_OK)
def get_dashboard_stats(service: DataService = Depends(get_data_service)) -> DashboardStatsResponse:
    try:
        customers = service.list_customers()
    except StorageError as exc:
        raise storage_failure("load customers", exc) from exc
    return DashboardStatsResponse(**compute_dashboard_stats(customers))


@router.post("/reset-visits", response_model=ResetVisitsResponse, status_code=status.HTTP_200_OK)
def reset_weekly_visits(service: DataService = Depends(get_data_service)) -> ResetVisitsResponse:
    """Start a new week: every customer goes back to "not visited"."""
    try:
        updated = service.reset_visit_statuses()
    except StorageError as exc:
        raise storage_failure("reset weekly visits", exc) from exc
    logger.info(f"Reset visit status for {updated} customers")
    return ResetVisitsResponse(updated=updated)
