"""Dashboard API schemas."""

from __future__ import annotations

from pydantic import BaseModel


class RegionCountModel(BaseModel):
    name: str
    count: int


class DashboardStatsResponse(BaseModel):
    totalCustomers: int
    visitsDone: int
    visitsPostponed: int
    visitsPending: int
    regionCounts: list[RegionCountModel]


class ResetVisitsResponse(BaseModel):
    updated: int
