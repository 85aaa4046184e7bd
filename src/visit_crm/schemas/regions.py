"""Pydantic request/response models for region endpoints."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from ..models.domain import Region


class RegionModel(BaseModel):
    id: str
    name: str
    subregions: List[str]

    @classmethod
    def from_domain(cls, region: Region) -> "RegionModel":
        return cls(id=region.id, name=region.name, subregions=list(region.subregions))


class RegionCreateRequest(BaseModel):
    name: str = Field(..., description="Name of the new main region.")


class SubRegionRequest(BaseModel):
    name: str = Field(..., description="Sub-region name to append.")
