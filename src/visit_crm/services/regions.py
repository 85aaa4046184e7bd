"""Region editor operations.

A region's sub-region list is rewritten as a whole on every change: read the
current region, derive the new list, save the full region back. Two sessions
editing the same region race and the last save wins.
"""

from __future__ import annotations

import uuid
from dataclasses import replace

from ..errors import RegionNotFoundError
from ..models.domain import Region
from .data_service import DataService


def _require_name(name: str, label: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValueError(f"{label} name must not be empty.")
    return cleaned


def _load_region(service: DataService, region_id: str) -> Region:
    region = service.get_region(region_id)
    if region is None:
        raise RegionNotFoundError(region_id)
    return region


def create_region(service: DataService, name: str) -> Region:
    region = Region(id=str(uuid.uuid4()), name=_require_name(name, "Region"), subregions=[])
    service.save_region(region)
    return region


def add_subregion(service: DataService, region_id: str, name: str) -> Region:
    """Append a sub-region. Duplicate names are allowed."""
    subregion = _require_name(name, "Sub-region")
    region = _load_region(service, region_id)
    updated = replace(region, subregions=[*region.subregions, subregion])
    service.save_region(updated)
    return updated


def remove_subregion(service: DataService, region_id: str, index: int) -> Region:
    """Drop the sub-region at ``index``; an index outside the list removes nothing."""
    region = _load_region(service, region_id)
    updated = replace(
        region,
        subregions=[name for position, name in enumerate(region.subregions) if position != index],
    )
    service.save_region(updated)
    return updated


def delete_region(service: DataService, region_id: str) -> None:
    """Remove a region. Customers that reference it keep the stale name."""
    _load_region(service, region_id)
    service.delete_region(region_id)
