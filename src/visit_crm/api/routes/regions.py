"""Region and sub-region editor endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ...errors import RegionNotFoundError, StorageError
from ...schemas.regions import RegionCreateRequest, RegionModel, SubRegionRequest
from ...services import regions as region_editor
from ...services.data_service import DataService
from ..dependencies import get_data_service, storage_failure

router = APIRouter(prefix="/regions", tags=["regions"])


def _not_found(exc: RegionNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.get("", response_model=List[RegionModel], status_code=status.HTTP_200_OK)
def list_regions(service: DataService = Depends(get_data_service)) -> List[RegionModel]:
    try:
        regions = service.list_regions()
    except StorageError as exc:
        raise storage_failure("load regions", exc) from exc
    return [RegionModel.from_domain(region) for region in regions]


@router.post("", response_model=RegionModel, status_code=status.HTTP_201_CREATED)
def create_region(request: RegionCreateRequest, service: DataService = Depends(get_data_service)) -> RegionModel:
    try:
        region = region_editor.create_region(service, request.name)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except StorageError as exc:
        raise storage_failure("add the region", exc) from exc
    return RegionModel.from_domain(region)


@router.delete("/{region_id}", status_code=status.HTTP_200_OK)
def delete_region(region_id: str, service: DataService = Depends(get_data_service)) -> dict:
    try:
        region_editor.delete_region(service, region_id)
    except RegionNotFoundError as exc:
        raise _not_found(exc) from exc
    except StorageError as exc:
        raise storage_failure("delete the region", exc) from exc
    return {"status": "deleted", "id": region_id}


@router.post("/{region_id}/subregions", response_model=RegionModel, status_code=status.HTTP_200_OK)
def add_subregion(
    region_id: str,
    request: SubRegionRequest,
    service: DataService = Depends(get_data_service),
) -> RegionModel:
    try:
        region = region_editor.add_subregion(service, region_id, request.name)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except RegionNotFoundError as exc:
        raise _not_found(exc) from exc
    except StorageError as exc:
        raise storage_failure("add the sub-region", exc) from exc
    return RegionModel.from_domain(region)


@router.delete("/{region_id}/subregions/{index}", response_model=RegionModel, status_code=status.HTTP_200_OK)
def remove_subregion(region_id: str, index: int, service: DataService = Depends(get_data_service)) -> RegionModel:
    try:
        region = region_editor.remove_subregion(service, region_id, index)
    except RegionNotFoundError as exc:
        raise _not_found(exc) from exc
    except StorageError as exc:
        raise storage_failure("delete the sub-region", exc) from exc
    return RegionModel.from_domain(region)
