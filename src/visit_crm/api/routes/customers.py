"""Customer list, form, import and export endpoints."""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile, status

from ...data.customers_csv import parse_customers_csv
from ...errors import StorageError
from ...models.domain import Customer, VisitStatus
from ...schemas.customers import (
    CustomerImportResponse,
    CustomerListResponse,
    CustomerModel,
    CustomerPayload,
)
from ...services.customers import filter_customers, new_customer_id, whatsapp_link_for
from ...services.data_service import DataService
from ...services.export import export_customers_csv, export_filename
from ..dependencies import get_data_service, storage_failure

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/customers", tags=["customers"])


def _filtered(
    service: DataService,
    region: str | None,
    sub_region: str | None,
    visit_status: VisitStatus | None,
    q: str | None,
) -> list[Customer]:
    try:
        customers = service.list_customers()
    except StorageError as exc:
        raise storage_failure("load customers", exc) from exc
    return filter_customers(customers, region=region, sub_region=sub_region, status=visit_status, query=q)


def _save(
    service: DataService,
    payload: CustomerPayload,
    customer_id: str,
    previous: Customer | None = None,
) -> CustomerModel:
    customer = payload.to_domain(customer_id)
    # the link is only re-derived when the phone number changes
    if previous is None or previous.phone != customer.phone:
        customer.whatsapp_link = whatsapp_link_for(customer.phone, customer.whatsapp_link)
    try:
        service.save_customer(customer)
    except StorageError as exc:
        raise storage_failure("save the customer", exc) from exc
    return CustomerModel.from_domain(customer)


@router.get("", response_model=CustomerListResponse, status_code=status.HTTP_200_OK)
def list_customers(
    region: str | None = Query(default=None, description="Main region filter"),
    sub_region: str | None = Query(default=None, description="Sub-region filter"),
    visit_status: VisitStatus | None = Query(default=None, alias="status", description="Visit status filter"),
    q: str | None = Query(default=None, description="Search shop name, manager name or phone"),
    service: DataService = Depends(get_data_service),
) -> CustomerListResponse:
    customers = _filtered(service, region, sub_region, visit_status, q)
    return CustomerListResponse(
        items=[CustomerModel.from_domain(customer) for customer in customers],
        total=len(customers),
    )


@router.get("/export", status_code=status.HTTP_200_OK)
def export_customers(
    region: str | None = Query(default=None),
    sub_region: str | None = Query(default=None),
    visit_status: VisitStatus | None = Query(default=None, alias="status"),
    q: str | None = Query(default=None),
    service: DataService = Depends(get_data_service),
) -> Response:
    """Download the filtered customer view as a spreadsheet-friendly CSV."""
    customers = _filtered(service, region, sub_region, visit_status, q)
    try:
        content = export_customers_csv(customers)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    return Response(
        content=content.encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export_filename()}"'},
    )


@router.post("/import", response_model=CustomerImportResponse, status_code=status.HTTP_201_CREATED)
async def import_customers(
    file: UploadFile = File(...),
    service: DataService = Depends(get_data_service),
) -> CustomerImportResponse:
    """Insert every row of an uploaded CSV as a new customer."""
    if not file.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Filename is required.")
    if Path(file.filename).suffix.lower() != ".csv":
        raise HTTPException(status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE, detail="Only .csv files are supported.")

    contents = await file.read()
    try:
        text = contents.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="CSV file must be UTF-8 encoded.") from exc

    customers = parse_customers_csv(text)
    try:
        imported = service.bulk_import_customers(customers)
    except StorageError as exc:
        raise storage_failure("import customers", exc) from exc

    logger.info(f"Imported {imported} customers from {file.filename}")
    return CustomerImportResponse(fileName=file.filename, imported=imported)


@router.get("/{customer_id}", response_model=CustomerModel, status_code=status.HTTP_200_OK)
def get_customer(customer_id: str, service: DataService = Depends(get_data_service)) -> CustomerModel:
    try:
        customer = service.get_customer(customer_id)
    except StorageError as exc:
        raise storage_failure("load the customer", exc) from exc
    if customer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Customer not found: {customer_id}")
    return CustomerModel.from_domain(customer)


@router.post("", response_model=CustomerModel, status_code=status.HTTP_201_CREATED)
def create_customer(payload: CustomerPayload, service: DataService = Depends(get_data_service)) -> CustomerModel:
    return _save(service, payload, payload.id or new_customer_id())


@router.put("/{customer_id}", response_model=CustomerModel, status_code=status.HTTP_200_OK)
def update_customer(
    customer_id: str,
    payload: CustomerPayload,
    service: DataService = Depends(get_data_service),
) -> CustomerModel:
    try:
        previous = service.get_customer(customer_id)
    except StorageError as exc:
        raise storage_failure("load the customer", exc) from exc
    return _save(service, payload, customer_id, previous)


@router.delete("/{customer_id}", status_code=status.HTTP_200_OK)
def delete_customer(customer_id: str, service: DataService = Depends(get_data_service)) -> dict:
    try:
        service.delete_customer(customer_id)
    except StorageError as exc:
        raise storage_failure("delete the customer", exc) from exc
    return {"status": "deleted", "id": customer_id}
