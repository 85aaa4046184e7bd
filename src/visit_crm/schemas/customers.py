"""Customer-facing API schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from ..models.domain import Customer, VisitStatus


class CustomerModel(BaseModel):
    id: str
    shopName: str
    managerName: str = ""
    phone: str
    mainRegion: str = ""
    subRegion: str = ""
    whatsappLink: str = ""
    mapLink: str = ""
    visitStatus: VisitStatus = VisitStatus.NOT_DONE

    @classmethod
    def from_domain(cls, customer: Customer) -> "CustomerModel":
        return cls(
            id=customer.id,
            shopName=customer.shop_name,
            managerName=customer.manager_name,
            phone=customer.phone,
            mainRegion=customer.main_region,
            subRegion=customer.sub_region,
            whatsappLink=customer.whatsapp_link,
            mapLink=customer.map_link,
            visitStatus=customer.visit_status,
        )


class CustomerPayload(BaseModel):
    """Body of the customer form. ``id`` is generated when omitted."""

    id: Optional[str] = Field(default=None, description="Existing customer id; omit to create a new record.")
    shopName: str = Field(..., description="Shop name (required).")
    managerName: str = ""
    phone: str = Field(..., description="Contact phone number (required).")
    mainRegion: str = ""
    subRegion: str = ""
    whatsappLink: str = ""
    mapLink: str = ""
    visitStatus: VisitStatus = VisitStatus.NOT_DONE

    @field_validator("shopName", "phone")
    @classmethod
    def _require_text(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be empty")
        return value.strip()

    def to_domain(self, customer_id: str) -> Customer:
        return Customer(
            id=customer_id,
            shop_name=self.shopName,
            manager_name=self.managerName,
            phone=self.phone,
            main_region=self.mainRegion,
            sub_region=self.subRegion,
            whatsapp_link=self.whatsappLink,
            map_link=self.mapLink,
            visit_status=self.visitStatus,
        )


class CustomerListResponse(BaseModel):
    items: List[CustomerModel]
    total: int


class CustomerImportResponse(BaseModel):
    fileName: str
    imported: int
