"""Helpers for building and filtering customer records."""

from __future__ import annotations

import re
import uuid
from typing import Iterable, Optional

from ...models.domain import Customer, VisitStatus

WHATSAPP_BASE_URL = "https://wa.me/"

_NON_DIGITS = re.compile(r"\D")


def new_customer_id() -> str:
    return str(uuid.uuid4())


def new_customer(
    shop_name: str,
    phone: str,
    *,
    manager_name: str = "",
    main_region: str = "",
    sub_region: str = "",
    whatsapp_link: str = "",
    map_link: str = "",
    visit_status: VisitStatus = VisitStatus.NOT_DONE,
) -> Customer:
    """Create a customer with a freshly generated id."""
    return Customer(
        id=new_customer_id(),
        shop_name=shop_name,
        phone=phone,
        manager_name=manager_name,
        main_region=main_region,
        sub_region=sub_region,
        whatsapp_link=whatsapp_link,
        map_link=map_link,
        visit_status=visit_status,
    )


def whatsapp_link_for(phone: str, current: str = "") -> str:
    """Derive a wa.me link from the phone digits unless a custom link is set."""
    if current and "wa.me" not in current:
        return current
    return f"{WHATSAPP_BASE_URL}{_NON_DIGITS.sub('', phone or '')}"


def filter_customers(
    customers: Iterable[Customer],
    region: Optional[str] = None,
    sub_region: Optional[str] = None,
    status: Optional[VisitStatus] = None,
    query: Optional[str] = None,
) -> list[Customer]:
    """Apply the list-view filters. Empty filters match every customer."""
    results: list[Customer] = []
    for customer in customers:
        if region and customer.main_region != region:
            continue
        if sub_region and customer.sub_region != sub_region:
            continue
        if status and customer.visit_status != status:
            continue
        if query and not (
            query in customer.shop_name or query in customer.manager_name or query in customer.phone
        ):
            continue
        results.append(customer)
    return results
