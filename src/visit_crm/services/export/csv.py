"""CSV export of the filtered customer view."""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ...models.domain import Customer, VisitStatus

BOM = "\ufeff"

EXPORT_HEADERS = (
    "المنطقة",
    "المنطقة الفرعية",
    "اسم المحل",
    "المدير",
    "الهاتف",
    "رابط الواتساب",
    "رابط الخريطة",
    "الحالة",
)

EXPORT_FILENAME_PREFIX = "customers_export"


def _quote(value: object) -> str:
    # Embedded quotes are written as-is.
    return f'"{value or ""}"'


def _row(customer: Customer) -> str:
    status = VisitStatus(customer.visit_status).value if customer.visit_status else ""
    return ",".join(
        _quote(value)
        for value in (
            customer.main_region,
            customer.sub_region,
            customer.shop_name,
            customer.manager_name,
            customer.phone,
            customer.whatsapp_link,
            customer.map_link,
            status,
        )
    )


def export_customers_csv(customers: Iterable[Customer]) -> str:
    """Serialize customers with a BOM and header line.

    Raises:
        ValueError: if there is nothing to export.
    """
    rows = [_row(customer) for customer in customers]
    if not rows:
        raise ValueError("No customers to export.")
    return BOM + "\n".join([",".join(EXPORT_HEADERS), *rows])


def export_filename(today: Optional[date] = None) -> str:
    return f"{EXPORT_FILENAME_PREFIX}_{(today or date.today()).isoformat()}.csv"
