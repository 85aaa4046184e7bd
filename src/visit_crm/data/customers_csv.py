"""Parse uploaded customer CSV files.

The format is positional and unquoted: every line is split on a bare comma, so a
comma inside a field shifts the remaining columns. Exported files stay readable
because their wrapping quotes are stripped again here.
"""

from __future__ import annotations

import logging

from ..models.domain import Customer, VisitStatus
from ..services.customers.records import new_customer_id

logger = logging.getLogger(__name__)

BOM = "\ufeff"

# Columns: main_region, sub_region, shop_name, manager_name, phone, whatsapp_link, map_link, status_text
MIN_COLUMNS = 3

HEADER_TOKENS = ("manager_name", "اسم المحل")
DONE_MARKER = "تمت"
POSTPONED_MARKER = "مؤجل"
UNKNOWN_SHOP_NAME = "Unknown"


def classify_status(text: str) -> VisitStatus:
    if DONE_MARKER in text:
        return VisitStatus.DONE
    if POSTPONED_MARKER in text:
        return VisitStatus.POSTPONED
    return VisitStatus.NOT_DONE


def _clean(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        value = value[1:-1].strip()
    return value


def _column(columns: list[str], index: int) -> str:
    return _clean(columns[index]) if index < len(columns) else ""


def parse_customers_csv(text: str) -> list[Customer]:
    """Turn CSV text into new customer records, each with a fresh id.

    Lines with fewer than three columns are dropped. The first line is skipped
    only when it looks like a header.
    """
    if text.startswith(BOM):
        text = text[len(BOM):]

    lines = text.split("\n")
    start_index = 1 if lines and any(token in lines[0] for token in HEADER_TOKENS) else 0

    customers: list[Customer] = []
    dropped = 0
    for raw_line in lines[start_index:]:
        line = raw_line.strip()
        if not line:
            continue

        columns = line.split(",")
        if len(columns) < MIN_COLUMNS:
            dropped += 1
            continue

        customers.append(
            Customer(
                id=new_customer_id(),
                main_region=_column(columns, 0),
                sub_region=_column(columns, 1),
                shop_name=_column(columns, 2) or UNKNOWN_SHOP_NAME,
                manager_name=_column(columns, 3),
                phone=_column(columns, 4),
                whatsapp_link=_column(columns, 5),
                map_link=_column(columns, 6),
                visit_status=classify_status(_column(columns, 7)),
            )
        )

    if dropped:
        logger.info(f"Dropped {dropped} CSV line(s) with fewer than {MIN_COLUMNS} columns")
    return customers
