"""SQLite-backed local store, the authoritative copy of customers and regions."""

from __future__ import annotations

import json
import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterable, Iterator

from ..config import settings
from ..data.regions_seed import starter_regions
from ..errors import LocalStorageError
from ..models.domain import Customer, Region, VisitStatus

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

_SCHEMA = """
CREATE TABLE IF NOT EXISTS customers (
    id TEXT PRIMARY KEY,
    shop_name TEXT NOT NULL,
    manager_name TEXT NOT NULL DEFAULT '',
    phone TEXT NOT NULL DEFAULT '',
    main_region TEXT NOT NULL DEFAULT '',
    sub_region TEXT NOT NULL DEFAULT '',
    whatsapp_link TEXT NOT NULL DEFAULT '',
    map_link TEXT NOT NULL DEFAULT '',
    visit_status TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_customers_shop_name ON customers (shop_name);
CREATE INDEX IF NOT EXISTS idx_customers_manager_name ON customers (manager_name);
CREATE INDEX IF NOT EXISTS idx_customers_phone ON customers (phone);
CREATE INDEX IF NOT EXISTS idx_customers_main_region ON customers (main_region);
CREATE INDEX IF NOT EXISTS idx_customers_visit_status ON customers (visit_status);

CREATE TABLE IF NOT EXISTS regions (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    subregions TEXT NOT NULL DEFAULT '[]'
);
CREATE INDEX IF NOT EXISTS idx_regions_name ON regions (name);
"""

_CUSTOMER_COLUMNS = (
    "id",
    "shop_name",
    "manager_name",
    "phone",
    "main_region",
    "sub_region",
    "whatsapp_link",
    "map_link",
    "visit_status",
)

_UPSERT_CUSTOMER = (
    f"INSERT INTO customers ({', '.join(_CUSTOMER_COLUMNS)}) "
    f"VALUES ({', '.join(':' + column for column in _CUSTOMER_COLUMNS)}) "
    "ON CONFLICT(id) DO UPDATE SET "
    + ", ".join(f"{column} = excluded.{column}" for column in _CUSTOMER_COLUMNS[1:])
)

_UPSERT_REGION = (
    "INSERT INTO regions (id, name, subregions) VALUES (:id, :name, :subregions) "
    "ON CONFLICT(id) DO UPDATE SET name = excluded.name, subregions = excluded.subregions"
)


def _customer_params(customer: Customer) -> dict[str, str]:
    return {
        "id": customer.id,
        "shop_name": customer.shop_name,
        "manager_name": customer.manager_name,
        "phone": customer.phone,
        "main_region": customer.main_region,
        "sub_region": customer.sub_region,
        "whatsapp_link": customer.whatsapp_link,
        "map_link": customer.map_link,
        "visit_status": VisitStatus(customer.visit_status).value,
    }


def _region_params(region: Region) -> dict[str, str]:
    return {
        "id": str(region.id),
        "name": region.name,
        "subregions": json.dumps(list(region.subregions), ensure_ascii=False),
    }


def _customer_from_row(row: sqlite3.Row) -> Customer:
    return Customer(
        id=row["id"],
        shop_name=row["shop_name"],
        manager_name=row["manager_name"],
        phone=row["phone"],
        main_region=row["main_region"],
        sub_region=row["sub_region"],
        whatsapp_link=row["whatsapp_link"],
        map_link=row["map_link"],
        visit_status=VisitStatus(row["visit_status"]),
    )


def _region_from_row(row: sqlite3.Row) -> Region:
    return Region(id=row["id"], name=row["name"], subregions=list(json.loads(row["subregions"] or "[]")))


class LocalStore:
    """Versioned SQLite database holding the customers and regions tables.

    Every operation opens its own connection and runs in a single transaction,
    so one call is atomic while separate calls are not. Rows come back in
    first-insertion order; updating a record keeps its position.
    """

    def __init__(
        self,
        path: Path | None = None,
        seed: Callable[[], list[Region]] | None = starter_regions,
    ) -> None:
        self.path = Path(path or settings.local_db_file)
        self._seed = seed
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise LocalStorageError("initialize", exc) from exc
        self._initialize()

    @contextmanager
    def _connect(self, operation: str) -> Iterator[sqlite3.Connection]:
        try:
            connection = sqlite3.connect(self.path)
        except sqlite3.Error as exc:
            raise LocalStorageError(operation, exc) from exc
        connection.row_factory = sqlite3.Row
        try:
            with connection:
                yield connection
        except sqlite3.Error as exc:
            raise LocalStorageError(operation, exc) from exc
        finally:
            connection.close()

    def _initialize(self) -> None:
        with self._connect("initialize") as conn:
            version = conn.execute("PRAGMA user_version").fetchone()[0]
            if version == SCHEMA_VERSION:
                return
            if version != 0:
                raise LocalStorageError(
                    "initialize",
                    ValueError(f"unsupported schema version {version} (expected {SCHEMA_VERSION})"),
                )

            conn.executescript(_SCHEMA)

            # the version is written in the seed transaction, so a failed seed is retried on next open
            region_count = conn.execute("SELECT COUNT(*) FROM regions").fetchone()[0]
            seeded = 0
            if region_count == 0 and self._seed is not None:
                regions = self._seed()
                conn.executemany(_UPSERT_REGION, [_region_params(region) for region in regions])
                seeded = len(regions)
            conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")

        if seeded:
            logger.info(f"Seeded local store with {seeded} starter regions")

    # -------------------------
    # Customers
    # -------------------------
    def list_customers(self) -> list[Customer]:
        with self._connect("list customers") as conn:
            rows = conn.execute("SELECT * FROM customers ORDER BY rowid").fetchall()
        return [_customer_from_row(row) for row in rows]

    def get_customer(self, customer_id: str) -> Customer | None:
        with self._connect("get customer") as conn:
            row = conn.execute("SELECT * FROM customers WHERE id = ?", (customer_id,)).fetchone()
        return _customer_from_row(row) if row else None

    def put_customer(self, customer: Customer) -> None:
        with self._connect("save customer") as conn:
            conn.execute(_UPSERT_CUSTOMER, _customer_params(customer))

    def bulk_put_customers(self, customers: Iterable[Customer]) -> int:
        params = [_customer_params(customer) for customer in customers]
        with self._connect("bulk save customers") as conn:
            conn.executemany(_UPSERT_CUSTOMER, params)
        return len(params)

    def delete_customer(self, customer_id: str) -> None:
        with self._connect("delete customer") as conn:
            conn.execute("DELETE FROM customers WHERE id = ?", (customer_id,))

    def set_all_visit_statuses(self, status: VisitStatus) -> int:
        with self._connect("reset visit statuses") as conn:
            cursor = conn.execute("UPDATE customers SET visit_status = ?", (VisitStatus(status).value,))
        return cursor.rowcount

    # -------------------------
    # Regions
    # -------------------------
    def list_regions(self) -> list[Region]:
        with self._connect("list regions") as conn:
            rows = conn.execute("SELECT * FROM regions ORDER BY rowid").fetchall()
        return [_region_from_row(row) for row in rows]

    def get_region(self, region_id: str) -> Region | None:
        with self._connect("get region") as conn:
            row = conn.execute("SELECT * FROM regions WHERE id = ?", (str(region_id),)).fetchone()
        return _region_from_row(row) if row else None

    def put_region(self, region: Region) -> None:
        with self._connect("save region") as conn:
            conn.execute(_UPSERT_REGION, _region_params(region))

    def bulk_put_regions(self, regions: Iterable[Region]) -> int:
        params = [_region_params(region) for region in regions]
        with self._connect("bulk save regions") as conn:
            conn.executemany(_UPSERT_REGION, params)
        return len(params)

    def delete_region(self, region_id: str) -> None:
        with self._connect("delete region") as conn:
            conn.execute("DELETE FROM regions WHERE id = ?", (str(region_id),))
