"""Sync layer mediating reads and writes between the local store and Supabase.

Local writes are applied before a call returns and their failures propagate as
``LocalStorageError``. Each mutation is then mirrored to Supabase on a
background thread; mirror failures are logged as ``RemoteSyncWarning`` and never
reach the caller. Supabase is read only to seed an empty local table.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from functools import partial
from typing import Any, Callable

from ..config import settings
from ..errors import RemoteSyncWarning
from ..models.domain import Customer, Region, VisitStatus
from ..persistence.local_store import LocalStore
from ..persistence.remote_store import RemoteStore

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _coerce_status(value: Any) -> VisitStatus:
    try:
        return VisitStatus(value)
    except ValueError:
        return VisitStatus.NOT_DONE


def customer_to_row(customer: Customer) -> dict[str, Any]:
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


def row_to_customer(row: dict[str, Any]) -> Customer:
    return Customer(
        id=_text(row["id"]),
        shop_name=_text(row.get("shop_name")),
        manager_name=_text(row.get("manager_name")),
        phone=_text(row.get("phone")),
        main_region=_text(row.get("main_region")),
        sub_region=_text(row.get("sub_region")),
        whatsapp_link=_text(row.get("whatsapp_link")),
        map_link=_text(row.get("map_link")),
        visit_status=_coerce_status(row.get("visit_status")),
    )


def region_to_row(region: Region) -> dict[str, Any]:
    return {"id": str(region.id), "name": region.name, "subregions": list(region.subregions)}


def row_to_region(row: dict[str, Any]) -> Region:
    return Region(
        id=_text(row["id"]),
        name=_text(row.get("name")),
        subregions=[_text(item) for item in (row.get("subregions") or [])],
    )


def _log_mirror_result(operation: str, future: Future) -> None:
    exc = future.exception()
    if exc is not None:
        logger.warning(str(RemoteSyncWarning(operation, exc)))


class DataService:
    """Uniform CRUD and bulk contract over the local store and the optional remote mirror."""

    def __init__(
        self,
        local: LocalStore,
        remote: RemoteStore | None = None,
        executor: Executor | None = None,
    ) -> None:
        self.local = local
        self.remote = remote
        self._executor = executor
        self._owns_executor = executor is None
        self._executor_lock = threading.Lock()

    @property
    def remote_enabled(self) -> bool:
        return self.remote is not None

    def _get_executor(self) -> Executor:
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=settings.mirror_max_workers,
                    thread_name_prefix="supabase-mirror",
                )
            return self._executor

    def _mirror(self, operation: str, method: str, *args: Any) -> None:
        """Dispatch ``RemoteStore.<method>(*args)`` without waiting for it."""
        if self.remote is None:
            return
        try:
            future = self._get_executor().submit(getattr(self.remote, method), *args)
        except RuntimeError as exc:
            # executor already shut down
            logger.warning(str(RemoteSyncWarning(operation, exc)))
            return
        future.add_done_callback(partial(_log_mirror_result, operation))

    def _fetch_remote(self, operation: str, fetch: Callable[[], list[dict[str, Any]]]) -> list[dict[str, Any]]:
        try:
            return fetch()
        except Exception as exc:
            logger.warning(str(RemoteSyncWarning(operation, exc)))
            return []

    # -------------------------
    # Customers
    # -------------------------
    def list_customers(self) -> list[Customer]:
        """Return local customers, seeding from Supabase when the local table is empty."""
        customers = self.local.list_customers()
        if customers or self.remote is None:
            return customers

        rows = self._fetch_remote("customer fetch", self.remote.fetch_customers)
        if not rows:
            return customers

        seeded = [row_to_customer(row) for row in rows]
        self.local.bulk_put_customers(seeded)
        logger.info(f"Seeded local store with {len(seeded)} customers from Supabase")
        return seeded

    def get_customer(self, customer_id: str) -> Customer | None:
        return self.local.get_customer(customer_id)

    def save_customer(self, customer: Customer) -> None:
        self.local.put_customer(customer)
        self._mirror("customer sync", "upsert_customers", [customer_to_row(customer)])

    def delete_customer(self, customer_id: str) -> None:
        self.local.delete_customer(customer_id)
        self._mirror("customer delete", "delete_customer", customer_id)

    def bulk_import_customers(self, customers: list[Customer]) -> int:
        count = self.local.bulk_put_customers(customers)
        self._mirror(
            "bulk import",
            "upsert_customers",
            [customer_to_row(customer) for customer in customers],
        )
        return count

    def reset_visit_statuses(self) -> int:
        """Set every customer's visit status back to NOT_DONE."""
        updated = self.local.set_all_visit_statuses(VisitStatus.NOT_DONE)
        self._mirror(
            "visit reset",
            "update_all_customers",
            {"visit_status": VisitStatus.NOT_DONE.value},
        )
        return updated

    # -------------------------
    # Regions
    # -------------------------
    def list_regions(self) -> list[Region]:
        """Return local regions, seeding from Supabase when the local table is empty."""
        regions = self.local.list_regions()
        if regions or self.remote is None:
            return regions

        rows = self._fetch_remote("region fetch", self.remote.fetch_regions)
        if not rows:
            return regions

        seeded = [row_to_region(row) for row in rows]
        self.local.bulk_put_regions(seeded)
        logger.info(f"Seeded local store with {len(seeded)} regions from Supabase")
        return seeded

    def get_region(self, region_id: str) -> Region | None:
        return self.local.get_region(region_id)

    def save_region(self, region: Region) -> None:
        self.local.put_region(region)
        self._mirror("region sync", "upsert_region", region_to_row(region))

    def delete_region(self, region_id: str) -> None:
        self.local.delete_region(region_id)
        self._mirror("region delete", "delete_region", str(region_id))

    def shutdown(self) -> None:
        """Stop accepting mirror work. In-flight mirrors finish on their own."""
        if not self._owns_executor:
            return
        with self._executor_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=False)
