from __future__ import annotations

from concurrent.futures import Executor, Future
from pathlib import Path
from typing import Any

import pytest

from visit_crm.models.domain import Customer, VisitStatus
from visit_crm.persistence.local_store import LocalStore
from visit_crm.services.data_service import DataService


class InlineExecutor(Executor):
    """Runs submitted work immediately so mirror effects are visible to assertions."""

    def submit(self, fn, /, *args, **kwargs):
        future: Future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:
            future.set_exception(exc)
        return future


class FakeRemoteStore:
    """In-memory stand-in for the Supabase tables."""

    def __init__(self, customers: list[dict] | None = None, regions: list[dict] | None = None) -> None:
        self.customers: dict[str, dict[str, Any]] = {row["id"]: dict(row) for row in customers or []}
        self.regions: dict[str, dict[str, Any]] = {row["id"]: dict(row) for row in regions or []}
        self.calls: list[tuple[str, Any]] = []
        self.fail = False

    def _record(self, name: str, payload: Any = None) -> None:
        self.calls.append((name, payload))
        if self.fail:
            raise ConnectionError("supabase unreachable")

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def fetch_customers(self) -> list[dict]:
        self._record("fetch_customers")
        return [dict(row) for row in self.customers.values()]

    def upsert_customers(self, rows: list[dict]) -> None:
        self._record("upsert_customers", rows)
        for row in rows:
            self.customers[row["id"]] = {**self.customers.get(row["id"], {}), **row}

    def delete_customer(self, customer_id: str) -> None:
        self._record("delete_customer", customer_id)
        self.customers.pop(customer_id, None)

    def update_all_customers(self, values: dict) -> None:
        self._record("update_all_customers", values)
        for row in self.customers.values():
            row.update(values)

    def fetch_regions(self) -> list[dict]:
        self._record("fetch_regions")
        return sorted((dict(row) for row in self.regions.values()), key=lambda row: row["name"])

    def upsert_region(self, row: dict) -> None:
        self._record("upsert_region", row)
        self.regions[row["id"]] = dict(row)

    def delete_region(self, region_id: str) -> None:
        self._record("delete_region", region_id)
        self.regions.pop(region_id, None)

    def ping(self) -> bool:
        self._record("ping")
        return True


def make_customer(cid: str, shop: str = "", region: str = "دهوك", status: VisitStatus = VisitStatus.NOT_DONE) -> Customer:
    return Customer(
        id=cid,
        shop_name=shop or f"Shop {cid}",
        manager_name=f"Manager {cid}",
        phone="0750 123 4567",
        main_region=region,
        sub_region="مالطا",
        whatsapp_link="https://wa.me/07501234567",
        map_link=f"https://maps.example.com/{cid}",
        visit_status=status,
    )


@pytest.fixture
def local_store(tmp_path: Path) -> LocalStore:
    return LocalStore(path=tmp_path / "crm.sqlite3")


@pytest.fixture
def fake_remote() -> FakeRemoteStore:
    return FakeRemoteStore()


@pytest.fixture
def data_service(local_store: LocalStore, fake_remote: FakeRemoteStore) -> DataService:
    return DataService(local=local_store, remote=fake_remote, executor=InlineExecutor())


@pytest.fixture
def offline_service(local_store: LocalStore) -> DataService:
    return DataService(local=local_store, remote=None)
