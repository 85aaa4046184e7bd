import logging
import sqlite3
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from pathlib import Path

import pytest

from visit_crm.errors import LocalStorageError
from visit_crm.models.domain import Region, VisitStatus
from visit_crm.persistence.local_store import LocalStore
from visit_crm.services.data_service import DataService, customer_to_row, row_to_customer

from conftest import FakeRemoteStore, InlineExecutor, make_customer


def _remote_row(cid: str, status: str = VisitStatus.DONE.value) -> dict:
    return {
        "id": cid,
        "shop_name": f"Shop {cid}",
        "manager_name": None,
        "phone": "0750",
        "main_region": "دهوك",
        "sub_region": "مالطا",
        "whatsapp_link": "",
        "map_link": "",
        "visit_status": status,
        "created_at": "2026-10-01T09:00:00+00:00",
    }


def test_list_seeds_empty_local_store_from_remote(local_store: LocalStore) -> None:
    remote = FakeRemoteStore(customers=[_remote_row("C1"), _remote_row("C2"), _remote_row("C3")])
    service = DataService(local=local_store, remote=remote, executor=InlineExecutor())

    customers = service.list_customers()

    assert [customer.id for customer in customers] == ["C1", "C2", "C3"]
    assert local_store.list_customers() == customers
    assert customers[0].manager_name == ""
    assert customers[0].visit_status is VisitStatus.DONE


def test_list_never_consults_remote_once_local_has_data(local_store: LocalStore) -> None:
    local_store.put_customer(make_customer("LOCAL"))
    remote = FakeRemoteStore(customers=[_remote_row("C1")])
    service = DataService(local=local_store, remote=remote, executor=InlineExecutor())

    customers = service.list_customers()

    assert [customer.id for customer in customers] == ["LOCAL"]
    assert "fetch_customers" not in remote.call_names()


def test_remote_fetch_failure_falls_back_to_empty_local(local_store: LocalStore, caplog) -> None:
    remote = FakeRemoteStore(customers=[_remote_row("C1")])
    remote.fail = True
    service = DataService(local=local_store, remote=remote, executor=InlineExecutor())

    with caplog.at_level(logging.WARNING):
        customers = service.list_customers()

    assert customers == []
    assert "Supabase customer fetch failed" in caplog.text


def test_save_writes_locally_and_mirrors_snake_case_row(data_service: DataService, fake_remote: FakeRemoteStore) -> None:
    customer = make_customer("C1")

    data_service.save_customer(customer)

    assert data_service.list_customers() == [customer]
    name, rows = fake_remote.calls[-1]
    assert name == "upsert_customers"
    assert rows == [customer_to_row(customer)]
    assert "created_at" not in rows[0]
    assert rows[0]["shop_name"] == customer.shop_name


def test_remote_failure_is_logged_not_raised(data_service: DataService, fake_remote: FakeRemoteStore, caplog) -> None:
    fake_remote.fail = True

    with caplog.at_level(logging.WARNING):
        data_service.save_customer(make_customer("C1"))
        data_service.delete_customer("C1")

    assert data_service.list_customers() == []
    assert "Supabase customer sync failed" in caplog.text
    assert "Supabase customer delete failed" in caplog.text


def test_local_failure_propagates_and_skips_mirror(
    data_service: DataService, fake_remote: FakeRemoteStore, monkeypatch: pytest.MonkeyPatch
) -> None:
    def broken_put(customer):
        raise LocalStorageError("save customer", sqlite3.OperationalError("disk I/O error"))

    monkeypatch.setattr(data_service.local, "put_customer", broken_put)

    with pytest.raises(LocalStorageError):
        data_service.save_customer(make_customer("C1"))
    assert fake_remote.calls == []


def test_delete_removes_id_from_both_stores(data_service: DataService, fake_remote: FakeRemoteStore) -> None:
    data_service.save_customer(make_customer("C1"))
    data_service.save_customer(make_customer("C2"))

    data_service.delete_customer("C1")

    assert [customer.id for customer in data_service.list_customers()] == ["C2"]
    assert ("delete_customer", "C1") in fake_remote.calls
    assert set(fake_remote.customers) == {"C2"}


def test_bulk_import_is_one_local_batch_and_one_remote_request(
    data_service: DataService, fake_remote: FakeRemoteStore
) -> None:
    batch = [make_customer(f"C{i}") for i in range(5)]

    imported = data_service.bulk_import_customers(batch)

    assert imported == 5
    assert data_service.list_customers() == batch
    assert fake_remote.call_names() == ["upsert_customers"]
    assert len(fake_remote.calls[0][1]) == 5


def test_reset_visit_statuses_updates_every_customer(data_service: DataService, fake_remote: FakeRemoteStore) -> None:
    batch = [
        make_customer("C1", status=VisitStatus.DONE),
        make_customer("C2", status=VisitStatus.POSTPONED),
    ]
    data_service.bulk_import_customers(batch)

    data_service.reset_visit_statuses()

    assert data_service.list_customers() == [replace(c, visit_status=VisitStatus.NOT_DONE) for c in batch]
    assert fake_remote.calls[-1] == ("update_all_customers", {"visit_status": VisitStatus.NOT_DONE.value})
    assert all(row["visit_status"] == VisitStatus.NOT_DONE.value for row in fake_remote.customers.values())


def test_every_mutation_succeeds_without_remote(offline_service: DataService) -> None:
    offline_service.save_customer(make_customer("C1", status=VisitStatus.DONE))
    offline_service.bulk_import_customers([make_customer("C2"), make_customer("C3")])
    offline_service.delete_customer("C3")
    offline_service.reset_visit_statuses()
    offline_service.save_region(Region(id="r-1", name="زاخو", subregions=[]))
    offline_service.delete_region("1")

    assert [c.id for c in offline_service.list_customers()] == ["C1", "C2"]
    assert all(c.visit_status is VisitStatus.NOT_DONE for c in offline_service.list_customers())
    assert "r-1" in [r.id for r in offline_service.list_regions()]
    assert offline_service.remote_enabled is False


def test_regions_seed_from_remote_when_local_empty(tmp_path: Path) -> None:
    local = LocalStore(path=tmp_path / "crm.sqlite3", seed=None)
    remote = FakeRemoteStore(
        regions=[
            {"id": "b", "name": "دوميز", "subregions": ["مجمع دوميز 1"]},
            {"id": "a", "name": "دهوك", "subregions": None},
        ]
    )
    service = DataService(local=local, remote=remote, executor=InlineExecutor())

    regions = service.list_regions()

    assert [region.name for region in regions] == ["دهوك", "دوميز"]
    assert regions[0].subregions == []
    assert local.list_regions() == regions


def test_save_region_mirrors_whole_region(data_service: DataService, fake_remote: FakeRemoteStore) -> None:
    data_service.save_region(Region(id="r-1", name="زاخو", subregions=["سنتر"]))

    assert fake_remote.calls[-1] == ("upsert_region", {"id": "r-1", "name": "زاخو", "subregions": ["سنتر"]})


def test_row_to_customer_tolerates_unknown_status() -> None:
    customer = row_to_customer(_remote_row("C1", status="archived"))

    assert customer.visit_status is VisitStatus.NOT_DONE


def test_mirror_runs_on_background_executor(local_store: LocalStore) -> None:
    remote = FakeRemoteStore()
    executor = ThreadPoolExecutor(max_workers=2)
    service = DataService(local=local_store, remote=remote, executor=executor)

    service.save_customer(make_customer("C1"))
    executor.shutdown(wait=True)

    assert "C1" in remote.customers


def test_mirror_after_executor_shutdown_is_logged(local_store: LocalStore, caplog) -> None:
    executor = ThreadPoolExecutor(max_workers=1)
    executor.shutdown(wait=True)
    service = DataService(local=local_store, remote=FakeRemoteStore(), executor=executor)

    with caplog.at_level(logging.WARNING):
        service.save_customer(make_customer("C1"))

    assert local_store.get_customer("C1") is not None
    assert "Supabase customer sync failed" in caplog.text


def test_shutdown_releases_owned_executor(local_store: LocalStore) -> None:
    remote = FakeRemoteStore()
    service = DataService(local=local_store, remote=remote)

    service.save_customer(make_customer("C1"))
    service.shutdown()
    service.shutdown()

    assert service._executor is None
    assert local_store.get_customer("C1") is not None


def test_concurrent_first_mirrors_share_one_executor(local_store: LocalStore) -> None:
    service = DataService(local=local_store, remote=FakeRemoteStore())
    barrier = threading.Barrier(8)
    seen: list = []

    def first_use() -> None:
        barrier.wait()
        seen.append(service._get_executor())

    threads = [threading.Thread(target=first_use) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len({id(executor) for executor in seen}) == 1
    service.shutdown()
