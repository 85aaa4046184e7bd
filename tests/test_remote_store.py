from unittest.mock import MagicMock

import pytest

from visit_crm.config import settings
from visit_crm.db import supabase as supabase_module
from visit_crm.persistence import remote_store
from visit_crm.persistence.remote_store import RemoteStore


def test_fetch_customers_orders_newest_first() -> None:
    client = MagicMock()
    query = client.table.return_value.select.return_value.order.return_value
    query.execute.return_value.data = [{"id": "C1"}]

    rows = RemoteStore(client).fetch_customers()

    assert rows == [{"id": "C1"}]
    client.table.assert_called_with("customers")
    client.table.return_value.select.assert_called_once_with("*")
    client.table.return_value.select.return_value.order.assert_called_once_with("created_at", desc=True)


def test_fetch_regions_orders_by_name_and_handles_no_data() -> None:
    client = MagicMock()
    client.table.return_value.select.return_value.order.return_value.execute.return_value.data = None

    assert RemoteStore(client).fetch_regions() == []
    client.table.assert_called_with("regions")
    client.table.return_value.select.return_value.order.assert_called_once_with("name")


def test_update_all_customers_matches_every_row() -> None:
    client = MagicMock()

    RemoteStore(client).update_all_customers({"visit_status": "لم تتم"})

    update = client.table.return_value.update
    update.assert_called_once_with({"visit_status": "لم تتم"})
    update.return_value.neq.assert_called_once_with("id", "00000000-0000-0000-0000-000000000000")
    update.return_value.neq.return_value.execute.assert_called_once()


def test_upsert_customers_skips_empty_batch() -> None:
    client = MagicMock()

    RemoteStore(client).upsert_customers([])

    client.table.assert_not_called()


def test_delete_region_filters_on_string_id() -> None:
    client = MagicMock()

    RemoteStore(client).delete_region("7")

    client.table.return_value.delete.return_value.eq.assert_called_once_with("id", "7")


def test_remote_errors_propagate_to_caller() -> None:
    client = MagicMock()
    client.table.return_value.upsert.return_value.execute.side_effect = ConnectionError("offline")

    with pytest.raises(ConnectionError):
        RemoteStore(client).upsert_region({"id": "1", "name": "دهوك", "subregions": []})


def test_build_remote_store_returns_none_without_client(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(remote_store, "get_supabase_client", lambda: None)

    assert remote_store.build_remote_store() is None


def test_supabase_client_disabled_when_credentials_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "supabase_url", "https://example.supabase.co")
    monkeypatch.setattr(settings, "supabase_key", None)
    supabase_module.get_supabase_client.cache_clear()
    try:
        assert supabase_module.get_supabase_client() is None
    finally:
        supabase_module.get_supabase_client.cache_clear()
