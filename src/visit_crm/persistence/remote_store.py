"""Supabase table access for the remote mirror."""

from __future__ import annotations

from typing import Any

from supabase import Client

from ..db.supabase import get_supabase_client

CUSTOMERS_TABLE = "customers"
REGIONS_TABLE = "regions"

# PostgREST refuses unfiltered updates; no row ever carries this id.
_MATCH_ALL_SENTINEL_ID = "00000000-0000-0000-0000-000000000000"


class RemoteStore:
    """Thin wrapper over the Supabase ``customers`` and ``regions`` tables.

    Works with raw snake_case rows. Every method raises whatever the Supabase
    client raises; callers decide whether a failure matters.
    """

    def __init__(self, client: Client) -> None:
        self.client = client

    def fetch_customers(self) -> list[dict[str, Any]]:
        response = (
            self.client.table(CUSTOMERS_TABLE)
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return list(response.data or [])

    def upsert_customers(self, rows: list[dict[str, Any]]) -> None:
        if not rows:
            return
        self.client.table(CUSTOMERS_TABLE).upsert(rows).execute()

    def delete_customer(self, customer_id: str) -> None:
        self.client.table(CUSTOMERS_TABLE).delete().eq("id", customer_id).execute()

    def update_all_customers(self, values: dict[str, Any]) -> None:
        (
            self.client.table(CUSTOMERS_TABLE)
            .update(values)
            .neq("id", _MATCH_ALL_SENTINEL_ID)
            .execute()
        )

    def fetch_regions(self) -> list[dict[str, Any]]:
        response = self.client.table(REGIONS_TABLE).select("*").order("name").execute()
        return list(response.data or [])

    def upsert_region(self, row: dict[str, Any]) -> None:
        self.client.table(REGIONS_TABLE).upsert(row).execute()

    def delete_region(self, region_id: str) -> None:
        self.client.table(REGIONS_TABLE).delete().eq("id", str(region_id)).execute()

    def ping(self) -> bool:
        """Run a one-row query to confirm the customers table is reachable."""
        self.client.table(CUSTOMERS_TABLE).select("id").limit(1).execute()
        return True


def build_remote_store() -> RemoteStore | None:
    """Return a RemoteStore when Supabase credentials are configured, otherwise None."""
    client = get_supabase_client()
    if client is None:
        return None
    return RemoteStore(client)
