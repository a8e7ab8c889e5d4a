# app/database.py
from typing import Any, Iterable, Protocol

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from app.core.exceptions import StoreError
from app.core.supabase_client import supabase_admin

Row = dict[str, Any]


class DataStore(Protocol):
    """
    Generic CRUD contract over the remote relational store.

    - `filters` are equality matches: {"user_id": "...", "product_id": "..."}
    - `joins` are embedded-resource expressions appended to the select list,
      e.g. "marketplace_products(id, name, price, farms(name))"
    - every failure is raised as StoreError
    """

    def select(
        self,
        table: str,
        *,
        filters: dict[str, Any] | None = None,
        joins: Iterable[str] = (),
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[Row]: ...

    def insert(self, table: str, rows: Row | list[Row]) -> list[Row]: ...

    def update(self, table: str, patch: Row, *, filters: dict[str, Any]) -> list[Row]: ...

    def delete(self, table: str, *, filters: dict[str, Any]) -> list[Row]: ...


class SupabaseStore:
    """
    DataStore backed by the Supabase PostgREST API.

    Only this class knows about the supabase/postgrest query builder;
    repositories talk to the DataStore contract.
    """

    def __init__(self, client: Client):
        self.client = client

    def _execute(self, operation: str, table: str, query) -> list[Row]:
        try:
            response = query.execute()
        except APIError as e:
            raise StoreError(operation, table, e.message or str(e)) from e
        except httpx.HTTPError as e:
            raise StoreError(operation, table, str(e)) from e
        return list(response.data or [])

    @staticmethod
    def _apply_filters(query, filters: dict[str, Any] | None):
        for column, value in (filters or {}).items():
            if isinstance(value, bool):
                value = "true" if value else "false"
            query = query.eq(column, str(value))
        return query

    def select(
        self,
        table: str,
        *,
        filters: dict[str, Any] | None = None,
        joins: Iterable[str] = (),
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[Row]:
        columns = ", ".join(["*", *joins])
        query = self._apply_filters(self.client.table(table).select(columns), filters)
        if order_by:
            query = query.order(order_by, desc=descending)
        return self._execute("select", table, query)

    def insert(self, table: str, rows: Row | list[Row]) -> list[Row]:
        return self._execute("insert", table, self.client.table(table).insert(rows))

    def update(self, table: str, patch: Row, *, filters: dict[str, Any]) -> list[Row]:
        query = self._apply_filters(self.client.table(table).update(patch), filters)
        return self._execute("update", table, query)

    def delete(self, table: str, *, filters: dict[str, Any]) -> list[Row]:
        query = self._apply_filters(self.client.table(table).delete(), filters)
        return self._execute("delete", table, query)


def get_store() -> DataStore:
    """
    FastAPI dependency that returns the DataStore.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(store: DataStore = Depends(get_store)):
            ...

    Tests override this dependency with an in-memory store.
    """
    return SupabaseStore(supabase_admin())
