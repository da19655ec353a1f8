"""Thin client for the hosted table store (PostgREST-style REST interface).

Every call is a single request/response. Nothing here knows about workouts;
callers pass table names and plain row dicts.
"""
from __future__ import annotations

import logging
from typing import Any, Iterator, Mapping, Optional

import httpx

from .settings import get_settings

log = logging.getLogger("uvicorn")


class StoreError(Exception):
    """Non-success answer (or no answer) from the table store."""

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class RecordStore:
    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._client = httpx.Client(
            base_url=f"{base_url.rstrip('/')}/rest/v1",
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings, *, transport: Optional[httpx.BaseTransport] = None) -> "RecordStore":
        return cls(
            settings.SUPABASE_URL,
            settings.store_key,
            timeout=settings.STORE_TIMEOUT_SECONDS,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    # READS
    def query(self, table: str, filters: Mapping[str, Any]) -> list[dict[str, Any]]:
        params = {field: f"eq.{value}" for field, value in filters.items()}
        resp = self._send("GET", table, params=params)
        return resp.json()

    # WRITES
    def insert(self, table: str, row: Mapping[str, Any]) -> dict[str, Any]:
        resp = self._send(
            "POST", table, json=dict(row), headers={"Prefer": "return=representation"}
        )
        # any 2xx means the row landed, even without a usable representation
        try:
            body = resp.json() if resp.content else []
        except ValueError:
            body = []
        if isinstance(body, list):
            return body[0] if body else dict(row)
        return body

    def update(self, table: str, row_id: str, fields: Mapping[str, Any]) -> dict[str, Any]:
        resp = self._send(
            "PATCH",
            table,
            params={"id": f"eq.{row_id}"},
            json=dict(fields),
            headers={"Prefer": "return=representation"},
        )
        return _first_row(resp)

    def delete(self, table: str, row_id: str) -> None:
        self._send("DELETE", table, params={"id": f"eq.{row_id}"})

    def _send(self, method: str, table: str, **kwargs) -> httpx.Response:
        try:
            resp = self._client.request(method, f"/{table}", **kwargs)
        except httpx.RequestError as e:
            log.debug("store %s %s failed: %s", method, table, e)
            raise StoreError(str(e)) from e
        if resp.status_code >= 400:
            log.debug("store %s %s -> %s", method, table, resp.status_code)
            raise StoreError(resp.text, status_code=resp.status_code)
        return resp


def _first_row(resp: httpx.Response) -> dict[str, Any]:
    body = resp.json() if resp.content else []
    if isinstance(body, list):
        if not body:
            raise StoreError("store returned no representation", status_code=resp.status_code)
        return body[0]
    return body


# Dependency for FastAPI routes
def get_store() -> Iterator[RecordStore]:
    store = RecordStore.from_settings(get_settings())
    try:
        yield store
    finally:
        store.close()
