from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, Dict, List, Optional

import requests
from loguru import logger

from ..core.exceptions import StoreError
from .connection import StoreConnection

RETURN_REPRESENTATION = "return=representation"
MERGE_DUPLICATES = "resolution=merge-duplicates,return=representation"


def execute(
    conn: StoreConnection,
    method: str,
    table: str,
    *,
    params: Optional[Dict[str, str]] = None,
    payload: Any = None,
    prefer: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Run one REST call and return the JSON rows it produced.

    Every failure is raised as StoreError, including a 2xx response whose
    body is not JSON.
    """
    try:
        response = conn.request(method, table, params=params, payload=payload, prefer=prefer)
    except requests.RequestException as e:
        logger.error(f"{method} {table} failed: {e}")
        raise StoreError(f"{method} {table} failed", details=str(e)) from e

    if response.status_code >= 400:
        logger.error(f"{method} {table} returned HTTP {response.status_code}: {response.text}")
        raise StoreError(
            f"{method} {table} returned HTTP {response.status_code}",
            status_code=response.status_code,
            details=response.text,
        )

    if not response.content:
        return []
    try:
        data = response.json()
    except ValueError as e:
        logger.error(f"{method} {table} returned a non-JSON body: {response.text[:200]}")
        raise StoreError(
            f"{method} {table} returned a non-JSON body",
            status_code=response.status_code,
            details=response.text,
        ) from e
    if isinstance(data, list):
        return data
    return [data]


def fetchone(rows: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    return rows[0] if rows else None


def eq(value: Any) -> str:
    return f"eq.{value}"


def gte(value: Any) -> str:
    return f"gte.{value}"


def normalize_store_date(value: Any) -> date:
    """Dates arrive as ISO strings; timestamps are cut to their date part."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return datetime.strptime(value.strip()[:10], "%Y-%m-%d").date()
    raise TypeError(f"Unsupported store DATE value type: {type(value)!r}")


def normalize_store_time(value: Any) -> Optional[str]:
    """Normalize TIME values to ``HH:MM``.

    The store can return TIME as:
    - string with seconds (e.g. '08:30:00')
    - string without seconds ('08:30')
    - datetime.time from a test double
    """

    if value is None or value == "":
        return None

    if isinstance(value, time):
        return value.strftime("%H:%M")

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        return f"{int(parts[0]):02d}:{int(parts[1]):02d}"

    raise TypeError(f"Unsupported store TIME value type: {type(value)!r}")
