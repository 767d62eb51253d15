from __future__ import annotations

from typing import Any, Dict, Sequence

from ..store.connection import StoreConnection
from ..store.rest_base import execute
from .model import Contractor
from .repository import ContractorRepository

TABLE = "companies"


def contractor_from_row(row: Dict[str, Any]) -> Contractor:
    return Contractor(id=str(row["id"]), name=row["name"])


class RestContractorRepository(ContractorRepository):
    def __init__(self, conn: StoreConnection):
        self._conn = conn

    def list_all(self) -> Sequence[Contractor]:
        rows = execute(self._conn, "GET", TABLE, params={"select": "*", "order": "name.asc"})
        return [contractor_from_row(r) for r in rows]
