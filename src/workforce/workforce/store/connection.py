from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import requests


@dataclass
class StoreConfig:
    url: str
    anon_key: str
    timeout: float = 10.0


class StoreConnection:
    """Singleton-like gateway to the hosted store's REST endpoint.

    Note: One pooled ``requests.Session`` per process; every call is a single
    short HTTP request authenticated with the anonymous key.
    """

    _instance: Optional["StoreConnection"] = None

    def __init__(self, config: StoreConfig, *, session: Optional[requests.Session] = None):
        self._config = config
        self._session = session or requests.Session()

    @classmethod
    def get_instance(cls, config: StoreConfig) -> "StoreConnection":
        if cls._instance is None:
            cls._instance = StoreConnection(config)
        return cls._instance

    @property
    def config(self) -> StoreConfig:
        return self._config

    def table_url(self, table: str) -> str:
        return f"{self._config.url.rstrip('/')}/rest/v1/{table}"

    def headers(self, *, prefer: Optional[str] = None) -> dict[str, str]:
        headers = {
            "apikey": self._config.anon_key,
            "Authorization": f"Bearer {self._config.anon_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    def request(
        self,
        method: str,
        table: str,
        *,
        params: Optional[dict[str, str]] = None,
        payload: Any = None,
        prefer: Optional[str] = None,
    ) -> requests.Response:
        return self._session.request(
            method,
            self.table_url(table),
            params=params,
            json=payload,
            headers=self.headers(prefer=prefer),
            timeout=self._config.timeout,
        )
