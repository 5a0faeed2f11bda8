from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional

import requests

from core.records import Record


DEFAULT_API_BASE_URL = "http://localhost:3000"
UNKNOWN_ERROR = "Unknown error"

HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


@dataclass(frozen=True)
class ApiResult:
    """Either `data` or `error` is set, never both."""

    data: Optional[List[Record]] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def api_base_url() -> str:
    return (os.environ.get("API_BASE_URL") or DEFAULT_API_BASE_URL).rstrip("/")


def _error_message(exc: Exception) -> str:
    if isinstance(exc, requests.RequestException):
        response = exc.response
        if response is not None:
            try:
                payload = response.json() or {}
            except ValueError:
                payload = {}
            if isinstance(payload, dict) and payload.get("error"):
                return str(payload["error"])
        return str(exc) or UNKNOWN_ERROR
    return UNKNOWN_ERROR


def fetch_table_data(
    base_url: Optional[str] = None,
    *,
    session: Optional[requests.Session] = None,
    timeout_s: float = 10.0,
) -> ApiResult:
    url = f"{(base_url or api_base_url()).rstrip('/')}/api/data"
    http = session or requests
    try:
        resp = http.get(url, headers=HEADERS, timeout=float(timeout_s))
        resp.raise_for_status()
        payload = resp.json() or {}
        rows = payload.get("data") or []
        return ApiResult(data=[Record.from_row(row) for row in rows], error=None)
    except Exception as exc:
        return ApiResult(data=None, error=_error_message(exc))
