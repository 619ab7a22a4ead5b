from __future__ import annotations

import os

from bloom_catalog.domain.query_state import DEFAULT_PAGE_SIZE, clamp_page_size
from bloom_catalog.use_cases.debounce import DEFAULT_DEBOUNCE_SECONDS

DEFAULT_API_URL = "http://localhost:8000"


def catalog_data_path() -> str:
    path = os.getenv("CATALOG_DATA_PATH")

    if not path:
        raise RuntimeError("CATALOG_DATA_PATH environment variable is not set")

    return path


def catalog_api_url() -> str:
    return os.getenv("CATALOG_API_URL") or DEFAULT_API_URL


def page_size() -> int:
    raw = os.getenv("CATALOG_PAGE_SIZE")
    if not raw:
        return DEFAULT_PAGE_SIZE

    try:
        return clamp_page_size(int(raw))
    except ValueError as exc:
        raise RuntimeError(f"CATALOG_PAGE_SIZE must be an integer, got {raw!r}") from exc


def debounce_seconds() -> float:
    raw = os.getenv("CATALOG_DEBOUNCE_SECONDS")
    if not raw:
        return DEFAULT_DEBOUNCE_SECONDS

    try:
        value = float(raw)
    except ValueError as exc:
        raise RuntimeError(f"CATALOG_DEBOUNCE_SECONDS must be a number, got {raw!r}") from exc

    if value < 0:
        raise RuntimeError("CATALOG_DEBOUNCE_SECONDS must be >= 0")
    return value
