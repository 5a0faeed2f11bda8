"""Filter -> sort -> paginate over the in-memory record list.

Everything here is pure: the Table View keeps a ViewState, replaces it through
the update functions below, and calls `derive_view` on every render.

Numeric columns (ID, Age) sort through `to_number`. Blank text counts as 0 and
non-numeric text becomes NaN; NaN rows always go after every number, in both
directions, keeping their relative order.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from core.records import COLUMNS, NUMERIC_COLUMNS, Record, validate_column


SMALL_SCREEN_WIDTH = 640
SMALL_PAGE_SIZE = 5
DEFAULT_PAGE_SIZE = 10
PAGE_SIZES = (SMALL_PAGE_SIZE, DEFAULT_PAGE_SIZE)

_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?\Z", re.ASCII)
_PREFIXED = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)\Z", re.ASCII)
_INFINITY = {"Infinity": math.inf, "+Infinity": math.inf, "-Infinity": -math.inf}


@dataclass(frozen=True)
class ViewState:
    search_text: str = ""
    search_column: str = "Name"
    sort_column: Optional[str] = None
    ascending: bool = True
    current_page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class TableView:
    rows: List[Record] = field(default_factory=list)
    matches: List[Record] = field(default_factory=list)
    filtered_count: int = 0
    total_pages: int = 1
    current_page: int = 1

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages


def to_number(value: Optional[str]) -> float:
    """Browser-style numeric conversion: decimals, exponents, 0x/0o/0b
    integers and signed Infinity. Underscores and inf/nan spellings are NaN."""
    text = (value or "").strip()
    if not text:
        return 0.0
    if _DECIMAL.match(text):
        return float(text)
    if _PREFIXED.match(text):
        try:
            return float(int(text, 0))
        except OverflowError:
            return math.inf
    if text in _INFINITY:
        return _INFINITY[text]
    return np.nan


def _frame(records: Sequence[Record], column: str) -> pd.DataFrame:
    return pd.DataFrame({"value": [r.get(column) for r in records]}, dtype=object)


def filter_records(records: Sequence[Record], search_column: str, search_text: str) -> List[Record]:
    validate_column(search_column)
    if not search_text or not records:
        return list(records)
    df = _frame(records, search_column)
    mask = df["value"].str.lower().str.contains(search_text.lower(), regex=False)
    return [records[i] for i in df.index[mask.to_numpy(dtype=bool)]]


def sort_records(records: Sequence[Record], sort_column: Optional[str], ascending: bool = True) -> List[Record]:
    if sort_column is None or not records:
        return list(records)
    validate_column(sort_column)
    df = _frame(records, sort_column)
    if sort_column in NUMERIC_COLUMNS:
        df["value"] = df["value"].map(to_number).astype(float)
    ordered = df.sort_values("value", ascending=ascending, kind="mergesort", na_position="last")
    return [records[i] for i in ordered.index]


def total_pages(count: int, page_size: int) -> int:
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    return max(1, math.ceil(count / page_size))


def clamp_page(page: int, pages: int) -> int:
    return max(1, min(int(page), int(pages)))


def paginate(records: Sequence[Record], page: int, page_size: int) -> List[Record]:
    start = (page - 1) * page_size
    return list(records[start:start + page_size])


def page_size_for_width(width: Optional[float]) -> int:
    if width is None:
        return DEFAULT_PAGE_SIZE
    return SMALL_PAGE_SIZE if width < SMALL_SCREEN_WIDTH else DEFAULT_PAGE_SIZE


def derive_view(state: ViewState, all_records: Sequence[Record]) -> TableView:
    filtered = filter_records(all_records, state.search_column, state.search_text)
    ordered = sort_records(filtered, state.sort_column, state.ascending)
    pages = total_pages(len(ordered), state.page_size)
    page = clamp_page(state.current_page, pages)
    return TableView(
        rows=paginate(ordered, page, state.page_size),
        matches=ordered,
        filtered_count=len(ordered),
        total_pages=pages,
        current_page=page,
    )


# ---------- state updates ----------


def set_search_text(state: ViewState, text: str) -> ViewState:
    return replace(state, search_text=text or "", current_page=1)


def set_search_column(state: ViewState, column: str) -> ViewState:
    return replace(state, search_column=validate_column(column))


def toggle_sort(state: ViewState, column: str) -> ViewState:
    validate_column(column)
    if state.sort_column == column:
        return replace(state, ascending=not state.ascending)
    return replace(state, sort_column=column, ascending=True)


def go_to_previous(state: ViewState) -> ViewState:
    return replace(state, current_page=max(1, state.current_page - 1))


def go_to_next(state: ViewState, pages: int) -> ViewState:
    return replace(state, current_page=clamp_page(state.current_page + 1, pages))


def set_page_size(state: ViewState, page_size: int) -> ViewState:
    if page_size not in PAGE_SIZES:
        raise ValueError(f"page_size must be one of {PAGE_SIZES}")
    return replace(state, page_size=page_size)


def resize(state: ViewState, width: Optional[float]) -> ViewState:
    return set_page_size(state, page_size_for_width(width))


def sort_marker(state: ViewState, column: str) -> str:
    if state.sort_column != column:
        return ""
    return "▲" if state.ascending else "▼"


def header_labels(state: ViewState) -> Tuple[str, ...]:
    return tuple(f"{col} {sort_marker(state, col)}".strip() for col in COLUMNS)
