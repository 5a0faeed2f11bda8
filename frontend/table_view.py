"""Streamlit widgets for the CSV table.

Widgets only translate user events into ViewState updates; all row selection
happens in `core.view_model`.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

import pandas as pd
import streamlit as st
import streamlit.components.v1 as components

from core.decoder import encode_records
from core.records import COLUMNS, Record
from core.view_model import (
    TableView,
    ViewState,
    go_to_next,
    go_to_previous,
    header_labels,
    resize,
    set_search_column,
    set_search_text,
    toggle_sort,
)
from frontend.api_client import fetch_table_data


logger = logging.getLogger(__name__)

STATE_KEY = "view_state"
RECORDS_KEY = "all_records"
ERROR_KEY = "fetch_error"
VIEWPORT_DIR = Path(__file__).resolve().parent / "viewport"


def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .table-title {text-align: center;font-size: 1.2rem;font-weight: 700;margin-bottom: 12px;}
        .page-label {text-align: right;color: #374151;padding-top: 6px;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


def get_state() -> ViewState:
    if STATE_KEY not in st.session_state:
        st.session_state[STATE_KEY] = ViewState()
    return st.session_state[STATE_KEY]


def put_state(state: ViewState) -> None:
    st.session_state[STATE_KEY] = state


def load_records(force: bool = False) -> List[Record]:
    """Fetch once per session; a refresh drops the cached rows."""
    if force or RECORDS_KEY not in st.session_state:
        result = fetch_table_data()
        if result.error:
            logger.error("Error fetching CSV: %s", result.error)
            st.session_state[RECORDS_KEY] = []
            st.session_state[ERROR_KEY] = result.error
        else:
            st.session_state[RECORDS_KEY] = result.data or []
            st.session_state[ERROR_KEY] = None
    return st.session_state[RECORDS_KEY]


@lru_cache(maxsize=1)
def _viewport_component():
    return components.declare_component("viewport_width", path=str(VIEWPORT_DIR))


def browser_width() -> Optional[float]:
    """Viewport width reported by the browser; None until the first report arrives."""
    value = _viewport_component()(key="viewport_width", default=None)
    try:
        return float(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def apply_viewport(width: Optional[float]) -> ViewState:
    if width is None:
        return get_state()
    state = resize(get_state(), width)
    put_state(state)
    return state


# ---------- callbacks ----------


def _on_search_text():
    put_state(set_search_text(get_state(), st.session_state.get("search_text", "")))


def _on_search_column():
    put_state(set_search_column(get_state(), st.session_state.get("search_column", "Name")))


def _on_sort(column: str):
    put_state(toggle_sort(get_state(), column))


def _on_previous():
    put_state(go_to_previous(get_state()))


def _on_next(pages: int):
    put_state(go_to_next(get_state(), pages))


# ---------- widgets ----------


def render_search(state: ViewState):
    c1, c2 = st.columns([1, 4])
    c1.selectbox(
        "Search column",
        options=list(COLUMNS),
        index=list(COLUMNS).index(state.search_column),
        key="search_column",
        on_change=_on_search_column,
        label_visibility="collapsed",
    )
    c2.text_input(
        "Search",
        value=state.search_text,
        key="search_text",
        placeholder=f"Search by {state.search_column}...",
        on_change=_on_search_text,
        label_visibility="collapsed",
    )


def render_header(state: ViewState):
    cols = st.columns([1, 2, 3, 1, 2])
    for slot, col, label in zip(cols, COLUMNS, header_labels(state)):
        slot.button(label, key=f"sort_{col}", on_click=_on_sort, args=(col,), width="stretch")


def render_rows(view: TableView):
    df = pd.DataFrame([r.as_row() for r in view.rows], columns=list(COLUMNS))
    st.dataframe(df, hide_index=True, width="stretch")


def render_pagination(view: TableView):
    c1, c2, c3 = st.columns([1, 1, 4])
    c1.button("Previous", disabled=not view.has_previous, on_click=_on_previous)
    c2.button("Next", disabled=not view.has_next, on_click=_on_next, args=(view.total_pages,))
    c3.markdown(
        f"<div class='page-label'>Page {view.current_page} of {view.total_pages}</div>",
        unsafe_allow_html=True,
    )


def render_export(view: TableView, file_name: str = "table.csv"):
    if not view.matches:
        return
    st.download_button(
        "Export CSV",
        data=encode_records(view.matches).encode("utf-8"),
        file_name=file_name,
        mime="text/csv",
    )
