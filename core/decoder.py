from __future__ import annotations

import io
from typing import Iterable, List

import pandas as pd

from core.errors import DecodeError
from core.records import COLUMNS, Record


def _read_text(stream) -> str:
    raw = stream.read()
    if isinstance(raw, bytes):
        return raw.decode("utf-8-sig")
    return (raw or "").lstrip("\ufeff")


def decode_records(stream) -> List[Record]:
    """Parse a CSV stream into Records, matching columns by header label.

    Every value stays text. Cells beyond the header width are dropped,
    wherever the row sits. Any read or parse failure raises DecodeError and
    nothing is returned.
    """
    try:
        text = _read_text(stream)
        if not text.strip():
            return []
        header = pd.read_csv(io.StringIO(text), nrows=0, dtype=str, index_col=False).columns
        # Positional usecols trims cells past the header on every row.
        df = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            na_filter=False,
            index_col=False,
            usecols=list(range(len(header))),
            skip_blank_lines=True,
        )
    except Exception as exc:
        raise DecodeError(str(exc) or type(exc).__name__) from exc

    for col in COLUMNS:
        if col not in df.columns:
            df[col] = ""
    df = df[list(COLUMNS)].fillna("")
    return [Record.from_row(row) for row in df.to_dict(orient="records")]


def encode_records(records: Iterable[Record]) -> str:
    df = pd.DataFrame([r.as_row() for r in records], columns=list(COLUMNS))
    return df.to_csv(index=False)
