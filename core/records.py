from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Tuple


COLUMNS: Tuple[str, ...] = ("ID", "Name", "Email", "Age", "City")
NUMERIC_COLUMNS = frozenset({"ID", "Age"})

_FIELD_BY_COLUMN = {
    "ID": "id",
    "Name": "name",
    "Email": "email",
    "Age": "age",
    "City": "city",
}


@dataclass(frozen=True)
class Record:
    id: str = ""
    name: str = ""
    email: str = ""
    age: str = ""
    city: str = ""

    def get(self, column: str) -> str:
        try:
            return getattr(self, _FIELD_BY_COLUMN[column])
        except KeyError:
            raise KeyError(f"Unknown column: {column!r}") from None

    def as_row(self) -> Dict[str, str]:
        """JSON shape: column label -> value, in column order."""
        return {col: self.get(col) for col in COLUMNS}

    @classmethod
    def from_row(cls, row: Mapping[str, object]) -> "Record":
        values = {}
        for col, attr in _FIELD_BY_COLUMN.items():
            value = row.get(col)
            values[attr] = "" if value is None else str(value)
        return cls(**values)


def validate_column(column: str) -> str:
    if column not in COLUMNS:
        raise ValueError(f"Unknown column {column!r}; expected one of {', '.join(COLUMNS)}")
    return column
