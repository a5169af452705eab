"""
Web table data models.

- ColumnMap: display column name -> 1-based column position
- WebTableRecord: one registration record as entered in the form or read back
  from the table (FROZEN snapshot, never persisted)
- TextBoxFormData: payload of the Text Box page form
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.exceptions import UnknownColumnError

# =============================================================================
# COLUMN MAPPING
# =============================================================================

DEFAULT_COLUMNS: dict[str, int] = {
    "First Name": 1,
    "Last Name": 2,
    "Age": 3,
    "Email": 4,
    "Salary": 5,
    "Department": 6,
}

# Display column name -> WebTableRecord field name
COLUMN_FIELDS: dict[str, str] = {
    "First Name": "first_name",
    "Last Name": "last_name",
    "Age": "age",
    "Email": "email",
    "Salary": "salary",
    "Department": "department",
}


class ColumnMap:
    """Immutable name-keyed column positions."""

    def __init__(self, columns: Mapping[str, int] | None = None) -> None:
        source = DEFAULT_COLUMNS if columns is None else columns
        positions: dict[str, int] = {}
        for name, position in source.items():
            if not isinstance(position, int) or isinstance(position, bool) or position < 1:
                raise ValueError(f"Column '{name}' must map to a positive 1-based position, got {position!r}")
            positions[name.strip()] = position
        self._positions = positions

    def index_of(self, name: str) -> int:
        position = self._positions.get(name.strip()) if isinstance(name, str) else None
        if position is None:
            raise UnknownColumnError(str(name), known=list(self._positions))
        return position

    def names(self) -> list[str]:
        return list(self._positions)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip() in self._positions

    def __len__(self) -> int:
        return len(self._positions)

    def __repr__(self) -> str:
        return f"ColumnMap({self._positions!r})"


# =============================================================================
# RECORD MODELS
# =============================================================================


class WebTableRecord(BaseModel):
    """
    A registration record as shown in the Web Tables grid.

    All fields are kept as text exactly as rendered (after trimming), so a
    record read back from the table compares char-for-char with the form input.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    age: str = ""
    salary: str = ""
    department: str = ""

    @field_validator("first_name", "last_name", "email", "age", "salary", "department", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        """Table cells and data-table values may arrive as None or numbers."""
        if v is None:
            return ""
        return str(v)

    @classmethod
    def from_cells(cls, cells: Sequence[str], column_map: ColumnMap) -> WebTableRecord:
        """Build a record from positional cell texts; missing cells become ''."""
        values: dict[str, str] = {}
        for column, field_name in COLUMN_FIELDS.items():
            if column not in column_map:
                continue
            position = column_map.index_of(column)
            values[field_name] = cells[position - 1] if position <= len(cells) else ""
        return cls(**values)

    @classmethod
    def from_display_names(cls, data: Mapping[str, Any]) -> WebTableRecord:
        """Build a record from a mapping keyed by column display names (BDD data tables)."""
        values = {field_name: data.get(column, "") for column, field_name in COLUMN_FIELDS.items()}
        return cls(**values)

    def to_display_dict(self) -> dict[str, str]:
        return {column: getattr(self, field_name) for column, field_name in COLUMN_FIELDS.items()}


def display_to_field_updates(data: Mapping[str, Any]) -> dict[str, str]:
    """Translate display-name keys to record field names, keeping only non-empty values."""
    updates: dict[str, str] = {}
    for column, value in data.items():
        field_name = COLUMN_FIELDS.get(column.strip())
        if field_name is None:
            raise UnknownColumnError(column, known=list(COLUMN_FIELDS))
        if value:
            updates[field_name] = str(value).strip()
    return updates


def missing_records(expected: Iterable[WebTableRecord], actual: Iterable[WebTableRecord]) -> list[WebTableRecord]:
    """Return the expected records absent from actual (set-wise, order-insensitive)."""
    present = set(actual)
    return [record for record in expected if record not in present]


class TextBoxFormData(BaseModel):
    """Payload for the Text Box form."""

    model_config = ConfigDict(str_strip_whitespace=False)

    full_name: str = ""
    email: str = ""
    current_address: str = ""
    permanent_address: str = Field(default="", description="May span multiple lines")

    @classmethod
    def from_display_names(cls, data: Mapping[str, Any]) -> TextBoxFormData:
        return cls(
            full_name=data.get("Full Name") or "",
            email=data.get("Email") or "",
            current_address=data.get("Current Address") or "",
            permanent_address=data.get("Permanent Address") or "",
        )
