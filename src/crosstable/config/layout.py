"""Column templates for the supported crosstable report layouts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Tuple


@dataclass(frozen=True)
class ColumnSpec:
    """A report column and the field names it carries on each physical row."""

    first: str
    second: str

    def qualified(self) -> Tuple[str, str]:
        return f"{self.first}_1", f"{self.second}_2"


@dataclass(frozen=True)
class ReportLayout:
    name: str
    delimiter: str
    header_tokens: FrozenSet[str]
    round_label: str
    default_rounds: int
    identity_columns: Tuple[ColumnSpec, ...]

    def round_columns(self, rounds: int) -> Tuple[ColumnSpec, ...]:
        return tuple(ColumnSpec(f"result{k}", f"color{k}") for k in range(1, rounds + 1))

    def columns(self, rounds: int) -> Tuple[ColumnSpec, ...]:
        """Full column template for a report with ``rounds`` round columns."""

        return self.identity_columns + self.round_columns(rounds)

    def field_count(self, rounds: int) -> int:
        return len(self.identity_columns) + rounds


_LAYOUTS: Dict[str, ReportLayout] = {
    "USCF": ReportLayout(
        name="USCF",
        delimiter="|",
        header_tokens=frozenset({"pair", "num"}),
        round_label="round",
        default_rounds=7,
        identity_columns=(
            ColumnSpec("pair", "state"),
            ColumnSpec("name", "rating"),
            ColumnSpec("total", "n"),
        ),
    ),
}

DEFAULT_LAYOUT = "USCF"


def iter_layouts() -> Iterable[ReportLayout]:
    """Return an iterator of all configured layouts."""

    return _LAYOUTS.values()


def get_layout(name: str = DEFAULT_LAYOUT) -> ReportLayout:
    """Fetch a layout by name, raising KeyError if missing."""

    key = name.upper()
    if key not in _LAYOUTS:
        raise KeyError(f"No report layout configured for {name!r}")
    return _LAYOUTS[key]
