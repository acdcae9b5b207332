"""Configuration helpers for crosstable report layouts."""

from .layout import ColumnSpec, ReportLayout, get_layout, iter_layouts

__all__ = [
    "ColumnSpec",
    "ReportLayout",
    "get_layout",
    "iter_layouts",
]
