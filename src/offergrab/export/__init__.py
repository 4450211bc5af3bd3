"""Tabular data export."""

from offergrab.constants import CSV_MEDIA_TYPE

from .tabular import as_column, escape_field, export_csv, to_csv

__all__ = ["CSV_MEDIA_TYPE", "as_column", "escape_field", "export_csv", "to_csv"]
