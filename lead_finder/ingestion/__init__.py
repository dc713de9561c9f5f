"""Spreadsheet import and export helpers."""

from .exporters import (
    TEMPLATE_HEADERS,
    default_export_name,
    export_leads,
    leads_to_dataframe,
    write_template,
)
from .loaders import UnsupportedFileTypeError, load_rows

__all__ = [
    "TEMPLATE_HEADERS",
    "UnsupportedFileTypeError",
    "default_export_name",
    "export_leads",
    "leads_to_dataframe",
    "load_rows",
    "write_template",
]
