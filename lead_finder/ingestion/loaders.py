"""Utilities for loading uploaded lead spreadsheets into plain rows."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, MutableMapping, Optional, Union

import pandas as pd

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]

CSV_SUFFIXES = {".csv", ".tsv"}
EXCEL_SUFFIXES = {".xlsx", ".xlsm"}


class UnsupportedFileTypeError(ValueError):
    """Raised when an unsupported file format is passed to the loader."""


def load_rows(
    path: PathLike,
    *,
    sheet_name: Union[str, int] = 0,
    loader_kwargs: Optional[MutableMapping[str, Any]] = None,
) -> List[Dict[str, str]]:
    """Read a CSV/XLSX file into one ``{header: text}`` mapping per non-empty row.

    Cells are returned as stripped strings; blank and missing cells are left out
    of the row so callers can treat every present key as a real value. Only the
    first sheet of a workbook is read unless ``sheet_name`` says otherwise.
    """

    dataframe = _read_dataframe(path, sheet_name=sheet_name, loader_kwargs=loader_kwargs)
    rows: List[Dict[str, str]] = []
    for _, row in dataframe.iterrows():
        if _row_is_empty(row):
            continue
        rows.append(
            {
                str(column).strip(): text
                for column, text in ((column, _clean_text(value)) for column, value in row.items())
                if text is not None
            }
        )
    LOGGER.debug("Loaded %s rows from %s", len(rows), path)
    return rows


def _read_dataframe(
    path: PathLike,
    *,
    sheet_name: Union[str, int] = 0,
    loader_kwargs: Optional[MutableMapping[str, Any]] = None,
) -> pd.DataFrame:
    loader_kwargs = dict(loader_kwargs or {})
    path_obj = Path(path)
    suffix = path_obj.suffix.lower()

    if suffix in CSV_SUFFIXES:
        if suffix == ".tsv":
            loader_kwargs.setdefault("sep", "\t")
        loader_kwargs.setdefault("dtype", str)
        return pd.read_csv(path_obj, **loader_kwargs)

    if suffix in EXCEL_SUFFIXES:
        engine = loader_kwargs.pop("engine", None) or "openpyxl"
        return pd.read_excel(path_obj, sheet_name=sheet_name, engine=engine, **loader_kwargs)

    raise UnsupportedFileTypeError(f"Unsupported file extension: {path_obj.suffix}")


def _row_is_empty(row: pd.Series) -> bool:
    return all(_clean_text(value) is None for value in row.values)


def _clean_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, float) and pd.isna(value):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    if not text:
        return None
    return text


__all__ = ["CSV_SUFFIXES", "EXCEL_SUFFIXES", "UnsupportedFileTypeError", "load_rows"]
