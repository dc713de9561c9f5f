"""Export utilities for saved leads and the offline upload template."""
from __future__ import annotations

import datetime as dt
from pathlib import Path
from typing import List, MutableMapping, Optional, Sequence, Union

import pandas as pd
from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from ..models import Lead
from ..store import EXPORT_HEADERS, export_row

PathLike = Union[str, Path]

TEMPLATE_HEADERS = (
    "First Name",
    "Last Name",
    "Title",
    "Company",
    "Company Name for Emails",
    "Email",
    "# Employees",
    "Industry",
    "Person Linkedin Url",
    "City",
    "State",
)

TEMPLATE_EXAMPLE = (
    "John",
    "Doe",
    "Software Engineer",
    "Tech Corp",
    "Tech Corp Inc",
    "john.doe@techcorp.com",
    "100-500",
    "Technology",
    "https://linkedin.com/in/johndoe",
    "San Francisco",
    "CA",
)


def default_export_name(today: Optional[dt.date] = None) -> str:
    return f"linkedin_leads_{(today or dt.date.today()).isoformat()}.csv"


def default_template_name(today: Optional[dt.date] = None) -> str:
    return f"apollo_leads_template_{(today or dt.date.today()).isoformat()}.xlsx"


def leads_to_dataframe(leads: Sequence[Lead], *, detailed: bool = False) -> pd.DataFrame:
    """Convert leads into a :class:`pandas.DataFrame` with the export column set.

    ``detailed`` appends the company and email enrichment columns.
    """

    records: List[MutableMapping[str, object]] = []
    for lead in leads:
        row: MutableMapping[str, object] = dict(zip(EXPORT_HEADERS, export_row(lead)))
        if detailed:
            row.update(
                {
                    "Industry": lead.industry,
                    "Employees": lead.employee_count,
                    "Company URL": lead.company_url,
                    "Email Status": lead.email_status or "",
                }
            )
        records.append(row)
    return pd.DataFrame(records, columns=_columns(detailed))


def export_leads(
    leads: Sequence[Lead],
    path: PathLike,
    *,
    detailed: bool = False,
    sheet_name: str = "Leads",
    exporter_kwargs: Optional[MutableMapping[str, object]] = None,
) -> Path:
    """Write leads to a CSV or Excel file."""

    output_path = Path(path)
    _write_dataframe(
        leads_to_dataframe(leads, detailed=detailed),
        output_path,
        sheet_name=sheet_name,
        exporter_kwargs=exporter_kwargs,
    )
    return output_path


def write_template(path: PathLike) -> Path:
    """Write the offline upload template: the expected headers plus one example row."""

    output_path = Path(path)
    if output_path.suffix.lower() != ".xlsx":
        raise ValueError(f"Templates are written as .xlsx, not {output_path.suffix or 'no extension'}")

    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Leads Template"
    sheet.append(list(TEMPLATE_HEADERS))
    sheet.append(list(TEMPLATE_EXAMPLE))
    for index, header in enumerate(TEMPLATE_HEADERS, start=1):
        width = 40 if header == "Person Linkedin Url" else 20
        sheet.column_dimensions[get_column_letter(index)].width = width
    workbook.save(output_path)
    return output_path


def _columns(detailed: bool) -> List[str]:
    columns = list(EXPORT_HEADERS)
    if detailed:
        columns.extend(["Industry", "Employees", "Company URL", "Email Status"])
    return columns


def _write_dataframe(
    dataframe: pd.DataFrame,
    path: Path,
    *,
    sheet_name: str,
    exporter_kwargs: Optional[MutableMapping[str, object]],
) -> None:
    exporter_kwargs = dict(exporter_kwargs or {})
    suffix = path.suffix.lower()

    if suffix in {".csv", ".tsv"}:
        if suffix == ".tsv":
            exporter_kwargs.setdefault("sep", "\t")
        dataframe.to_csv(path, index=False, **exporter_kwargs)
        return

    if suffix in {".xlsx", ".xlsm"}:
        engine = exporter_kwargs.pop("engine", None) or "openpyxl"
        dataframe.to_excel(path, index=False, sheet_name=sheet_name, engine=engine, **exporter_kwargs)
        return

    raise ValueError(f"Unsupported export file extension: {suffix}")


__all__ = [
    "TEMPLATE_HEADERS",
    "TEMPLATE_EXAMPLE",
    "default_export_name",
    "default_template_name",
    "export_leads",
    "leads_to_dataframe",
    "write_template",
]
