import datetime as dt
from pathlib import Path

import pandas as pd
import pytest
from openpyxl import load_workbook

from lead_finder.ingestion.exporters import (
    TEMPLATE_EXAMPLE,
    TEMPLATE_HEADERS,
    default_export_name,
    export_leads,
    leads_to_dataframe,
    write_template,
)
from lead_finder.store import EXPORT_HEADERS


def test_dataframe_uses_export_columns(make_lead) -> None:
    frame = leads_to_dataframe([make_lead("a"), make_lead("b", email=None)])

    assert list(frame.columns) == list(EXPORT_HEADERS)
    assert frame.loc[0, "Name"] == "Ana Silva"
    assert frame.loc[1, "Email"] == ""


def test_detailed_dataframe_adds_company_columns(make_lead) -> None:
    frame = leads_to_dataframe([make_lead("a")], detailed=True)

    assert frame.loc[0, "Employees"] == "51-200"
    assert frame.loc[0, "Industry"] == "Technology"


def test_empty_export_keeps_headers(tmp_path: Path) -> None:
    path = export_leads([], tmp_path / "empty.csv")
    assert path.read_text(encoding="utf-8").strip() == ",".join(EXPORT_HEADERS)


def test_export_leads_to_csv_and_excel(tmp_path: Path, make_lead) -> None:
    leads = [make_lead("a")]

    csv_path = export_leads(leads, tmp_path / "leads.csv")
    excel_path = export_leads(leads, tmp_path / "leads.xlsx", detailed=True)

    assert pd.read_csv(csv_path).loc[0, "Company"] == "Acme"
    assert pd.read_excel(excel_path).loc[0, "Employees"] == "51-200"


def test_export_rejects_unknown_extension(tmp_path: Path, make_lead) -> None:
    with pytest.raises(ValueError):
        export_leads([make_lead("a")], tmp_path / "leads.json")


def test_template_has_headers_and_example(tmp_path: Path) -> None:
    path = write_template(tmp_path / "template.xlsx")

    workbook = load_workbook(path)
    sheet = workbook["Leads Template"]
    assert [cell.value for cell in sheet[1]] == list(TEMPLATE_HEADERS)
    assert [cell.value for cell in sheet[2]] == list(TEMPLATE_EXAMPLE)
    assert sheet.column_dimensions["I"].width == 40

    with pytest.raises(ValueError):
        write_template(tmp_path / "template.csv")


def test_default_export_name() -> None:
    assert default_export_name(dt.date(2024, 1, 2)) == "linkedin_leads_2024-01-02.csv"
