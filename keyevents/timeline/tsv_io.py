from __future__ import annotations

import csv
from pathlib import Path

from .host import TableColumn, TableData
from .rows import ROLES

_ROLE_BY_HEADER = {role.lower(): role for role in ROLES}
# Accept snake_case headers ("company_link") as well as the role names themselves.
_ROLE_BY_HEADER.update({"company_link": "CompanyLink", "header_image": "HeaderImage", "footer_image": "FooterImage"})

SAMPLE_ROWS = [
    {
        "Company": "Acme Bio",
        "Type": "Regulatory",
        "Description": "FDA accepts the BLA filing for priority review.",
        "CompanyLink": "/sites/acme/bla",
        "Date": "2025-02-14",
    },
    {
        "Company": "Acme Bio",
        "Type": "Clinical Trials",
        "Description": "Phase III readout expected.",
        "CompanyLink": "",
        "Date": "2025-09-30",
    },
    {
        "Company": "Northwind Pharma",
        "Type": "Commercial",
        "Description": "Co-promotion agreement signed for the EU market.",
        "CompanyLink": "https://example.com/northwind",
        "Date": "2026-04-01",
    },
    {
        "Company": "Northwind Pharma",
        "Type": "Launch",
        "Description": "US launch of the once-weekly formulation.",
        "CompanyLink": "",
        "Date": "2027-01-15",
    },
    {
        "Company": "Contoso Therapeutics",
        "Type": "Regulatory",
        "Description": "EMA opinion on the extension of indication.",
        "CompanyLink": "",
        "Date": "2028-06-20",
    },
]


def read_table_tsv(path: Path) -> TableData:
    with path.open(newline="", encoding="utf-8") as handle:
        reader = csv.reader(handle, delimiter="\t")
        header = next(reader, None)
        if not header or not any(cell.strip() for cell in header):
            raise ValueError(f"{path} has no header row.")
        # Allow column-aligned headers with spaces.
        names = [name.strip() for name in header]
        columns = []
        for name in names:
            role = _ROLE_BY_HEADER.get(name.lower())
            columns.append(TableColumn(name=name, roles=(role,) if role else ()))

        rows: list[list[object]] = []
        for raw in reader:
            if not any(cell.strip() for cell in raw):
                continue
            cells: list[object] = [(cell.strip() or None) for cell in raw]
            if len(cells) < len(columns):
                cells.extend([None] * (len(columns) - len(cells)))
            rows.append(cells[: len(columns)])
    return TableData(columns=columns, rows=rows)


def write_sample_tsv(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=list(SAMPLE_ROWS[0]), delimiter="\t", lineterminator="\n")
        writer.writeheader()
        writer.writerows(SAMPLE_ROWS)
