from __future__ import annotations

import csv
import math
import re
from pathlib import Path

from .aggregate import format_amount
from .models import MonthReport, ReportSeries, TransactionRecord

CSV_COLUMNS = [
    "mese",
    "data_operazione",
    "entrate",
    "uscite",
    "erogante",
    "beneficiario",
    "descrizione",
    "tipo",
]


def _file_stem(label: str, used: set[str]) -> str:
    base = re.sub(r"[^\w.-]+", "_", label, flags=re.UNICODE).strip("_") or "mese"
    stem = base
    n = 2
    while stem.lower() in used:
        stem = f"{base}_{n}"
        n += 1
    used.add(stem.lower())
    return stem


def _record_row(label: str, r: TransactionRecord) -> list[str]:
    return [
        label,
        r.data_operazione,
        r.entrate,
        r.uscite,
        r.erogante,
        r.beneficiario,
        "" if r.descrizione is None else r.descrizione,
        r.kind,
    ]


def _write_records_csv(path: Path, reports: list[MonthReport], utf8_bom: bool) -> None:
    encoding = "utf-8-sig" if utf8_bom else "utf-8"
    with path.open("w", encoding=encoding, newline="") as handle:
        writer = csv.writer(handle)
        writer.writerow(CSV_COLUMNS)
        for report in reports:
            for record in report.records:
                writer.writerow(_record_row(report.month.label, record))


def _write_series_csv(path: Path, series: ReportSeries, utf8_bom: bool) -> None:
    encoding = "utf-8-sig" if utf8_bom else "utf-8"
    with path.open("w", encoding=encoding, newline="") as handle:
        writer = csv.writer(handle)
        writer.writerow(["mese", *[category.label for category in series.series()]])
        for idx, label in enumerate(series.labels):
            writer.writerow([label, *[format_amount(category.values[idx]) for category in series.series()]])


def export_csv_files(series: ReportSeries, export_dir: Path, utf8_bom: bool = False) -> dict[str, Path]:
    export_dir.mkdir(parents=True, exist_ok=True)
    reports = list(series.reports)
    outputs: dict[str, Path] = {}

    # month files never overwrite each other or the combined files
    used = {"all_transactions", "monthly_series"}
    for report in reports:
        stem = _file_stem(report.month.label, used)
        path = export_dir / f"{stem}.csv"
        _write_records_csv(path, [report], utf8_bom=utf8_bom)
        key = report.month.label
        if key in outputs or key in {"all", "series"}:
            key = path.name
        outputs[key] = path

    all_path = export_dir / "all_transactions.csv"
    _write_records_csv(all_path, reports, utf8_bom=utf8_bom)
    outputs["all"] = all_path

    series_path = export_dir / "monthly_series.csv"
    _write_series_csv(series_path, series, utf8_bom=utf8_bom)
    outputs["series"] = series_path
    return outputs


def export_excel(series: ReportSeries, export_dir: Path) -> Path:
    try:
        from openpyxl import Workbook
    except ImportError as exc:
        raise RuntimeError("Excel export requires openpyxl. Install it and rerun with --excel.") from exc

    workbook = Workbook()
    summary = workbook.active
    summary.title = "serie"
    summary.append(["mese", *[category.label for category in series.series()]])
    for idx, label in enumerate(series.labels):
        # NaN cells are written as text so the workbook stays valid
        summary.append([label, *[_excel_value(category.values[idx]) for category in series.series()]])

    used: set[str] = {"serie"}
    for report in series.reports:
        title = _sheet_title(report.month.label, used)
        sheet = workbook.create_sheet(title=title)
        sheet.append(CSV_COLUMNS)
        for record in report.records:
            sheet.append(_record_row(report.month.label, record))

    export_dir.mkdir(parents=True, exist_ok=True)
    output_path = export_dir / "movimenti_mensili.xlsx"
    workbook.save(output_path)
    return output_path


def _excel_value(value: float) -> float | str:
    return value if math.isfinite(value) else format_amount(value)


def _sheet_title(label: str, used: set[str]) -> str:
    base = re.sub(r"[\[\]:*?/\\]", "_", label)[:31] or "mese"
    title = base
    n = 2
    while title in used:
        suffix = f"_{n}"
        title = base[: 31 - len(suffix)] + suffix
        n += 1
    used.add(title)
    return title
