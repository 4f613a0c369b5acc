from __future__ import annotations

import logging
import re
import sys
from pathlib import Path

from .charts import render_chart
from .exporter import export_csv_files, export_excel
from .html_source import DEFAULT_MONTH_HEADER_CLASS, DEFAULT_TABLE_ID_TEMPLATE, HtmlRowExtractor
from .models import MonthEntry, ReportSeries
from .months import MonthRegistry
from .overlay import write_overlay
from .report import ReportBuilder, ReportConfig


class RedactAmountsFilter(logging.Filter):
    def __init__(self, enabled: bool) -> None:
        super().__init__()
        self.enabled = enabled
        self.pattern = re.compile(r"-?\d+(?:[.,]\d+)+")

    def filter(self, record: logging.LogRecord) -> bool:
        if self.enabled:
            msg = str(record.getMessage())
            record.msg = self.pattern.sub("[REDACTED]", msg)
            record.args = ()
        return True


def build_logger(redact_logs: bool, verbose: bool = False) -> logging.Logger:
    logger = logging.getLogger("vcpcalc")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.filters = [RedactAmountsFilter(redact_logs)]
    return logger


def read_page(page: str | Path, encoding: str = "utf-8") -> str:
    if str(page) == "-":
        return sys.stdin.read()
    return Path(page).read_text(encoding=encoding, errors="replace")


def discover_months(document: str, header_class: str = DEFAULT_MONTH_HEADER_CLASS) -> list[MonthEntry]:
    return MonthRegistry.discover(document, header_class=header_class).entries


def build_report(
    document: str,
    config: ReportConfig,
    header_class: str = DEFAULT_MONTH_HEADER_CLASS,
    table_id_template: str = DEFAULT_TABLE_ID_TEMPLATE,
) -> ReportSeries:
    registry = MonthRegistry.discover(document, header_class=header_class)
    extractor = HtmlRowExtractor(document, table_id_template=table_id_template)
    return ReportBuilder(registry, extractor, config).build_series()


def run_pipeline(
    document: str,
    export_dir: Path | None,
    config: ReportConfig,
    header_class: str,
    table_id_template: str,
    charts_enabled: bool,
    chart_kind: str,
    chart_title: str,
    overlay_path: Path | None,
    excel: bool,
    utf8_bom: bool,
    redact_logs: bool,
    verbose: bool = False,
) -> dict[str, object]:
    logger = build_logger(redact_logs, verbose=verbose)

    series = build_report(document, config, header_class=header_class, table_id_template=table_id_template)
    if not len(series):
        logger.warning("No months found on the page.")

    exports: dict[str, Path] = {}
    if export_dir is not None:
        exports = export_csv_files(series, export_dir=export_dir, utf8_bom=utf8_bom)
        if excel:
            exports["excel"] = export_excel(series, export_dir=export_dir)

    chart_path = None
    chart_dir = export_dir if export_dir is not None else (overlay_path.parent if overlay_path else None)
    if charts_enabled and len(series) and chart_dir is not None:
        chart_path = render_chart(series, chart_dir / "movimenti_mensili.png", kind=chart_kind, title=chart_title)
        logger.info("Chart written to %s", chart_path)

    overlay = None
    if overlay_path is not None:
        overlay = write_overlay(document, overlay_path, series, chart_path)
        logger.info("Overlay page written to %s", overlay)

    return {
        "months": len(series),
        "series": series,
        "exports": exports,
        "chart": chart_path,
        "overlay": overlay,
    }
