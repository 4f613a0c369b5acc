from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .aggregate import format_amount
from .charts import CHART_KINDS
from .config import expand_path, load_config, save_config
from .errors import VcpError
from .models import ReportSeries
from .pipeline import build_logger, discover_months, read_page, run_pipeline
from .report import ReportConfig


def _prompt(label: str, default: str) -> str:
    value = input(f"{label} [{default}]: ").strip()
    return value or default


def _prompt_bool(label: str, default: bool) -> bool:
    default_text = "true" if default else "false"
    value = input(f"{label} [{default_text}]: ").strip().lower()
    if not value:
        return default
    return value in {"1", "true", "y", "yes"}


def run_init(config_path: Path) -> None:
    cfg = load_config(config_path)
    print("vcpcalc setup wizard")

    cfg["paths"]["export_dir"] = _prompt("CSV/chart export folder", cfg["paths"]["export_dir"])
    cfg["page"]["month_header_class"] = _prompt("Month header CSS class", cfg["page"]["month_header_class"])
    cfg["page"]["table_id_template"] = _prompt("Movements table id template", cfg["page"]["table_id_template"])
    cfg["reports"]["charts_enabled"] = _prompt_bool("Render chart", cfg["reports"].get("charts_enabled", True))
    cfg["reports"]["chart_kind"] = _prompt("Chart kind (bar/line)", cfg["reports"].get("chart_kind", "bar"))
    cfg["reports"]["overlay_enabled"] = _prompt_bool(
        "Write page copy with chart overlay",
        cfg["reports"].get("overlay_enabled", True),
    )

    save_config(config_path, cfg)
    print(f"Saved configuration to {config_path}")


def apply_overrides(cfg: dict, args: argparse.Namespace, config_path: Path) -> dict:
    cfg = {
        **cfg,
        "paths": {**cfg["paths"]},
        "page": {**cfg["page"]},
        "categories": {**cfg["categories"]},
        "reports": {**cfg["reports"]},
    }

    if getattr(args, "export", None):
        cfg["paths"]["export_dir"] = args.export
    if getattr(args, "month_header_class", None):
        cfg["page"]["month_header_class"] = args.month_header_class
    if getattr(args, "chart_kind", None):
        cfg["reports"]["chart_kind"] = args.chart_kind
    if getattr(args, "no_chart", False):
        cfg["reports"]["charts_enabled"] = False

    base_dir = config_path.parent
    cfg["paths"]["export_dir"] = str(expand_path(cfg["paths"]["export_dir"], base_dir))
    return cfg


def format_series_table(series: ReportSeries) -> str:
    headers = ["Mese", *[category.label for category in series.series()]]
    rows = [
        [label, *[format_amount(category.values[idx]) for category in series.series()]]
        for idx, label in enumerate(series.labels)
    ]
    widths = [max(len(str(cell)) for cell in column) for column in zip(headers, *rows)]
    lines = ["  ".join(h.ljust(w) for h, w in zip(headers, widths))]
    for row in rows:
        lines.append("  ".join([row[0].ljust(widths[0]), *[c.rjust(w) for c, w in zip(row[1:], widths[1:])]]))
    return "\n".join(lines)


def _add_common_config_arg(parser: argparse.ArgumentParser, set_default: bool) -> None:
    kwargs = {"help": "Path to config yaml"}
    if set_default:
        kwargs["default"] = "./vcpcalc.yaml"
    else:
        kwargs["default"] = argparse.SUPPRESS
    parser.add_argument("--config", **kwargs)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vcpcalc", description="Monthly movements report for the scheda_euro page")
    _add_common_config_arg(parser, set_default=True)

    sub = parser.add_subparsers(dest="command", required=True)

    init = sub.add_parser("init", help="Interactive setup wizard")
    _add_common_config_arg(init, set_default=False)

    months = sub.add_parser("months", help="List the months shown on a saved page")
    _add_common_config_arg(months, set_default=False)
    months.add_argument("page", help="Saved page HTML, or - for stdin")
    months.add_argument("--month-header-class")

    report = sub.add_parser("report", help="Aggregate the movements of every month")
    _add_common_config_arg(report, set_default=False)
    report.add_argument("page", help="Saved page HTML, or - for stdin")
    report.add_argument("--export", help="Folder for CSV files and the chart")
    report.add_argument("--no-export", action="store_true")
    report.add_argument("--overlay", help="Write a copy of the page with the chart overlay here")
    report.add_argument("--month-header-class")
    report.add_argument("--chart-kind", choices=CHART_KINDS)
    report.add_argument("--no-chart", action="store_true")
    report.add_argument("--excel", action="store_true")
    report.add_argument("--csv-utf8-bom", action="store_true")
    report.add_argument("--redact-logs", action="store_true")
    report.add_argument("--verbose", "-v", action="store_true")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    config_path = expand_path(args.config)

    if args.command == "init":
        run_init(config_path)
        return 0

    try:
        cfg = apply_overrides(load_config(config_path), args, config_path)
    except ValueError as exc:
        print(f"invalid config {config_path}: {exc}")
        return 2

    if args.command == "months":
        build_logger(redact_logs=False)
        try:
            document = read_page(args.page, encoding=cfg["page"].get("encoding", "utf-8"))
        except OSError as exc:
            print(f"months failed: {exc}")
            return 1
        for entry in discover_months(document, header_class=cfg["page"]["month_header_class"]):
            print(f"{entry.id}\t{entry.label}")
        return 0

    if args.command == "report":
        overlay_path = Path(args.overlay) if args.overlay else None
        if overlay_path is None and cfg["reports"].get("overlay_enabled", True) and args.page != "-" and not args.no_export:
            overlay_path = Path(cfg["paths"]["export_dir"]) / f"{Path(args.page).stem}_overlay.html"
        try:
            document = read_page(args.page, encoding=cfg["page"].get("encoding", "utf-8"))
            result = run_pipeline(
                document=document,
                export_dir=None if args.no_export else Path(cfg["paths"]["export_dir"]),
                config=ReportConfig.from_mapping(cfg),
                header_class=cfg["page"]["month_header_class"],
                table_id_template=cfg["page"]["table_id_template"],
                charts_enabled=cfg["reports"].get("charts_enabled", True),
                chart_kind=cfg["reports"].get("chart_kind", "bar"),
                chart_title=cfg["reports"].get("chart_title", "Movimenti mensili"),
                overlay_path=overlay_path,
                excel=args.excel,
                utf8_bom=args.csv_utf8_bom,
                redact_logs=args.redact_logs,
                verbose=args.verbose,
            )
        except (VcpError, OSError, ValueError, RuntimeError) as exc:
            print(f"report failed: {exc}")
            return 1
        print(format_series_table(result["series"]))
        if result.get("overlay"):
            print(f"Overlay page written to: {result['overlay']}")
        return 0

    parser.print_help()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
