from __future__ import annotations

import base64
import html
import re
from pathlib import Path

from .aggregate import format_amount
from .models import ReportSeries

START_MARKER = "<!-- VCPCALC:START -->"
END_MARKER = "<!-- VCPCALC:END -->"
CONTAINER_ID = "vcp-autocalculate"

_BODY_RE = re.compile(r"<body\b[^>]*>", re.IGNORECASE)
_MANAGED_RE = re.compile(re.escape(START_MARKER) + r".*?" + re.escape(END_MARKER), re.DOTALL)


def _escape(value: str) -> str:
    return html.escape(value, quote=True)


def _image_data_uri(path: Path) -> str:
    encoded = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:image/png;base64,{encoded}"


def build_overlay_html(series: ReportSeries, chart_path: Path | None = None) -> str:
    lines = [
        START_MARKER,
        f"<div id='{CONTAINER_ID}' style='width:100%;margin:1em 0;'>",
    ]
    if chart_path is not None:
        lines.append(
            f"<p><img src='{_image_data_uri(chart_path)}' alt='Movimenti mensili' style='max-width:100%;height:auto;' /></p>"
        )

    header = "".join(f"<th>{_escape(category.label)}</th>" for category in series.series())
    lines.append("<table border='1' cellpadding='4' cellspacing='0'>")
    lines.append(f"<tr><th>Mese</th>{header}</tr>")
    for idx, label in enumerate(series.labels):
        cells = "".join(f"<td>{format_amount(category.values[idx])}</td>" for category in series.series())
        lines.append(f"<tr><td>{_escape(label)}</td>{cells}</tr>")
    lines.append("</table>")

    lines.extend(["</div>", END_MARKER])
    return "\n".join(lines)


def replace_managed_block(document: str, block: str) -> str:
    """Swap a previous overlay for ``block``, or insert it at the top of the body."""
    if _MANAGED_RE.search(document):
        return _MANAGED_RE.sub(lambda _: block, document, count=1)
    body = _BODY_RE.search(document)
    if body:
        return document[: body.end()] + "\n" + block + "\n" + document[body.end():]
    if document and not document.endswith("\n"):
        document += "\n"
    return document + block + "\n"


def write_overlay(document: str, output_path: Path, series: ReportSeries, chart_path: Path | None = None) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = build_overlay_html(series, chart_path)
    output_path.write_text(replace_managed_block(document, payload), encoding="utf-8")
    return output_path
