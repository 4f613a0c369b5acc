from __future__ import annotations

import math
from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from .aggregate import format_amount  # noqa: E402
from .models import ReportSeries  # noqa: E402

CHART_KINDS = ("bar", "line")

SERIES_COLORS = [
    (44 / 255.0, 127 / 255.0, 184 / 255.0),  # total, blue
    (242 / 255.0, 142 / 255.0, 43 / 255.0),  # influence, orange
    (89 / 255.0, 161 / 255.0, 79 / 255.0),  # passive, green
    (150 / 255.0, 150 / 255.0, 150 / 255.0),  # other, grey
]


def _plot_value(value: float) -> float:
    return 0.0 if math.isnan(value) else value


def render_chart(
    series: ReportSeries,
    output_path: Path,
    kind: str = "bar",
    title: str = "Movimenti mensili",
) -> Path:
    """Draw one group per month with a bar (or line) per category series."""
    if kind not in CHART_KINDS:
        raise ValueError(f"Unknown chart kind {kind!r}, expected one of {', '.join(CHART_KINDS)}")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    months = list(series.labels)
    all_series = series.series()
    x = list(range(len(months)))

    width = max(6.0, 1.6 * len(months) + 2.0)
    fig, ax = plt.subplots(figsize=(width, 3.6), dpi=100)

    if kind == "bar":
        bar_w = 0.8 / len(all_series)
        for pos, (category, color) in enumerate(zip(all_series, SERIES_COLORS)):
            offset = (pos - (len(all_series) - 1) / 2) * bar_w
            xs = [i + offset for i in x]
            heights = [_plot_value(v) for v in category.values]
            ax.bar(xs, heights, width=bar_w * 0.95, color=color, label=category.label)
            for xi, value, height in zip(xs, category.values, heights):
                va = "bottom" if height >= 0 else "top"
                ax.text(xi, height, format_amount(value), ha="center", va=va, fontsize=6, color="#1f1f1f", rotation=90)
    else:
        for category, color in zip(all_series, SERIES_COLORS):
            ax.plot(x, [_plot_value(v) for v in category.values], marker="o", color=color, label=category.label)

    ax.axhline(0, color="#646464", linewidth=0.8)
    ax.set_xticks(x)
    ax.set_xticklabels(months, fontsize=8)
    ax.set_ylabel("Euro", fontsize=8)
    ax.grid(axis="y", linestyle="--", alpha=0.25)
    ax.set_axisbelow(True)
    ax.legend(loc="upper left", frameon=False, fontsize=8)
    ax.set_title(title, fontsize=9)
    fig.tight_layout()
    fig.savefig(output_path)
    plt.close(fig)
    return output_path
