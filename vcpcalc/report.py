from __future__ import annotations

import logging
from dataclasses import dataclass
from collections.abc import Mapping
from typing import Any

from .aggregate import net_sum, round_amount
from .categories import ALL, INFLUENCE_DESCRIPTORS, PASSIVE_DESCRIPTORS, normalize_descriptors
from .html_source import RowExtractor
from .models import CategorySeries, MonthReport, ReportSeries
from .months import MonthRegistry
from .reconcile import reconcile_rows

logger = logging.getLogger(__name__)

DEFAULT_SERIES_LABELS = {
    "total": "Totale",
    "influence": "Influenze",
    "passive": "Passive",
    "other": "Altro",
}


@dataclass(frozen=True)
class ReportConfig:
    influence_descriptors: tuple[str, ...] = INFLUENCE_DESCRIPTORS
    passive_descriptors: tuple[str, ...] = PASSIVE_DESCRIPTORS
    total_label: str = DEFAULT_SERIES_LABELS["total"]
    influence_label: str = DEFAULT_SERIES_LABELS["influence"]
    passive_label: str = DEFAULT_SERIES_LABELS["passive"]
    other_label: str = DEFAULT_SERIES_LABELS["other"]

    @classmethod
    def from_mapping(cls, cfg: Mapping[str, Any]) -> "ReportConfig":
        categories = cfg.get("categories", {}) or {}
        labels = {**DEFAULT_SERIES_LABELS, **((cfg.get("reports", {}) or {}).get("series_labels") or {})}
        return cls(
            influence_descriptors=normalize_descriptors(categories.get("influence"), INFLUENCE_DESCRIPTORS),
            passive_descriptors=normalize_descriptors(categories.get("passive"), PASSIVE_DESCRIPTORS),
            total_label=str(labels["total"]),
            influence_label=str(labels["influence"]),
            passive_label=str(labels["passive"]),
            other_label=str(labels["other"]),
        )


class ReportBuilder:
    def __init__(self, registry: MonthRegistry, extractor: RowExtractor, config: ReportConfig | None = None) -> None:
        self.registry = registry
        self.extractor = extractor
        self.config = config or ReportConfig()

    def build_month_reports(self) -> list[MonthReport]:
        reports: list[MonthReport] = []
        for month in self.registry:
            raw_rows = self.extractor.rows_for(month.id)
            records = reconcile_rows(raw_rows)
            logger.info("%s: %d movements", month.label, len(records))
            reports.append(MonthReport(month=month, records=tuple(records)))
        return reports

    def build_series(self) -> ReportSeries:
        """Aggregate every month and return the series oldest month first."""
        reports = self.build_month_reports()
        total: list[float] = []
        influence: list[float] = []
        passive: list[float] = []
        other: list[float] = []
        for report in reports:
            month_total = net_sum(report.records, ALL)
            month_influence = net_sum(report.records, self.config.influence_descriptors)
            total.append(month_total)
            influence.append(month_influence)
            passive.append(net_sum(report.records, self.config.passive_descriptors))
            other.append(round_amount(month_total - month_influence))

        return ReportSeries(
            labels=tuple(reversed([r.month.label for r in reports])),
            total=CategorySeries(self.config.total_label, tuple(reversed(total))),
            influence=CategorySeries(self.config.influence_label, tuple(reversed(influence))),
            passive=CategorySeries(self.config.passive_label, tuple(reversed(passive))),
            other=CategorySeries(self.config.other_label, tuple(reversed(other))),
            reports=tuple(reversed(reports)),
        )
