from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator

from .html_source import DEFAULT_MONTH_HEADER_CLASS, clean_text, has_class, iter_elements
from .models import MonthEntry

logger = logging.getLogger(__name__)

_LEADING_NON_DIGITS_RE = re.compile(r"^\D+")


class MonthRegistry:
    """Months shown on the page, in page order (most recent first)."""

    def __init__(self, entries: Iterable[MonthEntry] = ()) -> None:
        by_id: dict[str, MonthEntry] = {}
        for entry in entries:
            if entry.id in by_id:
                logger.warning("Duplicate month header %s (%s) ignored", entry.id, entry.label)
                continue
            by_id[entry.id] = entry
        self._by_id = by_id

    @classmethod
    def discover(cls, document: str, header_class: str = DEFAULT_MONTH_HEADER_CLASS) -> "MonthRegistry":
        entries: list[MonthEntry] = []
        for attrs, inner in iter_elements(document, lambda a: has_class(a, header_class)):
            month_id = _LEADING_NON_DIGITS_RE.sub("", attrs.get("id", ""))
            if not month_id.isdigit():
                logger.warning("Skipping month header without numeric id: %r", attrs.get("id"))
                continue
            entries.append(MonthEntry(id=month_id, label=clean_text(inner)))
        registry = cls(entries)
        if not registry:
            logger.warning("No month headers with class %r found", header_class)
        return registry

    @property
    def entries(self) -> list[MonthEntry]:
        return list(self._by_id.values())

    def ids(self) -> list[str]:
        return list(self._by_id)

    def labels(self) -> list[str]:
        return [entry.label for entry in self._by_id.values()]

    def label_for(self, month_id: str) -> str:
        return self._by_id[month_id].label

    def __iter__(self) -> Iterator[MonthEntry]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)
