from __future__ import annotations

import html
import logging
import re
from collections.abc import Callable, Iterator, Mapping
from typing import Protocol

from .errors import MissingSourceError
from .models import RawRow

logger = logging.getLogger(__name__)

DEFAULT_TABLE_ID_TEMPLATE = "movimenti_{index}"
DEFAULT_MONTH_HEADER_CLASS = "mese"

_START_TAG_RE = re.compile(r"<(?P<tag>[a-zA-Z][\w-]*)(?P<attrs>(?:\s[^>]*)?)>", re.DOTALL)
_ATTR_RE = re.compile(r"""([\w:.-]+)\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'>]+))""")
_ROW_RE = re.compile(r"<tr\b[^>]*>(.*?)(?=<tr\b|</tbody>|</thead>|</tfoot>|</table>|$)", re.IGNORECASE | re.DOTALL)
_CELL_RE = re.compile(r"<t([dh])\b([^>]*)>(.*?)(?:</t\1>|(?=<t[dh]\b)|$)", re.IGNORECASE | re.DOTALL)


class RowExtractor(Protocol):
    def rows_for(self, month_id: str) -> list[RawRow]: ...


def clean_text(value: str) -> str:
    value = re.sub(r"<[^>]+>", "", value)
    value = html.unescape(value)
    value = value.replace("\xa0", " ")
    return " ".join(value.split())


def parse_attrs(raw: str) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for match in _ATTR_RE.finditer(raw):
        name = match.group(1).lower()
        value = next((g for g in match.groups()[1:] if g is not None), "")
        attrs.setdefault(name, html.unescape(value))
    return attrs


def iter_elements(document: str, predicate: Callable[[dict[str, str]], bool]) -> Iterator[tuple[dict[str, str], str]]:
    """Yield ``(attrs, inner_html)`` for every element whose attributes satisfy ``predicate``."""
    for match in _START_TAG_RE.finditer(document):
        attrs = parse_attrs(match.group("attrs"))
        if not predicate(attrs):
            continue
        tag = match.group("tag")
        close = re.compile(rf"</{re.escape(tag)}\s*>", re.IGNORECASE).search(document, match.end())
        end = close.start() if close else len(document)
        yield attrs, document[match.end():end]


def has_class(attrs: Mapping[str, str], name: str) -> bool:
    return name in attrs.get("class", "").split()


def find_table(document: str, table_id: str) -> str | None:
    for _, inner in iter_elements(document, lambda attrs: attrs.get("id") == table_id):
        return inner
    return None


def parse_table_rows(table_html: str) -> list[RawRow]:
    rows: list[RawRow] = []
    for row_match in _ROW_RE.finditer(table_html):
        cells: list[str] = []
        for cell_match in _CELL_RE.finditer(row_match.group(1)):
            attrs = parse_attrs(cell_match.group(2))
            text = clean_text(cell_match.group(3))
            try:
                span = max(1, int(attrs.get("colspan", "1")))
            except ValueError:
                span = 1
            cells.extend([text] * span)
        rows.append(RawRow.from_cells(cells))
    return rows


class HtmlRowExtractor:
    """Reads the movements table of a month out of a saved ``scheda_euro`` page."""

    def __init__(self, document: str, table_id_template: str = DEFAULT_TABLE_ID_TEMPLATE) -> None:
        self.document = document
        self.table_id_template = table_id_template

    def table_id(self, month_id: str) -> str:
        # month ids count from 0, table ids from 1
        return self.table_id_template.format(index=int(month_id) + 1)

    def rows_for(self, month_id: str) -> list[RawRow]:
        table_id = self.table_id(month_id)
        table_html = find_table(self.document, table_id)
        if table_html is None:
            raise MissingSourceError(month_id, f"#{table_id}")
        rows = parse_table_rows(table_html)
        logger.debug("Read %d rows from #%s", len(rows), table_id)
        return rows


class FixtureRowExtractor:
    def __init__(self, tables: Mapping[str, list[Mapping[str, str]]]) -> None:
        self.tables = {str(key): [RawRow.from_mapping(dict(row)) for row in rows] for key, rows in tables.items()}

    def rows_for(self, month_id: str) -> list[RawRow]:
        try:
            return list(self.tables[month_id])
        except KeyError:
            raise MissingSourceError(month_id, "fixture") from None
