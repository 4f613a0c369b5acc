"""Tests for reading movements tables out of the saved page."""

import pytest

from vcpcalc.errors import MissingSourceError
from vcpcalc.html_source import FixtureRowExtractor, HtmlRowExtractor, clean_text, parse_attrs, parse_table_rows
from vcpcalc.models import RawRow


class TestCleanText:
    def test_tags_entities_whitespace(self):
        assert clean_text("  <b>Alta&nbsp;Societ&agrave;</b>\n ") == "Alta Società"

    def test_empty(self):
        assert clean_text("&nbsp;") == ""


class TestParseAttrs:
    def test_quoting_styles(self):
        attrs = parse_attrs(""" id="movimenti_1" class='mese big' colspan=5 """)
        assert attrs == {"id": "movimenti_1", "class": "mese big", "colspan": "5"}

    def test_names_lowercased(self):
        assert parse_attrs(' ID="x"') == {"id": "x"}


class TestParseTableRows:
    def test_header_row_kept_as_data(self):
        rows = parse_table_rows(
            "<tr><th></th><th>Data</th><th>Entrate</th><th>Uscite</th><th>Erogante</th><th>Beneficiario</th></tr>"
            "<tr><td></td><td>03/03</td><td>1.00</td><td></td><td>A</td><td>B</td></tr>"
        )
        assert rows[0] == RawRow("", "Data", "Entrate", "Uscite", "Erogante", "Beneficiario")
        assert rows[1] == RawRow("", "03/03", "1.00", "", "A", "B")

    def test_colspan_repeats_text(self):
        rows = parse_table_rows('<tr><td></td><td colspan="5">Giustizia-Trasferimento</td></tr>')
        assert rows[0].data_operazione == "Giustizia-Trasferimento"
        assert rows[0].beneficiario == "Giustizia-Trasferimento"

    def test_short_rows_padded(self):
        rows = parse_table_rows("<tr><td>x</td></tr>")
        assert rows == [RawRow(empty="x")]

    def test_unclosed_cells_and_rows(self):
        rows = parse_table_rows("<tbody><tr><td>a<td>b<tr><td>c</tbody>")
        assert [r.empty for r in rows] == ["a", "c"]
        assert rows[0].data_operazione == "b"


class TestHtmlRowExtractor:
    def test_table_id_counts_from_one(self, page):
        extractor = HtmlRowExtractor(page)
        assert extractor.table_id("0") == "movimenti_1"
        assert extractor.table_id("1") == "movimenti_2"

    def test_rows_for_month(self, page):
        rows = HtmlRowExtractor(page).rows_for("0")
        assert len(rows) == 7
        assert rows[0].data_operazione == "Data operazione"
        assert rows[1].entrate == "100.00"
        assert rows[2].data_operazione == "Giustizia-Trasferimento"

    def test_nbsp_cell_is_empty(self, page):
        rows = HtmlRowExtractor(page).rows_for("1")
        assert rows[1].entrate == ""
        assert rows[1].uscite == "12.25"

    def test_missing_table(self, page):
        with pytest.raises(MissingSourceError) as excinfo:
            HtmlRowExtractor(page).rows_for("5")
        assert excinfo.value.month_id == "5"
        assert "#movimenti_6" in str(excinfo.value)

    def test_custom_template(self):
        document = '<table id="tab-3"><tr><td>h</td></tr></table>'
        rows = HtmlRowExtractor(document, table_id_template="tab-{index}").rows_for("2")
        assert rows == [RawRow(empty="h")]


class TestFixtureRowExtractor:
    def test_rows_from_mappings(self):
        extractor = FixtureRowExtractor({"0": [{"data_operazione": "HEADER"}, {"entrate": "1"}]})
        assert extractor.rows_for("0") == [RawRow(data_operazione="HEADER"), RawRow(entrate="1")]

    def test_unknown_month(self):
        with pytest.raises(MissingSourceError):
            FixtureRowExtractor({}).rows_for("0")
