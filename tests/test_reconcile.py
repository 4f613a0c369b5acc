"""Tests for pairing descriptor rows with their movements."""

from vcpcalc.models import Expense, Income, RawRow
from vcpcalc.reconcile import reconcile_rows


def _rows(*specs):
    return [RawRow(data_operazione=d, entrate=e, uscite=u) for d, e, u in specs]


class TestReconcileRows:
    def test_descriptor_follows_its_movement(self):
        raw = _rows(
            ("HEADER", "", ""),
            ("01/03", "100.00", ""),
            ("Giustizia-Trasferimento", "", ""),
            ("02/03", "", "50.00"),
            ("Finanza-Bonus", "", ""),
        )
        records = reconcile_rows(raw)

        assert [r.descrizione for r in records] == ["Giustizia-Trasferimento", "Finanza-Bonus"]
        assert [r.entrate for r in records] == ["100.00", ""]
        assert [r.uscite for r in records] == ["", "50.00"]
        assert [r.data_operazione for r in records] == ["01/03", "02/03"]

    def test_only_header_row(self):
        """A table holding just its heading yields no movements."""
        assert reconcile_rows(_rows(("HEADER", "", ""))) == []

    def test_empty_input(self):
        assert reconcile_rows([]) == []

    def test_trailing_movement_without_descriptor(self):
        raw = _rows(
            ("HEADER", "", ""),
            ("01/03", "10", ""),
            ("Polizia-Multa", "", ""),
            ("02/03", "5", ""),
        )
        records = reconcile_rows(raw)
        assert len(records) == 2
        assert records[0].descrizione == "Polizia-Multa"
        assert records[1].descrizione is None

    def test_survivors_are_odd_rows(self):
        raw = [RawRow(data_operazione=str(i), entrate=str(i)) for i in range(9)]
        records = reconcile_rows(raw)

        assert [r.data_operazione for r in records] == ["1", "3", "5", "7"]
        assert [r.descrizione for r in records] == ["2", "4", "6", "8"]
        assert len(raw) - len(records) == len(range(0, 9, 2))

    def test_input_not_mutated(self):
        raw = _rows(("HEADER", "", ""), ("01/03", "1", ""), ("Media-Intervista", "", ""))
        before = list(raw)
        reconcile_rows(raw)
        assert raw == before

    def test_movement_kind_decided_once(self):
        raw = _rows(
            ("HEADER", "", ""),
            ("01/03", "100.00", "3.00"),
            ("x", "", ""),
            ("02/03", "", "50.00"),
            ("y", "", ""),
            ("03/03", "", ""),
        )
        records = reconcile_rows(raw)

        assert records[0].movement == Income("100.00")
        assert records[1].movement == Expense("50.00")
        # neither amount present: still an expense, with an empty amount
        assert records[2].movement == Expense("")
        assert [r.kind for r in records] == ["income", "expense", "expense"]
