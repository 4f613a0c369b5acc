"""Pair the descriptor rows of a movements table with their transactions.

The page emits every transaction as two rows: the movement itself followed by a
row whose ``data_operazione`` cell holds the category descriptor (for example
``Giustizia-Trasferimento``). Row 0 is the table's own heading read back as
data. Even rows are therefore noise or descriptors; odd rows are movements.
"""

from __future__ import annotations

from collections.abc import Sequence

from .models import Expense, Income, Movement, RawRow, TransactionRecord


def movement_for(row: RawRow) -> Movement:
    if row.entrate:
        return Income(row.entrate)
    return Expense(row.uscite)


def reconcile_rows(raw_rows: Sequence[RawRow]) -> list[TransactionRecord]:
    records: list[TransactionRecord] = []
    for idx in range(1, len(raw_rows), 2):
        row = raw_rows[idx]
        donor = idx + 1
        description = raw_rows[donor].data_operazione if donor < len(raw_rows) else None
        records.append(
            TransactionRecord(
                data_operazione=row.data_operazione,
                entrate=row.entrate,
                uscite=row.uscite,
                erogante=row.erogante,
                beneficiario=row.beneficiario,
                descrizione=description,
                movement=movement_for(row),
            )
        )
    return records
