from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

COLUMNS = ("empty", "data_operazione", "entrate", "uscite", "erogante", "beneficiario")


@dataclass(frozen=True)
class RawRow:
    empty: str = ""
    data_operazione: str = ""
    entrate: str = ""
    uscite: str = ""
    erogante: str = ""
    beneficiario: str = ""

    @classmethod
    def from_cells(cls, cells: list[str]) -> "RawRow":
        padded = list(cells[: len(COLUMNS)]) + [""] * (len(COLUMNS) - len(cells))
        return cls(*padded)

    @classmethod
    def from_mapping(cls, values: dict[str, str]) -> "RawRow":
        return cls(**{name: str(values.get(name, "") or "") for name in COLUMNS})


@dataclass(frozen=True)
class Income:
    amount: str


@dataclass(frozen=True)
class Expense:
    amount: str


Movement = Union[Income, Expense]


@dataclass(frozen=True)
class TransactionRecord:
    data_operazione: str
    entrate: str
    uscite: str
    erogante: str
    beneficiario: str
    descrizione: str | None
    movement: Movement

    @property
    def kind(self) -> str:
        return "income" if isinstance(self.movement, Income) else "expense"


@dataclass(frozen=True)
class MonthEntry:
    id: str
    label: str


@dataclass(frozen=True)
class MonthReport:
    month: MonthEntry
    records: tuple[TransactionRecord, ...] = ()


@dataclass(frozen=True)
class CategorySeries:
    label: str
    values: tuple[float, ...] = ()


@dataclass(frozen=True)
class ReportSeries:
    labels: tuple[str, ...]
    total: CategorySeries
    influence: CategorySeries
    passive: CategorySeries
    other: CategorySeries
    reports: tuple[MonthReport, ...] = field(default=(), compare=False)

    def series(self) -> list[CategorySeries]:
        return [self.total, self.influence, self.passive, self.other]

    def __len__(self) -> int:
        return len(self.labels)
