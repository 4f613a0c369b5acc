from __future__ import annotations

import math
import re
from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Context, Decimal

from .categories import matches_descriptors
from .models import TransactionRecord

_FLOAT_PREFIX_RE = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_CENT = Decimal("0.01")
# wide enough for any finite double
_FIXED_CONTEXT = Context(prec=400)


def parse_float(text: str | None) -> float:
    """Convert the leading decimal literal of ``text``, ignoring what follows.

    Mirrors the browser's ``parseFloat``: ``"12.5 EUR"`` is 12.5, ``"abc"`` and
    ``""`` are NaN.
    """
    if text is None:
        return math.nan
    match = _FLOAT_PREFIX_RE.match(text.lstrip())
    if not match:
        return math.nan
    literal = match.group(0)
    if literal.endswith("Infinity"):
        return -math.inf if literal.startswith("-") else math.inf
    return float(literal)


def _to_fixed(value: float) -> str:
    # ties go away from zero, like the browser's toFixed(2)
    cents = Decimal(value + 0.0).quantize(_CENT, rounding=ROUND_HALF_UP, context=_FIXED_CONTEXT)
    return f"{cents:f}"


def round_amount(value: float) -> float:
    if math.isnan(value) or math.isinf(value):
        return value
    return float(_to_fixed(value))


def format_amount(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "-Infinity" if value < 0 else "Infinity"
    return _to_fixed(value)


def net_sum(records: Iterable[TransactionRecord], descriptors: object) -> float:
    # expenses are added unsigned, same as income
    total = 0.0
    for record in records:
        if not matches_descriptors(record.descrizione, descriptors):
            continue
        total += parse_float(record.movement.amount)
    return round_amount(total)
