"""Data models and type aliases for ``cashflow_trends``.

Records are frozen dataclasses and series are tuples so that nothing handed
to a presentation layer can be mutated after the fact.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Final, NamedTuple

# ---------------------------------------------------------------------------
# Input records
# ---------------------------------------------------------------------------

type Amount = int | float | Decimal
"""A signed amount: positive for income, negative for expenses."""


@dataclass(frozen=True, slots=True)
class Transaction:
    """A single dated transaction as supplied by the caller.

    Attributes
    ----------
    date:
        Raw date string in one of the supported formats (see
        :mod:`cashflow_trends.dates`). Parsing happens during aggregation.
    amount:
        Signed amount.
    description:
        Free text used for keyword classification.
    """

    date: str
    amount: Amount
    description: str


@dataclass(frozen=True, slots=True)
class ParsedTransaction:
    """A :class:`Transaction` paired with its resolved calendar date."""

    transaction: Transaction
    on: dt.date

    @property
    def month(self) -> MonthKey:
        return month_key(self.on)


type Transactions = Iterable[Transaction]

# ---------------------------------------------------------------------------
# Output series
# ---------------------------------------------------------------------------

type MonthKey = str
"""Canonical ``"YYYY-MM"`` bucket key; lexicographic order is chronological."""


def month_key(on: dt.date) -> MonthKey:
    """Return the ``"YYYY-MM"`` key of the month containing ``on``."""

    return f"{on.year:04d}-{on.month:02d}"


class MonthPoint(NamedTuple):
    """One ``(month, value)`` entry of a monthly series."""

    month: MonthKey
    value: Amount


type MonthlySeries = tuple[MonthPoint, ...]
"""Points sorted ascending by month, each month at most once."""

type CategorySeriesSet = Mapping[str, MonthlySeries]
"""Read-only mapping from category label to its monthly series."""


@dataclass(frozen=True, slots=True)
class TrendReport:
    """Both derived series computed from one transaction list."""

    overall: MonthlySeries
    by_category: CategorySeriesSet


# ---------------------------------------------------------------------------
# No-data result
# ---------------------------------------------------------------------------


class NoData:
    """Result returned by the aggregators when there is nothing to aggregate.

    Distinct from an empty series: a caller can tell "no transactions were
    supplied" apart from "computed, zero months". Falsy. Compare against the
    module-level :data:`NO_DATA` instance with ``is``.
    """

    __slots__ = ()

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return "NO_DATA"


NO_DATA: Final[NoData] = NoData()

# Name used by callers that think of the no-data result as a signal.
EmptyInputSignal = NoData


__all__ = [
    "NO_DATA",
    "Amount",
    "CategorySeriesSet",
    "EmptyInputSignal",
    "MonthKey",
    "MonthPoint",
    "MonthlySeries",
    "NoData",
    "ParsedTransaction",
    "Transaction",
    "Transactions",
    "TrendReport",
    "month_key",
]
