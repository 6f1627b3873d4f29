"""Month-bucketed aggregation of transactions.

:func:`overall_series` produces the running balance by month and
:func:`category_series` the plain (non-cumulative) monthly sums per category.
Both are pure functions of their input: every call parses, sorts and buckets
from scratch, and neither touches the caller's records.

Failure semantics
-----------------
- A single unparseable date aborts the call with
  :class:`~cashflow_trends.dates.DateFormatError`; no partial series is
  returned.
- Empty (or ``None``) input returns :data:`~cashflow_trends.models.NO_DATA`
  instead of an empty series.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from types import MappingProxyType
from typing import cast

from .categorize import categorize
from .config import DEFAULT_CONFIG, AggregationConfig
from .dates import DateFormat, parse_date
from .models import (
    NO_DATA,
    Amount,
    CategorySeriesSet,
    MonthKey,
    MonthlySeries,
    MonthPoint,
    NoData,
    ParsedTransaction,
    Transaction,
    Transactions,
    TrendReport,
)

# ---------------------------------------------------------------------------
# Shared steps
# ---------------------------------------------------------------------------


def _materialize(transactions: Transactions | None) -> list[Transaction]:
    return [] if transactions is None else list(transactions)


def _parse_sorted(
    transactions: Sequence[Transaction], formats: Sequence[DateFormat]
) -> list[ParsedTransaction]:
    """Parse every date (fail-fast) and stable-sort by the parsed date."""

    parsed = [ParsedTransaction(tx, parse_date(tx.date, formats)) for tx in transactions]
    parsed.sort(key=lambda p: p.on)
    return parsed


def _plus(a: Amount, b: Amount) -> Amount:
    # Decimal + float raises TypeError; lift the float through its repr.
    if isinstance(a, Decimal) and isinstance(b, float):
        return a + Decimal(str(b))
    if isinstance(a, float) and isinstance(b, Decimal):
        return Decimal(str(a)) + b
    return a + b


def _add(buckets: dict[MonthKey, Amount], month: MonthKey, amount: Amount) -> None:
    buckets[month] = _plus(buckets.get(month, 0), amount)


def _to_series(buckets: dict[MonthKey, Amount]) -> MonthlySeries:
    return tuple(MonthPoint(m, buckets[m]) for m in sorted(buckets))


# ---------------------------------------------------------------------------
# Public aggregators
# ---------------------------------------------------------------------------


def overall_series(
    transactions: Transactions | None,
    *,
    config: AggregationConfig = DEFAULT_CONFIG,
) -> MonthlySeries | NoData:
    """Return the cumulative balance at the end of each month with activity.

    Example: ``+100`` on 2024-01-05, ``-30`` on 2024-01-20 and ``+50`` on
    2024-02-01 give ``(("2024-01", 70), ("2024-02", 120))``.
    """

    txs = _materialize(transactions)
    if not txs:
        return NO_DATA

    buckets: dict[MonthKey, Amount] = {}
    for p in _parse_sorted(txs, config.date_formats):
        _add(buckets, p.month, p.transaction.amount)

    points: list[MonthPoint] = []
    running: Amount = 0
    for month, total in _to_series(buckets):
        running = _plus(running, total)
        points.append(MonthPoint(month, running))
    return tuple(points)


def category_series(
    transactions: Transactions | None,
    *,
    config: AggregationConfig = DEFAULT_CONFIG,
) -> CategorySeriesSet | NoData:
    """Return plain monthly sums per category.

    Only categories with at least one transaction are present. Each series is
    sorted by month on its own; month ranges are not aligned across
    categories. Categories iterate in the order they first occur by date.
    """

    txs = _materialize(transactions)
    if not txs:
        return NO_DATA

    by_category: dict[str, dict[MonthKey, Amount]] = {}
    for p in _parse_sorted(txs, config.date_formats):
        label = categorize(
            p.transaction.description,
            config.category_rules,
            fallback=config.fallback_category,
        )
        _add(by_category.setdefault(label, {}), p.month, p.transaction.amount)

    return MappingProxyType(
        {label: _to_series(buckets) for label, buckets in by_category.items()}
    )


def build_trends(
    transactions: Transactions | None,
    *,
    config: AggregationConfig = DEFAULT_CONFIG,
) -> TrendReport | NoData:
    """Compute both series from a single read of ``transactions``."""

    txs = _materialize(transactions)
    if not txs:
        return NO_DATA
    # Non-empty input never yields NO_DATA from either aggregator.
    return TrendReport(
        overall=cast(MonthlySeries, overall_series(txs, config=config)),
        by_category=cast(CategorySeriesSet, category_series(txs, config=config)),
    )


__all__ = ["build_trends", "category_series", "overall_series"]
