"""Load :class:`~cashflow_trends.models.Transaction` records from CSV.

Expected header (case-insensitive, extra columns ignored)::

    date,amount,description

Rows are validated with Pydantic. Amounts are normalized to ``Decimal`` and
may carry a sign, a leading ``$``, thousands separators, or accounting
parentheses (``"($1,234.56)"`` is ``-1234.56``). Dates stay raw strings;
resolving them is the aggregators' job.
"""

from __future__ import annotations

import csv
import os
import re
from decimal import Decimal
from os import PathLike
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .logging_setup import get_logger
from .models import Transaction

REQUIRED_COLUMNS: tuple[str, ...] = ("date", "amount", "description")

logger = get_logger(__name__)


class IngestError(ValueError):
    """Raised when a CSV file cannot be turned into transactions."""


# Optional sign, optional "$", optional accounting parentheses, then digits
# with thousands separators. "-($1,234.56)" and "$(1,234.56)" both match.
_AMOUNT_RE = re.compile(
    r"""
    (?P<sign>[+-])?\s*
    \$?\s*
    (?P<open>\()?\s*
    \$?\s*
    (?P<number>\d[\d,]*(?:\.\d*)?|\.\d+)
    \s*(?P<close>\))?
    """,
    re.VERBOSE,
)


def parse_amount(raw: str) -> Decimal:
    """Parse a CSV amount cell into a signed ``Decimal``.

    Parentheses mean a debit, so ``"(0.99)"`` and ``"-0.99"`` are equal.
    Raises ``ValueError`` for anything else, including ``NaN`` and
    ``Infinity``.
    """

    m = _AMOUNT_RE.fullmatch(raw.strip())
    if m is None or bool(m["open"]) != bool(m["close"]):
        raise ValueError(f"invalid amount: {raw!r}")
    value = Decimal(m["number"].replace(",", ""))
    return -value if m["sign"] == "-" or m["open"] else value


class _CsvRow(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    date: str
    amount: Decimal
    description: str = ""

    @field_validator("date")
    @classmethod
    def _date_non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("date is empty")
        return v

    @field_validator("amount", mode="before")
    @classmethod
    def _parse_amount(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_amount(v)
        return v

    def to_transaction(self) -> Transaction:
        return Transaction(date=self.date, amount=self.amount, description=self.description)


def _normalize_header(fieldnames: list[str] | None) -> dict[str, str]:
    """Map lower-cased, trimmed column names to the names used in the file."""

    return {name.strip().lower(): name for name in (fieldnames or []) if name is not None}


def load_transactions_csv(csv_path: str | PathLike[str]) -> list[Transaction]:
    """Read ``csv_path`` and return its transactions in file order.

    Raises :class:`IngestError` for a missing header, missing required
    columns, or an invalid row (reported with its 1-based data row number).
    ``OSError`` from opening the file propagates unchanged.
    """

    p = Path(csv_path)
    with p.open(encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        columns = _normalize_header(reader.fieldnames)
        if not columns:
            raise IngestError(f"CSV appears to have no header row: {os.fspath(p)}")
        missing = [c for c in REQUIRED_COLUMNS if c not in columns]
        if missing:
            raise IngestError("CSV is missing required columns: " + ", ".join(missing))

        transactions: list[Transaction] = []
        try:
            for row_no, row in enumerate(reader, start=1):
                values = {c: row.get(columns[c]) or "" for c in REQUIRED_COLUMNS}
                if all(v.strip() == "" for v in values.values()):
                    continue
                try:
                    parsed = _CsvRow.model_validate(values)
                except ValidationError as e:
                    raise IngestError(f"invalid row {row_no} in {os.fspath(p)}: {e}") from e
                transactions.append(parsed.to_transaction())
        except csv.Error as e:
            raise IngestError(f"failed to parse CSV {os.fspath(p)}: {e}") from e

    logger.info("Loaded %d transactions from %s", len(transactions), p)
    return transactions


__all__ = ["REQUIRED_COLUMNS", "IngestError", "load_transactions_csv", "parse_amount"]
