"""Tolerant date parsing over an ordered table of formats.

Transaction exports mix date formats, and strings such as ``"03-04-2024"``
are ambiguous between day-first and month-first readings. The table below is
the tie-break: formats are tried top to bottom and the first strict match
wins. ISO comes first so ISO dates are never read as ``DD-MM-YY``.

Two-digit years always land in 2000-2099 (``"31-12-99"`` is 2099-12-31).
Python's ``%y`` pivot would put 69-99 in the 1900s; that rule is overridden
here on purpose.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Sequence
from typing import NamedTuple

TWO_DIGIT_YEAR_BASE = 2000


class DateFormat(NamedTuple):
    """A named ``strptime`` directive."""

    label: str
    directive: str

    @property
    def two_digit_year(self) -> bool:
        return "%y" in self.directive


# Order matters: see module docstring.
DATE_FORMATS: tuple[DateFormat, ...] = (
    DateFormat("YYYY-MM-DD", "%Y-%m-%d"),
    DateFormat("DD-MM-YY", "%d-%m-%y"),
    DateFormat("DD-MM-YYYY", "%d-%m-%Y"),
    DateFormat("MM-DD-YYYY", "%m-%d-%Y"),
)


class DateFormatError(ValueError):
    """Raised when a date string matches none of the known formats.

    The offending input is kept on :attr:`value`.
    """

    def __init__(self, value: object) -> None:
        super().__init__(f"Unable to parse date: {value!r}")
        self.value = value


def _strict_parse(s: str, fmt: DateFormat) -> dt.date:
    stamp = dt.datetime.strptime(s, fmt.directive)
    # strptime accepts "5-1-2024" for "%d-%m-%Y"; require full-width fields.
    # Compare on the datetime so time-of-day fields survive the round trip.
    if stamp.strftime(fmt.directive) != s:
        raise ValueError(f"{s!r} is not in {fmt.label} form")
    parsed = stamp.date()
    if fmt.two_digit_year:
        parsed = parsed.replace(year=TWO_DIGIT_YEAR_BASE + parsed.year % 100)
    return parsed


def parse_date(value: str, formats: Sequence[DateFormat] = DATE_FORMATS) -> dt.date:
    """Resolve ``value`` to a calendar date using the first matching format.

    Raises :class:`DateFormatError` when no format in ``formats`` matches.
    Out-of-range days and months are rejected rather than rolled over.
    """

    if not isinstance(value, str):
        raise DateFormatError(value)
    s = value.strip()
    for fmt in formats:
        try:
            return _strict_parse(s, fmt)
        except ValueError:
            continue
    raise DateFormatError(value)


__all__ = [
    "DATE_FORMATS",
    "TWO_DIGIT_YEAR_BASE",
    "DateFormat",
    "DateFormatError",
    "parse_date",
]
