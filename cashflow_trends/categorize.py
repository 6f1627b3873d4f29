"""Keyword-based category classification.

Descriptions are matched against an ordered rule table; the first rule with
any keyword contained in the lower-cased description wins, and anything left
over is ``Miscellaneous``. Matching is plain substring containment, so
``"nonfood item"`` is Food.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import StrEnum
from typing import NamedTuple


class Category(StrEnum):
    FOOD = "Food"
    RENT = "Rent"
    GROCERIES = "Groceries"
    TRANSPORTATION = "Transportation"
    UTILITIES = "Utilities"
    MISCELLANEOUS = "Miscellaneous"


MISCELLANEOUS: str = Category.MISCELLANEOUS


class CategoryRule(NamedTuple):
    """Keywords (lower-case) and the label they select."""

    keywords: tuple[str, ...]
    label: str

    def matches(self, text: str) -> bool:
        return any(k in text for k in self.keywords)


# First match wins: "restaurant bill" is Food, not Utilities.
CATEGORY_RULES: tuple[CategoryRule, ...] = (
    CategoryRule(("food", "restaurant"), Category.FOOD),
    CategoryRule(("rent", "housing"), Category.RENT),
    CategoryRule(("grocery", "supermarket"), Category.GROCERIES),
    CategoryRule(("transport", "fuel"), Category.TRANSPORTATION),
    CategoryRule(("utility", "bill"), Category.UTILITIES),
)


def categorize(
    description: str | None,
    rules: Sequence[CategoryRule] = CATEGORY_RULES,
    *,
    fallback: str = MISCELLANEOUS,
) -> str:
    """Return the label of the first rule matching ``description``.

    Total over all inputs: ``None`` and ``""`` classify as ``fallback``.
    """

    text = (description or "").lower().strip()
    for rule in rules:
        if rule.matches(text):
            return rule.label
    return fallback


__all__ = ["CATEGORY_RULES", "MISCELLANEOUS", "Category", "CategoryRule", "categorize"]
