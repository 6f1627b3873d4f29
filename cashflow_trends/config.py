"""Aggregation settings and the TOML loader that extends them.

The format and rule tables are plain values carried by
:class:`AggregationConfig` and passed into every aggregation call; nothing in
the package mutates module-level tables. A config file may only *append* to
the built-in tables, so the built-in precedence order never changes.

File shape::

    date_formats = ["%Y/%m/%d"]

    [[categories]]
    label = "Subscriptions"
    keywords = ["netflix", "spotify"]

    fallback_category = "Miscellaneous"   # optional
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from os import PathLike
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .categorize import CATEGORY_RULES, MISCELLANEOUS, CategoryRule
from .dates import DATE_FORMATS, DateFormat
from .logging_setup import get_logger

CONFIG_PATH_ENV = "CASHFLOW_TRENDS_CONFIG"

logger = get_logger(__name__)


class ConfigError(ValueError):
    """Raised for unreadable or invalid configuration files."""


@dataclass(frozen=True, slots=True)
class AggregationConfig:
    """Tables used by the date parser and the categorizer."""

    date_formats: tuple[DateFormat, ...] = DATE_FORMATS
    category_rules: tuple[CategoryRule, ...] = CATEGORY_RULES
    fallback_category: str = MISCELLANEOUS


DEFAULT_CONFIG = AggregationConfig()


# ---------------------------------------------------------------------------
# File schema
# ---------------------------------------------------------------------------


class _RuleEntry(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    label: str
    keywords: list[str]

    @field_validator("label")
    @classmethod
    def _label_non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("label must be a non-empty string")
        return v

    @field_validator("keywords")
    @classmethod
    def _normalize_keywords(cls, v: list[str]) -> list[str]:
        # Descriptions are lower-cased before matching, so keywords must be too.
        cleaned = [k.strip().lower() for k in v if k.strip()]
        if not cleaned:
            raise ValueError("keywords must contain at least one non-empty string")
        return cleaned


class _ConfigFile(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    date_formats: list[str] = []
    categories: list[_RuleEntry] = []
    fallback_category: str | None = None

    @field_validator("date_formats")
    @classmethod
    def _directives_have_fields(cls, v: list[str]) -> list[str]:
        for directive in v:
            if "%" not in directive:
                raise ValueError(f"not a strftime directive: {directive!r}")
        return v


def load_config(path: str | PathLike[str]) -> AggregationConfig:
    """Read ``path`` and return the default config extended by its contents.

    Raises :class:`ConfigError` when the file is missing, is not valid TOML,
    or does not match the expected shape.
    """

    p = Path(path)
    try:
        with p.open("rb") as f:
            raw = tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"cannot read config file {os.fspath(p)!r}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"invalid TOML in {os.fspath(p)!r}: {e}") from e

    try:
        parsed = _ConfigFile.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"invalid config file {os.fspath(p)!r}: {e}") from e

    extra_formats = tuple(DateFormat(d, d) for d in parsed.date_formats)
    extra_rules = tuple(CategoryRule(tuple(r.keywords), r.label) for r in parsed.categories)
    logger.debug(
        "Loaded %s: %d extra date formats, %d extra category rules",
        p,
        len(extra_formats),
        len(extra_rules),
    )
    return AggregationConfig(
        date_formats=DEFAULT_CONFIG.date_formats + extra_formats,
        category_rules=DEFAULT_CONFIG.category_rules + extra_rules,
        fallback_category=parsed.fallback_category or DEFAULT_CONFIG.fallback_category,
    )


__all__ = [
    "CONFIG_PATH_ENV",
    "DEFAULT_CONFIG",
    "AggregationConfig",
    "ConfigError",
    "load_config",
]
