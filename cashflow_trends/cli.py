"""CLI for the ``cashflow_trends`` package.

This module exposes plain command handlers (``cmd_overall_balance`` and
``cmd_category_breakdown``) that return process exit codes, and a Typer app
wiring them to the console. The root callback loads a local ``.env`` with
``python-dotenv`` and configures logging before any command runs.

Output is tab-separated text, one line per month:

- ``overall-balance``: ``<YYYY-MM>\\t<balance>``
- ``category-breakdown``: ``<category>\\t<YYYY-MM>\\t<amount>``
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from typer.models import OptionInfo

from .aggregate import category_series, overall_series
from .config import CONFIG_PATH_ENV, DEFAULT_CONFIG, AggregationConfig, ConfigError, load_config
from .dates import DateFormatError
from .ingest import IngestError, load_transactions_csv
from .logging_setup import configure_logging, get_logger
from .models import NoData, Transaction

logger = get_logger(__name__)

NO_DATA_MESSAGE = "No data: no transactions to aggregate."


# ---- Shared loading ----------------------------------------------------------


def _load_inputs(
    csv_path: str, config_path: str | None
) -> tuple[list[Transaction], AggregationConfig] | None:
    """Load config and transactions, reporting failures on stderr.

    Returns ``None`` after printing an error message.
    """

    resolved_config = config_path or os.getenv(CONFIG_PATH_ENV) or None
    try:
        config = load_config(resolved_config) if resolved_config else DEFAULT_CONFIG
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return None

    try:
        transactions = load_transactions_csv(csv_path)
    except FileNotFoundError:
        print(f"Error: File not found: {csv_path}", file=sys.stderr)
        return None
    except PermissionError:
        print(f"Error: Permission denied: {csv_path}", file=sys.stderr)
        return None
    except (IngestError, UnicodeDecodeError) as e:
        print(f"Error: Failed to read transactions: {e}", file=sys.stderr)
        return None
    return transactions, config


# ---- Command handlers --------------------------------------------------------


def cmd_overall_balance(csv_path: str, *, config_path: str | None = None) -> int:
    """Print the running balance by month for the transactions in ``csv_path``."""

    loaded = _load_inputs(csv_path, config_path)
    if loaded is None:
        return 1
    transactions, config = loaded

    try:
        series = overall_series(transactions, config=config)
    except DateFormatError as e:
        print(f"Error: unrecognized date {e.value!r} in {csv_path}", file=sys.stderr)
        return 1

    if isinstance(series, NoData):
        print(NO_DATA_MESSAGE)
        return 0

    logger.debug("Computed overall balance over %d months", len(series))
    for month, balance in series:
        print(f"{month}\t{balance}")
    return 0


def cmd_category_breakdown(csv_path: str, *, config_path: str | None = None) -> int:
    """Print monthly sums per category for the transactions in ``csv_path``."""

    loaded = _load_inputs(csv_path, config_path)
    if loaded is None:
        return 1
    transactions, config = loaded

    try:
        by_category = category_series(transactions, config=config)
    except DateFormatError as e:
        print(f"Error: unrecognized date {e.value!r} in {csv_path}", file=sys.stderr)
        return 1

    if isinstance(by_category, NoData):
        print(NO_DATA_MESSAGE)
        return 0

    logger.debug("Computed %d category series", len(by_category))
    for label, series in by_category.items():
        for month, amount in series:
            print(f"{label}\t{month}\t{amount}")
    return 0


# ---- Typer-based console interface -------------------------------------------


# Module-level option objects keep calls out of parameter defaults (ruff B008).
CSV_PATH_OPTION: OptionInfo = typer.Option(
    ...,
    "--csv-path",
    help="CSV file with date, amount and description columns.",
    dir_okay=False,
    file_okay=True,
    exists=False,  # the handler reports missing files itself
)
CONFIG_OPTION: OptionInfo = typer.Option(
    "--config",
    help=f"TOML file extending the date formats and category rules (env: {CONFIG_PATH_ENV}).",
    dir_okay=False,
    file_okay=True,
)

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Monthly running balance and per-category sums from a transactions CSV.",
)


@app.command("overall-balance")
def overall_balance_cmd(
    csv_path: Annotated[Path, CSV_PATH_OPTION],
    config_path: Annotated[Path | None, CONFIG_OPTION] = None,
) -> None:
    """Running balance at the end of each month."""

    code = cmd_overall_balance(
        str(csv_path), config_path=str(config_path) if config_path else None
    )
    if code:
        raise typer.Exit(code)


@app.command("category-breakdown")
def category_breakdown_cmd(
    csv_path: Annotated[Path, CSV_PATH_OPTION],
    config_path: Annotated[Path | None, CONFIG_OPTION] = None,
) -> None:
    """Monthly sums per inferred category (not cumulative)."""

    code = cmd_category_breakdown(
        str(csv_path), config_path=str(config_path) if config_path else None
    )
    if code:
        raise typer.Exit(code)


@app.callback()
def _root() -> None:
    """Load ``.env`` from the working directory and configure logging."""

    # override=False keeps variables already set in the environment.
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging()


def main() -> None:  # pragma: no cover - console script shim
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
