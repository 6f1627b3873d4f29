import itertools
import random
from decimal import Decimal

import pytest

from cashflow_trends import (
    CATEGORY_RULES,
    NO_DATA,
    AggregationConfig,
    CategoryRule,
    DateFormatError,
    MonthPoint,
    Transaction,
    TrendReport,
    build_trends,
    category_series,
    overall_series,
)

# ---- Helpers -----------------------------------------------------------------


def _tx(date: str, amount, description: str = "misc") -> Transaction:
    return Transaction(date=date, amount=amount, description=description)


def _mixed_transactions() -> list[Transaction]:
    return [
        _tx("2024-01-05", Decimal("2500.00"), "Salary"),
        _tx("03-01-2024", Decimal("-1200.00"), "Rent January"),
        _tx("12-01-24", Decimal("-84.20"), "Supermarket"),
        _tx("2024-01-20", Decimal("-35.50"), "restaurant"),
        _tx("2024-02-01", Decimal("2500.00"), "Salary"),
        _tx("02-14-2024", Decimal("-60.00"), "Restaurant bill"),
        _tx("2024-02-18", Decimal("-40.00"), "fuel"),
        _tx("2024-03-02", Decimal("-1200.00"), "Rent March"),
        _tx("2024-03-09", Decimal("-95.15"), "electricity utility"),
    ]


# ---- Overall series ----------------------------------------------------------


def test_overall_series_is_cumulative():
    txs = [
        _tx("2024-01-05", 100),
        _tx("2024-01-20", -30),
        _tx("2024-02-01", 50),
    ]
    assert overall_series(txs) == (("2024-01", 70), ("2024-02", 120))


def test_overall_series_points_are_named():
    series = overall_series([_tx("2024-01-05", 100)])
    assert series == (MonthPoint(month="2024-01", value=100),)
    assert series[0].month == "2024-01"
    assert series[0].value == 100


def test_overall_series_can_decrease():
    txs = [_tx("2024-01-01", 100), _tx("2024-02-01", -250), _tx("2024-03-01", 20)]
    assert overall_series(txs) == (("2024-01", 100), ("2024-02", -150), ("2024-03", -130))


def test_months_without_transactions_are_absent():
    txs = [_tx("2024-01-10", 10), _tx("2024-04-10", 5)]
    assert [p.month for p in overall_series(txs)] == ["2024-01", "2024-04"]


def test_months_sort_chronologically_across_formats_and_years():
    txs = [
        _tx("2024-01-01", 1),
        _tx("15-12-2023", 10),  # DD-MM-YYYY
        _tx("11-30-2023", 100),  # MM-DD-YYYY
    ]
    assert overall_series(txs) == (("2023-11", 100), ("2023-12", 110), ("2024-01", 111))


def test_overall_series_with_mixed_formats():
    series = overall_series(_mixed_transactions())
    assert series == (
        ("2024-01", Decimal("1180.30")),
        ("2024-02", Decimal("3580.30")),
        ("2024-03", Decimal("2285.15")),
    )


def test_duplicates_all_count():
    txs = [_tx("2024-05-05", 10), _tx("2024-05-05", 10)]
    assert overall_series(txs) == (("2024-05", 20),)


def test_mixed_decimal_float_and_int_amounts():
    txs = [
        _tx("2024-01-03", 2.5, "fuel"),
        _tx("2024-01-09", Decimal("10.00"), "fuel"),
        _tx("2024-01-20", 0.1, "fuel"),
        _tx("2024-02-01", 1, "fuel"),
    ]
    series = overall_series(txs)
    assert series == (("2024-01", Decimal("12.60")), ("2024-02", Decimal("13.60")))
    assert all(isinstance(p.value, Decimal) for p in series)

    by_category = category_series(txs)
    assert by_category["Transportation"] == (
        ("2024-01", Decimal("12.60")),
        ("2024-02", 1),
    )


# ---- Category series ---------------------------------------------------------


def test_category_series_is_not_cumulative():
    txs = [
        _tx("2024-01-01", -20, "grocery store"),
        _tx("2024-02-01", -15, "grocery store"),
    ]
    result = category_series(txs)
    assert result["Groceries"] == (("2024-01", -20), ("2024-02", -15))


def test_category_series_contents():
    result = category_series(_mixed_transactions())
    assert dict(result) == {
        "Miscellaneous": (("2024-01", Decimal("2500.00")), ("2024-02", Decimal("2500.00"))),
        "Rent": (("2024-01", Decimal("-1200.00")), ("2024-03", Decimal("-1200.00"))),
        "Groceries": (("2024-01", Decimal("-84.20")),),
        "Food": (("2024-01", Decimal("-35.50")), ("2024-02", Decimal("-60.00"))),
        "Transportation": (("2024-02", Decimal("-40.00")),),
        "Utilities": (("2024-03", Decimal("-95.15")),),
    }


def test_categories_without_transactions_are_absent():
    result = category_series([_tx("2024-01-01", -5, "fuel")])
    assert list(result) == ["Transportation"]


def test_category_order_follows_first_occurrence_by_date():
    txs = [
        _tx("2024-03-01", -1, "fuel"),
        _tx("2024-01-01", -1, "rent"),
        _tx("2024-02-01", -1, "food"),
    ]
    assert list(category_series(txs)) == ["Rent", "Food", "Transportation"]


def test_category_series_is_read_only():
    result = category_series([_tx("2024-01-01", -5, "fuel")])
    with pytest.raises(TypeError):
        result["Food"] = ()  # type: ignore[index]


def test_monthly_category_sums_add_up_to_overall_changes():
    txs = _mixed_transactions()
    overall = overall_series(txs)
    by_category = category_series(txs)

    per_month: dict[str, Decimal] = {}
    for series in by_category.values():
        for month, amount in series:
            per_month[month] = per_month.get(month, Decimal(0)) + amount

    previous = Decimal(0)
    for month, balance in overall:
        assert balance - previous == per_month[month]
        previous = balance


def test_custom_rules_from_config():
    config = AggregationConfig(
        category_rules=CATEGORY_RULES + (CategoryRule(("netflix",), "Subscriptions"),),
        fallback_category="Other",
    )
    txs = [_tx("2024-01-01", -12, "Netflix"), _tx("2024-01-02", 3, "cashback")]
    result = category_series(txs, config=config)
    assert dict(result) == {
        "Subscriptions": (("2024-01", -12),),
        "Other": (("2024-01", 3),),
    }


# ---- Failure and no-data behavior ---------------------------------------------


@pytest.mark.parametrize("aggregate", [overall_series, category_series, build_trends])
def test_empty_input_yields_no_data(aggregate):
    assert aggregate([]) is NO_DATA
    assert aggregate(None) is NO_DATA
    assert aggregate(iter(())) is NO_DATA
    assert not aggregate([])


@pytest.mark.parametrize("aggregate", [overall_series, category_series, build_trends])
def test_one_bad_date_aborts_the_whole_call(aggregate):
    txs = [_tx("2024-01-01", 10), _tx("2024/13/50", 5), _tx("2024-02-01", 1)]
    with pytest.raises(DateFormatError) as exc_info:
        aggregate(txs)
    assert exc_info.value.value == "2024/13/50"


# ---- Purity --------------------------------------------------------------------


def test_repeated_calls_are_identical_and_input_untouched():
    txs = _mixed_transactions()
    snapshot = list(txs)
    assert overall_series(txs) == overall_series(txs)
    assert dict(category_series(txs)) == dict(category_series(txs))
    assert txs == snapshot


def test_output_is_independent_of_input_order():
    txs = _mixed_transactions()
    expected_overall = overall_series(txs)
    expected_categories = dict(category_series(txs))

    rng = random.Random(1234)
    permutations = [list(reversed(txs))]
    for _ in range(10):
        shuffled = list(txs)
        rng.shuffle(shuffled)
        permutations.append(shuffled)

    for perm in permutations:
        assert overall_series(perm) == expected_overall
        assert dict(category_series(perm)) == expected_categories


def test_all_permutations_of_small_input():
    txs = [
        _tx("2024-01-31", Decimal("1.10"), "food"),
        _tx("31-01-2024", Decimal("2.20"), "food"),
        _tx("2024-02-01", Decimal("-3.30"), "bill"),
    ]
    results = {overall_series(list(p)) for p in itertools.permutations(txs)}
    assert results == {(("2024-01", Decimal("3.30")), ("2024-02", Decimal("0.00")))}


# ---- Trend report ----------------------------------------------------------------


def test_build_trends_returns_both_series():
    txs = _mixed_transactions()
    report = build_trends(iter(txs))
    assert isinstance(report, TrendReport)
    assert report.overall == overall_series(txs)
    assert dict(report.by_category) == dict(category_series(txs))
