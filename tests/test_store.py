import pytest

from inventory_data.models import DateRange


def test_default_range_is_full_span(states_store):
    assert states_store.default_range() == DateRange("2024-01-06", "2024-01-20")


def test_rows_in_range_is_inclusive_and_ordered(states_store):
    rows = states_store.rows_in_range(DateRange("2024-01-13", "2024-01-20"))
    assert [row["date"] for row in rows] == ["2024-01-13", "2024-01-20"]


def test_rows_in_range_is_idempotent(states_store):
    date_range = DateRange("2024-01-06", "2024-01-13")
    assert states_store.rows_in_range(date_range) == states_store.rows_in_range(date_range)


@pytest.mark.parametrize("narrow,wide", [
    (("2024-01-13", "2024-01-13"), ("2024-01-06", "2024-01-13")),
    (("2024-01-13", "2024-01-13"), ("2024-01-01", "2024-12-31")),
    (("2024-01-07", "2024-01-12"), ("2024-01-06", "2024-01-20")),
])
def test_widening_range_never_drops_rows(states_store, narrow, wide):
    narrow_dates = {row["date"] for row in states_store.rows_in_range(DateRange(*narrow))}
    wide_dates = {row["date"] for row in states_store.rows_in_range(DateRange(*wide))}
    assert narrow_dates <= wide_dates


def test_row_at_unknown_date_is_none(states_store):
    assert states_store.row_at("2024-01-07") is None


def test_latest_date_in_range(states_store):
    assert states_store.latest_date_in_range(DateRange("2024-01-01", "2024-01-14")) == "2024-01-13"
    assert states_store.latest_date_in_range(DateRange("2024-01-07", "2024-01-12")) is None


def test_region_latest_date_in_range(region_table):
    assert region_table.latest_date_in_range() == "2024-01-20"
    assert region_table.latest_date_in_range(DateRange("2024-01-01", "2024-01-15")) == "2024-01-13"
    assert region_table.latest_date_in_range(DateRange("2023-01-01", "2023-12-31")) is None


def test_region_snapshot_unknown_date(region_table):
    with pytest.raises(KeyError):
        region_table.snapshot("2024-01-07")
