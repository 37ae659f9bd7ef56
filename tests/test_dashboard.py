import pytest

from config import CHART_COLORS
from inventory_data.dashboard import (
    build_inventory_figure, build_summary, checklist_options, resolve_range,
    resolve_selection, slider_marks, top_regions, top_states
)
from inventory_data.errors import NetworkError, ParseError
from inventory_data.models import DateRange, RankedEntry


def test_figure_draws_selected_catalog_series_only(states_store):
    fig = build_inventory_figure(
        states_store, states_store.default_range(), ["Florida", "Nowhere", "Texas"]
    )
    assert [trace.name for trace in fig.data] == ["Florida", "Texas"]
    # colors follow the position within the selection
    assert fig.data[0].line.color == CHART_COLORS[0]
    assert fig.data[1].line.color == CHART_COLORS[2]


def test_figure_leaves_gaps_for_missing_readings(states_store):
    fig = build_inventory_figure(states_store, states_store.default_range(), ["Florida"])
    trace = fig.data[0]
    assert list(trace.x) == ["2024-01-06", "2024-01-13", "2024-01-20"]
    assert list(trace.y) == [250.0, None, 260.0]
    assert trace.connectgaps is False


def test_figure_hover_changes(states_store):
    fig = build_inventory_figure(states_store, states_store.default_range(), ["Texas"])
    customdata = fig.data[0].customdata
    assert customdata[0][0] == "1,200"
    assert customdata[0][1] == ""
    assert customdata[1][1] == "-0.83%"
    assert customdata[1][2] == "red"
    assert customdata[2][1] == "+1.68%"


def test_figure_tick_density_follows_viewport(states_store):
    fig = build_inventory_figure(states_store, states_store.default_range(), ["Texas"], 400)
    assert list(fig.layout.xaxis.tickvals) == ["2024-01-06", "2024-01-20"]

    fig = build_inventory_figure(states_store, states_store.default_range(), ["Texas"])
    assert fig.layout.xaxis.tickvals is None


def test_figure_for_empty_range(states_store):
    fig = build_inventory_figure(states_store, DateRange("2025-01-01", "2025-02-01"), ["Texas"])
    assert "no data" in fig.layout.title.text


def test_resolve_selection_defaults_to_top_series(states_store):
    full = states_store.default_range()
    expected = ["Texas", "Florida", "California"]
    assert resolve_selection(states_store, full, False, ["Florida"], ["Florida"]) == expected
    assert resolve_selection(states_store, full, True, ["Florida"], None) == expected


def test_resolve_selection_toggles_on_checklist_edit(states_store):
    full = states_store.default_range()
    selection = resolve_selection(states_store, full, True, ["California", "Texas"], ["Texas"])
    assert selection == ["Texas", "California"]


def test_checklist_options_order(states_store):
    options = checklist_options(states_store, ["Texas"])
    assert [option["value"] for option in options] == [
        "United States", "Texas", "California", "Florida"
    ]


def test_slider_marks():
    dates = ["2024-01-06", "2024-01-13", "2024-01-20"]
    assert slider_marks(dates) == {0: "Jan 6, 2024", 1: "Jan 13, 2024", 2: "Jan 20, 2024"}
    assert slider_marks(dates[:1]) == {0: "Jan 6, 2024"}
    assert slider_marks([]) == {}


def test_top_states(states_store):
    date, entries = top_states(states_store)
    assert date == "2024-01-20"
    assert entries == [
        RankedEntry("Texas", 1210.0),
        RankedEntry("Florida", 260.0),
        RankedEntry("California", 0.0),
    ]


def test_top_regions_excludes_aggregate(region_table):
    date, entries = top_regions(region_table)
    assert date == "2024-01-20"
    assert [entry.name for entry in entries] == ["Miami, FL", "New York, NY", "Houston, TX"]
    assert entries[-1].value is None

    date, entries = top_regions(region_table, DateRange("2024-01-01", "2024-01-13"), 2)
    assert date == "2024-01-13"
    assert [entry.name for entry in entries] == ["Miami, FL", "Houston, TX"]


def test_top_regions_outside_range(region_table):
    assert top_regions(region_table, DateRange("2023-01-01", "2023-02-01")) == (None, [])


def test_summary_keeps_states_when_regions_fail(states_store):
    def unreachable():
        raise NetworkError("Error loading regions.csv: unreachable", "regions.csv")

    cards = build_summary(load_regions=unreachable, load_states=lambda: states_store)

    assert [card['kind'] for card in cards] == ["regions", "states"]
    assert cards[0]['error'] == "Error loading regions.csv: unreachable"
    assert cards[0]['entries'] == []
    assert cards[1]['error'] is None
    assert cards[1]['title'] == "Top 5 States by Inventory (2024-01-20)"
    assert [entry.name for entry in cards[1]['entries']] == ["Texas", "Florida", "California"]


def test_summary_keeps_regions_when_states_fail(region_table):
    def malformed():
        raise ParseError("Error parsing states.csv: no header row", "states.csv")

    cards = build_summary(
        DateRange("2024-01-01", "2024-01-13"),
        load_regions=lambda: region_table,
        load_states=malformed,
        k=2,
    )

    assert cards[0]['title'] == "Top 2 Regions by Inventory (2024-01-13)"
    assert [entry.name for entry in cards[0]['entries']] == ["Miami, FL", "Houston, TX"]
    assert cards[1]['error'] == "Error parsing states.csv: no header row"


def test_resolve_range_accepts_loaded_dates(states_store):
    data = {"start": "2024-01-13", "end": "2024-01-20"}
    assert resolve_range(states_store, data) == DateRange("2024-01-13", "2024-01-20")


@pytest.mark.parametrize("data", [
    None,
    {},
    {"start": "2024-01-20", "end": "2024-01-06"},
    {"start": "2024-01-07", "end": "2024-01-20"},
    {"start": "2024-01-06"},
    {"start": 3, "end": "2024-01-20"},
])
def test_resolve_range_falls_back_to_full_span(states_store, data):
    assert resolve_range(states_store, data) == states_store.default_range()
