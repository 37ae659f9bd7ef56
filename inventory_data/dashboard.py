"""Pure view-model functions behind the Dash callbacks.

Every function here takes the loaded tables and UI state as arguments and
returns plain data or plotly figures, so the callbacks in `app.py` stay thin.
"""

import numpy as np
from plotly import graph_objects as go

from config import CHART_TITLE, VALUE_LABEL, TOP_N, SLIDER_MARK_COUNT, SUMMARY_TITLES
from helpers import (
    format_date_label, format_metric_vectorized, get_color_vectorized,
    format_values_vectorized
)
from inventory_data import loader, pipeline_config as config
from inventory_data.errors import LoadError
from inventory_data.models import DateRange
from inventory_data.projection import (
    percent_change_series, series_color, series_order, tick_interval
)
from inventory_data.ranking import default_selection, top_k
from inventory_data.selection import apply_checklist_change
from inventory_data.utils import logging_utils

logger = logging_utils.get_logger("inventory_data.dashboard")


def build_inventory_figure(store, date_range, selection, viewport_width=None):
    """Build the line chart for the selected series.

    Lines are drawn only for selected names that exist in the catalog, but
    colors follow each name's position in the full selection. Missing
    readings are left as gaps.

    Args:
        store (TimeSeriesStore): Loaded aggregated source.
        date_range (DateRange): Current date range.
        selection (Sequence[str]): Selected series in insertion order.
        viewport_width (int | None): Browser width used for tick density.

    Returns:
        go.Figure: The line chart.
    """
    view = store.frame_in_range(date_range)
    dates = view[config.DATE_COLUMN].tolist()

    fig = go.Figure()
    for idx, name in enumerate(selection):
        if name not in store.catalog:
            continue
        values = view[name]
        changes = percent_change_series(values)
        fig.add_trace(go.Scatter(
            x=dates,
            y=[None if np.isnan(v) else float(v) for v in values],
            name=name,
            mode='lines',
            connectgaps=False,
            line=dict(color=series_color(idx), width=2),
            customdata=np.column_stack([
                format_values_vectorized(values),
                format_metric_vectorized(changes, decimals=2, suffix='%'),
                get_color_vectorized(changes),
            ]) if len(values) else None,
            hovertemplate=(
                f"<b>{name}</b>: %{{customdata[0]}} "
                "<span style='color:%{customdata[2]}'>%{customdata[1]}</span>"
                "<extra></extra>"
            ),
        ))

    xaxis = dict(type='category', tickangle=-45, title_text='')
    if viewport_width and dates:
        step = tick_interval(len(dates), viewport_width) + 1
        xaxis.update(tickmode='array', tickvals=dates[::step])

    title = CHART_TITLE if dates else f"{CHART_TITLE}: no data in selected range"
    fig.update_layout(
        title={'text': title, 'x': 0.5, 'xanchor': 'center'},
        xaxis=xaxis,
        yaxis_title=VALUE_LABEL,
        hovermode='x unified',
        legend=dict(orientation='h', yanchor='bottom', y=1, xanchor='right', x=1),
        margin=dict(t=80, b=80, l=60, r=20),
    )
    return fig


def resolve_selection(store, date_range, triggered_by_checklist, checked, current):
    """Work out the selection after a UI event.

    A checklist edit toggles names in the current selection. Any other
    trigger (first render, a date range change) resets the selection to the
    top series of the range.
    """
    if triggered_by_checklist and current is not None:
        return apply_checklist_change(current, checked)
    return default_selection(store, date_range, TOP_N)


def checklist_options(store, selection):
    return [
        {'label': name, 'value': name}
        for name in series_order(selection, store.catalog)
    ]


def slider_marks(dates, count=SLIDER_MARK_COUNT):
    """Labelled marks for the date range slider, evenly spread over `dates`."""
    if not dates:
        return {}
    last = len(dates) - 1
    if last == 0:
        return {0: format_date_label(dates[0])}
    positions = sorted({round(i * last / (count - 1)) for i in range(count)})
    return {pos: format_date_label(dates[pos]) for pos in positions}


def top_states(store, date_range=None, k=TOP_N):
    """Top `k` states at the latest row of the aggregated source within range.

    Returns:
        tuple[str | None, list[RankedEntry]]: Snapshot date and entries.
    """
    date_range = date_range or store.default_range()
    latest = store.latest_date_in_range(date_range)
    if latest is None:
        return None, []
    return latest, top_k(store.row_at(latest), {config.AGGREGATE_SERIES_NAME}, k)


def top_regions(region_table, date_range=None, k=TOP_N):
    """Top `k` regions at the latest date column of the regional source within range.

    Returns:
        tuple[str | None, list[RankedEntry]]: Snapshot date and entries.
    """
    latest = region_table.latest_date_in_range(date_range)
    if latest is None:
        return None, []
    return latest, top_k(region_table.snapshot(latest), {config.AGGREGATE_SERIES_NAME}, k)


def resolve_range(store, range_data):
    """Rebuild the date range held by the browser, checked against `store`.

    Missing, malformed or inverted data, or endpoints that are not loaded
    dates, fall back to the store's full span.

    Args:
        store (TimeSeriesStore): Loaded aggregated source.
        range_data (dict | None): `{'start': ..., 'end': ...}` from a dcc.Store.

    Returns:
        DateRange: A range whose endpoints are both in `store.dates`.
    """
    if not range_data:
        return store.default_range()
    try:
        date_range = DateRange.from_dict(range_data)
        date_range.to_indices(store.dates)
    except (KeyError, TypeError, ValueError) as e:
        logger.warning("Ignoring date range %r: %s", range_data, e)
        return store.default_range()
    return date_range


def build_summary(date_range=None, load_regions=loader.load_region_table,
                  load_states=loader.load, k=TOP_N):
    """Fetch both sources and rank the top `k` of each at the end of the range.

    Each source is fetched and ranked on its own, so a failure in one still
    leaves the other's list.

    Args:
        date_range (DateRange | None): Current range; None means the full span.
        load_regions (callable): Returns a `RegionTable`.
        load_states (callable): Returns a `TimeSeriesStore`.
        k (int): Entries per list.

    Returns:
        list[dict]: One card per source, regions first, each with `kind`,
            `title`, `entries` and `error` (the message, or None).
    """
    sources = [
        ('regions', load_regions, top_regions),
        ('states', load_states, top_states),
    ]
    cards = []
    for kind, load_source, rank in sources:
        try:
            date, entries = rank(load_source(), date_range, k)
        except LoadError as e:
            logger.error("Summary source '%s' unavailable: %s", kind, e)
            cards.append({'kind': kind, 'title': None, 'entries': [], 'error': str(e)})
            continue
        cards.append({
            'kind': kind,
            'title': SUMMARY_TITLES[kind].format(n=k, date=date or ''),
            'entries': entries,
            'error': None,
        })
    return cards
