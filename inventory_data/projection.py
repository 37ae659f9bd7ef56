"""Chart projection: series ordering, colors and period-over-period change."""

import locale
import math

from config import CHART_COLORS, CHANGE_COLORS, VIEWPORT_BREAKPOINTS
from helpers import format_change, format_date_label, format_value
from inventory_data import pipeline_config as config


def _sort_key(name):
    return (locale.strxfrm(name.casefold()), name)


def series_order(selection, catalog, aggregate=config.AGGREGATE_SERIES_NAME):
    """Return the display order of series names.

    The aggregate series comes first, then the selected names in the order
    they were selected, then the rest of the catalog alphabetically.

    Args:
        selection (Sequence[str]): Selected names in insertion order.
        catalog (Iterable[str]): All known series names.
        aggregate (str): Aggregate series name.

    Returns:
        list[str]: Ordered names without duplicates.
    """
    ordered = [aggregate]
    for name in selection:
        if name not in ordered:
            ordered.append(name)
    remaining = [name for name in catalog if name not in ordered]
    return ordered + sorted(remaining, key=_sort_key)


def _missing(value):
    return value is None or (isinstance(value, float) and math.isnan(value))


def percent_change(current, previous):
    """Percent change from `previous` to `current`.

    Returns None when either reading is missing. A change away from zero is
    reported as 100 regardless of sign; zero to zero is 0.
    """
    if _missing(current) or _missing(previous):
        return None
    if previous == 0:
        return 0.0 if current == 0 else 100.0
    return (current - previous) / abs(previous) * 100


def percent_change_series(values):
    """Vectorized `percent_change` of each value against the one before it.

    Args:
        values (pd.Series): Readings in date order; NaN marks missing.

    Returns:
        pd.Series: Changes, NaN where `percent_change` would return None.
    """
    previous = values.shift(1)
    change = (values - previous) / previous.abs() * 100
    change = change.mask(previous.eq(0) & values.ne(0), 100.0)
    change = change.mask(previous.eq(0) & values.eq(0), 0.0)
    return change.where(values.notna() & previous.notna())


def change_color(pct):
    if _missing(pct) or pct == 0:
        return CHANGE_COLORS['neutral']
    return CHANGE_COLORS['positive'] if pct > 0 else CHANGE_COLORS['negative']


def series_color(index):
    """Color for the series at `index` within the selected list."""
    return CHART_COLORS[index % len(CHART_COLORS)]


def tooltip_payload(rows, hovered_date, series):
    """Build the hover details for one date.

    Each series' change is measured against the previous row of `rows`, so the
    first row in range has no change.

    Args:
        rows (list[dict]): Rows currently shown on the chart, in date order.
        hovered_date (str): Date under the pointer.
        series (Sequence[str]): Series names to report, in display order.

    Returns:
        dict | None: {'date', 'label', 'entries'} or None if the date is not shown.
    """
    dates = [row[config.DATE_COLUMN] for row in rows]
    if hovered_date not in dates:
        return None
    position = dates.index(hovered_date)
    current = rows[position]
    previous = rows[position - 1] if position > 0 else None

    entries = []
    for idx, name in enumerate(series):
        value = current.get(name)
        pct = percent_change(value, previous.get(name)) if previous is not None else None
        entries.append({
            'name': name,
            'value': value,
            'value_text': format_value(value),
            'change': pct,
            'change_text': format_change(pct),
            'change_color': change_color(pct),
            'color': series_color(idx),
        })
    return {
        'date': hovered_date,
        'label': format_date_label(hovered_date),
        'entries': entries,
    }


def tick_interval(n_points, viewport_width):
    """Number of x-axis ticks to skip between labels for a viewport width."""
    if viewport_width < VIEWPORT_BREAKPOINTS['small']:
        return math.ceil(n_points / 6)
    if viewport_width < VIEWPORT_BREAKPOINTS['medium']:
        return math.ceil(n_points / 12)
    return math.ceil(n_points / 20)
