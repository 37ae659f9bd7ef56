"""Top-K rankings over a single snapshot."""

import math

from inventory_data import pipeline_config as config
from inventory_data.models import RankedEntry


def _ranking_value(value):
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return 0.0
    return float(value)


def top_k(row, excluded=(), k=5):
    """Return the `k` largest series in a snapshot, descending.

    Missing readings rank as 0 but keep `None` as their value. Ties keep the
    row's key order because the sort is stable.

    Args:
        row (Mapping[str, float | None]): Snapshot, optionally with a `date` key.
        excluded (Iterable[str]): Series names to leave out.
        k (int): Number of entries to return.

    Returns:
        list[RankedEntry]: At most `k` entries.
    """
    if not row or k <= 0:
        return []
    excluded = set(excluded)
    entries = [
        RankedEntry(name, value)
        for name, value in row.items()
        if name != config.DATE_COLUMN and name not in excluded
    ]
    # sorted() stays stable with reverse=True
    entries = sorted(entries, key=lambda entry: _ranking_value(entry.value), reverse=True)
    return entries[:k]


def default_selection(store, date_range, k=5, aggregate=config.AGGREGATE_SERIES_NAME):
    """Return the series names shown by default for a date range.

    These are the top `k` series at the latest row inside the range, leaving
    out the aggregate series.

    Args:
        store (TimeSeriesStore): Loaded aggregated source.
        date_range (DateRange): Current date range.
        k (int): Number of series to select.
        aggregate (str): Aggregate series name.

    Returns:
        list[str]: Selected names, largest first. Empty if the range has no rows.
    """
    latest = store.latest_date_in_range(date_range)
    if latest is None:
        return []
    return [entry.name for entry in top_k(store.row_at(latest), {aggregate}, k)]
