"""In-memory views over the loaded inventory tables."""

import pandas as pd

from inventory_data import pipeline_config as config
from inventory_data.models import DateRange


def _clean(value):
    return None if pd.isna(value) else float(value)


class TimeSeriesStore:
    """Rows of the aggregated source keyed by date.

    Rows are kept in source order (ascending by date) and never re-sorted.
    """

    def __init__(self, frame, catalog):
        self._frame = frame.reset_index(drop=True)
        self._catalog = tuple(catalog)
        self._dates = tuple(self._frame[config.DATE_COLUMN])
        self._positions = {date: idx for idx, date in enumerate(self._dates)}

    def __len__(self):
        return len(self._frame)

    @property
    def catalog(self):
        return self._catalog

    @property
    def dates(self):
        return self._dates

    def _to_row(self, record):
        row = {config.DATE_COLUMN: record[config.DATE_COLUMN]}
        for name in self._catalog:
            row[name] = _clean(record[name])
        return row

    def rows(self):
        return [self._to_row(record) for record in self._frame.to_dict("records")]

    def default_range(self):
        """Return the full span of the table."""
        return DateRange(self._dates[0], self._dates[-1])

    def frame_in_range(self, date_range):
        """Return the frame slice with `start <= date <= end`."""
        dates = self._frame[config.DATE_COLUMN]
        mask = (dates >= date_range.start) & (dates <= date_range.end)
        return self._frame[mask]

    def rows_in_range(self, date_range):
        """Return rows within `date_range` in ascending date order.

        Args:
            date_range (DateRange): Inclusive range of ISO dates.

        Returns:
            list[dict]: Rows with `None` for missing readings.
        """
        subset = self.frame_in_range(date_range)
        return [self._to_row(record) for record in subset.to_dict("records")]

    def row_at(self, date):
        """Return the row for an exact date, or None if the date is unknown."""
        position = self._positions.get(date)
        if position is None:
            return None
        return self._to_row(self._frame.iloc[position])

    def latest_date_in_range(self, date_range):
        """Return the last date inside `date_range`, or None if it holds no rows."""
        subset = self.frame_in_range(date_range)
        if subset.empty:
            return None
        return subset[config.DATE_COLUMN].iloc[-1]


class RegionTable:
    """The wide regional source: one row per region, one column per date."""

    def __init__(self, frame, date_columns):
        self._frame = frame.reset_index(drop=True)
        self._date_columns = tuple(date_columns)

    def __len__(self):
        return len(self._frame)

    @property
    def dates(self):
        return self._date_columns

    def latest_date_in_range(self, date_range=None):
        """Return the latest date column inside `date_range`.

        Without a range the last date column is returned.
        """
        if date_range is None:
            return self._date_columns[-1]
        in_range = [date for date in self._date_columns if date_range.contains(date)]
        return in_range[-1] if in_range else None

    def snapshot(self, date):
        """Return {region: reading} for one date column, in source order.

        Later rows with an already-seen region name are ignored.

        Raises:
            KeyError: If `date` is not one of the table's date columns.
        """
        if date not in self._date_columns:
            raise KeyError(f"Unknown date column: '{date}'")
        snapshot = {}
        for region, value in zip(self._frame[config.REGION_NAME_COLUMN], self._frame[date]):
            snapshot.setdefault(region, _clean(value))
        return snapshot
