"""
Helper functions for the dashboard application.
"""

from datetime import datetime

import numpy as np
import pandas as pd

from config import CHANGE_COLORS
from inventory_data import pipeline_config


def format_value(num):
    """Format a reading with thousands separators.

    Args:
        num (float | int | None): The number to format.

    Returns:
        str: Formatted string (e.g. "12,345" or "1,234.5") or "N/A" if null.
    """
    if num is None or pd.isnull(num):
        return "N/A"
    if float(num).is_integer():
        return f"{int(num):,}"
    return f"{num:,.3f}".rstrip("0").rstrip(".")


def format_change(pct, decimals=2):
    """Format a percent change with an explicit sign.

    Args:
        pct (float | None): The percent change.
        decimals (int): Decimal places. Defaults to 2.

    Returns:
        str: e.g. "+10.00%", "-3.25%", "0.00%", or "" if null.
    """
    if pct is None or pd.isnull(pct):
        return ""
    if pct == 0:
        return f"{0:.{decimals}f}%"
    return f"{pct:+.{decimals}f}%"


def format_date_label(date_str):
    """Format an ISO date for display.

    Examples:
        format_date_label('2024-01-05') returns 'Jan 5, 2024'
    """
    if not date_str:
        return ''
    date_value = datetime.strptime(date_str, pipeline_config.DATE_FORMAT)
    return f"{date_value:%b} {date_value.day}, {date_value.year}"


def format_metric_vectorized(series, decimals=2, suffix='%'):
    """Vectorized metric formatting for hover labels.

    Formats a pandas Series of numeric changes for display, leaving missing
    values blank.

    Args:
        series (pd.Series): The pandas Series of numeric values to format
        decimals (int): The number of decimal places to format to. Defaults to 2
        suffix (str): The string to append to the end. Defaults to '%'

    Returns:
        np.ndarray: Array of formatted strings (e.g., "+1.50%") or "" for invalid input
    """
    result = np.full(len(series), "", dtype=object)

    valid_mask = (pd.notna(series) & np.isfinite(series)).to_numpy()
    values = series.to_numpy()

    if not valid_mask.any():
        return result

    zero_mask = valid_mask & (values == 0)
    if zero_mask.any():
        result[zero_mask] = f"{0:.{decimals}f}{suffix}"

    nonzero_mask = valid_mask & (values != 0)
    if nonzero_mask.any():
        result[nonzero_mask] = [f"{v:+.{decimals}f}{suffix}" for v in values[nonzero_mask]]

    return result


def get_color_vectorized(series):
    """Vectorized change coloring.

    Green for positive, red for negative, neutral for zero or missing.

    Args:
        series (pd.Series): The pandas Series of numeric changes

    Returns:
        np.ndarray: Array of color strings
    """
    result = np.full(len(series), CHANGE_COLORS['neutral'], dtype=object)

    valid_mask = (pd.notna(series) & np.isfinite(series)).to_numpy()
    if not valid_mask.any():
        return result

    values = series.to_numpy()
    result[valid_mask & (values > 0)] = CHANGE_COLORS['positive']
    result[valid_mask & (values < 0)] = CHANGE_COLORS['negative']

    return result


def format_values_vectorized(series):
    """Format a Series of readings with `format_value`."""
    return np.array([format_value(v) for v in series], dtype=object)
