"""Fetch and parse the dashboard's CSV resources.

Both sources go through the same fetch -> parse -> numeric coercion path:

- `load` reads the aggregated source (one row per date, one column per series)
  into a `TimeSeriesStore`.
- `load_region_table` reads the wide regional source (one row per region, one
  column per date) into a `RegionTable`.

Nothing is cached; each call fetches the resource again.
"""

import io
import re

import numpy as np
import pandas as pd
import requests

from inventory_data import pipeline_config as config
from inventory_data.errors import EmptyDatasetError, NetworkError, ParseError
from inventory_data.store import RegionTable, TimeSeriesStore
from inventory_data.utils import logging_utils, path_utils

logger = logging_utils.get_logger("inventory_data.loader")


def fetch_text(resource, base_path=None):
    """Fetch the raw text of a resource.

    Args:
        resource (str): Resource name relative to the base path.
        base_path (str | Path | None): Optional base path override.

    Returns:
        str: The resource contents.

    Raises:
        NetworkError: If the resource cannot be reached or read.
        ParseError: If a local file is not valid UTF-8.
    """
    location = path_utils.resolve_resource(resource, base_path)

    if isinstance(location, str):
        try:
            response = requests.get(location, timeout=config.REQUEST_TIMEOUT_SECONDS)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error("Request failed for %s: %s", location, e)
            raise NetworkError(f"Error loading {resource}: {e}", resource) from e
        return response.text

    try:
        return location.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        logger.error("%s is not valid UTF-8: %s", location, e)
        raise ParseError(f"Error parsing {resource}: {e}", resource) from e
    except OSError as e:
        logger.error("Could not read %s: %s", location, e)
        raise NetworkError(f"Error loading {resource}: {e}", resource) from e


def parse_csv(text, resource=None):
    """Parse CSV text into a frame of raw string cells.

    The first line is the header; names are trimmed and the first of any
    duplicated names wins. Blank lines are skipped and short rows are padded
    with empty cells.

    Args:
        text (str): CSV text.
        resource (str | None): Resource name used in error messages.

    Returns:
        pd.DataFrame: All cells as `str`, missing cells as ''.

    Raises:
        ParseError: If the text is empty or structurally malformed.
    """
    try:
        raw = pd.read_csv(
            io.StringIO(text.lstrip("\ufeff")),
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError as e:
        raise ParseError(f"Error parsing {resource or 'CSV'}: no header row", resource) from e
    except pd.errors.ParserError as e:
        raise ParseError(f"Error parsing {resource or 'CSV'}: {e}", resource) from e

    if raw.empty:
        raise ParseError(f"Error parsing {resource or 'CSV'}: no header row", resource)

    header = pd.Index([str(name).strip() for name in raw.iloc[0].fillna("")])
    body = raw.iloc[1:].fillna("").reset_index(drop=True)
    body.columns = header
    return body.loc[:, ~header.duplicated()]


def coerce_numeric(values):
    """Convert raw cells to floats, stripping comma grouping separators.

    Empty, unparseable and non-finite cells become NaN, the frame-level
    marker that rows expose as `None`.

    Args:
        values (pd.Series): Raw string cells.

    Returns:
        pd.Series: float64 values.
    """
    cleaned = values.fillna("").astype(str).str.replace(",", "", regex=False).str.strip()
    numbers = pd.to_numeric(cleaned.where(cleaned != ""), errors="coerce").astype("float64")
    return numbers.where(np.isfinite(numbers))


def _populated_counts(frame):
    return sum(frame[name].str.strip().ne("").astype(int) for name in frame.columns)


def load(resource=None, base_path=None):
    """Load the aggregated time series source.

    Args:
        resource (str | None): Resource name. Defaults to `AGGREGATED_FILE`.
        base_path (str | Path | None): Optional base path override.

    Returns:
        TimeSeriesStore: Store over the parsed rows.

    Raises:
        NetworkError: If the resource cannot be fetched.
        ParseError: If the CSV is malformed or has no `date` column.
        EmptyDatasetError: If no row survives filtering.
    """
    resource = resource or config.AGGREGATED_FILE
    text = fetch_text(resource, base_path)
    frame = parse_csv(text, resource)

    if config.DATE_COLUMN not in frame.columns:
        logger.error("%s has no '%s' column", resource, config.DATE_COLUMN)
        raise ParseError(f"Error parsing {resource}: missing '{config.DATE_COLUMN}' column", resource)

    dates = frame[config.DATE_COLUMN].str.strip()
    valid = dates.ne("") & _populated_counts(frame).gt(1)
    frame = frame[valid]
    dates = dates[valid]
    if frame.empty:
        logger.error("%s has no valid rows", resource)
        raise EmptyDatasetError(f"No valid rows in {resource}", resource)

    duplicated = dates.duplicated()
    if duplicated.any():
        logger.warning("Dropping %s duplicated dates from %s", int(duplicated.sum()), resource)
        frame = frame[~duplicated]
        dates = dates[~duplicated]

    catalog = [name for name in frame.columns if name not in (config.DATE_COLUMN, "")]
    columns = {config.DATE_COLUMN: dates.to_numpy()}
    for name in catalog:
        columns[name] = coerce_numeric(frame[name]).to_numpy()
    table = pd.DataFrame(columns)

    logger.info("Loaded %s: %s rows, %s series", resource, len(table), len(catalog))
    return TimeSeriesStore(table, catalog)


def load_region_table(resource=None, base_path=None):
    """Load the wide regional source (one row per region, one column per date).

    Args:
        resource (str | None): Resource name. Defaults to `REGION_FILE`.
        base_path (str | Path | None): Optional base path override.

    Returns:
        RegionTable: Regions with numeric readings per date column.

    Raises:
        NetworkError: If the resource cannot be fetched.
        ParseError: If the CSV is malformed or has no `RegionName` column.
        EmptyDatasetError: If there are no regions or no date columns.
    """
    resource = resource or config.REGION_FILE
    text = fetch_text(resource, base_path)
    frame = parse_csv(text, resource)

    if config.REGION_NAME_COLUMN not in frame.columns:
        logger.error("%s has no '%s' column", resource, config.REGION_NAME_COLUMN)
        raise ParseError(
            f"Error parsing {resource}: missing '{config.REGION_NAME_COLUMN}' column", resource
        )

    regions = frame[config.REGION_NAME_COLUMN].str.strip()
    frame = frame[regions.ne("")]
    regions = regions[regions.ne("")]

    date_pattern = re.compile(config.DATE_COLUMN_PATTERN)
    date_columns = [name for name in frame.columns if date_pattern.match(name)]
    if frame.empty or not date_columns:
        logger.error("%s has no regions or no date columns", resource)
        raise EmptyDatasetError(f"No regional readings in {resource}", resource)

    columns = {config.REGION_NAME_COLUMN: regions.to_numpy()}
    for name in date_columns:
        columns[name] = coerce_numeric(frame[name]).to_numpy()
    table = pd.DataFrame(columns)

    logger.info("Loaded %s: %s regions, %s dates", resource, len(table), len(date_columns))
    return RegionTable(table, date_columns)
