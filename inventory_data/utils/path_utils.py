"""Path and URL helpers for locating the dashboard's CSV resources."""

from pathlib import Path
from urllib.parse import urljoin

from inventory_data import pipeline_config as config


def get_base_path(base_path=None):
    """Return the base path resources are resolved against.

    Args:
        base_path (str | Path | None): Explicit override. Defaults to
            `pipeline_config.DATA_BASE_PATH`.

    Returns:
        str | Path: A URL prefix (str) or a local directory (Path).
    """
    base_path = base_path if base_path is not None else config.DATA_BASE_PATH
    if config.is_remote(base_path):
        return str(base_path)
    return Path(base_path)


def resolve_resource(resource, base_path=None):
    """Resolve a resource name against the configured base path.

    Args:
        resource (str): File name such as 'aggregated_states.csv'.
        base_path (str | Path | None): Optional base path override.

    Returns:
        str | Path: Full URL for remote bases, otherwise a local file path.
    """
    base = get_base_path(base_path)
    if isinstance(base, str):
        if not base.endswith("/"):
            base = base + "/"
        return urljoin(base, resource.lstrip("/"))
    return base / resource
