"""Configuration settings for loading the inventory datasets."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


BASE_DIR = Path(__file__).resolve().parent.parent
PUBLIC_DIR = BASE_DIR / "public"
LOG_DIR = Path(os.getenv("LOG_DIR", BASE_DIR / "logs"))

# Either a local directory or an http(s) URL prefix the CSV files live under.
DATA_BASE_PATH = os.getenv("DATA_BASE_PATH", str(PUBLIC_DIR))

AGGREGATED_FILE = os.getenv("AGGREGATED_FILE", "aggregated_states.csv")
REGION_FILE = os.getenv("REGION_FILE", "Metro_invt_fs_uc_sfrcondo_sm_week.csv")

DATE_COLUMN = "date"
REGION_NAME_COLUMN = "RegionName"
DATE_COLUMN_PATTERN = r"^\d{4}-\d{2}-\d{2}$"

AGGREGATE_SERIES_NAME = "United States"

REQUEST_TIMEOUT_SECONDS = 30

DATE_FORMAT = "%Y-%m-%d"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE_BASENAME = "dashboard.log"
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 5


def is_remote(base_path):
    return str(base_path).startswith(("http://", "https://"))
