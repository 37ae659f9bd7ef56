"""Configuration constants for the Housing Inventory Dashboard.

This module contains the display constants used throughout the dashboard:
titles, ranking size, the chart palette and viewport breakpoints.
"""

from inventory_data.pipeline_config import AGGREGATE_SERIES_NAME

APP_TITLE = "Zillow Housing Inventory Dashboard"
CHART_TITLE = "Housing Inventory Over Time"
VALUE_LABEL = "Inventory"

# Number of series ranked for the default selection and the summary lists
TOP_N = 5

SUMMARY_TITLES = {
    'regions': 'Top {n} Regions by Inventory ({date})',
    'states': 'Top {n} States by Inventory ({date})',
}

# Needed all this in case every state is selected
CHART_COLORS = [
    '#8884d8', '#82ca9d', '#ffc658', '#ff7300', '#ff0000',
    '#00ff00', '#0000ff', '#ffff00', '#ff00ff', '#00ffff',
    '#800080', '#008000', '#000080', '#800000', '#808000',
    '#ff6b6b', '#4ecdc4', '#45b7d1', '#96ceb4', '#feca57',
    '#ff9ff3', '#54a0ff', '#5f27cd', '#00d2d3', '#ff9f43'
]

# Tooltip change colors
CHANGE_COLORS = {
    'positive': 'green',
    'negative': 'red',
    'neutral': '#888',
}

# Viewport widths (px) below which fewer x-axis ticks are labelled
VIEWPORT_BREAKPOINTS = {
    'small': 600,
    'medium': 900,
}
DEFAULT_VIEWPORT_WIDTH = 1200

# Number of labelled marks under the date range slider
SLIDER_MARK_COUNT = 6
