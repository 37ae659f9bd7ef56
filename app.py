import dash
from dash import html, dcc, ClientsideFunction, Input, Output, State
from flask_caching import Cache
from flask_compress import Compress

from config import APP_TITLE, DEFAULT_VIEWPORT_WIDTH

from helpers import format_date_label, format_value

from inventory_data import loader, pipeline_config
from inventory_data.dashboard import (
    build_inventory_figure, build_summary, checklist_options, resolve_range,
    resolve_selection, slider_marks
)
from inventory_data.errors import LoadError
from inventory_data.models import DateRange
from inventory_data.projection import tooltip_payload
from inventory_data.utils import logging_utils

logger = logging_utils.get_logger("app")

# The aggregated source is a static snapshot: load it once at startup.
try:
    store = loader.load(pipeline_config.AGGREGATED_FILE)
    load_error = None
except LoadError as e:
    store = None
    load_error = str(e)
    logger.error("Main dataset unavailable: %s", e)


app = dash.Dash(
    __name__, meta_tags=[{"name": "viewport", "content": "width=device-width"}],
    suppress_callback_exceptions=True,
)
app.title = APP_TITLE
server = app.server
Compress(app.server)

cache = Cache(app.server, config={
    'CACHE_TYPE': 'SimpleCache',
    'CACHE_DEFAULT_TIMEOUT': 3600,
    'CACHE_THRESHOLD': 1000
})


def error_block(message, heading=html.H2):
    return html.Div([heading(f"Error: {message}")], className="error")


def chart_section():
    """Filters and chart, or the error state if the main dataset failed to load."""
    if store is None:
        return error_block(load_error)

    return html.Div(
        [
            html.Div(
                [
                    html.H3("Select States"),
                    dcc.Checklist(
                        id="state-checklist",
                        options=checklist_options(store, []),
                        value=[],
                        className="checkbox-grid",
                        labelClassName="checkbox-item",
                    ),
                ],
                className="filter-section",
            ),
            html.Div(
                [
                    dcc.Graph(id="inventory-graph", responsive=True,
                              style={"height": "60vh"}),
                    html.Div(id="hover-details", className="hover-details"),
                ],
                className="chart-container",
            ),
        ],
        className="filters-container",
    )


def date_controls():
    if store is None:
        return html.Div()

    last = len(store.dates) - 1
    return html.Div(
        [
            html.Div(
                [
                    html.Span(id="range-start-label", className="date-label"),
                    html.Span(id="range-end-label", className="date-label"),
                ],
                className="slider-header",
            ),
            dcc.RangeSlider(
                id="date-range-slider",
                min=0,
                max=last,
                step=1,
                value=[0, last],
                marks=slider_marks(store.dates),
                allowCross=False,
                updatemode='mouseup',
            ),
        ],
        className="date-range-slider",
    )


def serve_layout():
    initial_range = store.default_range().to_dict() if store is not None else None
    return html.Div(
        [
            dcc.Store(id="date-range-store", data=initial_range),
            dcc.Store(id="selection-store"),
            dcc.Store(id="viewport-width-store"),
            html.Div(
                [html.H1(APP_TITLE), html.Div([date_controls()], className="controls")],
                className="dashboard-header",
            ),
            html.Div(
                [
                    html.Div(id="summary-panel", className="top-inventory-summary"),
                    chart_section(),
                ],
                className="dashboard-main-row",
            ),
        ],
        className="dashboard",
    )


app.layout = serve_layout


# assets/clientside.js also pushes the width on window resize.
app.clientside_callback(
    ClientsideFunction(namespace="clientside", function_name="viewport_width"),
    Output("viewport-width-store", "data"),
    [Input("date-range-store", "data")]
)


@app.callback(
    [Output("date-range-store", "data"),
     Output("range-start-label", "children"),
     Output("range-end-label", "children")],
    [Input("date-range-slider", "value")]
)
def update_date_range(slider_value):
    """Map the slider's index positions onto a date range."""
    date_range = DateRange.from_indices(store.dates, slider_value)
    return (
        date_range.to_dict(),
        f"Start: {format_date_label(date_range.start)}",
        f"End: {format_date_label(date_range.end)}",
    )


@app.callback(
    [Output("selection-store", "data"),
     Output("state-checklist", "value"),
     Output("state-checklist", "options")],
    [Input("date-range-store", "data"),
     Input("state-checklist", "value")],
    [State("selection-store", "data")]
)
def update_selection(range_data, checked, current):
    """Reset the selection on range changes, toggle it on checklist edits."""
    ctx = dash.callback_context
    trigger_id = ctx.triggered[0]['prop_id'].split('.')[0] if ctx.triggered else None

    date_range = resolve_range(store, range_data)
    selection = resolve_selection(
        store, date_range, trigger_id == "state-checklist", checked, current
    )
    return selection, selection, checklist_options(store, selection)


@cache.memoize(timeout=3600)
def _inventory_figure_cached(start, end, selection_tuple, viewport_width):
    """Cached figure build; the main table never changes after startup.

    Args:
        start (str): Range start date.
        end (str): Range end date.
        selection_tuple (tuple[str]): Selection in insertion order (must be hashable).
        viewport_width (int): Browser width in pixels.

    Returns:
        go.Figure: The line chart.
    """
    return build_inventory_figure(
        store, DateRange(start, end), list(selection_tuple), viewport_width
    )


@app.callback(
    Output("inventory-graph", "figure"),
    [Input("date-range-store", "data"),
     Input("selection-store", "data"),
     Input("viewport-width-store", "data")]
)
def update_inventory_graph(range_data, selection, viewport_width):
    date_range = resolve_range(store, range_data)
    return _inventory_figure_cached(
        date_range.start,
        date_range.end,
        tuple(selection or []),
        viewport_width or DEFAULT_VIEWPORT_WIDTH,
    )


@app.callback(
    Output("hover-details", "children"),
    [Input("inventory-graph", "hoverData")],
    [State("date-range-store", "data"),
     State("selection-store", "data")]
)
def update_hover_details(hover_data, range_data, selection):
    """Show each selected series' value and change at the hovered date."""
    if not hover_data or not selection:
        return None

    date_range = resolve_range(store, range_data)
    hovered_date = hover_data['points'][0]['x']
    payload = tooltip_payload(store.rows_in_range(date_range), hovered_date, selection)
    if payload is None:
        return None

    return html.Div(
        [html.Div(payload['label'], className="tooltip-date")]
        + [
            html.Div(
                [
                    html.Span(f"{entry['name']}: ", style={"fontWeight": 500}),
                    entry['value_text'],
                    html.Span(
                        entry['change_text'],
                        style={"color": entry['change_color'], "marginLeft": 8},
                    ),
                ],
                style={"color": entry['color']},
            )
            for entry in payload['entries']
        ],
        className="custom-tooltip",
    )


def summary_card(title, entries):
    return html.Div(
        [
            html.H3(title),
            html.Ol([
                html.Li([html.Strong(entry.name), f": {format_value(entry.value)}"])
                for entry in entries
            ]),
        ],
        className="summary-card",
    )




@app.callback(
    Output("summary-panel", "children"),
    [Input("date-range-store", "data")]
)
def update_summary(range_data):
    """Top regions and states at the end of the range.

    Both sources are fetched again on every call; a failure in one leaves the
    other list in place.
    """
    date_range = resolve_range(store, range_data) if store is not None else None
    return [
        error_block(card['error'], heading=html.H3) if card['error']
        else summary_card(card['title'], card['entries'])
        for card in build_summary(date_range)
    ]


if __name__ == "__main__":
    app.run(debug=False)
