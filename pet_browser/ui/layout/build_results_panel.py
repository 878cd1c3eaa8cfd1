from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from pet_browser.core.result_state import IDLE
from pet_browser.ui.helpers import render_result
from pet_browser.ui.ids import IDs


def build_results_panel(poll_interval_ms: int) -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardHeader(html.Strong("Pets"), className="p-2"),
            dbc.CardBody(
                [
                    html.Div(
                        render_result(IDLE),
                        id=IDs.Control.RESULTS_CONTAINER,
                    ),
                    # Only enabled while a request is in flight
                    dcc.Interval(
                        id=IDs.Control.RESULT_POLL,
                        interval=poll_interval_ms,
                        disabled=True,
                    ),
                ],
            ),
        ],
        className="pb-results-card",
    )
