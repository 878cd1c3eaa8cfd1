from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import html

from pet_browser.core.filter_state import FilterSelector
from pet_browser.ui.helpers import filter_hint, status_checklist_options
from pet_browser.ui.ids import IDs


def build_filter_panel(max_active_filters: int) -> dbc.Card:
    # Fresh page load: nothing selected yet
    selector = FilterSelector(max_active=max_active_filters)

    return dbc.Card(
        [
            dbc.CardHeader(
                html.Div(
                    [
                        html.Strong("Filter by status"),
                        dbc.Button(
                            "Reset filters",
                            id=IDs.Control.RESET_FILTERS_BTN,
                            color="secondary",
                            size="sm",
                            className="ms-auto",
                        ),
                    ],
                    className="d-flex align-items-center",
                ),
            ),
            dbc.CardBody(
                [
                    dbc.Checklist(
                        id=IDs.Control.STATUS_CHECKLIST,
                        options=status_checklist_options(selector),
                        value=[],
                        inline=True,
                    ),
                    html.Small(
                        filter_hint(selector),
                        id=IDs.Control.FILTER_HINT,
                        className="text-muted",
                    ),
                ]
            ),
        ],
        className="pb-filter-card mb-3",
    )
