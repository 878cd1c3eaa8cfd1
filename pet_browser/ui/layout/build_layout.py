from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc

from pet_browser.ui.layout.build_filter_panel import build_filter_panel
from pet_browser.ui.layout.build_navbar import build_navbar
from pet_browser.ui.layout.build_results_panel import build_results_panel
from pet_browser.ui.ids import IDs

if TYPE_CHECKING:
    from pet_browser.ui.config import AppConfig


def build_layout(ctx: "AppConfig") -> dbc.Container:
    """
    Page layout. Called on every page load so each tab gets its own session id.
    """
    global_config = ctx.global_config

    return dbc.Container(
        fluid=True,
        className="pb-root",
        children=[
            build_navbar(global_config),

            # Per-tab stores
            dcc.Store(id=IDs.Store.SESSION_ID, data=uuid.uuid4().hex, storage_type="memory"),
            dcc.Store(id=IDs.Store.FILTER_STATE, data=[], storage_type="memory"),

            dbc.Row(
                dbc.Col(
                    [
                        build_filter_panel(global_config.max_active_filters),
                        build_results_panel(global_config.poll_interval_ms),
                    ],
                    md={"size": 8, "offset": 2},
                    className="mt-4",
                ),
            ),
        ],
    )
