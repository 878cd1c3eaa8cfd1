from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Tuple

import dash
from dash import Input, Output, State, exceptions, html

from pet_browser.ui.helpers import is_loading, render_result
from pet_browser.ui.ids import IDs

if TYPE_CHECKING:
    from pet_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)


def render_session_result(ctx: AppConfig, session_id: Optional[str]) -> Tuple[html.Div, bool]:
    """Render the tab's ResultState. Returns (panel, poll disabled)."""
    if not session_id:
        raise exceptions.PreventUpdate

    state = ctx.sessions.get_or_create(session_id).state
    try:
        children = render_result(state)
    except Exception:
        logger.exception(
            "Error rendering result state",
            extra={"session_id": session_id, "state": repr(state)},
        )
        raise exceptions.PreventUpdate
    return children, not is_loading(state)


def register_render_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # ResultState -> results panel (polled while loading)
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.RESULTS_CONTAINER, "children"),
        Output(IDs.Control.RESULT_POLL, "disabled"),
        Input(IDs.Store.FILTER_STATE, "data"),
        Input(IDs.Control.RESULT_POLL, "n_intervals"),
        State(IDs.Store.SESSION_ID, "data"),
        prevent_initial_call=True,
    )
    def update_results(_filters, _n_intervals, session_id):
        return render_session_result(ctx, session_id)
