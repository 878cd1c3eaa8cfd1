from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

import dash
from dash import Input, Output, State, exceptions

from pet_browser.ui.helpers import filter_hint, status_checklist_options, sync_selector_with_checklist
from pet_browser.ui.ids import IDs

if TYPE_CHECKING:
    from pet_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)


def apply_filter_change(
        ctx: AppConfig,
        session_id: Optional[str],
        checked: Optional[Sequence[str]],
        reset: bool,
) -> Tuple[List[str], List[dict], str, List[str]]:
    """
    Push a checklist change or reset click onto the tab's FilterSelector.

    Returns (checklist value, checklist options, hint, filter-state data).
    """
    if not session_id:
        raise exceptions.PreventUpdate

    session = ctx.sessions.get_or_create(session_id)
    selector = session.selector

    if reset:
        selector.reset()
    else:
        try:
            sync_selector_with_checklist(selector, checked)
        except ValueError:
            logger.warning(
                "Ignoring unknown status from checklist",
                extra={"session_id": session_id, "checked": checked},
            )

    # Echo the selector back so the checklist never shows more than it holds
    active = [s.value for s in selector.filters]
    return active, status_checklist_options(selector), filter_hint(selector), active


def register_filter_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Checklist / reset -> FilterSelector -> filter-state store
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.STATUS_CHECKLIST, "value"),
        Output(IDs.Control.STATUS_CHECKLIST, "options"),
        Output(IDs.Control.FILTER_HINT, "children"),
        Output(IDs.Store.FILTER_STATE, "data"),
        Input(IDs.Control.STATUS_CHECKLIST, "value"),
        Input(IDs.Control.RESET_FILTERS_BTN, "n_clicks"),
        State(IDs.Store.SESSION_ID, "data"),
        prevent_initial_call=True,
    )
    def update_filters(checked, _reset_clicks, session_id):
        reset = dash.ctx.triggered_id == IDs.Control.RESET_FILTERS_BTN
        return apply_filter_change(ctx, session_id, checked, reset)
