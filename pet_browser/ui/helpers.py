from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

import dash_bootstrap_components as dbc
from dash import html

from pet_browser.core.filter_state import FilterSelector
from pet_browser.core.records import Record
from pet_browser.core.result_state import Failure, Idle, Loading, ResultState, Success
from pet_browser.core.status import STATUSES, StatusValue, parse_status

EMPTY_SELECTION_MESSAGE = "Select one or more filters to see our pets."
NO_RESULTS_MESSAGE = "No pets found."

# Bootstrap badge colours; anything unrecognised falls back to the "sold" look
STATUS_BADGE_COLORS: Dict[str, str] = {
    StatusValue.AVAILABLE.value: "success",
    StatusValue.PENDING.value: "warning",
    StatusValue.SOLD.value: "secondary",
}


def status_checklist_options(selector: FilterSelector) -> List[dict]:
    """Checklist options, disabling unselected statuses once the cap is reached."""
    return [
        {
            "label": s.value.capitalize(),
            "value": s.value,
            "disabled": not selector.can_select(s),
        }
        for s in STATUSES
    ]


def sync_selector_with_checklist(selector: FilterSelector, checked: Sequence[str] | None) -> bool:
    """
    Replay a checklist change onto the selector as individual toggles.

    Dash hands us the full list of checked values; the selector only knows
    toggle(), so work out which statuses flipped and toggle each one.
    Deselections are applied first so a swap at the cap still goes through.

    Returns True if the selector changed.
    """
    wanted: List[StatusValue] = []
    for raw in checked or []:
        value = parse_status(raw)
        if value not in wanted:
            wanted.append(value)

    current = selector.filters
    changed = False
    for value in current:
        if value not in wanted:
            changed |= selector.toggle(value)
    for value in wanted:
        if value not in current:
            changed |= selector.toggle(value)
    return changed


def filter_hint(selector: FilterSelector) -> str:
    if selector.at_capacity:
        return f"Maximum of {selector.max_active} filters selected."
    return f"Choose up to {selector.max_active} statuses."


def is_loading(state: ResultState) -> bool:
    return isinstance(state, Loading)


def _status_badge(status: str) -> dbc.Badge:
    color = STATUS_BADGE_COLORS.get(status, STATUS_BADGE_COLORS[StatusValue.SOLD.value])
    return dbc.Badge(status, color=color, pill=True, className="px-3 py-2")


def _record_row(record: Record) -> dbc.ListGroupItem:
    return dbc.ListGroupItem(
        [
            html.Span(record.name, className="fw-medium"),
            _status_badge(record.status),
        ],
        className="d-flex justify-content-between align-items-center",
    )


def _message(text: str) -> html.P:
    return html.P(text, className="text-muted text-center py-4 fw-medium mb-0")


def render_records(records: Iterable[Record]) -> dbc.ListGroup:
    return dbc.ListGroup([_record_row(r) for r in records], flush=True)


def render_result(state: ResultState) -> html.Div:
    """
    Project the current ResultState into exactly one of: spinner, error banner,
    record list, or an empty-state message.
    """
    if isinstance(state, Loading):
        body = html.Div(dbc.Spinner(color="primary"), className="d-flex justify-content-center py-4")
    elif isinstance(state, Failure):
        body = dbc.Alert(state.message, color="danger", className="mb-0")
    elif isinstance(state, Success) and not state.is_empty:
        body = render_records(state.records)
    elif isinstance(state, Success):
        body = _message(NO_RESULTS_MESSAGE)
    elif isinstance(state, Idle):
        body = _message(EMPTY_SELECTION_MESSAGE)
    else:
        raise TypeError(f"Unknown result state: {state!r}")

    return html.Div(body, className=f"pb-result pb-result-{type(state).__name__.lower()}")
