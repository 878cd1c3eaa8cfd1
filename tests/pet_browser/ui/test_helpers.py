from __future__ import annotations

import dash_bootstrap_components as dbc
import pytest
from dash import html

from pet_browser.core.filter_state import FilterSelector
from pet_browser.core.records import Record
from pet_browser.core.result_state import IDLE, Failure, Loading, Success
from pet_browser.core.status import StatusValue
from pet_browser.ui.helpers import (
    EMPTY_SELECTION_MESSAGE,
    NO_RESULTS_MESSAGE,
    filter_hint,
    is_loading,
    render_result,
    status_checklist_options,
    sync_selector_with_checklist,
)

AVAILABLE, PENDING, SOLD = StatusValue.AVAILABLE, StatusValue.PENDING, StatusValue.SOLD


def _selector(*statuses, max_active=2):
    sel = FilterSelector(max_active=max_active)
    for s in statuses:
        sel.toggle(s)
    return sel


def test_checklist_options_disable_unselected_at_cap():
    options = status_checklist_options(_selector(AVAILABLE, SOLD))

    assert [o["value"] for o in options] == ["available", "pending", "sold"]
    assert [o["label"] for o in options] == ["Available", "Pending", "Sold"]
    assert {o["value"]: o["disabled"] for o in options} == {
        "available": False,
        "pending": True,
        "sold": False,
    }


def test_checklist_options_all_enabled_below_cap():
    options = status_checklist_options(_selector(PENDING))
    assert not any(o["disabled"] for o in options)


def test_sync_adds_in_checklist_order():
    sel = _selector(max_active=3)

    assert sync_selector_with_checklist(sel, ["sold", "available"]) is True
    assert sel.filters == (SOLD, AVAILABLE)


def test_sync_removes_unchecked_and_keeps_order():
    sel = _selector(PENDING, AVAILABLE, SOLD, max_active=3)

    assert sync_selector_with_checklist(sel, ["pending", "sold"]) is True
    assert sel.filters == (PENDING, SOLD)


def test_sync_swap_at_cap_applies_deselect_first():
    sel = _selector(AVAILABLE, PENDING)

    assert sync_selector_with_checklist(sel, ["available", "sold"]) is True
    assert sel.filters == (AVAILABLE, SOLD)


def test_sync_over_cap_is_ignored_for_extra_values():
    sel = _selector(AVAILABLE, PENDING)

    assert sync_selector_with_checklist(sel, ["available", "pending", "sold"]) is False
    assert sel.filters == (AVAILABLE, PENDING)


def test_sync_with_none_clears_selection():
    sel = _selector(SOLD)

    assert sync_selector_with_checklist(sel, None) is True
    assert sel.filters == ()


def test_sync_rejects_unknown_status():
    with pytest.raises(ValueError):
        sync_selector_with_checklist(_selector(), ["adopted"])


def test_filter_hint_mentions_cap():
    assert filter_hint(_selector(AVAILABLE)) == "Choose up to 2 statuses."
    assert filter_hint(_selector(AVAILABLE, SOLD)) == "Maximum of 2 filters selected."


def test_is_loading():
    assert is_loading(Loading((SOLD,)))
    assert not is_loading(IDLE)
    assert not is_loading(Success(()))


def test_render_idle_shows_selection_prompt():
    out = render_result(IDLE)

    assert "pb-result-idle" in out.className
    assert isinstance(out.children, html.P)
    assert out.children.children == EMPTY_SELECTION_MESSAGE


def test_render_empty_success_shows_no_results():
    out = render_result(Success(()))

    assert "pb-result-success" in out.className
    assert out.children.children == NO_RESULTS_MESSAGE


def test_render_loading_shows_spinner():
    out = render_result(Loading((AVAILABLE,)))

    assert "pb-result-loading" in out.className
    assert isinstance(out.children.children, dbc.Spinner)


def test_render_failure_shows_message():
    out = render_result(Failure("API Error"))

    assert "pb-result-failure" in out.className
    assert isinstance(out.children, dbc.Alert)
    assert out.children.children == "API Error"


def test_render_success_lists_records_with_badges():
    records = (
        Record(id=1, name="Rex", status="available"),
        Record(id=2, name="No name", status="unknown"),
    )
    out = render_result(Success(records))

    items = out.children.children
    assert isinstance(out.children, dbc.ListGroup)
    assert len(items) == 2

    name, badge = items[0].children
    assert name.children == "Rex"
    assert badge.children == "available"
    assert badge.color == "success"

    # Unrecognised statuses fall back to the "sold" badge
    assert items[1].children[1].color == "secondary"


def test_render_rejects_unknown_state():
    with pytest.raises(TypeError):
        render_result(object())
