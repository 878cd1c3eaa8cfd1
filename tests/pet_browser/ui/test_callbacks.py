from __future__ import annotations

import logging
from concurrent.futures import Executor, Future

import dash_bootstrap_components as dbc
import pytest
from dash import exceptions

from pet_browser.config.model import GlobalConfig
from pet_browser.core.exceptions import CatalogError
from pet_browser.services.session_service import BrowserSession, SessionRegistry
from pet_browser.ui.callbacks.callbacks_filters import apply_filter_change
from pet_browser.ui.callbacks.callbacks_render import render_session_result
from pet_browser.ui.config import AppConfig
from pet_browser.ui.helpers import EMPTY_SELECTION_MESSAGE


class DeferredExecutor(Executor):
    """Holds submitted work until run_pending(), so Loading can be observed."""

    def __init__(self):
        self.pending = []

    def submit(self, fn, *args, **kwargs):
        future = Future()
        self.pending.append((future, fn, args, kwargs))
        return future

    def run_pending(self):
        pending, self.pending = self.pending, []
        for future, fn, args, kwargs in pending:
            future.set_result(fn(*args, **kwargs))


class StaticCatalog:
    def __init__(self):
        self.queries = []

    def find_by_status(self, statuses, cancel_token):
        self.queries.append(statuses)
        return [{"id": 1, "name": "Rex", "status": "available"}]


@pytest.fixture
def executor():
    return DeferredExecutor()


@pytest.fixture
def catalog():
    return StaticCatalog()


@pytest.fixture
def ctx(tmp_path, executor, catalog):
    global_config = GlobalConfig(max_active_filters=2)

    def factory(session_id):
        return BrowserSession(session_id, catalog, max_active_filters=2, executor=executor)

    sessions = SessionRegistry(factory)
    yield AppConfig(
        config_root=tmp_path,
        global_config=global_config,
        catalog_client=catalog,
        sessions=sessions,
    )
    sessions.close()


def test_checklist_change_starts_loading_and_polling(ctx, executor, catalog):
    value, options, hint, store = apply_filter_change(ctx, "tab-1", ["available"], reset=False)

    assert value == ["available"]
    assert store == ["available"]
    assert hint == "Choose up to 2 statuses."
    assert not any(o["disabled"] for o in options)

    panel, poll_disabled = render_session_result(ctx, "tab-1")
    assert "pb-result-loading" in panel.className
    assert poll_disabled is False

    executor.run_pending()

    panel, poll_disabled = render_session_result(ctx, "tab-1")
    assert "pb-result-success" in panel.className
    assert poll_disabled is True
    assert catalog.queries == ["available"]


def test_checklist_at_cap_disables_remaining_option(ctx):
    value, options, hint, _ = apply_filter_change(ctx, "tab-1", ["sold", "pending"], reset=False)

    assert value == ["sold", "pending"]
    assert hint == "Maximum of 2 filters selected."
    assert {o["value"]: o["disabled"] for o in options}["available"] is True


def test_reset_clears_filters_and_goes_idle(ctx, executor, catalog):
    apply_filter_change(ctx, "tab-1", ["available", "sold"], reset=False)

    # The checklist still reports the old value when reset is clicked
    value, _, hint, store = apply_filter_change(ctx, "tab-1", ["available", "sold"], reset=True)

    assert value == []
    assert store == []
    assert hint == "Choose up to 2 statuses."

    panel, poll_disabled = render_session_result(ctx, "tab-1")
    assert "pb-result-idle" in panel.className
    assert panel.children.children == EMPTY_SELECTION_MESSAGE
    assert poll_disabled is True

    # The cancelled request settles late and is discarded
    executor.run_pending()
    panel, _ = render_session_result(ctx, "tab-1")
    assert "pb-result-idle" in panel.className


def test_unknown_status_is_ignored_and_logged(ctx, caplog):
    apply_filter_change(ctx, "tab-1", ["pending"], reset=False)

    with caplog.at_level(logging.WARNING):
        value, _, _, store = apply_filter_change(ctx, "tab-1", ["pending", "adopted"], reset=False)

    assert value == ["pending"]
    assert store == ["pending"]
    assert "Ignoring unknown status from checklist" in caplog.text


def test_tabs_keep_separate_selections(ctx):
    apply_filter_change(ctx, "tab-1", ["sold"], reset=False)
    value, _, _, _ = apply_filter_change(ctx, "tab-2", ["pending"], reset=False)

    assert value == ["pending"]
    assert ctx.sessions["tab-1"].selector.filters[0].value == "sold"


def test_failure_keeps_poll_disabled(ctx, executor, catalog):
    def failing(statuses, cancel_token):
        raise CatalogError("API Error", status_code=500)

    catalog.find_by_status = failing
    apply_filter_change(ctx, "tab-1", ["sold"], reset=False)
    executor.run_pending()

    panel, poll_disabled = render_session_result(ctx, "tab-1")
    assert isinstance(panel.children, dbc.Alert)
    assert panel.children.children == "API Error"
    assert poll_disabled is True


def test_missing_session_id_prevents_update(ctx):
    with pytest.raises(exceptions.PreventUpdate):
        apply_filter_change(ctx, None, ["sold"], reset=False)
    with pytest.raises(exceptions.PreventUpdate):
        render_session_result(ctx, "")
