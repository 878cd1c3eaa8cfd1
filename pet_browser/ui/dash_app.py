from __future__ import annotations

import atexit
import logging
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from pathlib import Path
from typing import Optional

import dash_bootstrap_components as dbc
from dash import Dash

from .config import AppConfig
from pet_browser.config.loader import load_global_config
from pet_browser.services.catalog_client import CatalogClient
from pet_browser.services.session_service import BrowserSession, SessionRegistry
from pet_browser.ui.layout.build_layout import build_layout
from pet_browser.ui.callbacks.callbacks_filters import register_filter_callbacks
from pet_browser.ui.callbacks.callbacks_render import register_render_callbacks

logger = logging.getLogger(__name__)


def create_dash_app(
        config_root: Path | str = Path("config"),
        catalog_client: Optional[CatalogClient] = None,
) -> Dash:
    config_root = Path(config_root)

    # 1) Load Config
    global_config = load_global_config(config_root)

    # 2) Initialize Service Layer
    client = catalog_client or CatalogClient(global_config.catalog)

    # One worker pool shared by every tab's coordinator
    executor = ThreadPoolExecutor(max_workers=8, thread_name_prefix="catalog-fetch")

    session_factory = partial(
        _new_session,
        client=client,
        max_active_filters=global_config.max_active_filters,
        executor=executor,
    )
    sessions = SessionRegistry(session_factory, max_sessions=global_config.max_sessions)

    # 3) App Context
    ctx = AppConfig(
        config_root=config_root,
        global_config=global_config,
        catalog_client=client,
        sessions=sessions,
    )
    ctx.validate()

    atexit.register(_shutdown, sessions, executor, client)

    logger.info(
        "App configured",
        extra={
            "catalog_url": global_config.catalog.base_url,
            "max_active_filters": global_config.max_active_filters,
            "max_sessions": global_config.max_sessions,
        },
    )

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
    )

    app.title = global_config.ui_title

    # A function layout is re-evaluated per page load (fresh session id)
    app.layout = lambda: build_layout(ctx)

    # Register callbacks
    register_filter_callbacks(app, ctx)
    register_render_callbacks(app, ctx)

    return app


def _new_session(session_id: str, *, client, max_active_filters: int, executor) -> BrowserSession:
    return BrowserSession(
        session_id,
        client,
        max_active_filters=max_active_filters,
        executor=executor,
    )


def _shutdown(sessions: SessionRegistry, executor: ThreadPoolExecutor, client: CatalogClient) -> None:
    sessions.close()
    executor.shutdown(wait=False)
    client.close()
