from __future__ import annotations

__all__ = ["IDs"]


class IDs:
    class Store:
        SESSION_ID = "session-id"
        FILTER_STATE = "filter-state"

    class Control:
        # Filters
        STATUS_CHECKLIST = "status-checklist"
        RESET_FILTERS_BTN = "reset-filters-btn"
        FILTER_HINT = "filter-hint"

        # Results
        RESULTS_CONTAINER = "results-container"
        RESULT_POLL = "result-poll"

        NAVBAR_SUBTITLE = "navbar-subtitle"
