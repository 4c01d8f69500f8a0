from __future__ import annotations

import logging
from collections.abc import Callable

from app.schemas.search import Creator
from app.services.search_controller import SearchProvider, SearchQueryController, global_search_url
from app.services.search_state import SearchState

logger = logging.getLogger(__name__)


class SearchModal:
    """Open/close lifecycle of the creator search modal.

    Each ``open()`` builds a fresh controller; ``close()`` disposes it, so no
    timer or request outlives the modal.
    """

    def __init__(
        self,
        provider: SearchProvider,
        *,
        debounce_seconds: float | None = None,
        on_creator_selected: Callable[[Creator], None] | None = None,
        on_navigate: Callable[[str], None] | None = None,
        on_state_change: Callable[[SearchState], None] | None = None,
    ) -> None:
        self._provider = provider
        self._debounce_seconds = debounce_seconds
        self._on_creator_selected = on_creator_selected
        self._on_navigate = on_navigate
        self._on_state_change = on_state_change
        self._controller: SearchQueryController | None = None

    @property
    def is_open(self) -> bool:
        return self._controller is not None

    @property
    def controller(self) -> SearchQueryController | None:
        return self._controller

    def open(self) -> SearchQueryController:
        if self._controller is None:
            self._controller = SearchQueryController(
                self._provider,
                debounce_seconds=self._debounce_seconds,
                on_state_change=self._on_state_change,
                on_creator_selected=self._on_creator_selected,
                on_global_search=self._navigate_global,
                on_close=self.close,
            )
            logger.info("Search modal opened")
        return self._controller

    def close(self) -> None:
        controller, self._controller = self._controller, None
        if controller is None:
            return
        controller.dispose()
        logger.info("Search modal closed")

    def _navigate_global(self, query: str) -> None:
        if self._on_navigate is not None:
            self._on_navigate(global_search_url(query))
