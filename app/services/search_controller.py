from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol
from urllib.parse import quote

from app.core.config import settings
from app.core.metrics import SEARCH_QUERY_SECONDS
from app.schemas.search import Creator
from app.services.search_state import (
    SEARCH_ERROR_MESSAGE,
    Error,
    Idle,
    Loading,
    SearchState,
    Success,
    normalize_search_result,
)

logger = logging.getLogger(__name__)


class SearchProvider(Protocol):
    async def search_creators(self, query: str) -> Any: ...


class NavigationKey(str, Enum):
    ARROW_DOWN = "ArrowDown"
    ARROW_UP = "ArrowUp"
    ENTER = "Enter"
    ESCAPE = "Escape"


def global_search_url(query: str, path: str | None = None) -> str:
    return f"{path or settings.global_search_path}?q={quote(query, safe='')}"


@dataclass(slots=True)
class _PendingSearch:
    query: str
    started: float
    task: asyncio.Task[None] | None = None
    cancelled: bool = False


class SearchQueryController:
    """Debounced creator search for the search modal.

    Only the most recently issued request may move the state to ``Success`` or
    ``Error``. Older requests are flagged and cancelled before a new one starts,
    and their outcome is discarded.
    """

    def __init__(
        self,
        provider: SearchProvider,
        *,
        debounce_seconds: float | None = None,
        on_state_change: Callable[[SearchState], None] | None = None,
        on_creator_selected: Callable[[Creator], None] | None = None,
        on_global_search: Callable[[str], None] | None = None,
        on_close: Callable[[], None] | None = None,
    ) -> None:
        self._provider = provider
        self._debounce_seconds = (
            settings.search_debounce_seconds if debounce_seconds is None else max(debounce_seconds, 0.0)
        )
        self._on_state_change = on_state_change
        self._on_creator_selected = on_creator_selected
        self._on_global_search = on_global_search
        self._on_close = on_close

        self._query = ""
        self._state: SearchState = Idle()
        self._selected_index = -1
        self._debounce: asyncio.TimerHandle | None = None
        self._pending: _PendingSearch | None = None
        self._disposed = False

    @property
    def query(self) -> str:
        return self._query

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def selected_index(self) -> int:
        return self._selected_index

    @property
    def results(self) -> tuple[Creator, ...]:
        if isinstance(self._state, Success):
            return self._state.result.creators
        return ()

    @property
    def disposed(self) -> bool:
        return self._disposed

    def submit_query_change(self, text: str) -> None:
        if self._disposed:
            return
        self._query = text
        self._cancel_debounce()

        if not text.strip():
            self._abort_pending()
            self._set_state(Idle())
            return

        loop = asyncio.get_running_loop()
        self._debounce = loop.call_later(self._debounce_seconds, self._debounce_fired, text)

    async def execute_search(self, text: str) -> None:
        if self._disposed:
            return
        task = self._start_search(text)
        # wait() does not re-raise when the inner task is superseded and cancelled.
        await asyncio.wait({task})

    def retry(self) -> asyncio.Task[None] | None:
        if self._disposed or not isinstance(self._state, Error):
            return None
        logger.info("Retrying search query=%r", self._state.query)
        return self._start_search(self._state.query)

    def handle_key(self, key: str) -> bool:
        if self._disposed:
            return False
        results = self.results

        if key == NavigationKey.ARROW_DOWN:
            self._selected_index = min(len(results), self._selected_index + 1)
        elif key == NavigationKey.ARROW_UP:
            self._selected_index = max(-1, self._selected_index - 1)
        elif key == NavigationKey.ENTER:
            index = self._selected_index
            if 0 <= index < len(results):
                self.select_creator(results[index])
            elif index in (-1, len(results)) and self._query.strip():
                self._navigate_global()
        elif key == NavigationKey.ESCAPE:
            self._request_close()
        else:
            return False
        return True

    def select_creator(self, creator: Creator) -> None:
        if self._disposed:
            return
        logger.info("Creator selected id=%s name=%r", creator.id, creator.name)
        if self._on_creator_selected is not None:
            self._on_creator_selected(creator)
        self._request_close()

    def search_globally(self) -> None:
        if self._disposed or not self._query.strip():
            return
        self._navigate_global()

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self._cancel_debounce()
        self._abort_pending()
        logger.debug("Search controller disposed")

    def _debounce_fired(self, text: str) -> None:
        self._debounce = None
        if not self._disposed:
            self._start_search(text)

    def _start_search(self, text: str) -> asyncio.Task[None]:
        self._abort_pending()
        pending = _PendingSearch(query=text, started=time.perf_counter())
        self._pending = pending
        self._set_state(Loading(query=text))
        logger.info("Search initiated query=%r length=%s", text, len(text))
        pending.task = asyncio.get_running_loop().create_task(self._run(pending))
        return pending.task

    async def _run(self, pending: _PendingSearch) -> None:
        try:
            payload = await self._provider.search_creators(pending.query)
        except asyncio.CancelledError:
            if not pending.cancelled:
                raise
            self._observe(pending, "cancelled")
            logger.debug("Search superseded query=%r", pending.query)
            return
        except Exception:
            if pending.cancelled:
                self._observe(pending, "cancelled")
                logger.debug("Ignoring failure of superseded search query=%r", pending.query)
                return
            duration = self._observe(pending, "error")
            logger.exception("Search failed query=%r duration=%.3fs", pending.query, duration)
            self._finish(pending, Error(message=SEARCH_ERROR_MESSAGE, query=pending.query))
            return

        if pending.cancelled:
            self._observe(pending, "cancelled")
            logger.debug("Discarding result of superseded search query=%r", pending.query)
            return

        result = normalize_search_result(payload)
        duration = self._observe(pending, "success")
        logger.info(
            "Search completed query=%r results=%s total=%s duration=%.3fs",
            pending.query,
            len(result.creators),
            result.total_count,
            duration,
        )
        self._finish(pending, Success(result=result, query=pending.query))

    def _finish(self, pending: _PendingSearch, state: SearchState) -> None:
        if self._pending is pending:
            self._pending = None
        self._set_state(state)

    def _observe(self, pending: _PendingSearch, status: str) -> float:
        duration = time.perf_counter() - pending.started
        SEARCH_QUERY_SECONDS.labels(status=status).observe(duration)
        return duration

    def _set_state(self, state: SearchState) -> None:
        self._state = state
        # The cursor only ranges over results of the current state.
        self._selected_index = -1
        if self._on_state_change is not None:
            self._on_state_change(state)

    def _cancel_debounce(self) -> None:
        if self._debounce is not None:
            self._debounce.cancel()
            self._debounce = None

    def _abort_pending(self) -> None:
        pending, self._pending = self._pending, None
        if pending is None:
            return
        pending.cancelled = True
        if pending.task is not None and not pending.task.done():
            pending.task.cancel()

    def _navigate_global(self) -> None:
        logger.info("Global search initiated query=%r", self._query)
        if self._on_global_search is not None:
            self._on_global_search(self._query)

    def _request_close(self) -> None:
        if self._on_close is not None:
            self._on_close()
