"""Infinite scroll engine - segment sequencing with one-segment lookahead."""

import asyncio
import concurrent.futures
import logging
from typing import Callable, Optional, Set, Union

from scrollfeed.config.settings import ScrollSettings
from scrollfeed.core.outcomes import Aborted, Empty, FetchOutcome, NotFound, Success
from scrollfeed.core.protocols import (
    Collaborator,
    IndicatorPresenter,
    NullCollaborator,
    NullIndicatorPresenter,
)
from scrollfeed.core.state import EngineState, EngineStatus
from scrollfeed.managers.prefetch_cache import PrefetchCache
from scrollfeed.managers.scroll_trigger import ScrollTrigger, ViewportGeometry
from scrollfeed.managers.segment_cursor import SegmentCursor
from scrollfeed.services.fetch_controller import FetchController
from scrollfeed.utils.query_params import parse_data_params

logger = logging.getLogger("ScrollFeed.InfiniteScrollEngine")


class InfiniteScrollEngine:
    """Fetches, renders and prefetches segments for one scrollable container.

    Every effective ``fetch()`` renders the segment resolved by the previous
    cycle (or loads it on a cache miss) and then prefetches the following
    segment, so the return value tells whether more content exists. While a
    cycle runs the engine is locked and further ``fetch()`` calls are no-ops.
    """

    def __init__(
        self,
        settings: ScrollSettings,
        controller: FetchController,
        collaborator: Optional[Collaborator] = None,
        presenter: Optional[IndicatorPresenter] = None,
        geometry: Optional[Callable[[], ViewportGeometry]] = None,
        cursor: Optional[SegmentCursor] = None,
        cache: Optional[PrefetchCache] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        """Initialize InfiniteScrollEngine.

        Args:
            settings: Immutable scroll settings
            controller: Controller issuing the segment requests
            collaborator: Host hooks (render, errors, params...)
            presenter: Loading / load-more / no-results affordances
            geometry: Samples the viewport, required by auto_fill
            cursor: Segment cursor, defaults to one starting at settings.segment
            cache: Lookahead cache, defaults to an empty one
            loop: Event loop the engine runs on. Rebound to whichever loop
                runs fetch() or start().
        """
        self.settings = settings
        self._controller = controller
        self._collaborator = collaborator or NullCollaborator()
        self._presenter = presenter or NullIndicatorPresenter()
        self._geometry = geometry
        self._cursor = cursor or SegmentCursor(settings.segment)
        self._cache = cache or PrefetchCache()
        self._state = EngineState(initial_fetch_pending=settings.fetch_on_initiate)
        if settings.lock_infinite_scroll:
            self._state.lock()
        self._tasks: Set[asyncio.Task] = set()
        self._loop = loop

    @property
    def status(self) -> EngineStatus:
        return self._state.status

    @property
    def locked(self) -> bool:
        return self._state.locked

    @property
    def segment(self) -> int:
        return self._cursor.current()

    @property
    def no_more_content(self) -> bool:
        return self._state.no_more_content

    @property
    def no_results(self) -> bool:
        return self._state.no_results

    @property
    def initial_fetch_pending(self) -> bool:
        return self._state.initial_fetch_pending

    @property
    def has_prefetched(self) -> bool:
        return not self._cache.is_empty

    async def fetch(self) -> bool:
        """Render the next segment and prefetch the one after it.

        Returns:
            True if more content may exist, False on a locked engine, a
            terminal outcome, an error, or when superseded.
        """
        self._bind_running_loop()
        if self._state.locked:
            logger.debug("Fetch suppressed, engine is locked")
            return False

        self._state.lock()
        self._presenter.hide_load_more()
        self._presenter.show_loading()

        # A rewound cursor means an earlier backfill never settled, so the
        # newer fetch repeats it.
        initial = self._state.initial_fetch_pending or self._cursor.rewound
        if initial:
            self._state.initial_fetch_pending = False
            self._cache.clear()
            self._cursor.rewind_for_initial_fetch()

        requested = self._cursor.next()
        outcome = self._cache.take()
        if outcome is None:
            outcome = await self._request(initial=initial)
        else:
            logger.debug(f"Rendering prefetched segment {requested}")

        if isinstance(outcome, Aborted):
            logger.debug(f"Request for segment {requested} was superseded")
            return False
        if not isinstance(outcome, Success):
            return self._settle_failure(outcome, first_segment=initial or requested == 1)

        self._render(outcome)

        if not outcome.more_available:
            logger.info(f"No more content after segment {self._cursor.current()}")
            self._finish_stream()
            return False

        upcoming = await self._request()
        return self._settle_prefetch(upcoming)

    async def auto_fill(self) -> None:
        """Fetch until the viewport is filled or the stream ends."""
        if self._geometry is None:
            logger.debug("auto_fill skipped, no geometry source")
            return

        while not self._geometry().is_filled(self.settings.offset):
            if not await self.fetch():
                break

    async def start(self) -> bool:
        """Bootstrap the container: initial fetch, auto scroll, auto fill."""
        self._bind_running_loop()
        more = True
        if self._state.initial_fetch_pending:
            more = await self.fetch()

        if self.settings.auto_scroll and self._cursor.current() > 1:
            self._collaborator.scroll_to_latest()

        if more and self.settings.auto_fill:
            await self.auto_fill()
        return more

    def schedule_fetch(
        self,
    ) -> Union["asyncio.Task[bool]", "concurrent.futures.Future[bool]", None]:
        """Start ``fetch()`` in the background on the engine's loop.

        Used by scroll and "load more" signals, which cannot await. GTK emits
        those on the GLib main loop, so when called outside the engine's loop
        the fetch is handed over with ``run_coroutine_threadsafe``.
        """
        if self._state.locked:
            return None

        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is not None and (
            self._loop is None or self._loop.is_closed() or running is self._loop
        ):
            self._loop = running
            task = running.create_task(self.fetch())
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
            return task

        if self._loop is None or self._loop.is_closed():
            logger.warning("Fetch not scheduled, no event loop is bound to the engine")
            return None
        return asyncio.run_coroutine_threadsafe(self.fetch(), self._loop)

    def make_trigger(self, sample: Callable[[], ViewportGeometry]) -> ScrollTrigger:
        return ScrollTrigger(
            sample=sample,
            on_near_end=self.schedule_fetch,
            offset=self.settings.offset,
            is_locked=lambda: self._state.locked,
        )

    def set_lock_infinite_scroll(self, lock: bool = True) -> None:
        if lock:
            self._state.lock()
        else:
            self._state.unlock()

    def set_segment(self, segment: int = 1) -> None:
        self._cursor.set(segment)
        # The lookahead belonged to the previous position.
        self._cache.clear()

    def reset(self, remove_contents: bool = True) -> None:
        """Return to the configured start segment and re-arm the initial fetch."""
        self._controller.cancel()
        self._cache.clear()

        if remove_contents:
            self._collaborator.clear_contents()
            self._presenter.show_loading()

        self._presenter.hide_no_results()
        self._cursor.reset()
        self._state.clear_terminal_flags()
        self._state.unlock()
        self._state.initial_fetch_pending = True
        logger.info(f"Reset to segment {self._cursor.current()}")

    def _bind_running_loop(self) -> None:
        self._loop = asyncio.get_running_loop()

    async def _request(self, initial: bool = False) -> FetchOutcome:
        params = parse_data_params(self._collaborator.get_data_params())
        if initial:
            params["initial"] = 1
        params[self.settings.segment_param] = self._cursor.next()

        handle = self._controller.issue(params)
        self._cache.reserve(handle.generation)
        outcome = await handle.wait()

        if not isinstance(outcome, Aborted) and not self._controller.is_current(handle.generation):
            return Aborted(generation=handle.generation)
        return outcome

    def _render(self, outcome: Success) -> None:
        self._cursor.advance()
        current = self._cursor.current()
        self._collaborator.persist_param(self.settings.segment_param, current)
        if outcome.item_count is not None:
            self._collaborator.report_count(outcome.item_count)
        logger.debug(f"Rendering segment {current}")
        self._collaborator.render(outcome.payload)

    def _settle_prefetch(self, outcome: FetchOutcome) -> bool:
        if isinstance(outcome, Aborted):
            logger.debug("Prefetch superseded, newer request owns the outcome")
            return False
        if isinstance(outcome, Success):
            self._cache.store(outcome)
            self._presenter.hide_loading()
            self._state.unlock()
            self._presenter.show_load_more()
            return True
        return self._settle_failure(outcome, first_segment=False)

    def _settle_failure(self, outcome: FetchOutcome, first_segment: bool) -> bool:
        self._presenter.hide_loading()

        if isinstance(outcome, Empty):
            if outcome.item_count is not None:
                self._collaborator.report_count(outcome.item_count)
            if first_segment and self._state.locked and not self._state.no_results:
                logger.info("First segment is empty, no results")
                self._state.no_results = True
                self._collaborator.report_no_results(outcome.payload)
                self._presenter.show_no_results()

        if outcome.is_terminal:
            self._finish_stream()
            if isinstance(outcome, NotFound):
                logger.warning("Segment route returned 404, locking permanently")
                self._collaborator.report_error(outcome)
            return False

        # TransportError: stay unlocked so a later trigger can retry.
        logger.warning(f"Segment request failed: {outcome.detail}")
        self._state.unlock()
        self._collaborator.report_error(outcome)
        return False

    def _finish_stream(self) -> None:
        self._state.no_more_content = True
        self._presenter.hide_loading()
        self._presenter.hide_load_more()
