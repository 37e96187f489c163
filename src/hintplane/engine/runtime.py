"""Asyncio runtime: serializes events through the pure handler.

One consumer task drains the inbound queue, so each event is fully handled
(state replaced, effects started, outbound events delivered) before the
next one is looked at. Documentation fetches run as separate tasks and
re-enter through the same queue; queries keep answering from cached docs
while they are in flight.
"""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Callable

import structlog

from hintplane.config.models import HintPlaneConfig
from hintplane.core.errors import DocsError, HintPlaneError, InternalError
from hintplane.core.logging import clear_event_id, set_event_id
from hintplane.docs.fetcher import DocsFetcher
from hintplane.engine.events import (
    DocsFetched,
    DocsFetchFailed,
    ErrorMessage,
    FetchDocs,
    InboundEvent,
    OutboundEvent,
)
from hintplane.engine.handlers import EventHandler
from hintplane.engine.state import EngineState
from hintplane.index.token_index import TokenIndexBuilder

logger = structlog.get_logger()

EventSink = Callable[[OutboundEvent], None]


class Engine:
    """Owns the current ``EngineState`` and runs fetch effects."""

    def __init__(
        self,
        fetcher: DocsFetcher,
        *,
        config: HintPlaneConfig | None = None,
        sink: EventSink | None = None,
    ) -> None:
        config = config or HintPlaneConfig()
        self.fetcher = fetcher
        self.state = EngineState()
        self.handler = EventHandler(
            builder=TokenIndexBuilder(
                memoize=config.index.memoize,
                memo_size=config.index.memo_size,
            ),
            locator=fetcher.locator,
        )
        self._sink = sink
        self._queue: asyncio.Queue[InboundEvent | None] = asyncio.Queue()
        self._fetch_tasks: set[asyncio.Task[None]] = set()
        self._consumer: asyncio.Task[None] | None = None

    # ------------------------------------------------------------------
    # Processing
    # ------------------------------------------------------------------

    def dispatch(self, event: InboundEvent) -> list[OutboundEvent]:
        """Handle one event now and return (and deliver) its outbound events.

        Must be called from the event loop thread; the queue consumer is
        the only caller in normal operation.
        """
        set_event_id()
        try:
            transition = self.handler(self.state, event)
        except HintPlaneError as e:
            logger.warning("event_failed", event_type=event.TYPE, error=str(e))
            events: list[OutboundEvent] = [ErrorMessage(e.to_dict())]
        except Exception as e:
            logger.exception("event_crashed", event_type=event.TYPE)
            events = [ErrorMessage(InternalError.unexpected(str(e), event=event.TYPE).to_dict())]
        else:
            if transition.state.version != self.state.version:
                logger.debug("state_advanced", event_type=event.TYPE, version=transition.state.version)
            self.state = transition.state
            for effect in transition.effects:
                self._start_fetch(effect)
            events = list(transition.events)
        finally:
            clear_event_id()

        if self._sink is not None:
            for outbound in events:
                self._sink(outbound)
        return events

    def submit(self, event: InboundEvent) -> None:
        """Queue an event for the consumer task."""
        self._queue.put_nowait(event)

    async def run(self) -> None:
        """Consume events until ``stop()``."""
        while True:
            event = await self._queue.get()
            try:
                if event is None:
                    return
                self.dispatch(event)
            finally:
                self._queue.task_done()

    def start(self) -> None:
        if self._consumer is None:
            self._consumer = asyncio.get_running_loop().create_task(self.run())
            logger.info("engine_started")

    async def stop(self) -> None:
        """Drain queued events and in-flight fetches, then stop."""
        if self._consumer is not None:
            await self.settle()
            self._queue.put_nowait(None)
            with contextlib.suppress(asyncio.CancelledError):
                await self._consumer
            self._consumer = None
        await self.fetcher.aclose()
        logger.info("engine_stopped", version=self.state.version)

    async def settle(self) -> None:
        """Wait until no fetch is in flight and every queued event is handled."""
        while True:
            if self._fetch_tasks:
                await asyncio.gather(*self._fetch_tasks, return_exceptions=True)
            await self._queue.join()
            if not self._fetch_tasks and self._queue.empty():
                return

    # ------------------------------------------------------------------
    # Effects
    # ------------------------------------------------------------------

    def _start_fetch(self, effect: FetchDocs) -> None:
        task = asyncio.get_running_loop().create_task(self._fetch(effect.packages))
        self._fetch_tasks.add(task)
        task.add_done_callback(self._fetch_tasks.discard)

    async def _fetch(self, packages: tuple[str, ...]) -> None:
        logger.info("docs_fetch_requested", packages=list(packages))
        try:
            modules = await self.fetcher.fetch_packages(packages)
        except DocsError as e:
            logger.warning("docs_fetch_failed", packages=list(packages), error=str(e))
            self.submit(DocsFetchFailed(packages, e.to_dict()))
            return
        except Exception as e:
            logger.exception("docs_fetch_crashed", packages=list(packages))
            self.submit(DocsFetchFailed(packages, InternalError.unexpected(str(e)).to_dict()))
            return
        logger.info("docs_fetch_succeeded", packages=list(packages), modules=len(modules))
        self.submit(DocsFetched(packages, tuple(modules)))
