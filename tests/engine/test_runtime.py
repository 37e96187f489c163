"""Tests for the asyncio Engine runtime."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from hintplane.core.errors import DocsError, ErrorCode
from hintplane.docs.fetcher import DocsFetcher
from hintplane.engine.events import (
    ActiveFileChanged,
    ActiveHintsChanged,
    CanGoToDefinition,
    CanGoToDefinitionResult,
    DocsFailed,
    DocsLoaded,
    ErrorMessage,
    FileContentsChanged,
    OutboundEvent,
    PackagesNeeded,
    UpdatingDocs,
)
from hintplane.engine.runtime import Engine
from hintplane.index.models import ActiveFile, ModuleSummary, Values

CORE = "elm-lang/core/5.0.0"


def _fetcher(core_docs: list[ModuleSummary] | None = None, error: Exception | None = None) -> DocsFetcher:
    fetcher = DocsFetcher()
    fetcher.fetch_packages = AsyncMock(  # type: ignore[method-assign]
        return_value=core_docs or [],
        side_effect=error,
    )
    fetcher.aclose = AsyncMock()  # type: ignore[method-assign]
    return fetcher


class TestDispatch:
    def test_dispatch_returns_and_delivers(self, main_file: ActiveFile) -> None:
        sink = MagicMock()
        engine = Engine(_fetcher(), sink=sink)

        events = engine.dispatch(CanGoToDefinition("x"))

        assert events == [CanGoToDefinitionResult("x", False)]
        sink.assert_called_once_with(CanGoToDefinitionResult("x", False))

    def test_handler_crash_becomes_error_event(self) -> None:
        engine = Engine(_fetcher())
        engine.handler = MagicMock(side_effect=RuntimeError("kaboom"))
        version = engine.state.version

        (event,) = engine.dispatch(CanGoToDefinition("x"))

        assert isinstance(event, ErrorMessage)
        assert event.error["code"] == ErrorCode.INTERNAL_ERROR
        assert "kaboom" in event.error["message"]
        assert engine.state.version == version

    def test_state_replaced(self, main_file: ActiveFile) -> None:
        engine = Engine(_fetcher())
        engine.dispatch(ActiveFileChanged(main_file))
        assert engine.state.version == 1
        assert engine.state.active_file == main_file


class TestRun:
    @pytest.mark.asyncio
    async def test_fetch_success_flow(self, core_docs: list[ModuleSummary], main_file: ActiveFile) -> None:
        # Given a running engine with an active file
        received: list[OutboundEvent] = []
        fetcher = _fetcher(core_docs)
        engine = Engine(fetcher, sink=received.append)
        engine.start()
        engine.submit(ActiveFileChanged(main_file))

        # When core docs are requested
        engine.submit(PackagesNeeded((CORE,)))
        await engine.settle()

        # Then the fetch ran once and the index includes core names
        fetcher.fetch_packages.assert_awaited_once_with((CORE,))
        types = [type(e) for e in received]
        assert UpdatingDocs in types
        assert DocsLoaded in types
        assert types.index(UpdatingDocs) < types.index(DocsLoaded)
        assert "identity" in engine.state.token_index
        assert engine.state.pending_packages == frozenset()

        await engine.stop()
        fetcher.aclose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_fetch_failure_flow(self) -> None:
        received: list[OutboundEvent] = []
        error = DocsError.fetch_failed("http://x/documentation.json", "404")
        engine = Engine(_fetcher(error=error), sink=received.append)
        engine.start()

        engine.submit(PackagesNeeded((CORE,)))
        await engine.settle()
        await engine.stop()

        failures = [e for e in received if isinstance(e, DocsFailed)]
        assert len(failures) == 1
        assert failures[0].error["code"] == ErrorCode.DOCS_FETCH_FAILED
        assert engine.state.store.library_docs == ()
        assert engine.state.pending_packages == frozenset()

    @pytest.mark.asyncio
    async def test_unexpected_fetch_error_reported(self) -> None:
        received: list[OutboundEvent] = []
        engine = Engine(_fetcher(error=ValueError("bad")), sink=received.append)
        engine.start()

        engine.submit(PackagesNeeded((CORE,)))
        await engine.settle()
        await engine.stop()

        (failure,) = [e for e in received if isinstance(e, DocsFailed)]
        assert failure.error["code"] == ErrorCode.INTERNAL_ERROR

    @pytest.mark.asyncio
    async def test_events_handled_in_order(self, main_file: ActiveFile) -> None:
        received: list[OutboundEvent] = []
        engine = Engine(_fetcher(), sink=received.append)
        engine.start()

        engine.submit(ActiveFileChanged(main_file))
        engine.submit(
            FileContentsChanged(
                main_file.file_path,
                ModuleSummary(main_file.file_path, "Main", values=Values()),
            )
        )
        engine.submit(CanGoToDefinition("Main"))
        await engine.settle()
        await engine.stop()

        assert received[-1] == CanGoToDefinitionResult("Main", True)
        assert sum(isinstance(e, ActiveHintsChanged) for e in received) == 2
        assert engine.state.version == 2

    @pytest.mark.asyncio
    async def test_stop_without_start(self) -> None:
        fetcher = _fetcher()
        engine = Engine(fetcher)
        await engine.stop()
        fetcher.aclose.assert_awaited_once()
