"""Pure event handling: ``(state, event) -> Transition``.

Handlers never perform I/O. Library downloads are requested as
``FetchDocs`` effects; the runtime executes them and feeds the outcome back
as ``DocsFetched`` or ``DocsFetchFailed``. Query events leave the state
untouched (same version) and only produce outbound events.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from typing import Any

import structlog

from hintplane.engine.events import (
    ActiveFileChanged,
    ActiveFileChangedAck,
    ActiveHintsChanged,
    ActiveTokenChanged,
    CanGoToDefinition,
    CanGoToDefinitionResult,
    DocsFailed,
    DocsFetched,
    DocsFetchFailed,
    DocsLoaded,
    FetchDocs,
    FileContentsChanged,
    FileContentsRemoved,
    GetHintsForPartial,
    GetImportersForToken,
    GetImportSuggestions,
    GoToDefinition,
    GoToDefinitionResult,
    GoToSymbol,
    GoToSymbolResult,
    HintsForPartialResult,
    ImportersForTokenResult,
    ImportSuggestionsResult,
    InboundEvent,
    PackagesNeeded,
    UpdatingDocs,
)
from hintplane.engine.state import EngineState, Transition
from hintplane.index.hints import hints_for_partial
from hintplane.index.importers import importers_for_token
from hintplane.index.imports import imports_from_raw
from hintplane.index.models import FileRecord
from hintplane.index.store import DocumentationStore
from hintplane.index.suggestions import import_suggestions
from hintplane.index.symbols import (
    can_go_to_definition,
    default_symbol_name,
    definitions_for_token,
    project_symbols,
)
from hintplane.index.token_index import TokenIndexBuilder

logger = structlog.get_logger()


class EventHandler:
    """Dispatches inbound events to per-type handlers.

    Args:
        builder: Token index builder used for every rebuild.
        locator: Maps a library identifier to its source locator; used to
            skip fetches for libraries already cached.
    """

    def __init__(self, builder: TokenIndexBuilder, locator: Callable[[str], str]) -> None:
        self.builder = builder
        self.locator = locator
        self._handlers: dict[type, Callable[[EngineState, Any], Transition]] = {
            ActiveTokenChanged: self._active_token_changed,
            ActiveFileChanged: self._active_file_changed,
            FileContentsChanged: self._file_contents_changed,
            FileContentsRemoved: self._file_contents_removed,
            PackagesNeeded: self._packages_needed,
            DocsFetched: self._docs_fetched,
            DocsFetchFailed: self._docs_fetch_failed,
            GoToDefinition: self._go_to_definition,
            GoToSymbol: self._go_to_symbol,
            GetHintsForPartial: self._hints_for_partial,
            GetImportSuggestions: self._import_suggestions,
            CanGoToDefinition: self._can_go_to_definition,
            GetImportersForToken: self._importers_for_token,
        }

    def __call__(self, state: EngineState, event: InboundEvent) -> Transition:
        handler = self._handlers.get(type(event))
        if handler is None:
            raise TypeError(f"Unhandled event type: {type(event).__name__}")
        return handler(state, event)

    # ------------------------------------------------------------------
    # State changes
    # ------------------------------------------------------------------

    def _rebuilt(self, state: EngineState, store: DocumentationStore, **changes: Any) -> Transition:
        """New state with a rebuilt index, announcing the active token's hints."""
        active_file = changes.get("active_file", state.active_file)
        new_state = state.evolve(
            store=store,
            token_index=self.builder.build(store, active_file),
            **changes,
        )
        logger.debug(
            "index_rebuilt",
            version=new_state.version,
            keys=len(new_state.token_index),
        )
        return Transition(new_state, (ActiveHintsChanged(new_state.active_hints()),))

    def _active_token_changed(self, state: EngineState, event: ActiveTokenChanged) -> Transition:
        new_state = state.evolve(active_token=event.token)
        return Transition(new_state, (ActiveHintsChanged(new_state.active_hints()),))

    def _active_file_changed(self, state: EngineState, event: ActiveFileChanged) -> Transition:
        transition = self._rebuilt(state, state.store, active_file=event.active_file)
        return replace(
            transition,
            events=(ActiveFileChangedAck(event.active_file), *transition.events),
        )

    def _file_contents_changed(self, state: EngineState, event: FileContentsChanged) -> Transition:
        record = FileRecord(
            module_docs=replace(event.module_docs, source_path=event.path),
            imports=imports_from_raw(event.raw_imports),
        )
        return self._rebuilt(state, state.store.set_file_contents(event.path, record))

    def _file_contents_removed(self, state: EngineState, event: FileContentsRemoved) -> Transition:
        return self._rebuilt(state, state.store.remove_file_contents(event.path))

    def _packages_needed(self, state: EngineState, event: PackagesNeeded) -> Transition:
        known = state.store.library_locators() | {self.locator(p) for p in state.pending_packages}
        by_locator: dict[str, str] = {}
        for package in event.packages:
            by_locator.setdefault(self.locator(package), package)
        missing = tuple(package for locator, package in by_locator.items() if locator not in known)
        if not missing:
            logger.debug("packages_already_cached", packages=list(event.packages))
            return Transition(state)
        return Transition(
            state.evolve(pending_packages=state.pending_packages | set(missing)),
            (UpdatingDocs(),),
            (FetchDocs(missing),),
        )

    def _docs_fetched(self, state: EngineState, event: DocsFetched) -> Transition:
        transition = self._rebuilt(
            state,
            state.store.add_library_docs(event.modules),
            pending_packages=state.pending_packages - set(event.packages),
        )
        return replace(transition, events=(DocsLoaded(), *transition.events))

    def _docs_fetch_failed(self, state: EngineState, event: DocsFetchFailed) -> Transition:
        return Transition(
            state.evolve(pending_packages=state.pending_packages - set(event.packages)),
            (DocsFailed(event.error),),
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _go_to_definition(self, state: EngineState, event: GoToDefinition) -> Transition:
        symbols = definitions_for_token(event.token, state.token_index)
        return Transition(state, tuple(GoToDefinitionResult(symbol) for symbol in symbols))

    def _go_to_symbol(self, state: EngineState, event: GoToSymbol) -> Transition:
        if not event.project_directory:
            return Transition(state)
        return Transition(
            state,
            (
                GoToSymbolResult(
                    default_name=default_symbol_name(event.token, state.active_file, state.token_index),
                    active_file=state.active_file,
                    symbols=tuple(project_symbols(state.store, event.project_directory)),
                ),
            ),
        )

    def _hints_for_partial(self, state: EngineState, event: GetHintsForPartial) -> Transition:
        hints = hints_for_partial(event.partial, state.store, state.active_file, state.token_index)
        return Transition(state, (HintsForPartialResult(event.partial, tuple(hints)),))

    def _import_suggestions(self, state: EngineState, event: GetImportSuggestions) -> Transition:
        project_directory = state.active_file.project_directory if state.active_file else None
        suggestions = import_suggestions(event.prefix, state.store, project_directory)
        return Transition(state, (ImportSuggestionsResult(event.prefix, tuple(suggestions)),))

    def _can_go_to_definition(self, state: EngineState, event: CanGoToDefinition) -> Transition:
        result = can_go_to_definition(event.token, state.token_index)
        return Transition(state, (CanGoToDefinitionResult(event.token, result),))

    def _importers_for_token(self, state: EngineState, event: GetImportersForToken) -> Transition:
        importers = importers_for_token(
            event.token,
            state.store,
            event.project_directory,
            state.token_index,
        )
        return Transition(state, (ImportersForTokenResult(event.token, tuple(importers)),))
