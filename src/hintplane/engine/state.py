"""Versioned engine state and handler transitions."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from hintplane.engine.events import FetchDocs, OutboundEvent
from hintplane.index.models import ActiveFile, Hint, TokenIndex
from hintplane.index.store import DocumentationStore
from hintplane.index.token_index import EMPTY_INDEX


@dataclass(frozen=True, slots=True)
class EngineState:
    """Everything the engine knows, as one immutable value.

    ``token_index`` is derived from ``store`` and ``active_file`` and is
    rebuilt by the handler whenever either changes. ``pending_packages``
    holds library identifiers with a fetch in flight.
    """

    version: int = 0
    store: DocumentationStore = field(default_factory=DocumentationStore)
    active_file: ActiveFile | None = None
    active_token: str | None = None
    token_index: TokenIndex = field(default_factory=lambda: EMPTY_INDEX)
    pending_packages: frozenset[str] = frozenset()

    def evolve(self, **changes: Any) -> EngineState:
        """Copy with ``changes`` applied and the version bumped."""
        return replace(self, version=self.version + 1, **changes)

    def active_hints(self) -> tuple[Hint, ...]:
        if not self.active_token:
            return ()
        return self.token_index.get(self.active_token, ())


@dataclass(frozen=True, slots=True)
class Transition:
    """Result of handling one event."""

    state: EngineState
    events: tuple[OutboundEvent, ...] = ()
    effects: tuple[FetchDocs, ...] = ()
