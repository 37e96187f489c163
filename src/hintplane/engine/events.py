"""Inbound events, outbound events and effects exchanged with the engine.

Every event class carries its wire name in ``TYPE``. Inbound events are
produced by the host (or, for ``DocsFetched`` / ``DocsFetchFailed``, by the
runtime when a fetch effect completes); outbound events are what the host
receives back.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from hintplane.index.models import (
    ActiveFile,
    Hint,
    ImporterEntry,
    ImportSuggestion,
    ModuleSummary,
    Symbol,
)

# =============================================================================
# Inbound
# =============================================================================


@dataclass(frozen=True, slots=True)
class ActiveTokenChanged:
    TYPE: ClassVar[str] = "active-token-changed"

    token: str | None = None


@dataclass(frozen=True, slots=True)
class ActiveFileChanged:
    TYPE: ClassVar[str] = "active-file-changed"

    active_file: ActiveFile | None = None


@dataclass(frozen=True, slots=True)
class FileContentsChanged:
    TYPE: ClassVar[str] = "file-contents-changed"

    path: str
    module_docs: ModuleSummary
    raw_imports: tuple[Mapping[str, Any], ...] = ()


@dataclass(frozen=True, slots=True)
class FileContentsRemoved:
    TYPE: ClassVar[str] = "file-contents-removed"

    path: str


@dataclass(frozen=True, slots=True)
class PackagesNeeded:
    TYPE: ClassVar[str] = "packages-needed"

    packages: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class GoToDefinition:
    TYPE: ClassVar[str] = "go-to-definition"

    token: str | None = None


@dataclass(frozen=True, slots=True)
class GoToSymbol:
    TYPE: ClassVar[str] = "go-to-symbol"

    project_directory: str | None = None
    token: str | None = None


@dataclass(frozen=True, slots=True)
class GetHintsForPartial:
    TYPE: ClassVar[str] = "get-hints-for-partial"

    partial: str = ""


@dataclass(frozen=True, slots=True)
class GetImportSuggestions:
    TYPE: ClassVar[str] = "get-import-suggestions"

    prefix: str = ""


@dataclass(frozen=True, slots=True)
class CanGoToDefinition:
    TYPE: ClassVar[str] = "can-go-to-definition"

    token: str = ""


@dataclass(frozen=True, slots=True)
class GetImportersForToken:
    TYPE: ClassVar[str] = "get-importers-for-token"

    project_directory: str | None = None
    token: str | None = None


@dataclass(frozen=True, slots=True)
class DocsFetched:
    """A fetch effect succeeded."""

    TYPE: ClassVar[str] = "docs-fetched"

    packages: tuple[str, ...]
    modules: tuple[ModuleSummary, ...]


@dataclass(frozen=True, slots=True)
class DocsFetchFailed:
    """A fetch effect failed; ``error`` is the structured error dict."""

    TYPE: ClassVar[str] = "docs-fetch-failed"

    packages: tuple[str, ...]
    error: Mapping[str, Any] = field(default_factory=dict)


InboundEvent = (
    ActiveTokenChanged
    | ActiveFileChanged
    | FileContentsChanged
    | FileContentsRemoved
    | PackagesNeeded
    | GoToDefinition
    | GoToSymbol
    | GetHintsForPartial
    | GetImportSuggestions
    | CanGoToDefinition
    | GetImportersForToken
    | DocsFetched
    | DocsFetchFailed
)

# =============================================================================
# Outbound
# =============================================================================


@dataclass(frozen=True, slots=True)
class DocsLoaded:
    TYPE: ClassVar[str] = "docs-loaded"


@dataclass(frozen=True, slots=True)
class DocsFailed:
    TYPE: ClassVar[str] = "docs-failed"

    error: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class UpdatingDocs:
    TYPE: ClassVar[str] = "updating-docs"


@dataclass(frozen=True, slots=True)
class GoToDefinitionResult:
    TYPE: ClassVar[str] = "go-to-definition-result"

    symbol: Symbol


@dataclass(frozen=True, slots=True)
class GoToSymbolResult:
    TYPE: ClassVar[str] = "go-to-symbol-result"

    default_name: str | None
    active_file: ActiveFile | None
    symbols: tuple[Symbol, ...]


@dataclass(frozen=True, slots=True)
class ActiveFileChangedAck:
    TYPE: ClassVar[str] = "active-file-changed-ack"

    active_file: ActiveFile | None


@dataclass(frozen=True, slots=True)
class ActiveHintsChanged:
    TYPE: ClassVar[str] = "active-hints-changed"

    hints: tuple[Hint, ...]


@dataclass(frozen=True, slots=True)
class HintsForPartialResult:
    TYPE: ClassVar[str] = "hints-for-partial-result"

    partial: str
    hints: tuple[Hint, ...]


@dataclass(frozen=True, slots=True)
class ImportSuggestionsResult:
    TYPE: ClassVar[str] = "import-suggestions-result"

    prefix: str
    suggestions: tuple[ImportSuggestion, ...]


@dataclass(frozen=True, slots=True)
class CanGoToDefinitionResult:
    TYPE: ClassVar[str] = "can-go-to-definition-result"

    token: str
    result: bool


@dataclass(frozen=True, slots=True)
class ImportersForTokenResult:
    TYPE: ClassVar[str] = "importers-for-token-result"

    token: str | None
    importers: tuple[ImporterEntry, ...]


@dataclass(frozen=True, slots=True)
class ErrorMessage:
    """An inbound message could not be processed."""

    TYPE: ClassVar[str] = "error"

    error: Mapping[str, Any] = field(default_factory=dict)


OutboundEvent = (
    DocsLoaded
    | DocsFailed
    | UpdatingDocs
    | GoToDefinitionResult
    | GoToSymbolResult
    | ActiveFileChangedAck
    | ActiveHintsChanged
    | HintsForPartialResult
    | ImportSuggestionsResult
    | CanGoToDefinitionResult
    | ImportersForTokenResult
    | ErrorMessage
)

# =============================================================================
# Effects
# =============================================================================


@dataclass(frozen=True, slots=True)
class FetchDocs:
    """Download documentation for these library identifiers."""

    packages: tuple[str, ...]
