"""Symbol index: data model, documentation store, import resolution,
token index construction and the query engines built on it."""

from hintplane.index.hints import hints_for_partial
from hintplane.index.importers import importers_for_token
from hintplane.index.imports import effective_imports, imports_from_raw, normalize_exposing
from hintplane.index.models import (
    ActiveFile,
    Declaration,
    Exposed,
    ExposedKind,
    FileRecord,
    Hint,
    Import,
    ImporterEntry,
    ImportSuggestion,
    ModuleSummary,
    Symbol,
    SymbolKind,
    TokenIndex,
    UnionType,
    Values,
)
from hintplane.index.store import DocumentationStore
from hintplane.index.suggestions import import_suggestions
from hintplane.index.symbols import (
    can_go_to_definition,
    default_symbol_name,
    definitions_for_token,
    project_symbols,
)
from hintplane.index.token_index import TokenIndexBuilder, build_token_index, exposed_set

__all__ = [
    # Models
    "ActiveFile",
    "Declaration",
    "Exposed",
    "ExposedKind",
    "FileRecord",
    "Hint",
    "Import",
    "ImporterEntry",
    "ImportSuggestion",
    "ModuleSummary",
    "Symbol",
    "SymbolKind",
    "TokenIndex",
    "UnionType",
    "Values",
    # Store and resolution
    "DocumentationStore",
    "effective_imports",
    "imports_from_raw",
    "normalize_exposing",
    # Index
    "TokenIndexBuilder",
    "build_token_index",
    "exposed_set",
    # Queries
    "can_go_to_definition",
    "default_symbol_name",
    "definitions_for_token",
    "hints_for_partial",
    "import_suggestions",
    "importers_for_token",
    "project_symbols",
]
