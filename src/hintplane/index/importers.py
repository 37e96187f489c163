"""Reverse lookup: which project files reference a token, and under what names."""

from __future__ import annotations

from hintplane.index.imports import (
    effective_imports,
    is_constructor_exposed,
    is_exposed,
    local_qualifier,
)
from hintplane.index.models import Hint, Import, ImporterEntry, SymbolKind, TokenIndex
from hintplane.index.store import DocumentationStore


def local_names(hint: Hint, file_module: str, imports: dict[str, Import]) -> list[str]:
    """Names a file with the given effective imports uses to refer to ``hint``."""
    if hint.module_name == file_module:
        return [hint.name]
    import_ = imports.get(hint.module_name)
    if import_ is None:
        return []
    if hint.kind is SymbolKind.MODULE:
        return [local_qualifier(hint.module_name, import_)]

    if hint.kind is SymbolKind.TYPE_CASE and hint.case_tipe is not None:
        bare = is_constructor_exposed(hint.name, hint.module_name, hint.case_tipe, import_.exposed)
    else:
        bare = is_exposed(hint.name, import_.exposed)
    qualified = f"{local_qualifier(hint.module_name, import_)}.{hint.name}"
    return [hint.name, qualified] if bare else [qualified]


def importers_for_token(
    token: str | None,
    store: DocumentationStore,
    project_directory: str | None,
    token_index: TokenIndex,
) -> list[ImporterEntry]:
    """Project files that can reference what ``token`` resolves to.

    Files are reported in project enumeration order, each with its
    deduplicated local names. Files with no way to refer to any candidate
    are omitted.
    """
    if not token or not project_directory:
        return []
    hints = token_index.get(token, ())
    if not hints:
        return []

    entries: list[ImporterEntry] = []
    for record in store.project_file_contents(project_directory):
        imports = effective_imports(record)
        names: dict[str, None] = {}
        for hint in hints:
            names.update(dict.fromkeys(local_names(hint, record.module_docs.name, imports)))
        if names:
            entries.append(ImporterEntry(source_path=record.module_docs.source_path, names=tuple(names)))
    return entries
