"""Definition and symbol lookup for navigation."""

from __future__ import annotations

from hintplane.index.models import ActiveFile, Symbol, SymbolKind, TokenIndex
from hintplane.index.store import DocumentationStore


def looks_like_type_alias(name: str) -> bool:
    """Capitalized value names are classified as type aliases.

    Project summaries may list type aliases among plain values; an
    uppercase initial is the only signal available to tell them apart.
    """
    return name[:1].isupper()


def definitions_for_token(token: str | None, token_index: TokenIndex) -> list[Symbol]:
    """One symbol per candidate the token resolves to, in index order."""
    if not token:
        return []
    return [Symbol.from_hint(hint) for hint in token_index.get(token, ())]


def can_go_to_definition(token: str | None, token_index: TokenIndex) -> bool:
    return bool(token) and bool(token_index.get(token or "", ()))


def project_symbols(store: DocumentationStore, project_directory: str) -> list[Symbol]:
    """Every navigable symbol defined by the project's own modules."""
    symbols: list[Symbol] = []
    for module in store.project_module_docs(project_directory):
        path = module.source_path
        symbols.append(Symbol(full_name=module.name, source_path=path, kind=SymbolKind.MODULE))
        for value in module.values.values:
            kind = SymbolKind.TYPE_ALIAS if looks_like_type_alias(value.name) else SymbolKind.DEFAULT
            symbols.append(Symbol(full_name=f"{module.name}.{value.name}", source_path=path, kind=kind))
        for alias in module.values.aliases:
            symbols.append(
                Symbol(
                    full_name=f"{module.name}.{alias.name}",
                    source_path=path,
                    kind=SymbolKind.TYPE_ALIAS,
                )
            )
        for tipe in module.values.tipes:
            symbols.append(
                Symbol(full_name=f"{module.name}.{tipe.name}", source_path=path, kind=SymbolKind.TYPE)
            )
            symbols.extend(
                Symbol(
                    full_name=f"{module.name}.{case}",
                    source_path=path,
                    case_tipe=tipe.name,
                    kind=SymbolKind.TYPE_CASE,
                )
                for case in tipe.cases
            )
    return symbols


def default_symbol_name(
    token: str | None,
    active_file: ActiveFile | None,
    token_index: TokenIndex,
) -> str | None:
    """Initial query for go-to-symbol.

    The first candidate's qualified name, shortened to its last segment
    when it is defined in the active file; the raw token when nothing
    resolves.
    """
    if not token:
        return token
    hints = token_index.get(token, ())
    if not hints:
        return token
    hint = hints[0]
    if active_file is not None and hint.source_path == active_file.file_path:
        return hint.full_name.rsplit(".", 1)[-1]
    return hint.full_name
