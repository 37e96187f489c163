"""Autocomplete: hints for a partially typed name."""

from __future__ import annotations

import re
from dataclasses import replace

from hintplane.config.constants import KEYWORDS
from hintplane.index.imports import effective_imports, local_qualifier
from hintplane.index.models import ActiveFile, Hint, SymbolKind, TokenIndex
from hintplane.index.store import DocumentationStore
from hintplane.index.token_index import active_record, exposed_set

_QUALIFIED = re.compile(r"^(?:[A-Z][A-Za-z0-9_']*\.)+(.+)$")

KEYWORD_HINTS: tuple[Hint, ...] = tuple(
    Hint(name=keyword, module_name="", source_path="") for keyword in KEYWORDS
)


def unqualified(key: str) -> str:
    """Strip any ``Module.`` / ``Alias.`` qualifiers from an index key."""
    if m := _QUALIFIED.match(key):
        return m.group(1)
    return key


def hints_for_partial(
    partial: str,
    store: DocumentationStore,
    active_file: ActiveFile | None,
    token_index: TokenIndex,
) -> list[Hint]:
    """Hints whose key (or exposed bare name) starts with ``partial``.

    Returned hints carry the name as it should be inserted in the active
    file: bare with an empty ``module_name`` when exposed or local,
    otherwise alias/module-qualified with the owning module kept.
    ``source_path`` always identifies the definition. Duplicates are kept;
    results are sorted by name.
    """
    keywords = [hint for hint in KEYWORD_HINTS if hint.name.startswith(partial)]
    if active_file is None:
        return sorted(keywords, key=lambda hint: hint.name)

    record = active_record(store, active_file)
    imports = effective_imports(record)
    active_module = record.module_docs.name
    exposed = exposed_set(store, active_file)
    exposed_names = {name for _, name in exposed}

    def display(hint: Hint) -> Hint:
        if hint.module_name in ("", active_module):
            return replace(hint, module_name="")
        if hint.kind is SymbolKind.MODULE:
            return hint
        if (hint.module_name, hint.name) in exposed:
            return replace(hint, module_name="")
        import_ = imports.get(hint.module_name)
        qualifier = local_qualifier(hint.module_name, import_) if import_ else hint.module_name
        return replace(hint, name=f"{qualifier}.{hint.name}")

    results: list[Hint] = []
    for key, hints in token_index.items():
        bare = unqualified(key)
        if (bare in exposed_names and bare.startswith(partial)) or key.startswith(partial):
            results.extend(display(hint) for hint in hints)

    results.extend(
        Hint(name=import_.alias, module_name="", source_path="", kind=SymbolKind.MODULE)
        for import_ in imports.values()
        if import_.alias and import_.alias.startswith(partial)
    )
    results.extend(keywords)
    return sorted(results, key=lambda hint: hint.name)
