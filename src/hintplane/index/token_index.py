"""Token index construction for the active file.

For every module the active file can see (library docs plus the project's
own modules, filtered by the effective import map) this generates
``(key, Hint)`` pairs and folds them into a mapping from typeable name to
candidate hints. Keys are appended, never replaced, so a name shared by
several modules keeps all of its candidates.

Hint generation per module depends only on the module summary, its import
entry, and whether it is a library module, so ``TokenIndexBuilder`` caches
it on that triple. A cached build folds the same pairs in the same order
as an uncached one.
"""

from __future__ import annotations

import functools
from collections.abc import Iterator
from types import MappingProxyType
from typing import Any

import structlog

from hintplane.index.imports import (
    effective_imports,
    is_constructor_exposed,
    is_exposed,
    local_qualifier,
)
from hintplane.index.models import (
    ActiveFile,
    FileRecord,
    Hint,
    Import,
    ModuleSummary,
    SymbolKind,
    TokenIndex,
)
from hintplane.index.store import DocumentationStore

logger = structlog.get_logger()

EMPTY_INDEX: TokenIndex = MappingProxyType({})

_UNNAMED_RECORD = FileRecord(module_docs=ModuleSummary(source_path="", name=""))


def hint_source_path(module: ModuleSummary, is_library: bool, name: str | None = None) -> str:
    """Canonical locator for a module or one of its declarations.

    Project declarations point at the file; library declarations point at
    the module's documentation page, anchored on the declaration name.
    """
    if not is_library:
        return module.source_path
    page = module.source_path + module.name.replace(".", "-")
    return f"{page}#{name}" if name else page


def active_record(store: DocumentationStore, active_file: ActiveFile) -> FileRecord:
    """The active file's record, or an unnamed one if its contents are unknown."""
    return store.file_contents.get(active_file.file_path, _UNNAMED_RECORD)


def project_modules(store: DocumentationStore, active_file: ActiveFile) -> list[ModuleSummary]:
    """Project modules in scope for the active file.

    A file opened outside any project sees only its own module.
    """
    if active_file.project_directory:
        return store.project_module_docs(active_file.project_directory)
    record = store.file_contents.get(active_file.file_path)
    return [record.module_docs] if record is not None else []


def imported_modules(
    store: DocumentationStore,
    imports: dict[str, Import],
    active_file: ActiveFile,
) -> Iterator[tuple[ModuleSummary, Import, bool]]:
    """Yield ``(module, import, is_library)`` for every imported visible module."""
    for module in store.library_docs:
        if (import_ := imports.get(module.name)) is not None:
            yield module, import_, True
    for module in project_modules(store, active_file):
        if (import_ := imports.get(module.name)) is not None:
            yield module, import_, False


def module_hints(
    module: ModuleSummary,
    import_: Import,
    is_library: bool,
) -> tuple[tuple[str, Hint], ...]:
    """All ``(key, hint)`` pairs one module contributes under one import."""
    qualifier = local_qualifier(module.name, import_)
    pairs: list[tuple[str, Hint]] = []

    def add(hint: Hint, bare: bool, *qualified: str) -> None:
        keys = ([hint.name] if bare else []) + list(dict.fromkeys(qualified))
        pairs.extend((key, hint) for key in keys)

    for decl in module.values.values:
        hint = Hint(
            name=decl.name,
            module_name=module.name,
            source_path=hint_source_path(module, is_library, decl.name),
            comment=decl.comment,
            tipe=decl.tipe,
        )
        add(hint, is_exposed(decl.name, import_.exposed), f"{qualifier}.{decl.name}")

    for decl in module.values.aliases:
        hint = Hint(
            name=decl.name,
            module_name=module.name,
            source_path=hint_source_path(module, is_library, decl.name),
            comment=decl.comment,
            tipe=decl.tipe,
            kind=SymbolKind.TYPE_ALIAS,
        )
        add(hint, is_exposed(decl.name, import_.exposed), f"{qualifier}.{decl.name}")

    for tipe in module.values.tipes:
        hint = Hint(
            name=tipe.name,
            module_name=module.name,
            source_path=hint_source_path(module, is_library, tipe.name),
            comment=tipe.comment,
            tipe=tipe.tipe,
            kind=SymbolKind.TYPE,
        )
        add(hint, is_exposed(tipe.name, import_.exposed), f"{qualifier}.{tipe.name}")

        for case in tipe.constructors():
            hint = Hint(
                name=case.name,
                module_name=module.name,
                source_path=hint_source_path(module, is_library, case.name),
                comment=case.comment,
                tipe=case.tipe,
                case_tipe=tipe.name,
                kind=SymbolKind.TYPE_CASE,
            )
            add(
                hint,
                is_constructor_exposed(case.name, module.name, tipe.name, import_.exposed),
                f"{qualifier}.{case.name}",
                f"{module.name}.{case.name}",
            )

    module_hint = Hint(
        name=module.name,
        module_name=module.name,
        source_path=hint_source_path(module, is_library),
        comment=module.comment,
        kind=SymbolKind.MODULE,
    )
    add(module_hint, False, module.name, *([import_.alias] if import_.alias else []))

    return tuple(pairs)


class TokenIndexBuilder:
    """Builds token indexes, optionally caching per-module hint generation."""

    def __init__(self, *, memoize: bool = True, memo_size: int = 4096) -> None:
        self._module_hints = (
            functools.lru_cache(maxsize=memo_size)(module_hints) if memoize else module_hints
        )

    def build(self, store: DocumentationStore, active_file: ActiveFile | None) -> TokenIndex:
        """Full index for the active file; empty when no file is active."""
        if active_file is None:
            return EMPTY_INDEX

        imports = effective_imports(active_record(store, active_file))
        index: dict[str, list[Hint]] = {}
        for module, import_, is_library in imported_modules(store, imports, active_file):
            for key, hint in self._module_hints(module, import_, is_library):
                index.setdefault(key, []).append(hint)

        logger.debug(
            "token_index_built",
            file=active_file.file_path,
            keys=len(index),
        )
        return MappingProxyType({key: tuple(hints) for key, hints in index.items()})

    def cache_info(self) -> Any:
        info = getattr(self._module_hints, "cache_info", None)
        return info() if info is not None else None


def build_token_index(store: DocumentationStore, active_file: ActiveFile | None) -> TokenIndex:
    """Uncached full rebuild."""
    return TokenIndexBuilder(memoize=False).build(store, active_file)


def exposed_set(store: DocumentationStore, active_file: ActiveFile | None) -> frozenset[tuple[str, str]]:
    """``(module name, name)`` pairs visible unqualified in the active file."""
    if active_file is None:
        return frozenset()

    imports = effective_imports(active_record(store, active_file))
    exposed: set[tuple[str, str]] = set()
    for module, import_, _ in imported_modules(store, imports, active_file):
        for decl in (*module.values.values, *module.values.aliases):
            if is_exposed(decl.name, import_.exposed):
                exposed.add((module.name, decl.name))
        for tipe in module.values.tipes:
            if is_exposed(tipe.name, import_.exposed):
                exposed.add((module.name, tipe.name))
            for case in tipe.cases:
                if is_constructor_exposed(case, module.name, tipe.name, import_.exposed):
                    exposed.add((module.name, case))
    return frozenset(exposed)
