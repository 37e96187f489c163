"""Import resolution: raw import statements to per-module visibility records.

A file's effective import map is its declared imports layered over the
built-in imports, plus an implicit, fully exposed, unaliased import of the
file's own module. Exposing lists are normalized permissively: entries that
are not identifiers, operators or ``Type(..)`` / ``Type(A, B)`` forms are
dropped, and any unrecognized exposing value means nothing is exposed.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

from hintplane.config.constants import DEFAULT_IMPORTS, GLOBAL_UNION_TYPES
from hintplane.index.models import Exposed, ExposedKind, FileRecord, Import

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_']*$")
_OPERATOR = re.compile(r"^\(?([+\-*/<>=!&|^%.:#$?@~\\]+)\)?$")
_TYPE_WITH_CASES = re.compile(r"^([A-Z][A-Za-z0-9_']*)\s*\((.*)\)$")

EXPOSE_ALL = ".."


def _normalize_entry(entry: str) -> set[str]:
    entry = entry.strip()
    if _IDENTIFIER.match(entry):
        return {entry}
    if m := _OPERATOR.match(entry):
        return {m.group(1)}
    if m := _TYPE_WITH_CASES.match(entry):
        type_name, inner = m.group(1), m.group(2).strip()
        if inner == EXPOSE_ALL:
            return {type_name, f"{type_name}({EXPOSE_ALL})"}
        cases = {case.strip() for case in inner.split(",")}
        return {type_name} | {case for case in cases if _IDENTIFIER.match(case)}
    return set()


def normalize_exposing(raw: Any) -> Exposed:
    """Normalize a raw exposing clause.

    ``None`` (no clause) -> NONE, ``".."`` -> ALL, a list of names -> SOME.
    """
    if raw is None:
        return Exposed.none()
    if isinstance(raw, str):
        return Exposed.all() if raw.strip() == EXPOSE_ALL else Exposed.none()
    if isinstance(raw, Iterable):
        entries = [entry for entry in raw if isinstance(entry, str)]
        if any(entry.strip() == EXPOSE_ALL for entry in entries):
            return Exposed.all()
        names: set[str] = set()
        for entry in entries:
            names |= _normalize_entry(entry)
        return Exposed.some(names)
    return Exposed.none()


def parse_import(raw: Mapping[str, Any]) -> tuple[str, Import] | None:
    """Turn one raw import (``name``, ``alias``, ``exposing``) into a map entry."""
    name = raw.get("name")
    if not isinstance(name, str) or not name:
        return None
    alias = raw.get("alias")
    return name, Import(
        alias=alias if isinstance(alias, str) and alias else None,
        exposed=normalize_exposing(raw.get("exposing")),
    )


def imports_from_raw(raw_imports: Iterable[Mapping[str, Any]]) -> dict[str, Import]:
    """Build a declared import map; later duplicates of a module win."""
    imports: dict[str, Import] = {}
    for raw in raw_imports:
        if (parsed := parse_import(raw)) is not None:
            imports[parsed[0]] = parsed[1]
    return imports


DEFAULT_IMPORT_MAP: Mapping[str, Import] = {
    name: Import(alias=alias, exposed=normalize_exposing(exposing))
    for name, alias, exposing in DEFAULT_IMPORTS
}

SELF_IMPORT = Import(alias=None, exposed=Exposed.all())


def effective_imports(record: FileRecord) -> dict[str, Import]:
    """Built-ins, overridden by declared imports, plus the self-import."""
    imports = {**DEFAULT_IMPORT_MAP, **record.imports}
    imports[record.module_docs.name] = SELF_IMPORT
    return imports


def is_exposed(name: str, exposed: Exposed) -> bool:
    """Whether ``name`` is visible unqualified under an exposing policy."""
    if exposed.kind is ExposedKind.ALL:
        return True
    return exposed.kind is ExposedKind.SOME and name in exposed.names


def is_constructor_exposed(case: str, module_name: str, type_name: str, exposed: Exposed) -> bool:
    """Constructor visibility, including the always-global built-in union types."""
    if (module_name, type_name) in GLOBAL_UNION_TYPES:
        return True
    if is_exposed(case, exposed):
        return True
    return exposed.kind is ExposedKind.SOME and f"{type_name}({EXPOSE_ALL})" in exposed.names


def local_qualifier(module_name: str, import_: Import) -> str:
    """Prefix a file uses for qualified references into ``module_name``."""
    return import_.alias or module_name
