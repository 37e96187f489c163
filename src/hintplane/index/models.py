"""Data model for module summaries, imports, hints and symbols.

All records are frozen: a module summary is replaced wholesale when a file is
re-edited or a library is re-fetched, and the token index is a pure value
derived from them. Frozen records are also hashable, which lets the token
index builder memoize per-module hint generation.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum


class SymbolKind(str, Enum):
    """What a hint or symbol refers to."""

    DEFAULT = "default"
    TYPE_ALIAS = "type_alias"
    TYPE = "type"
    TYPE_CASE = "type_case"
    MODULE = "module"


class ExposedKind(str, Enum):
    """Tag for an import's exposing policy."""

    NONE = "none"
    SOME = "some"
    ALL = "all"


@dataclass(frozen=True, slots=True)
class Exposed:
    """Which of a module's names an import makes visible unqualified.

    ``NONE`` exposes nothing, ``ALL`` everything, ``SOME`` exactly ``names``.
    ``names`` may contain ``Type(..)`` markers exposing every constructor
    of ``Type``.
    """

    kind: ExposedKind
    names: frozenset[str] = frozenset()

    @classmethod
    def none(cls) -> Exposed:
        return cls(ExposedKind.NONE)

    @classmethod
    def all(cls) -> Exposed:
        return cls(ExposedKind.ALL)

    @classmethod
    def some(cls, names: frozenset[str] | set[str]) -> Exposed:
        return cls(ExposedKind.SOME, frozenset(names))


@dataclass(frozen=True, slots=True)
class Import:
    """One entry of a file's import map, keyed by the imported module name."""

    alias: str | None = None
    exposed: Exposed = field(default_factory=Exposed.none)


@dataclass(frozen=True, slots=True)
class Declaration:
    """A value or type alias declaration."""

    name: str
    comment: str = ""
    tipe: str = ""


@dataclass(frozen=True, slots=True)
class UnionType:
    """A union type and its ordered constructor names."""

    name: str
    comment: str = ""
    tipe: str = ""
    cases: tuple[str, ...] = ()

    def constructors(self) -> Iterator[Declaration]:
        """Synthetic declarations, one per constructor, sharing the type's docs."""
        for case in self.cases:
            yield Declaration(name=case, comment=self.comment, tipe=self.tipe)


@dataclass(frozen=True, slots=True)
class Values:
    """Declarations of a module, grouped by kind."""

    aliases: tuple[Declaration, ...] = ()
    tipes: tuple[UnionType, ...] = ()
    values: tuple[Declaration, ...] = ()


@dataclass(frozen=True, slots=True)
class ModuleSummary:
    """Everything known about one module.

    ``source_path`` is the file path for project modules and the library
    locator (``<docs base><author/name/version>/``) for library modules.
    """

    source_path: str
    name: str
    comment: str = ""
    values: Values = field(default_factory=Values)


@dataclass(frozen=True, slots=True)
class FileRecord:
    """A project file: its module summary plus its declared imports."""

    module_docs: ModuleSummary
    imports: Mapping[str, Import] = field(default_factory=dict, hash=False)


@dataclass(frozen=True, slots=True)
class ActiveFile:
    """The file focused in the editor and the project directory enclosing it."""

    file_path: str
    project_directory: str


@dataclass(frozen=True, slots=True)
class Hint:
    """A name a token could resolve to.

    ``name`` is the bare declaration name (module name for module hints);
    query engines may return copies with a display-adjusted ``name``.
    """

    name: str
    module_name: str
    source_path: str
    comment: str = ""
    tipe: str = ""
    case_tipe: str | None = None
    kind: SymbolKind = SymbolKind.DEFAULT

    @property
    def full_name(self) -> str:
        """Module-qualified name; bare for keywords and module hints."""
        if self.kind is SymbolKind.MODULE or not self.module_name:
            return self.name
        return f"{self.module_name}.{self.name}"


@dataclass(frozen=True, slots=True)
class Symbol:
    """A navigable definition."""

    full_name: str
    source_path: str
    case_tipe: str | None = None
    kind: SymbolKind = SymbolKind.DEFAULT

    @classmethod
    def from_hint(cls, hint: Hint) -> Symbol:
        return cls(
            full_name=hint.full_name,
            source_path=hint.source_path,
            case_tipe=hint.case_tipe,
            kind=hint.kind,
        )


@dataclass(frozen=True, slots=True)
class ImportSuggestion:
    """A module offered by the import suggestion search."""

    name: str
    comment: str
    source_path: str


@dataclass(frozen=True, slots=True)
class ImporterEntry:
    """A file that references a token, and the local names it uses for it."""

    source_path: str
    names: tuple[str, ...]


TokenIndex = Mapping[str, tuple[Hint, ...]]
"""Every typeable name mapped to the hints it may refer to, in fold order."""
