"""Documentation store: library bundles plus per-file module summaries.

The store is an immutable value. Mutators return a new store so the engine
can hand out versioned snapshots; library docs are cache-forever and are
never removed.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from hintplane.index.models import FileRecord, ModuleSummary


def first_paragraph(comment: str) -> str:
    """Truncate a doc comment to its first paragraph."""
    return comment.strip().split("\n\n", 1)[0]


def is_under(path: str, directory: str) -> bool:
    """True if ``path`` lies inside ``directory`` (either separator style)."""
    root = directory.rstrip("/\\")
    if not root or not path.startswith(root):
        return False
    return path[len(root) : len(root) + 1] in ("/", "\\")


@dataclass(frozen=True, slots=True)
class DocumentationStore:
    """Library module summaries and project file records."""

    library_docs: tuple[ModuleSummary, ...] = ()
    file_contents: Mapping[str, FileRecord] = field(
        default_factory=lambda: MappingProxyType({}),
    )

    # ------------------------------------------------------------------
    # Mutation (returns new stores)
    # ------------------------------------------------------------------

    def add_library_docs(self, modules: Iterable[ModuleSummary]) -> DocumentationStore:
        """Merge library modules whose source locator is not cached yet."""
        known = self.library_locators()
        added = tuple(
            replace(module, comment=first_paragraph(module.comment))
            for module in modules
            if module.source_path not in known
        )
        if not added:
            return self
        return replace(self, library_docs=self.library_docs + added)

    def set_file_contents(self, path: str, record: FileRecord) -> DocumentationStore:
        contents = dict(self.file_contents)
        contents[path] = record
        return replace(self, file_contents=MappingProxyType(contents))

    def remove_file_contents(self, path: str) -> DocumentationStore:
        if path not in self.file_contents:
            return self
        contents = {k: v for k, v in self.file_contents.items() if k != path}
        return replace(self, file_contents=MappingProxyType(contents))

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def library_locators(self) -> frozenset[str]:
        return frozenset(module.source_path for module in self.library_docs)

    def project_file_contents(self, project_directory: str) -> list[FileRecord]:
        """File records whose module lies under ``project_directory``."""
        return [
            record
            for record in self.file_contents.values()
            if is_under(record.module_docs.source_path, project_directory)
        ]

    def project_module_docs(self, project_directory: str) -> list[ModuleSummary]:
        return [record.module_docs for record in self.project_file_contents(project_directory)]
