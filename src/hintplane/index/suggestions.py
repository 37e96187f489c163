"""Import suggestions: modules whose name starts with a prefix."""

from __future__ import annotations

from hintplane.index.models import ImportSuggestion
from hintplane.index.store import DocumentationStore
from hintplane.index.token_index import hint_source_path


def import_suggestions(
    prefix: str,
    store: DocumentationStore,
    project_directory: str | None,
) -> list[ImportSuggestion]:
    """Project and library modules matching ``prefix``, sorted by name.

    Project modules get an empty ``source_path``: only library modules are
    navigable from an import suggestion.
    """
    candidates = [
        ImportSuggestion(name=module.name, comment=module.comment, source_path="")
        for module in (store.project_module_docs(project_directory) if project_directory else [])
    ]
    candidates.extend(
        ImportSuggestion(
            name=module.name,
            comment=module.comment,
            source_path=hint_source_path(module, is_library=True),
        )
        for module in store.library_docs
    )
    return sorted(
        (suggestion for suggestion in candidates if suggestion.name.startswith(prefix)),
        key=lambda suggestion: suggestion.name,
    )
