"""Configuration constants.

Language-level facts that are not user-configurable: the implicit imports
every file receives, union types whose constructors are always in scope,
and the keyword pseudo-hints offered by autocomplete.

For configurable values, see models.py.
"""

from __future__ import annotations

# =============================================================================
# Library documentation
# =============================================================================

DOCS_BASE_URL = "http://package.elm-lang.org/packages/"
"""Default root for library documentation; identifiers are appended to it."""

DOCS_BUNDLE_FILENAME = "documentation.json"
"""Per-library documentation bundle file name."""

# =============================================================================
# Built-in imports
# =============================================================================
# (module name, alias, exposing) in the raw import shape. ".." exposes all.

DEFAULT_IMPORTS: tuple[tuple[str, str | None, str | tuple[str, ...] | None], ...] = (
    ("Basics", None, ".."),
    ("Debug", None, None),
    ("List", None, ("List", "::")),
    ("Maybe", None, ("Maybe",)),
    ("Result", None, ("Result",)),
    ("String", None, None),
    ("Tuple", None, None),
    ("Platform", None, ("Program",)),
    ("Platform.Cmd", "Cmd", ("Cmd", "!")),
    ("Platform.Sub", "Sub", ("Sub",)),
)

GLOBAL_UNION_TYPES: frozenset[tuple[str, str]] = frozenset(
    {("Maybe", "Maybe"), ("Result", "Result")}
)
"""``(module, type)`` pairs whose constructors are visible unqualified in every file."""

# =============================================================================
# Autocomplete
# =============================================================================

KEYWORDS: tuple[str, ...] = (
    "as",
    "case",
    "else",
    "exposing",
    "if",
    "import",
    "in",
    "let",
    "module",
    "of",
    "port",
    "then",
    "type",
    "type alias",
)
"""Language keywords offered as pseudo-hints with an empty module name."""
