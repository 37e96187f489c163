"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages,
and provides a small shared world: a core library bundle plus a project
with ``Foo`` and ``Main`` modules.
"""

import sys
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

import pytest

# Insert local src directory at the beginning of sys.path
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of hintplane modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("hintplane"):
        del sys.modules[module_name]

from hintplane.index.imports import imports_from_raw  # noqa: E402
from hintplane.index.models import (  # noqa: E402
    ActiveFile,
    Declaration,
    FileRecord,
    ModuleSummary,
    UnionType,
    Values,
)
from hintplane.index.store import DocumentationStore  # noqa: E402

CORE_PACKAGE = "elm-lang/core/5.0.0"
CORE_LOCATOR = f"http://package.elm-lang.org/packages/{CORE_PACKAGE}/"
PROJECT_DIR = "/work/app"
FOO_PATH = "/work/app/src/Foo.elm"
MAIN_PATH = "/work/app/src/Main.elm"

RecordFactory = Callable[..., FileRecord]
StoreFactory = Callable[..., DocumentationStore]


def declarations(*names: str) -> tuple[Declaration, ...]:
    return tuple(Declaration(name=name, comment=f"{name} docs", tipe=f"{name} : a") for name in names)


@pytest.fixture
def core_docs() -> list[ModuleSummary]:
    """A trimmed core library bundle."""
    return [
        ModuleSummary(
            CORE_LOCATOR,
            "Basics",
            "Tons of useful functions.\n\nMore detail.",
            Values(values=declarations("identity", "toString")),
        ),
        ModuleSummary(
            CORE_LOCATOR,
            "List",
            "Lists.",
            Values(
                tipes=(UnionType("List", "A list.", "List a", ()),),
                values=declarations("map", "filter"),
            ),
        ),
        ModuleSummary(
            CORE_LOCATOR,
            "Maybe",
            "Optional values.",
            Values(
                tipes=(UnionType("Maybe", "Maybe docs", "Maybe a", ("Just", "Nothing")),),
                values=declarations("withDefault"),
            ),
        ),
        ModuleSummary(
            CORE_LOCATOR,
            "Result",
            "Results.",
            Values(
                tipes=(UnionType("Result", "Result docs", "Result error value", ("Ok", "Err")),),
                values=declarations("toMaybe"),
            ),
        ),
        ModuleSummary(
            CORE_LOCATOR,
            "Platform.Cmd",
            "Commands.",
            Values(
                tipes=(UnionType("Cmd", "Cmd docs", "Cmd msg", ()),),
                values=declarations("none"),
            ),
        ),
        ModuleSummary(
            CORE_LOCATOR,
            "Json.Decode",
            "Decoders.",
            Values(values=declarations("decodeString", "string")),
        ),
    ]


@pytest.fixture
def make_record() -> RecordFactory:
    """Build a project ``FileRecord`` from names and raw imports."""

    def make(
        name: str,
        path: str,
        *,
        values: Iterable[str] = (),
        aliases: Iterable[str] = (),
        tipes: Iterable[UnionType] = (),
        imports: Iterable[dict[str, Any]] = (),
    ) -> FileRecord:
        module = ModuleSummary(
            path,
            name,
            f"{name} module",
            Values(
                aliases=declarations(*aliases),
                tipes=tuple(tipes),
                values=declarations(*values),
            ),
        )
        return FileRecord(module_docs=module, imports=imports_from_raw(imports))

    return make


@pytest.fixture
def build_store(core_docs: list[ModuleSummary], make_record: RecordFactory) -> StoreFactory:
    """Store with the core bundle, ``Foo`` and a ``Main`` with the given imports."""

    def build(
        main_imports: Iterable[dict[str, Any]] = (),
        *,
        extra: Iterable[FileRecord] = (),
    ) -> DocumentationStore:
        foo = make_record(
            "Foo",
            FOO_PATH,
            values=("bar", "baz"),
            aliases=("Model",),
            tipes=(UnionType("Color", "Colors.", "Color", ("Red", "Green")),),
        )
        main = make_record("Main", MAIN_PATH, values=("main", "update"), imports=main_imports)
        store = DocumentationStore().add_library_docs(core_docs)
        store = store.set_file_contents(FOO_PATH, foo).set_file_contents(MAIN_PATH, main)
        for record in extra:
            store = store.set_file_contents(record.module_docs.source_path, record)
        return store

    return build


@pytest.fixture
def main_file() -> ActiveFile:
    return ActiveFile(MAIN_PATH, PROJECT_DIR)


@pytest.fixture
def paths() -> dict[str, str]:
    """Well-known paths and locators of the shared world."""
    return {
        "project": PROJECT_DIR,
        "foo": FOO_PATH,
        "main": MAIN_PATH,
        "core": CORE_LOCATOR,
        "core_package": CORE_PACKAGE,
    }
