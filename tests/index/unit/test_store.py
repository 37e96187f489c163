"""Unit tests for the documentation store."""

from __future__ import annotations

import pytest

from hintplane.index.models import FileRecord, ModuleSummary
from hintplane.index.store import DocumentationStore, first_paragraph, is_under


class TestFirstParagraph:
    @pytest.mark.parametrize(
        ("comment", "expected"),
        [
            ("One.\n\nTwo.", "One."),
            ("  \n One line.  ", "One line."),
            ("Line one\nline two\n\nNext", "Line one\nline two"),
            ("", ""),
        ],
    )
    def test_truncation(self, comment: str, expected: str) -> None:
        assert first_paragraph(comment) == expected


class TestIsUnder:
    @pytest.mark.parametrize(
        ("path", "directory", "expected"),
        [
            ("/work/app/src/Main.elm", "/work/app", True),
            ("/work/app/src/Main.elm", "/work/app/", True),
            ("/work/application/Main.elm", "/work/app", False),
            ("/work/app", "/work/app", False),
            ("C:\\proj\\src\\Main.elm", "C:\\proj", True),
            ("/work/app/Main.elm", "", False),
        ],
    )
    def test_containment(self, path: str, directory: str, expected: bool) -> None:
        assert is_under(path, directory) is expected


class TestLibraryDocs:
    """Library bundles are cache-forever."""

    def test_comments_truncated_on_add(self, core_docs: list[ModuleSummary]) -> None:
        store = DocumentationStore().add_library_docs(core_docs)
        basics = next(m for m in store.library_docs if m.name == "Basics")
        assert basics.comment == "Tons of useful functions."

    def test_known_locator_not_added_twice(self, core_docs: list[ModuleSummary]) -> None:
        store = DocumentationStore().add_library_docs(core_docs)
        again = store.add_library_docs(core_docs)
        assert again is store
        assert len(again.library_docs) == len(core_docs)

    def test_new_locator_appended(self, core_docs: list[ModuleSummary]) -> None:
        store = DocumentationStore().add_library_docs(core_docs)
        other = ModuleSummary("http://package.elm-lang.org/packages/elm-lang/html/2.0.0/", "Html")
        updated = store.add_library_docs([other])
        assert updated.library_docs[-1].name == "Html"
        assert other.source_path in updated.library_locators()
        assert other.source_path not in store.library_locators()

    def test_locators(self, core_docs: list[ModuleSummary], paths: dict[str, str]) -> None:
        store = DocumentationStore().add_library_docs(core_docs)
        assert store.library_locators() == frozenset({paths["core"]})


class TestFileContents:
    """Per-file records replace and remove without touching the original store."""

    def test_set_is_persistent(self, make_record, paths: dict[str, str]) -> None:
        empty = DocumentationStore()
        record = make_record("Foo", paths["foo"], values=("bar",))

        store = empty.set_file_contents(paths["foo"], record)

        assert store.file_contents[paths["foo"]] is record
        assert paths["foo"] not in empty.file_contents

    def test_set_replaces_wholesale(self, make_record, paths: dict[str, str]) -> None:
        store = DocumentationStore().set_file_contents(
            paths["foo"], make_record("Foo", paths["foo"], values=("bar",))
        )
        store = store.set_file_contents(paths["foo"], make_record("Foo", paths["foo"], values=("qux",)))
        names = [d.name for d in store.file_contents[paths["foo"]].module_docs.values.values]
        assert names == ["qux"]

    def test_remove(self, build_store, paths: dict[str, str]) -> None:
        store = build_store()
        removed = store.remove_file_contents(paths["foo"])
        assert paths["foo"] not in removed.file_contents
        assert paths["main"] in removed.file_contents

    def test_remove_unknown_is_noop(self, build_store) -> None:
        store = build_store()
        assert store.remove_file_contents("/nowhere.elm") is store

    def test_file_contents_read_only(self, build_store, paths: dict[str, str]) -> None:
        store = build_store()
        with pytest.raises(TypeError):
            store.file_contents[paths["foo"]] = None  # type: ignore[index]


class TestProjectScoping:
    def test_project_modules_filtered_by_directory(self, build_store, make_record) -> None:
        outside = make_record("Elsewhere", "/other/src/Elsewhere.elm")
        store = build_store(extra=[outside])

        names = {m.name for m in store.project_module_docs("/work/app")}

        assert names == {"Foo", "Main"}

    def test_record_shape(self, build_store, paths: dict[str, str]) -> None:
        records = build_store().project_file_contents(paths["project"])
        assert all(isinstance(record, FileRecord) for record in records)
