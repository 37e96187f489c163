"""Tests for documentation bundle decoding."""

import json

import pytest

from hintplane.core.errors import DocsError, ErrorCode
from hintplane.docs.decoding import decode_bundle, decode_module
from hintplane.index.models import Declaration, UnionType

LOCATOR = "http://package.elm-lang.org/packages/elm-lang/core/5.0.0/"

MAYBE_MODULE = {
    "name": "Maybe",
    "comment": "This library fills a bunch of important niches.\n\n# Definition",
    "aliases": [],
    "types": [
        {
            "name": "Maybe",
            "comment": "Represent values that may or may not exist.",
            "args": ["a"],
            "cases": [["Just", ["a"]], ["Nothing", []]],
        }
    ],
    "values": [
        {"name": "withDefault", "comment": "Provide a default value.", "type": "a -> Maybe a -> a"},
    ],
}


class TestDecodeModule:
    def test_union_cases_from_pairs(self) -> None:
        summary = decode_module(MAYBE_MODULE, LOCATOR)

        assert summary.source_path == LOCATOR
        assert summary.values.tipes == (
            UnionType(
                name="Maybe",
                comment="Represent values that may or may not exist.",
                tipe="Maybe a",
                cases=("Just", "Nothing"),
            ),
        )
        assert summary.values.values == (
            Declaration("withDefault", "Provide a default value.", "a -> Maybe a -> a"),
        )

    def test_project_shape(self) -> None:
        """Host summaries use ``tipe`` and bare case names."""
        summary = decode_module(
            {
                "name": "Foo",
                "aliases": [{"name": "Model", "tipe": "{ count : Int }"}],
                "tipes": [{"name": "Msg", "cases": ["Increment", "Decrement"]}],
                "values": [{"name": "update", "tipe": "Msg -> Model -> Model"}],
            },
            "/work/app/src/Foo.elm",
        )
        assert summary.values.aliases[0].tipe == "{ count : Int }"
        assert summary.values.tipes[0].cases == ("Increment", "Decrement")
        assert summary.values.tipes[0].tipe == "Msg"
        assert summary.values.values[0].tipe == "Msg -> Model -> Model"

    def test_unions_and_binops(self) -> None:
        summary = decode_module(
            {
                "name": "Basics",
                "unions": [{"name": "Order", "cases": [["LT", []], ["EQ", []], ["GT", []]]}],
                "values": [{"name": "identity", "type": "a -> a"}],
                "binops": [{"name": "+", "type": "number -> number -> number"}],
            },
            LOCATOR,
        )
        assert [t.name for t in summary.values.tipes] == ["Order"]
        assert [v.name for v in summary.values.values] == ["identity", "+"]

    def test_missing_sections_default_empty(self) -> None:
        summary = decode_module({"name": "Empty"}, LOCATOR)
        assert summary.comment == ""
        assert summary.values.values == ()
        assert summary.values.tipes == ()


class TestDecodeBundle:
    def test_every_module_gets_locator(self) -> None:
        raw = json.dumps([MAYBE_MODULE, {"name": "Basics"}])
        modules = decode_bundle(raw, LOCATOR)
        assert [m.name for m in modules] == ["Maybe", "Basics"]
        assert {m.source_path for m in modules} == {LOCATOR}

    def test_comment_kept_whole(self) -> None:
        """Truncation happens when docs enter the store, not here."""
        (module,) = decode_bundle(json.dumps([MAYBE_MODULE]), LOCATOR)
        assert "# Definition" in module.comment

    @pytest.mark.parametrize(
        "raw",
        [
            "not json",
            json.dumps({"name": "Maybe"}),
            json.dumps([{"comment": "no name"}]),
        ],
    )
    def test_invalid_payload(self, raw: str) -> None:
        with pytest.raises(DocsError) as exc_info:
            decode_bundle(raw, LOCATOR, url=LOCATOR + "documentation.json")

        assert exc_info.value.code == ErrorCode.DOCS_DECODE_FAILED
        assert exc_info.value.details["url"] == LOCATOR + "documentation.json"
