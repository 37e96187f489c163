"""Tests for EngineState."""

from hintplane.engine.state import EngineState
from hintplane.index.models import Hint
from hintplane.index.token_index import EMPTY_INDEX


class TestEngineState:
    def test_defaults(self) -> None:
        state = EngineState()
        assert state.version == 0
        assert state.active_file is None
        assert state.token_index == {}
        assert state.pending_packages == frozenset()

    def test_default_index_is_shared_empty_index(self) -> None:
        assert EngineState().token_index is EMPTY_INDEX
        assert EngineState().token_index is EngineState().token_index

    def test_evolve_bumps_version(self) -> None:
        state = EngineState()
        evolved = state.evolve(active_token="x")
        assert evolved.version == 1
        assert evolved.active_token == "x"
        assert state.version == 0
        assert state.active_token is None

    def test_active_hints(self) -> None:
        hint = Hint(name="bar", module_name="Foo", source_path="/p/Foo.elm")
        state = EngineState(token_index={"bar": (hint,)}, active_token="bar")
        assert state.active_hints() == (hint,)

    def test_active_hints_without_token(self) -> None:
        hint = Hint(name="bar", module_name="Foo", source_path="/p/Foo.elm")
        assert EngineState(token_index={"bar": (hint,)}).active_hints() == ()
        assert EngineState(active_token="missing").active_hints() == ()
