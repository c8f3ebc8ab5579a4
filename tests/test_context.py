from __future__ import annotations

from sg_logger.context import LogContextState


def test_create_with_supplied_id():
    state = LogContextState.create("abc")
    assert state.correlation_id == "abc"
    assert state.owns_correlation_id is False
    assert state.persistent_context == {}


def test_create_generates_owned_id():
    state = LogContextState.create()
    assert state.correlation_id
    assert state.owns_correlation_id is True
    assert LogContextState.create("").owns_correlation_id is True


def test_with_correlation_id():
    state = LogContextState.create()
    assert state.with_correlation_id("") is state
    assert state.with_correlation_id(None) is state

    taken = state.with_correlation_id("X")
    assert taken.correlation_id == "X"
    assert taken.owns_correlation_id is False
    assert state.owns_correlation_id is True


def test_with_context_merges_shallow():
    state = LogContextState.create("abc").with_context({"a": 1, "b": {"x": 1}})
    state = state.with_context({"b": {"y": 2}, "c": 3})
    assert state.persistent_context == {"a": 1, "b": {"y": 2}, "c": 3}
    assert state.with_context("nope") is state


def test_updates_do_not_mutate_previous_state():
    first = LogContextState.create("abc").with_context({"a": 1})
    second = first.with_context({"b": 2})
    assert first.persistent_context == {"a": 1}
    assert second.persistent_context == {"a": 1, "b": 2}


def test_cleared_keeps_caller_id():
    state = LogContextState.create().with_correlation_id("X").with_context({"a": 1})
    cleared = state.cleared()
    assert cleared.correlation_id == "X"
    assert cleared.persistent_context == {}


def test_cleared_regenerates_owned_id():
    state = LogContextState.create().with_context({"a": 1})
    cleared = state.cleared()
    assert cleared.correlation_id != state.correlation_id
    assert cleared.owns_correlation_id is True


def test_merged_context_call_values_win():
    state = LogContextState.create("abc").with_context({"a": 1, "b": 1})
    assert state.merged_context({"b": 2}) == {"a": 1, "b": 2}
    assert state.merged_context(None) == {"a": 1, "b": 1}
    assert list(state.merged_context({"c": 3})) == ["a", "b", "c"]


def test_logger_set_then_clear_keeps_id(make_logger):
    logger = make_logger(correlation_id=None)
    logger.set_correlation_id("X")
    logger.clear_log_context()
    assert logger.get_correlation_id() == "X"


def test_logger_clear_drops_context(make_logger, sink):
    logger = make_logger()
    logger.add_context_key({"handler": "Jest"})
    logger.clear_log_context()
    logger.info("Simple")
    assert "context" not in sink.records()[0]
    assert logger.context_state.persistent_context == {}
