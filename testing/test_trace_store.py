"""Tests for trace persistence."""

import json

from codementor.services.trace_store import TraceStore


def test_trace_store_load_missing_returns_empty(tmp_path):
    store = TraceStore(tmp_path / "hint_traces.json")

    assert store.load() == {}


def test_trace_store_load_corrupt_returns_empty(tmp_path):
    path = tmp_path / "hint_traces.json"
    path.write_text("{not json")

    assert TraceStore(path).load() == {}


def test_trace_store_append_events_merges_sessions(tmp_path):
    store = TraceStore(tmp_path / "hint_traces.json")
    first = [{"problemId": "leetcode_322", "showHint": True, "level": "GENTLE"}]
    second = [{"problemId": "leetcode_322", "showHint": False}]
    other = [{"problemId": "leetcode_1", "showHint": False}]

    store.append_events("session-a", first)
    store.append_events("session-b", other)
    store.append_events("session-a", second)

    data = json.loads(store.path.read_text())
    assert data["session-a"] == first + second
    assert data["session-b"] == other


def test_trace_store_clear_session(tmp_path):
    store = TraceStore(tmp_path / "hint_traces.json")
    store.append_events("session-a", [{"showHint": False}])
    store.append_events("session-b", [{"showHint": False}])

    remaining = store.clear_session("session-a")

    assert list(remaining) == ["session-b"]
    assert "session-a" not in store.load()


def test_trace_store_load_drops_malformed_sessions(tmp_path):
    path = tmp_path / "hint_traces.json"
    path.write_text(json.dumps({"good": [{"showHint": False}], "bad": "oops"}))

    assert TraceStore(path).load() == {"good": [{"showHint": False}]}


def test_trace_store_leaves_no_temp_file(tmp_path):
    store = TraceStore(tmp_path / "hint_traces.json")

    store.append_events("session-a", [{"showHint": True}])

    assert sorted(p.name for p in tmp_path.iterdir()) == ["hint_traces.json"]
