"""Per-session hint decision traces, kept in one JSON file."""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any

log = logging.getLogger(__name__)

Traces = dict[str, list[dict[str, Any]]]


class TraceStore:
    """Hint decision events keyed by session id.

    Appends from concurrent replay workers are serialized by the store. Each
    write lands in a temp file that replaces the trace file, so the dashboard
    never reads half a file.
    """

    def __init__(self, path: str | Path = "data/hint_traces.json"):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def load(self) -> Traces:
        """All sessions' events; unreadable files and malformed entries are dropped."""
        try:
            data: Any = json.loads(self.path.read_text())
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError as e:
            log.warning(f"Ignoring unreadable trace file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            return {}
        return {sid: events for sid, events in data.items() if isinstance(events, list)}

    def append_events(self, session_id: str, events: list[dict[str, Any]]) -> Traces:
        """Add events to the end of a session's trace; returns the merged traces."""
        with self._lock:
            traces = self.load()
            traces.setdefault(session_id, []).extend(events)
            self._write(traces)
        return traces

    def clear_session(self, session_id: str) -> Traces:
        """Forget one session's trace; returns what remains."""
        with self._lock:
            traces = self.load()
            if traces.pop(session_id, None) is not None:
                self._write(traces)
        return traces

    def _write(self, traces: Traces) -> None:
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps(traces, indent=2))
        tmp.replace(self.path)
