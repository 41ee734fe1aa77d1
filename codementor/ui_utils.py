"""Helpers for the Streamlit UI."""

from __future__ import annotations

from typing import Any, Iterable

LEVEL_SCORES = {"GENTLE": 1, "DIRECTIONAL": 2}


def condense_approach_timeline(trace: Iterable[dict[str, Any]]) -> list[str]:
    """Return detected approaches with consecutive duplicates removed."""
    timeline: list[str] = []
    for event in trace:
        approach = (event.get("approach") or "").strip()
        if not approach:
            continue
        if not timeline or timeline[-1] != approach:
            timeline.append(approach)
    return timeline


def extract_hint_series(trace: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Per-event hint level scores (0 = silent, 1 = gentle, 2 = directional)."""
    series: list[dict[str, Any]] = []
    for idx, event in enumerate(trace, 1):
        level = event.get("level") if event.get("showHint") else None
        series.append(
            {
                "event": idx,
                "score": LEVEL_SCORES.get(level, 0),
                "level": level or "none",
                "approach": event.get("approach") or "-",
            }
        )
    return series


def summarize_session(trace: Iterable[dict[str, Any]]) -> dict[str, int]:
    """Count signals, hints and validation outcomes for one session."""
    summary = {
        "events": 0,
        "hints": 0,
        "gentle": 0,
        "directional": 0,
        "wrong": 0,
        "correct": 0,
        "silenced": 0,
    }
    for event in trace:
        summary["events"] += 1
        validation = event.get("validation")
        if validation == "WRONG":
            summary["wrong"] += 1
        elif validation == "CORRECT":
            summary["correct"] += 1
        if event.get("showHint"):
            summary["hints"] += 1
            if event.get("level") == "DIRECTIONAL":
                summary["directional"] += 1
            else:
                summary["gentle"] += 1
        elif validation == "WRONG":
            summary["silenced"] += 1
    return summary


def summarize_traces(traces: dict[str, list[dict[str, Any]]]) -> list[dict[str, Any]]:
    """One table row per session, sorted by session id."""
    rows: list[dict[str, Any]] = []
    for session_id in sorted(traces):
        trace = traces[session_id]
        stats = summarize_session(trace)
        problems = sorted({e.get("problemId", "") for e in trace if e.get("problemId")})
        rows.append(
            {
                "Session": session_id,
                "Problems": ", ".join(problems),
                "Signals": stats["events"],
                "Hints": stats["hints"],
                "Directional": stats["directional"],
                "Wrong": stats["wrong"],
            }
        )
    return rows


def find_escalation_event(trace: Iterable[dict[str, Any]]) -> dict[str, Any] | None:
    """Return the most recent hint, preferring a directional one."""
    hints = [event for event in trace if event.get("showHint")]
    for level in ("DIRECTIONAL", "GENTLE"):
        matches = [event for event in hints if event.get("level") == level]
        if matches:
            return matches[-1]
    return None
