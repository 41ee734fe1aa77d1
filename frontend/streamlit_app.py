"""Streamlit UI for CodeMentor hint traces and live hint checks."""

from __future__ import annotations

import sys
import time
from pathlib import Path

import altair as alt
import streamlit as st

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from codementor.config import settings
from codementor.models import SignalRequest
from codementor.services.catalog import load_catalog
from codementor.services.signal_service import SignalService
from codementor.services.trace_store import TraceStore
from codementor.signals import extract_signals
from codementor.main import outcome_event
from codementor.ui_utils import (
    condense_approach_timeline,
    extract_hint_series,
    find_escalation_event,
    summarize_session,
    summarize_traces,
)

TRACE_STORE = TraceStore(ROOT_DIR / settings.TRACE_PATH)
LIVE_SESSION_ID = "dashboard"


def init_state() -> None:
    """Initialize Streamlit session state keys."""
    if "service" not in st.session_state:
        st.session_state["service"] = SignalService.create(
            catalog=load_catalog(settings.CATALOG_PATH)
        )
    st.session_state.setdefault("traces", TRACE_STORE.load())


def render_hint_chart(trace: list[dict]) -> None:
    series = extract_hint_series(trace)
    if not series:
        st.caption("No events recorded yet.")
        return
    chart = (
        alt.Chart(alt.Data(values=series))
        .mark_line(point=True)
        .encode(
            x=alt.X("event:Q", title="Signal event", axis=alt.Axis(tickMinStep=1)),
            y=alt.Y(
                "score:Q",
                title="Hint level (0 none, 1 gentle, 2 directional)",
                scale=alt.Scale(domain=[0, 2]),
            ),
            tooltip=["event:Q", "level:N", "approach:N"],
        )
    )
    st.altair_chart(chart, use_container_width=True)


def render_session(session_id: str, trace: list[dict]) -> None:
    st.subheader(f"Session {session_id}")
    stats = summarize_session(trace)
    cols = st.columns(4)
    cols[0].metric("Signals", stats["events"])
    cols[1].metric("Hints", stats["hints"])
    cols[2].metric("Directional", stats["directional"])
    cols[3].metric("Silenced mistakes", stats["silenced"])

    timeline = condense_approach_timeline(trace)
    st.markdown("**Approach timeline**")
    if timeline:
        st.markdown(" → ".join(timeline))
    else:
        st.caption("No confident detections yet.")

    render_hint_chart(trace)

    latest = find_escalation_event(trace)
    if latest:
        st.info(f"{latest['level']}: {latest['message']}")

    with st.expander("Full decision trace"):
        st.dataframe(trace, use_container_width=True)


st.set_page_config(page_title="CodeMentor Hint Console", layout="wide")
init_state()

st.title("CodeMentor Hint Console")
st.caption("Replay traces and live checks of the hint policy.")

traces: dict[str, list[dict]] = st.session_state["traces"]
service: SignalService = st.session_state["service"]

with st.sidebar:
    st.subheader("Sessions")
    if st.button("Reload traces"):
        st.session_state["traces"] = TRACE_STORE.load()
        st.rerun()
    session_ids = sorted(traces)
    selected = st.selectbox("Session", session_ids) if session_ids else None
    if selected and st.button("Clear selected trace"):
        st.session_state["traces"] = TRACE_STORE.clear_session(selected)
        st.rerun()

left, right = st.columns([2, 1], gap="large")

with left:
    if selected:
        render_session(selected, traces.get(selected, []))
    else:
        st.info("No traces yet. Run `python -m codementor.main --events FILE` first.")

    st.divider()
    st.subheader("All sessions")
    rows = summarize_traces(traces)
    if rows:
        st.dataframe(rows, use_container_width=True)

with right:
    st.subheader("Live check")
    problem_id = st.selectbox("Problem", service.catalog.ids())
    language = st.selectbox("Language", ["python", "java", "cpp", "javascript"])
    code = st.text_area("Code", height=260)
    if st.button("Send signal", disabled=not code.strip()):
        signals = extract_signals(code, language)
        request = SignalRequest(
            session_id=LIVE_SESSION_ID,
            problem_id=problem_id,
            signals=signals,
            language=language,
            timestamp=int(time.time() * 1000),
        )
        event = outcome_event(request, service.evaluate(request))
        st.session_state["traces"] = TRACE_STORE.append_events(LIVE_SESSION_ID, [event])
        st.json(signals.model_dump(by_alias=True))
        if event["showHint"]:
            st.success(f"{event['level']}: {event['message']}")
        else:
            st.caption(f"No hint ({event['reason']}, approach={event['approach']})")
