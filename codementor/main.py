#!/usr/bin/env python3
"""CodeMentor hint engine - signal replay.

Reads recorded signal events (JSON lines) and runs each one through the hint
pipeline, logging every decision and saving per-session traces.

Each line is a signal request as sent by the extension::

    {"sessionId": "s1", "problemId": "leetcode_322", "timestamp": 1700000000000,
     "signals": {"hasDPArray": false, "usesSort": true, "hasRecursion": false, "loopDepth": 1}}

or carries a raw ``"code"`` snapshot (plus optional ``"language"``) instead of
``"signals"``.

Usage:
    python -m codementor.main --events data/signals.jsonl
    python -m codementor.main --events signals.jsonl --parallel 4
    python -m codementor.main --events signals.jsonl --session-id s1
    python -m codementor.main --events signals.jsonl --remote http://localhost:8080
"""

import argparse
import concurrent.futures
import json
import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Optional

from pydantic import ValidationError

from codementor.config import settings
from codementor.models import HintResponse, SignalRequest
from codementor.services.catalog import ProblemCatalog, load_catalog
from codementor.services.hint_client import HintServiceClient
from codementor.services.hint_policy import HintPolicyEngine, now_ms
from codementor.services.signal_service import SignalOutcome, SignalService
from codementor.services.trace_store import TraceStore
from codementor.signals import extract_signals

logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s: %(message)s")
log = logging.getLogger(__name__)


def load_events(path: str | Path) -> list[SignalRequest]:
    """Parse a JSON-lines signal log. Malformed lines are logged and skipped."""
    requests: list[SignalRequest] = []
    with open(path) as f:
        for lineno, line in enumerate(f, 1):
            if not line.strip():
                continue
            try:
                raw = json.loads(line)
                if "signals" not in raw and "code" in raw:
                    code, language = raw.pop("code"), raw.get("language")
                    if not isinstance(code, str) or not isinstance(language, (str, type(None))):
                        raise TypeError("'code' and 'language' must be strings")
                    raw["signals"] = extract_signals(code, language)
                requests.append(SignalRequest.model_validate(raw))
            except (json.JSONDecodeError, ValidationError, TypeError) as e:
                log.warning(f"Skipping line {lineno} of {path}: {e}")
    return requests


class ReplayClock:
    """Policy clock for replays: reads the recorded capture time of the event
    being decided on this thread, or wall-clock time when it has none.
    """

    def __init__(self):
        self._local = threading.local()

    @contextmanager
    def at(self, timestamp: Optional[int]):
        self._local.now = timestamp
        try:
            yield
        finally:
            self._local.now = None

    def __call__(self) -> int:
        now = getattr(self._local, "now", None)
        return now if now is not None else now_ms()


def build_replay_service(catalog: Optional[ProblemCatalog] = None) -> SignalService:
    """Signal service whose hint policy runs on a ``ReplayClock``."""
    return SignalService.create(catalog=catalog, policy=HintPolicyEngine(clock=ReplayClock()))


def outcome_event(request: SignalRequest, outcome: SignalOutcome) -> dict:
    """Flatten a local decision into a trace event."""
    event = {
        "problemId": request.problem_id,
        "timestamp": request.timestamp,
        "reason": outcome.reason,
        "approach": outcome.detection.approach.value if outcome.detection else None,
        "confidence": outcome.detection.confidence if outcome.detection else None,
        "validation": outcome.validation.value if outcome.validation else None,
    }
    event.update(outcome.to_response().to_payload())
    return event


def response_event(request: SignalRequest, response: HintResponse) -> dict:
    """Trace event for a decision made by a remote hint service."""
    event = {
        "problemId": request.problem_id,
        "timestamp": request.timestamp,
        "reason": "remote",
    }
    event.update(response.to_payload())
    return event


def run_session(
    decide: Callable[[SignalRequest], dict],
    trace_events: list[dict],
    session_id: str,
    requests: list[SignalRequest],
) -> int:
    """Replay one session's events in order. Returns number of hints shown."""
    hints = 0
    for turn, request in enumerate(requests, 1):
        event = decide(request)
        trace_events.append(event)
        if event["showHint"]:
            hints += 1
            log.info(
                f"[{session_id}] [Event {turn}] {request.problem_id}: "
                f"{event['level']} hint - {event['message']}"
            )
        else:
            log.info(
                f"[{session_id}] [Event {turn}] {request.problem_id}: no hint "
                f"({event['reason']}, approach={event.get('approach')}, "
                f"validation={event.get('validation')})"
            )
    return hints


def run_replay(
    service: SignalService,
    trace_store: TraceStore,
    args: argparse.Namespace,
    client: Optional[HintServiceClient] = None,
) -> list[dict]:
    """Replay recorded events and persist traces. Returns a per-session summary."""
    requests = load_events(args.events)
    if args.session_id:
        requests = [r for r in requests if r.session_id == args.session_id]

    # Sessions run concurrently, a session's own events stay in order.
    by_session: dict[str, list[SignalRequest]] = {}
    for request in requests:
        by_session.setdefault(request.session_id, []).append(request)

    if client is not None:
        def decide(request: SignalRequest) -> dict:
            return response_event(request, client.send_signal(request))
    else:
        clock = service.policy.clock

        def decide(request: SignalRequest) -> dict:
            # Recorded capture times drive the cooldown only on a replay clock.
            if not isinstance(clock, ReplayClock):
                return outcome_event(request, service.evaluate(request))
            with clock.at(request.timestamp):
                return outcome_event(request, service.evaluate(request))

    parallel = getattr(args, "parallel", 1)
    log.info(
        f"Replaying {len(requests)} events across {len(by_session)} sessions "
        f"(parallel={parallel})"
    )

    def process_session(item):
        session_id, session_requests = item
        trace_events: list[dict] = []
        try:
            hints = run_session(decide, trace_events, session_id, session_requests)
            result = {"session_id": session_id, "events": len(session_requests), "hints": hints}
        except Exception as e:
            log.error(f"Error replaying session {session_id}: {e}")
            result = {
                "session_id": session_id,
                "events": len(session_requests),
                "hints": sum(1 for ev in trace_events if ev.get("showHint")),
                "error": str(e),
            }
        finally:
            if trace_events:
                trace_store.append_events(session_id, trace_events)
        return result

    if parallel > 1:
        with concurrent.futures.ThreadPoolExecutor(max_workers=parallel) as executor:
            summary = list(executor.map(process_session, by_session.items()))
    else:
        summary = [process_session(item) for item in by_session.items()]

    total_hints = sum(s["hints"] for s in summary)
    log.info(f"=== Replay complete: {total_hints} hints over {len(requests)} events ===")
    log.info(f"Saved traces to {trace_store.path}")
    return summary


def main():
    parser = argparse.ArgumentParser(description="CodeMentor hint engine")
    parser.add_argument("--events", type=str, required=True, help="JSON-lines signal log")
    parser.add_argument("--session-id", type=str, default=None)
    parser.add_argument("--catalog", type=str, default=settings.CATALOG_PATH)
    parser.add_argument("--trace-path", type=str, default=settings.TRACE_PATH)
    parser.add_argument(
        "--parallel",
        type=int,
        default=settings.PARALLEL,
        help="Number of sessions replayed concurrently (default: 1 = sequential)",
    )
    parser.add_argument(
        "--remote",
        nargs="?",
        const=settings.HINT_SERVICE_URL,
        default=None,
        help="Send events to a deployed hint service instead of deciding locally",
    )
    args = parser.parse_args()

    log.info(
        f"Config: events={args.events}, catalog={args.catalog or 'built-in'}, "
        f"parallel={args.parallel}, remote={args.remote or 'no'}"
    )

    service = build_replay_service(load_catalog(args.catalog))
    trace_store = TraceStore(args.trace_path)

    if args.remote:
        with HintServiceClient(base_url=args.remote) as client:
            return run_replay(service, trace_store, args, client=client)
    return run_replay(service, trace_store, args)


if __name__ == "__main__":
    main()
