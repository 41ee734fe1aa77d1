"""Stateful hint policy: cooldown plus escalation on repeated mistakes."""

import logging
import time
from typing import Callable, Optional

from codementor.hints import HINT_MESSAGES
from codementor.models import ApproachType, Hint, HintLevel, SessionState, ValidationResult

log = logging.getLogger(__name__)

COOLDOWN_MS = 30_000
ESCALATION_THRESHOLD = 2  # same-approach repeats before hints turn directional


def now_ms() -> int:
    return int(time.time() * 1000)


class HintPolicyEngine:
    """Decides whether a validated attempt earns a hint, and at which level.

    Updates the session as a side effect. Each decision runs under the
    session's lock so concurrent events for one session cannot double-count
    mistakes or slip past the cooldown.
    """

    def __init__(self, clock: Callable[[], int] = now_ms):
        self.clock = clock

    def generate_hint(
        self,
        result: ValidationResult,
        approach: ApproachType,
        session: SessionState,
        now: Optional[int] = None,
    ) -> Optional[Hint]:
        with session.lock:
            # Correct or unvetted attempts clear the mistake history.
            if result != ValidationResult.WRONG:
                session.reset_mistakes()
                return None

            if now is None:
                now = self.clock()

            # Hard silence window: nothing is inspected or updated.
            elapsed = now - session.last_hint_timestamp
            if elapsed < COOLDOWN_MS:
                log.debug(
                    f"[{session.session_id}] Cooldown active "
                    f"({COOLDOWN_MS - elapsed}ms left), {approach.value} not hinted"
                )
                return None

            # A change of approach restarts the count at 0, not 1.
            if approach == session.last_detected_approach:
                session.increment_mistake()
            else:
                session.reset_mistakes()

            session.last_detected_approach = approach
            session.last_hint_timestamp = now
            count = session.same_mistake_count

        messages = HINT_MESSAGES.get(approach)
        if not messages:
            log.debug(f"[{session.session_id}] Wrong approach {approach.value} has no hint")
            return None

        level = HintLevel.DIRECTIONAL if count >= ESCALATION_THRESHOLD else HintLevel.GENTLE
        log.info(
            f"[{session.session_id}] Hint {level.value} for {approach.value} "
            f"(same mistake count={count})"
        )
        return Hint(level=level, message=messages[level])
