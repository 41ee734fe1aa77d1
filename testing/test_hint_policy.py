"""Tests for the cooldown and escalation rules of the hint policy."""

from codementor.hints import (
    BRUTE_FORCE_DIRECTIONAL,
    BRUTE_FORCE_GENTLE,
    GREEDY_DIRECTIONAL,
    GREEDY_GENTLE,
)
from codementor.models import ApproachType, HintLevel, SessionState, ValidationResult
from codementor.services.hint_policy import COOLDOWN_MS, HintPolicyEngine

WRONG = ValidationResult.WRONG
GREEDY = ApproachType.GREEDY
T0 = 1_000_000


class FakeClock:
    """Clock stub returning a settable epoch-ms value."""

    def __init__(self, now: int = T0) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


def test_first_wrong_greedy_gets_gentle_hint():
    session = SessionState(session_id="s1")

    hint = HintPolicyEngine().generate_hint(WRONG, GREEDY, session, now=T0)

    assert hint.level == HintLevel.GENTLE
    assert hint.message == GREEDY_GENTLE
    assert session.last_detected_approach == GREEDY
    assert session.last_hint_timestamp == T0
    assert session.same_mistake_count == 0


def test_cooldown_suppresses_second_hint_and_leaves_state_untouched():
    clock = FakeClock()
    policy = HintPolicyEngine(clock=clock)
    session = SessionState(session_id="s1")

    first = policy.generate_hint(WRONG, GREEDY, session)
    after_first = session.model_dump()
    clock.now += COOLDOWN_MS - 1
    second = policy.generate_hint(WRONG, GREEDY, session)

    assert first is not None
    assert second is None
    assert session.model_dump() == after_first


def test_cooldown_ignores_approach_changes():
    policy = HintPolicyEngine()
    session = SessionState(session_id="s1")

    policy.generate_hint(WRONG, GREEDY, session, now=T0)
    hint = policy.generate_hint(WRONG, ApproachType.BRUTE_FORCE, session, now=T0 + 5_000)

    assert hint is None
    assert session.last_detected_approach == GREEDY


def test_three_spaced_mistakes_escalate_on_the_third():
    policy = HintPolicyEngine()
    session = SessionState(session_id="s1")

    levels = [
        policy.generate_hint(WRONG, GREEDY, session, now=T0 + i * COOLDOWN_MS).level
        for i in range(3)
    ]

    assert levels == [HintLevel.GENTLE, HintLevel.GENTLE, HintLevel.DIRECTIONAL]
    assert session.same_mistake_count == 2


def test_directional_greedy_message():
    policy = HintPolicyEngine()
    session = SessionState(session_id="s1")
    for i in range(2):
        policy.generate_hint(WRONG, GREEDY, session, now=T0 + i * COOLDOWN_MS)

    hint = policy.generate_hint(WRONG, GREEDY, session, now=T0 + 2 * COOLDOWN_MS)

    assert hint.message == GREEDY_DIRECTIONAL


def test_approach_switch_resets_escalation():
    policy = HintPolicyEngine()
    session = SessionState(session_id="s1")

    policy.generate_hint(WRONG, GREEDY, session, now=T0)
    policy.generate_hint(WRONG, GREEDY, session, now=T0 + COOLDOWN_MS)
    hint = policy.generate_hint(
        WRONG, ApproachType.BRUTE_FORCE, session, now=T0 + 2 * COOLDOWN_MS
    )

    assert hint.level == HintLevel.GENTLE
    assert hint.message == BRUTE_FORCE_GENTLE
    assert session.same_mistake_count == 0
    assert session.last_detected_approach == ApproachType.BRUTE_FORCE


def test_brute_force_escalates_to_directional():
    policy = HintPolicyEngine()
    session = SessionState(session_id="s1")

    hints = [
        policy.generate_hint(
            WRONG, ApproachType.BRUTE_FORCE, session, now=T0 + i * COOLDOWN_MS
        )
        for i in range(3)
    ]

    assert hints[-1].level == HintLevel.DIRECTIONAL
    assert hints[-1].message == BRUTE_FORCE_DIRECTIONAL


def test_correct_attempt_clears_mistakes():
    policy = HintPolicyEngine()
    session = SessionState(session_id="s1")
    policy.generate_hint(WRONG, GREEDY, session, now=T0)
    policy.generate_hint(WRONG, GREEDY, session, now=T0 + COOLDOWN_MS)
    assert session.same_mistake_count == 1

    cleared = policy.generate_hint(
        ValidationResult.CORRECT, ApproachType.DP, session, now=T0 + COOLDOWN_MS + 1
    )
    hint = policy.generate_hint(WRONG, GREEDY, session, now=T0 + 2 * COOLDOWN_MS)

    assert cleared is None
    assert hint.level == HintLevel.GENTLE
    assert session.same_mistake_count == 1


def test_suspicious_clears_mistakes_even_during_cooldown():
    policy = HintPolicyEngine()
    session = SessionState(session_id="s1")
    session.same_mistake_count = 3
    session.last_hint_timestamp = T0

    hint = policy.generate_hint(
        ValidationResult.SUSPICIOUS, ApproachType.DFS, session, now=T0 + 1
    )

    assert hint is None
    assert session.same_mistake_count == 0
    assert session.last_hint_timestamp == T0


def test_wrong_approach_without_hint_text_still_updates_state():
    policy = HintPolicyEngine()
    session = SessionState(session_id="s1")

    hint = policy.generate_hint(WRONG, ApproachType.DP, session, now=T0)

    assert hint is None
    assert session.last_detected_approach == ApproachType.DP
    assert session.last_hint_timestamp == T0
    # Cooldown now applies to the next wrong attempt
    assert policy.generate_hint(WRONG, GREEDY, session, now=T0 + 1_000) is None
