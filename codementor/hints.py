"""Coaching hint texts, keyed by the wrong approach and escalation level.

Only approaches listed here ever produce a hint.
"""

from codementor.models import ApproachType, HintLevel

GREEDY_GENTLE = (
    "Check whether making a locally optimal choice always leads to a globally "
    "optimal solution."
)

GREEDY_DIRECTIONAL = (
    "This problem has overlapping subproblems. Try thinking about reusing results "
    "instead of making local choices."
)

BRUTE_FORCE_GENTLE = "Is there a way to trade extra space for faster lookups?"

BRUTE_FORCE_DIRECTIONAL = (
    "Repeated nested scans may not scale. Is there a data structure that can help "
    "you look up values faster?"
)


HINT_MESSAGES: dict[ApproachType, dict[HintLevel, str]] = {
    ApproachType.GREEDY: {
        HintLevel.GENTLE: GREEDY_GENTLE,
        HintLevel.DIRECTIONAL: GREEDY_DIRECTIONAL,
    },
    ApproachType.BRUTE_FORCE: {
        HintLevel.GENTLE: BRUTE_FORCE_GENTLE,
        HintLevel.DIRECTIONAL: BRUTE_FORCE_DIRECTIONAL,
    },
}
