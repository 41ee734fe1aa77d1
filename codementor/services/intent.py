"""Rule-based approach detection from code-shape signals."""

from typing import Callable, NamedTuple

from codementor.models import ApproachType, DetectionResult, SignalVector


class Rule(NamedTuple):
    name: str
    matches: Callable[[SignalVector], bool]
    approach: ApproachType
    confidence: float


# Evaluated in order, first match wins. The rules overlap, so order is part
# of the contract: a sorted attempt with a DP array is DP, never GREEDY.
RULES: tuple[Rule, ...] = (
    Rule("dp_array", lambda s: s.has_dp_array, ApproachType.DP, 0.9),
    Rule(
        "sort_without_recursion",
        lambda s: s.uses_sort and not s.has_recursion,
        ApproachType.GREEDY,
        0.75,
    ),
    Rule(
        "single_loop_lookup",
        lambda s: not s.uses_sort and s.loop_depth == 1 and not s.has_recursion,
        ApproachType.HASHMAP,
        0.75,
    ),
    Rule(
        "nested_loops",
        lambda s: s.loop_depth >= 2 and not s.uses_sort and not s.has_recursion,
        ApproachType.BRUTE_FORCE,
        0.8,
    ),
)

FALLBACK = DetectionResult(approach=ApproachType.UNKNOWN, confidence=0.3)


class IntentDetectionEngine:
    """Maps a signal vector to the approach the user is most likely attempting."""

    def __init__(self, rules: tuple[Rule, ...] = RULES):
        self.rules = rules

    def detect(self, signals: SignalVector) -> DetectionResult:
        for rule in self.rules:
            if rule.matches(signals):
                return DetectionResult(approach=rule.approach, confidence=rule.confidence)
        return FALLBACK
