"""Pydantic models for signals, problems, sessions and hints."""

import threading
from enum import Enum
from typing import FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator


class ApproachType(str, Enum):
    DP = "DP"
    GREEDY = "GREEDY"
    DFS = "DFS"
    HASHMAP = "HASHMAP"
    TWO_POINTER = "TWO_POINTER"
    BRUTE_FORCE = "BRUTE_FORCE"
    UNKNOWN = "UNKNOWN"


class ValidationResult(str, Enum):
    CORRECT = "CORRECT"
    WRONG = "WRONG"
    SUSPICIOUS = "SUSPICIOUS"


class HintLevel(str, Enum):
    GENTLE = "GENTLE"
    DIRECTIONAL = "DIRECTIONAL"


class SignalVector(BaseModel):
    """Observed shape of the user's current attempt.

    Field names follow the extension's wire format (``hasDPArray`` etc.);
    snake_case names are accepted as well. Extra keys are ignored.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    has_dp_array: bool = Field(False, alias="hasDPArray")
    uses_sort: bool = Field(False, alias="usesSort")
    has_recursion: bool = Field(False, alias="hasRecursion")
    loop_depth: int = Field(0, alias="loopDepth")


class DetectionResult(BaseModel):
    """Approach inferred from signals plus the rule's fixed confidence."""
    model_config = ConfigDict(frozen=True)

    approach: ApproachType
    confidence: float = Field(ge=0.0, le=1.0)


class Problem(BaseModel):
    """Catalog entry: which approaches solve a problem and which are known traps."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    valid_approaches: FrozenSet[ApproachType] = Field(
        default_factory=frozenset, alias="validApproaches"
    )
    invalid_approaches: FrozenSet[ApproachType] = Field(
        default_factory=frozenset, alias="invalidApproaches"
    )

    @model_validator(mode="after")
    def _check_approach_sets(self) -> "Problem":
        overlap = self.valid_approaches & self.invalid_approaches
        if overlap:
            names = ", ".join(sorted(a.value for a in overlap))
            raise ValueError(f"Problem {self.id}: approaches both valid and invalid: {names}")
        if ApproachType.UNKNOWN in self.valid_approaches | self.invalid_approaches:
            raise ValueError(f"Problem {self.id}: UNKNOWN cannot be listed as an approach")
        return self


class Hint(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: HintLevel
    message: str


class SessionState(BaseModel):
    """Hint history for one coding session.

    The only mutable model. ``HintPolicyEngine`` holds ``lock`` while it
    reads and updates the fields.
    """
    session_id: str
    last_detected_approach: Optional[ApproachType] = None
    last_hint_timestamp: int = 0  # epoch ms of the last hint decision past cooldown
    same_mistake_count: int = 0

    _lock: threading.Lock = PrivateAttr(default_factory=threading.Lock)

    @property
    def lock(self) -> threading.Lock:
        return self._lock

    def increment_mistake(self) -> None:
        self.same_mistake_count += 1

    def reset_mistakes(self) -> None:
        self.same_mistake_count = 0


class SignalRequest(BaseModel):
    """Signal event as sent by the browser extension."""
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(alias="sessionId")
    problem_id: str = Field(alias="problemId")
    signals: SignalVector
    language: Optional[str] = None
    timestamp: Optional[int] = None  # capture time, epoch ms


class HintResponse(BaseModel):
    """Response returned to the extension for a signal event."""
    model_config = ConfigDict(populate_by_name=True)

    show_hint: bool = Field(alias="showHint")
    level: Optional[HintLevel] = None
    message: Optional[str] = None

    @classmethod
    def no_hint(cls) -> "HintResponse":
        return cls(show_hint=False)

    @classmethod
    def from_hint(cls, hint: Hint) -> "HintResponse":
        return cls(show_hint=True, level=hint.level, message=hint.message)

    def to_payload(self) -> dict:
        """Wire shape: ``{"showHint": false}`` or ``{"showHint": true, "level": ..., "message": ...}``."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
