"""Signal handling: catalog lookup, detection, validation and hint policy."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from codementor.models import (
    DetectionResult,
    Hint,
    HintResponse,
    SignalRequest,
    ValidationResult,
)
from codementor.services.catalog import ProblemCatalog
from codementor.services.hint_policy import HintPolicyEngine
from codementor.services.intent import IntentDetectionEngine
from codementor.services.sessions import SessionStore
from codementor.services.validation import ApproachValidationEngine

log = logging.getLogger(__name__)

CONFIDENCE_THRESHOLD = 0.7


@dataclass
class SignalOutcome:
    """Everything decided for one signal event (used for traces)."""

    reason: str  # "unknown_problem" | "low_confidence" | "evaluated"
    detection: Optional[DetectionResult] = None
    validation: Optional[ValidationResult] = None
    hint: Optional[Hint] = None

    def to_response(self) -> HintResponse:
        if self.hint is None:
            return HintResponse.no_hint()
        return HintResponse.from_hint(self.hint)


class SignalService:
    """Turns signal events into at most one hint each."""

    def __init__(
        self,
        catalog: ProblemCatalog,
        detector: IntentDetectionEngine,
        validator: ApproachValidationEngine,
        policy: HintPolicyEngine,
        sessions: SessionStore,
    ):
        self.catalog = catalog
        self.detector = detector
        self.validator = validator
        self.policy = policy
        self.sessions = sessions

    @classmethod
    def create(
        cls,
        catalog: ProblemCatalog | None = None,
        policy: HintPolicyEngine | None = None,
    ) -> "SignalService":
        """Wire a service with default engines and a fresh session store."""
        return cls(
            catalog=catalog or ProblemCatalog(),
            detector=IntentDetectionEngine(),
            validator=ApproachValidationEngine(),
            policy=policy or HintPolicyEngine(),
            sessions=SessionStore(),
        )

    def evaluate(self, request: SignalRequest) -> SignalOutcome:
        problem = self.catalog.lookup(request.problem_id)
        if problem is None:
            log.debug(f"[{request.session_id}] Unknown problem {request.problem_id}")
            return SignalOutcome(reason="unknown_problem")

        detection = self.detector.detect(request.signals)

        # Low-confidence detections never reach validation or session state.
        if detection.confidence < CONFIDENCE_THRESHOLD:
            log.debug(
                f"[{request.session_id}] {detection.approach.value} below confidence "
                f"gate ({detection.confidence:.2f})"
            )
            return SignalOutcome(reason="low_confidence", detection=detection)

        validation = self.validator.validate(problem, detection.approach)
        session = self.sessions.get_or_create(request.session_id)
        hint = self.policy.generate_hint(validation, detection.approach, session)
        return SignalOutcome(
            reason="evaluated",
            detection=detection,
            validation=validation,
            hint=hint,
        )

    def handle_signal(self, request: SignalRequest) -> HintResponse:
        return self.evaluate(request).to_response()
