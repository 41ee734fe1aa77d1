"""Approach validation against a problem's catalog entry."""

from codementor.models import ApproachType, Problem, ValidationResult


class ApproachValidationEngine:
    def validate(self, problem: Problem, approach: ApproachType) -> ValidationResult:
        """Classify ``approach`` for ``problem``.

        Approaches the catalog lists neither way are SUSPICIOUS, which the
        hint policy treats like a correct attempt.
        """
        if approach in problem.valid_approaches:
            return ValidationResult.CORRECT
        if approach in problem.invalid_approaches:
            return ValidationResult.WRONG
        return ValidationResult.SUSPICIOUS
