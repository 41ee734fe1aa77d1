"""Problem catalog: which approaches are right or wrong for each problem."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, Optional

from codementor.models import ApproachType, Problem

log = logging.getLogger(__name__)


DEFAULT_PROBLEMS: tuple[Problem, ...] = (
    # Two Sum
    Problem(
        id="leetcode_1",
        valid_approaches=frozenset({ApproachType.HASHMAP, ApproachType.TWO_POINTER}),
        invalid_approaches=frozenset({ApproachType.BRUTE_FORCE}),
    ),
    # Coin Change
    Problem(
        id="leetcode_322",
        valid_approaches=frozenset({ApproachType.DP}),
        invalid_approaches=frozenset({ApproachType.GREEDY}),
    ),
)


class ProblemCatalog:
    """Read-only lookup from problem id to its catalog entry."""

    def __init__(self, problems: Iterable[Problem] = DEFAULT_PROBLEMS):
        self._problems = {problem.id: problem for problem in problems}

    def lookup(self, problem_id: str) -> Optional[Problem]:
        return self._problems.get(problem_id)

    def ids(self) -> list[str]:
        return sorted(self._problems)

    def __contains__(self, problem_id: str) -> bool:
        return problem_id in self._problems

    def __len__(self) -> int:
        return len(self._problems)


def load_catalog(path: str | Path | None) -> ProblemCatalog:
    """Build a catalog from a JSON file, or the built-in one if there is none.

    Expected format::

        {"problems": [{"id": "leetcode_1",
                       "validApproaches": ["HASHMAP"],
                       "invalidApproaches": ["BRUTE_FORCE"]}]}

    Malformed entries raise ``pydantic.ValidationError``.
    """
    if path is None:
        return ProblemCatalog()
    catalog_path = Path(path)
    if not catalog_path.exists():
        log.warning(f"Catalog {catalog_path} not found, using built-in problems")
        return ProblemCatalog()
    data = json.loads(catalog_path.read_text())
    entries = data.get("problems", []) if isinstance(data, dict) else data
    problems = [Problem.model_validate(entry) for entry in entries]
    log.info(f"Loaded {len(problems)} problems from {catalog_path}")
    return ProblemCatalog(problems)
