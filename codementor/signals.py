"""Heuristic signal extraction from a code snapshot.

Regex rules over the raw editor text, the same signals the browser extension
captures. No parsing: false positives are expected and the detection rules
are tuned for them.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional

from codementor.models import SignalVector

MAX_LOOP_DEPTH = 5

_DP_ARRAY_RE = re.compile(
    r"\b(?:dp|memo|cache)\s*\[|vector<.*>\s*dp\b|int\[\].*\bdp\b|\bdp\s*=\s*\["
)
_SORT_RE = re.compile(
    r"\.sort\(|\bsorted\(|Arrays\.sort\(|Collections\.sort\(|\bsort\("
)
_FUNC_DEF_RE = re.compile(
    r"\bdef\s+(\w+)\s*\("
    r"|\bfunc\s+(\w+)\s*\("
    r"|\bfunction\s+(\w+)\s*\("
    r"|\b(?:void|int|long|bool|boolean|double|String|auto)\s+(\w+)\s*\("
)
_PYTHON_DEF_RE = re.compile(r"^\s*def\s+\w+\s*\(.*\)\s*(?:->.*)?:\s*$", re.MULTILINE)
_LOOP_RE = re.compile(r"^\s*(?:for|while)\b|\b(?:for|while)\s*\(")


def extract_signals(code: str, language: Optional[str] = None) -> SignalVector:
    """Build a ``SignalVector`` from the user's current code."""
    if language:
        python = language.lower() in ("python", "python3", "py")
    else:
        python = bool(_PYTHON_DEF_RE.search(code))
    lines = code.splitlines()
    depth = _indent_loop_depth(lines) if python else _brace_loop_depth(lines)

    return SignalVector(
        has_dp_array=bool(_DP_ARRAY_RE.search(code)),
        uses_sort=bool(_SORT_RE.search(code)),
        has_recursion=has_recursion(code),
        loop_depth=min(depth, MAX_LOOP_DEPTH),
    )


def has_recursion(code: str) -> bool:
    """True when some defined function's name is called again elsewhere in the code."""
    for match in _FUNC_DEF_RE.finditer(code):
        name = next(group for group in match.groups() if group)
        calls = re.findall(rf"\b{re.escape(name)}\s*\(", code)
        if len(calls) >= 2:
            return True
    return False


def _brace_loop_depth(lines: Iterable[str]) -> int:
    stack: list[bool] = []  # one entry per open brace, True if a loop opened it
    pending_loop = False
    best = 0
    for line in lines:
        if _LOOP_RE.search(line):
            pending_loop = True
        for char in line:
            if char == "{":
                stack.append(pending_loop)
                pending_loop = False
                best = max(best, sum(stack))
            elif char == "}" and stack:
                stack.pop()
        # Loop with a single-statement body, no block follows
        if pending_loop and line.rstrip().endswith(";"):
            pending_loop = False
    return best


def _indent_loop_depth(lines: Iterable[str]) -> int:
    stack: list[int] = []  # indentation of enclosing loop headers
    best = 0
    for line in lines:
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        indent = len(line) - len(line.lstrip())
        while stack and indent <= stack[-1]:
            stack.pop()
        if _LOOP_RE.match(line):
            stack.append(indent)
            best = max(best, len(stack))
    return best
