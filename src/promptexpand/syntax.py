# -------------------------------------
# syntax checks for live typing
# -------------------------------------
"""
Cheap structural checks, independent of full expansion.

validate_brackets: unmatched / multiple / empty [ ... ] groups.
validate_pipeline: empty steps, doubled || separators, oversized step counts.

Both return a Validation; neither attempts any recovery.
"""
from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import Diagnostic, ErrorKind

PIPE = "|"

_GROUP_RE = re.compile(r"\[([^\[\]]*)\]")


@dataclass(frozen=True)
class Validation:
    is_valid: bool
    error: str | None = None
    suggestion: str | None = None

    def __bool__(self) -> bool:
        return self.is_valid

    def diagnostic(self, kind: ErrorKind = ErrorKind.SYNTAX) -> Diagnostic | None:
        if self.is_valid:
            return None
        return Diagnostic(kind, self.error or "Invalid syntax", self.suggestion)


VALID = Validation(True)


def _fail(error: str, suggestion: str) -> Validation:
    return Validation(False, error, suggestion)


# ============================================================
# Brackets
# ============================================================

def validate_brackets(text: str) -> Validation:
    """
    Check a single prompt unit for a well-formed bracket group.

    Rules, in order: more '[' than ']', more ']' than '[', more than one
    group, a group whose interior is blank.
    """
    opens = text.count("[")
    closes = text.count("]")

    if opens > closes:
        return _fail("Missing closing bracket ]", "Add ] to close your options")
    if closes > opens:
        return _fail("Missing opening bracket [", "Add [ before your options")
    if opens > 1:
        return _fail(
            "Multiple brackets not supported",
            "Use only one [option1, option2] per prompt",
        )

    m = _GROUP_RE.search(text)
    if m and not m.group(1).strip():
        return _fail("Empty brackets", "Add options inside brackets: [option1, option2]")
    if opens == 1 and m is None:
        # "]...[" has equal counts but no group
        return _fail("Missing closing bracket ]", "Add ] after your options")
    return VALID


# ============================================================
# Pipelines
# ============================================================

def validate_pipeline(text: str, max_steps: int = 15) -> Validation:
    """
    Check | separated pipeline structure.

    A text without '|' is a single step and always valid here.
    """
    if PIPE not in text:
        return VALID

    if PIPE * 2 in text:
        return _fail("Double pipes (||) found", "Use single | to separate steps")

    steps = text.split(PIPE)
    for i, step in enumerate(steps, start=1):
        if not step.strip():
            return _fail(
                f"Empty step found at position {i}",
                "Remove empty steps or add content between | operators",
            )

    if len(steps) > max_steps:
        return _fail(
            f"Too many steps: {len(steps)}",
            f"Split into smaller pipelines (at most {max_steps} steps)",
        )
    return VALID


def split_steps(text: str) -> list[str]:
    """Split on '|' and trim each step; order is preserved, nothing is dropped."""
    return [step.strip() for step in text.split(PIPE)]
