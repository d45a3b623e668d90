# -------------------------------------
# prompt kinds (parser output)
# -------------------------------------
"""
A prompt is classified once into one of:

  - Plain(text)                      no syntax at all
  - Bracketed(text, group)           a single [ ... ] group
  - Wildcarded(text, refs)           one or more _name_ references
  - Pipeline(text, steps)            | separated steps, each a unit kind

Precedence inside one unit: wildcard references win, and any bracket text
in a wildcarded unit stays literal.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from .brackets import BracketGroup, find_bracket_group
from .config import DEFAULT_CONFIG, ExpansionConfig
from .errors import PromptSyntaxError
from .syntax import PIPE, split_steps, validate_brackets, validate_pipeline
from .wildcards import WildcardReference, extract_references

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Plain:
    text: str


@dataclass(frozen=True)
class Bracketed:
    text: str
    group: BracketGroup


@dataclass(frozen=True)
class Wildcarded:
    text: str
    refs: tuple[WildcardReference, ...]

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(r.name for r in self.refs)


UnitKind = Union[Plain, Bracketed, Wildcarded]


@dataclass(frozen=True)
class Pipeline:
    text: str
    steps: tuple[UnitKind, ...]


PromptKind = Union[Plain, Bracketed, Wildcarded, Pipeline]


def classify_unit(text: str) -> UnitKind:
    """Classify a single (non-pipeline) prompt unit."""
    refs = extract_references(text)
    if refs:
        return Wildcarded(text, refs)

    check = validate_brackets(text)
    if not check:
        raise PromptSyntaxError(check.error, check.suggestion)
    if "[" in text:
        return Bracketed(text, find_bracket_group(text))
    return Plain(text)


def classify(text: str, config: ExpansionConfig = DEFAULT_CONFIG) -> PromptKind:
    """
    Classify a whole prompt.

    Pipeline structure is checked before any step is looked at; a
    malformed step raises with its 1-based position in the message.
    """
    if PIPE not in text:
        kind = classify_unit(text)
        logger.debug("classified prompt as %s", type(kind).__name__)
        return kind

    check = validate_pipeline(text, config.max_pipeline_steps)
    if not check:
        raise PromptSyntaxError(check.error, check.suggestion)

    steps = []
    for i, step in enumerate(split_steps(text), start=1):
        try:
            steps.append(classify_unit(step))
        except PromptSyntaxError as e:
            raise PromptSyntaxError(f"Step {i}: {e.diagnostic.message}", e.diagnostic.suggestion) from e
    logger.debug("classified prompt as Pipeline with %d steps", len(steps))
    return Pipeline(text, tuple(steps))
