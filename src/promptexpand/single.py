# -------------------------------------
# single-unit evaluation
# -------------------------------------
"""
Evaluate one prompt unit: resolve/expand according to its kind, then
combine. Used for flat prompts and for every pipeline step.
"""
from __future__ import annotations

from dataclasses import replace

from .brackets import expand_group
from .combinations import combine
from .config import DEFAULT_CONFIG, ExpansionConfig
from .errors import ExpansionError, UnresolvedReferenceError
from .kinds import Bracketed, Plain, UnitKind, Wildcarded, classify_unit
from .results import ExpansionResult
from .wildcards import resolve


def evaluate_unit(
    kind: UnitKind,
    catalog=(),
    config: ExpansionConfig = DEFAULT_CONFIG,
) -> ExpansionResult:
    if isinstance(kind, Plain):
        return ExpansionResult(
            is_valid=True,
            original_prompt=kind.text,
            units=(kind.text,),
            preview_count=1,
            total_count=1,
            kind=kind,
        )

    if isinstance(kind, Bracketed):
        try:
            units = tuple(expand_group(kind.group, config))
        except ExpansionError as e:
            return ExpansionResult.failure(kind.text, e.diagnostic, kind=kind)
        return ExpansionResult(
            is_valid=True,
            original_prompt=kind.text,
            units=units,
            preview_count=min(len(units), config.max_preview),
            total_count=len(units),
            kind=kind,
        )

    if isinstance(kind, Wildcarded):
        resolution = resolve(kind.names, catalog)
        if not resolution.ok:
            err = UnresolvedReferenceError(resolution.missing)
            return ExpansionResult.failure(
                kind.text, err.diagnostic, kind=kind, wildcard_names=kind.names
            )
        result = combine(kind.text, resolution.resolved, config)
        return replace(result, kind=kind)

    raise TypeError(f"not a prompt unit kind: {type(kind).__name__}")


def expand_unit(
    text: str,
    catalog=(),
    config: ExpansionConfig = DEFAULT_CONFIG,
) -> ExpansionResult:
    """Classify and evaluate a single unit; syntax errors yield an invalid result."""
    try:
        kind = classify_unit(text)
    except ExpansionError as e:
        return ExpansionResult.failure(text, e.diagnostic)
    return evaluate_unit(kind, catalog, config)
