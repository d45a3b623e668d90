# -------------------------------------
# | pipelines (image-to-image chaining)
# -------------------------------------
"""
Parse "step one | step two | step three" into ordered steps.

Each step is evaluated on its own (brackets and wildcards work inside a
step), but only the first variant of each step is chained. The pipeline
costs one generation per step: counts add across steps, they never
multiply.
"""
from __future__ import annotations

import logging

from .config import DEFAULT_CONFIG, ExpansionConfig
from .errors import ExpansionError
from .kinds import Pipeline, classify
from .results import ExpansionResult, PipelineStep
from .single import evaluate_unit, expand_unit
from .syntax import PIPE

logger = logging.getLogger(__name__)

COSTLY_PIPELINE_STEPS = 5
LONG_PIPELINE_STEPS = 10


def parse_pipeline(
    text: str,
    catalog=(),
    config: ExpansionConfig = DEFAULT_CONFIG,
) -> ExpansionResult:
    """
    Expand a | separated prompt.

    A text without '|' is evaluated as a single unit and the result is not
    marked as a pipeline.
    """
    if PIPE not in text:
        return expand_unit(text, catalog, config)
    try:
        kind = classify(text, config)
    except ExpansionError as e:
        return ExpansionResult.failure(text, e.diagnostic, is_pipeline=True)
    return evaluate_pipeline(kind, catalog, config)


def evaluate_pipeline(
    kind: Pipeline,
    catalog=(),
    config: ExpansionConfig = DEFAULT_CONFIG,
) -> ExpansionResult:
    steps: list[PipelineStep] = []
    warnings: list[str] = []
    diagnostics = []

    for i, step_kind in enumerate(kind.steps, start=1):
        r = evaluate_unit(step_kind, catalog, config)
        steps.append(PipelineStep(step_kind.text, i, r))

        warnings.extend(f"Step {i}: {w}" for w in r.warnings)
        diagnostics.extend(d.prefixed(f"Step {i}: ") for d in r.diagnostics)

        if len(r.units) > 1:
            warnings.append(
                f"Step {i} has {len(r.units)} variations but only first will be used in pipeline"
            )

    n = len(steps)
    if n > LONG_PIPELINE_STEPS:
        warnings.append(f"Long pipeline detected: {n} steps may take significant time")
    if n > COSTLY_PIPELINE_STEPS:
        warnings.append(f"{n}-step pipeline will use {n} generations")

    if diagnostics:
        logger.debug("pipeline rejected: %d step errors", len(diagnostics))
        return ExpansionResult.failure(
            kind.text,
            *diagnostics,
            is_pipeline=True,
            warnings=tuple(warnings),
            steps=tuple(steps),
            kind=kind,
        )

    return ExpansionResult(
        is_valid=True,
        original_prompt=kind.text,
        units=tuple(s.first_variant for s in steps),
        is_pipeline=True,
        preview_count=min(n, config.max_preview),
        total_count=n,
        warnings=tuple(warnings),
        kind=kind,
        steps=tuple(steps),
    )


def get_execution_prompts(result: ExpansionResult) -> list[str]:
    """
    Strings to hand to the generation backend, in order.

    For a pipeline that is one first-variant string per step; for a flat
    result every unit. Invalid results give nothing.
    """
    if not result.is_valid:
        return []
    if result.is_pipeline:
        return [s.first_variant for s in result.steps]
    return list(result.units)


def describe(result: ExpansionResult) -> str:
    if not result.is_pipeline:
        return "Single generation"
    if not result.is_valid:
        return "Invalid pipeline syntax"
    n = result.total_count
    return f"{n}-step pipeline → {n} image{'' if n == 1 else 's'}"
