# -------------------------------------
# expand(): the engine entry point
# -------------------------------------
"""
expand(prompt, catalog, config) -> ExpansionResult

Pure and synchronous: the wildcard catalog is a snapshot passed in by the
caller, nothing is cached between calls, and every failure comes back as
an invalid result with no units.

    >>> expand("A [red, blue] car").units
    ('A red car', 'A blue car')
    >>> expand("_hero_ waves", {"hero": ["knight", "wizard"]}).units
    ('knight waves', 'wizard waves')
    >>> expand("sketch | ink | color").total_count
    3
"""
from __future__ import annotations

import logging

from .catalog import as_catalog
from .config import DEFAULT_CONFIG, ExpansionConfig
from .cost import CostEstimate, estimate
from .errors import ExpansionError
from .kinds import Pipeline, PromptKind, classify
from .pipeline import evaluate_pipeline
from .results import ExpansionResult
from .single import evaluate_unit
from .syntax import PIPE

logger = logging.getLogger(__name__)


def evaluate(kind: PromptKind, catalog=(), config: ExpansionConfig = DEFAULT_CONFIG) -> ExpansionResult:
    if isinstance(kind, Pipeline):
        return evaluate_pipeline(kind, catalog, config)
    return evaluate_unit(kind, catalog, config)


def expand(
    prompt: str,
    catalog=(),
    config: ExpansionConfig | None = None,
) -> ExpansionResult:
    """
    Expand `prompt` into the exact strings to generate.

    Args:
        prompt: Raw prompt text
        catalog: Wildcard snapshot: WildcardDefinitions or a name -> entries mapping
        config: Limits and thresholds (defaults when None)
    """
    config = config or DEFAULT_CONFIG
    snapshot = as_catalog(catalog)
    try:
        kind = classify(prompt, config)
    except ExpansionError as e:
        logger.debug("rejected prompt: %s", e)
        return ExpansionResult.failure(prompt, e.diagnostic, is_pipeline=PIPE in prompt)

    result = evaluate(kind, snapshot, config)
    logger.debug(
        "expanded %s prompt: valid=%s total=%d",
        type(kind).__name__, result.is_valid, result.total_count,
    )
    return result


def expand_with_cost(
    prompt: str,
    catalog=(),
    config: ExpansionConfig | None = None,
    per_unit_cost=None,
) -> tuple[ExpansionResult, CostEstimate | None]:
    """
    expand() plus a CostEstimate.

    The per-unit cost comes from the argument, else config.per_unit_cost;
    with neither the estimate is None.
    """
    config = config or DEFAULT_CONFIG
    result = expand(prompt, catalog, config)
    if per_unit_cost is None:
        per_unit_cost = config.per_unit_cost
    if per_unit_cost is None:
        return result, None
    return result, estimate(result, per_unit_cost)
