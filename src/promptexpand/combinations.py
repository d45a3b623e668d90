# -------------------------------------
# wildcard cross-combinations
# -------------------------------------
"""
Cartesian product over resolved wildcard lists.

Names are ordered by first appearance in the prompt; the product iterates
the last name fastest:

    _character_ (knight, wizard) x _location_ (forest, castle)
      -> knight/forest, knight/castle, wizard/forest, wizard/castle

The combination count is computed from list sizes before anything is
generated, so a hard ceiling rejects without materialising the product.
"""
from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from itertools import product

from .config import DEFAULT_CONFIG, ExpansionConfig
from .errors import OptionOverflowError, UnresolvedReferenceError
from .results import ExpansionResult
from .wildcards import extract_names, substitute

logger = logging.getLogger(__name__)


def count_combinations(lists: Sequence[Sequence[str]]) -> int:
    if not lists:
        return 1
    return math.prod(len(x) for x in lists)


def threshold_warnings(total: int, config: ExpansionConfig = DEFAULT_CONFIG) -> list[str]:
    if total > config.danger_threshold:
        return [f"DANGER: {total} combinations will use significant credits!"]
    if total > config.warn_threshold:
        return [f"WARNING: {total} combinations detected"]
    return []


def generate_combinations(
    text: str,
    resolved: Mapping[str, Sequence[str]],
    names: Sequence[str] | None = None,
) -> list[str]:
    """
    Substitute every tuple of the product into `text`.

    Raises UnresolvedReferenceError if a referenced name has no entries.
    """
    if names is None:
        names = extract_names(text)
    if not names:
        return [text]

    missing = [n for n in names if not resolved.get(n)]
    if missing:
        raise UnresolvedReferenceError(missing)

    lists = [resolved[n] for n in names]
    out = []
    for picks in product(*lists):
        out.append(substitute(text, dict(zip(names, picks))).strip())
    return out


def combine(
    text: str,
    resolved: Mapping[str, Sequence[str]],
    config: ExpansionConfig = DEFAULT_CONFIG,
) -> ExpansionResult:
    """Flat expansion of a wildcarded prompt unit."""
    names = tuple(extract_names(text))
    if not names:
        return ExpansionResult(
            is_valid=True,
            original_prompt=text,
            units=(text,),
            preview_count=1,
            total_count=1,
        )

    missing = [n for n in names if not resolved.get(n)]
    if missing:
        err = UnresolvedReferenceError(missing)
        return ExpansionResult.failure(text, err.diagnostic, wildcard_names=names)

    total = count_combinations([resolved[n] for n in names])
    logger.debug("%d wild cards -> %d combinations", len(names), total)

    if config.enforce_thresholds and total > config.danger_threshold:
        err = OptionOverflowError(
            f"Too many combinations: {total} (limit {config.danger_threshold})",
            "Shorten the wild card lists or use fewer wild cards in one prompt",
        )
        return ExpansionResult.failure(text, err.diagnostic, wildcard_names=names)

    units = tuple(generate_combinations(text, resolved, names))

    warnings = threshold_warnings(total, config)
    if len(names) > 1:
        warnings.append(f"Cross-combination: {len(names)} wild cards combined")

    return ExpansionResult(
        is_valid=True,
        original_prompt=text,
        units=units,
        preview_count=min(len(units), config.max_preview),
        total_count=total,
        warnings=tuple(warnings),
        wildcard_names=names,
    )
