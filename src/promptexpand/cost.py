# -------------------------------------
# cost estimation
# -------------------------------------
"""
Turn an ExpansionResult into a generation count and a cost.

Flat prompts cost per_unit * (cartesian product size). Pipelines cost
per_unit * (number of steps), whatever the unused variants of a step.
The breakdown has one line per unit (or per step) for line-item display.
"""
from __future__ import annotations

import ast
import operator as op
from dataclasses import dataclass

from simpleeval import SimpleEval, safe_power

from .errors import ConfigError
from .results import ExpansionResult

# ============================================================
# Scalar cost expressions
# ============================================================

ALLOWED_OPS = {
    ast.Add: op.add,
    ast.Sub: op.sub,
    ast.Mult: op.mul,
    ast.Div: op.truediv,
    ast.Pow: safe_power,
    ast.USub: op.neg,
    ast.UAdd: op.pos,
}


def parse_cost(value) -> float:
    """
    Per-unit cost from a number or an arithmetic string ("4/100", "2*0.5").

    Raises ConfigError for anything that is not a non-negative number.
    """
    if isinstance(value, bool):
        raise ConfigError(f"invalid cost: {value!r}")
    if isinstance(value, (int, float)):
        v = float(value)
    else:
        expr = str(value).strip()
        if not expr:
            raise ConfigError("empty cost expression")
        se = SimpleEval(names={}, functions={}, operators=ALLOWED_OPS)
        try:
            v = float(se.eval(expr))
        except Exception as e:
            raise ConfigError(f"invalid cost expression {expr!r}: {e}") from e
    if v < 0:
        raise ConfigError(f"cost must not be negative, got {v}")
    return v


# ============================================================
# Estimates
# ============================================================

@dataclass(frozen=True)
class CostLine:
    index: int  # 1-based unit or step number
    cost: float
    source_text: str


@dataclass(frozen=True)
class CostEstimate:
    total_cost: float
    per_unit: float
    breakdown: tuple[CostLine, ...] = ()

    @property
    def unit_count(self) -> int:
        return len(self.breakdown)

    def to_dict(self) -> dict:
        return {
            "total_cost": self.total_cost,
            "per_unit": self.per_unit,
            "unit_count": self.unit_count,
            "breakdown": [
                {"index": b.index, "cost": b.cost, "source_text": b.source_text}
                for b in self.breakdown
            ],
        }


def estimate(result: ExpansionResult, per_unit_cost) -> CostEstimate:
    per_unit = parse_cost(per_unit_cost)
    if not result.is_valid:
        return CostEstimate(0.0, per_unit)

    if result.is_pipeline:
        lines = tuple(CostLine(s.index, per_unit, s.text) for s in result.steps)
    else:
        lines = tuple(
            CostLine(i, per_unit, text) for i, text in enumerate(result.units, start=1)
        )
    return CostEstimate(per_unit * result.total_count, per_unit, lines)
