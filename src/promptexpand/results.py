# -------------------------------------
# expansion results
# -------------------------------------
"""
Result records shared by every stage.

For a flat prompt `units` holds every expanded string. For a pipeline it
holds exactly one string per step (that step's first variant) and
`total_count` is the number of steps.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .errors import Diagnostic

if TYPE_CHECKING:
    from .kinds import PromptKind


@dataclass(frozen=True)
class ExpansionResult:
    is_valid: bool
    original_prompt: str
    units: tuple[str, ...] = ()
    is_pipeline: bool = False
    preview_count: int = 0
    total_count: int = 0
    warnings: tuple[str, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()
    kind: PromptKind | None = None
    steps: tuple[PipelineStep, ...] = ()
    wildcard_names: tuple[str, ...] = ()

    @classmethod
    def failure(
        cls,
        prompt: str,
        *diagnostics: Diagnostic,
        is_pipeline: bool = False,
        warnings: tuple[str, ...] = (),
        steps: tuple[PipelineStep, ...] = (),
        kind: PromptKind | None = None,
        wildcard_names: tuple[str, ...] = (),
    ) -> ExpansionResult:
        """Invalid result: no units, zero counts."""
        return cls(
            is_valid=False,
            original_prompt=prompt,
            is_pipeline=is_pipeline,
            warnings=tuple(warnings),
            diagnostics=tuple(diagnostics),
            kind=kind,
            steps=tuple(steps),
            wildcard_names=tuple(wildcard_names),
        )

    @property
    def errors(self) -> tuple[str, ...]:
        return tuple(str(d) for d in self.diagnostics)

    @property
    def preview(self) -> tuple[str, ...]:
        return self.units[: self.preview_count]

    @property
    def is_cross_combination(self) -> bool:
        return len(self.wildcard_names) > 1

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "is_valid": self.is_valid,
            "is_pipeline": self.is_pipeline,
            "original_prompt": self.original_prompt,
            "units": list(self.units),
            "preview_count": self.preview_count,
            "total_count": self.total_count,
            "warnings": list(self.warnings),
            "errors": [d.to_dict() for d in self.diagnostics],
        }
        if self.wildcard_names:
            d["wildcard_names"] = list(self.wildcard_names)
        if self.steps:
            d["steps"] = [
                {
                    "index": s.index,
                    "text": s.text,
                    "variants": s.variant_count,
                    "first_variant": s.first_variant,
                }
                for s in self.steps
            ]
        return d


@dataclass(frozen=True)
class PipelineStep:
    text: str
    index: int  # 1-based
    expansion_preview: ExpansionResult

    @property
    def variant_count(self) -> int:
        return len(self.expansion_preview.units)

    @property
    def first_variant(self) -> str | None:
        units = self.expansion_preview.units
        return units[0] if units else None
