# -------------------------------------
# errors and diagnostics
# -------------------------------------
"""
Structured diagnostics for prompt expansion.

Every failure the engine can report is a Diagnostic (kind + message +
optional suggestion). Internally the layers raise ExpansionError subclasses
carrying a Diagnostic; the public entry points catch them and return an
invalid, empty result instead.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    SYNTAX = "syntax"
    UNRESOLVED_REFERENCE = "unresolved_reference"
    OVERFLOW = "overflow"


@dataclass(frozen=True)
class Diagnostic:
    kind: ErrorKind
    message: str
    suggestion: str | None = None

    def __str__(self) -> str:
        if self.suggestion:
            return f"{self.message} ({self.suggestion})"
        return self.message

    def prefixed(self, prefix: str) -> Diagnostic:
        """Same diagnostic with `prefix` in front of the message."""
        return Diagnostic(self.kind, f"{prefix}{self.message}", self.suggestion)

    def to_dict(self) -> dict[str, str | None]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "suggestion": self.suggestion,
        }


# ============================================================
# Exceptions
# ============================================================

class ExpansionError(ValueError):
    kind: ErrorKind = ErrorKind.SYNTAX

    def __init__(self, message: str, suggestion: str | None = None):
        super().__init__(message)
        self.diagnostic = Diagnostic(self.kind, message, suggestion)


class PromptSyntaxError(ExpansionError):
    kind = ErrorKind.SYNTAX


class UnresolvedReferenceError(ExpansionError):
    kind = ErrorKind.UNRESOLVED_REFERENCE

    def __init__(self, names, suggestion: str | None = None):
        self.names = tuple(names)
        tokens = ", ".join(f"_{n}_" for n in self.names)
        super().__init__(
            f"Missing wild cards: {tokens}",
            suggestion or "Create these wild cards or remove them from the prompt",
        )


class OptionOverflowError(ExpansionError):
    kind = ErrorKind.OVERFLOW


class ConfigError(ValueError):
    pass


class CatalogError(ValueError):
    pass
