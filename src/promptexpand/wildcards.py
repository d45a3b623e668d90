# -------------------------------------
# wildcard references and resolution
# -------------------------------------
"""
_name_ references and their resolution against a catalog snapshot.

    "A _character_ in _location_"  ->  ("character", "location")

Names are alphanumeric plus underscore. Resolution fails closed: a name
that is missing, or whose definition has no entries, is reported in
Resolution.missing and no expansion happens.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from .syntax import Validation

logger = logging.getLogger(__name__)

_REF_RE = re.compile(r"_([a-zA-Z0-9_]+)_")
_NAME_RE = re.compile(r"^[a-zA-Z0-9_]+$")

MAX_NAME_LENGTH = 50


# ============================================================
# Types
# ============================================================

@dataclass(frozen=True)
class WildcardDefinition:
    name: str
    entries: tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "entries", tuple(self.entries))

    @classmethod
    def from_content(cls, name: str, content: str) -> WildcardDefinition:
        """One entry per non-blank line of `content`."""
        return cls(name, parse_wildcard_content(content))

    @property
    def is_usable(self) -> bool:
        return len(self.entries) > 0


@dataclass(frozen=True)
class WildcardReference:
    name: str

    @property
    def token(self) -> str:
        return f"_{self.name}_"


@dataclass(frozen=True)
class Resolution:
    resolved: dict[str, tuple[str, ...]] = field(default_factory=dict)
    missing: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.missing


# ============================================================
# Parsing
# ============================================================

def parse_wildcard_content(content: str) -> tuple[str, ...]:
    """Split newline separated content into trimmed, non-empty entries."""
    if not content or not content.strip():
        return ()
    return tuple(line.strip() for line in content.splitlines() if line.strip())


def extract_names(text: str) -> list[str]:
    """Distinct referenced names, in first-seen order."""
    return list(dict.fromkeys(_REF_RE.findall(text)))


def extract_references(text: str) -> tuple[WildcardReference, ...]:
    return tuple(WildcardReference(n) for n in extract_names(text))


def has_references(text: str) -> bool:
    return _REF_RE.search(text) is not None


def validate_wildcard_name(name: str) -> Validation:
    if not name.strip():
        return Validation(False, "Name cannot be empty")
    if not _NAME_RE.match(name):
        return Validation(False, "Name can only contain letters, numbers, and underscores")
    if len(name) > MAX_NAME_LENGTH:
        return Validation(False, f"Name must be {MAX_NAME_LENGTH} characters or less")
    return Validation(True)


# ============================================================
# Resolution
# ============================================================

def _lookup(catalog) -> dict[str, tuple[str, ...]]:
    """Name -> entries; first definition of a name wins."""
    table: dict[str, tuple[str, ...]] = {}
    if isinstance(catalog, Mapping):
        for name, entries in catalog.items():
            if isinstance(entries, str):
                entries = parse_wildcard_content(entries)
            table.setdefault(str(name), tuple(entries or ()))
        return table
    for d in catalog or ():
        table.setdefault(d.name, d.entries)
    return table


def resolve(
    names: Iterable[str],
    catalog: Iterable[WildcardDefinition] | Mapping[str, Sequence[str]],
    *,
    fallback_to_name: bool = False,
) -> Resolution:
    """
    Map each name to its entries.

    Names without a usable definition go to `missing`. With
    fallback_to_name the legacy behaviour substitutes the bare name as the
    only entry, but the name is still listed in `missing`.
    """
    table = _lookup(catalog)
    resolved: dict[str, tuple[str, ...]] = {}
    missing: list[str] = []
    for name in names:
        entries = table.get(name, ())
        if entries:
            resolved[name] = entries
            continue
        missing.append(name)
        if fallback_to_name:
            logger.warning("wild card '_%s_' not found or empty, using its name", name)
            resolved[name] = (name,)
    return Resolution(resolved, tuple(missing))


def substitute(text: str, picks: Mapping[str, str]) -> str:
    """
    Replace every _name_ token with picks[name] in one pass.

    Tokens whose name is not in picks are left as they are.
    """
    return _REF_RE.sub(lambda m: picks.get(m.group(1), m.group(0)), text)
