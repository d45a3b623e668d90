# -------------------------------------
# wildcard catalog snapshots
# -------------------------------------
"""
Build the read-only catalog snapshot the engine works on.

Sources:
  - a mapping   {"character": ["knight", "wizard"], "mood": "happy\\nsad"}
  - definitions [WildcardDefinition("character", ("knight", "wizard")), ...]
  - a YAML file with the mapping form above
  - a directory of <name>.txt files, one entry per line

Order is preserved; the first definition of a name wins.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path

import yaml

from .errors import CatalogError
from .wildcards import WildcardDefinition, parse_wildcard_content, validate_wildcard_name

logger = logging.getLogger(__name__)

Catalog = tuple[WildcardDefinition, ...]


def _definition(name, entries) -> WildcardDefinition:
    if isinstance(entries, str):
        return WildcardDefinition.from_content(str(name), entries)
    if entries is None:
        return WildcardDefinition(str(name), ())
    if not isinstance(entries, Iterable):
        raise CatalogError(f"wild card '{name}' must be a list or a block of lines")
    return WildcardDefinition(str(name), tuple(str(e).strip() for e in entries if str(e).strip()))


def as_catalog(source) -> Catalog:
    """Normalise a mapping or an iterable of definitions into a Catalog."""
    if source is None:
        return ()
    if isinstance(source, Mapping):
        items = [_definition(k, v) for k, v in source.items()]
    else:
        items = []
        for d in source:
            if not isinstance(d, WildcardDefinition):
                raise CatalogError(f"not a WildcardDefinition: {d!r}")
            items.append(d)

    seen: set[str] = set()
    out = []
    for d in items:
        if d.name in seen:
            continue
        seen.add(d.name)
        out.append(d)
    return tuple(out)


def load_catalog(path: str | Path) -> Catalog:
    """
    Load a catalog from a YAML file or a directory of .txt files.

    Raises:
        FileNotFoundError: If the path doesn't exist
        yaml.YAMLError: If a YAML file is not valid YAML
        CatalogError: If the YAML does not describe a valid catalog
    """
    path = Path(path)
    if path.is_dir():
        return _load_directory(path)

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return ()
    if isinstance(data, Mapping) and "wildcards" in data:
        data = data["wildcards"]
    if not isinstance(data, Mapping):
        raise CatalogError(f"{path}: expected a mapping of wild card name -> entries")

    for name in data:
        check = validate_wildcard_name(str(name))
        if not check:
            raise CatalogError(f"{path}: invalid wild card name {name!r}: {check.error}")
    return as_catalog(data)


def _load_directory(path: Path) -> Catalog:
    out = []
    for p in sorted(path.glob("*.txt")):
        check = validate_wildcard_name(p.stem)
        if not check:
            logger.warning("skipping %s: %s", p.name, check.error)
            continue
        out.append(
            WildcardDefinition(p.stem, parse_wildcard_content(p.read_text(encoding="utf-8")))
        )
    return as_catalog(out)
