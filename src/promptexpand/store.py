# -------------------------------------
# wildcard store (collaborator)
# -------------------------------------
"""
Per-user wildcard storage.

The engine never talks to a store; callers fetch a snapshot with
get_definitions_for_user() and pass it to expand(). InMemoryWildcardStore
is a small reference implementation of that interface.
"""
from __future__ import annotations

from dataclasses import dataclass
from itertools import count
from typing import Protocol

import yaml

from .errors import CatalogError
from .wildcards import WildcardDefinition, parse_wildcard_content, validate_wildcard_name


class WildcardStore(Protocol):
    def get_definitions_for_user(self, user_id: str) -> list[WildcardDefinition]: ...


@dataclass
class StoredWildcard:
    id: str
    user_id: str
    name: str
    content: str
    category: str = "general"

    def definition(self) -> WildcardDefinition:
        return WildcardDefinition(self.name, parse_wildcard_content(self.content))


class InMemoryWildcardStore:
    def __init__(self):
        self._items: dict[str, StoredWildcard] = {}
        self._ids = count(1)

    def _check_name(self, user_id: str, name: str, exclude_id: str | None = None) -> None:
        check = validate_wildcard_name(name)
        if not check:
            raise CatalogError(check.error)
        for item in self._items.values():
            if item.user_id == user_id and item.name == name and item.id != exclude_id:
                raise CatalogError(f"wild card '{name}' already exists")

    def save(self, user_id: str, name: str, content: str, category: str = "general") -> StoredWildcard:
        self._check_name(user_id, name)
        item = StoredWildcard(f"wc_{next(self._ids)}", user_id, name, content, category)
        self._items[item.id] = item
        return item

    def get(self, wildcard_id: str) -> StoredWildcard | None:
        return self._items.get(wildcard_id)

    def update(self, wildcard_id: str, **changes) -> StoredWildcard | None:
        item = self._items.get(wildcard_id)
        if item is None:
            return None
        unknown = set(changes) - {"name", "content", "category"}
        if unknown:
            raise CatalogError(f"cannot update fields: {sorted(unknown)}")
        if "name" in changes:
            self._check_name(item.user_id, changes["name"], exclude_id=item.id)
        for k, v in changes.items():
            setattr(item, k, v)
        return item

    def delete(self, wildcard_id: str) -> bool:
        return self._items.pop(wildcard_id, None) is not None

    def get_definitions_for_user(self, user_id: str) -> list[WildcardDefinition]:
        """Definitions in creation order."""
        return [i.definition() for i in self._items.values() if i.user_id == user_id]

    def export_yaml(self, user_id: str) -> str:
        """Catalog of one user in the YAML form load_catalog() reads."""
        data = {d.name: list(d.entries) for d in self.get_definitions_for_user(user_id)}
        return yaml.safe_dump({"wildcards": data}, sort_keys=False, allow_unicode=True)
