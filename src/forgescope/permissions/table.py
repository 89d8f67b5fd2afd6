"""The endpoint permission table and its merge operation.

A ``PermissionTable`` maps ``(url_template, method)`` to the set of scopes
the API specification lists for that operation. An operation whose
specification lists no scopes maps to an empty set; an operation the
specification does not declare has no key at all. The two cases stay
distinguishable for the matcher.

Tables are read-only once constructed, so a single table can serve any
number of concurrent lookups.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from enum import Enum

from forgescope.permissions.patterns import compile_endpoint

TableKey = tuple[str, "Method"]


class Method(str, Enum):
    """HTTP methods that carry scope annotations."""

    GET = "get"
    PUT = "put"
    POST = "post"
    PATCH = "patch"
    DELETE = "delete"

    @classmethod
    def parse(cls, value: str | Method) -> Method | None:
        """Parse a method name case-insensitively; None if unsupported."""
        if isinstance(value, Method):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


class PermissionTable(Mapping[TableKey, frozenset[str]]):
    """Immutable mapping of ``(template, method)`` to required scopes.

    Examples:
        >>> table = PermissionTable({("/rest/api/3/myself", Method.GET): {"read:jira-user"}})
        >>> table["/rest/api/3/myself", Method.GET]
        frozenset({'read:jira-user'})
    """

    def __init__(self, entries: Mapping[TableKey, Iterable[str]] | None = None) -> None:
        self._entries: dict[TableKey, frozenset[str]] = {
            (template, method): frozenset(scopes)
            for (template, method), scopes in (entries or {}).items()
        }

    def __getitem__(self, key: TableKey) -> frozenset[str]:
        return self._entries[key]

    def __iter__(self) -> Iterator[TableKey]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"PermissionTable({len(self._entries)} entries)"

    def templates(self) -> list[str]:
        """Return the distinct templates in table order."""
        return list(dict.fromkeys(template for template, _ in self._entries))

    def pattern(self, template: str) -> re.Pattern[str]:
        """Return the compiled matching pattern for a template."""
        return compile_endpoint(template)


def merge(*tables: PermissionTable) -> PermissionTable:
    """Merge tables by key union.

    A key present in several tables maps to the union of their scope sets.
    The operation is associative and commutative.
    """
    merged: dict[TableKey, frozenset[str]] = {}
    for table in tables:
        for key, scopes in table.items():
            merged[key] = merged.get(key, frozenset()) | scopes
    return PermissionTable(merged)
