from __future__ import annotations

from collections.abc import Callable
from typing import Any

from sqlalchemy import Select, select

QueryFilter = Callable[[Any], Any]

SCOPES_ATTR = "__query_scopes__"


class QueryScopes:
    """Named query filters for a mapped class.

    ``scope(name, fn)`` registers ``fn``, a callable that narrows a
    ``select()`` (or legacy ``Query``). The first registration of a name
    wins. ``scoped(name)`` applies a filter to ``select(cls)``.
    """

    __supports_scopes__ = True

    @classmethod
    def scope(cls, name: str, query_filter: QueryFilter) -> None:
        registered = cls.__dict__.get(SCOPES_ATTR)
        if registered is None:
            registered = {}
            setattr(cls, SCOPES_ATTR, registered)
        registered.setdefault(name, query_filter)

    @classmethod
    def query_scopes(cls) -> dict[str, QueryFilter]:
        collected: dict[str, QueryFilter] = {}
        for klass in reversed(cls.__mro__):
            collected.update(klass.__dict__.get(SCOPES_ATTR, {}))
        return collected

    @classmethod
    def scoped(cls, name: str, query: Any = None) -> Select[Any] | Any:
        query_filter = cls.query_scopes().get(name)
        if query_filter is None:
            raise ValueError(f"Scope not registered: {name}")
        if query is None:
            query = select(cls)
        return query_filter(query)
