from .scopes import QueryFilter, QueryScopes

__all__ = ["QueryFilter", "QueryScopes"]
