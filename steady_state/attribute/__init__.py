from .declaration import (
    DeclarationOptions,
    StatesGetter,
    pluralize,
    scopes_by_default,
    state_machines,
    steady_state,
    steady_state_from,
    supports_query_filters,
)
from .interceptor import (
    AttributeTracking,
    DescriptorAccess,
    FieldAccess,
    InstanceDictAccess,
    StateAttribute,
    find_state_attribute,
    resolve_field_access,
)

__all__ = [
    "AttributeTracking",
    "DeclarationOptions",
    "DescriptorAccess",
    "FieldAccess",
    "InstanceDictAccess",
    "StateAttribute",
    "StatesGetter",
    "find_state_attribute",
    "pluralize",
    "resolve_field_access",
    "scopes_by_default",
    "state_machines",
    "steady_state",
    "steady_state_from",
    "supports_query_filters",
]
