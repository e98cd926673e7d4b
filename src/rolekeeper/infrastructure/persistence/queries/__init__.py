"""Query constraints based on role assignments."""

from rolekeeper.infrastructure.persistence.queries.roles_query import (
    RoleQuery,
    constrain_where_assigned_to,
    constrain_where_is,
    constrain_where_is_all,
    constrain_where_is_not,
)

__all__ = [
    "RoleQuery",
    "constrain_where_assigned_to",
    "constrain_where_is",
    "constrain_where_is_all",
    "constrain_where_is_not",
]
