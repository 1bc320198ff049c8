from __future__ import annotations

from typing import Any, Callable, Dict, Tuple, Type

from teamwork_mcp.core.params import (
    Arguments,
    Param,
    bind,
    optional_numeric_list_param,
    optional_numeric_param,
)
from teamwork_mcp.core.schema import integer_list, obj

from .models import UserGroups, comma_join


def page_params(filters: Any) -> Tuple[Param, Param]:
    """Extractors for the ``page`` / ``page_size`` pair of every list tool."""
    return (
        optional_numeric_param(filters, "page"),
        optional_numeric_param(filters, "page_size"),
    )


def legacy_id_list(ids: list) -> str:
    """Factory for optional_custom_numeric_list_param on legacy endpoints."""
    return comma_join(ids)


def user_groups_binder(
    model: Type[UserGroups] = UserGroups,
) -> Callable[[Arguments], UserGroups]:
    """Build function for an ``assignees`` object (user, company and team IDs)."""

    def build(arguments: Arguments) -> UserGroups:
        groups = model()
        bind(
            arguments,
            optional_numeric_list_param(groups, "user_ids"),
            optional_numeric_list_param(groups, "company_ids"),
            optional_numeric_list_param(groups, "team_ids"),
        )
        return groups

    return build


def user_groups_schema(description: str, entity: str) -> Dict[str, Any]:
    return obj(
        {
            "user_ids": integer_list(f"List of user IDs assigned to the {entity}."),
            "company_ids": integer_list(
                f"List of company IDs assigned to the {entity}."
            ),
            "team_ids": integer_list(f"List of team IDs assigned to the {entity}."),
        },
        description,
    )


__all__ = [
    "page_params",
    "legacy_id_list",
    "user_groups_binder",
    "user_groups_schema",
]
