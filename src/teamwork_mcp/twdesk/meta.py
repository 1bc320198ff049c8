from __future__ import annotations

from typing import Any, Dict, Tuple

from teamwork_mcp.core.params import (
    Param,
    optional_numeric_param,
    optional_param,
    restrict_values,
)
from teamwork_mcp.core.schema import Schema, integer, string

from .models import DeskListQuery

API_PREFIX = "/desk/api/v2"

ORDER_DIRECTIONS = ("asc", "desc")


def desk_path(path: str) -> str:
    return f"{API_PREFIX}/{path.lstrip('/')}"


def pagination_properties() -> Dict[str, Schema]:
    return {
        "page": integer("The page number to retrieve."),
        "pageSize": integer("The number of results to retrieve per page."),
        "orderBy": string("The field to order the results by."),
        "orderDirection": string(
            "The direction to order the results by (asc, desc).",
            enum=ORDER_DIRECTIONS,
        ),
    }


def pagination_params(query: DeskListQuery) -> Tuple[Param, ...]:
    """Absent values keep the defaults: page 1, 10 per page, newest first."""
    return (
        optional_numeric_param(query, "page"),
        optional_numeric_param(query, "pageSize", attr="page_size"),
        optional_param(query, "orderBy", attr="order_by"),
        optional_param(
            query,
            "orderDirection",
            restrict_values(*ORDER_DIRECTIONS),
            attr="order_mode",
        ),
    )


def list_query(query: DeskListQuery, filters: Any) -> Dict[str, Any]:
    query.filter = filters.build()
    return query.query()


__all__ = [
    "API_PREFIX",
    "ORDER_DIRECTIONS",
    "desk_path",
    "pagination_properties",
    "pagination_params",
    "list_query",
]
