"""
Request models for the Teamwork Desk v2 API.

Desk list endpoints take one JSON ``filter`` query parameter (see
``DeskFilter``) plus ``page``/``pageSize``/``orderBy``/``orderMode``. Entity
references in request bodies are ``{"id": n}`` objects.
"""

from __future__ import annotations

import json
from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer


def _reference(value: int) -> Dict[str, int]:
    return {"id": value}


Reference = Annotated[int, PlainSerializer(_reference)]


class DeskModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    def body(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class DeskFilter:
    """
    Builder for the Desk ``filter`` query parameter:

        DeskFilter().in_("inboxes.id", [1, 2]).eq("shared", True).build()
        # '{"inboxes.id": {"$in": [1, 2]}, "shared": {"$eq": true}}'
    """

    def __init__(self) -> None:
        self._conditions: Dict[str, Dict[str, Any]] = {}

    def in_(self, field: str, values: Optional[List[Any]]) -> "DeskFilter":
        if values:
            self._conditions[field] = {"$in": list(values)}
        return self

    def eq(self, field: str, value: Any) -> "DeskFilter":
        if value is not None:
            self._conditions[field] = {"$eq": value}
        return self

    def build(self) -> Optional[str]:
        if not self._conditions:
            return None
        return json.dumps(self._conditions)


class DeskListQuery(DeskModel):
    page: int = 1
    page_size: int = Field(default=10, alias="pageSize")
    order_by: str = Field(default="createdAt", alias="orderBy")
    order_mode: str = Field(default="desc", alias="orderMode")
    filter: Optional[str] = None

    def query(self) -> Dict[str, Any]:
        return self.body()


class PathID(DeskModel):
    id: Optional[int] = None


# --- Tickets -------------------------------------------------------------- #


class TicketFilters(DeskModel):
    inbox_ids: Optional[List[int]] = None
    customer_ids: Optional[List[int]] = None
    company_ids: Optional[List[int]] = None
    tag_ids: Optional[List[int]] = None
    task_ids: Optional[List[int]] = None
    project_ids: Optional[List[int]] = None
    status_ids: Optional[List[int]] = None
    priority_ids: Optional[List[int]] = None
    sla_ids: Optional[List[int]] = None
    user_ids: Optional[List[int]] = None
    shared: Optional[bool] = None
    sla_breached: Optional[bool] = None

    def build(self) -> Optional[str]:
        f = (
            DeskFilter()
            .in_("inboxes.id", self.inbox_ids)
            .in_("customers.id", self.customer_ids)
            .in_("companies.id", self.company_ids)
            .in_("tags.id", self.tag_ids)
            .in_("tasks.id", self.task_ids)
            .in_("projects.id", self.project_ids)
            .in_("statuses.id", self.status_ids)
            .in_("priorities.id", self.priority_ids)
            .in_("slas.id", self.sla_ids)
            .in_("users.id", self.user_ids)
        )
        # only the positive form narrows the result set
        if self.shared:
            f.eq("shared", True)
        if self.sla_breached:
            f.eq("sla_breached", True)
        return f.build()


class TicketRequest(DeskModel):
    id: Optional[int] = Field(default=None, exclude=True)
    subject: Optional[str] = None
    description: Optional[str] = Field(default=None, alias="body")
    priority_id: Optional[Reference] = Field(default=None, alias="priority")
    status_id: Optional[Reference] = Field(default=None, alias="status")
    type_id: Optional[Reference] = Field(default=None, alias="type")
    inbox_id: Optional[Reference] = Field(default=None, alias="inbox")
    customer_id: Optional[Reference] = Field(default=None, alias="customer")


# --- Statuses, priorities, tags and ticket types --------------------------- #


class NamedFilters(DeskModel):
    name: Optional[List[str]] = None
    color: Optional[List[str]] = None
    code: Optional[List[str]] = None
    inbox_ids: Optional[List[int]] = None

    def build(self) -> Optional[str]:
        return (
            DeskFilter()
            .in_("name", self.name)
            .in_("color", self.color)
            .in_("code", self.code)
            .in_("inboxes.id", self.inbox_ids)
            .build()
        )


class StatusRequest(DeskModel):
    id: Optional[int] = Field(default=None, exclude=True)
    name: Optional[str] = None
    color: Optional[str] = None
    display_order: Optional[int] = Field(default=None, alias="displayOrder")


class PriorityRequest(DeskModel):
    id: Optional[int] = Field(default=None, exclude=True)
    name: Optional[str] = None
    color: Optional[str] = None


class TagFilters(DeskModel):
    name: Optional[str] = None
    color: Optional[str] = None
    inbox_ids: Optional[List[int]] = None

    def build(self) -> Optional[str]:
        return (
            DeskFilter()
            .eq("name", self.name)
            .eq("color", self.color)
            .in_("inboxes.id", self.inbox_ids)
            .build()
        )


class TagRequest(DeskModel):
    id: Optional[int] = Field(default=None, exclude=True)
    name: Optional[str] = None
    color: Optional[str] = None


class TicketTypeRequest(DeskModel):
    id: Optional[int] = Field(default=None, exclude=True)
    name: Optional[str] = None
    display_order: Optional[int] = Field(default=None, alias="displayOrder")
    enabled_for_future_inboxes: Optional[bool] = Field(
        default=None, alias="enabledForFutureInboxes"
    )


# --- Companies and customers ---------------------------------------------- #


class CompanyFilters(DeskModel):
    name: Optional[str] = None
    kind: Optional[str] = None
    domains: Optional[List[str]] = None

    def build(self) -> Optional[str]:
        return (
            DeskFilter()
            .eq("name", self.name)
            .eq("kind", self.kind)
            .in_("domains", self.domains)
            .build()
        )


class CompanyRequest(DeskModel):
    id: Optional[int] = Field(default=None, exclude=True)
    name: Optional[str] = None
    description: Optional[str] = None
    details: Optional[str] = None
    industry: Optional[str] = None
    website: Optional[str] = None
    permission: Optional[str] = None
    kind: Optional[str] = None
    note: Optional[str] = None
    # sent as included domain entities next to the company
    domains: Optional[List[str]] = Field(default=None, exclude=True)

    def envelope(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"company": self.body()}
        if self.domains:
            payload["included"] = {"domains": [{"name": d} for d in self.domains]}
        return payload


class CustomerFilters(DeskModel):
    company_ids: Optional[List[int]] = None
    company_names: Optional[List[str]] = None
    emails: Optional[List[str]] = None

    def build(self) -> Optional[str]:
        return (
            DeskFilter()
            .in_("companies.id", self.company_ids)
            .in_("companies.name", self.company_names)
            .in_("contacts.value", self.emails)
            .build()
        )


class CustomerRequest(DeskModel):
    id: Optional[int] = Field(default=None, exclude=True)
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    email: Optional[str] = None
    organization: Optional[str] = None
    extra_data: Optional[str] = Field(default=None, alias="extraData")
    notes: Optional[str] = None
    linkedin_url: Optional[str] = Field(default=None, alias="linkedinURL")
    facebook_url: Optional[str] = Field(default=None, alias="facebookURL")
    twitter_handle: Optional[str] = Field(default=None, alias="twitterHandle")
    job_title: Optional[str] = Field(default=None, alias="jobTitle")
    phone: Optional[str] = None
    mobile: Optional[str] = None
    address: Optional[str] = None
    trusted: Optional[bool] = None


# --- Users and inboxes ---------------------------------------------------- #


class UserFilters(DeskModel):
    first_names: Optional[List[str]] = None
    last_names: Optional[List[str]] = None
    emails: Optional[List[str]] = None
    inbox_ids: Optional[List[int]] = None
    part_time: Optional[bool] = None

    def build(self) -> Optional[str]:
        f = (
            DeskFilter()
            .in_("firstName", self.first_names)
            .in_("lastName", self.last_names)
            .in_("email", self.emails)
            .in_("inboxes.id", self.inbox_ids)
        )
        if self.part_time:
            f.eq("isPartTime", True)
        return f.build()


class InboxFilters(DeskModel):
    names: Optional[List[str]] = None
    emails: Optional[List[str]] = None

    def build(self) -> Optional[str]:
        return DeskFilter().in_("name", self.names).in_("email", self.emails).build()


# --- Messages and files --------------------------------------------------- #


class MessageRequest(DeskModel):
    ticket_id: Optional[int] = Field(default=None, exclude=True)
    content: Optional[str] = Field(default=None, alias="body")


class FileRequest(DeskModel):
    filename: Optional[str] = None
    mime_type: Optional[str] = Field(default=None, alias="mimeType")
    disposition: str = "attachment"
    type: str = "attachment"
    # base64 content, uploaded separately once the file record exists
    data: Optional[str] = Field(default=None, exclude=True)
