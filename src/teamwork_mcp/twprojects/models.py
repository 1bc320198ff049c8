"""
Request models for the Teamwork.com Projects API.

Handlers create an empty model, fill it with ``bind`` and serialize it with
``body()`` (JSON payload) or ``query()`` (query string). Path parameters are
plain fields excluded from serialization.
"""

from __future__ import annotations

import datetime as dt
from typing import Annotated, Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, model_serializer


def _legacy_date(value: dt.date) -> str:
    return value.strftime("%Y%m%d")


def _time_only(value: dt.time) -> str:
    return value.strftime("%H:%M:%S")


def comma_join(values: Iterable[Any]) -> str:
    return ",".join(str(v) for v in values)


LegacyDate = Annotated[dt.date, PlainSerializer(_legacy_date, return_type=str)]
TimeOnly = Annotated[dt.time, PlainSerializer(_time_only, return_type=str)]
CommaSeparatedIDs = Annotated[List[int], PlainSerializer(comma_join, return_type=str)]
CommaSeparated = Annotated[List[str], PlainSerializer(comma_join, return_type=str)]


class RequestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    def body(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")

    def query(self) -> Dict[str, Any]:
        return self.body()


class ListFilters(RequestModel):
    search_term: Optional[str] = Field(default=None, alias="searchTerm")
    page: Optional[int] = None
    page_size: Optional[int] = Field(default=None, alias="pageSize")


# --- Shared --------------------------------------------------------------- #


class PathID(RequestModel):
    """Single numeric path parameter (get and delete tools)."""

    id: Optional[int] = None
    project_id: Optional[int] = None
    tasklist_id: Optional[int] = None
    task_id: Optional[int] = None
    company_id: Optional[int] = None


class UserGroups(RequestModel):
    user_ids: Optional[List[int]] = Field(default=None, alias="userIds")
    company_ids: Optional[List[int]] = Field(default=None, alias="companyIds")
    team_ids: Optional[List[int]] = Field(default=None, alias="teamIds")

    def is_empty(self) -> bool:
        return not (self.user_ids or self.company_ids or self.team_ids)


class LegacyUserGroups(UserGroups):
    """Assignees for the legacy endpoints: ``"1,2,c3,t4"`` (c = company, t = team)."""

    @model_serializer
    def _serialize(self) -> str:
        ids = [str(i) for i in self.user_ids or []]
        ids += [f"c{i}" for i in self.company_ids or []]
        ids += [f"t{i}" for i in self.team_ids or []]
        return ",".join(ids)


# --- Projects ------------------------------------------------------------- #


class ProjectCreateRequest(RequestModel):
    name: Optional[str] = None
    description: Optional[str] = None
    start_at: Optional[LegacyDate] = Field(default=None, alias="start-date")
    end_at: Optional[LegacyDate] = Field(default=None, alias="end-date")
    company_id: Optional[int] = Field(default=None, alias="companyId")
    owner_id: Optional[int] = Field(default=None, alias="projectOwnerId")
    tag_ids: Optional[List[int]] = Field(default=None, alias="tagIds")


class ProjectUpdateRequest(ProjectCreateRequest):
    id: Optional[int] = Field(default=None, exclude=True)


class ProjectListFilters(ListFilters):
    tag_ids: Optional[CommaSeparatedIDs] = Field(default=None, alias="projectTagIds")
    match_all_tags: Optional[bool] = Field(default=None, alias="matchAllProjectTags")


# --- Tasklists ------------------------------------------------------------ #


class TasklistCreateRequest(RequestModel):
    project_id: Optional[int] = Field(default=None, exclude=True)
    name: Optional[str] = None
    description: Optional[str] = None
    milestone_id: Optional[int] = Field(default=None, alias="milestone-Id")


class TasklistUpdateRequest(RequestModel):
    id: Optional[int] = Field(default=None, exclude=True)
    name: Optional[str] = None
    description: Optional[str] = None
    milestone_id: Optional[int] = Field(default=None, alias="milestone-Id")


# --- Tasks ---------------------------------------------------------------- #


class TaskPredecessor(RequestModel):
    task_id: Optional[int] = Field(default=None, alias="id")
    type: Optional[str] = None


class TaskCreateRequest(RequestModel):
    tasklist_id: Optional[int] = Field(default=None, exclude=True)
    name: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    progress: Optional[int] = None
    start_date: Optional[dt.date] = Field(default=None, alias="startAt")
    due_date: Optional[dt.date] = Field(default=None, alias="dueAt")
    estimated_minutes: Optional[int] = Field(default=None, alias="estimatedMinutes")
    parent_task_id: Optional[int] = Field(default=None, alias="parentTaskId")
    tag_ids: Optional[List[int]] = Field(default=None, alias="tagIds")
    assignees: Optional[UserGroups] = None
    predecessors: Optional[List[TaskPredecessor]] = None


class TaskUpdateRequest(TaskCreateRequest):
    id: Optional[int] = Field(default=None, exclude=True)
    tasklist_id: Optional[int] = Field(default=None, alias="tasklistId")


class TaggedListFilters(ListFilters):
    tag_ids: Optional[CommaSeparatedIDs] = Field(default=None, alias="tagIds")
    match_all_tags: Optional[bool] = Field(default=None, alias="matchAllTags")


# --- Tags ----------------------------------------------------------------- #


class TagCreateRequest(RequestModel):
    name: Optional[str] = None
    project_id: Optional[int] = Field(default=None, alias="projectId")


class TagUpdateRequest(TagCreateRequest):
    id: Optional[int] = Field(default=None, exclude=True)


class TagListFilters(ListFilters):
    item_type: Optional[str] = Field(default=None, alias="itemType")
    project_ids: Optional[CommaSeparatedIDs] = Field(default=None, alias="projectIds")


# --- Milestones ----------------------------------------------------------- #


class MilestoneCreateRequest(RequestModel):
    project_id: Optional[int] = Field(default=None, exclude=True)
    name: Optional[str] = Field(default=None, alias="title")
    description: Optional[str] = None
    due_date: Optional[LegacyDate] = Field(default=None, alias="deadline")
    tasklist_ids: Optional[List[int]] = Field(default=None, alias="tasklistIds")
    tag_ids: Optional[List[int]] = Field(default=None, alias="tagIds")
    assignees: Optional[LegacyUserGroups] = Field(
        default=None, alias="responsible-party-ids"
    )


class MilestoneUpdateRequest(MilestoneCreateRequest):
    id: Optional[int] = Field(default=None, exclude=True)


# --- Users ---------------------------------------------------------------- #


class UserCreateRequest(RequestModel):
    first_name: Optional[str] = Field(default=None, alias="first-name")
    last_name: Optional[str] = Field(default=None, alias="last-name")
    title: Optional[str] = None
    email: Optional[str] = Field(default=None, alias="email-address")
    admin: Optional[bool] = Field(default=None, alias="administrator")
    type: Optional[str] = Field(default=None, alias="user-type")
    company_id: Optional[int] = Field(default=None, alias="company-id")


class UserUpdateRequest(UserCreateRequest):
    id: Optional[int] = Field(default=None, exclude=True)


class UserListFilters(ListFilters):
    type: Optional[str] = Field(default=None, alias="userType")


# --- Teams ---------------------------------------------------------------- #


class TeamCreateRequest(RequestModel):
    name: Optional[str] = None
    handle: Optional[str] = None
    description: Optional[str] = None
    parent_team_id: Optional[int] = Field(default=None, alias="parentTeamId")
    company_id: Optional[int] = Field(default=None, alias="companyId")
    project_id: Optional[int] = Field(default=None, alias="projectId")
    # comma separated, see comma_join
    user_ids: Optional[str] = Field(default=None, alias="userIds")


class TeamUpdateRequest(TeamCreateRequest):
    id: Optional[int] = Field(default=None, exclude=True)


# --- Timelogs ------------------------------------------------------------- #


class TimelogCreateRequest(RequestModel):
    project_id: Optional[int] = Field(default=None, exclude=True)
    task_id: Optional[int] = Field(default=None, exclude=True)
    description: Optional[str] = None
    date: Optional[dt.date] = None
    time: Optional[TimeOnly] = None
    is_utc: bool = Field(default=False, alias="isUTC")
    hours: Optional[int] = None
    minutes: Optional[int] = None
    billable: bool = Field(default=False, alias="isBillable")
    user_id: Optional[int] = Field(default=None, alias="userId")
    tag_ids: Optional[List[int]] = Field(default=None, alias="tagIds")


class TimelogUpdateRequest(RequestModel):
    id: Optional[int] = Field(default=None, exclude=True)
    description: Optional[str] = None
    date: Optional[dt.date] = None
    time: Optional[TimeOnly] = None
    is_utc: Optional[bool] = Field(default=None, alias="isUTC")
    hours: Optional[int] = None
    minutes: Optional[int] = None
    billable: Optional[bool] = Field(default=None, alias="isBillable")
    user_id: Optional[int] = Field(default=None, alias="userId")
    tag_ids: Optional[List[int]] = Field(default=None, alias="tagIds")


class TimelogListFilters(RequestModel):
    tag_ids: Optional[CommaSeparatedIDs] = Field(default=None, alias="tagIds")
    match_all_tags: Optional[bool] = Field(default=None, alias="matchAllTags")
    start_date: Optional[dt.datetime] = Field(default=None, alias="startDate")
    end_date: Optional[dt.datetime] = Field(default=None, alias="endDate")
    assigned_user_ids: Optional[CommaSeparatedIDs] = Field(
        default=None, alias="assignedToUserIds"
    )
    assigned_company_ids: Optional[CommaSeparatedIDs] = Field(
        default=None, alias="assignedToCompanyIds"
    )
    assigned_team_ids: Optional[CommaSeparatedIDs] = Field(
        default=None, alias="assignedToTeamIds"
    )
    page: Optional[int] = None
    page_size: Optional[int] = Field(default=None, alias="pageSize")


# --- Activities and workload ---------------------------------------------- #


class ActivityListFilters(RequestModel):
    start_date: Optional[dt.datetime] = Field(default=None, alias="startDate")
    end_date: Optional[dt.datetime] = Field(default=None, alias="endDate")
    log_item_types: Optional[CommaSeparated] = Field(
        default=None, alias="activityTypes"
    )
    page: Optional[int] = None
    page_size: Optional[int] = Field(default=None, alias="pageSize")


class WorkloadFilters(RequestModel):
    start_date: Optional[dt.date] = Field(default=None, alias="startDate")
    end_date: Optional[dt.date] = Field(default=None, alias="endDate")
    user_ids: Optional[CommaSeparatedIDs] = Field(default=None, alias="userIds")
    user_company_ids: Optional[CommaSeparatedIDs] = Field(
        default=None, alias="userCompanyIds"
    )
    user_team_ids: Optional[CommaSeparatedIDs] = Field(
        default=None, alias="userTeamIds"
    )
    project_ids: Optional[CommaSeparatedIDs] = Field(default=None, alias="projectIds")
    page: Optional[int] = None
    page_size: Optional[int] = Field(default=None, alias="pageSize")
    include: Optional[CommaSeparated] = None


# --- Comments ------------------------------------------------------------- #


class CommentTarget(RequestModel):
    type: Optional[str] = None
    id: Optional[int] = None


class CommentCreateRequest(RequestModel):
    target: Optional[CommentTarget] = Field(default=None, exclude=True)
    # "body" would shadow RequestModel.body()
    content: Optional[str] = Field(default=None, alias="body")
    content_type: Optional[str] = Field(default=None, alias="content-type")


class CommentUpdateRequest(CommentCreateRequest):
    id: Optional[int] = Field(default=None, exclude=True)


class CommentListFilters(ListFilters):
    file_version_id: Optional[int] = Field(default=None, exclude=True)
    milestone_id: Optional[int] = Field(default=None, exclude=True)
    notebook_id: Optional[int] = Field(default=None, exclude=True)
    task_id: Optional[int] = Field(default=None, exclude=True)


# --- Companies ------------------------------------------------------------ #


class CompanyCreateRequest(RequestModel):
    name: Optional[str] = None
    address_one: Optional[str] = Field(default=None, alias="addressOne")
    address_two: Optional[str] = Field(default=None, alias="addressTwo")
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country_code: Optional[str] = Field(default=None, alias="countryCode")
    phone: Optional[str] = None
    fax: Optional[str] = None
    email_one: Optional[str] = Field(default=None, alias="emailOne")
    email_two: Optional[str] = Field(default=None, alias="emailTwo")
    email_three: Optional[str] = Field(default=None, alias="emailThree")
    website: Optional[str] = None
    profile: Optional[str] = Field(default=None, alias="profileText")
    manager_id: Optional[int] = Field(default=None, alias="clientManagedBy")
    industry_id: Optional[int] = Field(default=None, alias="industryCatId")
    tag_ids: Optional[List[int]] = Field(default=None, alias="tagIds")


class CompanyUpdateRequest(CompanyCreateRequest):
    id: Optional[int] = Field(default=None, exclude=True)


# --- Notebooks ------------------------------------------------------------ #


class NotebookCreateRequest(RequestModel):
    project_id: Optional[int] = Field(default=None, exclude=True)
    name: Optional[str] = None
    description: Optional[str] = None
    contents: Optional[str] = None
    type: Optional[str] = None
    tag_ids: Optional[List[int]] = Field(default=None, alias="tagIds")


class NotebookUpdateRequest(NotebookCreateRequest):
    id: Optional[int] = Field(default=None, exclude=True)


class NotebookListFilters(TaggedListFilters):
    project_ids: Optional[CommaSeparatedIDs] = Field(default=None, alias="projectIds")
    include_contents: Optional[bool] = Field(default=None, alias="includeContents")


# --- Project members ------------------------------------------------------ #


class ProjectMemberAddRequest(RequestModel):
    project_id: Optional[int] = Field(default=None, exclude=True)
    user_ids: List[int] = Field(default_factory=list, alias="userIds")


# --- Timers --------------------------------------------------------------- #


class TimerCreateRequest(RequestModel):
    description: Optional[str] = None
    billable: Optional[bool] = Field(default=None, alias="isBillable")
    running: Optional[bool] = Field(default=None, alias="isRunning")
    seconds: Optional[int] = None
    stop_running_timers: Optional[bool] = Field(
        default=None, alias="stopRunningTimers"
    )
    project_id: Optional[int] = Field(default=None, alias="projectId")
    task_id: Optional[int] = Field(default=None, alias="taskId")


class TimerUpdateRequest(RequestModel):
    id: Optional[int] = Field(default=None, exclude=True)
    description: Optional[str] = None
    billable: Optional[bool] = Field(default=None, alias="isBillable")
    running: Optional[bool] = Field(default=None, alias="isRunning")
    project_id: Optional[int] = Field(default=None, alias="projectId")
    task_id: Optional[int] = Field(default=None, alias="taskId")


class TimerListFilters(RequestModel):
    user_id: Optional[int] = Field(default=None, alias="userId")
    task_id: Optional[int] = Field(default=None, alias="taskId")
    project_id: Optional[int] = Field(default=None, alias="projectId")
    running_timers_only: Optional[bool] = Field(
        default=None, alias="runningTimersOnly"
    )
    page: Optional[int] = None
    page_size: Optional[int] = Field(default=None, alias="pageSize")


# --- Rates ---------------------------------------------------------------- #


class RatePage(RequestModel):
    """Rate listings page from 1 in steps of 50 unless told otherwise."""

    page: int = 1
    page_size: int = Field(default=50, alias="pageSize")


class UserRatesFilters(RatePage):
    id: Optional[int] = Field(default=None, exclude=True)
    include_installation_rate: Optional[bool] = Field(
        default=None, alias="includeInstallationRate"
    )
    include_user_cost: Optional[bool] = Field(default=None, alias="includeUserCost")
    include_archived_projects: Optional[bool] = Field(
        default=None, alias="includeArchivedProjects"
    )
    include_deleted_projects: Optional[bool] = Field(
        default=None, alias="includeDeletedProjects"
    )


class ProjectUserRatesFilters(RatePage):
    project_id: Optional[int] = Field(default=None, exclude=True)
    user_id: Optional[int] = Field(default=None, exclude=True)
    search_term: Optional[str] = Field(default=None, alias="searchTerm")


class UserRateUpdateRequest(RequestModel):
    project_id: Optional[int] = Field(default=None, exclude=True)
    user_id: Optional[int] = Field(default=None, exclude=True)
    user_rate: Optional[int] = Field(default=None, alias="userRate")
    currency_id: Optional[int] = Field(default=None, alias="currencyId")


class UserRateBulkUpdateRequest(RequestModel):
    user_rate: Optional[int] = Field(default=None, alias="userRate")
    all: Optional[bool] = None
    ids: Optional[List[int]] = None
    exclude_ids: Optional[List[int]] = Field(default=None, alias="excludeIds")
    currency_id: Optional[int] = Field(default=None, alias="currencyId")


class ProjectUserRate(RequestModel):
    user_id: Optional[int] = Field(default=None, exclude=True)
    user_rate: Optional[int] = Field(default=None, alias="userRate")

    @model_serializer
    def _serialize(self) -> Dict[str, Any]:
        return {"user": {"id": self.user_id}, "userRate": self.user_rate}


class ProjectRateUpdateRequest(RequestModel):
    project_id: Optional[int] = Field(default=None, exclude=True)
    project_rate: Optional[int] = Field(default=None, alias="projectRate")
    user_rates: Optional[List[ProjectUserRate]] = Field(default=None, alias="userRates")
