"""
Teamwork.com Projects tools.

Importing this package registers every ``twprojects-*`` method name;
``default_toolset_group`` wires the tools into a single ``projects`` toolset.
"""

from __future__ import annotations

from teamwork_mcp.core.client import TeamworkClient
from teamwork_mcp.core.toolsets import Toolset, ToolsetGroup

from . import (
    activities,
    comments,
    companies,
    industries,
    milestones,
    notebooks,
    project_members,
    projects,
    rates,
    tags,
    tasklists,
    tasks,
    teams,
    timelogs,
    timers,
    users,
    workload,
)
from .projects import PROJECT_DESCRIPTION

TOOLSET_NAME = "projects"


def default_toolset_group(
    read_only: bool,
    allow_delete: bool,
    client: TeamworkClient,
) -> ToolsetGroup:
    """
    Build the Projects group.
    Delete tools are only part of the write set when ``allow_delete`` is set;
    ``read_only`` later hides the whole write set at exposure time.
    """
    write_tools = [
        projects.project_create(client),
        projects.project_update(client),
        tasklists.tasklist_create(client),
        tasklists.tasklist_update(client),
        tasks.task_create(client),
        tasks.task_update(client),
        users.user_create(client),
        users.user_update(client),
        milestones.milestone_create(client),
        milestones.milestone_update(client),
        tags.tag_create(client),
        tags.tag_update(client),
        teams.team_create(client),
        teams.team_update(client),
        timelogs.timelog_create(client),
        timelogs.timelog_update(client),
        comments.comment_create(client),
        comments.comment_update(client),
        companies.company_create(client),
        companies.company_update(client),
        notebooks.notebook_create(client),
        notebooks.notebook_update(client),
        project_members.project_member_add(client),
        timers.timer_create(client),
        timers.timer_update(client),
        timers.timer_pause(client),
        timers.timer_resume(client),
        timers.timer_complete(client),
        rates.installation_user_rate_update(client),
        rates.installation_user_rates_bulk_update(client),
        rates.project_rate_update(client),
        rates.project_and_user_rates_update(client),
        rates.project_user_rate_update(client),
    ]
    if allow_delete:
        write_tools += [
            projects.project_delete(client),
            tasklists.tasklist_delete(client),
            tasks.task_delete(client),
            users.user_delete(client),
            milestones.milestone_delete(client),
            tags.tag_delete(client),
            teams.team_delete(client),
            timelogs.timelog_delete(client),
            comments.comment_delete(client),
            companies.company_delete(client),
            notebooks.notebook_delete(client),
            timers.timer_delete(client),
        ]

    toolset = (
        Toolset.new(TOOLSET_NAME, PROJECT_DESCRIPTION)
        .add_write_tools(*write_tools)
        .add_read_tools(
            projects.project_get(client),
            projects.project_list(client),
            tasklists.tasklist_get(client),
            tasklists.tasklist_list(client),
            tasklists.tasklist_list_by_project(client),
            tasks.task_get(client),
            tasks.task_list(client),
            tasks.task_list_by_tasklist(client),
            tasks.task_list_by_project(client),
            users.user_get(client),
            users.user_get_me(client),
            users.user_list(client),
            users.user_list_by_project(client),
            milestones.milestone_get(client),
            milestones.milestone_list(client),
            milestones.milestone_list_by_project(client),
            tags.tag_get(client),
            tags.tag_list(client),
            teams.team_get(client),
            teams.team_list(client),
            teams.team_list_by_company(client),
            teams.team_list_by_project(client),
            timelogs.timelog_get(client),
            timelogs.timelog_list(client),
            timelogs.timelog_list_by_project(client),
            timelogs.timelog_list_by_task(client),
            activities.activity_list(client),
            activities.activity_list_by_project(client),
            workload.users_workload(client),
            comments.comment_get(client),
            comments.comment_list(client),
            comments.comment_list_by_file_version(client),
            comments.comment_list_by_milestone(client),
            comments.comment_list_by_notebook(client),
            comments.comment_list_by_task(client),
            companies.company_get(client),
            companies.company_list(client),
            industries.industry_list(client),
            notebooks.notebook_get(client),
            notebooks.notebook_list(client),
            timers.timer_get(client),
            timers.timer_list(client),
            rates.user_rates_get(client),
            rates.installation_user_rates_list(client),
            rates.installation_user_rate_get(client),
            rates.project_rate_get(client),
            rates.project_user_rates_list(client),
            rates.project_user_rate_get(client),
            rates.project_user_rate_history_get(client),
        )
    )

    group = ToolsetGroup(read_only)
    group.add_toolset(toolset)
    return group


__all__ = ["TOOLSET_NAME", "default_toolset_group"]
