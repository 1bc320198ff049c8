import pytest
from teamwork_mcp import twdesk, twprojects
from teamwork_mcp.core.client import TeamworkClient
from teamwork_mcp.core.toolsets import METHOD_ALL, ToolsetEnableError

BASE = "https://acme.teamwork.com"


class RecordingSink:
    def __init__(self):
        self.tools = []

    def add_tools(self, *tools):
        self.tools.extend(tools)


def _names(group):
    sink = RecordingSink()
    group.register_all(sink)
    return {t.method for t in sink.tools}


@pytest.fixture
def client():
    return TeamworkClient(base_url=BASE)


def test_projects_group_hides_delete_tools_by_default(client):
    group = twprojects.default_toolset_group(False, False, client)
    group.enable_toolsets(METHOD_ALL)

    names = _names(group)
    assert "twprojects-create_task" in names
    assert "twprojects-list_tasks" in names
    assert not any("delete" in n for n in names)


def test_projects_group_allow_delete(client):
    group = twprojects.default_toolset_group(False, True, client)
    group.enable_toolsets(METHOD_ALL)

    names = _names(group)
    assert "twprojects-delete_task" in names
    assert "twprojects-delete_timelog" in names
    assert {
        "twprojects-delete_comment",
        "twprojects-delete_company",
        "twprojects-delete_notebook",
        "twprojects-delete_timer",
    } <= names


def test_projects_group_read_only_drops_writes_and_deletes(client):
    group = twprojects.default_toolset_group(True, True, client)
    group.enable_toolsets(METHOD_ALL)

    names = _names(group)
    assert names
    assert "twprojects-get_project" in names
    assert "twprojects-users_workload" in names
    assert not any(n.split("-", 1)[1].startswith(("create", "update", "delete")) for n in names)


def test_enabling_one_method_exposes_its_whole_toolset(client):
    group = twprojects.default_toolset_group(False, False, client)
    group.enable_toolsets("twprojects-get_task")

    names = _names(group)
    assert "twprojects-list_milestones" in names
    assert group.enabled == frozenset({"twprojects-get_task"})


def test_desk_method_is_unknown_to_projects_group(client):
    group = twprojects.default_toolset_group(False, False, client)

    with pytest.raises(ToolsetEnableError):
        group.enable_toolsets("twdesk-get_ticket")
    assert not group.has_tools()


def test_desk_group(client):
    group = twdesk.default_toolset_group(client)
    assert not group.has_tools()

    group.enable_toolsets("twdesk-list_tickets")
    names = _names(group)
    assert {"twdesk-create_ticket", "twdesk-list_types", "twdesk-get_priority"} <= names
    assert {"twdesk-create_file", "twdesk-create_message", "twdesk-list_inboxes"} <= names
    assert len(names) == 34


def test_desk_group_read_only(client):
    group = twdesk.default_toolset_group(client, read_only=True)
    group.enable_toolsets(METHOD_ALL)

    names = _names(group)
    assert len(names) == 18
    assert all(n.split("-", 1)[1].startswith(("get", "list")) for n in names)


def test_projects_group_keeps_timer_transitions_out_of_read_only(client):
    group = twprojects.default_toolset_group(True, False, client)
    group.enable_toolsets(METHOD_ALL)

    names = _names(group)
    assert "twprojects-list_timers" in names
    assert "twprojects-get_project_rate" in names
    assert not {
        "twprojects-pause_timer",
        "twprojects-resume_timer",
        "twprojects-complete_timer",
        "twprojects-add_project_member",
    } & names
