import pytest
from mcp import types
from teamwork_mcp.core.results import text_result
from teamwork_mcp.core.schema import new_tool
from teamwork_mcp.core.toolsets import (
    METHOD_ALL,
    DuplicateMethodError,
    DuplicateToolError,
    DuplicateToolsetError,
    Method,
    MethodRegistry,
    ServerTool,
    Toolset,
    ToolsetEnableError,
    ToolsetGroup,
    UnregisteredMethodError,
    is_registered,
)


async def _noop(arguments):
    return text_result("ok")


def _tool(name: str) -> ServerTool:
    return ServerTool(
        tool=new_tool(name, title=name, description=name), handler=_noop
    )


class RecordingSink:
    def __init__(self):
        self.tools = []

    def add_tools(self, *tools):
        self.tools.extend(tools)

    @property
    def names(self):
        return sorted(t.tool.name for t in self.tools)


@pytest.fixture
def registry():
    reg = MethodRegistry()
    for name in ("a1", "a2", "a3", "b1", "b2"):
        reg.register(Method(name))
    return reg


@pytest.fixture
def group(registry):
    """Toolset A: a1 (read), a2 (write); toolset B: b1 (read), b2 (write)."""
    a = (
        Toolset.new("A", "first", registry=registry)
        .add_read_tools(_tool("a1"))
        .add_write_tools(_tool("a2"))
    )
    b = (
        Toolset.new("B", "second", registry=registry)
        .add_read_tools(_tool("b1"))
        .add_write_tools(_tool("b2"))
    )
    grp = ToolsetGroup(read_only=False)
    grp.add_toolset(a)
    grp.add_toolset(b)
    return grp


def _exposed(grp: ToolsetGroup):
    return sorted(t.tool.name for t in grp.exposed_tools())


# --- Registry -------------------------------------------------------------- #


def test_register_twice_fails_on_second_registration():
    reg = MethodRegistry()
    reg.register(Method("twprojects-list_things"))
    with pytest.raises(DuplicateMethodError) as exc:
        reg.register(Method("twprojects-list_things"))
    assert "twprojects-list_things" in str(exc.value)


def test_registry_membership():
    reg = MethodRegistry()
    assert not reg.is_registered("x")
    reg.register(Method("x"))
    assert reg.is_registered("x")


def test_all_sentinel_is_reserved():
    reg = MethodRegistry()
    assert reg.is_registered(METHOD_ALL)
    with pytest.raises(DuplicateMethodError):
        reg.register(METHOD_ALL)


def test_integration_methods_registered_at_import():
    import teamwork_mcp.twdesk  # noqa: F401
    import teamwork_mcp.twprojects  # noqa: F401

    assert is_registered("twprojects-list_tasks")
    assert is_registered("twprojects-users_workload")
    assert is_registered("twdesk-list_tickets")
    assert not is_registered("twprojects-list_unicorns")


# --- Toolset --------------------------------------------------------------- #


def test_toolset_builders_return_new_values(registry):
    base = Toolset.new("A", "first", registry=registry)
    with_read = base.add_read_tools(_tool("a1"))
    with_write = base.add_write_tools(_tool("a2"))

    assert base.read_tools == () and base.write_tools == ()
    assert [t.method for t in with_read.read_tools] == ["a1"]
    assert with_write.read_tools == ()
    assert [t.method for t in with_write.write_tools] == ["a2"]


def test_toolset_rejects_unregistered_method(registry):
    with pytest.raises(UnregisteredMethodError) as exc:
        Toolset.new("A", "first", registry=registry).add_read_tools(_tool("zz"))
    assert exc.value.method == "zz"
    assert exc.value.toolset == "A"


def test_toolset_rejects_method_in_both_sets(registry):
    toolset = Toolset.new("A", "first", registry=registry).add_read_tools(_tool("a1"))
    with pytest.raises(DuplicateToolError):
        toolset.add_write_tools(_tool("a1"))


def test_toolset_rejects_duplicate_within_one_call(registry):
    with pytest.raises(DuplicateToolError):
        Toolset.new("A", "first", registry=registry).add_read_tools(
            _tool("a1"), _tool("a1")
        )


def test_toolset_contains_read_and_write(registry):
    toolset = (
        Toolset.new("A", "first", registry=registry)
        .add_read_tools(_tool("a1"))
        .add_write_tools(_tool("a2"))
    )
    assert toolset.contains("a1")
    assert toolset.contains("a2")
    assert not toolset.contains("b1")


# --- Group ----------------------------------------------------------------- #


def test_duplicate_toolset_name_rejected(group, registry):
    with pytest.raises(DuplicateToolsetError):
        group.add_toolset(Toolset.new("A", "again", registry=registry))


def test_nothing_exposed_before_enable(group):
    assert not group.has_tools()
    assert _exposed(group) == []


def test_enable_all_exposes_every_toolset(group):
    group.enable_toolsets(METHOD_ALL)
    assert _exposed(group) == ["a1", "a2", "b1", "b2"]
    assert group.enabled_toolsets == {"A", "B"}


def test_enable_all_equivalent_to_every_method(registry):
    def build():
        grp = ToolsetGroup()
        grp.add_toolset(
            Toolset.new("A", "first", registry=registry)
            .add_read_tools(_tool("a1"))
            .add_write_tools(_tool("a2"))
        )
        grp.add_toolset(
            Toolset.new("B", "second", registry=registry).add_read_tools(_tool("b1"))
        )
        return grp

    everything = build()
    everything.enable_toolsets(METHOD_ALL)
    individually = build()
    individually.enable_toolsets("a1", "a2", "b1")

    assert _exposed(everything) == _exposed(individually)


def test_enable_one_method_exposes_its_whole_toolset(group):
    group.enable_toolsets("a1")
    assert _exposed(group) == ["a1", "a2"]
    assert group.has_tools()
    assert group.enabled == {"a1"}


def test_enable_write_method_enables_toolset(group):
    group.enable_toolsets("b2")
    assert _exposed(group) == ["b1", "b2"]


def test_read_only_hides_write_tools(group):
    group.read_only = True
    group.enable_toolsets(METHOD_ALL)
    assert _exposed(group) == ["a1", "b1"]


def test_read_only_with_only_write_tools_has_no_tools(registry):
    grp = ToolsetGroup(read_only=True)
    grp.add_toolset(
        Toolset.new("W", "writes", registry=registry).add_write_tools(_tool("a3"))
    )
    grp.enable_toolsets(METHOD_ALL)
    assert not grp.has_tools()


def test_unknown_token_error_names_it(group):
    with pytest.raises(ToolsetEnableError) as exc:
        group.enable_toolsets("bogus-method")
    assert "bogus-method" in str(exc.value)


def test_failed_enable_leaves_state_unchanged(group):
    group.enable_toolsets("a1")
    before = (group.enabled, group.enabled_toolsets, _exposed(group))

    with pytest.raises(ToolsetEnableError):
        group.enable_toolsets("b1", "z9")

    assert (group.enabled, group.enabled_toolsets, _exposed(group)) == before


def test_enable_error_lists_every_invalid_token(group):
    with pytest.raises(ToolsetEnableError) as exc:
        group.enable_toolsets("z8", "a1", "z9")
    assert exc.value.invalid == ["z8", "z9"]
    assert "z8" in str(exc.value) and "z9" in str(exc.value)
    assert not group.has_tools()


def test_register_all_hands_exposed_tools_to_sink(group):
    group.read_only = True
    group.enable_toolsets("a1")
    sink = RecordingSink()
    group.register_all(sink)
    assert sink.names == ["a1"]
    assert all(isinstance(t.tool, types.Tool) for t in sink.tools)


def test_register_all_skips_empty_group(group):
    sink = RecordingSink()
    group.register_all(sink)
    assert sink.tools == []
