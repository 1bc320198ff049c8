"""
Method registry, toolsets and toolset groups.

Integration packages register every Method they can expose when they are
imported. A ToolsetGroup is built once per integration surface at startup,
the requested methods are enabled on it, and the resolved tools are handed to
the serving layer through ``register_all``. After startup nothing here is
mutated again.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import (
    Any,
    Awaitable,
    Callable,
    Iterable,
    Iterator,
    List,
    Mapping,
    NewType,
    Protocol,
    Set,
    Tuple,
)

from mcp import types

from .observability import log_event

log = logging.getLogger("teamwork_mcp.core.toolsets")

Method = NewType("Method", str)

# Reserved token that enables every toolset of a group.
METHOD_ALL = Method("all")

ToolHandler = Callable[[Mapping[str, Any]], Awaitable[types.CallToolResult]]


class ToolsetError(Exception):
    """Base error for registry/toolset misconfiguration."""


class DuplicateMethodError(ToolsetError):
    def __init__(self, method: str):
        super().__init__(f"method already registered: {method!r}")
        self.method = method


class UnregisteredMethodError(ToolsetError):
    def __init__(self, method: str, toolset: str):
        super().__init__(
            f"toolset {toolset!r} references unregistered method {method!r}"
        )
        self.method = method
        self.toolset = toolset


class DuplicateToolError(ToolsetError):
    def __init__(self, method: str, toolset: str):
        super().__init__(f"method {method!r} added twice to toolset {toolset!r}")
        self.method = method
        self.toolset = toolset


class DuplicateToolsetError(ToolsetError):
    def __init__(self, name: str):
        super().__init__(f"toolset already added to group: {name!r}")
        self.name = name


class ToolsetEnableError(ToolsetError):
    """Raised when requested methods do not belong to any toolset of the group."""

    def __init__(self, invalid: Iterable[str]):
        self.invalid = list(invalid)
        joined = "\n".join(f"unknown toolset method: {m!r}" for m in self.invalid)
        super().__init__(joined)


# --- Registry -------------------------------------------------------------- #


class MethodRegistry:
    """Set of known Methods. Only ``register`` and ``is_registered`` are public."""

    def __init__(self) -> None:
        self._methods: Set[str] = set()

    def register(self, method: Method) -> None:
        if method == METHOD_ALL or method in self._methods:
            raise DuplicateMethodError(method)
        self._methods.add(method)

    def is_registered(self, method: str) -> bool:
        return method == METHOD_ALL or method in self._methods


_default_registry = MethodRegistry()


def default_registry() -> MethodRegistry:
    return _default_registry


def register_method(method: Method) -> Method:
    """Register ``method`` in the process-wide registry and return it."""
    _default_registry.register(method)
    return method


def is_registered(method: str) -> bool:
    return _default_registry.is_registered(method)


# --- Tools and toolsets ---------------------------------------------------- #


@dataclass(frozen=True)
class ServerTool:
    """A tool definition (schema) paired with the coroutine that serves it."""

    tool: types.Tool
    handler: ToolHandler

    @property
    def method(self) -> Method:
        return Method(self.tool.name)


@dataclass(frozen=True)
class Toolset:
    name: str
    description: str
    read_tools: Tuple[ServerTool, ...] = ()
    write_tools: Tuple[ServerTool, ...] = ()
    registry: MethodRegistry = field(
        default=_default_registry, repr=False, compare=False
    )

    @classmethod
    def new(
        cls,
        name: str,
        description: str,
        *,
        registry: MethodRegistry | None = None,
    ) -> "Toolset":
        return cls(
            name=name,
            description=description,
            registry=registry or _default_registry,
        )

    def add_read_tools(self, *tools: ServerTool) -> "Toolset":
        """Return a copy with ``tools`` appended to the read (side-effect free) set."""
        self._check(tools)
        return replace(self, read_tools=self.read_tools + tuple(tools))

    def add_write_tools(self, *tools: ServerTool) -> "Toolset":
        """Return a copy with ``tools`` appended to the write set."""
        self._check(tools)
        return replace(self, write_tools=self.write_tools + tuple(tools))

    def methods(self) -> List[Method]:
        return [t.method for t in self.read_tools + self.write_tools]

    def contains(self, method: str) -> bool:
        return any(t.method == method for t in self.read_tools + self.write_tools)

    def _check(self, tools: Tuple[ServerTool, ...]) -> None:
        seen = set(self.methods())
        for tool in tools:
            if not self.registry.is_registered(tool.method):
                raise UnregisteredMethodError(tool.method, self.name)
            if tool.method in seen:
                raise DuplicateToolError(tool.method, self.name)
            seen.add(tool.method)


# --- Groups ---------------------------------------------------------------- #


class ToolSink(Protocol):
    def add_tools(self, *tools: ServerTool) -> None: ...


class ToolsetGroup:
    """
    All toolsets of one integration surface plus the runtime exposure policy.
    - read_only suppresses every write tool
    - only tools of enabled toolsets are exposed
    """

    def __init__(self, read_only: bool = False):
        self.read_only = read_only
        self.toolsets: List[Toolset] = []
        self._enabled_toolsets: Set[str] = set()
        self._enabled_methods: Set[Method] = set()

    @property
    def enabled(self) -> frozenset[Method]:
        """Methods explicitly requested through ``enable_toolsets``."""
        return frozenset(self._enabled_methods)

    @property
    def enabled_toolsets(self) -> frozenset[str]:
        return frozenset(self._enabled_toolsets)

    def add_toolset(self, toolset: Toolset) -> None:
        if any(t.name == toolset.name for t in self.toolsets):
            raise DuplicateToolsetError(toolset.name)
        self.toolsets.append(toolset)

    def enable_toolsets(self, *requested: str) -> None:
        """
        Enable the toolsets containing the requested methods.
        Raises ToolsetEnableError naming every unknown token; the group is left
        untouched in that case.
        """
        if METHOD_ALL in requested:
            self._enabled_toolsets.update(t.name for t in self.toolsets)
            self._enabled_methods.add(METHOD_ALL)
            log_event(
                "toolsets_enabled",
                logger=log,
                toolset=",".join(t.name for t in self.toolsets),
            )
            return

        toolsets: Set[str] = set()
        methods: Set[Method] = set()
        invalid: List[str] = []
        for token in requested:
            owners = [t.name for t in self.toolsets if t.contains(token)]
            if not owners:
                invalid.append(token)
                continue
            toolsets.update(owners)
            methods.add(Method(token))

        if invalid:
            raise ToolsetEnableError(invalid)

        self._enabled_toolsets.update(toolsets)
        self._enabled_methods.update(methods)
        log_event(
            "toolsets_enabled", logger=log, toolset=",".join(sorted(toolsets))
        )

    def exposed_tools(self) -> Iterator[ServerTool]:
        for toolset in self.toolsets:
            if toolset.name not in self._enabled_toolsets:
                continue
            yield from toolset.read_tools
            if not self.read_only:
                yield from toolset.write_tools

    def has_tools(self) -> bool:
        return next(self.exposed_tools(), None) is not None

    def register_all(self, sink: ToolSink) -> None:
        tools = list(self.exposed_tools())
        if tools:
            sink.add_tools(*tools)


__all__ = [
    "Method",
    "METHOD_ALL",
    "MethodRegistry",
    "ServerTool",
    "ToolHandler",
    "Toolset",
    "ToolsetGroup",
    "ToolSink",
    "ToolsetError",
    "DuplicateMethodError",
    "UnregisteredMethodError",
    "DuplicateToolError",
    "DuplicateToolsetError",
    "ToolsetEnableError",
    "default_registry",
    "register_method",
    "is_registered",
]
