import importlib.util
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "check_layers.py"


@pytest.fixture(scope="module")
def guard():
    module_spec = importlib.util.spec_from_file_location("check_layers", SCRIPT)
    module = importlib.util.module_from_spec(module_spec)
    assert module_spec.loader is not None
    module_spec.loader.exec_module(module)
    return module


def _package(tmp_path, files):
    root = tmp_path / "src" / "teamwork_mcp"
    for name, source in files.items():
        target = root / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(source)
    return root


def test_installed_package_respects_layers(guard):
    assert guard.main([]) == 0, "layer guard failed"


def test_core_must_not_import_outer_layers(guard, tmp_path):
    bad = tmp_path / "bad.py"
    bad.write_text(
        "import starlette.routing\n"
        "from teamwork_mcp.twdesk import tickets\n"
        "from mcp import types\n"
    )

    errors = guard.scan_file(bad)
    assert len(errors) == 2
    assert "bad.py:1:" in errors[0]
    assert "starlette.routing" in errors[0]
    assert "bad.py:2:" in errors[1]
    assert "teamwork_mcp.twdesk" in errors[1]


def test_surfaces_stay_independent(guard, tmp_path):
    root = _package(
        tmp_path,
        {
            "core/__init__.py": "",
            "twprojects/__init__.py": "",
            "twprojects/tasks.py": "from teamwork_mcp.core.client import TeamworkClient\n",
            "twdesk/__init__.py": "",
            "twdesk/tickets.py": "from ..twprojects import tasks\nfrom .models import Ticket\n",
        },
    )

    errors = guard.scan_package(root)
    assert len(errors) == 1
    assert "twdesk must not import 'teamwork_mcp.twprojects'" in errors[0]
    assert guard.main([str(root)]) == 1


def test_relative_imports_are_resolved(guard, tmp_path):
    root = _package(
        tmp_path,
        {
            "core/__init__.py": "from . import client\n",
            "core/client.py": "from ..transports.http import app\n",
        },
    )

    assert guard.module_name(root / "core" / "client.py", root) == "teamwork_mcp.core.client"
    assert guard.module_name(root / "core" / "__init__.py", root) == "teamwork_mcp.core"
    assert guard.scan_file(root / "core" / "__init__.py", "core", root) == []
    errors = guard.scan_file(root / "core" / "client.py", "core", root)
    assert errors == [f"{root / 'core' / 'client.py'}:1: core must not import 'teamwork_mcp.transports.http'"]


def test_server_may_use_every_layer(guard):
    assert "server" not in guard.LAYER_RULES
    assert guard.crosses("mcp.server.lowlevel", guard.LAYER_RULES["twdesk"])
    assert not guard.crosses("mcp.types", guard.LAYER_RULES["twdesk"])
    assert not guard.crosses("teamwork_mcp.twprojectsx", guard.LAYER_RULES["core"])
