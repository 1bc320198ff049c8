#!/usr/bin/env python3
"""
Check the package layering of teamwork_mcp.

core is shared by every tool and knows nothing about the MCP server, the
transports or the integration surfaces. twprojects and twdesk each build on
core alone and never reach into one another. Relative imports are resolved
against the importing module before they are checked.

Usage: check_layers.py [PACKAGE_DIR]
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path
from typing import Dict, Iterator, Tuple

REPO_ROOT = Path(__file__).resolve().parent.parent
PACKAGE_DIR = REPO_ROOT / "src" / "teamwork_mcp"

OUTER_LAYERS = (
    "starlette",
    "uvicorn",
    "click",
    "mcp.server",
    "teamwork_mcp.server",
    "teamwork_mcp.transports",
)

LAYER_RULES: Dict[str, Tuple[str, ...]] = {
    "core": OUTER_LAYERS + ("teamwork_mcp.twprojects", "teamwork_mcp.twdesk"),
    "twprojects": OUTER_LAYERS + ("teamwork_mcp.twdesk",),
    "twdesk": OUTER_LAYERS + ("teamwork_mcp.twprojects",),
}


def crosses(module: str, forbidden: Tuple[str, ...]) -> bool:
    return any(module == prefix or module.startswith(prefix + ".") for prefix in forbidden)


def module_name(path: Path, package_dir: Path = PACKAGE_DIR) -> str:
    try:
        relative = path.resolve().relative_to(package_dir.resolve().parent)
    except ValueError:
        return path.stem
    parts = list(relative.with_suffix("").parts)
    if parts[-1] == "__init__":
        parts.pop()
    return ".".join(parts)


def _absolute(node: ast.ImportFrom, current: str, is_package: bool) -> str:
    if not node.level:
        return node.module or ""
    base = current.split(".")
    if not is_package:
        base = base[:-1]
    up = node.level - 1
    if up:
        base = base[:-up] if up < len(base) else []
    if node.module:
        base.append(node.module)
    return ".".join(base)


def imports(path: Path, package_dir: Path = PACKAGE_DIR) -> Iterator[Tuple[int, str]]:
    """Yield (line, absolute module name) for every import in ``path``."""
    tree = ast.parse(path.read_text(), filename=str(path))
    current = module_name(path, package_dir)
    is_package = path.name == "__init__.py"
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield node.lineno, alias.name
        elif isinstance(node, ast.ImportFrom):
            module = _absolute(node, current, is_package)
            if module:
                yield node.lineno, module


def scan_file(path: Path, layer: str = "core", package_dir: Path = PACKAGE_DIR) -> list[str]:
    forbidden = LAYER_RULES[layer]
    return [
        f"{path}:{line}: {layer} must not import '{module}'"
        for line, module in sorted(imports(path, package_dir))
        if crosses(module, forbidden)
    ]


def scan_package(package_dir: Path = PACKAGE_DIR) -> list[str]:
    violations: list[str] = []
    for layer in LAYER_RULES:
        for py_file in sorted((package_dir / layer).rglob("*.py")):
            violations.extend(scan_file(py_file, layer, package_dir))
    return violations


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    package_dir = Path(args[0]) if args else PACKAGE_DIR
    violations = scan_package(package_dir)
    for violation in violations:
        print(violation, file=sys.stderr)
    return 1 if violations else 0


if __name__ == "__main__":
    sys.exit(main())
