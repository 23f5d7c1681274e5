#!/usr/bin/env python3
"""
Keep datahub_mcp.core transport-agnostic.

core/ may depend on httpx and pydantic but never on the MCP server layer or on
datahub_mcp.server; FastMCP wiring lives outside core/. Exits non-zero and
lists each offending import otherwise.
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple

REPO_ROOT = Path(__file__).resolve().parent.parent
CORE_DIR = REPO_ROOT / "src" / "datahub_mcp" / "core"

FORBIDDEN_PREFIXES = (
    "mcp.server",
    "fastmcp",
    "datahub_mcp.server",
    "starlette",
    "uvicorn",
)


def is_forbidden(module: str) -> bool:
    return any(
        module == prefix or module.startswith(prefix + ".")
        for prefix in FORBIDDEN_PREFIXES
    )


def imported_modules(tree: ast.AST) -> Iterator[Tuple[int, str]]:
    """Yield (line, module) for absolute imports; relative imports stay in core."""
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield node.lineno, alias.name
        elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
            yield node.lineno, node.module


def violations_in(path: Path) -> List[str]:
    tree = ast.parse(path.read_text(), filename=str(path))
    return [
        f"{path}:{lineno}: forbidden import '{module}'"
        for lineno, module in imported_modules(tree)
        if is_forbidden(module)
    ]


def main(argv: Optional[Sequence[str]] = None) -> int:
    roots = [Path(p) for p in argv] if argv else [CORE_DIR]
    found: List[str] = []
    for root in roots:
        files = [root] if root.is_file() else sorted(root.rglob("*.py"))
        for py_file in files:
            found.extend(violations_in(py_file))

    for line in found:
        print(line, file=sys.stderr)
    return 1 if found else 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
