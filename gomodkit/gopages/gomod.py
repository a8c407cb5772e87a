"""Find a module's package path from its go.mod file."""

from __future__ import annotations

import json
from pathlib import Path


def parse_module_path(data: bytes | str) -> str:
    """Return the module path declared in go.mod contents, or ''."""
    text = data.decode() if isinstance(data, bytes) else data
    for raw in text.splitlines():
        line = raw.strip()
        if not line.startswith("module"):
            continue
        rest = line[len("module"):]
        if "//" in rest:
            rest = rest[: rest.index("//")]
        stripped = rest.strip()
        if not stripped or len(stripped) == len(rest):
            continue
        if stripped.startswith('"'):
            try:
                return json.loads(stripped)
            except ValueError:
                return ""
        if stripped.startswith("`") and stripped.endswith("`") and len(stripped) > 1:
            return stripped[1:-1]
        return stripped
    return ""


def module_package(module_path: str | Path) -> str:
    """Return the package path of the module rooted at ``module_path``.

    Raises FileNotFoundError without a go.mod and ValueError if it names
    no module.
    """
    go_mod = Path(module_path) / "go.mod"
    if not go_mod.exists():
        raise FileNotFoundError("go.mod not found in the current directory")
    package = parse_module_path(go_mod.read_bytes())
    if not package:
        raise ValueError(f"Unable to find module package name in go.mod file: {go_mod}")
    return package