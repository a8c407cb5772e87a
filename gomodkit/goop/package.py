"""Package patterns accepted by the install and exec commands."""

from __future__ import annotations

import json
import ntpath
import posixpath
import sys
from dataclasses import dataclass

GOOS_WINDOWS = "windows"
HOME_DIR = "~"


def current_goos() -> str:
    """Return the running operating system's name in Go's terms."""
    if sys.platform.startswith("win"):
        return GOOS_WINDOWS
    if sys.platform.startswith("linux"):
        return "linux"
    return sys.platform


def go_quote(s: str) -> str:
    """Return ``s`` as a double-quoted, escaped string."""
    return json.dumps(s, ensure_ascii=False)


class PackagePatternError(ValueError):
    """Raised for a package pattern that cannot be installed."""


@dataclass(frozen=True)
class Package:
    """A package pattern such as ``example.com/mod/cmd/tool@latest``."""

    path: str
    name: str = ""
    module_version: str = ""


def parse_package_pattern(pattern: str, home_dir: str, goos: str | None = None) -> Package:
    """Parse ``pattern`` into a :class:`Package`.

    A path under ``home_dir`` is rewritten to start with ``~`` so that
    installed scripts stay portable between users (not on Windows).
    """
    goos = goos or current_goos()
    path, _, version = pattern.partition("@")
    if path.endswith("/..."):
        raise PackagePatternError(
            f"package pattern must not use the '/...' operator: {go_quote(path)}"
        )
    if goos != GOOS_WINDOWS and path.startswith(home_dir + "/"):
        path = HOME_DIR + path[len(home_dir):]
    cut = max(path.rfind("/"), path.rfind("\\"))
    name = path[cut + 1:] if cut != -1 else path
    return Package(path=path, name=name, module_version=version)


def package_file_path(pkg: Package, home_dir: str, goos: str | None = None) -> str | None:
    """Return the local file path of ``pkg``, or None for a remote module."""
    goos = goos or current_goos()
    file_path = pkg.path
    if goos != GOOS_WINDOWS and file_path.startswith(HOME_DIR + "/"):
        file_path = home_dir + file_path[len(HOME_DIR):]
    is_abs = ntpath.isabs if goos == GOOS_WINDOWS else posixpath.isabs
    return file_path if is_abs(file_path) else None


def package_install_paths(pkg: Package, home_dir: str, goos: str | None = None) -> tuple[str, str]:
    """Return the working directory and pattern for ``go install``."""
    file_path = package_file_path(pkg, home_dir, goos)
    if file_path is not None:
        return file_path, "."
    return "", f"{pkg.path}@{pkg.module_version or 'latest'}"