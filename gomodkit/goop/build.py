"""Build module commands with ``go install`` and keep the builds fresh."""

from __future__ import annotations

import os
import posixpath
import shutil
import stat
from pathlib import Path

from gomodkit.gopages.linker import go_path_join
from gomodkit.goop.environment import Environment
from gomodkit.goop.package import (
    GOOS_WINDOWS,
    Package,
    current_goos,
    go_quote,
    package_file_path,
    package_install_paths,
)

INSTALL_PERMISSION = 0o700
GO_MOD = "go.mod"
WINDOWS_EXECUTABLE_EXT = ".exe"


class BuildError(RuntimeError):
    """Raised when a command cannot be built or located."""


def _resolve(env: Environment, path: str) -> Path:
    """Return the real location of a goop path under the environment's root."""
    if (
        posixpath.isabs(path)
        or os.path.isabs(path)
        or path == ".."
        or path.startswith("../")
    ):
        raise ValueError(f"stat {path}: invalid argument")
    return env.root / path


def _go_dir(path: str) -> str:
    parent = posixpath.dirname(path)
    return posixpath.normpath(parent) if parent else "."


def system_ext(goos: str) -> str:
    """Return the executable file extension used on ``goos``."""
    if goos == GOOS_WINDOWS:
        return WINDOWS_EXECUTABLE_EXT
    return ""


def build(
    env: Environment,
    name: str,
    pkg: Package,
    always_build: bool = False,
    goos: str | None = None,
) -> str:
    """Return the path of the built command ``name``, building it if needed.

    An existing build is reused unless ``always_build`` is set or ``pkg`` is
    a local module with files newer than the build.
    """
    goos = goos or current_goos()
    desired = go_path_join(env.package_install_dir(name), name) + system_ext(goos)
    try:
        info = _resolve(env, desired).stat()
    except FileNotFoundError:
        info = None
    if info is not None and stat.S_ISREG(info.st_mode) and not always_build:
        if not should_rebuild(env, info.st_mtime, pkg):
            return desired

    print(f"Building {go_quote(pkg.path)}...", file=env.err_writer)
    _build_at_path(env, name, pkg, desired, goos)
    return desired


def _build_at_path(env: Environment, name: str, pkg: Package, desired: str, goos: str) -> None:
    install_dir = env.package_install_dir(name)
    _resolve(env, install_dir).mkdir(mode=INSTALL_PERMISSION, parents=True, exist_ok=True)
    gobin = env.to_os_path(install_dir)

    working_dir, install_pattern = package_install_paths(pkg, env.static_os_home_dir, goos)
    args = ["go", "install", install_pattern]
    print(
        f"Env: PWD={go_quote(working_dir)} GOBIN={go_quote(gobin)}\n"
        f"Running '{' '.join(args)}'...",
        file=env.err_writer,
    )
    executable = shutil.which("go") or "go"
    environment = {**os.environ, "GOBIN": gobin}
    try:
        env.run_cmd(executable, args, cwd=working_dir or None, env=environment)
    except Exception as exc:
        raise BuildError(f"{' '.join(args)}: {exc}") from exc

    binary = find_binary(env, install_dir)
    if binary is None:
        raise BuildError(f"go install result not found at path: {install_dir}")
    if binary != desired:
        os.replace(_resolve(env, binary), _resolve(env, desired))
    print("Build successful.", file=env.err_writer)


def find_binary(env: Environment, install_dir: str) -> str | None:
    """Return the first regular file in ``install_dir`` by name, or None.

    A missing directory, or a path that is not a directory, holds no binary.
    """
    try:
        with os.scandir(_resolve(env, install_dir)) as entries:
            ordered = sorted(entries, key=lambda e: e.name)
    except (FileNotFoundError, NotADirectoryError):
        return None
    for entry in ordered:
        if entry.is_file(follow_symlinks=False):
            return go_path_join(install_dir, entry.name)
    return None


def should_rebuild(env: Environment, binary_mtime: float, pkg: Package) -> bool:
    """Report whether a local module changed after the build at ``binary_mtime``.

    Remote modules are always considered up to date.
    """
    file_path = package_file_path(pkg, env.static_os_home_dir)
    if file_path is None:
        return False
    root = module_root(env, env.from_os_path(file_path))
    return has_newer_mod_time(env, root, binary_mtime)


def _stat_failure(env: Environment, path: str) -> Exception | None:
    try:
        _resolve(env, path).stat()
    except FileNotFoundError:
        return FileNotFoundError(f"stat {path}: file does not exist")
    except (ValueError, OSError) as exc:
        return exc
    return None


def module_root(env: Environment, path: str) -> str:
    """Return the nearest directory at or above ``path`` holding a go.mod.

    Raises the lookup error for ``path`` itself if no parent holds one, or
    BuildError when ``path`` is already the top directory.
    """
    first_error: Exception | None = None
    current = path
    while True:
        failure = _stat_failure(env, go_path_join(current, GO_MOD) or GO_MOD)
        if failure is None:
            return current
        parent = _go_dir(current)
        if parent == current:
            if first_error is None:
                raise BuildError(f"go.mod not found for package: {go_quote(current)}")
            raise first_error
        if first_error is None:
            first_error = failure
        current = parent


def has_newer_mod_time(env: Environment, root: str, base_mod_time: float) -> bool:
    """Report whether anything below ``root`` was modified after ``base_mod_time``."""
    start = _resolve(env, root)
    start.lstat()
    return _walk_newer(start, base_mod_time)


def _walk_newer(directory: Path, base_mod_time: float) -> bool:
    try:
        with os.scandir(directory) as entries:
            ordered = sorted(entries, key=lambda e: e.name)
    except NotADirectoryError:
        return False
    for entry in ordered:
        if entry.stat(follow_symlinks=False).st_mtime > base_mod_time:
            return True
        if entry.is_dir(follow_symlinks=False) and _walk_newer(Path(entry.path), base_mod_time):
            return True
    return False