"""Where goop keeps its commands and builds, and how it reaches the system."""

from __future__ import annotations

import os
import shutil
import subprocess
import sys
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from gomodkit.gopages.linker import go_path_join

APP_NAME = "goop"
BIN_ENVIRONMENT_VAR = "GOOP_BIN"


def _getenv(name: str) -> str:
    return os.environ.get(name, "")


def _run_command(
    executable: str,
    args: Sequence[str],
    cwd: str | None = None,
    env: Mapping[str, str] | None = None,
) -> None:
    try:
        subprocess.run(
            list(args),
            executable=executable,
            cwd=cwd or None,
            env=dict(env) if env is not None else None,
            check=True,
        )
    except subprocess.CalledProcessError as exc:
        raise RuntimeError(f"exit status {exc.returncode}") from exc


@dataclass
class Environment:
    """Settings and system hooks shared by every goop command.

    Paths handled by goop are slash-separated and relative to ``root``.
    With ``os_paths`` set, they map to and from absolute OS paths under
    ``root``; otherwise OS paths and goop paths are the same strings.
    """

    out_writer: TextIO = field(default_factory=lambda: sys.stdout)
    err_writer: TextIO = field(default_factory=lambda: sys.stderr)
    root: Path = field(default_factory=lambda: Path("."))
    get_env: Callable[[str], str] = _getenv
    look_path: Callable[[str], str | None] = shutil.which
    run_cmd: Callable[..., None] = _run_command
    static_bin_dir: str = ""
    static_cache_dir: str = ""
    static_os_home_dir: str = ""
    os_paths: bool = False

    def user_bin_dir(self) -> str:
        """Return the directory holding command scripts.

        The GOOP_BIN environment variable overrides the default.
        """
        configured = self.get_env(BIN_ENVIRONMENT_VAR)
        if configured:
            return self.from_os_path(configured)
        return self.static_bin_dir

    def package_bin_path(self, name: str) -> str:
        """Return the path of the command script called ``name``."""
        return go_path_join(self.user_bin_dir(), name)

    def package_install_dir(self, name: str) -> str:
        """Return the directory holding the build of command ``name``."""
        return go_path_join(self.static_cache_dir, "install", name)

    def from_os_path(self, path: str) -> str:
        """Convert an OS path to a goop path.

        Raises ValueError if the path lies outside ``root``.
        """
        if not self.os_paths:
            return path
        relative = Path(os.path.abspath(path)).relative_to(self.root)
        return relative.as_posix() if relative.parts else "."

    def to_os_path(self, path: str) -> str:
        """Convert a goop path to an OS path."""
        if not self.os_paths:
            return path
        return str(self.root / path)


def _required(environ: Mapping[str, str], name: str, message: str) -> str:
    value = environ.get(name, "")
    if not value:
        raise OSError(message)
    return value


def _xdg_dir(environ: Mapping[str, str], variable: str, fallback: str) -> str:
    value = environ.get(variable, "")
    if value:
        if not os.path.isabs(value):
            raise OSError(f"path in ${variable} is relative")
        return value
    home = _required(environ, "HOME", f"neither ${variable} nor $HOME are defined")
    return home + "/" + fallback


def _user_config_dir(environ: Mapping[str, str]) -> str:
    if sys.platform.startswith("win"):
        return _required(environ, "APPDATA", "%AppData% is not defined")
    if sys.platform == "darwin":
        return _required(environ, "HOME", "$HOME is not defined") + "/Library/Application Support"
    return _xdg_dir(environ, "XDG_CONFIG_HOME", ".config")


def _user_cache_dir(environ: Mapping[str, str]) -> str:
    if sys.platform.startswith("win"):
        return _required(environ, "LOCALAPPDATA", "%LocalAppData% is not defined")
    if sys.platform == "darwin":
        return _required(environ, "HOME", "$HOME is not defined") + "/Library/Caches"
    return _xdg_dir(environ, "XDG_CACHE_HOME", ".cache")


def _user_home_dir(environ: Mapping[str, str]) -> str:
    if sys.platform.startswith("win"):
        return _required(environ, "USERPROFILE", "%userprofile% is not defined")
    return _required(environ, "HOME", "$HOME is not defined")


def new_environment(out_writer: TextIO | None = None, err_writer: TextIO | None = None) -> Environment:
    """Return an environment for the current user on the real file system.

    Raises OSError if the user's config, cache or home directory is unknown.
    """
    environ = os.environ
    config_dir = _user_config_dir(environ)
    cache_dir = _user_cache_dir(environ)
    home_dir = _user_home_dir(environ)

    root = Path(Path(os.path.abspath(config_dir)).anchor or "/")
    env = Environment(
        out_writer=out_writer or sys.stdout,
        err_writer=err_writer or sys.stderr,
        root=root,
        os_paths=True,
        static_os_home_dir=home_dir,
    )
    env.static_bin_dir = go_path_join(env.from_os_path(config_dir), APP_NAME, "bin")
    env.static_cache_dir = go_path_join(env.from_os_path(cache_dir), APP_NAME)
    return env