"""Command scripts that run installed modules through goop."""

from __future__ import annotations

import base64
import os
import posixpath
import shutil
import stat
from pathlib import Path

from gomodkit.goop.environment import Environment
from gomodkit.goop.package import Package, go_quote

BIN_PERMISSION = 0o700


class ScriptConflictError(FileExistsError):
    """Raised when a command script would overwrite a file goop did not write."""


def _resolve(env: Environment, path: str) -> Path:
    if (
        posixpath.isabs(path)
        or os.path.isabs(path)
        or path == ".."
        or path.startswith("../")
    ):
        raise ValueError(f"stat {path}: invalid argument")
    return env.root / path


def make_shebang(s: str) -> str:
    """Return a shebang line running ``s`` through env."""
    return "#!/usr/bin/env -S " + s


def _encode(s: str) -> str:
    return base64.b64encode(s.encode()).decode()


def is_app_executable(env: Environment, file_path: str) -> bool:
    """Report whether ``file_path`` is a script written by goop.

    Raises FileNotFoundError if the file does not exist.
    """
    target = _resolve(env, file_path)
    info = target.stat()
    if not stat.S_ISREG(info.st_mode):
        return False
    expected = make_shebang("goop ").encode()
    with open(target, "rb") as f:
        return f.read(len(expected)) == expected


def add(env: Environment, name: str, pkg: Package) -> str:
    """Write the command script ``name`` that runs ``pkg``; return its path.

    Warnings go to the error writer when the script is not what ``name``
    finds on PATH.
    """
    script_path = env.package_bin_path(name)
    target = _resolve(env, script_path)
    target.parent.mkdir(mode=BIN_PERMISSION, parents=True, exist_ok=True)
    try:
        executable = is_app_executable(env, script_path)
    except FileNotFoundError:
        pass
    else:
        if not executable:
            raise ScriptConflictError(
                f"refusing to overwrite non-goop script file: {go_quote(script_path)}"
            )

    # shebangs do not support spaces or quotes, so every variable is encoded
    script = (
        f"goop exec --encoded-name {_encode(name)} "
        f"--encoded-package {_encode(pkg.path)} --\n"
    )
    target.write_text(make_shebang(script), encoding="utf-8", newline="\n")
    os.chmod(target, BIN_PERMISSION)

    script_os_path = env.to_os_path(script_path)
    found = env.look_path(name)
    if found is None:
        print(
            f"WARNING: Failed to find {go_quote(name)} on PATH. Check to ensure the "
            f"directory {go_quote(os.path.dirname(script_os_path))} is added to your "
            "PATH environment variable.",
            file=env.err_writer,
        )
        found = ""
    if found != script_os_path:
        print(
            f"WARNING: Executable on PATH for name {go_quote(name)} does not match "
            f"install location: {go_quote(found)} != {go_quote(script_os_path)}",
            file=env.err_writer,
        )
    return script_path


def installed(env: Environment) -> list[str]:
    """Return the names of the installed command scripts, sorted."""
    bin_dir = _resolve(env, env.user_bin_dir())
    try:
        names = sorted(entry.name for entry in bin_dir.iterdir())
    except FileNotFoundError:
        return []
    result = []
    for name in names:
        try:
            if is_app_executable(env, posixpath.join(env.user_bin_dir(), name)):
                result.append(name)
        except FileNotFoundError:
            continue
    return result


def remove(env: Environment, name: str) -> bool:
    """Remove command ``name`` and its build; return whether it was installed.

    Files that goop did not write are left alone.
    """
    bin_path = env.package_bin_path(name)
    try:
        if not is_app_executable(env, bin_path):
            return False
    except FileNotFoundError:
        return False
    _resolve(env, bin_path).unlink()
    shutil.rmtree(_resolve(env, env.package_install_dir(name)), ignore_errors=True)
    return True