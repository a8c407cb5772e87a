import io
import sys
from pathlib import Path

import pytest

from gomodkit.goop.environment import Environment, new_environment


def test_user_bin_dir_static():
    env = Environment(get_env=lambda name: "", static_bin_dir="bin")
    assert env.user_bin_dir() == "bin"


def test_user_bin_dir_environment():
    env_bin = "homes/joe/bin"
    env = Environment(
        get_env=lambda name: env_bin if name == "GOOP_BIN" else "",
        static_bin_dir="bin",
    )
    assert env.user_bin_dir() == env_bin


def test_user_bin_dir_reads_process_environment(monkeypatch):
    monkeypatch.setenv("GOOP_BIN", "custom/bin")
    assert Environment(static_bin_dir="bin").user_bin_dir() == "custom/bin"


def test_user_bin_dir_converts_os_path(tmp_path):
    shared = tmp_path / "shared" / "bin"
    env = Environment(
        root=tmp_path,
        os_paths=True,
        get_env=lambda name: str(shared) if name == "GOOP_BIN" else "",
        static_bin_dir="bin",
    )
    assert env.user_bin_dir() == "shared/bin"


def test_package_bin_path():
    env = Environment(get_env=lambda name: "", static_bin_dir="bin")
    assert env.package_bin_path("foo") == "bin/foo"


def test_package_install_dir():
    env = Environment(static_cache_dir="cache")
    assert env.package_install_dir("foo") == "cache/install/foo"
    assert env.package_install_dir("../../../../..") == "../../.."


def test_os_path_identity_without_os_paths():
    env = Environment()
    os_path = "/a/b/c"
    fs_path = env.from_os_path(os_path)
    assert fs_path == os_path
    assert env.to_os_path(fs_path) == os_path


def test_os_path_round_trip(tmp_path):
    env = Environment(root=tmp_path, os_paths=True)
    os_path = tmp_path / "a" / "b" / "c"
    assert env.from_os_path(str(os_path)) == "a/b/c"
    assert env.to_os_path("a/b/c") == str(os_path)
    assert env.from_os_path(str(tmp_path)) == "."


def test_from_os_path_outside_root(tmp_path):
    env = Environment(root=tmp_path / "inner", os_paths=True)
    with pytest.raises(ValueError):
        env.from_os_path(str(tmp_path / "other"))


def test_default_run_cmd_reports_exit_status():
    env = Environment()
    with pytest.raises(RuntimeError, match="exit status 3"):
        env.run_cmd(sys.executable, [sys.executable, "-c", "raise SystemExit(3)"])


def test_new_environment(monkeypatch, tmp_path):
    home = tmp_path / "home"
    for name, value in {
        "HOME": home,
        "USERPROFILE": home,
        "XDG_CONFIG_HOME": home / ".config",
        "XDG_CACHE_HOME": home / ".cache",
        "APPDATA": home / "AppData" / "Roaming",
        "LOCALAPPDATA": home / "AppData" / "Local",
    }.items():
        monkeypatch.setenv(name, str(value))
    out, err = io.StringIO(), io.StringIO()

    env = new_environment(out, err)

    assert env.out_writer is out
    assert env.err_writer is err
    assert env.static_os_home_dir == str(home)
    bin_dir = Path(env.to_os_path(env.static_bin_dir))
    cache_dir = Path(env.to_os_path(env.static_cache_dir))
    assert bin_dir.parts[-2:] == ("goop", "bin")
    assert cache_dir.name == "goop"
    assert bin_dir.is_relative_to(home)
    assert cache_dir.is_relative_to(home)