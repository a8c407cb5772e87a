import pytest

from gomodkit.gopages.gomod import module_package, parse_module_path


def test_module_package(tmp_path):
    (tmp_path / "go.mod").write_text("module example.com/tools/docs\n\ngo 1.19\n")
    assert module_package(tmp_path) == "example.com/tools/docs"


def test_missing_go_mod(tmp_path):
    with pytest.raises(FileNotFoundError):
        module_package(tmp_path)


def test_empty_go_mod(tmp_path):
    (tmp_path / "go.mod").write_text("go 1.19\n")
    with pytest.raises(ValueError):
        module_package(tmp_path)


@pytest.mark.parametrize(
    "data, expect",
    [
        (b"module thing", "thing"),
        ('module "example.com/my/thing"', "example.com/my/thing"),
        ("module example.com/my/thing // comment", "example.com/my/thing"),
        ("modulex foo\nmodule bar", "bar"),
        ("go 1.19", ""),
    ],
)
def test_parse_module_path(data, expect):
    assert parse_module_path(data) == expect