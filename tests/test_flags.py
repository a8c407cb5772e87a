import pytest

from gomodkit.gopages.flags import (
    Args,
    FilePathContents,
    FlagError,
    HelpRequested,
    parse,
)
from gomodkit.gopages.linker import GoPagesLinker, TemplateLinker


def test_parse_help():
    with pytest.raises(HelpRequested) as info:
        parse("-help")
    assert info.value.output.startswith("Usage of gopages:")
    assert '-out string' in info.value.output


def test_defaults():
    assert parse() == Args(output_path="dist")


def test_parse_values():
    args = parse("-out", "site", "-internal", "--base=/b", "-gh-pages=false")
    assert args.output_path == "site"
    assert args.index_internal_packages is True
    assert args.base_url == "/b"
    assert args.github_pages is False


def test_unknown_flag():
    with pytest.raises(FlagError) as info:
        parse("-not-a-flag")
    assert str(info.value) == "flag provided but not defined: -not-a-flag"
    assert "Usage of gopages:" in info.value.output


def test_missing_argument():
    with pytest.raises(FlagError):
        parse("-out")


def test_linker_default():
    args = Args(base_url="/some/base")
    assert args.linker("not used") == GoPagesLinker("/some/base")


def test_linker_template():
    args = Args(base_url="/some/base", source_link_template="{{.Path}}#L{{.Line}}")
    expect = TemplateLinker("github.com/org/repo", args.source_link_template)
    assert args.linker("github.com/org/repo") == expect


def test_file_no_flag():
    args = parse()
    assert args.include_in_head.contents is None
    assert str(args.include_in_head) == ""


def test_file_valid(tmp_path):
    path = tmp_path / "file"
    path.write_text("some contents")
    args = parse("-include-head", str(path))
    assert args.include_in_head.contents == b"some contents"
    assert str(args.include_in_head) == "some contents"


def test_file_invalid():
    with pytest.raises(FlagError) as info:
        parse("-include-head", "/does/not/exist")
    assert "no such file or directory" in str(info.value).lower()
    f = FilePathContents()
    with pytest.raises(OSError):
        f.set("/does/not/exist")
    assert str(f) == ""