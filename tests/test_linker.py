import pytest

from gomodkit.gopages.gotemplate import TemplateError
from gomodkit.gopages.linker import GoPagesLinker, LinkOptions, TemplateLinker


def test_new_gopages_linker():
    assert GoPagesLinker("/some/base") == GoPagesLinker(base_url="/some/base")


@pytest.mark.parametrize(
    "base, pkg, options, expect",
    [
        ("", "github.com/org/repo/mypkg/myfile.go", LinkOptions(),
         "/src/github.com/org/repo/mypkg/myfile.go.html"),
        ("/some/base", "github.com/org/repo/mypkg/myfile.go", LinkOptions(),
         "/some/base/src/github.com/org/repo/mypkg/myfile.go.html"),
        ("", "github.com/org/repo/mypkg/myfile.go", LinkOptions(line=10),
         "/src/github.com/org/repo/mypkg/myfile.go.html#L10"),
    ],
)
def test_gopages_link_to_source(base, pkg, options, expect):
    assert GoPagesLinker(base).link_to_source(pkg, options) == expect


def test_new_template_linker():
    tmpl = "https://github.com/johnstarich/go/blob/master/gopages/{{.Path}}{{if .Line}}#L{{.Line}}{{end}}"
    linker = TemplateLinker("https://github.com/johnstarich/go", tmpl)
    assert linker.module_package == "github.com/johnstarich/go"
    assert linker == TemplateLinker("github.com/johnstarich/go", tmpl)


@pytest.mark.parametrize(
    "module, tmpl, pkg, options, expect",
    [
        ("github.com/org/repo", "{{.Path}}", "github.com/org/repo/mypkg/myfile.go",
         LinkOptions(), "mypkg/myfile.go"),
        ("github.com/org/repo", "{{.Path}}#L{{.Line}}", "github.com/org/repo/mypkg/myfile.go",
         LinkOptions(line=10), "mypkg/myfile.go#L10"),
        ("github.com/org/repo", "{{.Path}}#L{{.Line}}", "example.com/org/repo/mypkg/myfile.go",
         LinkOptions(), ""),
    ],
)
def test_template_link_to_source(module, tmpl, pkg, options, expect):
    assert TemplateLinker(module, tmpl).link_to_source(pkg, options) == expect


@pytest.mark.parametrize(
    "pkg, expect",
    [
        ("github.com/org/repo/mypkg/myfile.go", True),
        ("example.com/org/repo/mypkg/myfile.go", False),
    ],
)
def test_template_should_scrape_package(pkg, expect):
    assert TemplateLinker("github.com/org/repo", "").should_scrape_package(pkg) is expect


def test_invalid_template():
    with pytest.raises(TemplateError):
        TemplateLinker("github.com/org/repo", "{{ InvalidSyntax }}")