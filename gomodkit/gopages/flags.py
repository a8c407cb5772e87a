"""Command-line options for generating documentation pages."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from pathlib import Path

from gomodkit.gopages.linker import GoPagesLinker, Linker, TemplateLinker

_PROGRAM = "gopages"


class FlagError(Exception):
    """Invalid command-line usage; ``output`` holds the text for the user."""

    def __init__(self, message: str, output: str = ""):
        super().__init__(message)
        self.output = output


class HelpRequested(FlagError):
    """The user asked for usage help; ``output`` holds the usage text."""


@dataclass
class FilePathContents:
    """A flag value holding the contents of the file it names."""

    contents: bytes | None = None

    def set(self, path: str) -> None:
        """Read the file at ``path`` and keep its contents."""
        self.contents = Path(path).read_bytes()

    def __str__(self) -> str:
        return "" if self.contents is None else self.contents.decode()


@dataclass
class Args:
    """All command-line options."""

    base_url: str = ""
    github_pages: bool = False
    github_pages_token: str = ""
    github_pages_user: str = ""
    include_in_head: FilePathContents = field(default_factory=FilePathContents)
    index_internal_packages: bool = False
    source_link_template: str = ""
    output_path: str = "dist"
    site_description: str = ""
    site_title: str = ""
    watch: bool = False

    def linker(self, module_package: str) -> Linker:
        """Return the source linker these options call for."""
        if self.source_link_template:
            return TemplateLinker(module_package, self.source_link_template)
        return GoPagesLinker(self.base_url)


@dataclass(frozen=True)
class _Flag:
    name: str
    attr: str
    kind: str  # "string", "bool" or "value"
    usage: str
    default: str = ""


_FLAGS = {
    f.name: f
    for f in (
        _Flag("out", "output_path", "string", "Output path for static files", "dist"),
        _Flag("base", "base_url", "string", "Base URL to use for static assets"),
        _Flag("brand-title", "site_title", "string", "Branding title in the top left of documentation"),
        _Flag("brand-description", "site_description", "string",
              "Branding description in the top left of documentation"),
        _Flag("source-link", "source_link_template", "string",
              'Custom source code link template. Disables built-in source code pages. For example, '
              '"https://github.com/johnstarich/go/blob/master/gopages/{{.Path}}{{if .Line}}#L{{.Line}}{{end}}" '
              "generates links compatible with GitHub and GitLab. Must be a valid Go template and must "
              "generate valid URLs."),
        _Flag("include-head", "include_in_head", "value",
              "Includes the given HTML file's contents in every page's '<head></head>'. Useful for "
              "including custom analytics scripts. Must be valid HTML."),
        _Flag("internal", "index_internal_packages", "bool",
              "Includes 'internal' packages in the package index and unexported functions. Useful for "
              "sharing documentation within the same development team. Note: This only affects page "
              "generation for non-internal packages, like package lists. Internal package docs are "
              "always generated."),
        _Flag("gh-pages", "github_pages", "bool",
              "Automatically commit the output path to the gh-pages branch. The current branch must be clean."),
        _Flag("gh-pages-user", "github_pages_user", "string", "The Git username to push with"),
        _Flag("gh-pages-token", "github_pages_token", "string",
              "The Git token to push with. Usually this is an API key."),
    )
}

_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}


def _usage() -> str:
    lines = [f"Usage of {_PROGRAM}:\n"]
    for name in sorted(_FLAGS):
        flag = _FLAGS[name]
        line = f"  -{name}"
        if flag.kind != "bool":
            line += " " + flag.kind
        line += "\n    \t" + flag.usage.replace("\n", "\n    \t")
        if flag.kind == "string" and flag.default:
            line += f' (default "{flag.default}")'
        lines.append(line + "\n")
    return "".join(lines)


def _fail(message: str) -> FlagError:
    return FlagError(message, f"{message}\n{_usage()}")


def parse(*args: str) -> Args:
    """Parse command-line arguments into :class:`Args`.

    Raises :class:`HelpRequested` for ``-help``/``-h`` and
    :class:`FlagError` for bad usage, each carrying the text to show.
    """
    result = Args()
    pending = deque(args)
    while pending:
        arg = pending[0]
        if len(arg) < 2 or not arg.startswith("-"):
            break
        pending.popleft()
        name = arg[2:] if arg.startswith("--") else arg[1:]
        if arg == "--":
            break
        if not name or name[0] in "-=":
            raise _fail(f"bad flag syntax: {arg}")
        value: str | None = None
        if "=" in name:
            name, value = name.split("=", 1)
        flag = _FLAGS.get(name)
        if flag is None:
            if name in ("help", "h"):
                raise HelpRequested("flag: help requested", _usage())
            raise _fail(f"flag provided but not defined: -{name}")
        if flag.kind == "bool":
            if value is None or value in _TRUE:
                setattr(result, flag.attr, True)
            elif value in _FALSE:
                setattr(result, flag.attr, False)
            else:
                raise _fail(f'invalid boolean value "{value}" for -{name}: parse error')
            continue
        if value is None:
            if not pending:
                raise _fail(f"flag needs an argument: -{name}")
            value = pending.popleft()
        if flag.kind == "value":
            try:
                getattr(result, flag.attr).set(value)
            except OSError as exc:
                raise _fail(f'invalid value "{value}" for flag -{name}: {exc}') from exc
        else:
            setattr(result, flag.attr, value)
    return result