"""Build hyperlinks from documentation pages to source files."""

from __future__ import annotations

import posixpath
from abc import ABC, abstractmethod
from dataclasses import dataclass
from urllib.parse import urlsplit

from gomodkit.gopages import gotemplate


def go_path_join(*elems: str) -> str:
    """Join slash-separated path elements, skipping empty ones, and clean."""
    parts = [e for e in elems if e]
    if not parts:
        return ""
    cleaned = posixpath.normpath("/".join(parts))
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


@dataclass(frozen=True)
class LinkOptions:
    """Options for a link to a source file."""

    line: int = 0


class Linker(ABC):
    """Produces a URL for any package file."""

    @abstractmethod
    def link_to_source(self, package_path: str, options: LinkOptions) -> str:
        """Return the URL of ``package_path``'s source."""


@dataclass(frozen=True)
class GoPagesLinker(Linker):
    """Links to the source pages generated alongside the documentation."""

    base_url: str = ""

    def link_to_source(self, package_path: str, options: LinkOptions) -> str:
        path = go_path_join(self.base_url, "/src", package_path)
        if posixpath.splitext(path)[1] == ".go":
            path += ".html"
        if options.line > 0:
            path += f"#L{options.line}"
        return path


class TemplateLinker(Linker):
    """Links to external source pages through a user-supplied template."""

    def __init__(self, module_package_url: str, template: str):
        parts = urlsplit(module_package_url)
        self.module_package = go_path_join(parts.netloc, parts.path)
        self.template = gotemplate.parse(template)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TemplateLinker):
            return NotImplemented
        return (self.module_package, self.template) == (other.module_package, other.template)

    def __hash__(self) -> int:
        return hash((self.module_package, self.template))

    def __repr__(self) -> str:
        return f"TemplateLinker({self.module_package!r}, {self.template.source!r})"

    def link_to_source(self, package_path: str, options: LinkOptions) -> str:
        file_path = package_path.removeprefix(self.module_package).removeprefix("/")
        if file_path == package_path:
            return ""
        link = self.template.execute({"Path": file_path, "Line": options.line})
        urlsplit(link)  # raises ValueError on a malformed URL
        return link

    def should_scrape_package(self, package_path: str) -> bool:
        """Report whether ``package_path`` lies inside this module."""
        return package_path.startswith(self.module_package + "/")