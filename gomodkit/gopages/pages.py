"""Rewrite generated documentation HTML."""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

from bs4 import BeautifulSoup, NavigableString

from gomodkit.gopages.linker import go_path_join

_PLAIN_TEXT = "View as plain text"


def customize_source_code_page(base_url: str, page: bytes | str) -> str:
    """Prefix root-relative links with ``base_url`` and drop plain-text links."""
    soup = BeautifulSoup(page, "html5lib")
    for anchor in soup.find_all("a"):
        first = anchor.contents[0] if anchor.contents else None
        if type(first) is NavigableString and str(first) == _PLAIN_TEXT:
            anchor.decompose()
            continue
        href = anchor.get("href")
        if isinstance(href, str) and href.startswith("/") and not href.startswith(base_url):
            anchor["href"] = go_path_join(base_url, href)
    return str(soup)


def node_html(
    original: Callable[..., str], base_url: str, module_package: str
) -> Callable[..., str]:
    """Wrap ``original`` so its links point at this site or the public docs."""
    package_prefix = '<a href="/pkg/'
    replacements = {
        package_prefix + module_package: '<a href="' + go_path_join(base_url, "/pkg", module_package),
        package_prefix: '<a href="https://pkg.go.dev/',
    }
    pattern = re.compile("|".join(re.escape(old) for old in replacements))

    def rewritten(*args: Any, **kwargs: Any) -> str:
        return pattern.sub(lambda m: replacements[m.group(0)], original(*args, **kwargs))

    return rewritten