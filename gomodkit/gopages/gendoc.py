"""Generate the documentation comment of the gopages command from a template."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from gomodkit.gopages import flags, gotemplate
from gomodkit.gopages.wrap import word_wrap_lines


def _comment(s: str) -> str:
    return s.replace("\n", "\n// ").strip()


_FUNCS = {
    "comment": _comment,
    "wordWrap": word_wrap_lines,
}


def _usage() -> str:
    try:
        flags.parse("-help")
    except flags.HelpRequested as exc:
        return exc.output
    raise RuntimeError("requesting help did not produce usage text")


def _format_source(text: str) -> str:
    lines = [line.rstrip() for line in text.splitlines()]
    return "\n".join(lines).rstrip("\n") + "\n"


def gen_doc(template_text: str | bytes) -> str:
    """Render the doc template with the command's usage text.

    The blank line before ``package main`` is removed so the comment
    attaches to the package, and trailing whitespace is trimmed.
    """
    if isinstance(template_text, bytes):
        template_text = template_text.decode()
    text = template_text.replace("\n\npackage main", "\npackage main", 1)
    template = gotemplate.parse(text, _FUNCS)
    doc = template.execute({"Usage": _usage()})
    return _format_source(doc)


def run(template_path: str, out_path: str) -> None:
    """Render the template at ``template_path`` into ``out_path``."""
    if not template_path or not out_path:
        raise ValueError("Provide doc template and output file paths")
    template_text = Path(template_path).read_text(encoding="utf-8")
    with open(out_path, "w", encoding="utf-8") as out:
        out.write(gen_doc(template_text))


def main(argv: list[str] | None = None) -> None:
    """Command entry point; exits with status 1 on failure."""
    parser = argparse.ArgumentParser(prog="gendoc")
    parser.add_argument("-template", default="", help="Path to the desired doc template file")
    parser.add_argument("-out", default="", help="Output path of completed template")
    ns = parser.parse_args(argv)
    try:
        run(ns.template, ns.out)
    except (OSError, ValueError, gotemplate.TemplateError) as exc:
        print(f"gendoc: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc