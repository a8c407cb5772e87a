"""A small text template engine using the ``{{ ... }}`` action syntax.

Supported: field access (``.Name``, ``.A.B``, ``.``), string, integer and
boolean literals, function calls with arguments, pipelines joined by ``|``,
``{{if}}``/``{{else}}``/``{{else if}}``/``{{end}}``, comments
(``{{/* ... */}}``) and whitespace trim markers (``{{-`` and ``-}}``).
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Union

_ACTION = re.compile(r"\{\{(-[ \t\r\n])?(.*?)([ \t\r\n]-)?\}\}", re.S)
_WORD = re.compile(r'"(?:[^"\\]|\\.)*"|`[^`]*`|\S+')
_INT = re.compile(r"[+-]?\d+")
_IDENT = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class TemplateError(Exception):
    """Raised when a template cannot be parsed or executed."""


def _builtin_not(value: Any) -> bool:
    return not value


def _builtin_print(*values: Any) -> str:
    return "".join(_format(v) for v in values)


_BUILTINS: dict[str, Callable[..., Any]] = {
    "not": _builtin_not,
    "len": len,
    "print": _builtin_print,
}


@dataclass(frozen=True)
class _Arg:
    kind: str  # "field", "literal" or "func"
    value: Any


@dataclass(frozen=True)
class _Command:
    head: _Arg
    args: tuple[_Arg, ...]


@dataclass(frozen=True)
class _Text:
    text: str


@dataclass(frozen=True)
class _Action:
    pipeline: tuple[_Command, ...]


@dataclass(frozen=True)
class _If:
    pipeline: tuple[_Command, ...]
    then: list
    otherwise: list = field(default_factory=list)


_Node = Union[_Text, _Action, _If]


def _tokenize(text: str) -> list[tuple[str, str]]:
    tokens: list[tuple[str, str]] = []
    pos = 0
    trim_next = False
    for match in _ACTION.finditer(text):
        chunk = text[pos:match.start()]
        if trim_next:
            chunk = chunk.lstrip()
        if match.group(1):
            chunk = chunk.rstrip()
        if chunk:
            tokens.append(("text", chunk))
        body = match.group(2).strip()
        if not (body.startswith("/*") and body.endswith("*/")):
            tokens.append(("action", body))
        trim_next = bool(match.group(3))
        pos = match.end()
    rest = text[pos:]
    if "{{" in rest:
        raise TemplateError("unclosed action")
    if trim_next:
        rest = rest.lstrip()
    if rest:
        tokens.append(("text", rest))
    return tokens


class _Parser:
    def __init__(self, tokens: list[tuple[str, str]], funcs: Mapping[str, Callable[..., Any]]):
        self.tokens = tokens
        self.pos = 0
        self.funcs = funcs

    def parse(self) -> list:
        nodes, term = self._list()
        if term is not None:
            raise TemplateError(f"unexpected {{{{{term}}}}}")
        return nodes

    def _list(self) -> tuple[list, str | None]:
        nodes: list = []
        while self.pos < len(self.tokens):
            kind, body = self.tokens[self.pos]
            self.pos += 1
            if kind == "text":
                nodes.append(_Text(body))
                continue
            word = body.split(None, 1)[0] if body else ""
            if word in ("end", "else"):
                return nodes, body
            if word == "if":
                nodes.append(self._if(body[2:].strip()))
            else:
                nodes.append(_Action(self._pipeline(body)))
        return nodes, None

    def _if(self, text: str) -> _If:
        pipeline = self._pipeline(text)
        then, term = self._list()
        if term is None:
            raise TemplateError("unexpected EOF: missing {{end}}")
        if term == "end":
            return _If(pipeline, then)
        if term == "else":
            otherwise, term = self._list()
            if term != "end":
                raise TemplateError("expected {{end}} after {{else}}")
            return _If(pipeline, then, otherwise)
        if term.startswith("else if "):
            return _If(pipeline, then, [self._if(term[len("else if "):].strip())])
        raise TemplateError(f"unexpected {{{{{term}}}}}")

    def _pipeline(self, text: str) -> tuple[_Command, ...]:
        words = _WORD.findall(text)
        if not words:
            raise TemplateError("missing value for command")
        commands: list[list[str]] = [[]]
        for word in words:
            if word == "|":
                commands.append([])
            else:
                commands[-1].append(word)
        if any(not cmd for cmd in commands):
            raise TemplateError("missing command in pipeline")
        return tuple(
            _Command(self._arg(cmd[0]), tuple(self._arg(w) for w in cmd[1:]))
            for cmd in commands
        )

    def _arg(self, word: str) -> _Arg:
        if word.startswith("."):
            path = tuple(p for p in word.split(".") if p)
            return _Arg("field", path)
        if word.startswith('"'):
            try:
                return _Arg("literal", json.loads(word))
            except ValueError as exc:
                raise TemplateError(f"bad string literal {word}") from exc
        if word.startswith("`"):
            return _Arg("literal", word[1:-1])
        if _INT.fullmatch(word):
            return _Arg("literal", int(word))
        if word in ("true", "false"):
            return _Arg("literal", word == "true")
        if word == "nil":
            return _Arg("literal", None)
        if _IDENT.fullmatch(word):
            if word not in self.funcs and word not in _BUILTINS:
                raise TemplateError(f'function "{word}" not defined')
            return _Arg("func", word)
        raise TemplateError(f"unexpected {word!r} in command")


def _format(value: Any) -> str:
    if value is None:
        return "<no value>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, bytes):
        return value.decode()
    return str(value)


class Template:
    """A parsed template, ready to execute against data."""

    def __init__(self, source: str, funcs: Mapping[str, Callable[..., Any]] | None = None):
        self.source = source
        self.funcs = dict(funcs or {})
        self._nodes = _Parser(_tokenize(source), self.funcs).parse()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Template):
            return NotImplemented
        return self.source == other.source

    def __hash__(self) -> int:
        return hash(self.source)

    def __repr__(self) -> str:
        return f"Template({self.source!r})"

    def execute(self, data: Any) -> str:
        """Render the template with ``data`` as the dot value."""
        out: list[str] = []
        self._walk(self._nodes, data, out)
        return "".join(out)

    def _walk(self, nodes: list, data: Any, out: list[str]) -> None:
        for node in nodes:
            if isinstance(node, _Text):
                out.append(node.text)
            elif isinstance(node, _Action):
                out.append(_format(self._run(node.pipeline, data)))
            elif self._run(node.pipeline, data):
                self._walk(node.then, data, out)
            else:
                self._walk(node.otherwise, data, out)

    def _run(self, pipeline: tuple[_Command, ...], data: Any) -> Any:
        value: Any = None
        for index, command in enumerate(pipeline):
            args = [self._value(a, data) for a in command.args]
            if index > 0:
                args.append(value)
            if command.head.kind == "func":
                value = self._call(command.head.value, args)
            elif args:
                raise TemplateError("can't give argument to non-function")
            else:
                value = self._value(command.head, data)
        return value

    def _value(self, arg: _Arg, data: Any) -> Any:
        if arg.kind == "literal":
            return arg.value
        if arg.kind == "func":
            return self._call(arg.value, [])
        value = data
        for name in arg.value:
            if isinstance(value, Mapping):
                value = value.get(name)
            elif hasattr(value, name):
                value = getattr(value, name)
            else:
                raise TemplateError(f"can't evaluate field {name} in {type(value).__name__}")
        return value

    def _call(self, name: str, args: list[Any]) -> Any:
        fn = self.funcs.get(name) or _BUILTINS[name]
        try:
            return fn(*args)
        except TemplateError:
            raise
        except Exception as exc:
            raise TemplateError(f"error calling {name}: {exc}") from exc


def parse(text: str, funcs: Mapping[str, Callable[..., Any]] | None = None) -> Template:
    """Parse ``text`` into a :class:`Template` that may call ``funcs``."""
    return Template(text, funcs)