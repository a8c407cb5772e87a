"""Word wrapping for command usage text.

Lines keep their leading indentation when wrapped, and breaks inside
double-quoted phrases are avoided where possible.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BreakZone:
    """A half-open index range ``[low, high)`` where a line should not break."""

    low: int
    high: int

    def contains(self, i: int) -> bool:
        """Report whether index ``i`` lies inside this zone."""
        return self.low <= i < self.high

    def best_break(self) -> int:
        """Return the zone edge that makes the better break point."""
        half_length = (self.high - self.low) // 2
        if self.low > half_length:
            return self.low
        return self.high


def _first_non_space(s: str) -> int:
    return next((i for i, ch in enumerate(s) if not ch.isspace()), -1)


def _last_non_space(s: str) -> int:
    return next((i for i in range(len(s) - 1, -1, -1) if not s[i].isspace()), -1)


def _last_space(s: str) -> int:
    return next((i for i in range(len(s) - 1, -1, -1) if s[i].isspace()), -1)


def word_wrap_lines(columns: int, s: str) -> str:
    """Wrap every line of ``s`` so its non-space text fits in ``columns``.

    Leading indentation is repeated on wrapped lines, so a line's total
    width may exceed ``columns``.
    """
    parts = s.split("\n")
    lines = [part + "\n" for part in parts[:-1]] + [parts[-1]]
    return "".join(_word_wrap_line(columns, line) for line in lines)


def _word_wrap_line(columns: int, line: str) -> str:
    first = _first_non_space(line)
    if first == -1:
        return line
    last = _last_non_space(line)
    prefix, suffix = line[:first], line[last + 1:]
    wrapped = word_wrap(columns, line[first:last + 1])
    return prefix + ("\n" + prefix).join(wrapped) + suffix


def word_wrap(columns: int, s: str) -> list[str]:
    """Split ``s`` into lines of at most ``columns`` characters.

    Words longer than ``columns`` are never split, and quoted phrases are
    kept together where possible.
    """
    if columns < 0:
        raise ValueError(f"columns must not be negative: {columns}")
    lines: list[str] = []
    s = s.strip()
    while s:
        candidates = [len(s)]
        if columns < len(s):
            candidates.append(_last_space(s[:columns]))
        zones = non_break_zones(s)
        candidates = [_avoid_zones(c, zones) for c in candidates]
        cut = smallest_non_negative(*candidates)
        lines.append(s[:cut])
        s = s[cut:].strip()
    return lines


def non_break_zones(s: str) -> list[BreakZone]:
    """Return the ranges of ``s`` covered by pairs of double quotes."""
    zones: list[BreakZone] = []
    open_quote = -1
    for index, ch in enumerate(s):
        if ch != '"':
            continue
        if open_quote == -1:
            open_quote = index
        else:
            zones.append(BreakZone(open_quote, index + 1))
            open_quote = -1
    return zones


def _avoid_zones(candidate: int, zones: list[BreakZone]) -> int:
    for zone in zones:
        if zone.contains(candidate):
            return zone.best_break()
    return candidate


def smallest_non_negative(*args: int) -> int:
    """Return the smallest non-negative value, or 0 if there is none."""
    return min((value for value in args if value >= 0), default=0)