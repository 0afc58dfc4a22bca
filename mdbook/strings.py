"""Selecting lines of text by range or by ANCHOR comments."""

from __future__ import annotations

import re

__all__ = [
    "take_lines",
    "take_anchored_lines",
    "take_rustdoc_include_lines",
    "take_rustdoc_include_anchored_lines",
]

_ANCHOR_START = re.compile(r"ANCHOR:\s*(?P<anchor_name>[\w_-]+)")
_ANCHOR_END = re.compile(r"ANCHOR_END:\s*(?P<anchor_name>[\w_-]+)")


def _split_lines(text: str) -> list[str]:
    """Split on ``\\n`` (dropping a preceding ``\\r``) without a trailing empty line."""
    if not text:
        return []
    parts = text.split("\n")
    last = parts.pop()
    lines = [line[:-1] if line.endswith("\r") else line for line in parts]
    if last:
        lines.append(last)
    return lines


def _bounds(lines: slice | range) -> tuple[int, int | None]:
    if isinstance(lines, range):
        if lines.step != 1:
            raise ValueError("line ranges must have a step of 1")
        start, stop = lines.start, lines.stop
    elif isinstance(lines, slice):
        if lines.step not in (None, 1):
            raise ValueError("line ranges must have a step of 1")
        start = 0 if lines.start is None else lines.start
        stop = lines.stop
    else:
        raise TypeError(f"expected a slice or range, got {type(lines).__name__}")
    if start < 0 or (stop is not None and stop < 0):
        raise ValueError("line ranges cannot be negative")
    return start, stop


def take_lines(text: str, lines: slice | range) -> str:
    """Return the lines of ``text`` selected by ``lines`` (zero-based, end exclusive)."""
    start, stop = _bounds(lines)
    return "\n".join(_split_lines(text)[start:stop])


def take_anchored_lines(text: str, anchor: str) -> str:
    """Return the lines between ``ANCHOR: anchor`` and ``ANCHOR_END: anchor``.

    Lines holding other anchor markers are left out.
    """
    retained: list[str] = []
    anchor_found = False
    for line in _split_lines(text):
        if anchor_found:
            end = _ANCHOR_END.search(line)
            if end is not None:
                if end["anchor_name"] == anchor:
                    break
            elif not _ANCHOR_START.search(line):
                retained.append(line)
        else:
            start = _ANCHOR_START.search(line)
            if start is not None and start["anchor_name"] == anchor:
                anchor_found = True
    return "\n".join(retained)


def take_rustdoc_include_lines(text: str, lines: slice | range) -> str:
    """Keep lines within ``lines`` as they are and hide the rest behind ``# ``."""
    start, stop = _bounds(lines)
    return "\n".join(
        line if start <= index and (stop is None or index < stop) else f"# {line}"
        for index, line in enumerate(_split_lines(text))
    )


def take_rustdoc_include_anchored_lines(text: str, anchor: str) -> str:
    """Keep lines inside the named anchor as they are and hide the rest behind ``# ``.

    Anchor marker lines themselves are dropped.
    """
    output: list[str] = []
    within = False
    for line in _split_lines(text):
        if within:
            end = _ANCHOR_END.search(line)
            if end is not None:
                if end["anchor_name"] == anchor:
                    within = False
            elif not _ANCHOR_START.search(line):
                output.append(line)
        else:
            start = _ANCHOR_START.search(line)
            if start is not None:
                if start["anchor_name"] == anchor:
                    within = True
            elif not _ANCHOR_END.search(line):
                output.append(f"# {line}")
    return "\n".join(output)