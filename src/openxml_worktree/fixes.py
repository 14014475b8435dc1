"""Repair actions attached to findings, and the text edits behind them.

A fix is plain data: the finding says *what* to change, and the
:class:`~openxml_worktree.autofix.AutoFixEngine` performs the change. The
functions here work on strings only; reading and writing files is left to
the engine.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class RemoveXmlFragment:
    """Delete one exact element text from a part."""

    file: str
    fragment: str


@dataclass(frozen=True)
class DeleteFiles:
    """Delete a part and its sidecar files. The first path is the primary one."""

    paths: tuple[str, ...]

    @property
    def primary(self) -> str:
        return self.paths[0]


@dataclass(frozen=True)
class InsertClosingTag:
    """Close an element left open on a given (1-based) line."""

    file: str
    line: int
    element: str  # Qualified name as written, e.g. "a:t"


FixAction = RemoveXmlFragment | DeleteFiles | InsertClosingTag


def remove_fragment(content: str, fragment: str) -> str:
    """Remove the first exact occurrence of ``fragment`` from ``content``.

    When the fragment sits alone on its line, the indentation and the line
    break go with it so the surrounding entries keep their layout.
    Returns ``content`` unchanged if the fragment is not present.
    """
    start = content.find(fragment)
    if start < 0 or not fragment:
        return content
    end = start + len(fragment)

    line_start = content.rfind("\n", 0, start) + 1
    if content[line_start:start].strip(" \t") == "":
        tail = end
        while tail < len(content) and content[tail] in " \t":
            tail += 1
        if content.startswith("\r\n", tail):
            return content[:line_start] + content[tail + 2 :]
        if content.startswith("\n", tail):
            return content[:line_start] + content[tail + 1 :]

    return content[:start] + content[end:]


def _tag_patterns(element: str) -> tuple[re.Pattern[str], re.Pattern[str]]:
    name = re.escape(element)
    # Start tags only: "<a:t>" and "<a:t attr=...>", never "<a:t/>" or "<a:tbl>".
    open_tag = re.compile(rf"<{name}(?:\s[^<>]*?)?(?<!/)>")
    close_tag = re.compile(rf"</{name}\s*>")
    return open_tag, close_tag


def _close_on_line(text: str, element: str) -> str:
    open_tag, close_tag = _tag_patterns(element)
    if len(open_tag.findall(text)) <= len(close_tag.findall(text)):
        return text

    closing = f"</{element}>"
    name = re.escape(element)

    # <a:t>Hello<a:r>  ->  <a:t>Hello</a:t><a:r>
    before_next = re.compile(rf"({open_tag.pattern})([^<]*)(<(?!/{name}\s*>))")
    fixed = before_next.sub(lambda m: m.group(1) + m.group(2) + closing + m.group(3), text)
    if fixed != text:
        return fixed

    # <a:t>Hello  ->  <a:t>Hello</a:t>
    trailing = re.compile(rf"({open_tag.pattern})([^<]+)$")
    return trailing.sub(lambda m: m.group(1) + m.group(2) + closing, text, count=1)


def insert_closing_tag(content: str, element: str, line: int) -> str:
    """Insert a missing closing tag for ``element``.

    Tries the reported line first, then falls back to the first
    ``<element>text</other>`` run in the whole content. Only one corruption
    is addressed per call. Returns ``content`` unchanged if no edit applies.
    """
    lines = content.split("\n")
    if 1 <= line <= len(lines):
        text = lines[line - 1]
        eol = "\r" if text.endswith("\r") else ""
        body = text[: len(text) - len(eol)]
        fixed = _close_on_line(body, element)
        if fixed != body:
            lines[line - 1] = fixed + eol
            return "\n".join(lines)

    open_tag, close_tag = _tag_patterns(element)
    if len(open_tag.findall(content)) <= len(close_tag.findall(content)):
        return content

    closing = f"</{element}>"
    name = re.escape(element)
    broken = re.compile(rf"({open_tag.pattern}[^<]*)(</(?!{name}\s*>))")
    return broken.sub(lambda m: m.group(1) + closing + m.group(2), content, count=1)


def read_part_text(path: Path) -> str:
    """Read a part as UTF-8 without newline translation."""
    return path.read_bytes().decode("utf-8")


def write_part_text(path: Path, content: str) -> None:
    """Replace a part's content in one step.

    The text is written in full to a temporary sibling first, so a failed
    write leaves the original part untouched.
    """
    tmp = path.with_name(path.name + ".tmp")
    try:
        with open(tmp, "wb") as f:
            f.write(content.encode("utf-8"))
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    finally:
        if tmp.exists():
            tmp.unlink()
