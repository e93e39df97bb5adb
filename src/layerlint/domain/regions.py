"""Script-region splitting for single-file components.

A ``.vue`` file is a sequence of root-level blocks (``<template>``,
``<script>``, ``<script setup>``, ``<style>``, custom blocks). Only the
script blocks carry imports. This is a structural scan, not an HTML
parse: it tracks root-level tags, skips comments, and matches nested
``<template>`` tags by name.

INVARIANT: a malformed block never hides sibling blocks found before it.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

SCRIPT_EXTENSIONS: tuple[str, ...] = (
    ".js",
    ".jsx",
    ".ts",
    ".tsx",
    ".mjs",
    ".cjs",
    ".mts",
    ".cts",
)
COMPONENT_EXTENSIONS: tuple[str, ...] = (".vue",)

# quoted attribute values may contain ``>`` (``generic="T extends Record<K, V>"``)
_ATTRS = r"""(?:"[^"]*"|'[^']*'|[^'">])*?"""
_OPEN_TAG = re.compile(r"<([A-Za-z][\w-]*)((?:\s" + _ATTRS + r")?)(/?)>", re.DOTALL)
_LANG_ATTR = re.compile(r"""\blang\s*=\s*["']?([\w-]+)""")
_SETUP_ATTR = re.compile(r"(?:^|\s)setup(?:\s|=|$)")


@dataclass(frozen=True)
class ScriptRegion:
    """One script block (or a whole script file).

    ``start_line`` is the 1-based line in the enclosing file where
    ``content`` begins, so edge lines can be reported file-relative.
    """

    content: str
    start_line: int = 1
    lang: str = "js"
    setup: bool = False


def _line_at(text: str, offset: int) -> int:
    return text.count("\n", 0, offset) + 1


def _find_block_end(text: str, name: str, start: int) -> tuple[int, int] | None:
    """Locate the close tag for a root-level block opened just before *start*.

    Returns ``(content_end, after_close)`` or None when unterminated.
    ``<template>`` may nest; other blocks end at their first close tag.
    """
    close = re.compile(rf"</{re.escape(name)}\s*>", re.IGNORECASE)
    if name.lower() != "template":
        m = close.search(text, start)
        return (m.start(), m.end()) if m else None

    opener = re.compile(rf"<{re.escape(name)}\b" + _ATTRS + r"(/?)>", re.IGNORECASE)
    depth = 1
    pos = start
    while depth:
        m_close = close.search(text, pos)
        if m_close is None:
            return None
        m_open = opener.search(text, pos, m_close.start())
        if m_open is not None:
            if not m_open.group(1):
                depth += 1
            pos = m_open.end()
            continue
        depth -= 1
        pos = m_close.end()
        if depth == 0:
            return m_close.start(), m_close.end()
    return None


def split_component(text: str) -> list[ScriptRegion]:
    """Split a single-file component into its root-level script regions."""
    regions: list[ScriptRegion] = []
    pos = 0
    length = len(text)
    while pos < length:
        lt = text.find("<", pos)
        if lt == -1:
            break
        if text.startswith("<!--", lt):
            end = text.find("-->", lt + 4)
            if end == -1:
                break
            pos = end + 3
            continue
        m = _OPEN_TAG.match(text, lt)
        if m is None:
            pos = lt + 1
            continue

        name, attrs, self_closing = m.group(1), m.group(2) or "", m.group(3)
        if self_closing:
            pos = m.end()
            continue

        bounds = _find_block_end(text, name, m.end())
        if bounds is None:
            logger.debug("Unterminated <%s> block at line %d", name, _line_at(text, lt))
            break

        content_end, after_close = bounds
        if name.lower() == "script":
            lang_match = _LANG_ATTR.search(attrs)
            regions.append(
                ScriptRegion(
                    content=text[m.end() : content_end],
                    start_line=_line_at(text, m.end()),
                    lang=lang_match.group(1) if lang_match else "js",
                    setup=bool(_SETUP_ATTR.search(attrs)),
                )
            )
        pos = after_close
    return regions


def split_script_regions(filename: str, text: str) -> list[ScriptRegion] | None:
    """Return the script regions of *filename*, or None if not applicable.

    Plain script files are a single region. Component files yield zero
    or more regions. Every other file type yields None.
    """
    lower = filename.lower()
    if lower.endswith(COMPONENT_EXTENSIONS):
        return split_component(text)
    if lower.endswith(SCRIPT_EXTENSIONS):
        ext = lower.rsplit(".", 1)[-1]
        return [ScriptRegion(content=text, start_line=1, lang=ext)]
    return None
