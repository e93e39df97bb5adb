"""Import extraction — ordered, deduplicated import edges per file.

Pure functions, no filesystem access. The extractor works in two steps:

1. :func:`mask_source` runs a small lexical scan over a script region,
   blanking comments, template literals and regex literals and
   replacing string contents with filler while remembering each string
   by offset. Import-looking text inside a comment or a string can then
   never produce an edge.
2. Four patterns over the masked text recognize static imports,
   dynamic ``import()`` / ``require()`` calls, and re-exports.

INVARIANT: a lexical failure in one region yields zero edges for that
region only; sibling regions are unaffected and nothing is raised.
"""

from __future__ import annotations

import logging
import re

from layerlint.domain.regions import ScriptRegion, split_script_regions
from layerlint.domain.types import ImportEdge, ImportKind

logger = logging.getLogger(__name__)


class ScriptScanError(ValueError):
    """Raised by :func:`mask_source` when a region cannot be tokenized."""


# Characters after which a ``/`` starts a regex literal rather than a division.
_REGEX_PRECEDERS = frozenset("(,=:[!&|?{};+-*%~^")
_REGEX_KEYWORDS = frozenset(
    {"return", "typeof", "case", "do", "else", "in", "of", "new", "delete", "void", "throw", "yield", "await"}
)
_JSX_LANGS = frozenset({"jsx", "tsx"})


def _previous_token(out: list[str]) -> tuple[str, str]:
    """Last significant char and (if it ends an identifier) the word before it."""
    i = len(out) - 1
    while i >= 0 and out[i].isspace():
        i -= 1
    if i < 0:
        return "", ""
    char = out[i]
    end = i + 1
    while i >= 0 and (out[i].isalnum() or out[i] in "_$"):
        i -= 1
    return char, "".join(out[i + 1 : end])


def _ends_with_postfix_update(out: list[str]) -> bool:
    """True when *out* ends with ``x++`` / ``x--`` (operand, then the operator)."""
    i = len(out) - 1
    while i >= 0 and out[i].isspace():
        i -= 1
    if i < 1 or out[i] not in "+-" or out[i - 1] != out[i]:
        return False
    j = i - 2
    if j >= 0 and out[j] == out[i]:
        return False
    while j >= 0 and out[j] in " \t":
        j -= 1
    return j >= 0 and (out[j].isalnum() or out[j] in "_$)]")


def _blank(chunk: str) -> str:
    """Replace *chunk* with spaces, keeping newlines for line counting."""
    return "".join("\n" if ch == "\n" else " " for ch in chunk)


def mask_source(code: str, *, lang: str = "js") -> tuple[str, dict[int, str]]:
    """Mask comments and literals in *code*.

    Returns ``(masked, strings)`` where *masked* has the same length and
    line structure as *code* and *strings* maps the offset of each
    single- or double-quoted literal's opening quote to its content.

    Raises:
        ScriptScanError: on an unterminated string, template, block
            comment, or ``${`` expression.
    """
    jsx = lang in _JSX_LANGS
    # one char per input char, so an input offset is also a masked offset
    out: list[str] = []
    strings: dict[int, str] = {}
    # one entry per open ``${``: brace depth inside that expression
    template_stack: list[int] = []
    in_template = False
    i = 0
    n = len(code)

    while i < n:
        ch = code[i]

        if in_template:
            if ch == "\\":
                out.extend(_blank(code[i : i + 2]))
                i += 2
                continue
            if ch == "`":
                out.append(" ")
                in_template = False
                i += 1
                continue
            if code.startswith("${", i):
                out.extend("  ")
                template_stack.append(0)
                in_template = False
                i += 2
                continue
            out.append("\n" if ch == "\n" else " ")
            i += 1
            continue

        if ch == "/" and code.startswith("//", i):
            end = code.find("\n", i)
            end = n if end == -1 else end
            out.extend(_blank(code[i:end]))
            i = end
            continue

        if ch == "/" and code.startswith("/*", i):
            end = code.find("*/", i + 2)
            if end == -1:
                raise ScriptScanError(f"unterminated block comment at offset {i}")
            out.extend(_blank(code[i : end + 2]))
            i = end + 2
            continue

        if ch in "'\"":
            j = i + 1
            while j < n and code[j] != ch:
                if code[j] == "\\":
                    j += 2
                    continue
                if code[j] == "\n":
                    break
                j += 1
            if j >= n or code[j] != ch:
                if jsx:
                    # JSX text such as ``<p>Don't</p>`` holds bare quotes
                    out.append(ch)
                    i += 1
                    continue
                raise ScriptScanError(f"unterminated string at offset {i}")
            strings[i] = code[i + 1 : j]
            out.append(ch)
            out.extend("\n" if c == "\n" else "s" for c in code[i + 1 : j])
            out.append(ch)
            i = j + 1
            continue

        if ch == "`":
            out.append(" ")
            in_template = True
            i += 1
            continue

        if template_stack and ch == "{":
            template_stack[-1] += 1
        elif template_stack and ch == "}":
            if template_stack[-1] == 0:
                template_stack.pop()
                out.append(" ")
                in_template = True
                i += 1
                continue
            template_stack[-1] -= 1

        if ch == "/":
            prev_char, prev_word = _previous_token(out)
            starts_regex = (
                prev_char == "" or prev_char in _REGEX_PRECEDERS or prev_word in _REGEX_KEYWORDS
            ) and not _ends_with_postfix_update(out)
            if starts_regex:
                # no closing slash on the line: read it as division
                end = _scan_regex(code, i)
                if end is not None:
                    out.extend(_blank(code[i:end]))
                    i = end
                    continue

        out.append(ch)
        i += 1

    if in_template or template_stack:
        raise ScriptScanError("unterminated template literal")
    return "".join(out), strings


def _scan_regex(code: str, start: int) -> int | None:
    """Return the offset just past the regex literal starting at *start*."""
    in_class = False
    j = start + 1
    n = len(code)
    while j < n:
        c = code[j]
        if c == "\n":
            return None
        if c == "\\":
            j += 2
            continue
        if c == "[":
            in_class = True
        elif c == "]":
            in_class = False
        elif c == "/" and not in_class:
            j += 1
            while j < n and (code[j].isalnum() or code[j] == "_"):
                j += 1
            return j
        j += 1
    return None


# ---------------------------------------------------------------------------
# Recognizers (run over masked text)
# ---------------------------------------------------------------------------

_STR = r"""(?P<str>'[^'\n]*'|"[^"\n]*")"""
_NOT_MEMBER = r"(?<![\w$.])"

_STATIC_IMPORT = re.compile(
    _NOT_MEMBER + r"import\s+(?P<type>type\s+)?(?:[\w$*{}\s,]+?\s*from\s*)?" + _STR
)
_DYNAMIC_IMPORT = re.compile(_NOT_MEMBER + r"import\s*\(\s*" + _STR + r"\s*[,)]")
_REQUIRE_CALL = re.compile(_NOT_MEMBER + r"require\s*\(\s*" + _STR + r"\s*\)")
_REEXPORT = re.compile(
    _NOT_MEMBER
    + r"export\s+(?P<type>type\s+)?(?:\*(?:\s+as\s+[\w$]+)?|\{[^}]*\})\s*from\s*"
    + _STR
)

_RECOGNIZERS: tuple[tuple[re.Pattern[str], ImportKind], ...] = (
    (_STATIC_IMPORT, ImportKind.STATIC),
    (_DYNAMIC_IMPORT, ImportKind.DYNAMIC),
    (_REQUIRE_CALL, ImportKind.DYNAMIC),
    (_REEXPORT, ImportKind.REEXPORT),
)


def extract_region_edges(anchor_file: str, region: ScriptRegion) -> list[ImportEdge]:
    """Extract edges from one region in source order (not deduplicated).

    Returns an empty list when the region cannot be scanned.
    """
    try:
        masked, strings = mask_source(region.content, lang=region.lang)
    except ScriptScanError as exc:
        logger.debug(
            "Skipping script region of %s at line %d: %s",
            anchor_file,
            region.start_line,
            exc,
        )
        return []

    found: list[tuple[int, ImportEdge]] = []
    for pattern, kind in _RECOGNIZERS:
        for m in pattern.finditer(masked):
            offset = m.start("str")
            specifier = strings.get(offset)
            if specifier is None:
                continue
            type_only = "type" in m.groupdict() and m.group("type") is not None
            found.append(
                (
                    offset,
                    ImportEdge(
                        anchor_file=anchor_file,
                        raw_specifier=specifier,
                        kind=kind,
                        line=region.start_line + masked.count("\n", 0, m.start()),
                        type_only=type_only,
                    ),
                )
            )
    found.sort(key=lambda item: item[0])
    return [edge for _, edge in found]


def dedupe_edges(edges: list[ImportEdge]) -> list[ImportEdge]:
    """Keep the first edge per specifier; type-only only if every occurrence was."""
    first: dict[str, ImportEdge] = {}
    for edge in edges:
        seen = first.get(edge.raw_specifier)
        if seen is None:
            first[edge.raw_specifier] = edge
        elif seen.type_only and not edge.type_only:
            first[edge.raw_specifier] = ImportEdge(
                anchor_file=seen.anchor_file,
                raw_specifier=seen.raw_specifier,
                kind=seen.kind,
                line=seen.line,
                type_only=False,
            )
    return list(first.values())


def extract_imports(
    anchor_file: str,
    text: str,
    filename: str | None = None,
) -> list[ImportEdge] | None:
    """Extract the ordered, deduplicated import edges of one file.

    *filename* selects the file format (defaults to *anchor_file*).
    Returns None for file types that carry no script content.
    """
    regions = split_script_regions(filename or anchor_file, text)
    if regions is None:
        return None
    edges: list[ImportEdge] = []
    for region in regions:
        edges.extend(extract_region_edges(anchor_file, region))
    return dedupe_edges(edges)


def find_call_lines(text: str, callee: str, filename: str) -> list[int]:
    """1-based lines where *callee* is called outside comments and strings.

    Used by structural checks (``defineStore(...)`` outside a stores
    folder). Returns an empty list for files without script content.
    """
    regions = split_script_regions(filename, text)
    if not regions:
        return []
    pattern = re.compile(_NOT_MEMBER + re.escape(callee) + r"\s*\(")
    lines: list[int] = []
    for region in regions:
        try:
            masked, _ = mask_source(region.content, lang=region.lang)
        except ScriptScanError:
            continue
        for m in pattern.finditer(masked):
            lines.append(region.start_line + masked.count("\n", 0, m.start()))
    return lines
