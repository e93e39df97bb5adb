"""Path canonicalization — one project-relative representation for every path.

Pure functions, no filesystem access. Host paths, anchor files and raw
import specifiers all funnel through :func:`canonicalize` so the
classifier only ever sees forward-slash, root-anchored strings.

INVARIANT: ``canonicalize(canonicalize(p)) == canonicalize(p)`` whenever
the result is not None.
INVARIANT: a resolved relative specifier never escapes the source root.
"""

from __future__ import annotations

import fnmatch
import re

_SEPARATORS = re.compile(r"[\\/]+")


def split_segments(path: str) -> list[str]:
    """Split on either separator, dropping empty segments."""
    return [seg for seg in _SEPARATORS.split(path.strip()) if seg]


def collapse_segments(segments: list[str]) -> list[str]:
    """Collapse ``.`` and ``..`` segments.

    Leading ``..`` that cannot be collapsed are kept so callers can tell
    the path climbed above its starting point.
    """
    out: list[str] = []
    for seg in segments:
        if seg == ".":
            continue
        if seg == "..":
            if out and out[-1] != "..":
                out.pop()
            else:
                out.append("..")
            continue
        out.append(seg)
    return out


def normalize_path(path: str) -> str:
    """Normalize separators and dot segments; no leading or trailing slash.

    Examples:
        >>> normalize_path("\\\\src\\\\features//auth/./x/../index.ts")
        'src/features/auth/index.ts'
        >>> normalize_path("./")
        ''
    """
    return "/".join(collapse_segments(split_segments(path)))


def _find_last(haystack: list[str], needle: list[str]) -> int:
    """Index of the last segment-aligned occurrence of *needle*, or -1."""
    width = len(needle)
    for start in range(len(haystack) - width, -1, -1):
        if haystack[start : start + width] == needle:
            return start
    return -1


def canonicalize(path: str, source_root: str) -> str | None:
    """Anchor *path* at the last occurrence of *source_root*.

    Returns None when the root does not occur in the normalized path.
    When the root segment name occurs more than once, the rightmost
    match is the project-relative suffix: ``"/src/src/app"`` → ``"src/app"``.
    """
    root = collapse_segments(split_segments(source_root))
    if not root:
        return None
    segments = collapse_segments(split_segments(path))
    idx = _find_last(segments, root)
    if idx == -1:
        return None
    return "/".join(segments[idx:])


def canonicalize_anchor(host_path: str, source_root: str) -> str | None:
    """Canonicalize a file path as reported by the host (absolute or relative)."""
    return canonicalize(host_path, source_root)


# ---------------------------------------------------------------------------
# Specifier forms
# ---------------------------------------------------------------------------


def is_relative_specifier(specifier: str) -> bool:
    return specifier in (".", "..") or specifier.startswith(("./", "../"))


def is_alias_specifier(specifier: str, alias_token: str) -> bool:
    if not alias_token:
        return False
    return specifier == alias_token or specifier.startswith(f"{alias_token}/")


def is_root_absolute_specifier(specifier: str) -> bool:
    return specifier.startswith(("/", "\\"))


def resolve_specifier(
    anchor_file: str,
    raw_specifier: str,
    source_root: str,
    alias_token: str,
) -> str | None:
    """Resolve *raw_specifier* written in *anchor_file* to a canonical path.

    Forms are tried in order: relative, alias-rooted, root-absolute.
    Anything else (bare package names, URLs, ``node:`` builtins) is
    external and yields None, as does a relative path that climbs out
    of the source root.
    """
    specifier = raw_specifier.strip()
    if not specifier:
        return None

    root = normalize_path(source_root)
    if not root:
        return None

    if is_relative_specifier(specifier):
        anchor = canonicalize(anchor_file, root)
        if anchor is None:
            return None
        directory = split_segments(anchor)[:-1]
        joined = collapse_segments(directory + split_segments(specifier))
        root_segments = split_segments(root)
        # climbing above the root leaves a shorter or foreign prefix
        if joined[: len(root_segments)] != root_segments:
            return None
        return canonicalize("/".join(joined), root)

    if is_alias_specifier(specifier, alias_token):
        rest = specifier[len(alias_token) :]
        return canonicalize(f"{root}/{rest}", root)

    if is_root_absolute_specifier(specifier):
        rest = specifier.lstrip("/\\")
        return canonicalize(f"{root}/{rest}", root)

    return None


# ---------------------------------------------------------------------------
# Glob matching
# ---------------------------------------------------------------------------


def matches_glob(path: str, pattern: str) -> bool:
    """fnmatch-style match where a leading ``**/`` also matches at the top level."""
    if fnmatch.fnmatchcase(path, pattern):
        return True
    if pattern.startswith("**/"):
        return matches_glob(path, pattern[3:])
    return False


def matches_any(path: str, patterns: tuple[str, ...] | list[str]) -> bool:
    """Return True if *path* matches at least one glob in *patterns*."""
    return any(matches_glob(path, p) for p in patterns)


def strip_extension(path: str) -> str:
    """Drop the extension of the last segment (``a/b.store.ts`` → ``a/b.store``)."""
    head, _, tail = path.rpartition("/")
    stem = tail.rsplit(".", 1)[0] if "." in tail[1:] else tail
    return f"{head}/{stem}" if head else stem
