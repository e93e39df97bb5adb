"""Rich Console factory and theme for layerlint output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

LL_THEME = Theme(
    {
        "ll.ok": "bold green",
        "ll.error": "bold red",
        "ll.warning": "bold yellow",
        "ll.op": "bold cyan",
        "ll.key": "dim",
        "ll.rule": "magenta",
        "ll.path": "underline",
        "ll.line": "dim",
        "ll.specifier": "bold",
        "ll.layer.app": "red",
        "ll.layer.shared": "green",
        "ll.layer.feature": "blue",
        "ll.layer.module": "cyan",
        "ll.layer.support": "yellow",
    }
)

_SEVERITY_STYLES: dict[str, str] = {
    "error": "ll.error",
    "warning": "ll.warning",
}

_LAYER_STYLES: dict[str, str] = {
    "app": "ll.layer.app",
    "shared": "ll.layer.shared",
    "feature": "ll.layer.feature",
    "module": "ll.layer.module",
    "component": "ll.layer.support",
    "composable": "ll.layer.support",
    "service": "ll.layer.support",
    "store": "ll.layer.support",
    "entity": "ll.layer.support",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=LL_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_severity(severity: str) -> str:
    """Return the Rich style name for a severity."""
    return _SEVERITY_STYLES.get(severity, "")


def style_for_layer(layer: str) -> str:
    """Return the Rich style name for a layer."""
    return _LAYER_STYLES.get(layer, "")
