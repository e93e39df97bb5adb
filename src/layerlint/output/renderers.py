"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from layerlint.output.console import create_console, get_output, style_for_layer, style_for_severity

if TYPE_CHECKING:
    from rich.console import Console

    from layerlint.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    One ``path:line rule`` line per violation or issue; nothing when
    the run is clean.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    issues = result.data.get("violations", result.data.get("issues"))
    if isinstance(issues, list):
        return "\n".join(f"{_location(i)} {i.get('rule', '')}" for i in issues)
    if result.op == "rules":
        return "\n".join(str(r.get("id", "")) for r in result.data.get("rules", []))
    if result.op == "explain":
        decision = result.data.get("decision")
        if decision is None:
            return "skipped"
        return "allow" if decision.get("allowed") else f"deny {decision.get('reason')}"

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _location(issue: dict[str, Any]) -> str:
    line = issue.get("line")
    return f"{issue.get('file', '')}:{line}" if line else str(issue.get("file", ""))


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    label = Text("OK", style="ll.ok")
    op = Text(f"  {result.op}", style="ll.op")
    console.print(label, op, sep="", end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="ll.key")
    if key in ("path", "anchor", "resolved", "file"):
        v = Text(str(value), style="ll.path")
    elif key == "rule":
        v = Text(str(value), style="ll.rule")
    elif key == "layer":
        v = Text(str(value), style=style_for_layer(str(value)))
    else:
        v = Text(str(value))
    console.print(k, v, sep="", end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a span tree: color-coded timing, then the span's counters."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {name}"

    counts = span_data.get("counts") or {}
    if counts:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in counts.items()) + ")"

    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _print_issues(console: Console, issues: list[dict[str, Any]], *, verbose: bool) -> None:
    """Print issues grouped by file, eslint-style."""
    by_file: dict[str, list[dict[str, Any]]] = {}
    for issue in issues:
        by_file.setdefault(str(issue.get("file", "")), []).append(issue)

    for file, file_issues in by_file.items():
        console.print()
        console.print(Text(file, style="ll.path"))
        for issue in file_issues:
            sev = str(issue.get("severity", "warning"))
            style = style_for_severity(sev)
            line = issue.get("line")
            row = Text("  ")
            row.append(f"{line if line else '-':>4}", style="ll.line")
            row.append("  ")
            row.append(f"{sev:<7}", style=style)
            row.append(" ")
            row.append(str(issue.get("message", "")))
            row.append("  ")
            row.append(str(issue.get("rule", "")), style="ll.rule")
            console.print(row)
            if verbose and issue.get("reason"):
                target = issue.get("target_layer", "")
                unit = issue.get("target_unit")
                console.print(
                    f"        [dim]reason={issue['reason']} target={target}"
                    + (f"/{unit}" if unit else "")
                    + "[/dim]"
                )


def _summary(console: Console, errors: int, warnings: int) -> None:
    total = errors + warnings
    style = "ll.error" if errors else "ll.warning"
    console.print()
    console.print(
        f"[{style}]{total} problem{'s' if total != 1 else ''}[/{style}] "
        f"({errors} error{'s' if errors != 1 else ''}, "
        f"{warnings} warning{'s' if warnings != 1 else ''})"
    )


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="ll.error")
    op = Text(f"  {result.op}", style="ll.op")
    colon = Text(": ")
    console.print(label, op, colon, Text(msg), sep="")

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Operation renderers ───────────────────────────────────────────────


def _render_lint(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render lint violations grouped by file with a summary line."""
    violations = result.data.get("violations", [])
    files = result.data.get("files_checked", 0)

    if not violations:
        console.print(
            f"[ll.ok]OK[/ll.ok]  No boundary violations in {files} "
            f"file{'s' if files != 1 else ''}."
        )
    else:
        _print_issues(console, violations, verbose=verbose)
        _summary(
            console,
            result.data.get("error_count", 0),
            result.data.get("warning_count", 0),
        )
    if verbose:
        _render_meta(console, result)


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render structural check results."""
    issues = result.data.get("issues", [])
    checks_run = result.data.get("checks_run", [])

    if not issues:
        ran = ", ".join(checks_run) if checks_run else "none"
        console.print(f"[ll.ok]OK[/ll.ok]  No structural issues found (checks: {ran}).")
    else:
        _print_issues(console, issues, verbose=verbose)
        _summary(
            console,
            result.data.get("error_count", 0),
            result.data.get("warning_count", 0),
        )
    if verbose:
        _render_meta(console, result)


def _render_classification(console: Console, label: str, data: dict[str, Any] | None) -> None:
    console.print(Text(f"  {label}:", style="ll.key"))
    if data is None:
        console.print("    (not classifiable)")
        return
    layer = str(data.get("layer", ""))
    row = Text("    ")
    row.append(layer, style=style_for_layer(layer))
    if data.get("unit"):
        row.append(f" '{data['unit']}'")
    if data.get("public_entry"):
        row.append(" (public entry)", style="ll.ok")
    elif data.get("subpath"):
        row.append(f" / {data['subpath']}", style="dim")
    console.print(row)


def _render_explain(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the resolve / classify / decide trace of one import."""
    data = result.data
    _status_line(console, result)
    _field(console, "specifier", data.get("specifier"))
    _field(console, "anchor", data.get("anchor") or "(outside source root)")
    _field(console, "resolved", data.get("resolved") or "(external or outside source root)")
    _render_classification(console, "source", data.get("source"))
    _render_classification(console, "target", data.get("target"))

    decision = data.get("decision")
    if decision is None:
        console.print("  decision: [dim]none (import is not checked)[/dim]")
    elif decision.get("allowed"):
        note = " (exempt)" if decision.get("preempted") else ""
        console.print(f"  decision: [ll.ok]allow[/ll.ok]{note}")
    else:
        console.print(
            f"  decision: [ll.error]deny[/ll.error] {decision.get('reason')} "
            f"[ll.rule]{decision.get('rule') or ''}[/ll.rule]"
        )
        console.print(Text(f"    {decision.get('message', '')}"))
    style = data.get("style")
    if style:
        console.print(
            f"  style: [ll.warning]{style.get('reason')}[/ll.warning] "
            f"[ll.rule]{style.get('rule') or ''}[/ll.rule]"
        )
        console.print(Text(f"    {style.get('message', '')}"))
    if verbose:
        _render_meta(console, result)


def _render_rules(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the rule catalogue as a table."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Rule", style="ll.rule", no_wrap=True)
    table.add_column("Severity")
    table.add_column("Enabled")
    table.add_column("Category", style="dim")
    table.add_column("Description")
    if verbose:
        table.add_column("Reasons", style="dim")

    for rule in result.data.get("rules", []):
        sev = str(rule.get("severity", ""))
        row: list[Any] = [
            str(rule.get("id", "")),
            Text(sev, style=style_for_severity(sev)),
            "yes" if rule.get("enabled") else "no",
            str(rule.get("category", "")),
            str(rule.get("description", "")),
        ]
        if verbose:
            row.append(", ".join(rule.get("reasons", [])))
        table.add_row(*row)

    console.print(table)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "lint": _render_lint,
    "check": _render_check,
    "explain": _render_explain,
    "rules": _render_rules,
}
