"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from daynote.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from daynote.services.result import ServiceResult


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

    Note ops print the bare note body so the output can be piped.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    if result.op in ("today", "cached"):
        return str(result.data.get("content", ""))
    if result.op == "vaults":
        return "\n".join(str(v["name"]) for v in result.data.get("vaults", []))
    if result.op == "open":
        return str(result.data.get("url", ""))
    if result.op == "translate":
        return str(result.data.get("ldml", ""))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    console.print(Text("OK", style="dn.ok"), Text(f"  {result.op}", style="dn.op"))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="dn.key")
    if key == "path":
        v = Text(str(value), style="dn.path")
    elif key == "filename":
        v = Text(str(value), style="dn.filename")
    elif key in ("vault", "name"):
        v = Text(str(value), style="dn.vault")
    else:
        v = Text(str(value))
    console.print(Text.assemble(k, v))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="dn.error"), Text(f"  {result.op}", style="dn.op"), "—", escape(msg)
    )

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Op renderers ──────────────────────────────────────────────────────


def _render_vaults(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    vaults = result.data.get("vaults", [])
    if not vaults:
        console.print("No vaults found.")
        return
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("", style="dn.selected", no_wrap=True)
    table.add_column("Name", style="dn.vault")
    table.add_column("Path", style="dn.path")
    for vault in vaults:
        table.add_row("*" if vault.get("selected") else "", vault["name"], vault["path"])
    console.print(table)
    console.print(f"\n{result.data.get('count', len(vaults))} vaults")


def _render_note(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render today/cached as a panel titled with the note's filename."""
    d = result.data
    if verbose:
        for key in ("vault", "folder", "format", "path"):
            if d.get(key):
                _field(console, key, d[key])
    body = str(d.get("content", "")).rstrip("\n")
    title = escape(str(d.get("filename") or "(no note)"))
    console.print(Panel(escape(body) or Text("(empty)", style="dim"), title=title, expand=False))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "vaults": _render_vaults,
    "today": _render_note,
    "cached": _render_note,
}
