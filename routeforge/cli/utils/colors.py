"""
RouteForge CLI - output helpers built on Click.

    error(), warning()                      styled one-liners
    section()                               ruled section header
    kv()                                    aligned key-value pair
    table()                                 minimal aligned table

Colour is dropped automatically on non-colour terminals (click.style
handles NO_COLOR / TERM=dumb and non-tty output).
"""

from __future__ import annotations

import shutil
from typing import Optional, Sequence

import click

_L_H = "─"     # ─
_CROSS = "✗"   # ✗

_TERM_WIDTH: Optional[int] = None


def _tw() -> int:
    """Terminal width, cached and clamped to a sane range."""
    global _TERM_WIDTH
    if _TERM_WIDTH is None:
        _TERM_WIDTH = max(40, min(shutil.get_terminal_size((80, 24)).columns, 120))
    return _TERM_WIDTH


def error(message: str) -> None:
    """Print error message in red, to stderr."""
    click.echo(click.style(message, fg="red"), err=True)


def warning(message: str) -> None:
    """Print warning message in yellow."""
    click.echo(click.style(message, fg="yellow"))


def section(title: str, *, width: Optional[int] = None, fg: str = "cyan") -> None:
    """
    Print a section header with a ruled line.

        ── Routes ─────────────────────────────────
    """
    w = width or _tw()
    dashes = max(4, w - len(title) - 6)
    line = f"{_L_H}{_L_H} {title} {_L_H * dashes}"
    click.echo(click.style(line, fg=fg, bold=True))


def kv(
    key: str,
    value: str,
    *,
    key_width: int = 16,
    indent: int = 2,
    key_fg: str = "white",
    val_fg: str = "cyan",
) -> None:
    """
    Print an aligned key-value pair.

        Route:          user
        Method:         GET
    """
    prefix = " " * indent
    k = click.style(f"{key}:", fg=key_fg)
    v = click.style(str(value), fg=val_fg)
    padding = " " * max(1, key_width - len(key) - 1)
    click.echo(f"{prefix}{k}{padding}{v}")


def table(
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    *,
    header_fg: str = "cyan",
    row_fg: str = "white",
    indent: int = 2,
) -> None:
    """
    Print a minimal aligned table.

        Name        Method  Pattern
        ──────────────────────────────────
        user        GET     /users/<id>
    """
    prefix = " " * indent
    ncols = len(headers)

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row[:ncols]):
            widths[i] = max(widths[i], len(str(cell)))
    widths = [w + 2 for w in widths]

    hdr = "".join(h.ljust(widths[i]) for i, h in enumerate(headers))
    click.echo(f"{prefix}{click.style(hdr, fg=header_fg, bold=True)}")
    click.echo(f"{prefix}{click.style(_L_H * sum(widths), dim=True)}")

    for row in rows:
        line = "".join(str(cell).ljust(widths[i]) for i, cell in enumerate(row[:ncols]))
        click.echo(f"{prefix}{click.style(line, fg=row_fg)}")
