from __future__ import annotations

from typing import Sequence

import click


def _emit(tag: str, message: str, err: bool = False, **style) -> None:
    click.echo(f"{click.style(tag, **style)} {message}", err=err)


def info(message: str) -> None:
    _emit("[INFO]", message, fg="blue")


def success(message: str) -> None:
    _emit("[SUCCESS]", message, fg="green")


def warning(message: str) -> None:
    _emit("[WARNING]", message, fg="yellow", bold=True)


def error(message: str) -> None:
    _emit("[ERROR]", message, err=True, fg="red")


def format_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """Render rows inside a box-drawing frame, columns sized to fit."""
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def rule(left: str, mid: str, right: str) -> str:
        return left + mid.join("─" * (w + 2) for w in widths) + right

    def line(cells: Sequence[str]) -> str:
        return "│" + "│".join(f" {c:<{w}} " for c, w in zip(cells, widths)) + "│"

    out = [rule("┌", "┬", "┐"), line(headers), rule("├", "┼", "┤")]
    out.extend(line(r) for r in rows)
    out.append(rule("└", "┴", "┘"))
    return "\n".join(out)


__all__ = ["info", "success", "warning", "error", "format_table"]
