#!/usr/bin/env python3
# rlconsole/ui/static/table.py
from __future__ import annotations

from typing import List, Sequence

from rlconsole.ui import strip_ansi


def _calculate_column_widths(rows: Sequence[Sequence[str]]) -> List[int]:
    """Compute visual widths ignoring ANSI sequences."""
    column_widths: List[int] = []
    for row in rows:
        for col_idx, cell in enumerate(row):
            cell_length = len(strip_ansi(cell))
            if col_idx >= len(column_widths):
                column_widths.append(cell_length)
            else:
                column_widths[col_idx] = max(column_widths[col_idx], cell_length)
    return column_widths


def format_table(
    rows: Sequence[Sequence[object]],
    *,
    indent: str = "\t",
    gap: int = 2,
) -> str:
    """
    Return a borderless, left-aligned table (ANSI-safe width calculation).

    Every line starts with `indent`; columns are separated by `gap` spaces and
    trailing padding is dropped so single-column tables stay one word per line.
    """
    str_rows: List[List[str]] = [[str(cell) for cell in row] for row in rows]
    widths = _calculate_column_widths(str_rows)

    def render_row(row: Sequence[str]) -> str:
        parts = []
        for i, cell in enumerate(row):
            right = " " * (widths[i] - len(strip_ansi(cell)))
            parts.append(f"{cell}{right}")
        return (indent + (" " * gap).join(parts)).rstrip()

    return "\n".join(render_row(row) for row in str_rows)
