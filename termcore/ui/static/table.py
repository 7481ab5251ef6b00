#!/usr/bin/env python3
# termcore/ui/static/table.py
from __future__ import annotations

from typing import List, Optional, Sequence

from termcore.ui.utils import strip_ansi


def _visible_len(cell: str) -> int:
    return len(strip_ansi(cell))


def format_table(
    rows: Sequence[Sequence[object]],
    headers: Optional[Sequence[object]] = None,
    *,
    padding: int = 1,
    border: bool = True,
) -> list[str]:
    """
    Lay out `rows` as `| a | b |` lines.

    Column widths ignore escape sequences, so colored cells stay aligned.
    Short rows are padded with empty cells. `border` adds a dashed rule
    above and below; the header is always followed by a dashed row.
    """
    body = [[str(cell) for cell in row] for row in rows]
    head = [str(cell) for cell in headers] if headers is not None else None

    columns = max((len(row) for row in ([head] if head else []) + body), default=0)
    if columns == 0:
        return []
    widths: List[int] = [0] * columns
    for row in ([head] if head else []) + body:
        for index, cell in enumerate(row):
            widths[index] = max(widths[index], _visible_len(cell))

    space = " " * padding

    def line(cells: Sequence[str]) -> str:
        padded = [
            space + cell + " " * (width - _visible_len(cell)) + space
            for cell, width in zip(list(cells) + [""] * (columns - len(cells)), widths)
        ]
        return "|" + "|".join(padded) + "|"

    out: List[str] = []
    if head is not None:
        out += [line(head), line(["-" * width for width in widths])]
    out += [line(row) for row in body]
    if border:
        rule = "-" * len(out[0]) if out else ""
        out = [rule, *out, rule]
    return out
