"""Builders for the handful of Markdown constructs the document providers emit."""
from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from typing import Any


def create_horizontal_rule() -> str:
    return "---"


def create_link(content: Any = "", url: Any = "") -> str:
    return f"[{content or ''}]({url or ''})"


def create_image(alt: Any = "", url: Any = "", title: Any = "") -> str:
    markdown = f"![{alt or ''}]({url or ''}"
    if title:
        markdown += f' "{title}"'
    return markdown + ")"


def append_table(output: list[str], headers: Sequence[Any] | None = None, rows: Iterable[Sequence[Any]] = ()) -> None:
    """Append the lines of a Markdown table to ``output``.

    The divider row under the headers uses as many dashes as each header has characters.
    """
    headers = list(headers or [])
    if headers:
        output.append(_table_row(headers))
        output.append("|" + "|".join(f" {'-' * len(str(header))} " for header in headers) + "|")
    for columns in rows or []:
        output.append(_table_row(columns))


def create_table(
    headers: Sequence[Any] | None = None,
    rows: Iterable[Sequence[Any]] = (),
    line_separator: str | None = None,
) -> str:
    output: list[str] = []
    append_table(output, headers=headers, rows=rows)
    return (line_separator or os.linesep).join(output)


def _table_row(columns: Iterable[Any]) -> str:
    return "|" + "|".join(f" {column} " for column in columns) + "|"
