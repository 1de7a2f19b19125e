from __future__ import annotations

import sys
from collections.abc import Iterable, Iterator, Sequence
from typing import TextIO

from .models import DEFAULT_TAG, Column, DisplayOptions, InstanceRecord
from .terminal import PlainTerminal, TerminalCapabilities

FIXED_COLUMNS = (
    Column("State", 8),
    Column("Type", 11),
    Column("Id", 20),
    Column("Private IP", 15),
)
STATE_COLORS = {
    "running": "green",
    "stopped": "red",
}


def column_width(label: str, values: Iterable[str | None]) -> int:
    return max([len(label), *(len(value or "") for value in values)])


def compute_columns(records: Sequence[InstanceRecord], extra_tags: Sequence[str]) -> list[Column]:
    """Size the Name column and one column per extra tag from the records.

    A column is never narrower than its own label.
    """
    columns = list(FIXED_COLUMNS)
    columns.append(Column(DEFAULT_TAG, column_width(DEFAULT_TAG, (record.name for record in records))))
    for tag in extra_tags:
        columns.append(Column(tag, column_width(tag, (record.tags.get(tag) for record in records))))
    return columns


def build_template(columns: Sequence[Column]) -> str:
    fixed = " ".join(f"{{:<{column.width}}}" for column in columns[: len(FIXED_COLUMNS) + 1])
    extras = "".join(f"  {{:<{column.width}}}" for column in columns[len(FIXED_COLUMNS) + 1 :])
    return fixed + extras


def row_values(record: InstanceRecord, extra_tags: Sequence[str]) -> list[str]:
    return [
        record.state,
        record.instance_type,
        record.instance_id,
        record.private_ip or "",
        record.name or "",
        *(record.tags.get(tag) or "" for tag in extra_tags),
    ]


def render_report(
    records: Sequence[InstanceRecord],
    extra_tags: Sequence[str],
    display: DisplayOptions,
    terminal: TerminalCapabilities | None = None,
) -> Iterator[str]:
    terminal = terminal or PlainTerminal()
    if display.ip_only:
        for record in records:
            yield record.private_ip or ""
        return

    columns = compute_columns(records, extra_tags)
    template = build_template(columns)
    if display.headers:
        yield terminal.bold(template.format(*(column.label for column in columns)))
    for record in records:
        line = template.format(*row_values(record, extra_tags))
        color = STATE_COLORS.get(record.state)
        yield terminal.color(line, color) if color else line


def print_report(
    records: Sequence[InstanceRecord],
    extra_tags: Sequence[str],
    display: DisplayOptions,
    terminal: TerminalCapabilities | None = None,
    stream: TextIO | None = None,
) -> None:
    stream = stream or sys.stdout
    for line in render_report(records, extra_tags, display, terminal):
        stream.write(line + "\n")
