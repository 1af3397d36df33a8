"""
Fixed-width table layout for per-event rows

Columns are admitted while they fit the horizontal budget; the last admitted
column is stretched over whatever budget is left.
"""

import shutil
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, TextIO

ELLIPSIS = "..."


def truncate(value: str, limit: int) -> str:
    """Cut ``value`` to ``limit`` characters, marking the cut with an ellipsis"""
    if len(value) <= limit:
        return value
    return value[: limit - len(ELLIPSIS)] + ELLIPSIS


def terminal_width(default: int = 120) -> int:
    return shutil.get_terminal_size((default, 24)).columns


class TableState(Enum):
    """Layout states of a table"""
    UNCONFIGURED = "unconfigured"
    HEADER_PRINTED = "header_printed"


@dataclass
class Column:
    name: str
    width: int


class Table:
    """Column admission, header and row rendering to a text stream"""

    def __init__(self, max_width: Optional[int] = None, stream: Optional[TextIO] = None):
        # Read once, a resized terminal does not change the layout
        self.max_width = max_width if max_width is not None else terminal_width()
        self.stream = stream or sys.stdout
        self.columns: List[Column] = []
        self.used_width = 0
        self._state = TableState.UNCONFIGURED

    @property
    def state(self) -> TableState:
        return self._state

    def add_column(self, name: str, width: int) -> bool:
        """Admit a column if it fits; returns whether it was admitted"""
        if self._state != TableState.UNCONFIGURED:
            raise RuntimeError("Cannot add columns after the header is printed")

        if self.used_width + width + 1 > self.max_width:
            return False  # Do not show this column

        self.used_width += width + 1
        self.columns.append(Column(name=name, width=width))
        return True

    def print_header(self) -> None:
        if self._state != TableState.UNCONFIGURED:
            raise RuntimeError("Header already printed")

        header = "".join(
            f"{truncate(column.name, column.width):<{column.width}} "
            for column in self.columns
        )
        self.stream.write(header + "\n")
        self.stream.write("-" * self.used_width + "\n")
        self._state = TableState.HEADER_PRINTED

    def format_row(self, values: Iterable[object]) -> str:
        parts = []
        last = len(self.columns) - 1
        for index, value in enumerate(values):
            if index > last:
                break  # Discard extraneous data

            text = str(value)
            if index == last:
                # The last column gets all the remaining space
                parts.append(truncate(text, self.max_width - self.used_width))
            else:
                width = self.columns[index].width
                parts.append(f"{truncate(text, width):<{width}} ")
        return "".join(parts)

    def print_row(self, values: Iterable[object]) -> None:
        self.stream.write(self.format_row(values) + "\n")
