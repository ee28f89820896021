"""In-memory result table parsed from report CSV.

Parsing is literal: lines split on ``\\n`` or ``\\r\\n`` and
cells on every comma. There is no quoting or escaping, so a comma inside a
value becomes a column break and rows may come out with different lengths.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

_LINE_BREAK = re.compile(r"\r?\n")

Row = list[str]


@dataclass
class Table:
    rows: list[Row] = field(default_factory=list)

    @property
    def header(self) -> Row:
        return self.rows[0] if self.rows else []

    @property
    def body(self) -> list[Row]:
        return self.rows[1:]

    def __len__(self) -> int:
        return len(self.rows)


def parse_csv(text: str) -> Table:
    lines = _LINE_BREAK.split(text)
    if lines and lines[-1] == "":
        lines.pop()
    return Table(rows=[line.split(",") for line in lines])
