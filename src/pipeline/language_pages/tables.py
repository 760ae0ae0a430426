"""Normalize delimited record sub-tables into display tables.

Record sub-trees carry tabular data in three encodings: space separated
values, pipe separated values, and a tree of ``row`` nodes. All three parse
into the same shape, a pandas ``DataFrame`` of string cells whose row order is
the source order. Sections then derive display columns on a copy of the
frame and serialize only the columns they declare.

Boundaries
----------
- Never mutates the record; derived columns live on transient frames.
- Absent, empty or sentinel (``"0"``) sub-trees produce no table at all.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Callable, Iterable
from enum import Enum

import pandas as pd

from .formatting import clean_and_right_shift
from .record import Node, TreeNode

logger = logging.getLogger(__name__)

ABSENT_TABLE_SENTINEL = "0"


class TableShape(Enum):
    """Encoding of a record sub-table."""

    SSV = " "
    PIPE = "|"
    TREE = "tree"


def parse_table(raw: str, shape: TableShape) -> pd.DataFrame:
    """Parse sub-table text into a frame of string cells.

    Parameters
    ----------
    raw : str
        The sub-tree text. Delimited shapes start with a header row. Space
        separated fields may be quoted to contain spaces; pipe cells are raw
        text and keep any quote characters.
    shape : TableShape
        How ``raw`` is encoded.

    Returns
    -------
    pd.DataFrame
        One row per data line in source order. Missing cells are ``""``. A
        row with more fields than the header is kept: the overflow is merged
        into the last column and a warning is logged.
    """
    if not raw.strip():
        return pd.DataFrame()
    if shape is TableShape.TREE:
        return _parse_tree_table(raw)
    lines = [line for line in raw.replace("\r", "").split("\n") if line.strip()]
    header = _split_line(lines[0], shape)
    if not header:
        return pd.DataFrame()
    rows = []
    for number, line in enumerate(lines[1:], start=1):
        fields = _split_line(line, shape)
        if fields is None:
            continue
        if len(fields) > len(header):
            logger.warning(
                "Row %d of a %s table has %d fields for %d columns; "
                "merging the overflow into '%s': %s",
                number,
                shape.name,
                len(fields),
                len(header),
                header[-1],
                fields,
            )
            keep = len(header) - 1
            fields = fields[:keep] + [shape.value.join(fields[keep:])]
        rows.append(fields + [""] * (len(header) - len(fields)))
    return pd.DataFrame(rows, columns=header, dtype=str)


def _split_line(line: str, shape: TableShape) -> list[str] | None:
    # Pipe cells are raw text; only space separated values use quoting.
    quoting = csv.QUOTE_NONE if shape is TableShape.PIPE else csv.QUOTE_MINIMAL
    try:
        return next(csv.reader([line], delimiter=shape.value, quoting=quoting))
    except csv.Error as exc:
        logger.warning("Skipping unreadable %s table line %r: %s", shape.name, line, exc)
        return None


def _parse_tree_table(raw: str) -> pd.DataFrame:
    rows = []
    for row in TreeNode.parse(raw).children:
        cells = {}
        for cell in row.children:
            nested = cell.children_to_string()
            if nested:
                cells[cell.key] = f"{cell.content}\n{nested}" if cell.content else nested
            else:
                cells[cell.key] = cell.content
        rows.append(cells)
    if not rows:
        return pd.DataFrame()
    return pd.DataFrame(rows).fillna("")


def table_from_group(node: Node | None, shape: TableShape) -> pd.DataFrame | None:
    """Return the parsed table under ``node`` or ``None`` when there is none.

    A group whose content is the sentinel ``"0"`` means the source was
    checked and had no rows; it is treated the same as an absent group.
    """
    if node is None or node.content == ABSENT_TABLE_SENTINEL:
        return None
    raw = node.children_to_string()
    if not raw.strip():
        return None
    table = parse_table(raw, shape)
    if table.empty:
        return None
    return table


def with_column(
    table: pd.DataFrame, name: str, build: Callable[[dict[str, str]], str]
) -> pd.DataFrame:
    """Return a copy of ``table`` with a column computed from each row."""
    derived = table.copy()
    derived[name] = [build(row) for row in table.to_dict("records")]
    return derived


def link_from(template: str, column: str) -> Callable[[dict[str, str]], str]:
    """Build a row link from one id column; empty when the id is missing."""

    def build(row: dict[str, str]) -> str:
        value = row.get(column, "")
        return template.format(value) if value else ""

    return build


def to_delimited(
    table: pd.DataFrame, delimiter: str, columns: Iterable[str]
) -> str:
    """Serialize the declared columns, header first, without a trailing newline."""
    frame = table.reindex(columns=list(columns), fill_value="").fillna("").astype(str)
    if delimiter == ",":
        text = frame.to_csv(sep=delimiter, index=False, lineterminator="\n")
        return text.rstrip("\n")
    # Pipe tables have no quoting; cells are written as they were read.
    lines = [delimiter.join(frame.columns)]
    lines.extend(
        delimiter.join(row) for row in frame.itertuples(index=False, name=None)
    )
    return "\n".join(lines)


def to_tree_table(
    table: pd.DataFrame,
    columns: Iterable[str],
    block_columns: Iterable[str] = (),
) -> str:
    """Serialize rows as ``row`` nodes with one child per declared column.

    Values of ``block_columns`` are always written as indented child lines,
    which is how multi-line cells such as code samples are carried.
    """
    columns = list(columns)
    blocks = set(block_columns)
    lines = []
    for row in table.reindex(columns=columns, fill_value="").fillna("").to_dict(
        "records"
    ):
        lines.append("row")
        for column in columns:
            value = str(row[column])
            if column in blocks or "\n" in value:
                lines.append(f" {column}")
                if value:
                    lines.extend(f"  {line}" for line in value.split("\n"))
            else:
                lines.append(f" {column} {value}" if value else f" {column}")
    return "\n".join(lines)


def table_block(directive: str, body: str) -> str:
    """Wrap serialized table text in a block directive with a one-space body."""
    return f"{directive}\n {clean_and_right_shift(body)}"
