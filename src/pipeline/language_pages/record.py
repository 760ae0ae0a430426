"""Hierarchical attribute store for knowledge-base records.

Records are written in tree notation: one node per line, the first word of a
line is the node key and the remainder is its content, and children are
indented by one space relative to their parent. Keys may repeat, which is how
multi-valued fields (several ``documentation`` links, several ``example``
blocks) are expressed.

The page pipeline only depends on the ``Record`` protocol below; ``TreeNode``
is the concrete store used by the batch runner and the tests.

Examples
--------
>>> record = TreeNode.parse("title Python\\ngithubRepo https://github.com/python/cpython\\n stars 50000")
>>> record.get_scalar("githubRepo stars")
'50000'
>>> record.get_scalar("gitlabRepo") is None
True
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Protocol


class Node(Protocol):
    """A single node of a record: a key, its content and nested children."""

    key: str
    content: str

    @property
    def children(self) -> list["Node"]: ...

    def children_to_string(self) -> str: ...

    def get_word(self, index: int) -> str: ...

    def get_words_from(self, index: int) -> str: ...


class Record(Protocol):
    """Read-only path lookup over one knowledge-base record.

    Paths are space-separated key sequences such as ``"githubRepo stars"``.
    Every lookup tolerates absent paths.
    """

    def get_scalar(self, path: str) -> str | None: ...

    def get_group(self, path: str) -> Node | None: ...

    def get_all_values(self, path: str) -> list[str]: ...

    def get_groups(self, path: str) -> list[Node]: ...

    def get_most_recent_int(self, path: str) -> int: ...


class TreeNode:
    """Tree-notation node that also implements the ``Record`` protocol.

    Parameters
    ----------
    line : str
        The node's own line with its indentation removed.
    depth : int
        Number of leading spaces the line had in the source (``-1`` for root).
    """

    def __init__(self, line: str = "", depth: int = -1) -> None:
        self.line = line
        self.depth = depth
        key, _, content = line.partition(" ")
        self.key = key
        self.content = content
        self._children: list[TreeNode] = []

    @classmethod
    def parse(cls, text: str) -> "TreeNode":
        """Parse tree-notation text into a root node.

        Blank lines inside an indented block belong to that block; blank
        lines between top-level nodes are separators and are dropped.
        """
        root = cls()
        stack: list[TreeNode] = [root]
        lines = text.replace("\r", "").split("\n")
        for index, raw_line in enumerate(lines):
            if raw_line == "":
                depth = _next_indent(lines, index + 1)
                if depth == 0:
                    continue
            else:
                depth = len(raw_line) - len(raw_line.lstrip(" "))
            while stack[-1].depth >= depth:
                stack.pop()
            node = cls(raw_line[depth:], depth)
            stack[-1]._children.append(node)
            stack.append(node)
        return root

    @classmethod
    def from_file(cls, path: Path) -> "TreeNode":
        """Read and parse a UTF-8 tree-notation file."""
        with path.open("r", encoding="utf-8") as fh:
            return cls.parse(fh.read())

    @property
    def children(self) -> list["TreeNode"]:
        return list(self._children)

    def get_word(self, index: int) -> str:
        words = self.line.split(" ")
        return words[index] if index < len(words) else ""

    def get_words_from(self, index: int) -> str:
        return " ".join(self.line.split(" ")[index:])

    def _descendants(self) -> Iterator["TreeNode"]:
        for child in self._children:
            yield child
            yield from child._descendants()

    def children_to_string(self) -> str:
        """Return the text of all descendants, re-indented relative to this node."""
        base = self.depth + 1
        return "\n".join(
            " " * (node.depth - base) + node.line for node in self._descendants()
        )

    def _parent_and_key(self, path: str) -> tuple["TreeNode | None", str]:
        *parents, key = path.split(" ")
        parent: TreeNode | None = self
        for word in parents:
            parent = parent._child(word) if parent is not None else None
        return parent, key

    def _child(self, key: str) -> "TreeNode | None":
        # Last one wins for repeated keys.
        found = None
        for child in self._children:
            if child.key == key:
                found = child
        return found

    def get_group(self, path: str) -> "TreeNode | None":
        parent, key = self._parent_and_key(path)
        return parent._child(key) if parent is not None else None

    def get_groups(self, path: str) -> list["TreeNode"]:
        parent, key = self._parent_and_key(path)
        if parent is None:
            return []
        return [child for child in parent._children if child.key == key]

    def get_scalar(self, path: str) -> str | None:
        node = self.get_group(path)
        if node is None or node.content == "":
            return None
        return node.content

    def get_all_values(self, path: str) -> list[str]:
        return [node.content for node in self.get_groups(path) if node.content]

    def get_most_recent_int(self, path: str) -> int:
        """Return the value of the latest ``<year> <value>`` row under ``path``.

        Returns ``0`` when the group is absent or holds no numeric rows.
        """
        node = self.get_group(path)
        if node is None:
            return 0
        rows = []
        for child in node._children:
            year, value = child.get_word(0), child.get_word(1)
            if year.isdigit() and value.lstrip("-").isdigit():
                rows.append((int(year), int(value)))
        if not rows:
            return 0
        return max(rows)[1]

    def __repr__(self) -> str:
        return f"TreeNode({self.line!r}, children={len(self._children)})"


def _next_indent(lines: list[str], start: int) -> int:
    for line in lines[start:]:
        if line != "":
            return len(line) - len(line.lstrip(" "))
    return 0
