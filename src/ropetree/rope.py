from __future__ import annotations
from typing import Callable, ParamSpec, TypeVar, Concatenate, TextIO
from collections import deque
import logging
import sys

from .node import Node, Leaf, Branch, InvalidArgument, build, concatenate, count_nodes, leaves, split


log = logging.getLogger(__name__)

CHUNK_SIZE = 10             # characters per leaf when building from text


def check_non_negative(**kwargs: int):
    for name, value in kwargs.items():
        if value < 0:
            raise InvalidArgument(f"{name} must be non-negative, got {value}")


P = ParamSpec('P')  # Represents the parameters of the decorated function
R = TypeVar('R')    # Represents the return type of the decorated function


def mutator(method: Callable[Concatenate[Rope, P], R]) -> Callable[Concatenate[Rope, P], R]:
    def wrapped(self: Rope, *args: P.args, **kwargs: P.kwargs) -> R:
        retval = method(self, *args, **kwargs)
        if log.isEnabledFor(logging.DEBUG):
            log.debug(f'{method.__name__} -> length {len(self)}, {self.node_count()} nodes')
        return retval
    wrapped.__name__ = method.__name__
    wrapped.__doc__ = method.__doc__
    return wrapped


class Rope:
    """
    A rope holds a character sequence as a binary tree of text fragments.
    Every edit is expressed as split and concatenate of the existing
    tree, producing a new root while sharing untouched subtrees.
    """
    def __init__(self, text: str='', *, chunk_size: int=CHUNK_SIZE):
        self.chunk_size = chunk_size
        self._root: Node = build(text, chunk_size)

    @property
    def root(self) -> Node:
        return self._root

    def __len__(self) -> int:
        """count the number of characters in the rope"""
        return len(self._root)

    def node_count(self) -> int:
        return count_nodes(self._root)

    def get_data(self) -> str:
        return ''.join(leaf.data for leaf in leaves(self._root))

    def display(self, file: TextIO | None = None):
        """Print the text followed by a newline, or a marker when empty"""
        out = file or sys.stdout
        if len(self) == 0:
            print("Empty Rope", file=out)
        else:
            print(self.get_data(), file=out)

    def substring(self, start: int, length: int) -> str:
        """
        Extract up to length characters beginning at start
        without changing the tree.  Reading past the end
        just returns fewer characters.
        """
        check_non_negative(start=start, length=length)
        parts: list[str] = []
        stack: list[tuple[Node, int, int]] = [(self._root, start, length)]
        while stack:
            node, start, length = stack.pop()
            if length <= 0:
                continue
            if isinstance(node, Leaf):
                parts.append(node.data[start:start+length])
                continue

            assert isinstance(node, Branch)
            w = node.weight
            if start < w:
                n = min(length, w - start)
                # right side pushed first so the left is read first
                stack.append((node.right, 0, length - n))
                stack.append((node.left, start, n))
            else:
                stack.append((node.right, start - w, length))
        return ''.join(parts)

    @mutator
    def insert(self, index: int, text: str) -> Rope:
        check_non_negative(index=index)
        left, right = split(self._root, index)
        self._root = concatenate(concatenate(left, Leaf(text)), right)
        return self

    @mutator
    def erase(self, start: int, length: int) -> Rope:
        """
        Remove length characters from start.
        The second split is relative to the piece already split at start.
        """
        check_non_negative(start=start, length=length)
        left, mid = split(self._root, start)
        _, right = split(mid, length)
        self._root = concatenate(left, right)
        return self

    @mutator
    def replace_range(self, start: int, length: int, text: str) -> Rope:
        """
        Replace length characters at start with text.
        A start past the end appends text.
        """
        check_non_negative(start=start, length=length)
        left, mid = split(self._root, start)
        _, right = split(mid, length)
        self._root = concatenate(concatenate(left, Leaf(text)), right)
        return self

    def find_all(self, pattern: str) -> list[int]:
        """
        Return the start offset of every non-overlapping occurrence
        of pattern, left to right.  Matches may straddle leaves.
        """
        if not pattern:
            return []

        m = len(pattern)
        window: deque[str] = deque(maxlen=m)
        found: list[int] = []
        pos = 0
        resume = 0          # earliest start for the next match
        last = pattern[-1]
        for leaf in leaves(self._root):
            for c in leaf.data:
                window.append(c)
                pos += 1
                start = pos - m
                if start >= resume and c == last and len(window) == m and ''.join(window) == pattern:
                    found.append(start)
                    resume = pos
        return found

    @mutator
    def replace(self, old: str, new: str) -> Rope:
        """
        Replace every occurrence of old with new.  Occurrences are all
        found first, then applied from the rightmost so earlier offsets
        stay valid and inserted text is never rescanned.
        """
        if not old or old == new or len(self) == 0:
            return self

        found = self.find_all(old)
        for start in reversed(found):
            head, tail = split(self._root, start + len(old))
            left, _ = split(head, start)
            self._root = concatenate(concatenate(left, Leaf(new)), tail)

        if found:
            log.info(f'replace {old!r} -> {new!r} at {len(found)} offsets')
        return self

    @mutator
    def concatenate(self, other: Rope) -> Rope:
        """Append other's text; other is unchanged"""
        self._root = concatenate(self._root, other._root)
        return self

    def __str__(self):
        return self.get_data()

    def __repr__(self):
        lines: list[str] = []
        stack: list[tuple[Node, int]] = [(self._root, 0)]
        while stack:
            node, depth = stack.pop()
            lines.append('  ' * depth + repr(node))
            if isinstance(node, Branch):
                stack.append((node.right, depth + 1))
                stack.append((node.left, depth + 1))
        return '\n'.join(lines)
