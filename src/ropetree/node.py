from __future__ import annotations
from typing import ClassVar, Iterator
from dataclasses import dataclass


class InvalidArgument(ValueError):
    """Raised for a negative start, length or index, or a bad chunk size"""


def snippet(s: str, n: int=8):
    return f"'{s}'" if len(s) <= n else f"'{s[:n-2]}...'"


@dataclass(kw_only=True)
class Node:
    """
    A Node is either a Leaf holding a fragment of text, or a Branch
    joining two subtrees.  Nodes are never modified once built,
    so subtrees can be shared freely between old and new trees.
    """
    _id: ClassVar[int] = 0
    _len: int = 0

    id: int = 0             # for debugging it's useful to enumerate nodes

    def __post_init__(self):
        """Number nodes sequentially for debugging"""
        self.id = Node._id
        Node._id += 1

    def __bool__(self) -> bool:
        # an empty leaf is still a node
        return True

    def __len__(self) -> int:
        """total number of characters under this node"""
        return self._len

    @property
    def weight(self) -> int:
        ...

    def is_leaf(self) -> bool:
        ...


@dataclass(repr=False)
class Leaf(Node):
    """
    A leaf owns a contiguous fragment of text.
    The empty leaf is the identity for concatenate.
    """
    _data: str = ''

    def __init__(self, data: str=''):
        super().__init__(_len=len(data))
        self._data = data

    @property
    def data(self) -> str:
        return self._data

    @property
    def weight(self) -> int:
        return self._len

    def is_leaf(self) -> bool:
        return True

    def __repr__(self):
        return f"Leaf(id={self.id}, data[{len(self)}]={snippet(self.data)})"


@dataclass(repr=False)
class Branch(Node):
    """
    An internal node with exactly two children.
    The weight is the length of the entire left subtree,
    which is just len(left) since every node caches its total.
    """
    left: Node
    right: Node

    def __init__(self, left: Node, right: Node):
        super().__init__(_len=len(left) + len(right))
        self.left = left
        self.right = right

    @property
    def weight(self) -> int:
        return len(self.left)

    def is_leaf(self) -> bool:
        return False

    def __repr__(self):
        return f"Branch(id={self.id}, left={self.left.id}, right={self.right.id}, weight={self.weight}, len={len(self)})"


def concatenate(left: Node | None, right: Node | None) -> Node:
    """
    Join two trees, skipping empty operands so repeated
    split/rebuild cycles don't accumulate empty leaves.
    """
    if left is None or len(left) == 0:
        return right if right is not None else Leaf()
    if right is None or len(right) == 0:
        return left
    return Branch(left, right)


def split(node: Node | None, index: int) -> tuple[Node, Node]:
    """
    Partition the text under node into [0, index) and [index, len).
    Leaves are sliced into fresh leaves, branches are rebuilt along
    the path to index; the original tree is left untouched.
    Walks down to the leaf holding index, then folds the two halves
    back up the recorded path, so deep trees don't exhaust the stack.
    """
    if node is None:
        return Leaf(), Leaf()

    path: list[tuple[Branch, bool]] = []      # (branch, went left)
    p, offset = node, index
    while isinstance(p, Branch):
        w = p.weight
        if offset < w:
            path.append((p, True))
            p = p.left
        else:
            path.append((p, False))
            p = p.right
            offset -= w

    assert isinstance(p, Leaf)
    if offset >= len(p):
        left, right = p, Leaf()
    elif offset <= 0:
        left, right = Leaf(), p
    else:
        left, right = Leaf(p.data[:offset]), Leaf(p.data[offset:])

    for branch, went_left in reversed(path):
        if went_left:
            right = concatenate(right, branch.right)
        else:
            left = concatenate(branch.left, left)

    assert len(left) + len(right) == len(node), \
        f"split lost text: {len(left)} + {len(right)} != {len(node)}"
    return left, right


def build(text: str, chunk_size: int) -> Node:
    """
    Chunk text into leaves of chunk_size characters and fold
    adjacent pairs level by level into a balanced tree.
    """
    if chunk_size < 1:
        raise InvalidArgument(f"chunk_size must be positive, got {chunk_size}")
    nodes: list[Node] = [
        Leaf(text[i:i+chunk_size]) for i in range(0, len(text), chunk_size)
    ]
    if not nodes:
        return Leaf()

    while len(nodes) > 1:
        paired: list[Node] = [
            Branch(nodes[i], nodes[i+1]) for i in range(0, len(nodes) - 1, 2)
        ]
        if len(nodes) % 2:
            # odd one out moves up a level unchanged
            paired.append(nodes[-1])
        nodes = paired
    return nodes[0]


def leaves(node: Node | None) -> Iterator[Leaf]:
    """Yield leaves left to right"""
    stack: list[Node] = [node] if node is not None else []
    while stack:
        p = stack.pop()
        if isinstance(p, Leaf):
            yield p
        else:
            assert isinstance(p, Branch)
            stack.append(p.right)
            stack.append(p.left)


def count_nodes(node: Node | None) -> int:
    n = 0
    stack: list[Node] = [node] if node is not None else []
    while stack:
        p = stack.pop()
        n += 1
        if isinstance(p, Branch):
            stack.append(p.left)
            stack.append(p.right)
    return n
