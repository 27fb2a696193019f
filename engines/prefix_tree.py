"""
Prefix-code (Huffman) tree shared by the bitstream and text codecs.

The tree is generic over the symbol type: the bitstream codec feeds it small
integers, the text codec feeds it characters. Construction is a priority-queue
merge where equal frequencies are ordered by arrival into the queue, so the same
input always yields the same tree. Every traversal uses an explicit stack, so
very unbalanced trees cannot hit the recursion limit.
"""

import heapq
import itertools
from collections import Counter
from typing import Callable, Dict, Generic, Hashable, Iterable, List, Optional, Tuple, TypeVar

from engines.errors import CorruptStreamError, EmptyInputError

S = TypeVar('S', bound=Hashable)


class Node(Generic[S]):
    """Leaf (holds a symbol) or internal node (holds exactly two children)."""

    __slots__ = ('freq', 'symbol', 'left', 'right')

    def __init__(
        self,
        freq: int,
        symbol: Optional[S] = None,
        left: 'Optional[Node[S]]' = None,
        right: 'Optional[Node[S]]' = None,
    ):
        self.freq = freq
        self.symbol = symbol
        self.left = left
        self.right = right

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __repr__(self):
        if self.is_leaf:
            return f"Node(leaf {self.symbol!r}, freq={self.freq})"
        return f"Node(internal, freq={self.freq})"


def frequency_table(symbols: Iterable[S]) -> Dict[S, int]:
    """Count symbols, keeping first-appearance order."""
    return dict(Counter(symbols))


def build_tree(freq: Dict[S, int]) -> Node[S]:
    """Merge the two lowest-frequency nodes until a single root remains."""
    if not freq:
        raise EmptyInputError("Cannot build a prefix-code tree from empty input")

    arrival = itertools.count()
    heap: List[Tuple[int, int, Node[S]]] = []
    for symbol, count in freq.items():
        heapq.heappush(heap, (count, next(arrival), Node(count, symbol)))

    while len(heap) > 1:
        left_freq, _, left = heapq.heappop(heap)
        right_freq, _, right = heapq.heappop(heap)
        merged = Node(left_freq + right_freq, left=left, right=right)
        heapq.heappush(heap, (merged.freq, next(arrival), merged))

    return heap[0][2]


def build_code_table(root: Node[S], lone_leaf_code: str = '') -> Dict[S, str]:
    """
    Map every leaf symbol to its root-to-leaf path ('0' left, '1' right).

    A tree made of a single leaf has no path; it gets `lone_leaf_code`.
    """
    if root.is_leaf:
        return {root.symbol: lone_leaf_code}

    table: Dict[S, str] = {}
    stack: List[Tuple[Node[S], str]] = [(root, '')]
    while stack:
        node, path = stack.pop()
        if node.is_leaf:
            table[node.symbol] = path
        else:
            stack.append((node.right, path + '1'))
            stack.append((node.left, path + '0'))
    return table


def iter_preorder(root: Node[S]):
    """Yield nodes in pre-order (node, left subtree, right subtree)."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        if not node.is_leaf:
            stack.append(node.right)
            stack.append(node.left)


def serialize_tree(root: Node[S], write_symbol: Callable[[S], bytes]) -> bytes:
    """Pre-order flags: b'\\x01' + symbol bytes for a leaf, b'\\x00' for an internal node."""
    out = bytearray()
    for node in iter_preorder(root):
        if node.is_leaf:
            out.append(1)
            out += write_symbol(node.symbol)
        else:
            out.append(0)
    return bytes(out)


def deserialize_tree(
    data: bytes,
    offset: int,
    symbol_size: int,
    read_symbol: Callable[[bytes], S],
) -> Tuple[Node[S], int]:
    """
    Rebuild a tree written by `serialize_tree`.

    Returns the root and the offset just past the tree.
    """
    root: Optional[Node[S]] = None
    # Internal nodes still waiting for a child
    pending: List[Node[S]] = []

    while True:
        if offset >= len(data):
            raise CorruptStreamError("Prefix-code tree is truncated")
        flag = data[offset]
        offset += 1

        if flag == 1:
            end = offset + symbol_size
            if end > len(data):
                raise CorruptStreamError("Prefix-code tree leaf is truncated")
            node = Node(0, read_symbol(data[offset:end]))
            offset = end
        elif flag == 0:
            node = Node(0)
        else:
            raise CorruptStreamError(f"Invalid tree node flag: {flag}")

        if root is None:
            root = node
        else:
            parent = pending[-1]
            if parent.left is None:
                parent.left = node
            else:
                parent.right = node
                pending.pop()

        if flag == 0:
            pending.append(node)
        if not pending:
            return root, offset
