import logging
from heapq import heappush, heappop
from itertools import count
from typing import Dict, Hashable, Iterable, Iterator, Tuple

from .errors import EmptyInputError

logger = logging.getLogger(__name__)


class HuffmanLeaf:
    """A tree leaf carrying one symbol and its frequency."""

    __slots__ = ("symbol", "weight")
    is_leaf = True

    def __init__(self, symbol: Hashable, weight: int) -> None:
        self.symbol = symbol
        self.weight = weight

    @property
    def label(self) -> str:
        return str(self.symbol)

    def __repr__(self) -> str:
        return f"HuffmanLeaf({self.symbol!r}, {self.weight})"


class HuffmanInternal:
    """
    An internal node owning exactly two children.

    The weight is the sum of the children's weights and the label is the
    concatenation of the leaf labels below it, left to right.
    """

    __slots__ = ("weight", "left", "right", "label")
    is_leaf = False

    def __init__(self, left, right) -> None:
        if left is right:
            raise ValueError("An internal node needs two distinct children")
        self.left = left
        self.right = right
        self.weight = left.weight + right.weight
        self.label = left.label + right.label

    def __repr__(self) -> str:
        return f"HuffmanInternal({self.label!r}, {self.weight})"


def build(entries: Iterable[Tuple[Hashable, int]]):
    """
    Builds a Huffman tree from (symbol, count) entries.

    The two lightest nodes are merged until one remains, the first one
    popped becoming the left child. Equal weights are popped in the order
    the nodes entered the working set: leaves in entry order, then every
    merged node after everything already present.

    Parameters:
    entries (iterable): FrequencyEntry values or plain (symbol, count) pairs.

    Returns:
    HuffmanLeaf | HuffmanInternal: The root. A single entry yields a bare leaf.
    """
    heap = []
    order = count()
    for symbol, weight in entries:
        if weight < 1:
            raise ValueError(f"Frequency of {symbol!r} must be at least 1, got {weight}")
        heappush(heap, (weight, next(order), HuffmanLeaf(symbol, weight)))

    if not heap:
        raise EmptyInputError("Cannot build a Huffman tree from zero frequency entries")

    leaves = len(heap)
    while len(heap) > 1:
        _, _, low = heappop(heap)
        _, _, high = heappop(heap)
        merged = HuffmanInternal(low, high)
        heappush(heap, (merged.weight, next(order), merged))

    root = heap[0][2]
    logger.debug("Built Huffman tree over %d symbols, total weight %d", leaves, root.weight)
    return root


def assign_codes(root) -> Dict[Hashable, str]:
    """
    Walks the tree and binds each leaf to its path, 0 for left and 1 for right.
    A root that is itself a leaf gets the empty code.
    """
    codes = {}
    stack = [(root, "")]
    while stack:
        node, path = stack.pop()
        if node.is_leaf:
            codes[node.symbol] = path
        else:
            # right first so the left subtree is visited first
            stack.append((node.right, path + "1"))
            stack.append((node.left, path + "0"))
    return codes


def iter_nodes(root) -> Iterator:
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        if not node.is_leaf:
            stack.append(node.right)
            stack.append(node.left)


def depth(root) -> int:
    """Length of the longest root-to-leaf path, in edges."""
    deepest = 0
    stack = [(root, 0)]
    while stack:
        node, level = stack.pop()
        if node.is_leaf:
            deepest = max(deepest, level)
        else:
            stack.append((node.left, level + 1))
            stack.append((node.right, level + 1))
    return deepest


def tree_to_dict(root) -> dict:
    """
    Converts the tree to nested dicts for JSON output.

    Leaves carry "symbol", internal nodes carry "left" and "right"; every
    node carries "label" and "weight".
    """
    result = {}
    stack = [(root, result)]
    while stack:
        node, out = stack.pop()
        out["label"] = node.label
        out["weight"] = node.weight
        if node.is_leaf:
            out["symbol"] = node.symbol
        else:
            out["left"] = {}
            out["right"] = {}
            stack.append((node.right, out["right"]))
            stack.append((node.left, out["left"]))
    return result
