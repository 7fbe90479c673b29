import heapq
import itertools
import logging
from dataclasses import dataclass
from typing import Union

from huffcodec.abc import CodeTable, FrequencyTable
from huffcodec.errors import EmptyAlphabetError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Leaf:
    symbol: int
    weight: int


@dataclass(frozen=True)
class Internal:
    weight: int
    left: "Node"
    right: "Node"


Node = Union[Leaf, Internal]


def ch(x: int) -> str:
    if 32 <= x < 127:
        return chr(x)
    elif x == ord("\n"):
        return "\\n"
    return f"<{x}>"


def build_tree(frequencies: FrequencyTable) -> Node:
    """Build the Huffman tree for a frequency table.

    Heap entries are keyed by ``(weight, sequence)``. Leaves are numbered in
    ascending symbol order and every merged node takes the next number, so
    equal tables give identical trees no matter how the dict was filled.
    """
    if not frequencies:
        raise EmptyAlphabetError("Cannot build a Huffman tree from an empty frequency table")  # noqa

    seq = itertools.count()
    heap: list[tuple[int, int, Node]] = [
        (w, next(seq), Leaf(s, w)) for s, w in sorted(frequencies.items())
    ]
    heapq.heapify(heap)

    while len(heap) > 1:
        w1, _, left = heapq.heappop(heap)
        w2, _, right = heapq.heappop(heap)
        heapq.heappush(heap, (w1 + w2, next(seq), Internal(w1 + w2, left, right)))

    root = heap[0][2]
    logger.debug("Built tree: %d leaves, total weight %d", len(frequencies), root.weight)  # noqa
    return root


def generate_codes(root: Node) -> CodeTable:
    if isinstance(root, Leaf):
        # a lone symbol still needs one bit per occurrence
        return {root.symbol: "0"}

    codes: CodeTable = {}
    stack: list[tuple[Node, str]] = [(root, "")]
    while stack:
        node, path = stack.pop()
        if isinstance(node, Leaf):
            codes[node.symbol] = path
        else:
            stack.append((node.right, path + "1"))
            stack.append((node.left, path + "0"))
    return codes


def format_tree(root: Node) -> str:
    """Render the tree one node per line, children indented under parents."""
    lines = []
    stack: list[tuple[Node, int, str]] = [(root, 0, "")]
    while stack:
        node, depth, edge = stack.pop()
        pad = "    " * depth + edge
        if isinstance(node, Leaf):
            lines.append(f"{pad}'{ch(node.symbol)}' ({node.weight})")
        else:
            lines.append(f"{pad}* ({node.weight})")
            stack.append((node.right, depth + 1, "1: "))
            stack.append((node.left, depth + 1, "0: "))
    return "\n".join(lines)
