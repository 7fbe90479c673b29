import tqdm  # noqa

from huffcodec.abc import CodeTable
from huffcodec.errors import MalformedStreamError, UnknownSymbolError
from huffcodec.tree import Leaf, Node


# Static key: every byte value and its fixed-width 8-bit pattern
BYTE_KEY: list[str] = [format(i, "b").zfill(8) for i in range(256)]


def encode(data: bytes, codes: CodeTable, progress: bool = False) -> str:
    out = []
    for s in tqdm.tqdm(data, desc="Encoding", disable=not progress):
        code = codes.get(s)
        if code is None:
            raise UnknownSymbolError(s)
        out.append(code)
    return "".join(out)


def pack(bits: str) -> bytes:
    """Group ``bits`` into bytes, zero-padding the last group on the right."""
    pad = -len(bits) % 8
    bits += "0" * pad
    return bytes(int(bits[i : i + 8], 2) for i in range(0, len(bits), 8))


def unpack(packed: bytes, bit_length: int) -> str:
    """Expand packed bytes back to a bit string of exactly ``bit_length`` bits.

    The padding appended by :func:`pack` is dropped here, so the decoder never
    sees it.
    """
    if bit_length < 0:
        raise MalformedStreamError(f"Negative bit length: {bit_length}")
    n_bytes = (bit_length + 7) // 8
    if n_bytes != len(packed):
        raise MalformedStreamError(
            f"Bit length {bit_length} needs {n_bytes} bytes, payload has {len(packed)}"  # noqa
        )
    return "".join(BYTE_KEY[b] for b in packed)[:bit_length]


def decode(root: Node, bits: str, progress: bool = False) -> bytes:
    decoded = bytearray()
    node = root

    for i, b in enumerate(tqdm.tqdm(bits, desc="Decoding", disable=not progress)):  # noqa
        if b != "0" and b != "1":
            raise MalformedStreamError(f"Invalid bit {b!r} at position {i}")
        if isinstance(node, Leaf):
            # only a one-leaf tree lands here: its single code is "0"
            if b != "0":
                raise MalformedStreamError(f"Walked past leaf at bit {i}")
            decoded.append(node.symbol)
            continue
        node = node.left if b == "0" else node.right
        if isinstance(node, Leaf):
            decoded.append(node.symbol)
            node = root

    if node is not root:
        raise MalformedStreamError("Bit stream ended in the middle of a code")
    return bytes(decoded)
