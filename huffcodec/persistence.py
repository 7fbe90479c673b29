"""Text and binary formats that cross the process boundary.

Only the frequency table and the packed payload are persisted; the decoder
rebuilds the tree from the table with :func:`huffcodec.tree.build_tree`.

Frequency table text (Latin-1, ``"\\n"`` line ends)::

    Symbol, Frequency
    \\n, 3
    [espacio], 12
    a, 40

Payload container::

    b"HUF1" | u32 checksum | u64 symbol_count | u64 bit_length | packed bytes
"""
import logging
import struct
import zlib
from dataclasses import dataclass

from huffcodec.abc import FrequencyTable
from huffcodec.bits import BYTE_KEY
from huffcodec.errors import MalformedStreamError, PersistenceMismatchError

logger = logging.getLogger(__name__)

TEXT_ENCODING = "latin-1"
FREQUENCY_HEADER = "Symbol, Frequency"

ESCAPES: dict[int, str] = {
    ord("\n"): "\\n",
    ord("\r"): "\\r",
    ord("\t"): "\\t",
    ord(" "): "[espacio]",
}
UNESCAPES: dict[str, int] = {v: k for k, v in ESCAPES.items()}

MAGIC = b"HUF1"
HEADER = struct.Struct(">4sIQQ")


def symbol_repr(s: int) -> str:
    return ESCAPES.get(s, chr(s))


def symbol_from_repr(rep: str) -> int:
    if rep in UNESCAPES:
        return UNESCAPES[rep]
    if len(rep) != 1 or ord(rep) > 255:
        raise PersistenceMismatchError(f"Not a single-byte symbol: {rep!r}")
    return ord(rep)


def serialize_frequencies(frequencies: FrequencyTable) -> str:
    lines = [FREQUENCY_HEADER]
    for s, n in sorted(frequencies.items()):
        lines.append(f"{symbol_repr(s)}, {n}")
    return "\n".join(lines) + "\n"


def parse_frequencies(text: str) -> FrequencyTable:
    """Inverse of :func:`serialize_frequencies`.

    Raises :class:`PersistenceMismatchError` on any line that is not a valid
    ``symbol, count`` record with a positive count, or on a repeated symbol.
    """
    frequencies: FrequencyTable = {}
    for lineno, line in enumerate(text.split("\n"), start=1):
        # every record ends in a digit, so a trailing CR is line-ending noise
        line = line.rstrip("\r")
        if not line or line == FREQUENCY_HEADER:
            continue
        rep, sep, count = line.rpartition(", ")
        if not sep:
            raise PersistenceMismatchError(f"Line {lineno}: expected 'symbol, count', got {line!r}")  # noqa
        s = symbol_from_repr(rep)
        try:
            n = int(count)
        except ValueError:
            raise PersistenceMismatchError(f"Line {lineno}: non-numeric count {count!r}") from None  # noqa
        if n <= 0:
            raise PersistenceMismatchError(f"Line {lineno}: count must be positive, got {n}")  # noqa
        if s in frequencies:
            raise PersistenceMismatchError(f"Line {lineno}: duplicate symbol {rep!r}")  # noqa
        frequencies[s] = n
    return frequencies


def frequency_checksum(frequencies: FrequencyTable) -> int:
    return zlib.crc32(serialize_frequencies(frequencies).encode(TEXT_ENCODING))


def ascii_key() -> str:
    """The static table of all 256 byte values and their 8-bit patterns."""
    return "".join(f"'{symbol_repr(i)}' = {BYTE_KEY[i]}\n" for i in range(256))


def parse_ascii_key(text: str) -> dict[int, str]:
    key: dict[int, str] = {}
    for lineno, line in enumerate(text.split("\n"), start=1):
        if not line:
            continue
        quoted, sep, bits = line.rpartition(" = ")
        if not sep or len(quoted) < 3 or quoted[0] != "'" or quoted[-1] != "'":
            raise PersistenceMismatchError(f"Line {lineno}: bad key entry {line!r}")  # noqa
        if len(bits) != 8 or set(bits) - {"0", "1"}:
            raise PersistenceMismatchError(f"Line {lineno}: bad bit pattern {bits!r}")  # noqa
        key[symbol_from_repr(quoted[1:-1])] = bits
    return key


@dataclass(frozen=True)
class PackedPayload:
    data: bytes
    bit_length: int
    symbol_count: int
    checksum: int

    def to_bytes(self) -> bytes:
        return HEADER.pack(MAGIC, self.checksum, self.symbol_count, self.bit_length) + self.data  # noqa

    @classmethod
    def from_bytes(cls, raw: bytes) -> "PackedPayload":
        if len(raw) < HEADER.size:
            raise MalformedStreamError(f"Payload too short: {len(raw)} bytes < header {HEADER.size}")  # noqa
        magic, checksum, symbol_count, bit_length = HEADER.unpack_from(raw)
        if magic != MAGIC:
            raise MalformedStreamError(f"Invalid payload magic: {magic!r}")
        logger.debug("Read payload: %d symbols, %d bits", symbol_count, bit_length)  # noqa
        return cls(bytes(raw[HEADER.size :]), bit_length, symbol_count, checksum)
