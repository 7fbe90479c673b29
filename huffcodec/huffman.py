import logging
from dataclasses import dataclass
from typing import Optional

from huffcodec.abc import CodeTable, Compressor, FrequencyTable, KeepType
from huffcodec.bits import decode, encode, pack, unpack
from huffcodec.errors import EmptyInputError, PersistenceMismatchError
from huffcodec.frequency import count_frequencies
from huffcodec.persistence import PackedPayload, frequency_checksum
from huffcodec.tree import build_tree, generate_codes

logger = logging.getLogger(__name__)

NUCLEOTIDES = frozenset(b"ACGT")


def is_nucleotide(s: int) -> bool:
    return s in NUCLEOTIDES


def compression_ratio(original_length: int, packed_length: int) -> float:
    if original_length == 0:
        raise EmptyInputError("Cannot compute a compression ratio for empty input")  # noqa
    return (1 - packed_length / original_length) * 100


@dataclass(frozen=True)
class CompressionResult:
    payload: PackedPayload
    codes: CodeTable
    frequencies: FrequencyTable
    ratio: float

    @property
    def packed(self) -> bytes:
        return self.payload.data


class HuffmanCodec(Compressor):
    """Static Huffman coder over single-byte symbols.

    ``keep`` filters the input before anything else happens; symbols it
    rejects are dropped, not substituted, and do not count towards the ratio.
    """

    def __init__(self, keep: Optional[KeepType] = None, progress: bool = False) -> None:  # noqa
        self.keep = keep
        self.progress = progress

    def effective_input(self, data: bytes) -> bytes:
        if self.keep is None:
            return bytes(data)
        return bytes(s for s in data if self.keep(s))

    def compress(self, data: bytes) -> CompressionResult:
        data = self.effective_input(data)
        if len(data) == 0:
            raise EmptyInputError("Nothing to compress: effective input is empty")

        frequencies = count_frequencies(data)
        root = build_tree(frequencies)
        codes = generate_codes(root)

        logger.debug("Alphabet: %s", sorted(frequencies))
        logger.debug("Frequencies: %s", sorted(frequencies.items()))
        logger.debug("Codes: %s", sorted(codes.items()))

        bits = encode(data, codes, progress=self.progress)
        packed = pack(bits)
        payload = PackedPayload(
            data=packed,
            bit_length=len(bits),
            symbol_count=len(data),
            checksum=frequency_checksum(frequencies),
        )
        ratio = compression_ratio(len(data), len(packed))
        logger.info(
            "Compressed %d symbols (%d distinct) into %d bits / %d bytes, ratio %.2f%%",  # noqa
            len(data), len(frequencies), len(bits), len(packed), ratio,
        )
        return CompressionResult(payload, codes, frequencies, ratio)

    def decompress(self, payload: PackedPayload, frequencies: FrequencyTable) -> bytes:  # noqa
        """Rebuild the tree from ``frequencies`` and decode ``payload``.

        The table is checked against the payload before decoding: checksum,
        symbol count and expected bit length must all agree, and the decoded
        symbols must reproduce the table exactly.
        """
        if frequency_checksum(frequencies) != payload.checksum:
            raise PersistenceMismatchError(
                f"Frequency table checksum {frequency_checksum(frequencies):#010x} "
                f"does not match payload checksum {payload.checksum:#010x}"
            )
        total = sum(frequencies.values())
        if total != payload.symbol_count:
            raise PersistenceMismatchError(
                f"Frequency table describes {total} symbols, payload holds {payload.symbol_count}"  # noqa
            )
        if total == 0:
            raise EmptyInputError("Nothing to decompress: frequency table is empty")  # noqa

        root = build_tree(frequencies)
        codes = generate_codes(root)
        expected_bits = sum(n * len(codes[s]) for s, n in frequencies.items())
        if expected_bits != payload.bit_length:
            raise PersistenceMismatchError(
                f"Frequency table implies {expected_bits} bits, payload holds {payload.bit_length}"  # noqa
            )

        bits = unpack(payload.data, payload.bit_length)
        decoded = decode(root, bits, progress=self.progress)
        if count_frequencies(decoded) != frequencies:
            raise PersistenceMismatchError("Decoded symbols do not reproduce the frequency table")  # noqa

        logger.info("Decompressed %d bits into %d symbols", len(bits), len(decoded))  # noqa
        return decoded


TEXT = HuffmanCodec()
DNA = HuffmanCodec(keep=is_nucleotide)
IMAGE = HuffmanCodec()


def compress_text(data: bytes) -> CompressionResult:
    return TEXT.compress(data)


def compress_dna(data: bytes) -> CompressionResult:
    return DNA.compress(data)


def compress_image(pixels: bytes) -> CompressionResult:
    """``pixels`` is one grayscale intensity byte per pixel, row-major."""
    return IMAGE.compress(pixels)


def decompress_text(payload: PackedPayload, frequencies: FrequencyTable) -> bytes:  # noqa
    return TEXT.decompress(payload, frequencies)


def decompress_dna(payload: PackedPayload, frequencies: FrequencyTable) -> bytes:  # noqa
    return DNA.decompress(payload, frequencies)


def decompress_image(payload: PackedPayload, frequencies: FrequencyTable) -> bytes:  # noqa
    return IMAGE.decompress(payload, frequencies)
