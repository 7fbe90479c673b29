import dataclasses

import pytest  # noqa

from huffcodec.bits import pack
from huffcodec.errors import EmptyInputError, PersistenceMismatchError
from huffcodec.huffman import (
    compress_dna,
    compress_image,
    compress_text,
    compression_ratio,
    decompress_dna,
    decompress_image,
    decompress_text,
)
from huffcodec.persistence import PackedPayload, frequency_checksum


def test_single_symbol_alphabet():
    result = compress_text(b"aaaa")
    assert result.codes == {ord("a"): "0"}
    assert result.payload.bit_length == 4
    assert decompress_text(result.payload, result.frequencies) == b"aaaa"


def test_ratio_uses_effective_length():
    result = compress_text(b"AAAA")
    assert result.frequencies == {ord("A"): 4}
    assert result.packed == b"\x00"
    assert result.ratio == pytest.approx(75.0)


def test_compression_ratio():
    assert compression_ratio(8, 2) == pytest.approx(75.0)
    assert compression_ratio(4, 4) == pytest.approx(0.0)
    with pytest.raises(EmptyInputError):
        compression_ratio(0, 0)


def test_dna_filtering():
    result = compress_dna(b"AXCGZT")
    assert result.frequencies == {ord("A"): 1, ord("C"): 1, ord("G"): 1, ord("T"): 1}  # noqa
    assert result.payload.symbol_count == 4
    assert all(len(code) == 2 for code in result.codes.values())
    assert result.ratio == pytest.approx((1 - 1 / 4) * 100)
    assert decompress_dna(result.payload, result.frequencies) == b"ACGT"


def test_dna_without_bases():
    with pytest.raises(EmptyInputError):
        compress_dna(b"xyz\n")


def test_image_pixels():
    pixels = bytes([0, 0, 0, 255, 128, 128, 0, 17] * 16)
    result = compress_image(pixels)
    assert set(result.frequencies) == {0, 17, 128, 255}
    assert decompress_image(result.payload, result.frequencies) == pixels


def test_deterministic():
    data = b"the quick brown fox jumps over the lazy dog" * 3
    first = compress_text(data)
    second = compress_text(data)
    assert first.payload.to_bytes() == second.payload.to_bytes()
    assert first.codes == second.codes


def test_rebuilt_table_in_other_order():
    data = b"mississippi river"
    result = compress_text(data)
    reordered = dict(reversed(list(result.frequencies.items())))
    assert decompress_text(result.payload, reordered) == data


def test_corrupted_count_is_detected():
    result = compress_text(b"hello world")
    altered = dict(result.frequencies)
    altered[ord("l")] += 1
    with pytest.raises(PersistenceMismatchError):
        decompress_text(result.payload, altered)


def test_swapped_counts_are_detected():
    result = compress_text(b"aaab")
    swapped = {ord("a"): 1, ord("b"): 3}
    with pytest.raises(PersistenceMismatchError):
        decompress_text(result.payload, swapped)


def test_symbol_count_mismatch():
    result = compress_text(b"abc")
    bigger = {ord("a"): 1, ord("b"): 1, ord("c"): 1, ord("d"): 1}
    payload = dataclasses.replace(result.payload, checksum=frequency_checksum(bigger))  # noqa
    with pytest.raises(PersistenceMismatchError):
        decompress_text(payload, bigger)


def test_bit_length_mismatch():
    # abc -> c=0 a=10 b=11, 5 bits; {a:2, b:1} would need 3
    result = compress_text(b"abc")
    other = {ord("a"): 2, ord("b"): 1}
    payload = dataclasses.replace(result.payload, checksum=frequency_checksum(other))  # noqa
    with pytest.raises(PersistenceMismatchError):
        decompress_text(payload, other)


def test_decoded_histogram_mismatch():
    # "aac" has the same length and bit count as "abc" under c=0 a=10 b=11
    table = {ord("a"): 1, ord("b"): 1, ord("c"): 1}
    payload = PackedPayload(pack("10100"), 5, 3, frequency_checksum(table))
    with pytest.raises(PersistenceMismatchError):
        decompress_text(payload, table)
