import pytest  # noqa

from huffcodec.bits import BYTE_KEY, decode, encode, pack, unpack
from huffcodec.errors import MalformedStreamError, UnknownSymbolError
from huffcodec.tree import build_tree, generate_codes


def test_byte_key():
    assert len(BYTE_KEY) == 256
    assert BYTE_KEY[0] == "00000000"
    assert BYTE_KEY[65] == "01000001"
    assert BYTE_KEY[255] == "11111111"


def test_encode_unknown_symbol():
    with pytest.raises(UnknownSymbolError) as e:
        encode(b"az", {ord("a"): "0"})
    assert e.value.symbol == ord("z")
    # still catchable as a plain lookup failure
    with pytest.raises(KeyError):
        encode(b"z", {ord("a"): "0"})


@pytest.mark.parametrize("bits,packed", [
    ("", b""),
    ("0000", b"\x00"),
    ("1", b"\x80"),
    ("01000001", b"A"),
    ("010000011", b"A\x80"),
])
def test_pack(bits: str, packed: bytes):
    assert pack(bits) == packed


def test_unpack_drops_padding():
    assert unpack(b"A\x80", 9) == "010000011"
    assert unpack(b"", 0) == ""


@pytest.mark.parametrize("packed,bit_length", [
    (b"A", 9),
    (b"A\x00", 8),
    (b"A", -1),
])
def test_unpack_inconsistent_length(packed: bytes, bit_length: int):
    with pytest.raises(MalformedStreamError):
        unpack(packed, bit_length)


def test_decode():
    root = build_tree({ord("a"): 1, ord("b"): 1, ord("c"): 2})  # c=0 a=10 b=11
    assert decode(root, "0101100") == b"cabcc"


def test_decode_ends_mid_code():
    root = build_tree({ord("a"): 1, ord("b"): 1, ord("c"): 2})
    with pytest.raises(MalformedStreamError):
        decode(root, "01")


def test_decode_single_leaf():
    root = build_tree({ord("a"): 4})
    assert decode(root, "0000") == b"aaaa"
    with pytest.raises(MalformedStreamError):
        decode(root, "001")


def test_decode_rejects_non_bits():
    root = build_tree({ord("a"): 1, ord("b"): 1})
    with pytest.raises(MalformedStreamError):
        decode(root, "01x")


def test_padding_would_add_symbols():
    # a=0 b=1: "ab" packs to 01000000, whose six padding zeros decode as "a"
    root = build_tree({ord("a"): 1, ord("b"): 1})
    codes = generate_codes(root)
    bits = encode(b"ab", codes)
    packed = pack(bits)
    assert packed == b"\x40"

    every_bit = "".join(BYTE_KEY[b] for b in packed)
    assert decode(root, every_bit) == b"ab" + b"a" * 6
    assert decode(root, unpack(packed, len(bits))) == b"ab"
