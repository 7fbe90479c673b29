import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import fire  # noqa

from huffcodec.errors import HuffmanError
from huffcodec.huffman import CompressionResult, HuffmanCodec, is_nucleotide
from huffcodec.image import read_grayscale_pixels, write_grayscale_pixels
from huffcodec.persistence import (
    TEXT_ENCODING,
    PackedPayload,
    ascii_key,
    parse_frequencies,
    serialize_frequencies,
)
from huffcodec.tree import build_tree, ch, format_tree

logger = logging.getLogger("huffcodec.run")

Domains = {"text": None, "dna": is_nucleotide, "image": None}


def setup_logging(level: str = "INFO", log_dir: Optional[str] = None) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_dir is not None:
        os.makedirs(log_dir, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        handlers.append(logging.FileHandler(os.path.join(log_dir, f"run_{timestamp}.log")))  # noqa
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        handlers=handlers,
        force=True,
    )


def make_codec(domain: str, progress: bool = False) -> HuffmanCodec:
    if domain not in Domains:
        raise ValueError(f"Unknown domain: {domain}")
    return HuffmanCodec(keep=Domains[domain], progress=progress)


def read_input(domain: str, in_file: str) -> bytes:
    if domain == "image":
        pixels, width, height = read_grayscale_pixels(in_file)
        logger.info("Read %dx%d image from %s", width, height, in_file)
        return pixels
    with open(in_file, "rb") as f:
        return f.read()


def write_text(path: Path, text: str) -> None:
    with open(path, "w", encoding=TEXT_ENCODING, newline="") as f:
        f.write(text)


def read_text(path: str) -> str:
    with open(path, "r", encoding=TEXT_ENCODING, newline="") as f:
        return f.read()


def display(result: CompressionResult) -> None:
    print(f"Compression ratio: {result.ratio:.2f}%")
    print(f"Packed length: {len(result.packed)} bytes ({result.payload.bit_length} bits)")  # noqa
    print("Codes and frequencies:")
    for s in sorted(result.codes):
        print(f"  '{ch(s)}': frequency={result.frequencies[s]}, code={result.codes[s]}")  # noqa


def compress(
    domain: str,
    in_file: str,
    out_dir: str = ".",
    progress: bool = False,
    show_tree: bool = False,
) -> None:
    codec = make_codec(domain, progress)
    data = read_input(domain, in_file)
    result = codec.compress(data)

    if show_tree:
        print("Huffman tree:")
        print(format_tree(build_tree(result.frequencies)))

    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    stem = Path(in_file).stem
    payload_path = out / f"{stem}.huf"
    freq_path = out / f"{stem}.freq.txt"
    key_path = out / "ascii_key.txt"

    payload_path.write_bytes(result.payload.to_bytes())
    write_text(freq_path, serialize_frequencies(result.frequencies))
    write_text(key_path, ascii_key())

    display(result)
    print(f"Payload written to {payload_path}")
    print(f"Frequency table written to {freq_path}")
    print(f"ASCII key written to {key_path}")


def decompress(
    payload_file: str,
    freq_file: str,
    out_file: str,
    domain: str = "text",
    width: Optional[int] = None,
    height: Optional[int] = None,
    progress: bool = False,
) -> None:
    codec = make_codec(domain, progress)
    payload = PackedPayload.from_bytes(Path(payload_file).read_bytes())
    frequencies = parse_frequencies(read_text(freq_file))
    decoded = codec.decompress(payload, frequencies)

    if domain == "image":
        if width is None or height is None:
            raise ValueError("Image decompression needs --width and --height")
        write_grayscale_pixels(out_file, decoded, width, height)
    else:
        Path(out_file).write_bytes(decoded)
    print(f"Decompressed {len(decoded)} symbols to {out_file}")


def check(domain: str, in_file: str, progress: bool = False) -> None:
    codec = make_codec(domain, progress)
    data = codec.effective_input(read_input(domain, in_file))

    result = codec.compress(data)
    decoded = codec.decompress(result.payload, result.frequencies)

    if data == decoded:
        print("Data successfully encoded and decoded!")
        print("Alphabet size:", len(result.frequencies))
        print("Data length: ", len(data), "symbols")
        print(f"Encoded length: {result.payload.bit_length} bits = {len(result.packed)} bytes")  # noqa
        print(f"Compression ratio: {result.ratio:.2f}%")
    else:
        print("Error: decoded data does not match original!")
        print(f"Original data: {len(data)} {data[:20]!r}...")
        print(f"Decoded data:  {len(decoded)} {decoded[:20]!r}...")
        raise RuntimeError(
            f"Decoded data does not match original! {data!r} != {decoded!r}"
        )


def key(out_file: str) -> None:
    write_text(Path(out_file), ascii_key())
    print(f"ASCII key written to {out_file}")


class Main:
    """Huffman compressor for text, DNA and grayscale images.

    Logging flags go with the constructor: ``--log_level`` and ``--log_dir``.
    """

    def __init__(self, log_level: str = "INFO", log_dir: Optional[str] = None):
        setup_logging(log_level, log_dir)

    compress = staticmethod(compress)
    decompress = staticmethod(decompress)
    check = staticmethod(check)
    key = staticmethod(key)


if __name__ == "__main__":
    try:
        fire.Fire(Main)
    except HuffmanError as e:
        logger.error("%s: %s", type(e).__name__, e)
        sys.exit(1)
