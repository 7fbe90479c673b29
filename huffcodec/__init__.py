from huffcodec.errors import (  # noqa: F401
    EmptyAlphabetError,
    EmptyInputError,
    HuffmanError,
    MalformedStreamError,
    PersistenceMismatchError,
    UnknownSymbolError,
)
from huffcodec.huffman import (  # noqa: F401
    CompressionResult,
    HuffmanCodec,
    compress_dna,
    compress_image,
    compress_text,
    compression_ratio,
    decompress_dna,
    decompress_image,
    decompress_text,
)
from huffcodec.persistence import (  # noqa: F401
    PackedPayload,
    ascii_key,
    parse_ascii_key,
    parse_frequencies,
    serialize_frequencies,
)
