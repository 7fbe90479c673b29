class HuffmanError(ValueError):
    """Base class for every error raised by huffcodec."""


class EmptyAlphabetError(HuffmanError):
    """A tree was requested for a frequency table with no entries."""


class EmptyInputError(HuffmanError):
    """The effective (post-filter) input has no symbols."""


class UnknownSymbolError(HuffmanError, KeyError):
    """The encoder met a symbol that has no code."""

    def __init__(self, symbol: int) -> None:
        super().__init__(f"No code for symbol {symbol!r}")
        self.symbol = symbol

    def __str__(self) -> str:
        return str(self.args[0])


class MalformedStreamError(HuffmanError):
    """The packed bit stream cannot be walked through the tree."""


class PersistenceMismatchError(HuffmanError):
    """A persisted frequency table is invalid or does not match its payload."""
