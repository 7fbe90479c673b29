from abc import ABC, abstractmethod
from typing import Any, Callable, TypeAlias


# Type aliases shared by the coder modules
SymbolType: TypeAlias = int
FrequencyTable: TypeAlias = dict[int, int]
CodeTable: TypeAlias = dict[int, str]
KeepType: TypeAlias = Callable[[int], bool]


class Compressor(ABC):
    @abstractmethod
    def compress(self, data: bytes) -> Any:
        pass

    @abstractmethod
    def decompress(self, payload: Any, frequencies: FrequencyTable) -> bytes:
        pass
