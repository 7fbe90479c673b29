from collections import Counter
from typing import Iterable, Optional

from huffcodec.abc import FrequencyTable, KeepType


def count_frequencies(
    data: Optional[Iterable[int]], keep: Optional[KeepType] = None
) -> FrequencyTable:
    """Count symbol occurrences, dropping symbols rejected by ``keep``."""
    if data is None:
        return {}
    if keep is not None:
        data = (s for s in data if keep(s))
    return dict(Counter(data))
