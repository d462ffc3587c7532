from collections import Counter, namedtuple
from typing import Dict, Hashable, Iterable, List

FrequencyEntry = namedtuple("FrequencyEntry", "symbol count")


def analyze(sequence: Iterable[Hashable]) -> List[FrequencyEntry]:
    """
    Counts occurrences of each distinct symbol.

    Parameters:
    sequence (iterable): The symbols to count, e.g. a string.

    Returns:
    list: One FrequencyEntry per distinct symbol, in order of first occurrence.
    """
    # Counter keeps insertion order, so first occurrence wins
    freq = Counter(sequence)
    return [FrequencyEntry(symbol, count) for symbol, count in freq.items()]


def frequency_map(entries: Iterable[FrequencyEntry]) -> Dict[Hashable, int]:
    return {entry.symbol: entry.count for entry in entries}
