import logging
from dataclasses import dataclass
from typing import Dict, Hashable, Iterable, Optional

from bitarray import bitarray

from .errors import MissingCodeError

logger = logging.getLogger(__name__)

DEFAULT_BITS_PER_SYMBOL = 8


@dataclass(frozen=True)
class CompressionStats:
    symbol_count: int
    original_bits: int
    encoded_bits: int
    ratio: Optional[float]  # percent saved, None for empty input

    def to_dict(self) -> dict:
        return {
            "symbol_count": self.symbol_count,
            "original_bits": self.original_bits,
            "encoded_bits": self.encoded_bits,
            "ratio": self.ratio,
        }


def _lookup(table: Dict[Hashable, str], symbol: Hashable) -> str:
    try:
        return table[symbol]
    except KeyError:
        raise MissingCodeError(symbol) from None


def encode(sequence: Iterable[Hashable], table: Dict[Hashable, str]) -> str:
    """
    Encodes the sequence by concatenating the code of each symbol.

    Parameters:
    sequence (iterable): The symbols to encode. A one-symbol sequence gives
        that symbol's own code.
    table (dict): Symbol to code mapping from assign_codes.

    Returns:
    str: The bitstring, e.g. "0110". Empty input gives "".
    """
    return "".join(_lookup(table, symbol) for symbol in sequence)


def encode_bits(sequence: Iterable[Hashable], table: Dict[Hashable, str]) -> bitarray:
    """
    Same as encode, but returns the bits as a bitarray.
    """
    ba = bitarray(endian="big")
    for symbol in sequence:
        ba.extend(_lookup(table, symbol))
    return ba


def compression_stats(symbol_count: int, encoded_bits: int,
                      bits_per_symbol: int = DEFAULT_BITS_PER_SYMBOL) -> CompressionStats:
    """
    Compares the encoded size against a fixed-width baseline.

    The ratio is the percentage of bits saved, (1 - E / (L * bits_per_symbol)) * 100.
    It is None when there are no symbols. A single-symbol alphabet encodes
    to zero bits and reports 100.0.
    """
    if bits_per_symbol < 1:
        raise ValueError(f"bits_per_symbol must be positive, got {bits_per_symbol}")
    original_bits = symbol_count * bits_per_symbol
    ratio = None
    if original_bits:
        ratio = (1 - encoded_bits / original_bits) * 100
    logger.debug("Encoded %d symbols: %d -> %d bits", symbol_count, original_bits, encoded_bits)
    return CompressionStats(symbol_count, original_bits, encoded_bits, ratio)
