import logging
from dataclasses import dataclass
from typing import Dict, Hashable, List

from bitarray import bitarray

from .encoder import DEFAULT_BITS_PER_SYMBOL, CompressionStats, compression_stats, encode, encode_bits
from .frequency import FrequencyEntry, analyze
from .huffman import assign_codes, build

logger = logging.getLogger(__name__)


@dataclass
class HuffmanResult:
    entries: List[FrequencyEntry]
    root: object
    codes: Dict[Hashable, str]
    encoded: str
    stats: CompressionStats


class HuffmanCompressor:
    # Runs the analyze -> build -> encode pipeline in one call. Every call
    # starts from scratch; nothing is kept between texts.
    def __init__(self, bits_per_symbol: int = DEFAULT_BITS_PER_SYMBOL):
        """
        Initializes the compressor.

        Parameters:
        bits_per_symbol (int): Width of the uncompressed baseline used for the ratio.
        """
        if bits_per_symbol < 1:
            raise ValueError(f"bits_per_symbol must be positive, got {bits_per_symbol}")
        self.bits_per_symbol = bits_per_symbol

    def build_tree(self, text: str):
        """
        Builds the Huffman tree for the given text.

        Parameters:
        text (str): The text to analyze.

        Returns:
        The tree root.
        """
        return build(analyze(self._check_text(text)))

    def compress(self, text: str) -> HuffmanResult:
        """
        Compresses the given text.

        Parameters:
        text (str): The text to compress. Empty text raises EmptyInputError.

        Returns:
        HuffmanResult: Frequencies, tree, code table, bitstring and stats.
        """
        text = self._check_text(text)
        entries = analyze(text)
        root = build(entries)
        codes = assign_codes(root)
        encoded = encode(text, codes)
        stats = compression_stats(len(text), len(encoded), self.bits_per_symbol)
        logger.debug("Compressed %d chars into %d bits using %d codes", len(text), len(encoded), len(codes))
        return HuffmanResult(entries, root, codes, encoded, stats)

    def compress_bits(self, text: str) -> bitarray:
        """
        Compresses the given text into a bitarray.

        Parameters:
        text (str): The text to compress. Must not be empty.

        Returns:
        bitarray: Compressed binary data.
        """
        text = self._check_text(text)
        codes = assign_codes(self.build_tree(text))
        return encode_bits(text, codes)

    @staticmethod
    def code_for(symbol: Hashable, codes: Dict[Hashable, str]) -> str:
        return encode([symbol], codes)

    @staticmethod
    def _check_text(text):
        if not isinstance(text, str):
            raise TypeError("Input text must be a string.")
        return text
