from .compression import HuffmanCompressor, HuffmanResult
from .encoder import CompressionStats, compression_stats, encode, encode_bits
from .errors import ConfigError, EmptyInputError, HuffmanError, MissingCodeError, SessionStateError
from .frequency import FrequencyEntry, analyze, frequency_map
from .huffman import HuffmanInternal, HuffmanLeaf, assign_codes, build, depth, iter_nodes, tree_to_dict
from .session import VisualizerSession

__version__ = "0.1.0"
