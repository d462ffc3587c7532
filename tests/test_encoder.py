import pytest
from bitarray import bitarray

from huffviz.encoder import CompressionStats, compression_stats, encode, encode_bits
from huffviz.errors import MissingCodeError
from huffviz.frequency import analyze
from huffviz.huffman import assign_codes, build


@pytest.fixture
def hello_codes():
    return assign_codes(build(analyze("HELLO WORLD")))


def test_encode_hello_world(hello_codes, decode):
    bits = encode("HELLO WORLD", hello_codes)
    assert len(bits) == sum(len(hello_codes[c]) for c in "HELLO WORLD")
    assert len(bits) == 32
    assert bits == "".join(hello_codes[c] for c in "HELLO WORLD")
    assert "".join(decode(bits, hello_codes)) == "HELLO WORLD"


def test_encode_empty_sequence(hello_codes):
    assert encode("", hello_codes) == ""
    assert len(encode_bits("", hello_codes)) == 0


def test_single_symbol_lookup(hello_codes):
    assert encode("L", hello_codes) == "10"
    assert encode(["H"], hello_codes) == "1110"


def test_missing_symbol_raises_lookup_error(hello_codes):
    with pytest.raises(LookupError):
        encode("HELLO!", hello_codes)
    with pytest.raises(MissingCodeError) as excinfo:
        encode_bits("Z", hello_codes)
    assert excinfo.value.symbol == "Z"


def test_encode_bits_matches_string(hello_codes):
    ba = encode_bits("HELLO WORLD", hello_codes)
    assert isinstance(ba, bitarray)
    assert ba.to01() == encode("HELLO WORLD", hello_codes)


def test_degenerate_alphabet_encodes_to_nothing():
    codes = assign_codes(build(analyze("AAAA")))
    assert encode("AAAA", codes) == ""
    stats = compression_stats(4, 0)
    assert stats.original_bits == 32
    assert stats.encoded_bits == 0
    assert stats.ratio == 100.0


def test_compression_stats_hello_world():
    stats = compression_stats(11, 32)
    assert stats.original_bits == 88
    assert stats.ratio == pytest.approx((1 - 32 / 88) * 100)


def test_compression_stats_empty_input_has_no_ratio():
    stats = compression_stats(0, 0)
    assert stats == CompressionStats(0, 0, 0, None)
    assert stats.to_dict() == {"symbol_count": 0, "original_bits": 0, "encoded_bits": 0, "ratio": None}


def test_compression_stats_custom_baseline():
    assert compression_stats(4, 4, bits_per_symbol=2).ratio == pytest.approx(50.0)
    with pytest.raises(ValueError):
        compression_stats(4, 4, bits_per_symbol=0)
