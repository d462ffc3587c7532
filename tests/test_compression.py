import pytest
from bitarray import bitarray

from huffviz.compression import HuffmanCompressor, HuffmanResult
from huffviz.errors import EmptyInputError


@pytest.fixture
def compressor():
    return HuffmanCompressor()


def test_compress_hello_world(compressor, decode):
    result = compressor.compress("HELLO WORLD")
    assert isinstance(result, HuffmanResult)
    assert [e.symbol for e in result.entries] == list("HELO WRD")
    assert result.root.weight == 11
    assert set(result.codes) == set("HELO WRD")
    assert "".join(decode(result.encoded, result.codes)) == "HELLO WORLD"
    assert result.stats.symbol_count == 11
    assert result.stats.encoded_bits == len(result.encoded)


def test_compress_empty_text(compressor):
    with pytest.raises(EmptyInputError):
        compressor.compress("")
    with pytest.raises(EmptyInputError):
        compressor.build_tree("")


def test_compress_rejects_non_string(compressor):
    with pytest.raises(TypeError):
        compressor.compress(b"bytes")


def test_compress_degenerate(compressor):
    result = compressor.compress("AAAA")
    assert result.codes == {"A": ""}
    assert result.encoded == ""
    assert result.stats.ratio == 100.0


def test_compress_bits(compressor):
    text = "ABRACADABRA"
    ba = compressor.compress_bits(text)
    assert isinstance(ba, bitarray)
    assert ba.to01() == compressor.compress(text).encoded


def test_code_for(compressor):
    codes = compressor.compress("HELLO WORLD").codes
    assert compressor.code_for("L", codes) == codes["L"]
    with pytest.raises(LookupError):
        compressor.code_for("Q", codes)


def test_bits_per_symbol(decode):
    result = HuffmanCompressor(bits_per_symbol=16).compress("ABAB")
    assert result.stats.original_bits == 64
    assert result.stats.ratio == pytest.approx((1 - 4 / 64) * 100)
    with pytest.raises(ValueError):
        HuffmanCompressor(bits_per_symbol=0)


def test_recompressing_starts_fresh(compressor):
    first = compressor.compress("AAB")
    compressor.compress("XYZXYZ")
    again = compressor.compress("AAB")
    assert first.codes == again.codes
    assert first.encoded == again.encoded
