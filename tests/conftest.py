import pytest

from huffviz.config_loader import load_config
from huffviz.server import create_app


def greedy_decode(bits, codes):
    """Reads bits left to right, emitting a symbol whenever the buffer matches a code."""
    reverse = {code: symbol for symbol, code in codes.items()}
    decoded = []
    buffer = ""
    for bit in bits:
        buffer += bit
        if buffer in reverse:
            decoded.append(reverse[buffer])
            buffer = ""
    assert buffer == "", f"trailing bits left undecoded: {buffer}"
    return decoded


@pytest.fixture
def decode():
    return greedy_decode


@pytest.fixture
def config():
    return load_config(None)


@pytest.fixture
def app(config):
    app = create_app(config)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
