class HuffmanError(Exception):
    """Base class for every error raised by huffviz."""


class EmptyInputError(HuffmanError, ValueError):
    """Raised when a tree is requested over an empty alphabet."""


class MissingCodeError(HuffmanError, LookupError):
    """Raised when a symbol has no entry in the code table."""

    def __init__(self, symbol):
        super().__init__(f"No code for symbol: {symbol!r}")
        self.symbol = symbol


class SessionStateError(HuffmanError):
    """Raised when a session operation is not available at the current step."""


class ConfigError(HuffmanError):
    """Raised when the configuration file is missing or malformed."""
