"""
Step-by-step state for one visualizer view.

The view walks through three stages: frequency analysis, tree building and
encoding. Each stage is computed only when the user asks for the next step,
and changing the text throws everything away and starts over at step 0.
"""

import logging
import threading

from .encoder import DEFAULT_BITS_PER_SYMBOL, compression_stats, encode
from .errors import EmptyInputError, SessionStateError
from .frequency import analyze
from .huffman import assign_codes, build, tree_to_dict

logger = logging.getLogger(__name__)

STEP_IDLE = 0
STEP_FREQUENCIES = 1
STEP_TREE = 2
STEP_ENCODED = 3
MAX_STEP = STEP_ENCODED


class VisualizerSession:
    # Every public method holds self.lock. It is reentrant so callers can
    # also hold it across a step and the following snapshot.
    def __init__(self, text="HELLO WORLD", uppercase=True, bits_per_symbol=DEFAULT_BITS_PER_SYMBOL):
        self.lock = threading.RLock()
        self.uppercase = uppercase
        self.bits_per_symbol = bits_per_symbol
        self.text = ""
        self.set_text(text)

    def set_text(self, text):
        """Replaces the input text and resets to step 0."""
        if not isinstance(text, str):
            raise TypeError("Input text must be a string.")
        with self.lock:
            self.text = text.upper() if self.uppercase else text
            self.reset()

    def reset(self):
        with self.lock:
            self.step = STEP_IDLE
            self.entries = []
            self.root = None
            self.codes = {}
            self.encoded = ""
            self.stats = None

    def next_step(self):
        """
        Runs the next stage and returns the new step number.

        Raises EmptyInputError, without moving, when the text is empty.
        Calling it on the last step does nothing.
        """
        with self.lock:
            if self.step >= MAX_STEP:
                return self.step
            if not self.text:
                raise EmptyInputError("Enter some text before advancing")

            if self.step == STEP_IDLE:
                self.entries = analyze(self.text)
            elif self.step == STEP_FREQUENCIES:
                self.root = build(self.entries)
                self.codes = assign_codes(self.root)
            elif self.step == STEP_TREE:
                self.encoded = encode(self.text, self.codes)
                self.stats = compression_stats(len(self.text), len(self.encoded), self.bits_per_symbol)

            self.step += 1
            logger.debug("Session advanced to step %d", self.step)
            return self.step

    def code_for(self, symbol):
        """Code of a single symbol, available once the tree is built."""
        if self.uppercase and isinstance(symbol, str):
            symbol = symbol.upper()
        with self.lock:
            if self.step < STEP_TREE:
                raise SessionStateError("Codes are not available before the tree is built")
            return encode([symbol], self.codes)

    def snapshot(self):
        with self.lock:
            state = {"text": self.text, "step": self.step, "max_step": MAX_STEP}
            if self.step >= STEP_FREQUENCIES:
                state["frequencies"] = [{"symbol": e.symbol, "count": e.count} for e in self.entries]
            if self.step >= STEP_TREE:
                state["tree"] = tree_to_dict(self.root)
                state["codes"] = dict(self.codes)
            if self.step >= STEP_ENCODED:
                state["encoded"] = self.encoded
                state["stats"] = self.stats.to_dict()
            return state
