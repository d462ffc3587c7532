"""
server.py

huffviz backend API. Holds one VisualizerSession per client view and
exposes the step-by-step Huffman pipeline as JSON, plus a stateless
/encode endpoint for one-shot compression.
"""

import logging
import threading
import uuid
from collections import OrderedDict
from datetime import datetime, timezone

from flask import Flask, jsonify, request

from .compression import HuffmanCompressor
from .config_loader import DEFAULT_CONFIG_PATH, configure_logging, load_config
from .errors import EmptyInputError, MissingCodeError, SessionStateError
from .huffman import tree_to_dict
from .session import VisualizerSession

logger = logging.getLogger(__name__)


class SessionNotFound(Exception):
    def __init__(self, session_id):
        super().__init__(f"Unknown session: {session_id}")
        self.session_id = session_id


class InvalidPayload(Exception):
    """Raised when a request body is not the JSON the endpoint expects."""


class SessionRegistry:
    # Holds at most max_sessions views. Creating one more evicts the session
    # that was least recently looked up.
    def __init__(self, uppercase=True, bits_per_symbol=8, default_text="HELLO WORLD", max_sessions=1000):
        if max_sessions < 1:
            raise ValueError(f"max_sessions must be positive, got {max_sessions}")
        self.max_sessions = max_sessions
        self.uppercase = uppercase
        self.bits_per_symbol = bits_per_symbol
        self.default_text = default_text
        self._sessions = OrderedDict()
        self._lock = threading.Lock()

    def create(self, text=None):
        session = VisualizerSession(
            text=self.default_text if text is None else text,
            uppercase=self.uppercase,
            bits_per_symbol=self.bits_per_symbol,
        )
        session_id = uuid.uuid4().hex
        evicted = []
        with self._lock:
            self._sessions[session_id] = session
            while len(self._sessions) > self.max_sessions:
                evicted.append(self._sessions.popitem(last=False)[0])
        for old_id in evicted:
            logger.info("Evicted session %s", old_id)
        logger.info("Created session %s", session_id)
        return session_id, session

    def get(self, session_id):
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None:
                self._sessions.move_to_end(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        return session

    def delete(self, session_id):
        with self._lock:
            if self._sessions.pop(session_id, None) is None:
                raise SessionNotFound(session_id)
        logger.info("Deleted session %s", session_id)

    def __len__(self):
        with self._lock:
            return len(self._sessions)


def _json_body():
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidPayload("Request body must be a JSON object")
    return data


def _text_field(data, required=True):
    text = data.get("text")
    if text is None and not required:
        return None
    if not isinstance(text, str):
        raise InvalidPayload("Field 'text' must be a string")
    return text


def create_app(config=None):
    """
    Builds the Flask app.

    Parameters:
    config (dict, optional): Output of load_config. Defaults to the bundled config.
    """
    if config is None:
        config = load_config()

    app = Flask(__name__)
    registry = SessionRegistry(
        uppercase=config["input"]["uppercase"],
        bits_per_symbol=config["metrics"]["bits_per_symbol"],
        default_text=config["input"]["default_text"],
        max_sessions=config["server"]["max_sessions"],
    )
    compressor = HuffmanCompressor(bits_per_symbol=config["metrics"]["bits_per_symbol"])
    app.config["HUFFVIZ"] = config
    app.extensions["huffviz_sessions"] = registry

    def session_payload(session_id, session):
        payload = session.snapshot()
        payload["session_id"] = session_id
        return payload

    @app.errorhandler(SessionNotFound)
    def handle_not_found(e):
        return jsonify({"error": str(e)}), 404

    @app.errorhandler(MissingCodeError)
    def handle_missing_code(e):
        return jsonify({"error": str(e), "symbol": e.symbol}), 404

    @app.errorhandler(SessionStateError)
    def handle_state(e):
        return jsonify({"error": str(e)}), 409

    @app.errorhandler(EmptyInputError)
    def handle_empty(e):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(InvalidPayload)
    def handle_bad_request(e):
        logger.warning("Bad request: %s", e)
        return jsonify({"error": str(e)}), 400

    @app.route("/health", methods=["GET"])
    def health_check():
        return jsonify({
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "sessions": len(registry),
        })

    @app.route("/sessions", methods=["POST"])
    def create_session():
        text = _text_field(_json_body(), required=False)
        session_id, session = registry.create(text)
        return jsonify(session_payload(session_id, session)), 201

    @app.route("/sessions/<session_id>", methods=["GET"])
    def get_session(session_id):
        return jsonify(session_payload(session_id, registry.get(session_id)))

    @app.route("/sessions/<session_id>", methods=["DELETE"])
    def delete_session(session_id):
        registry.delete(session_id)
        return jsonify({"status": "deleted", "session_id": session_id})

    @app.route("/sessions/<session_id>/text", methods=["POST"])
    def set_text(session_id):
        text = _text_field(_json_body())
        session = registry.get(session_id)
        with session.lock:
            session.set_text(text)
            return jsonify(session_payload(session_id, session))

    @app.route("/sessions/<session_id>/step", methods=["POST"])
    def next_step(session_id):
        session = registry.get(session_id)
        with session.lock:
            session.next_step()
            return jsonify(session_payload(session_id, session))

    @app.route("/sessions/<session_id>/reset", methods=["POST"])
    def reset_session(session_id):
        session = registry.get(session_id)
        with session.lock:
            session.reset()
            return jsonify(session_payload(session_id, session))

    @app.route("/sessions/<session_id>/codes/<symbol>", methods=["GET"])
    def symbol_code(session_id, symbol):
        session = registry.get(session_id)
        return jsonify({"symbol": symbol, "code": session.code_for(symbol)})

    @app.route("/encode", methods=["POST"])
    def encode_text():
        text = _text_field(_json_body())
        if config["input"]["uppercase"]:
            text = text.upper()
        result = compressor.compress(text)
        return jsonify({
            "text": text,
            "frequencies": [{"symbol": e.symbol, "count": e.count} for e in result.entries],
            "tree": tree_to_dict(result.root),
            "codes": result.codes,
            "encoded": result.encoded,
            "stats": result.stats.to_dict(),
        })

    @app.after_request
    def after_request(response):
        response.headers.add("Access-Control-Allow-Origin", "*")
        response.headers.add("Access-Control-Allow-Headers", "Content-Type,Authorization")
        response.headers.add("Access-Control-Allow-Methods", "GET,POST,DELETE,OPTIONS")
        return response

    return app


def main(config_path=DEFAULT_CONFIG_PATH):
    config = load_config(config_path)
    configure_logging(config["logging"]["level"])
    app = create_app(config)
    server = config["server"]
    logger.info("Starting huffviz server on %s:%d", server["host"], server["port"])
    app.run(host=server["host"], port=server["port"], debug=server["debug"])


if __name__ == "__main__":
    main()
