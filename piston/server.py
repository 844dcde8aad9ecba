"""
server.py

HTTP binding for the Piston codec. Exposes compress and decompress as JSON
endpoints, with byte strings carried as base64.
"""

import base64
import binascii
import sys
from datetime import datetime, timezone

from flask import Flask, request, jsonify
from loguru import logger
from werkzeug.exceptions import RequestEntityTooLarge

from .compression import Compressor
from .config import load_config
from .errors import DataCorruptionError, InternalConsistencyError, InvalidArgumentError
from .wire import table_from_json, table_to_json

ENDPOINTS = ["/compress", "/decompress", "/health", "/debug_routes"]

config = load_config()

logger.remove()
logger.add(sys.stderr, level=config["logging"]["level"])

app = Flask(__name__)
app.config["MAX_CONTENT_LENGTH"] = config["server"]["max_request_bytes"]

compressor = Compressor()


def _json_body():
    if not request.is_json:
        raise InvalidArgumentError("Content-Type must be application/json")
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidArgumentError("No JSON data provided")
    return data


def _b64decode(value, field):
    if not isinstance(value, str):
        raise InvalidArgumentError(f"{field} must be a base64 string")
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        raise InvalidArgumentError(f"{field} is not valid base64") from None


def _b64encode(data):
    return base64.b64encode(data).decode("ascii")


def _error_response(error, status):
    return jsonify({"error": str(error), "kind": error.kind}), status


@app.errorhandler(InvalidArgumentError)
def handle_invalid_argument(error):
    logger.warning(f"[Server] Rejected request: {error}")
    return _error_response(error, 400)


@app.errorhandler(DataCorruptionError)
def handle_data_corruption(error):
    logger.warning(f"[Server] Corrupted payload: {error}")
    return _error_response(error, 422)


@app.errorhandler(InternalConsistencyError)
def handle_internal_consistency(error):
    logger.error(f"[Server] Codec fault: {error}")
    return _error_response(error, 500)


@app.errorhandler(RequestEntityTooLarge)
def handle_too_large(error):
    return jsonify({"error": "Request body too large", "kind": "too_large"}), 413


@app.route("/compress", methods=["POST"])
def compress():
    body = _json_body()
    data = _b64decode(body.get("data"), "data")

    payload = compressor.compress(data)
    logger.info(f"[Server] compress: {len(data)} bytes -> {len(payload.data)} bytes")
    return jsonify({
        "data": _b64encode(payload.data),
        "count": payload.count,
        "table": table_to_json(payload.table),
    })


@app.route("/decompress", methods=["POST"])
def decompress():
    body = _json_body()
    data = _b64decode(body.get("data"), "data")
    count = body.get("count")
    if isinstance(count, bool) or not isinstance(count, int):
        raise InvalidArgumentError("count must be an integer")
    table = table_from_json(body.get("table", []))

    decoded = compressor.decompress(data, count, table)
    logger.info(f"[Server] decompress: {len(data)} bytes -> {len(decoded)} bytes")
    return jsonify({"data": _b64encode(decoded)})


@app.route("/health", methods=["GET"])
def health_check():
    """Health check endpoint"""
    return jsonify({
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "endpoints": ENDPOINTS,
    })


@app.route("/debug_routes", methods=["GET"])
def debug_routes():
    """Lists all registered routes"""
    routes = []
    for rule in app.url_map.iter_rules():
        routes.append({
            "endpoint": rule.endpoint,
            "methods": sorted(rule.methods),
            "rule": str(rule),
        })
    return jsonify({"routes": routes})


def main():
    server = config["server"]
    logger.info(f"[Server] Piston server listening on {server['host']}:{server['port']}")
    app.run(host=server["host"], port=server["port"], debug=server["debug"])


if __name__ == "__main__":
    main()
