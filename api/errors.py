"""
api.errors - Every API failure comes back as {"error": ...} JSON.

File-level load problems (empty file, missing mandatory column, strict
mode rejections) map to 400 with the exception class name in "kind".
"""

from flask import jsonify

from api import api_bp
from loader.errors import LoadError


def _error(message: str, status: int, **extra):
    return jsonify({"error": message, **extra}), status


@api_bp.errorhandler(LoadError)
def api_load_error(e: LoadError):
    return _error(str(e), 400, kind=type(e).__name__)


@api_bp.errorhandler(400)
def api_bad_request(_e):
    return _error("bad request", 400)


@api_bp.errorhandler(404)
def api_not_found(_e):
    return _error("not found", 404)


@api_bp.errorhandler(500)
def api_server_error(_e):
    return _error("internal server error", 500)
