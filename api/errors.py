"""
api.errors - JSON error handlers for the API blueprint.
"""

import logging

from flask import jsonify

from api import api_bp
from glenair.reference import QueryFailure

logger = logging.getLogger(__name__)


@api_bp.errorhandler(QueryFailure)
def api_query_failure(exc: QueryFailure):
    logger.warning(f"Reference lookup failed: {exc} (cause: {exc.__cause__!r})")
    return jsonify({"error": str(exc), "operation": exc.operation}), 503


@api_bp.errorhandler(404)
def api_not_found(_e):
    return jsonify({"error": "not found"}), 404


@api_bp.errorhandler(400)
def api_bad_request(_e):
    return jsonify({"error": "bad request"}), 400


@api_bp.errorhandler(500)
def api_server_error(_e):
    return jsonify({"error": "internal server error"}), 500
