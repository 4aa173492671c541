"""Render errors raised while serving the token API as JSON.

Every payload carries the error's `error` kind and a human readable `message`,
plus any diagnostic values the error provides, for example::

    {
        "error": "InsufficientAllowance",
        "message": "Insufficient allowance. Current: 5, required: 10",
        "observed": "5",
        "required": "10"
    }

"""
import structlog
from flask import Blueprint, jsonify
from werkzeug.exceptions import BadRequest

from token_service.exceptions import TokenServiceError

log = structlog.get_logger(__name__)

errors_blueprint = Blueprint("errors_view", __name__)


@errors_blueprint.app_errorhandler(TokenServiceError)
def handle_token_service_error(error: TokenServiceError):
    log.warning("Request failed", error=type(error).__name__, reason=str(error))
    payload = {"error": type(error).__name__, "message": str(error), **error.details()}
    return jsonify(payload), error.http_status


@errors_blueprint.app_errorhandler(BadRequest)
def handle_bad_request(error: BadRequest):
    return jsonify({"error": "BadRequest", "message": error.description}), error.code
