from __future__ import annotations

import logging
from typing import Any

from flask import Blueprint, jsonify, request

from manuscript_studio.errors import StudioError

logger = logging.getLogger(__name__)


def json_body() -> dict[str, Any]:
    """The request's JSON object, or {} when the body is absent or not JSON.

    Raises ValueError (answered as 400) for JSON that is not an object.
    """
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Request body must be a JSON object")
    return data


def register_error_handlers(bp: Blueprint) -> None:
    """Render Studio errors raised inside *bp* as JSON."""

    @bp.errorhandler(StudioError)
    def handle_studio_error(exc: StudioError):
        if exc.status_code >= 500:
            logger.error("%s: %s", exc.error_type, exc.message)
        return jsonify(exc.to_dict()), exc.status_code

    @bp.errorhandler(IndexError)
    def handle_missing_chapter(exc: IndexError):
        return jsonify({"error": str(exc), "type": "NOT_FOUND"}), 404

    @bp.errorhandler(ValueError)
    def handle_bad_value(exc: ValueError):
        return jsonify({"error": str(exc), "type": "INVALID"}), 400
