from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from manuscript_studio.web.routes.errors import json_body, register_error_handlers

build_bp = Blueprint("build", __name__)
register_error_handlers(build_bp)


@build_bp.route("/compile", methods=["POST"])
def compile_book():
    """Compile the open project to EPUB.

    A missing Pandoc answers 404 with type ``PANDOC_NOT_FOUND`` so the page
    can ask for its location and retry.
    """
    workspace = current_app.extensions["workspace"]
    result = workspace.compile()
    return jsonify({"message": result.message, "output_path": result.output_path})


@build_bp.route("/compiler")
def check_compiler():
    """Report which Pandoc will be used and whether it is installed."""
    workspace = current_app.extensions["workspace"]
    return jsonify(workspace.compiler.check())


@build_bp.route("/compiler", methods=["POST"])
def save_compiler_path():
    """Save a manual Pandoc location to the config file."""
    data = json_body()
    if not data.get("path"):
        return jsonify({"error": "No path provided", "type": "INVALID"}), 400
    workspace = current_app.extensions["workspace"]
    try:
        saved = workspace.compiler.save_path(str(data["path"]))
    except OSError:
        return jsonify({"error": "Failed to write config file", "type": "PERSISTENCE_FAILURE"}), 500
    return jsonify({"status": "Path saved!", "path": saved})
