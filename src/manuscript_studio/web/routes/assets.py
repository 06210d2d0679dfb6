from __future__ import annotations

from flask import Blueprint, abort, current_app, send_file

assets_bp = Blueprint("assets", __name__)


@assets_bp.route("/<path:asset>")
def project_asset(asset: str):
    """Serve an image or other file from the open project."""
    workspace = current_app.extensions["workspace"]
    if not workspace.has_project or workspace.session.project is None:
        abort(400, description="No project selected")

    resolved = workspace.session.project.resolve_asset(asset)
    if resolved is None:
        abort(404, description="Asset not found")
    return send_file(resolved)
