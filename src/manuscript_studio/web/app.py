from __future__ import annotations

from flask import Flask

from manuscript_studio.editor.workspace import Workspace


def create_app(
    workspace: Workspace | None = None,
    config: dict | None = None,
) -> Flask:
    """Create and configure the Flask app."""
    app = Flask(__name__)
    app.config.update(config or {})

    # One workspace per process; routes reach the open session through it
    if workspace is None:
        workspace = Workspace()
    app.extensions["workspace"] = workspace

    # Register blueprints
    from manuscript_studio.web.routes.api import api_bp
    from manuscript_studio.web.routes.assets import assets_bp
    from manuscript_studio.web.routes.build import build_bp
    from manuscript_studio.web.routes.pages import pages_bp

    app.register_blueprint(pages_bp)
    app.register_blueprint(api_bp, url_prefix="/api")
    app.register_blueprint(build_bp, url_prefix="/api")
    app.register_blueprint(assets_bp, url_prefix="/project-assets")

    return app
