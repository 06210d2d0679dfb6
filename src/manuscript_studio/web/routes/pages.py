from __future__ import annotations

from flask import Blueprint, current_app, render_template, request

from manuscript_studio.editor.form import FORM_TARGETS
from manuscript_studio.preview import render_preview

pages_bp = Blueprint("pages", __name__)


@pages_bp.route("/")
def index():
    """Editor page: stylesheet text, visual form and preview frame."""
    workspace = current_app.extensions["workspace"]
    session = workspace.session if workspace.has_project else None
    return render_template(
        "editor.html",
        session=session,
        root_class=workspace.root_class,
        form_targets=FORM_TARGETS,
    )


@pages_bp.route("/preview")
def preview():
    """Live preview of the book, or of one chapter with ``?chapter=N``."""
    workspace = current_app.extensions["workspace"]
    if not workspace.has_project:
        return render_template("preview.html", preview=None)
    chapter = request.args.get("chapter", type=int)
    try:
        rendered = render_preview(workspace.session, chapter)
    except IndexError:
        return render_template("preview.html", preview=None), 404
    return render_template("preview.html", preview=rendered)
