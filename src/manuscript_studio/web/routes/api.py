from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from manuscript_studio.editor.form import FORM_TARGETS, FormFields
from manuscript_studio.editor.session import EditorSession
from manuscript_studio.errors import UserCancelled
from manuscript_studio.preview import render_preview
from manuscript_studio.stylesheet.model import Scope
from manuscript_studio.stylesheet.overlay import CenteringFlags
from manuscript_studio.web.routes.errors import json_body, register_error_handlers

api_bp = Blueprint("api", __name__)
register_error_handlers(api_bp)


def _workspace():
    return current_app.extensions["workspace"]


def _session() -> EditorSession:
    return _workspace().session


def _history_state(session: EditorSession) -> dict:
    return {
        "css": session.text,
        "can_undo": session.history.can_undo,
        "can_redo": session.history.can_redo,
    }


def _project_summary(session: EditorSession) -> dict:
    return {
        "project_name": session.project.name if session.project else "",
        "root_class": session.root_class,
        "chapters": [{"index": c.index, "name": c.name} for c in session.chapters],
        "form_targets": list(FORM_TARGETS),
        **_history_state(session),
    }


def _scope_args(source: dict) -> tuple[Scope, int | None]:
    scope = Scope(source.get("scope") or Scope.GLOBAL)
    chapter = source.get("chapter")
    if scope == Scope.CHAPTER:
        if chapter in (None, ""):
            raise ValueError("chapter is required for chapter scope")
        try:
            return scope, int(chapter)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid chapter index: {chapter!r}") from None
    return scope, None


# --- project ------------------------------------------------------------------


@api_bp.route("/project/pick", methods=["POST"])
def pick_project():
    """Show the native folder picker and open the chosen project."""
    try:
        session = _workspace().pick()
    except UserCancelled as exc:
        return jsonify({"cancelled": True, "message": exc.message})
    return jsonify(_project_summary(session))


@api_bp.route("/project/open", methods=["POST"])
def open_project():
    """Open a project folder given its path."""
    data = json_body()
    path = data.get("path")
    if not isinstance(path, str) or not path.strip():
        return jsonify({"error": "path required", "type": "INVALID"}), 400
    session = _workspace().open(path.strip())
    return jsonify(_project_summary(session))


@api_bp.route("/project")
def project():
    """Return the open project's chapters, root class and stylesheet."""
    return jsonify(_project_summary(_session()))


@api_bp.route("/root-class", methods=["PUT"])
def set_root_class():
    data = json_body()
    _workspace().set_root_class(str(data.get("root_class", "")))
    return jsonify({"root_class": _workspace().root_class})


# --- stylesheet text ----------------------------------------------------------


@api_bp.route("/css")
def get_css():
    return jsonify(_history_state(_session()))


@api_bp.route("/css", methods=["PUT"])
def put_css():
    """Replace the stylesheet text.

    ``typing: true`` marks keystroke input, recorded in history only after
    the debounce window.
    """
    data = json_body()
    if not isinstance(data.get("css"), str):
        return jsonify({"error": "css required", "type": "INVALID"}), 400
    session = _session()
    if data.get("typing"):
        session.type_text(data["css"])
    else:
        session.commit_text(data["css"])
    return jsonify(_history_state(session))


@api_bp.route("/undo", methods=["POST"])
def undo():
    session = _session()
    changed = session.undo()
    return jsonify({"changed": changed, **_history_state(session)})


@api_bp.route("/redo", methods=["POST"])
def redo():
    session = _session()
    changed = session.redo()
    return jsonify({"changed": changed, **_history_state(session)})


# --- visual form --------------------------------------------------------------


@api_bp.route("/form")
def load_form():
    """Read the form fields for ``target`` in the requested scope."""
    target = request.args.get("target", "body")
    scope, chapter = _scope_args(request.args)
    state = _session().load_fields(target, scope, chapter)
    return jsonify(state.to_dict())


@api_bp.route("/form", methods=["POST"])
def apply_form():
    """Write the form fields for ``target`` back into the stylesheet."""
    data = json_body()
    target = str(data.get("target") or "body")
    scope, chapter = _scope_args(data)
    fields = data.get("fields")
    if fields is not None and not isinstance(fields, dict):
        raise ValueError("fields must be a JSON object")
    session = _session()
    selector = session.apply_fields(
        target, FormFields.from_dict(fields), scope, chapter
    )
    state = session.load_fields(target, scope, chapter)
    return jsonify({"selector": selector, "form": state.to_dict(), **_history_state(session)})


# --- centering ----------------------------------------------------------------


@api_bp.route("/chapters/<int:index>/centering")
def get_centering(index: int):
    return jsonify(_session().centering_for(index).to_dict())


@api_bp.route("/chapters/<int:index>/centering", methods=["PUT"])
def put_centering(index: int):
    """Set chapter-local centering; affects the preview only."""
    flags = CenteringFlags.from_dict(json_body())
    session = _session()
    session.set_centering(index, flags)
    return jsonify(session.centering_for(index).to_dict())


@api_bp.route("/center", methods=["POST"])
def quick_center():
    """Append book-wide centering rules to the stylesheet."""
    flags = CenteringFlags.from_dict(json_body())
    session = _session()
    appended = session.quick_center(flags)
    return jsonify({"appended": appended, **_history_state(session)})


# --- preview ------------------------------------------------------------------


@api_bp.route("/preview")
def preview():
    chapter = request.args.get("chapter", type=int)
    return jsonify(render_preview(_session(), chapter).to_dict())
