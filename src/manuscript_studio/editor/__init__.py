from manuscript_studio.editor.form import FormFields, FormState
from manuscript_studio.editor.history import HistoryStack
from manuscript_studio.editor.session import EditorSession
from manuscript_studio.editor.workspace import Workspace

__all__ = ["EditorSession", "FormFields", "FormState", "HistoryStack", "Workspace"]
