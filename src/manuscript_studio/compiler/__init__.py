from manuscript_studio.compiler.pandoc import (
    CompileResult,
    PandocCompiler,
    is_not_found,
    locate_pandoc,
)

__all__ = ["CompileResult", "PandocCompiler", "is_not_found", "locate_pandoc"]
