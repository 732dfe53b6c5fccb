"""jassdts - JASS declarations to TypeScript declaration files."""

from .backend.typescript import TypeMapper, emit_typescript
from .frontend.recognize import recognize
from .model import Argument, FunctionDecl, GlobalDecl, Library, NativeDecl, TypeDecl


def transpile(source: str, mapper: TypeMapper | None = None) -> str:
    """Single-source pipeline: JASS text → .d.ts text. Diagnostics are dropped."""
    result = recognize(source)
    return emit_typescript(result.library, mapper)


__all__ = [
    "Argument",
    "FunctionDecl",
    "GlobalDecl",
    "Library",
    "NativeDecl",
    "TypeDecl",
    "TypeMapper",
    "emit_typescript",
    "recognize",
    "transpile",
]
