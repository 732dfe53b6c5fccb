"""Serialization of the declaration model to JSON-compatible dicts."""

from __future__ import annotations

from .model import Argument, FunctionDecl, GlobalDecl, Library, NativeDecl, TypeDecl


def _argument_to_dict(arg: Argument) -> dict[str, object]:
    return {"type": arg.type, "name": arg.name}


def _type_to_dict(decl: TypeDecl) -> dict[str, object]:
    return {"name": decl.name, "parent": decl.parent}


def _callable_to_dict(decl: NativeDecl | FunctionDecl) -> dict[str, object]:
    return {
        "name": decl.name,
        "arguments": [_argument_to_dict(a) for a in decl.arguments],
        "return_type": decl.return_type,
    }


def _global_to_dict(decl: GlobalDecl) -> dict[str, object]:
    return {
        "constant": decl.is_constant,
        "type": decl.type,
        "array": decl.is_array,
        "name": decl.name,
        "value": decl.value,
    }


def library_to_dict(library: Library) -> dict[str, object]:
    """Convert a Library to nested dicts and lists, keeping every list's order."""
    return {
        "types": [_type_to_dict(t) for t in library.types],
        "natives": [_callable_to_dict(n) for n in library.natives],
        "globals": [_global_to_dict(g) for g in library.globals],
        "functions": [_callable_to_dict(f) for f in library.functions],
    }
