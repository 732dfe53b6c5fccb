"""TypeScript backend: Library → .d.ts declarations for TypeScriptToLua.

Output layout, one declaration per line, groups separated by a blank line:

    /** @noSelfInFile **/

    declare abstract class unit extends widget { __unit: never; }

    declare function GetUnitX(whichUnit: unit): number

    declare const bj_PI: number

    declare function TriggerRegisterAnyUnitEventBJ(trig: trigger, whichEvent: playerunitevent): void

JASS types are nominal, TypeScript's are structural: the private `__name: never`
field keeps two handle types with the same parent from being interchangeable.
Nothing here validates its input. Unknown types pass through unchanged and a
degenerate argument (no name) renders as-is.
"""

from __future__ import annotations

import json

from ..model import Argument, FunctionDecl, GlobalDecl, Library, NativeDecl, TypeDecl

HEADER: str = "/** @noSelfInFile **/"

# Value and return positions. "" is a prototype with no returns clause.
TYPE_MAP: dict[str, str] = {
    "real": "number",
    "integer": "number",
    "nothing": "void",
    "code": "() => void",
    "": "void",
}

# Argument positions only: callers may omit a boolexpr, implementers must return one.
ARGUMENT_TYPE_MAP: dict[str, str] = {
    "boolexpr": "boolexpr | null",
}

# Native name -> argument index -> TypeScript type, applied instead of the maps.
NATIVE_OVERRIDES: dict[str, dict[int, str]] = {
    "Condition": {0: "() => boolean"},
    "Filter": {0: "() => boolean"},
}


class OverridesError(ValueError):
    """Malformed override table file."""

    def __init__(self, msg: str, path: str):
        self.msg: str = msg
        self.path: str = path
        super().__init__(path + ": " + msg)


def load_overrides(path: str) -> dict[str, dict[int, str]]:
    """Read a JSON override table: {"NativeName": {"0": "type", ...}, ...}.

    OSError from opening the file propagates.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except ValueError as e:
            raise OverridesError("invalid JSON: " + str(e), path) from e
    if not isinstance(data, dict):
        raise OverridesError("expected an object of native names", path)
    table: dict[str, dict[int, str]] = {}
    for name, entries in data.items():
        if not isinstance(entries, dict):
            raise OverridesError("overrides for '" + name + "' must be an object", path)
        table[name] = {}
        for key, typ in entries.items():
            try:
                index = int(key)
            except ValueError:
                raise OverridesError(
                    "argument index '" + key + "' of '" + name + "' is not an integer", path
                ) from None
            if index < 0 or not isinstance(typ, str):
                raise OverridesError(
                    "override " + name + "[" + key + "] must map a non-negative index to a string",
                    path,
                )
            table[name][index] = typ
    return table


def merge_overrides(
    base: dict[str, dict[int, str]], extra: dict[str, dict[int, str]]
) -> dict[str, dict[int, str]]:
    """Layer extra over base. Neither input is modified."""
    merged: dict[str, dict[int, str]] = {name: dict(args) for name, args in base.items()}
    for name, args in extra.items():
        merged.setdefault(name, {}).update(args)
    return merged


class TypeMapper:
    """JASS type name → TypeScript type expression."""

    def __init__(self, overrides: dict[str, dict[int, str]] | None = None) -> None:
        self.overrides: dict[str, dict[int, str]] = (
            overrides if overrides is not None else merge_overrides(NATIVE_OVERRIDES, {})
        )

    def map_type(self, typ: str) -> str:
        """Map a type in value or return position. Unknown types pass through."""
        return TYPE_MAP.get(typ, typ)

    def map_argument_type(self, typ: str) -> str:
        if typ in ARGUMENT_TYPE_MAP:
            return ARGUMENT_TYPE_MAP[typ]
        return self.map_type(typ)

    def native_argument_type(self, native: NativeDecl, index: int) -> str:
        """Override for this native's argument if one exists, else the argument mapping."""
        by_index = self.overrides.get(native.name)
        if by_index is not None and index in by_index:
            return by_index[index]
        return self.map_argument_type(native.arguments[index].type)


def _array_of(typ: str) -> str:
    if "=>" in typ or "|" in typ:
        return f"({typ})[]"
    return f"{typ}[]"


class DtsBackend:
    """Emit a .d.ts file from a Library."""

    def __init__(self, mapper: TypeMapper | None = None) -> None:
        self.mapper: TypeMapper = mapper if mapper is not None else TypeMapper()
        self.lines: list[str] = []

    def emit(self, library: Library) -> str:
        self.lines = []
        self._line(HEADER)
        self._line()
        for typ in library.types:
            self._emit_type(typ)
        self._line()
        for native in library.natives:
            self._emit_native(native)
        self._line()
        for glob in library.globals:
            self._emit_global(glob)
        self._line()
        for func in library.functions:
            self._emit_function(func)
        return "".join(line + "\n" for line in self.lines)

    def _line(self, text: str = "") -> None:
        self.lines.append(text)

    def _emit_type(self, typ: TypeDecl) -> None:
        self._line(
            f"declare abstract class {typ.name} extends {typ.parent} {{ __{typ.name}: never; }}"
        )

    def _emit_native(self, native: NativeDecl) -> None:
        params = ", ".join(
            f"{arg.name}: {self.mapper.native_argument_type(native, i)}"
            for i, arg in enumerate(native.arguments)
        )
        ret = self.mapper.map_type(native.return_type)
        self._line(f"declare function {native.name}({params}): {ret}")

    def _emit_global(self, glob: GlobalDecl) -> None:
        keyword = "const" if glob.is_constant else "var"
        typ = self.mapper.map_type(glob.type)
        if glob.is_array:
            typ = _array_of(typ)
        self._line(f"declare {keyword} {glob.name}: {typ}")

    def _emit_function(self, func: FunctionDecl) -> None:
        params = self._params(func.arguments)
        ret = self.mapper.map_type(func.return_type)
        self._line(f"declare function {func.name}({params}): {ret}")

    def _params(self, arguments: list[Argument]) -> str:
        return ", ".join(
            f"{arg.name}: {self.mapper.map_argument_type(arg.type)}" for arg in arguments
        )


def emit_typescript(library: Library, mapper: TypeMapper | None = None) -> str:
    """Render library as .d.ts text. Every line, including the last, ends in a newline."""
    return DtsBackend(mapper).emit(library)
