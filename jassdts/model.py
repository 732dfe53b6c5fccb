"""Declaration model - the records recognized from JASS source.

Architecture:
    Source -> Frontend (normalize, tokenize, recognize) -> [Library] -> Backend -> .d.ts

The frontend builds one Library per source and merges them. The backend reads
the merged Library and never mutates it.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class TypeDecl:
    """`type NAME extends PARENT`."""

    name: str
    parent: str


@dataclass
class Argument:
    """One positional parameter of a native or function.

    Invariants:
    - type and name are non-empty for well-formed input
    - name is "" when the parameter piece had no interior space
    """

    type: str
    name: str


@dataclass
class NativeDecl:
    """`native NAME takes ... returns ...` - implemented by the host runtime."""

    name: str
    arguments: list[Argument] = field(default_factory=list)
    return_type: str = ""


@dataclass
class FunctionDecl:
    """`function NAME takes ... returns ...` - defined in script."""

    name: str
    arguments: list[Argument] = field(default_factory=list)
    return_type: str = ""


@dataclass
class GlobalDecl:
    """A declaration inside a globals block.

    value holds the raw initializer text, or None. It is never parsed.
    """

    is_constant: bool
    type: str
    is_array: bool
    name: str
    value: str | None = None


@dataclass
class Library:
    """All declarations recognized from one or more sources.

    Invariants:
    - each list is in source-encounter order
    - merged libraries keep input order: all of `self`, then all of `other`
    """

    types: list[TypeDecl] = field(default_factory=list)
    natives: list[NativeDecl] = field(default_factory=list)
    globals: list[GlobalDecl] = field(default_factory=list)
    functions: list[FunctionDecl] = field(default_factory=list)

    def merge(self, other: Library) -> Library:
        """Append every record of other after our own. Returns self."""
        self.types.extend(other.types)
        self.natives.extend(other.natives)
        self.globals.extend(other.globals)
        self.functions.extend(other.functions)
        return self

    def is_empty(self) -> bool:
        return (
            len(self.types) == 0
            and len(self.natives) == 0
            and len(self.globals) == 0
            and len(self.functions) == 0
        )
