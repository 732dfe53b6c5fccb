"""Backend package - renders a Library as target-language declarations."""

from .typescript import (
    NATIVE_OVERRIDES,
    DtsBackend,
    OverridesError,
    TypeMapper,
    emit_typescript,
    load_overrides,
    merge_overrides,
)

__all__ = [
    "NATIVE_OVERRIDES",
    "DtsBackend",
    "OverridesError",
    "TypeMapper",
    "emit_typescript",
    "load_overrides",
    "merge_overrides",
]
