"""Public API for the Lua annotation pipeline with lazy imports.

Submodules are only imported when one of their names is first accessed, so
``zdoc.core.rules`` can depend on the line classifier without pulling in the
whole pipeline.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

_EXPORT_MAP: dict[str, tuple[str, str]] = {
    "LineKind": ("zdoc.processors.lua_line_classifier", "LineKind"),
    "LineRecord": ("zdoc.processors.lua_line_classifier", "LineRecord"),
    "classify": ("zdoc.processors.lua_line_classifier", "classify"),
    "Matched": ("zdoc.processors.annotation_matcher", "Matched"),
    "NoMatch": ("zdoc.processors.annotation_matcher", "NoMatch"),
    "Excluded": ("zdoc.processors.annotation_matcher", "Excluded"),
    "MatchOutcome": ("zdoc.processors.annotation_matcher", "MatchOutcome"),
    "match": ("zdoc.processors.annotation_matcher", "match"),
    "render": ("zdoc.processors.annotation_renderer", "render"),
    "AnnotateResult": ("zdoc.processors.lua_annotator", "AnnotateResult"),
    "AnnotateReport": ("zdoc.processors.lua_annotator", "AnnotateReport"),
    "annotate": ("zdoc.processors.lua_annotator", "annotate"),
    "annotate_file": ("zdoc.processors.lua_annotator", "annotate_file"),
}

__all__ = list(_EXPORT_MAP.keys())


def __getattr__(name: str) -> Any:
    """Resolve package exports lazily."""
    target = _EXPORT_MAP.get(name)
    if target is None:
        raise AttributeError(f"module 'zdoc.processors' has no attribute {name!r}")

    module_name, attr_name = target
    module = import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value
