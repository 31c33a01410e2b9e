"""Rendering of catalog entries as EmmyLua annotation blocks.

Example:
    >>> entry = method_entry("TestClass", "test", ["String", "Integer"], "Object")
    >>> render(entry, ["param1", "param2"])
    ['---@public', '---@param param1 String', '---@param param2 Integer', '---@return Object']
"""

from __future__ import annotations

from typing import Optional, Sequence, Union

from zdoc.core.catalog import CatalogEntry, EntryKind
from zdoc.elements.lua import LuaClass, LuaField, LuaMethod, documentation_lines
from zdoc.processors.annotation_matcher import Matched


def render(
    target: Union[CatalogEntry, Matched],
    param_names: Optional[Sequence[str]] = None,
) -> list[str]:
    """Render the annotation block documenting a catalog entry.

    Args:
        target: Catalog entry, or the ``Matched`` outcome carrying it.
        param_names: Parameter names used by the annotated source, in
            order. Positions without a name use the catalog name.

    Returns:
        Comment lines in the order they must precede the declaration; never
        empty.

    Raises:
        TypeError: If ``target`` is neither an entry nor a ``Matched``
            outcome, for example a ``NoMatch``.
    """
    if isinstance(target, Matched):
        entry = target.entry
    elif isinstance(target, CatalogEntry):
        entry = target
    else:
        raise TypeError(f"Cannot render annotations for {target!r}")

    if entry.kind is EntryKind.CLASS:
        element = LuaClass.from_entry(entry)
    elif entry.kind is EntryKind.FIELD:
        element = LuaField.from_entry(entry)
    else:
        element = LuaMethod.from_entry(entry, param_names)

    return documentation_lines(element)
