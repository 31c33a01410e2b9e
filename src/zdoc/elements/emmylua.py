"""EmmyLua documentation comment grammar.

Every directive is rendered on its own line, prefixed by ``---@``. Lua
language servers parse these lines to type the declaration that follows,
so the format produced here must stay exactly as written below:

    ---@class ISButton : ISPanel
    ---@field public title String
    ---@public
    ---@param x Integer
    ---@vararg Object
    ---@return void
    ---@type Boolean
    --- free documentation text

Example:
    >>> EmmyLuaParam("param1", "String").to_line()
    '---@param param1 String'
"""

from __future__ import annotations

import re
import textwrap
from dataclasses import dataclass
from typing import Optional

COMMENT_PREFIX = "---"
DIRECTIVE_PREFIX = COMMENT_PREFIX + "@"

# Placeholder used for unknown or unresolved types
ANY_TYPE = "any"

# Maximum width of reflowed documentation lines, prefix excluded
DOC_LINE_WIDTH = 100

_DIRECTIVE_PATTERN = re.compile(r"^\s*---\s*@\w+")


def type_or_any(type_name: Optional[str]) -> str:
    type_name = (type_name or "").strip()
    return type_name or ANY_TYPE


def is_directive_line(line: str) -> bool:
    """Return True if ``line`` holds an EmmyLua directive such as ``---@param``."""
    return _DIRECTIVE_PATTERN.match(line) is not None


def is_doc_comment_line(line: str) -> bool:
    """Return True for any ``---`` documentation line, directive or text."""
    return line.lstrip().startswith(COMMENT_PREFIX)


def comment_lines(text: Optional[str]) -> list[str]:
    """Reflow documentation text into ``--- `` comment lines.

    Whitespace inside a paragraph is collapsed and the paragraph wrapped;
    blank lines separating paragraphs are kept as bare ``---`` lines.

    Example:
        >>> comment_lines("Returns the player.\\n\\nNever null.")
        ['--- Returns the player.', '---', '--- Never null.']
    """
    if not text or not text.strip():
        return []

    paragraphs = re.split(r"\n\s*\n", text.strip())
    lines: list[str] = []
    for index, paragraph in enumerate(paragraphs):
        if index > 0:
            lines.append(COMMENT_PREFIX)
        collapsed = " ".join(paragraph.split())
        for wrapped in textwrap.wrap(collapsed, width=DOC_LINE_WIDTH):
            lines.append(f"{COMMENT_PREFIX} {wrapped}")
    return lines


class EmmyLuaAnnotation:
    """Base class of a single EmmyLua directive."""

    keyword: str = ""

    def body(self) -> str:
        return ""

    def to_line(self) -> str:
        body = self.body()
        line = DIRECTIVE_PREFIX + self.keyword
        return f"{line} {body}" if body else line

    def __str__(self) -> str:
        return self.to_line()


@dataclass(frozen=True)
class EmmyLuaClass(EmmyLuaAnnotation):
    """``---@class Type [: Parent]``"""

    type: str
    parent: Optional[str] = None
    keyword = "class"

    def body(self) -> str:
        if self.parent:
            return f"{self.type} : {self.parent}"
        return self.type


@dataclass(frozen=True)
class EmmyLuaAccess(EmmyLuaAnnotation):
    """``---@public``, ``---@protected`` or ``---@private``"""

    access: str = "public"

    @property
    def keyword(self) -> str:  # type: ignore[override]
        return self.access


@dataclass(frozen=True)
class EmmyLuaField(EmmyLuaAnnotation):
    """``---@field access name Type``"""

    name: str
    type: str
    access: str = "public"
    keyword = "field"

    def body(self) -> str:
        return f"{self.access} {self.name} {type_or_any(self.type)}"


@dataclass(frozen=True)
class EmmyLuaParam(EmmyLuaAnnotation):
    name: str
    type: str
    keyword = "param"

    def body(self) -> str:
        return f"{self.name} {type_or_any(self.type)}"


@dataclass(frozen=True)
class EmmyLuaVarArg(EmmyLuaAnnotation):
    type: str
    keyword = "vararg"

    def body(self) -> str:
        return type_or_any(self.type)


@dataclass(frozen=True)
class EmmyLuaReturn(EmmyLuaAnnotation):
    type: str
    keyword = "return"

    def body(self) -> str:
        return type_or_any(self.type)


@dataclass(frozen=True)
class EmmyLuaType(EmmyLuaAnnotation):
    type: str
    keyword = "type"

    def body(self) -> str:
        return type_or_any(self.type)
