"""Lua stub documents.

A :class:`LuaDocument` holds one compiled class with its fields and
methods and turns it into a Lua stub file. Stubs contain no behavior,
only declarations for Lua language servers::

    ---@class IsoPlayer : IsoLivingEntity
    ---@field public MAX Integer
    IsoPlayer = {}

    ---@public
    ---@param username String
    ---@return void
    function IsoPlayer:setUsername(username) end

Generated code is checked with luaparser before it is handed out.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable

import luaparser.ast

from zdoc.core.exceptions import CompilerError
from zdoc.elements.emmylua import ANY_TYPE, EmmyLuaClass, comment_lines
from zdoc.elements.lua import LuaClass, LuaField, LuaMethod, documentation_lines
from zdoc.utils.logger import get_logger

logger = get_logger("zdoc.compile.lua_doc")

GLOBAL_TYPES_FILE_NAME = "Types.lua"

# Types Lua language servers know without a declaration
LUA_BUILTIN_TYPES = frozenset({
    ANY_TYPE, "void", "nil", "boolean", "number", "integer", "string",
    "table", "function", "userdata", "thread", "self",
})


def validate_syntax(code: str) -> tuple[bool, str]:
    """Check that ``code`` parses as Lua.

    Returns:
        Tuple of (is_valid, error_message). The message is empty when valid.
    """
    try:
        luaparser.ast.parse(code)
        return (True, "")
    except SyntaxError as e:
        if hasattr(e, "lineno") and hasattr(e, "offset"):
            return (False, f"Line {e.lineno}, column {e.offset}: {e.msg}")
        return (False, f"Syntax error: {e}")
    except Exception as e:
        # luaparser reports syntax errors with its own exception types
        return (False, f"Syntax error: {e}")


def element_type(type_name: str) -> str:
    """Strip array dimensions: ``InventoryItem[][]`` -> ``InventoryItem``."""
    while type_name.endswith("[]"):
        type_name = type_name[:-2]
    return type_name


@dataclass(frozen=True)
class LuaDocument:
    """Compiled Lua stub of a single class.

    Attributes:
        clazz: Documented class
        fields: Class fields in declaration order
        methods: Class methods in declaration order
    """

    clazz: LuaClass
    fields: tuple[LuaField, ...] = field(default_factory=tuple)
    methods: tuple[LuaMethod, ...] = field(default_factory=tuple)

    @property
    def name(self) -> str:
        return self.clazz.name

    @property
    def file_name(self) -> str:
        return f"{self.name}.lua"

    def renamed(self, name: str) -> "LuaDocument":
        """Copy of this document declaring the class under another name."""
        return replace(self, clazz=replace(self.clazz, name=name))

    def referenced_types(self) -> set[str]:
        types = set()
        if self.clazz.parent:
            types.add(self.clazz.parent)
        types.update(f.type.name for f in self.fields)
        for method in self.methods:
            types.add(method.return_type.name)
            types.update(param.type.name for param in method.params)
        return {element_type(t) for t in types}

    def method_stub(self, method: LuaMethod) -> str:
        separator = "." if method.modifier.static else ":"
        return f"function {self.name}{separator}{method.signature()} end"

    def to_lines(self) -> list[str]:
        lines = [a.to_line() for a in self.clazz.annotations]
        lines.extend(f.header_annotation().to_line() for f in self.fields)
        lines.extend(comment_lines(self.clazz.comment))
        lines.append(f"{self.name} = {{}}")

        for method in self.methods:
            lines.append("")
            lines.extend(documentation_lines(method))
            lines.append(self.method_stub(method))
        return lines

    def to_lua(self) -> str:
        """Render the stub and verify it parses.

        Raises:
            CompilerError: If the generated code is not valid Lua.
        """
        code = "\n".join(self.to_lines()) + "\n"
        valid, error = validate_syntax(code)
        if not valid:
            raise CompilerError(f"Generated invalid Lua for class '{self.name}': {error}")
        return code


def global_type_lines(documents: Iterable[LuaDocument]) -> list[str]:
    """Declare every referenced type that has no document of its own.

    The result is the content of ``Types.lua``, one ``---@class`` line per
    type in alphabetical order.
    """
    documents = list(documents)
    defined = {doc.name for doc in documents}
    referenced: set[str] = set()
    for doc in documents:
        referenced.update(doc.referenced_types())

    missing = sorted(t for t in referenced - defined if t and t not in LUA_BUILTIN_TYPES)
    logger.debug(f"Declaring {len(missing)} global types")
    return [EmmyLuaClass(type_name).to_line() for type_name in missing]
