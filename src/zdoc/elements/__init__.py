"""Lua element model and the EmmyLua annotation grammar.

Classes:
    MemberModifier: Java access level and modifiers
    LuaType, LuaParameter, LuaClass, LuaField, LuaMethod: Lua-facing elements
    EmmyLuaAnnotation and subclasses: single ``---@`` directives
"""

from zdoc.elements.emmylua import (
    ANY_TYPE,
    EmmyLuaAccess,
    EmmyLuaAnnotation,
    EmmyLuaClass,
    EmmyLuaField,
    EmmyLuaParam,
    EmmyLuaReturn,
    EmmyLuaType,
    EmmyLuaVarArg,
    comment_lines,
    is_directive_line,
)
from zdoc.elements.lua import (
    LUA_RESERVED_WORDS,
    LuaClass,
    LuaField,
    LuaMethod,
    LuaParameter,
    LuaType,
    documentation_lines,
    safe_lua_name,
)
from zdoc.elements.modifier import UNDECLARED, AccessModifier, MemberModifier

__all__ = [
    "ANY_TYPE",
    "EmmyLuaAccess",
    "EmmyLuaAnnotation",
    "EmmyLuaClass",
    "EmmyLuaField",
    "EmmyLuaParam",
    "EmmyLuaReturn",
    "EmmyLuaType",
    "EmmyLuaVarArg",
    "comment_lines",
    "is_directive_line",
    "LUA_RESERVED_WORDS",
    "LuaClass",
    "LuaField",
    "LuaMethod",
    "LuaParameter",
    "LuaType",
    "documentation_lines",
    "safe_lua_name",
    "UNDECLARED",
    "AccessModifier",
    "MemberModifier",
]
