"""Compilation of the declaration catalog into Lua stub files."""

from zdoc.compile.lua_compiler import CompileResult, LuaCompiler, apply_overrides
from zdoc.compile.lua_doc import (
    GLOBAL_TYPES_FILE_NAME,
    LuaDocument,
    global_type_lines,
    validate_syntax,
)

__all__ = [
    "CompileResult",
    "LuaCompiler",
    "apply_overrides",
    "GLOBAL_TYPES_FILE_NAME",
    "LuaDocument",
    "global_type_lines",
    "validate_syntax",
]
