"""Lua representation of reflected Java API elements.

These classes describe what a Lua stub or annotation block says about a
class, field or method: Lua-safe names, Lua-facing signatures and the
EmmyLua annotations documenting them.

Example:
    >>> method = LuaMethod(
    ...     "test", LuaType("Object"),
    ...     params=(LuaParameter(LuaType("String"), "param1"),
    ...             LuaParameter(LuaType("Integer"), "param2")),
    ...     owner=LuaClass("TestClass"), var_arg=True,
    ... )
    >>> str(method)
    'TestClass:test(param1, ...)'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Sequence

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
)
from zdoc.elements.modifier import UNDECLARED, MemberModifier

if TYPE_CHECKING:
    from zdoc.core.catalog import CatalogEntry

LUA_RESERVED_WORDS = frozenset({
    "and", "break", "do", "else", "elseif", "end", "false", "for",
    "function", "goto", "if", "in", "local", "nil", "not", "or",
    "repeat", "return", "then", "true", "until", "while",
})


def safe_lua_name(name: str) -> str:
    """Prefix names colliding with Lua reserved words with an underscore.

    Example:
        >>> safe_lua_name("break")
        '_break'
        >>> safe_lua_name("test")
        'test'
    """
    return "_" + name if name in LUA_RESERVED_WORDS else name


@dataclass(frozen=True)
class LuaType:
    name: str = ANY_TYPE

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", (self.name or "").strip() or ANY_TYPE)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class LuaParameter:
    type: LuaType
    name: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", safe_lua_name(self.name))

    def annotation(self) -> EmmyLuaParam:
        return EmmyLuaParam(self.name, self.type.name)


@dataclass(frozen=True)
class LuaClass:
    """Lua class optionally deriving from a parent class."""

    name: str
    parent: Optional[str] = None
    comment: str = ""

    @property
    def annotations(self) -> tuple[EmmyLuaAnnotation, ...]:
        return (EmmyLuaClass(self.name, self.parent),)

    @classmethod
    def from_entry(cls, entry: "CatalogEntry") -> "LuaClass":
        return cls(entry.name, entry.parent, entry.comment)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class LuaField:
    """Field of a Lua class.

    The class header of a stub lists fields as ``---@field`` lines while an
    assignment in an annotated source file gets an access line and a
    ``---@type`` line.
    """

    type: LuaType
    name: str
    modifier: MemberModifier = UNDECLARED
    owner: Optional[LuaClass] = None
    comment: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", safe_lua_name(self.name))

    @property
    def annotations(self) -> tuple[EmmyLuaAnnotation, ...]:
        return (EmmyLuaAccess(self.modifier.access.lua_access), EmmyLuaType(self.type.name))

    def header_annotation(self) -> EmmyLuaField:
        return EmmyLuaField(self.name, self.type.name, self.modifier.access.lua_access)

    @classmethod
    def from_entry(cls, entry: "CatalogEntry") -> "LuaField":
        owner = LuaClass(entry.owner) if entry.owner else None
        return cls(LuaType(entry.type), entry.name, entry.modifier, owner, entry.comment)


@dataclass(frozen=True)
class LuaMethod:
    """Lua method or global function.

    Attributes:
        name: Lua-safe method name
        return_type: Declared return type, ``void`` for none
        params: Immutable parameter tuple in declaration order
        owner: Class the method belongs to, None for global functions
        modifier: Java modifier of the reflected method
        var_arg: True when the last parameter takes a variable number of
            arguments; always False for an empty parameter list
        comment: Documentation text
    """

    name: str
    return_type: LuaType
    params: Sequence[LuaParameter] = field(default_factory=tuple)
    owner: Optional[LuaClass] = None
    modifier: MemberModifier = UNDECLARED
    var_arg: bool = False
    comment: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", safe_lua_name(self.name))
        object.__setattr__(self, "params", tuple(self.params))
        if not self.params:
            object.__setattr__(self, "var_arg", False)

    @property
    def fixed_params(self) -> tuple[LuaParameter, ...]:
        return self.params[:-1] if self.var_arg else self.params

    @property
    def annotations(self) -> tuple[EmmyLuaAnnotation, ...]:
        annotations: list[EmmyLuaAnnotation] = [EmmyLuaAccess(self.modifier.access.lua_access)]
        annotations.extend(param.annotation() for param in self.fixed_params)
        if self.var_arg:
            annotations.append(EmmyLuaVarArg(self.params[-1].type.name))
        annotations.append(EmmyLuaReturn(self.return_type.name))
        return tuple(annotations)

    def signature(self) -> str:
        names = [param.name for param in self.fixed_params]
        if self.var_arg:
            names.append("...")
        return f"{self.name}({', '.join(names)})"

    @classmethod
    def from_entry(
        cls,
        entry: "CatalogEntry",
        param_names: Optional[Sequence[str]] = None,
    ) -> "LuaMethod":
        """Build a method from a catalog entry.

        ``param_names`` overrides parameter names position by position, so
        annotations name parameters the way the annotated source does.
        Missing names fall back to the catalog, then to ``arg<N>``.
        """
        names = list(param_names or ())
        params = []
        for index, type_name in enumerate(entry.param_types):
            if index < len(names) and names[index]:
                name = names[index]
            elif index < len(entry.param_names) and entry.param_names[index]:
                name = entry.param_names[index]
            else:
                name = f"arg{index}"
            params.append(LuaParameter(LuaType(type_name), name))

        owner = LuaClass(entry.owner) if entry.owner else None
        return cls(
            entry.name,
            LuaType(entry.type),
            params,
            owner=owner,
            modifier=entry.modifier,
            var_arg=entry.var_arg,
            comment=entry.comment,
        )

    def __str__(self) -> str:
        if self.owner is None:
            return self.signature()
        separator = "." if self.modifier.static else ":"
        return f"{self.owner.name}{separator}{self.signature()}"


def documentation_lines(element) -> list[str]:
    """Annotation lines followed by the reflowed documentation text."""
    lines = [annotation.to_line() for annotation in element.annotations]
    lines.extend(comment_lines(element.comment))
    return lines
