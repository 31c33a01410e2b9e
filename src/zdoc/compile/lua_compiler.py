"""Compilation of the declaration catalog into Lua stub documents.

Example:
    >>> result = LuaCompiler(catalog, exclude={"IsoZombie"}).compile()
    >>> [doc.name for doc in result.documents]
    ['IsoPlayer']
    >>> result.unused_exclusions
    set()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping

from zdoc.core.catalog import DeclarationCatalog
from zdoc.compile.lua_doc import LuaDocument
from zdoc.elements.lua import LuaClass, LuaField, LuaMethod
from zdoc.utils.logger import get_logger

logger = get_logger("zdoc.compile.lua_compiler")


@dataclass
class CompileResult:
    """Documents produced by a compilation.

    Attributes:
        documents: One document per compiled class, in catalog order
        unused_exclusions: Excluded names that matched no catalog class
    """

    documents: list[LuaDocument] = field(default_factory=list)
    unused_exclusions: set[str] = field(default_factory=set)


class LuaCompiler:
    """Turns catalog classes into :class:`LuaDocument` stubs."""

    def __init__(self, catalog: DeclarationCatalog, exclude: Iterable[str] = ()) -> None:
        self.catalog = catalog
        self.exclude = frozenset(exclude)

    def compile_class(self, name: str) -> LuaDocument:
        entry = self.catalog.get_class(name)
        if entry is None:
            raise KeyError(name)

        clazz = LuaClass.from_entry(entry)
        fields = tuple(LuaField.from_entry(e) for e in self.catalog.fields_of(name))
        methods = tuple(LuaMethod.from_entry(e) for e in self.catalog.methods_of(name))
        return LuaDocument(clazz, fields, methods)

    def compile(self) -> CompileResult:
        result = CompileResult()
        used = set()
        for entry in self.catalog.classes():
            if entry.name in self.exclude:
                logger.debug(f"Excluding class {entry.name} from compilation")
                used.add(entry.name)
                continue
            result.documents.append(self.compile_class(entry.name))

        result.unused_exclusions = set(self.exclude - used)
        logger.debug(f"Compiled {len(result.documents)} lua documents")
        return result


def apply_overrides(
    documents: Iterable[LuaDocument],
    overrides: Mapping[str, str],
) -> list[LuaDocument]:
    """Apply document name overrides from the property store.

    A document named by an override key is renamed to the override value,
    or dropped when the value is blank. Other documents pass unchanged.
    """
    resolved = []
    for doc in documents:
        if doc.name not in overrides:
            resolved.append(doc)
            continue
        new_name = overrides[doc.name].strip()
        if not new_name:
            logger.debug(f"Skipping document {doc.name}, blank override")
            continue
        logger.debug(f"Renaming document {doc.name} to {new_name}")
        resolved.append(doc.renamed(new_name))
    return resolved
