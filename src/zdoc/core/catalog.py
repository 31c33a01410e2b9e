"""Declaration catalog of reflected Java API elements.

The catalog is the ground truth both for compiling Lua stubs and for
annotating existing Lua sources. It is built once from an API dump, a JSON
export of the reflected classes, and never modified afterwards.

API dump format::

    {
      "classes": [
        {
          "name": "zombie.characters.IsoPlayer",
          "parent": "zombie.characters.IsoLivingEntity",
          "comment": "The player character.",
          "fields": [
            {"name": "MAX", "type": "int", "modifiers": ["public", "static"]}
          ],
          "methods": [
            {"name": "getUsername", "returnType": "java.lang.String",
             "params": [], "modifiers": ["public"], "varArg": false}
          ]
        }
      ]
    }

Example:
    >>> catalog = load_catalog(Path("api.json"))
    >>> catalog.get_class("IsoPlayer").parent
    'IsoLivingEntity'
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping, Optional, Sequence

from zdoc.core.exceptions import CatalogError
from zdoc.elements.lua import safe_lua_name
from zdoc.elements.modifier import UNDECLARED, MemberModifier
from zdoc.utils.logger import get_logger

logger = get_logger("zdoc.core.catalog")

_GENERIC_PATTERN = re.compile(r"<.*>")


class EntryKind(Enum):
    CLASS = "class"
    METHOD = "method"
    FIELD = "field"


@dataclass(frozen=True)
class CatalogEntry:
    """A single typed declaration.

    Attributes:
        qualified_name: ``Owner.name`` for members, the class name for classes
        kind: Declaration kind
        name: Bare Java name
        owner: Lua name of the declaring class, empty for classes and
            global functions
        type: Return type of methods, value type of fields
        param_types: Method parameter types in declaration order
        param_names: Method parameter names, may be shorter than param_types
        modifier: Java modifiers
        comment: Documentation text
        var_arg: True when the last parameter is variadic
        parent: Parent class name (classes only)
    """

    qualified_name: str
    kind: EntryKind
    name: str
    owner: str = ""
    type: str = ""
    param_types: tuple[str, ...] = ()
    param_names: tuple[str, ...] = ()
    modifier: MemberModifier = UNDECLARED
    comment: str = ""
    var_arg: bool = False
    parent: Optional[str] = None

    @property
    def lua_name(self) -> str:
        return safe_lua_name(self.name)

    @property
    def arity(self) -> int:
        return len(self.param_types)

    @property
    def fixed_arity(self) -> int:
        """Number of parameters before the variadic one."""
        if self.var_arg and self.param_types:
            return self.arity - 1
        return self.arity


def class_entry(name: str, parent: Optional[str] = None, comment: str = "") -> CatalogEntry:
    return CatalogEntry(name, EntryKind.CLASS, name, parent=parent or None, comment=comment)


def field_entry(
    owner: str,
    name: str,
    type: str,
    modifier: MemberModifier = UNDECLARED,
    comment: str = "",
) -> CatalogEntry:
    return CatalogEntry(
        _qualify(owner, name), EntryKind.FIELD, name,
        owner=owner, type=type, modifier=modifier, comment=comment,
    )


def method_entry(
    owner: str,
    name: str,
    param_types: Sequence[str],
    return_type: str = "void",
    param_names: Sequence[str] = (),
    modifier: MemberModifier = UNDECLARED,
    var_arg: bool = False,
    comment: str = "",
) -> CatalogEntry:
    return CatalogEntry(
        _qualify(owner, name), EntryKind.METHOD, name,
        owner=owner,
        type=return_type,
        param_types=tuple(param_types),
        param_names=tuple(param_names),
        modifier=modifier,
        comment=comment,
        var_arg=var_arg and bool(param_types),
    )


def _qualify(owner: str, name: str) -> str:
    return f"{owner}.{name}" if owner else name


def java_simple_name(type_name: Optional[str]) -> str:
    """Reduce a Java type name to the name used on the Lua side.

    Package and outer class prefixes and generic arguments are dropped,
    array brackets are kept.

    Examples:
        >>> java_simple_name("java.util.ArrayList<java.lang.String>")
        'ArrayList'
        >>> java_simple_name("zombie.inventory.InventoryItem[]")
        'InventoryItem[]'
    """
    if not type_name:
        return ""
    name = _GENERIC_PATTERN.sub("", type_name.strip())
    dims = ""
    while name.endswith("[]"):
        dims += "[]"
        name = name[:-2].rstrip()
    name = re.split(r"[.$]", name)[-1]
    return name + dims


class DeclarationCatalog:
    """Immutable, ordered lookup table of catalog entries.

    Entries keep the order they were given in; overload resolution relies
    on it to break ties.

    Raises:
        CatalogError: On duplicate classes or duplicate fields.
    """

    def __init__(self, entries: Iterable[CatalogEntry] = ()) -> None:
        self._entries: tuple[CatalogEntry, ...] = tuple(entries)
        self._classes: dict[str, CatalogEntry] = {}
        self._fields: dict[tuple[str, str], CatalogEntry] = {}
        methods: dict[tuple[str, str], list[CatalogEntry]] = {}

        for entry in self._entries:
            if entry.kind is EntryKind.CLASS:
                if entry.name in self._classes:
                    raise CatalogError(f"Duplicate catalog class '{entry.name}'")
                self._classes[entry.name] = entry
            elif entry.kind is EntryKind.FIELD:
                key = (entry.owner, entry.lua_name)
                if key in self._fields:
                    raise CatalogError(f"Duplicate catalog field '{entry.qualified_name}'")
                self._fields[key] = entry
            else:
                methods.setdefault((entry.owner, entry.lua_name), []).append(entry)

        self._methods: dict[tuple[str, str], tuple[CatalogEntry, ...]] = {
            key: tuple(overloads) for key, overloads in methods.items()
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries)

    def get_class(self, name: str) -> Optional[CatalogEntry]:
        return self._classes.get(name)

    def get_field(self, owner: str, name: str) -> Optional[CatalogEntry]:
        return self._fields.get((owner, name))

    def get_methods(self, owner: str, name: str) -> tuple[CatalogEntry, ...]:
        """Overloads of ``owner.name`` in declaration order, looked up by Lua name."""
        return self._methods.get((owner, name), ())

    def classes(self) -> list[CatalogEntry]:
        return list(self._classes.values())

    def fields_of(self, owner: str) -> list[CatalogEntry]:
        return [e for e in self._entries if e.kind is EntryKind.FIELD and e.owner == owner]

    def methods_of(self, owner: str) -> list[CatalogEntry]:
        return [e for e in self._entries if e.kind is EntryKind.METHOD and e.owner == owner]

    @classmethod
    def from_api_dump(cls, data: Mapping[str, Any]) -> "DeclarationCatalog":
        """Build a catalog from a parsed API dump.

        Classes whose simple name is already declared by an earlier class
        (``zombie.a.Type`` and ``zombie.b.Type``) are skipped with their
        members, and a warning is logged.

        Raises:
            CatalogError: If the dump does not follow the expected layout.
        """
        if not isinstance(data, Mapping):
            raise CatalogError("API dump must be a JSON object")
        classes = data.get("classes", [])
        if not isinstance(classes, list):
            raise CatalogError("API dump 'classes' must be a list")

        entries: list[CatalogEntry] = []
        declared: dict[str, str] = {}
        for raw_class in classes:
            class_entries = _entries_from_class(raw_class)
            name = class_entries[0].name
            if name in declared:
                logger.warning(
                    f"Skipping class '{raw_class['name']}', its name '{name}' "
                    f"is already taken by '{declared[name]}'"
                )
                continue
            declared[name] = raw_class["name"]
            entries.extend(class_entries)
        return cls(entries)


def _entries_from_class(raw: Any) -> list[CatalogEntry]:
    if not isinstance(raw, Mapping) or not raw.get("name"):
        raise CatalogError(f"Class record without a name: {raw!r}")

    owner = java_simple_name(raw["name"])
    entries = [class_entry(owner, java_simple_name(raw.get("parent")), raw.get("comment") or "")]

    try:
        for raw_field in raw.get("fields") or []:
            entries.append(field_entry(
                owner,
                raw_field["name"],
                java_simple_name(raw_field.get("type")),
                MemberModifier.parse(raw_field.get("modifiers")),
                raw_field.get("comment") or "",
            ))

        for raw_method in raw.get("methods") or []:
            params = raw_method.get("params") or []
            entries.append(method_entry(
                owner,
                raw_method["name"],
                [java_simple_name(p.get("type")) for p in params],
                java_simple_name(raw_method.get("returnType")) or "void",
                [p.get("name") or "" for p in params],
                MemberModifier.parse(raw_method.get("modifiers")),
                bool(raw_method.get("varArg", False)),
                raw_method.get("comment") or "",
            ))
    except (KeyError, TypeError, AttributeError, ValueError) as exc:
        raise CatalogError(f"Malformed member record in class '{owner}': {exc}") from exc

    return entries


def load_catalog(path: Path) -> DeclarationCatalog:
    """Read an API dump from disk and build the catalog.

    Raises:
        CatalogError: If the file is missing, is not valid JSON or has an
            unexpected layout.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise CatalogError(f"API dump not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Invalid JSON in API dump {path}: {exc}") from exc

    catalog = DeclarationCatalog.from_api_dump(data)
    logger.debug(f"Loaded {len(catalog)} catalog entries from {path}")
    return catalog
