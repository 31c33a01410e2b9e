"""Java member modifiers as they appear in reflected API data.

Example:
    >>> modifier = MemberModifier.parse(["public", "static"])
    >>> modifier.access
    <AccessModifier.PUBLIC: 'public'>
    >>> str(modifier)
    'public static'
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Union


class AccessModifier(Enum):
    """Java access level of a class member."""

    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
    DEFAULT = ""

    @property
    def lua_access(self) -> str:
        """EmmyLua access keyword; package-private members are shown as public."""
        return self.value or AccessModifier.PUBLIC.value


@dataclass(frozen=True)
class MemberModifier:
    """Access level plus the non-access modifiers zdoc cares about.

    Attributes:
        access: Java access level
        static: True for class members
        final: True for constants and non-overridable methods
        abstract: True for abstract methods
    """

    access: AccessModifier = AccessModifier.DEFAULT
    static: bool = False
    final: bool = False
    abstract: bool = False

    @classmethod
    def parse(cls, keywords: Union[str, Iterable[str], None]) -> "MemberModifier":
        """Build a modifier from keywords such as ``"public static"``.

        Unknown keywords (``synchronized``, ``native`` ...) are ignored.

        Raises:
            ValueError: If more than one access keyword is given.
        """
        if keywords is None:
            return cls()
        if isinstance(keywords, str):
            keywords = keywords.split()

        access = AccessModifier.DEFAULT
        flags = set()
        for keyword in keywords:
            keyword = keyword.strip().lower()
            if keyword in ("public", "protected", "private"):
                if access is not AccessModifier.DEFAULT:
                    raise ValueError(f"Conflicting access modifiers: {access.value}, {keyword}")
                access = AccessModifier(keyword)
            else:
                flags.add(keyword)

        return cls(
            access=access,
            static="static" in flags,
            final="final" in flags,
            abstract="abstract" in flags,
        )

    def keywords(self) -> list[str]:
        words = [self.access.value] if self.access is not AccessModifier.DEFAULT else []
        if self.abstract:
            words.append("abstract")
        if self.static:
            words.append("static")
        if self.final:
            words.append("final")
        return words

    def __str__(self) -> str:
        return " ".join(self.keywords())


# Modifier of members whose reflected data carries no modifiers at all
UNDECLARED = MemberModifier()
