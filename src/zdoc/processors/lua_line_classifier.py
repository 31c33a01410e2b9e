"""
Line classifier for Lua source files.

Recognizes declaration sites one line at a time with anchored regular
expressions. No Lua parsing takes place; a line that matches none of the
declaration shapes is simply reported as ``LineKind.NONE``.

Recognized shapes (default patterns):

- class: ``ISButton = ISPanel:derive("ISButton")`` or ``ISButton = {}``
- function: ``function ISButton:render(x, y)``, ``function ISButton.new(...)``,
  ``local function helper(x)`` or ``ISButton.onClick = function(self, button)``
- field: ``ISButton.MAX_WIDTH = 200`` or ``title = "OK"`` at column 0

Example:
    >>> record = classify("function TestClass:test(param1, ...)")
    >>> record.kind, record.qualifier, record.name, record.params, record.var_arg
    (<LineKind.FUNCTION: 'function'>, 'TestClass', 'test', ('param1',), True)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping, Optional

if TYPE_CHECKING:
    from zdoc.core.rules import AnnotateRules

VARIADIC_MARKER = "..."

_IDENT = r"[A-Za-z_]\w*"
_QUALIFIER = r"[A-Za-z_][\w.]*"
_TRAILER = r"\s*;?\s*(?:--.*)?$"


class LineKind(Enum):
    NONE = "none"
    CLASS = "class"
    FUNCTION = "function"
    FIELD = "field"


# Kinds in the order they are tried; the first matching pattern wins
DECLARATION_KINDS = (LineKind.CLASS, LineKind.FUNCTION, LineKind.FIELD)

DEFAULT_PATTERNS: Mapping[LineKind, tuple[re.Pattern, ...]] = MappingProxyType({
    LineKind.CLASS: (
        re.compile(
            rf"^\s*(?:local\s+)?(?P<name>{_IDENT})\s*=\s*(?P<parent>{_QUALIFIER})"
            rf"\s*:\s*derive\s*\(.*\){_TRAILER}"
        ),
        re.compile(rf"^(?P<name>{_IDENT})\s*=\s*\{{\s*\}}{_TRAILER}"),
    ),
    LineKind.FUNCTION: (
        re.compile(
            rf"^\s*(?:local\s+)?function\s+(?:(?P<owner>{_QUALIFIER})\s*[:.]\s*)?"
            rf"(?P<name>{_IDENT})\s*\((?P<params>[^)]*)\)"
        ),
        re.compile(
            rf"^\s*(?:(?P<owner>{_QUALIFIER})\s*\.\s*)?(?P<name>{_IDENT})"
            rf"\s*=\s*function\s*\((?P<params>[^)]*)\)"
        ),
    ),
    LineKind.FIELD: (
        re.compile(rf"^(?:(?P<owner>{_QUALIFIER})\.)?(?P<name>{_IDENT})\s*=(?!=)"),
    ),
})


@dataclass(frozen=True)
class LineRecord:
    """
    A single source line and what it declares.

    Attributes:
        text: Raw line exactly as read
        kind: Declaration kind, NONE for every other line
        name: Bare declared name (receiver qualifier stripped)
        qualifier: Receiver or owner written before ``:`` or ``.``, may be empty
        params: Parameter tokens of function declarations, variadic marker removed
        var_arg: True when the parameter list ends with ``...``
        parent: Parent class of ``derive`` style class declarations
    """
    text: str
    kind: LineKind = LineKind.NONE
    name: str = ""
    qualifier: str = ""
    params: tuple[str, ...] = ()
    var_arg: bool = False
    parent: Optional[str] = None

    @property
    def is_declaration(self) -> bool:
        return self.kind is not LineKind.NONE

    @property
    def owner(self) -> str:
        """Last segment of the qualifier, ``UI`` for ``ISUI.UI:render()``."""
        return self.qualifier.rsplit(".", 1)[-1] if self.qualifier else ""

    @property
    def qualified_name(self) -> str:
        return f"{self.qualifier}.{self.name}" if self.qualifier else self.name

    @property
    def indent(self) -> str:
        return self.text[:len(self.text) - len(self.text.lstrip())]


def tokenize_params(param_text: Optional[str]) -> tuple[tuple[str, ...], bool]:
    """
    Split a parameter list on commas.

    Returns:
        Tuple of (tokens, var_arg) where a trailing ``...`` is reported as
        ``var_arg`` and not included in the tokens.
    """
    tokens = [token.strip() for token in (param_text or "").split(",")]
    tokens = [token for token in tokens if token]
    var_arg = bool(tokens) and tokens[-1] == VARIADIC_MARKER
    if var_arg:
        tokens.pop()
    return tuple(tokens), var_arg


def classify(line: str, rules: "AnnotateRules | None" = None) -> LineRecord:
    """
    Classify a single line of Lua source.

    Args:
        line: Raw line without its line terminator.
        rules: Rule set supplying the recognition patterns; the default
            patterns are used when omitted.

    Returns:
        LineRecord describing the declaration, or a record of kind NONE.
    """
    if not line.strip():
        return LineRecord(line)

    patterns = rules.patterns if rules is not None else DEFAULT_PATTERNS
    for kind in DECLARATION_KINDS:
        for pattern in patterns.get(kind, ()):
            match = pattern.match(line)
            if match is not None:
                return _record_from_match(line, kind, match)

    return LineRecord(line)


def _record_from_match(line: str, kind: LineKind, match: re.Match) -> LineRecord:
    groups = match.groupdict()
    params: tuple[str, ...] = ()
    var_arg = False
    if kind is LineKind.FUNCTION:
        params, var_arg = tokenize_params(groups.get("params"))
        # explicit receiver of dot-style methods, implicit with ':'
        if params and params[0] == "self" and groups.get("owner"):
            params = params[1:]

    return LineRecord(
        text=line,
        kind=kind,
        name=groups["name"],
        qualifier=(groups.get("owner") or "").replace(" ", ""),
        params=params,
        var_arg=var_arg,
        parent=groups.get("parent") or None,
    )
