"""
Matching of classified Lua declarations against the declaration catalog.

Match outcomes are tagged variants so callers handle each case explicitly::

    outcome = match(record, catalog, rules)
    if isinstance(outcome, Matched):
        ...
    elif isinstance(outcome, Excluded):
        ...

Exclusion is checked before any lookup. Functions are resolved among the
overloads sharing owner and name: first by parameter count, then by a
positional score where a parameter token equal to the catalog parameter
name or type counts more than an unresolved one. When no overload takes the
written number of parameters, all overloads of the name are scored. Ties go
to the overload declared first. Matching is pure: equal inputs always give
equal outcomes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Union

from zdoc.core.catalog import CatalogEntry, DeclarationCatalog
from zdoc.core.rules import AnnotateRules
from zdoc.elements.emmylua import ANY_TYPE
from zdoc.processors.lua_line_classifier import LineKind, LineRecord

# Score of a parameter token equal to the catalog parameter name or type
EXACT_TOKEN_SCORE = 2


@dataclass(frozen=True)
class Matched:
    entry: CatalogEntry


@dataclass(frozen=True)
class NoMatch:
    pass


@dataclass(frozen=True)
class Excluded:
    name: str


MatchOutcome = Union[Matched, NoMatch, Excluded]


def owner_candidates(record: LineRecord) -> tuple[str, ...]:
    """Owner names to try for a record, full qualifier first."""
    names = []
    for owner in (record.qualifier, record.owner):
        if owner not in names:
            names.append(owner)
    return tuple(names)


def token_score(token: str, type_name: str, param_name: Optional[str]) -> int:
    if type_name and type_name != ANY_TYPE and token == type_name:
        return EXACT_TOKEN_SCORE
    if param_name and token == param_name:
        return EXACT_TOKEN_SCORE
    return 0


def score_candidate(tokens: Sequence[str], entry: CatalogEntry) -> int:
    """Positional score of ``tokens`` against the parameters of ``entry``."""
    score = 0
    for index, token in enumerate(tokens[:entry.arity]):
        param_name = entry.param_names[index] if index < len(entry.param_names) else None
        score += token_score(token, entry.param_types[index], param_name)
    return score


def accepts_arity(record: LineRecord, entry: CatalogEntry) -> bool:
    """
    True when the parameter count of ``record`` fits ``entry``.

    A variadic record fits every variadic entry taking at least as many
    fixed parameters as the record names before ``...``.
    """
    if record.var_arg:
        return entry.var_arg and entry.fixed_arity >= len(record.params)
    return entry.arity == len(record.params)


def best_scoring(tokens: Sequence[str], entries: Sequence[CatalogEntry]) -> Optional[CatalogEntry]:
    best: Optional[CatalogEntry] = None
    best_score = -1
    for entry in entries:
        score = score_candidate(tokens, entry)
        # strict comparison keeps the earliest overload on ties
        if score > best_score:
            best, best_score = entry, score
    return best


def select_overload(
    record: LineRecord,
    overloads: Sequence[CatalogEntry],
) -> Optional[CatalogEntry]:
    """
    Pick the best overload for a function record.

    Overloads with a fitting parameter count are ranked first. When none
    fits, every overload of the name is ranked instead.

    Returns:
        The highest scoring overload, the earliest declared one on ties, or
        None for an empty overload list.
    """
    fitting = [entry for entry in overloads if accepts_arity(record, entry)]
    return best_scoring(record.params, fitting or overloads)


def _lookup(record: LineRecord, catalog: DeclarationCatalog) -> Optional[CatalogEntry]:
    if record.kind is LineKind.CLASS:
        return catalog.get_class(record.name)

    if record.kind is LineKind.FIELD:
        for owner in owner_candidates(record):
            entry = catalog.get_field(owner, record.name)
            if entry is not None:
                return entry
        return None

    if record.kind is LineKind.FUNCTION:
        for owner in owner_candidates(record):
            overloads = catalog.get_methods(owner, record.name)
            if overloads:
                return select_overload(record, overloads)
        return None

    raise ValueError(f"Cannot match a line of kind {record.kind}")


def match(record: LineRecord, catalog: DeclarationCatalog, rules: AnnotateRules) -> MatchOutcome:
    """
    Match a classified declaration against the catalog.

    Args:
        record: Line record of a declaration (kind other than NONE).
        catalog: Declaration catalog to search.
        rules: Rule set supplying the exclusions.

    Returns:
        ``Excluded`` if the declared name is excluded, ``Matched`` with the
        catalog entry, or ``NoMatch``.

    Raises:
        ValueError: If ``record`` is not a declaration.
    """
    if not record.is_declaration:
        raise ValueError("Only declaration records can be matched")

    qualified_name = record.qualified_name if record.qualifier else None
    if rules.is_excluded(record.kind, record.name, qualified_name):
        return Excluded(record.name)

    entry = _lookup(record, catalog)
    return Matched(entry) if entry is not None else NoMatch()
