"""Rule set applied while annotating Lua files.

A rule set is built once per run, from the property store and the
exclusions given on the command line, and reused for every file. It is
immutable so files may be processed in any order or in parallel.

Example:
    >>> rules = AnnotateRules.from_properties(load_properties(), exclude={"IsoPlayer"})
    >>> rules.is_excluded(LineKind.CLASS, "IsoPlayer")
    True
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from zdoc.core.config import (
    EXCLUDE_KEY,
    IGNORE_KEY,
    ONLY_ANNOTATED_KEY,
    PATTERN_KEY_PREFIX,
    get_bool,
    split_list,
)
from zdoc.core.exceptions import ConfigError
from zdoc.processors.lua_line_classifier import DECLARATION_KINDS, DEFAULT_PATTERNS, LineKind
from zdoc.utils.logger import get_logger

logger = get_logger("zdoc.core.rules")


@dataclass(frozen=True)
class AnnotateRules:
    """Recognition, exclusion and inclusion policy for annotating files.

    Attributes:
        patterns: Recognition patterns per declaration kind, tried in order
        excluded: Names excluded for every declaration kind
        excluded_by_kind: Additional names excluded for a single kind
        ignored_files: File names that are never annotated
        only_annotated: Drop the output of files that received no annotation
    """

    patterns: Mapping[LineKind, tuple[re.Pattern, ...]] = field(
        default_factory=lambda: DEFAULT_PATTERNS
    )
    excluded: frozenset[str] = frozenset()
    excluded_by_kind: Mapping[LineKind, frozenset[str]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    ignored_files: frozenset[str] = frozenset()
    only_annotated: bool = False

    def is_excluded(self, kind: LineKind, name: str, qualified_name: Optional[str] = None) -> bool:
        """Return True when ``name`` or ``qualified_name`` is excluded for ``kind``.

        Names compare exactly and case-sensitively.
        """
        names = {name}
        if qualified_name:
            names.add(qualified_name)
        kind_excluded = self.excluded_by_kind.get(kind, frozenset())
        return bool(names & self.excluded) or bool(names & kind_excluded)

    def is_ignored_file(self, file_name: Optional[str]) -> bool:
        return bool(file_name) and file_name in self.ignored_files

    @classmethod
    def from_properties(
        cls,
        properties: Mapping[str, str],
        exclude: Iterable[str] = (),
        only_annotated: Optional[bool] = None,
    ) -> "AnnotateRules":
        """Build a rule set from a property store.

        Args:
            properties: Normalized property store (see ``zdoc.core.config``).
            exclude: Names excluded by the caller, merged with the ``exclude``
                property.
            only_annotated: Overrides the ``only_annotated`` property when
                not None.

        Raises:
            ConfigError: If a pattern override is not a valid expression.
        """
        patterns = dict(DEFAULT_PATTERNS)
        for kind in DECLARATION_KINDS:
            override = properties.get(PATTERN_KEY_PREFIX + kind.value)
            if override:
                try:
                    compiled = re.compile(override)
                except re.error as exc:
                    raise ConfigError(
                        f"Invalid pattern for {kind.value} declarations: {exc}"
                    ) from exc
                if "name" not in compiled.groupindex:
                    raise ConfigError(f"Pattern for {kind.value} declarations lacks a 'name' group")
                patterns[kind] = (compiled,)
                logger.debug(f"Using custom {kind.value} pattern: {override}")

        excluded = set(exclude)
        excluded.update(split_list(properties.get(EXCLUDE_KEY)))

        excluded_by_kind = {}
        for kind in DECLARATION_KINDS:
            names = split_list(properties.get(f"{EXCLUDE_KEY}.{kind.value}"))
            if names:
                excluded_by_kind[kind] = frozenset(names)

        if only_annotated is None:
            only_annotated = get_bool(properties, ONLY_ANNOTATED_KEY)

        return cls(
            patterns=MappingProxyType(patterns),
            excluded=frozenset(excluded),
            excluded_by_kind=MappingProxyType(excluded_by_kind),
            ignored_files=frozenset(split_list(properties.get(IGNORE_KEY))),
            only_annotated=only_annotated,
        )
