"""Annotation of existing Lua source files.

Streams the lines of a file through classification, matching and
rendering, inserting an EmmyLua block directly above every matched
declaration. Original lines are never changed, reordered or removed (unless
the rule set asks for unannotated files to be dropped entirely), and a
single verdict summarizes how completely the file was annotated.

Example:
    >>> report = annotate(["function TestClass:test(param1, param2) end"], catalog, rules)
    >>> report.result
    <AnnotateResult.ALL_INCLUDED: 'all_included'>
    >>> report.lines[:2]
    ['---@public', '---@param param1 String']
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Sequence

from zdoc.core.catalog import DeclarationCatalog
from zdoc.core.rules import AnnotateRules
from zdoc.elements.emmylua import is_directive_line, is_doc_comment_line
from zdoc.processors.annotation_matcher import Excluded, Matched, match
from zdoc.processors.annotation_renderer import render
from zdoc.processors.lua_line_classifier import LineKind, classify
from zdoc.utils.logger import get_logger

logger = get_logger("zdoc.processors.lua_annotator")

# Line marking a whole file as not to be annotated
IGNORE_FILE_MARKER = "---@zdoc ignore"


class AnnotateResult(Enum):
    ALL_INCLUDED = "all_included"
    PARTIAL_INCLUSION = "partial_inclusion"
    NO_MATCH = "no_match"
    ALL_EXCLUDED = "all_excluded"
    SKIPPED_FILE_EMPTY = "skipped_file_empty"
    SKIPPED_FILE_IGNORED = "skipped_file_ignored"

    @property
    def has_annotations(self) -> bool:
        return self in (AnnotateResult.ALL_INCLUDED, AnnotateResult.PARTIAL_INCLUSION)


@dataclass
class AnnotateReport:
    """Output of annotating one file.

    Attributes:
        lines: Output lines, original lines plus inserted annotations
        result: File verdict
        declarations_seen: Number of classified declarations
        matched: Declarations matched to a catalog entry
        excluded: Declarations skipped because their name is excluded
    """

    lines: list[str] = field(default_factory=list)
    result: AnnotateResult = AnnotateResult.NO_MATCH
    declarations_seen: int = 0
    matched: int = 0
    excluded: int = 0

    @property
    def unmatched(self) -> int:
        return self.declarations_seen - self.matched - self.excluded


def classify_result(declarations_seen: int, matched: int, excluded: int) -> AnnotateResult:
    """Derive the verdict of a processed file from its counters.

    The checks run in this order, the first that holds decides:
    no declarations, all excluded, all matched, some matched. Files where
    some declarations are excluded and none matched are NO_MATCH.
    """
    if declarations_seen == 0:
        return AnnotateResult.NO_MATCH
    if excluded == declarations_seen:
        return AnnotateResult.ALL_EXCLUDED
    if matched == declarations_seen:
        return AnnotateResult.ALL_INCLUDED
    if matched > 0:
        return AnnotateResult.PARTIAL_INCLUSION
    return AnnotateResult.NO_MATCH


def has_annotation_block(output: Sequence[str]) -> bool:
    """True if the trailing ``---`` comment lines of ``output`` hold a directive."""
    for line in reversed(output):
        if not is_doc_comment_line(line):
            return False
        if is_directive_line(line):
            return True
    return False


def is_ignored(lines: Sequence[str], rules: AnnotateRules, file_name: Optional[str]) -> bool:
    if rules.is_ignored_file(file_name):
        return True
    return any(line.strip() == IGNORE_FILE_MARKER for line in lines)


def annotate(
    lines: Sequence[str],
    catalog: DeclarationCatalog,
    rules: AnnotateRules,
    file_name: Optional[str] = None,
) -> AnnotateReport:
    """Annotate the lines of a Lua file.

    Args:
        lines: Source lines without line terminators.
        catalog: Declaration catalog used for matching.
        rules: Rule set of the run.
        file_name: Name of the file, checked against ignored file names.

    Returns:
        AnnotateReport with output lines, verdict and counters.
    """
    if not lines:
        return AnnotateReport(result=AnnotateResult.SKIPPED_FILE_EMPTY)

    if is_ignored(lines, rules, file_name):
        kept = [] if rules.only_annotated else list(lines)
        return AnnotateReport(lines=kept, result=AnnotateResult.SKIPPED_FILE_IGNORED)

    output: list[str] = []
    seen = matched = excluded = 0
    current_class = ""

    for number, line in enumerate(lines, start=1):
        record = classify(line, rules)
        if not record.is_declaration:
            output.append(line)
            continue

        seen += 1
        if record.kind is LineKind.CLASS:
            current_class = record.name
        elif record.kind is LineKind.FIELD and not record.qualifier and current_class:
            record = dataclasses.replace(record, qualifier=current_class)

        outcome = match(record, catalog, rules)
        if isinstance(outcome, Matched):
            matched += 1
            if has_annotation_block(output):
                logger.debug(f"Line {number}: '{record.qualified_name}' already annotated")
            else:
                block = render(outcome, record.params)
                output.extend(record.indent + annotation for annotation in block)
        elif isinstance(outcome, Excluded):
            excluded += 1
            logger.debug(f"Line {number}: excluded '{record.qualified_name}'")
        else:
            logger.debug(f"Line {number}: no match for {record.kind.value} '{record.qualified_name}'")

        output.append(line)

    result = classify_result(seen, matched, excluded)
    if rules.only_annotated and not result.has_annotations:
        output = []

    return AnnotateReport(output, result, seen, matched, excluded)


def annotate_file(path: Path, catalog: DeclarationCatalog, rules: AnnotateRules) -> AnnotateReport:
    """Read a UTF-8 Lua file and annotate its lines.

    Lines are split on line terminators only. Characters such as form
    feeds or U+2028 inside a line are kept as they are.

    Raises:
        OSError: If the file cannot be read.
    """
    lines = path.read_text(encoding="utf-8").split("\n")
    if lines[-1] == "":
        lines.pop()
    return annotate(lines, catalog, rules, file_name=path.name)
