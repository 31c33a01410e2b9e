"""
Tests for annotating Lua sources.

Tests cover block insertion, verdicts, file skipping, the only-annotated
policy and re-annotating already annotated output.
"""

from pathlib import Path

import pytest

from zdoc.core.rules import AnnotateRules
from zdoc.processors.lua_annotator import (
    IGNORE_FILE_MARKER,
    AnnotateResult,
    annotate,
    annotate_file,
    classify_result,
    has_annotation_block,
)


SAMPLE_SOURCE = [
    "TestClass = {}",
    "",
    "function TestClass:test(param1, param2)",
    "    return nil",
    "end",
    "",
    "function TestClass:getName()",
    "    return self.name",
    "end",
]


@pytest.fixture
def only_annotated_rules() -> AnnotateRules:
    return AnnotateRules(only_annotated=True)


class TestAnnotate:
    """Test insertion of annotation blocks."""

    def test_all_included(self, catalog, rules):
        """Test that every matched declaration receives its block."""
        report = annotate(SAMPLE_SOURCE, catalog, rules)

        assert report.result is AnnotateResult.ALL_INCLUDED
        assert report.declarations_seen == 3
        assert report.matched == 3
        assert report.lines == [
            "---@class TestClass : Object",
            "--- Test class.",
            "TestClass = {}",
            "",
            "---@public",
            "---@param param1 String",
            "---@param param2 Integer",
            "---@return Object",
            "function TestClass:test(param1, param2)",
            "    return nil",
            "end",
            "",
            "---@public",
            "---@return String",
            "--- Returns the name.",
            "function TestClass:getName()",
            "    return self.name",
            "end",
        ]

    def test_original_lines_are_preserved(self, catalog, rules):
        """Test that removing inserted lines gives back the original source."""
        report = annotate(SAMPLE_SOURCE, catalog, rules)
        original = [line for line in report.lines if not line.lstrip().startswith("---")]
        assert original == SAMPLE_SOURCE

    def test_indentation_is_kept(self, catalog, rules):
        report = annotate(["    function TestClass:getName() end"], catalog, rules)
        assert report.lines == [
            "    ---@public",
            "    ---@return String",
            "    --- Returns the name.",
            "    function TestClass:getName() end",
        ]

    def test_variadic_declaration(self, catalog, rules):
        report = annotate(["function TestClass:test(param1, ...) end"], catalog, rules)
        assert "---@vararg Integer" in report.lines
        assert report.result is AnnotateResult.ALL_INCLUDED

    def test_unqualified_field_uses_current_class(self, catalog, rules):
        """Test that a column-0 field after a class declaration belongs to that class."""
        report = annotate(["TestClass = {}", "counter = 0"], catalog, rules)
        assert report.matched == 2
        assert report.lines[-3:] == ["---@public", "---@type Integer", "counter = 0"]

    def test_partial_inclusion(self, catalog, rules):
        report = annotate(SAMPLE_SOURCE + ["function TestClass:missing() end"], catalog, rules)
        assert report.result is AnnotateResult.PARTIAL_INCLUSION
        assert report.unmatched == 1
        assert report.lines[-1] == "function TestClass:missing() end"
        assert report.lines[-2] == "end"

    def test_no_match(self, catalog, rules):
        source = ["Unknown = {}", "function Unknown:run() end"]
        report = annotate(source, catalog, rules)
        assert report.result is AnnotateResult.NO_MATCH
        assert report.lines == source

    def test_no_declarations(self, catalog, rules):
        report = annotate(["-- nothing here", "print(1)"], catalog, rules)
        assert report.result is AnnotateResult.NO_MATCH
        assert report.declarations_seen == 0

    def test_all_excluded(self, catalog):
        rules = AnnotateRules(excluded=frozenset({"TestClass", "test", "getName"}))
        report = annotate(SAMPLE_SOURCE, catalog, rules)
        assert report.result is AnnotateResult.ALL_EXCLUDED
        assert report.lines == SAMPLE_SOURCE

    def test_excluded_and_unmatched_is_no_match(self, catalog):
        rules = AnnotateRules(excluded=frozenset({"TestClass"}))
        report = annotate(["TestClass = {}", "function Other:run() end"], catalog, rules)
        assert report.result is AnnotateResult.NO_MATCH

    def test_annotating_twice_changes_nothing(self, catalog, rules):
        """Test that annotated output is returned unchanged when annotated again."""
        first = annotate(SAMPLE_SOURCE, catalog, rules)
        second = annotate(first.lines, catalog, rules)
        assert second.lines == first.lines
        assert second.result is AnnotateResult.ALL_INCLUDED


class TestSkippedFiles:

    def test_empty_file(self, catalog, rules):
        report = annotate([], catalog, rules)
        assert report.result is AnnotateResult.SKIPPED_FILE_EMPTY
        assert report.lines == []

    def test_ignore_marker(self, catalog, rules):
        source = [IGNORE_FILE_MARKER] + SAMPLE_SOURCE
        report = annotate(source, catalog, rules)
        assert report.result is AnnotateResult.SKIPPED_FILE_IGNORED
        assert report.lines == source

    def test_ignored_file_name(self, catalog):
        rules = AnnotateRules(ignored_files=frozenset({"TestClass.lua"}))
        report = annotate(SAMPLE_SOURCE, catalog, rules, file_name="TestClass.lua")
        assert report.result is AnnotateResult.SKIPPED_FILE_IGNORED


class TestOnlyAnnotated:

    def test_annotated_file_is_kept(self, catalog, only_annotated_rules):
        report = annotate(SAMPLE_SOURCE, catalog, only_annotated_rules)
        assert report.lines

    def test_unannotated_file_is_dropped(self, catalog, only_annotated_rules):
        report = annotate(["Unknown = {}"], catalog, only_annotated_rules)
        assert report.result is AnnotateResult.NO_MATCH
        assert report.lines == []

    def test_all_excluded_file_is_dropped(self, catalog):
        """Test that a file whose declarations are all excluded produces no output."""
        rules = AnnotateRules(
            excluded=frozenset({"TestClass", "test", "getName"}), only_annotated=True
        )
        report = annotate(SAMPLE_SOURCE, catalog, rules)
        assert report.result is AnnotateResult.ALL_EXCLUDED
        assert report.excluded == 3
        assert report.lines == []

    def test_ignored_file_is_dropped(self, catalog, only_annotated_rules):
        report = annotate([IGNORE_FILE_MARKER, "x = 1"], catalog, only_annotated_rules)
        assert report.result is AnnotateResult.SKIPPED_FILE_IGNORED
        assert report.lines == []


class TestHelpers:

    @pytest.mark.parametrize("seen, matched, excluded, expected", [
        (0, 0, 0, AnnotateResult.NO_MATCH),
        (3, 0, 3, AnnotateResult.ALL_EXCLUDED),
        (3, 3, 0, AnnotateResult.ALL_INCLUDED),
        (3, 2, 1, AnnotateResult.PARTIAL_INCLUSION),
        (3, 1, 0, AnnotateResult.PARTIAL_INCLUSION),
        (3, 0, 1, AnnotateResult.NO_MATCH),
    ])
    def test_classify_result(self, seen, matched, excluded, expected):
        assert classify_result(seen, matched, excluded) is expected

    def test_has_annotation_block(self):
        assert has_annotation_block(["---@public", "--- Text."])
        assert not has_annotation_block(["--- Text only."])
        assert not has_annotation_block(["---@public", "x = 1"])
        assert not has_annotation_block([])

    def test_result_has_annotations(self):
        assert AnnotateResult.PARTIAL_INCLUSION.has_annotations
        assert not AnnotateResult.ALL_EXCLUDED.has_annotations


class TestAnnotateFile:

    def test_annotate_file(self, tmp_path: Path, catalog, rules):
        path = tmp_path / "TestClass.lua"
        path.write_text("\n".join(SAMPLE_SOURCE) + "\n", encoding="utf-8")

        report = annotate_file(path, catalog, rules)
        assert report.result is AnnotateResult.ALL_INCLUDED
        assert report.lines[0] == "---@class TestClass : Object"

    @pytest.mark.parametrize("separator", ["\u2028", "\u2029", "\x0c", "\x0b", "\x85"])
    def test_unicode_separators_stay_inside_lines(self, tmp_path: Path, catalog, rules, separator):
        """Test that only line terminators split lines."""
        source = f'local s = "a{separator}b"\nprint(s)\n'
        path = tmp_path / "strings.lua"
        path.write_text(source, encoding="utf-8")

        report = annotate_file(path, catalog, rules)
        assert report.lines == [f'local s = "a{separator}b"', "print(s)"]

    def test_windows_line_endings(self, tmp_path: Path, catalog, rules):
        path = tmp_path / "TestClass.lua"
        path.write_bytes(b"TestClass = {}\r\nprint(1)\r\n")

        report = annotate_file(path, catalog, rules)
        assert report.lines[-2:] == ["TestClass = {}", "print(1)"]

    def test_empty_file(self, tmp_path: Path, catalog, rules):
        path = tmp_path / "Empty.lua"
        path.write_text("", encoding="utf-8")
        assert annotate_file(path, catalog, rules).result is AnnotateResult.SKIPPED_FILE_EMPTY

    def test_missing_file(self, tmp_path: Path, catalog, rules):
        with pytest.raises(OSError):
            annotate_file(tmp_path / "missing.lua", catalog, rules)
