"""Tests for AnnotateRules."""

import pytest

from zdoc.core.config import load_properties
from zdoc.core.exceptions import ConfigError
from zdoc.core.rules import AnnotateRules
from zdoc.processors.lua_line_classifier import DEFAULT_PATTERNS, LineKind


class TestDefaults:

    def test_default_rules(self, rules):
        """Test that the default rule set excludes nothing and uses default patterns."""
        assert rules.patterns == DEFAULT_PATTERNS
        assert not rules.only_annotated
        assert not rules.is_excluded(LineKind.CLASS, "TestClass")
        assert not rules.is_ignored_file("TestClass.lua")

    def test_rules_are_frozen(self, rules):
        with pytest.raises(AttributeError):
            rules.only_annotated = True


class TestExclusion:

    def test_caller_and_property_exclusions_merge(self):
        """Test that names from the caller and the exclude property both apply."""
        rules = AnnotateRules.from_properties(
            dict(load_properties(), exclude="IsoZombie"), exclude={"IsoPlayer"}
        )
        assert rules.is_excluded(LineKind.CLASS, "IsoPlayer")
        assert rules.is_excluded(LineKind.FUNCTION, "IsoZombie")

    def test_exclusion_is_case_sensitive(self):
        rules = AnnotateRules(excluded=frozenset({"IsoPlayer"}))
        assert not rules.is_excluded(LineKind.CLASS, "isoplayer")

    def test_qualified_exclusion(self):
        """Test that Owner.name exclusions only match the qualified declaration."""
        rules = AnnotateRules(excluded=frozenset({"TestClass.test"}))
        assert rules.is_excluded(LineKind.FUNCTION, "test", "TestClass.test")
        assert not rules.is_excluded(LineKind.FUNCTION, "test", "OtherClass.test")
        assert not rules.is_excluded(LineKind.FUNCTION, "test")

    def test_exclusion_by_kind(self):
        rules = AnnotateRules.from_properties(
            dict(load_properties(), **{"exclude.field": "counter"})
        )
        assert rules.is_excluded(LineKind.FIELD, "counter")
        assert not rules.is_excluded(LineKind.FUNCTION, "counter")


class TestFromProperties:

    def test_only_annotated_property(self):
        rules = AnnotateRules.from_properties(dict(load_properties(), only_annotated="true"))
        assert rules.only_annotated

    def test_only_annotated_argument_overrides_property(self):
        rules = AnnotateRules.from_properties(
            dict(load_properties(), only_annotated="true"), only_annotated=False
        )
        assert not rules.only_annotated

    def test_ignored_files(self):
        rules = AnnotateRules.from_properties(
            dict(load_properties(), ignore="ISDebug.lua, ISCheat.lua")
        )
        assert rules.is_ignored_file("ISCheat.lua")
        assert not rules.is_ignored_file("ISButton.lua")
        assert not rules.is_ignored_file(None)

    def test_pattern_override(self):
        """Test that a pattern property replaces the default patterns of its kind."""
        rules = AnnotateRules.from_properties(
            dict(load_properties(), **{"pattern.class": r"^class (?P<name>\w+)"})
        )
        assert len(rules.patterns[LineKind.CLASS]) == 1
        assert rules.patterns[LineKind.CLASS][0].pattern == r"^class (?P<name>\w+)"
        assert rules.patterns[LineKind.FUNCTION] == DEFAULT_PATTERNS[LineKind.FUNCTION]

    def test_invalid_pattern_override(self):
        with pytest.raises(ConfigError, match="Invalid pattern"):
            AnnotateRules.from_properties({"pattern.function": "(["})

    def test_pattern_override_without_name_group(self):
        with pytest.raises(ConfigError, match="lacks a 'name' group"):
            AnnotateRules.from_properties({"pattern.function": r"^function"})
