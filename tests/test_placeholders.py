"""Tests for placeholder substitution and nested resolution."""

import logging

import pytest

from template_resolver import replace_placeholders, resolve_nested
from template_resolver.placeholders import apply_modifier, split_modifier


class TestReplacePlaceholders:
    def test_basic(self):
        result = replace_placeholders("Partij [[Partij1Naam]] en [[Partij2Naam]].", {
            "Partij1Naam": "Jan de Vries",
            "Partij2Naam": "Maria Jansen",
        })
        assert result == "Partij Jan de Vries en Maria Jansen."

    def test_names_case_insensitive(self):
        assert replace_placeholders("[[partij1naam]]", {"Partij1Naam": "Jan"}) == "Jan"

    def test_unknown_left_and_logged(self, caplog):
        with caplog.at_level(logging.WARNING):
            result = replace_placeholders("Hallo [[Onbekend]]", {"Naam": "Jan"})
        assert result == "Hallo [[Onbekend]]"
        assert "[[Onbekend]]" in caplog.text

    def test_none_value_is_empty(self):
        assert replace_placeholders("a[[X]]b", {"X": None}) == "ab"

    def test_empty_value(self):
        assert replace_placeholders("a[[X]]b", {"X": ""}) == "ab"

    @pytest.mark.parametrize("text", [None, ""])
    def test_degenerate_text(self, text):
        assert replace_placeholders(text, {"X": "y"}) == text

    def test_single_pass(self):
        result = replace_placeholders("[[A]]", {"A": "[[B]]", "B": "b"})
        assert result == "[[B]]"

    def test_grammar_rule_keys(self):
        rules = {"heeft/hebben": "hebben", "hij/zij/ze": "ze"}
        assert replace_placeholders("[[hij/zij/ze]] [[heeft/hebben]]", rules) == "ze hebben"


class TestModifiers:
    REPLACEMENTS = {"Naam": "jan de vries"}

    def test_caps(self):
        assert replace_placeholders("[[caps:Naam]]", self.REPLACEMENTS) == "Jan de vries"

    def test_upper(self):
        assert replace_placeholders("[[upper:Naam]]", self.REPLACEMENTS) == "JAN DE VRIES"

    def test_lower(self):
        assert replace_placeholders("[[lower:Naam]]", {"Naam": "Jan"}) == "jan"

    def test_modifier_case_insensitive(self):
        assert replace_placeholders("[[CAPS:naam]]", self.REPLACEMENTS) == "Jan de vries"

    def test_caps_on_grammar_rule(self):
        assert replace_placeholders("[[caps:hij/zij/ze]] gaat", {"hij/zij/ze": "zij"}) == "Zij gaat"

    def test_unknown_prefix_is_part_of_name(self):
        assert split_modifier("foo:Naam") == (None, "foo:Naam")
        assert replace_placeholders("[[foo:Naam]]", {"foo:Naam": "x"}) == "x"

    def test_split(self):
        assert split_modifier("caps:Partij1Naam") == ("caps", "Partij1Naam")
        assert split_modifier("Partij1Naam") == (None, "Partij1Naam")

    def test_apply_on_empty(self):
        assert apply_modifier("", "caps") == ""
        assert apply_modifier("abc", None) == "abc"


class TestResolveNested:
    def test_values_with_placeholders(self):
        replacements = {
            "Aanhef": "Geachte [[Naam]],",
            "Naam": "[[Voornaam]] [[Achternaam]]",
            "Voornaam": "Jan",
            "Achternaam": "de Vries",
        }
        assert resolve_nested("[[Aanhef]]", replacements) == "Geachte Jan de Vries,"

    def test_stops_when_stable(self):
        assert resolve_nested("[[A]] en [[Onbekend]]", {"A": "a"}) == "a en [[Onbekend]]"

    def test_cycle_bounded_by_depth(self):
        replacements = {"A": "[[B]]", "B": "[[A]]"}
        assert resolve_nested("[[A]]", replacements, max_depth=3) == "[[B]]"
        assert resolve_nested("[[A]]", replacements, max_depth=2) == "[[A]]"

    def test_depth_limits_chain(self):
        replacements = {"A": "[[B]]", "B": "[[C]]", "C": "c"}
        assert resolve_nested("[[A]]", replacements, max_depth=1) == "[[B]]"
        assert resolve_nested("[[A]]", replacements, max_depth=3) == "c"

    def test_default_depth_from_settings(self):
        chain = {f"V{i}": f"[[V{i + 1}]]" for i in range(10)}
        chain["V10"] = "eind"
        # Five passes by default
        assert resolve_nested("[[V0]]", chain) == "[[V5]]"

    def test_unknown_tokens_not_logged(self, caplog):
        with caplog.at_level(logging.WARNING):
            resolve_nested("[[Onbekend]]", {})
        assert caplog.text == ""

    @pytest.mark.parametrize("text", [None, ""])
    def test_degenerate_text(self, text):
        assert resolve_nested(text, {"A": "a"}) == text
