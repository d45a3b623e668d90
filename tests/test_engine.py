"""Tests for promptexpand.engine module: end-to-end expansion properties."""

import pytest

from promptexpand.config import ExpansionConfig
from promptexpand.engine import expand, expand_with_cost
from promptexpand.errors import ErrorKind, PromptSyntaxError
from promptexpand.kinds import Bracketed, Pipeline, Plain, Wildcarded, classify
from promptexpand.wildcards import WildcardDefinition


class TestFlat:
    """Plain, bracket and wildcard prompts."""

    def test_identity(self):
        r = expand("plain text with no syntax", {})
        assert r.is_valid
        assert r.units == ("plain text with no syntax",)
        assert r.total_count == 1
        assert not r.is_pipeline

    def test_bracket_expansion(self):
        r = expand("A [red, blue, green] car", {})
        assert r.is_valid
        assert r.units == ("A red car", "A blue car", "A green car")
        assert r.total_count == 3

    def test_bracket_malformed(self):
        r = expand("A [red, blue car", {})
        assert not r.is_valid
        assert r.units == ()
        assert "missing closing bracket" in r.errors[0].lower()
        assert r.diagnostics[0].kind is ErrorKind.SYNTAX

    def test_bracket_overflow(self):
        r = expand("[" + ", ".join("abcdefghijk") + "]")
        assert not r.is_valid
        assert r.units == ()
        assert r.total_count == 0
        assert r.diagnostics[0].kind is ErrorKind.OVERFLOW

    def test_wildcard_expansion(self):
        r = expand("A _character_ on a journey", {"character": ["knight", "wizard", "rogue"]})
        assert r.is_valid
        assert r.total_count == 3
        assert len(set(r.units)) == 3
        assert r.units[0] == "A knight on a journey"

    def test_definitions_catalog(self):
        cat = [WildcardDefinition("character", ("knight", "wizard"))]
        assert expand("_character_", cat).units == ("knight", "wizard")

    def test_cross_combination_deterministic(self):
        cat = {"character": ["knight", "wizard"], "location": ["forest", "castle"]}
        r = expand("_character_ in _location_", cat)
        assert r.total_count == 4
        assert set(r.units) == {
            "knight in forest",
            "knight in castle",
            "wizard in forest",
            "wizard in castle",
        }
        again = expand("_character_ in _location_", cat)
        assert again.units == r.units
        assert "\n".join(again.units).encode() == "\n".join(r.units).encode()

    def test_missing_wildcard_fails_closed(self):
        r = expand("A _dragon_ appears", {})
        assert not r.is_valid
        assert r.units == ()
        assert "_dragon_" in r.errors[0]
        assert r.diagnostics[0].kind is ErrorKind.UNRESOLVED_REFERENCE

    def test_partial_resolution_still_fails(self):
        r = expand("_hero_ meets _dragon_", {"hero": ["knight"]})
        assert not r.is_valid
        assert r.units == ()
        assert "_hero_" not in r.errors[0]

    def test_empty_definition_fails(self):
        r = expand("_hero_", {"hero": []})
        assert not r.is_valid


class TestPrecedence:
    """Wildcards win over brackets within one unit; bracket text stays literal."""

    CATALOG = {"character": ["knight", "wizard"]}

    def test_bracket_text_literal(self):
        r = expand("_character_ wearing [red, blue] armor", self.CATALOG)
        assert r.is_valid
        assert r.units == (
            "knight wearing [red, blue] armor",
            "wizard wearing [red, blue] armor",
        )
        assert r.total_count == 2

    def test_malformed_bracket_is_literal_too(self):
        r = expand("_character_ [red", self.CATALOG)
        assert r.is_valid
        assert r.units == ("knight [red", "wizard [red")

    def test_precedence_is_per_step(self):
        r = expand("_character_ [a, b] | [x, y] finish", self.CATALOG)
        assert r.units == ("knight [a, b]", "x finish")


class TestPipeline:
    """Pipeline prompts through expand()."""

    def test_additive(self):
        r = expand("wizard in forest | isolate subject | add castle background")
        assert r.is_pipeline
        assert r.total_count == 3
        assert len(r.units) == 3
        assert r.units == ("wizard in forest", "isolate subject", "add castle background")

    def test_ignores_step_multiplicities(self):
        r = expand("base prompt | pick one of [red, blue, green] | finalize")
        assert r.total_count == 3
        assert any(
            "Step 2" in w and "3 variations but only first will be used" in w for w in r.warnings
        )

    def test_syntax_error_flags_pipeline(self):
        r = expand("a || b")
        assert not r.is_valid
        assert r.is_pipeline
        assert r.units == ()

    def test_step_ceiling_from_config(self):
        r = expand("a | b | c", config=ExpansionConfig(max_pipeline_steps=2))
        assert not r.is_valid
        assert "Too many steps: 3" in r.errors[0]


class TestClassify:
    """Tests for the tagged prompt kinds."""

    def test_kinds(self):
        assert isinstance(classify("plain"), Plain)
        assert isinstance(classify("[a, b]"), Bracketed)
        assert isinstance(classify("_x_ [a"), Wildcarded)
        p = classify("a | [b, c] | _d_")
        assert isinstance(p, Pipeline)
        assert [type(s) for s in p.steps] == [Plain, Bracketed, Wildcarded]

    def test_result_carries_kind(self):
        assert isinstance(expand("[a, b]").kind, Bracketed)

    def test_malformed_raises(self):
        with pytest.raises(PromptSyntaxError):
            classify("[a, b] [c]")


class TestExpandWithCost:
    """Tests for expand_with_cost."""

    def test_no_cost(self):
        r, est = expand_with_cost("[a, b]")
        assert est is None
        assert r.total_count == 2

    def test_argument_cost(self):
        _, est = expand_with_cost("[a, b]", per_unit_cost=3)
        assert est.total_cost == 6

    def test_config_cost(self):
        _, est = expand_with_cost("a | b", config=ExpansionConfig(per_unit_cost=2.5))
        assert est.total_cost == 5.0
