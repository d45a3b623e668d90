"""Tests for promptexpand.pipeline module."""

from promptexpand.errors import ErrorKind
from promptexpand.pipeline import describe, get_execution_prompts, parse_pipeline

CATALOG = {"background": ["castle", "forest", "beach"], "hero": ["knight"]}


class TestParsePipeline:
    """Tests for parse_pipeline."""

    def test_plain_steps(self):
        r = parse_pipeline("wizard in forest | isolate subject | add castle background")
        assert r.is_valid
        assert r.is_pipeline
        assert r.total_count == 3
        assert r.units == ("wizard in forest", "isolate subject", "add castle background")

    def test_step_indices_are_one_based(self):
        r = parse_pipeline("a | b")
        assert [s.index for s in r.steps] == [1, 2]
        assert [s.text for s in r.steps] == ["a", "b"]

    def test_step_multiplicities_do_not_multiply(self):
        r = parse_pipeline("base prompt | pick one of [red, blue, green] | finalize")
        assert r.is_valid
        assert r.total_count == 3
        assert r.units[1] == "pick one of red"
        assert r.steps[1].variant_count == 3
        assert "Step 2 has 3 variations but only first will be used in pipeline" in r.warnings

    def test_wildcard_step_uses_first_entry(self):
        r = parse_pipeline("_hero_ portrait | add _background_", CATALOG)
        assert r.units == ("knight portrait", "add castle")
        assert any(w.startswith("Step 2 has 3 variations") for w in r.warnings)

    def test_step_warnings_are_prefixed(self):
        r = parse_pipeline("_hero_ and _background_ | done", CATALOG)
        assert "Step 1: Cross-combination: 2 wild cards combined" in r.warnings

    def test_steps_are_not_deduplicated(self):
        r = parse_pipeline("same | same | same")
        assert r.units == ("same", "same", "same")

    def test_missing_wildcard_in_step_fails_closed(self):
        r = parse_pipeline("a | add _dragon_ | c", CATALOG)
        assert not r.is_valid
        assert r.units == ()
        assert r.total_count == 0
        assert r.errors[0].startswith("Step 2: Missing wild cards: _dragon_")
        assert r.diagnostics[0].kind is ErrorKind.UNRESOLVED_REFERENCE

    def test_bracket_error_in_step(self):
        r = parse_pipeline("a | b [x, y | c")
        assert not r.is_valid
        assert r.units == ()
        assert "Step 2" in r.errors[0]
        assert "Missing closing bracket" in r.errors[0]

    def test_empty_step(self):
        r = parse_pipeline("a |  | c")
        assert not r.is_valid
        assert r.is_pipeline
        assert "position 2" in r.errors[0]

    def test_long_pipeline_advisories(self):
        r = parse_pipeline(" | ".join(f"s{i}" for i in range(11)))
        assert r.is_valid
        assert r.total_count == 11
        assert "Long pipeline detected: 11 steps may take significant time" in r.warnings
        assert "11-step pipeline will use 11 generations" in r.warnings

    def test_no_pipe_is_single_unit(self):
        r = parse_pipeline("A [red, blue] car")
        assert not r.is_pipeline
        assert r.units == ("A red car", "A blue car")


class TestExecutionPrompts:
    """Tests for get_execution_prompts."""

    def test_first_variant_per_step(self):
        r = parse_pipeline("base | [red, blue] tint | finish")
        assert get_execution_prompts(r) == ["base", "red tint", "finish"]

    def test_invalid_gives_nothing(self):
        assert get_execution_prompts(parse_pipeline("a || b")) == []

    def test_flat_result_gives_units(self):
        r = parse_pipeline("[a, b]")
        assert get_execution_prompts(r) == ["a", "b"]


class TestDescribe:
    """Tests for describe()."""

    def test_pipeline(self):
        assert describe(parse_pipeline("a | b")) == "2-step pipeline → 2 images"

    def test_invalid(self):
        assert describe(parse_pipeline("a | ")) == "Invalid pipeline syntax"

    def test_single(self):
        assert describe(parse_pipeline("a")) == "Single generation"
