"""Unit tests for the constraint accumulator."""

import logging

import pytest

from search_light.domain.model import Filter, Operator
from search_light.search.constraints import ConstraintSet, parse_constraint, parse_keys


@pytest.mark.unit
class TestParseConstraint:
    def test_text_is_returned_as_is(self):
        assert parse_constraint("apple pie") == "apple pie"

    def test_three_element_filter(self):
        assert parse_constraint(["n", ">=", 5]) == Filter("n", Operator.GTE, 5)

    def test_two_element_filter_implies_loose_equality(self):
        assert parse_constraint(("n", 5)) == Filter("n", Operator.LOOSE_EQ, 5)

    def test_named_fields(self):
        assert parse_constraint({"key": "n", "operator": "<", "value": 2}) == Filter("n", Operator.LT, 2)

    def test_named_fields_without_value(self):
        assert parse_constraint({"key": "n", "operator": 2}) == Filter("n", Operator.LOOSE_EQ, 2)

    def test_named_fields_without_operator(self):
        assert parse_constraint({"key": "n", "value": 2}) == Filter("n", Operator.LOOSE_EQ, 2)

    def test_filter_instance_passes_through(self):
        flt = Filter("n", Operator.GT, 1)
        assert parse_constraint(flt) is flt

    def test_unknown_operator_is_kept_raw(self):
        flt = parse_constraint(["n", "~=", 5])
        assert flt.operator == "~="
        assert not flt.is_valid

    @pytest.mark.parametrize("constraint", [42, None, 3.5, ["only-one"], ["a", "b", "c", "d"]])
    def test_invalid_shapes_warn(self, constraint, caplog: pytest.LogCaptureFixture):
        caplog.set_level(logging.WARNING)
        assert parse_constraint(constraint) is None
        assert "Invalid" in caplog.text

    def test_mapping_without_key_warns(self, caplog: pytest.LogCaptureFixture):
        caplog.set_level(logging.WARNING)
        assert parse_constraint({"operator": "==", "value": 1}) is None
        assert "Invalid filter mapping" in caplog.text

    @pytest.mark.parametrize("constraint", [[["n"], 1], [{"n": 1}, ">", 0], {"key": ["n"], "value": 1}])
    def test_unhashable_filter_key_warns(self, constraint, caplog: pytest.LogCaptureFixture):
        caplog.set_level(logging.WARNING)
        assert parse_constraint(constraint) is None
        assert "Invalid filter key type" in caplog.text


@pytest.mark.unit
class TestParseKeys:
    def test_single_string_key(self):
        assert parse_keys("name") == ["name"]

    def test_single_integer_key(self):
        assert parse_keys(1) == [1]

    def test_iterable_of_keys(self):
        assert parse_keys(("name", "city")) == ["name", "city"]

    def test_invalid_keys_warn(self, caplog: pytest.LogCaptureFixture):
        caplog.set_level(logging.WARNING)
        assert parse_keys(None) is None
        assert "Invalid keys type" in caplog.text

    def test_unhashable_key_in_iterable_warns(self, caplog: pytest.LogCaptureFixture):
        caplog.set_level(logging.WARNING)
        assert parse_keys(["name", ["city"]]) is None
        assert "Invalid key type: list" in caplog.text


@pytest.mark.unit
class TestConstraintSet:
    def test_text_is_trimmed_and_space_joined(self):
        constraints = ConstraintSet()
        constraints.add("  apple ")
        constraints.add("pie")
        assert constraints.search_text == "apple pie"

    def test_replace_clears_text_and_filters(self):
        constraints = ConstraintSet()
        constraints.add("apple")
        constraints.add(["n", 1])
        constraints.replace("tart")
        assert constraints.search_text == "tart"
        assert constraints.filters == []

    def test_rejected_replace_keeps_previous_state(self):
        constraints = ConstraintSet()
        constraints.add("apple")
        assert constraints.replace(7) is False
        assert constraints.search_text == "apple"

    def test_terms_are_lowercased_unless_case_sensitive(self):
        constraints = ConstraintSet()
        constraints.add("Apple  PIE")
        assert constraints.terms(case_sensitive=False) == ["apple", "pie"]
        assert constraints.terms(case_sensitive=True) == ["Apple", "PIE"]

    def test_terms_recomputed_after_text_changes(self):
        constraints = ConstraintSet()
        constraints.add("one")
        assert constraints.terms(False) == ["one"]
        constraints.add("two")
        assert constraints.terms(False) == ["one", "two"]

    def test_threshold_counts_filters_and_terms(self):
        constraints = ConstraintSet()
        assert constraints.threshold(0, False) == 0
        constraints.add(["a", 1])
        constraints.add(["b", ">", 2])
        assert constraints.threshold(0, False) == 2
        constraints.add("word another")
        assert constraints.threshold(1, False) == 4

    def test_invalid_operator_warns_but_is_kept(self, caplog: pytest.LogCaptureFixture):
        caplog.set_level(logging.WARNING)
        constraints = ConstraintSet()
        assert constraints.add(["n", "=>", 5]) is True
        assert len(constraints.filters) == 1
        assert "Invalid filter operator" in caplog.text

    def test_keys_replace_and_extend(self):
        constraints = ConstraintSet()
        constraints.set_keys("name")
        constraints.add_keys(["city"])
        assert constraints.keys == ["name", "city"]
        constraints.set_keys(["age"])
        assert constraints.keys == ["age"]

    def test_is_constrained(self):
        constraints = ConstraintSet()
        assert not constraints.is_constrained(False)
        constraints.add("   ")
        assert not constraints.is_constrained(False)
        constraints.add(["n", 1])
        assert constraints.is_constrained(False)
