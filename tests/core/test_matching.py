"""Tests for napdb.core.matching module.

Covers:
- compare_values: None handling, same-kind, int/float, string fallback
- matches: missing keys, empty criteria, multi-key criteria
"""

import pytest

from napdb.core.matching import canonical_string, compare_values, matches


class TestCompareValues:
    def test_both_none(self):
        assert compare_values(None, None)

    def test_one_none(self):
        assert not compare_values(None, 0)
        assert not compare_values("", None)

    def test_same_kind(self):
        assert compare_values("a", "a")
        assert not compare_values("a", "b")
        assert compare_values(20, 20)
        assert not compare_values(20, 21)
        assert compare_values(True, True)
        assert not compare_values(True, False)

    @pytest.mark.parametrize("a, b", [(20, 20.0), (20.0, 20), (0, -0.0)])
    def test_int_float_equal(self, a, b):
        assert compare_values(a, b)

    def test_int_float_not_equal(self):
        assert not compare_values(20, 20.5)

    def test_int_beyond_float_range(self):
        huge = 10**400
        assert not compare_values(huge, 1.0)
        assert not compare_values(1.0, huge)
        assert not compare_values(huge, float("inf"))
        assert compare_values(huge, huge)

    def test_string_fallback(self):
        """Incomparable kinds compare by canonical rendering."""
        assert compare_values(20, "20")
        assert compare_values(True, "true")
        assert not compare_values(True, "True")
        assert not compare_values(1, True)

    def test_unkinded_values_of_same_type(self):
        assert compare_values([1, 2], [1, 2])
        assert not compare_values([1, 2], [2, 1])


class TestCanonicalString:
    def test_bool_lowercase(self):
        assert canonical_string(True) == "true"
        assert canonical_string(False) == "false"

    def test_float_repr(self):
        assert canonical_string(20.0) == "20.0"

    def test_int_and_str(self):
        assert canonical_string(20) == "20"
        assert canonical_string("x") == "x"


class TestMatches:
    RECORD = {"uuid": "abc", "name": "Ansh Bajaj", "age": 20}

    def test_empty_criteria_matches(self):
        assert matches(self.RECORD, {})

    def test_single_key(self):
        assert matches(self.RECORD, {"age": 20})
        assert not matches(self.RECORD, {"age": 22})

    def test_numeric_criteria_either_kind(self):
        assert matches(self.RECORD, {"age": 20.0})

    def test_all_keys_must_match(self):
        assert matches(self.RECORD, {"age": 20, "name": "Ansh Bajaj"})
        assert not matches(self.RECORD, {"age": 20, "name": "Arpit Dubey"})

    def test_missing_key_is_no_match(self):
        assert not matches(self.RECORD, {"email": "anshbajaj07@gmail.com"})

    def test_missing_key_none_criterion_is_no_match(self):
        """Absent key never matches, even against None."""
        assert not matches(self.RECORD, {"email": None})
