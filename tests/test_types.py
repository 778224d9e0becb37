"""
Unit tests for the core data types.

Tests RandomVariable identity, Assignment overwrite and copy semantics,
Distribution normalization and presentation rounding.
"""

import math

import pytest

from bninfer.errors import EmptyDomainError, InconsistentEvidenceError, UndefinedProbabilityError
from bninfer.types import Assignment, Distribution, RandomVariable, round_half_up


class TestRandomVariable:
    """Test suite for RandomVariable."""

    def test_identity_is_name(self) -> None:
        a = RandomVariable("Rain", [True, False])
        b = RandomVariable("Rain", ["yes", "no"])
        assert a == b
        assert hash(a) == hash(b)
        assert a != RandomVariable("Snow", [True, False])

    def test_boolean_constructor(self) -> None:
        rv = RandomVariable.boolean("A")
        assert rv.domain == (True, False)
        assert rv.is_boolean
        assert not RandomVariable("W", ["sun", "rain"]).is_boolean

    def test_validation(self) -> None:
        with pytest.raises(ValueError, match="cannot be empty"):
            RandomVariable("  ", [True])
        with pytest.raises(EmptyDomainError):
            RandomVariable("X", [])
        with pytest.raises(ValueError, match="duplicate"):
            RandomVariable("X", ["a", "a"])

    def test_index_of(self) -> None:
        rv = RandomVariable("W", ["sun", "rain", "snow"])
        assert rv.index_of("snow") == 2
        with pytest.raises(InconsistentEvidenceError):
            rv.index_of("hail")

    def test_immutable(self) -> None:
        rv = RandomVariable.boolean("A")
        with pytest.raises(AttributeError):
            rv.name = "B"  # type: ignore[misc]


class TestAssignment:
    """Test suite for Assignment."""

    def test_set_overwrites_instead_of_duplicating(self) -> None:
        a = RandomVariable.boolean("A")
        e = Assignment()
        e.set(a, True)
        e.set(RandomVariable.boolean("A"), False)
        assert len(e) == 1
        assert e[a] is False

    def test_lookup_by_variable_or_name(self) -> None:
        a = RandomVariable.boolean("A")
        e = Assignment([(a, True)])
        assert "A" in e
        assert a in e
        assert e["A"] is True
        assert e.get("B") is None
        assert 3 not in e

    def test_copy_is_independent(self) -> None:
        a = RandomVariable.boolean("A")
        b = RandomVariable.boolean("B")
        e = Assignment([(a, True)])
        c = e.copy()
        c.set(b, False)
        c.set(a, False)
        assert e.to_dict() == {"A": True}
        assert c.to_dict() == {"A": False, "B": False}
        assert c.variable("B") is b

    def test_setitem_by_name(self) -> None:
        a = RandomVariable.boolean("A")
        e = Assignment.from_mapping({a: True})
        e["A"] = False
        assert e["A"] is False
        with pytest.raises(KeyError):
            e["B"] = True

    def test_iteration_order(self) -> None:
        names = ["C", "A", "B"]
        e = Assignment((RandomVariable.boolean(n), True) for n in names)
        assert list(e) == names
        assert [v.name for v in e.variables()] == names


class TestDistribution:
    """Test suite for Distribution."""

    def test_normalize(self) -> None:
        d = Distribution({True: 3.0, False: 1.0})
        d.normalize()
        assert d[True] == 0.75
        assert d[False] == 0.25
        assert math.isclose(d.total(), 1.0)

    def test_normalize_zero_mass(self) -> None:
        with pytest.raises(UndefinedProbabilityError):
            Distribution({True: 0.0, False: 0.0}).normalize()
        with pytest.raises(UndefinedProbabilityError):
            Distribution().normalize()

    def test_negative_mass_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            Distribution({"x": -0.1})

    def test_rounded_is_a_copy(self) -> None:
        d = Distribution({True: 2.0, False: 1.0}).normalize()
        r = d.rounded(3)
        assert r.to_dict() == {True: 0.667, False: 0.333}
        assert d[True] != 0.667

    def test_compares_as_mapping(self) -> None:
        assert Distribution([("a", 0.5), ("b", 0.5)]) == {"a": 0.5, "b": 0.5}


def test_round_half_up() -> None:
    assert round_half_up(0.125, 2) == 0.13
    assert round_half_up(0.8181818, 3) == 0.818
    # 2.675 is stored just below the half.
    assert round_half_up(2.675, 2) == 2.67
    assert round_half_up(0.7, 3) == 0.7
