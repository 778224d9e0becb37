"""
Unit tests for sampling diagnostics.
"""

import numpy as np
import pytest

from bninfer.diagnostics import ConvergenceReport, binomial_confidence_interval, convergence_curve
from bninfer.network import BayesianNetwork, build_network
from bninfer.types import RandomVariable


def _chain() -> BayesianNetwork:
    return build_network(
        [
            (RandomVariable.boolean("A"), (), 0.5),
            (RandomVariable.boolean("B"), ("A",), {True: 0.9, False: 0.2}),
        ]
    )


class TestBinomialConfidenceInterval:
    """Test suite for the Wilson score interval."""

    def test_contains_point_estimate(self) -> None:
        lo, hi = binomial_confidence_interval(30, 100)
        assert lo < 0.3 < hi
        assert lo == pytest.approx(0.2189, abs=1e-3)
        assert hi == pytest.approx(0.3958, abs=1e-3)

    def test_extremes_stay_in_unit_interval(self) -> None:
        lo, hi = binomial_confidence_interval(0, 20)
        assert lo == pytest.approx(0.0, abs=1e-12)
        assert 0.0 < hi < 0.2
        lo, hi = binomial_confidence_interval(20, 20)
        assert hi == pytest.approx(1.0, abs=1e-12)

    def test_wider_at_higher_level(self) -> None:
        lo95, hi95 = binomial_confidence_interval(50, 100, level=0.95)
        lo99, hi99 = binomial_confidence_interval(50, 100, level=0.99)
        assert lo99 < lo95 and hi99 > hi95

    def test_validation(self) -> None:
        with pytest.raises(ValueError, match="n must be positive"):
            binomial_confidence_interval(0, 0)
        with pytest.raises(ValueError, match="level"):
            binomial_confidence_interval(1, 10, level=1.0)
        with pytest.raises(ValueError, match="successes"):
            binomial_confidence_interval(11, 10)


class TestConvergenceReport:
    """Test suite for ConvergenceReport."""

    def test_from_runs(self) -> None:
        report = ConvergenceReport.from_runs(_chain(), "A", {"B": True}, sample_limit=4000, seed=11)
        assert report.exact == pytest.approx(0.45 / 0.55)
        assert report.abs_error < 0.05
        assert report.trials == 4000
        assert report.acceptance_rate == pytest.approx(0.55, abs=0.05)
        assert report.sum_to_one_error < 1e-9
        lo, hi = report.confidence_interval
        assert lo <= report.estimate <= hi

    def test_convergence_curve(self) -> None:
        limits = [100, 1000, 4000]
        errors = convergence_curve(_chain(), "A", {"B": True}, sample_limits=limits, seed=5)
        assert isinstance(errors, np.ndarray)
        assert errors.shape == (3,)
        assert np.all(errors >= 0.0)
        assert errors[-1] < 0.05

    def test_convergence_curve_needs_limits(self) -> None:
        with pytest.raises(ValueError, match="cannot be empty"):
            convergence_curve(_chain(), "A", sample_limits=[])
