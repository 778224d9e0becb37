"""
Unit tests for plotting helpers.
"""

import matplotlib

matplotlib.use("Agg")

import pytest

from bninfer import exact_ask
from bninfer.network import build_network
from bninfer.types import RandomVariable
from bninfer.visualization import DistributionVisualizer


def _chain():
    return build_network(
        [
            (RandomVariable.boolean("A"), (), 0.5),
            (RandomVariable.boolean("B"), ("A",), {True: 0.9, False: 0.2}),
            (RandomVariable.boolean("C"), ("B",), {True: 0.7, False: 0.1}),
        ]
    )


def test_plot_distribution_returns_axes() -> None:
    ax = DistributionVisualizer.plot_distribution(exact_ask(_chain(), "A", {"C": True}), title="P(A | C)")
    assert ax is not None
    assert len(ax.patches) == 2
    with pytest.raises(ValueError, match="cannot be empty"):
        DistributionVisualizer.plot_distribution({})


def test_plot_convergence_returns_axes() -> None:
    ax = DistributionVisualizer.plot_convergence([100, 1000], [0.08, 0.01], tolerance=0.05)
    assert ax.get_xscale() == "log"
    with pytest.raises(ValueError, match="same length"):
        DistributionVisualizer.plot_convergence([100, 1000], [0.1])


def test_plot_network_runs() -> None:
    ax = DistributionVisualizer.plot_network(_chain())
    assert ax is not None
