"""
Plotting helpers for posteriors, sampling convergence and network structure.
"""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

from bninfer.network import BayesianNetwork


class DistributionVisualizer:
    """
    Matplotlib views of inference results.

    Every method draws on ``ax`` when given, otherwise on a new figure, and
    returns the axes.
    """

    @staticmethod
    def plot_distribution(
        dist: Mapping[object, float],
        title: Optional[str] = None,
        ax: Optional[plt.Axes] = None,
    ) -> plt.Axes:
        """
        Bar chart of a distribution in its own key order.

        Raises:
            ValueError: If the distribution is empty.
        """
        if not dist:
            raise ValueError("Distribution cannot be empty")
        if ax is None:
            _, ax = plt.subplots(figsize=(6, 4))

        labels = [str(k) for k in dist.keys()]
        values = np.asarray([float(v) for v in dist.values()], dtype=float)
        x = np.arange(len(labels))
        ax.bar(x, values, color="steelblue")
        ax.set_xticks(x)
        ax.set_xticklabels(labels)
        ax.set_ylim(0.0, 1.0)
        ax.set_ylabel("Probability")
        for xi, v in zip(x, values):
            ax.text(xi, v + 0.02, f"{v:.3f}", ha="center", va="bottom", fontsize=9)
        if title:
            ax.set_title(title)
        return ax

    @staticmethod
    def plot_convergence(
        sample_limits: Sequence[int],
        errors: Sequence[float],
        tolerance: Optional[float] = None,
        ax: Optional[plt.Axes] = None,
    ) -> plt.Axes:
        """
        Absolute error of the sampling estimate against the number of trials.

        Raises:
            ValueError: If the two sequences differ in length or are empty.
        """
        if len(sample_limits) == 0:
            raise ValueError("sample_limits cannot be empty")
        if len(sample_limits) != len(errors):
            raise ValueError("sample_limits and errors must have same length")
        if ax is None:
            _, ax = plt.subplots(figsize=(7, 4))

        ax.plot(np.asarray(sample_limits), np.asarray(errors, dtype=float), marker="o")
        ax.set_xscale("log")
        ax.set_xlabel("Samples")
        ax.set_ylabel("|estimate - exact|")
        if tolerance is not None:
            ax.axhline(float(tolerance), color="grey", linestyle="--", linewidth=1)
        return ax

    @staticmethod
    def plot_network(
        network: BayesianNetwork,
        ax: Optional[plt.Axes] = None,
    ) -> plt.Axes:
        """Draw the network DAG, parents above children."""
        import networkx as nx

        if ax is None:
            _, ax = plt.subplots(figsize=(8, 6))

        graph = network.graph
        # Layer by longest path from a root so edges point downwards.
        depth = {}
        for var in network.topological_order():
            parents = network.parents(var)
            depth[var.name] = 1 + max((depth[p.name] for p in parents), default=-1)
        for name, d in depth.items():
            graph.nodes[name]["layer"] = d
        pos = nx.multipartite_layout(graph, subset_key="layer", align="horizontal")
        pos = {name: (x, -y) for name, (x, y) in pos.items()}

        nx.draw_networkx(
            graph,
            pos=pos,
            ax=ax,
            node_color="lightsteelblue",
            node_size=1200,
            arrows=True,
            font_size=9,
        )
        ax.set_axis_off()
        return ax
