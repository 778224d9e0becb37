#!/usr/bin/env python3
"""
Example 2: Convergence of rejection sampling

This example demonstrates:
- Comparing the sampling estimate with the exact posterior
- Reading acceptance rate and confidence interval from a diagnostics report
- Plotting the error curve and the network structure
"""

import sys
import os

# The parent directory is added to the import path.
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from bninfer import RandomVariable, build_network
from bninfer.diagnostics import ConvergenceReport, convergence_curve
from bninfer.visualization import DistributionVisualizer

print("=" * 60)
print("Example 2: Sprinkler network convergence")
print("=" * 60)

network = build_network(
    [
        (RandomVariable.boolean("Cloudy"), (), 0.5),
        (RandomVariable.boolean("Sprinkler"), ("Cloudy",), {True: 0.1, False: 0.5}),
        (RandomVariable.boolean("Rain"), ("Cloudy",), {True: 0.8, False: 0.2}),
        (
            RandomVariable.boolean("WetGrass"),
            ("Sprinkler", "Rain"),
            {
                (True, True): 0.99,
                (True, False): 0.90,
                (False, True): 0.90,
                (False, False): 0.0,
            },
        ),
    ]
)
evidence = {"WetGrass": True}

report = ConvergenceReport.from_runs(network, "Rain", evidence, sample_limit=10_000, seed=0)
print(f"\nExact P(Rain=true | WetGrass=true):    {report.exact:.4f}")
print(f"Estimated (10000 trials):              {report.estimate:.4f}")
print(f"Acceptance rate:                       {report.acceptance_rate:.3f}")
lo, hi = report.confidence_interval
print(f"95% interval:                          [{lo:.4f}, {hi:.4f}]")

limits = [100, 300, 1000, 3000, 10_000]
errors = convergence_curve(network, "Rain", evidence, sample_limits=limits, seed=0)
for n, err in zip(limits, errors):
    print(f"  n={n:6d}  |error|={err:.4f}")

# Figures are written next to this script.
out_dir = os.path.dirname(os.path.abspath(__file__))
fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 4))
DistributionVisualizer.plot_convergence(limits, errors, tolerance=0.05, ax=ax1)
DistributionVisualizer.plot_network(network, ax=ax2)
fig.tight_layout()
fig.savefig(os.path.join(out_dir, "sprinkler_convergence.png"), dpi=120)
plt.close(fig)

print("\n" + "=" * 60)
print("Example completed successfully.")
print("=" * 60)
