#!/usr/bin/env python3
"""
Example 1: Exact and approximate inference on the burglary network

This example demonstrates the core functionality:
- Building a network from conditional probability tables
- Querying the exact posterior by enumeration
- Estimating the same posterior by rejection sampling
"""

import sys
import os

# The parent directory is added to the import path.
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from bninfer import RandomVariable, approximate_ask, build_network, exact_ask
from bninfer.io import format_distribution, parse_evidence_args

print("=" * 60)
print("Example 1: Burglary network")
print("=" * 60)

# The network is defined parents first.
network = build_network(
    [
        (RandomVariable.boolean("Burglary"), (), 0.001),
        (RandomVariable.boolean("Earthquake"), (), 0.002),
        (
            RandomVariable.boolean("Alarm"),
            ("Burglary", "Earthquake"),
            {
                (True, True): 0.95,
                (True, False): 0.94,
                (False, True): 0.29,
                (False, False): 0.001,
            },
        ),
        (RandomVariable.boolean("JohnCalls"), ("Alarm",), {True: 0.90, False: 0.05}),
        (RandomVariable.boolean("MaryCalls"), ("Alarm",), {True: 0.70, False: 0.01}),
    ]
)

# Evidence is read the way a command line would supply it.
evidence = parse_evidence_args(["JohnCalls", "true", "MaryCalls", "true"])

exact = exact_ask(network, "Burglary", evidence)
print(f"\nExact P(Burglary | {evidence}):")
print(f"  {format_distribution(exact)}")

# Both calls are rare, so many trials are needed for a usable estimate.
approx = approximate_ask(network, "Burglary", evidence, sample_limit=200_000, seed=2024)
print("\nRejection sampling (200000 trials):")
print(f"  {format_distribution(approx)}")

print("\n" + "=" * 60)
print("Example completed successfully.")
print("=" * 60)
