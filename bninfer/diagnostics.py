from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np
from scipy.stats import norm

from bninfer.inference.base import EvidenceLike, NetworkLike
from bninfer.inference.exact import ExactInferencer
from bninfer.inference.sampling import RejectionSampler
from bninfer.types import VariableKey


def binomial_confidence_interval(successes: int, n: int, level: float = 0.95) -> Tuple[float, float]:
    """
    Wilson score interval for a binomial proportion.

    Raises:
        ValueError: If ``n`` is not positive or ``level`` is outside (0, 1).
    """
    n = int(n)
    if n <= 0:
        raise ValueError("n must be positive")
    if not (0.0 < float(level) < 1.0):
        raise ValueError("level must be in (0, 1)")
    if not (0 <= int(successes) <= n):
        raise ValueError("successes must be in [0, n]")
    z = float(norm.ppf(0.5 + float(level) / 2.0))
    p_hat = int(successes) / n
    denom = 1.0 + z**2 / n
    centre = (p_hat + z**2 / (2 * n)) / denom
    half = z * np.sqrt(p_hat * (1.0 - p_hat) / n + z**2 / (4 * n**2)) / denom
    return float(max(0.0, centre - half)), float(min(1.0, centre + half))


@dataclass(frozen=True)
class ConvergenceReport:
    """
    Agreement between the rejection-sampling estimate and the exact posterior.

    Only boolean queries are compared; ``exact`` and ``estimate`` are both
    P(query = True | evidence), unrounded.
    """

    exact: float
    estimate: float
    abs_error: float
    accepted: int
    trials: int
    acceptance_rate: float
    confidence_interval: Tuple[float, float]
    sum_to_one_error: float

    @property
    def within_interval(self) -> bool:
        lo, hi = self.confidence_interval
        return lo <= self.exact <= hi

    @staticmethod
    def from_runs(
        network: NetworkLike,
        query: VariableKey,
        evidence: EvidenceLike = None,
        *,
        sample_limit: int = 10_000,
        seed: Optional[int] = None,
        level: float = 0.95,
    ) -> "ConvergenceReport":
        exact_engine = ExactInferencer(decimals=None)
        exact = exact_engine.ask(network, query, evidence)
        sum_err = float(abs(float(np.sum(list(exact.values()))) - 1.0))

        sampler = RejectionSampler(sample_limit=sample_limit, seed=seed, decimals=None)
        query_var, e = sampler.prepare(network, query, evidence)
        counts = sampler.sample_counts(network, e)
        estimate = sampler.distribution_of(query_var, counts)[f"{query_var.name} true"]
        successes = counts.true_counts.get(query_var.name, 0)

        return ConvergenceReport(
            exact=float(exact[True]),
            estimate=float(estimate),
            abs_error=float(abs(exact[True] - estimate)),
            accepted=int(counts.accepted),
            trials=int(counts.trials),
            acceptance_rate=float(counts.acceptance_rate),
            confidence_interval=binomial_confidence_interval(successes, counts.accepted, level),
            sum_to_one_error=sum_err,
        )


def convergence_curve(
    network: NetworkLike,
    query: VariableKey,
    evidence: EvidenceLike = None,
    *,
    sample_limits: Sequence[int],
    seed: Optional[int] = None,
) -> np.ndarray:
    """Absolute error of the sampling estimate for each sample limit."""
    if not sample_limits:
        raise ValueError("sample_limits cannot be empty")
    errors = [
        ConvergenceReport.from_runs(network, query, evidence, sample_limit=int(n), seed=seed).abs_error
        for n in sample_limits
    ]
    return np.asarray(errors, dtype=float)
