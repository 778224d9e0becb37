"""
Approximate inference by rejection sampling.

Each trial samples every variable in topological order from its CPT given
the parents sampled so far, and is thrown away as soon as an evidence
variable comes out different from its observed value. The posterior of the
query is the fraction of accepted trials in which it came out true.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np

from bninfer.errors import InconsistentEvidenceError, NoAcceptedSamplesError
from bninfer.inference.base import EvidenceLike, Inferencer, NetworkLike, in_evidence
from bninfer.types import DEFAULT_DECIMALS, Assignment, Distribution, RandomVariable, VariableKey

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_LIMIT = 10_000


@dataclass
class SampleCounts:
    """
    Per-run accumulator of rejection-sampling outcomes.

    Attributes:
        trials: Number of trials run, accepted or not.
        accepted: Number of trials consistent with the evidence.
        true_counts: For each variable name, the number of accepted trials
            in which it was true.
    """

    trials: int = 0
    accepted: int = 0
    true_counts: Counter = field(default_factory=Counter)

    def record(self, sample: Assignment) -> None:
        self.trials += 1
        self.accepted += 1
        for name, value in sample.items():
            if value is True:
                self.true_counts[name] += 1

    def reject(self) -> None:
        self.trials += 1

    def merge(self, other: "SampleCounts") -> "SampleCounts":
        return SampleCounts(
            trials=self.trials + other.trials,
            accepted=self.accepted + other.accepted,
            true_counts=self.true_counts + other.true_counts,
        )

    def __add__(self, other: "SampleCounts") -> "SampleCounts":
        if not isinstance(other, SampleCounts):
            return NotImplemented
        return self.merge(other)

    @property
    def acceptance_rate(self) -> float:
        if self.trials == 0:
            return 0.0
        return self.accepted / self.trials


def contradicts_evidence(evidence: Assignment, name: str, value: bool) -> bool:
    """Return True if ``name`` is evidence and ``value`` differs from the observation."""
    return in_evidence(name, evidence) and evidence[name] != value


class RejectionSampler(Inferencer):
    """
    Rejection sampling for boolean-valued networks.

    Args:
        sample_limit: Number of trials per query.
        seed: Seed for ``numpy.random.default_rng``; a new generator is made
            for every ``ask`` so seeded queries are reproducible.
        decimals: Rounding applied to the returned distribution.
    """

    def __init__(
        self,
        sample_limit: int = DEFAULT_SAMPLE_LIMIT,
        seed: Optional[int] = None,
        decimals: Optional[int] = DEFAULT_DECIMALS,
    ) -> None:
        super().__init__(decimals=decimals)
        if isinstance(sample_limit, bool) or int(sample_limit) != sample_limit or sample_limit <= 0:
            raise ValueError(f"sample_limit must be a positive integer, got {sample_limit!r}")
        self.sample_limit = int(sample_limit)
        self.seed = seed

    def ask(
        self,
        network: NetworkLike,
        query: VariableKey,
        evidence: EvidenceLike = None,
    ) -> Distribution:
        query_var, e = self.prepare(network, query, evidence)
        if not query_var.is_boolean:
            raise InconsistentEvidenceError(
                f"Rejection sampling needs a boolean query variable, {query_var.name!r} is not"
            )

        counts = self.sample_counts(network, e, rng=np.random.default_rng(self.seed))
        logger.debug(
            "Accepted %d of %d trials for query %s", counts.accepted, counts.trials, query_var.name
        )
        dist = self.distribution_of(query_var, counts)
        dist.normalize()
        return self.present(dist)

    def sample_counts(
        self,
        network: NetworkLike,
        evidence: Assignment,
        rng: Optional[np.random.Generator] = None,
        n_trials: Optional[int] = None,
    ) -> SampleCounts:
        """
        Run independent trials and count the accepted ones.

        Args:
            network: Boolean network to sample from.
            evidence: Observed values; each trial works on its own copy.
            rng: Random generator. Defaults to one seeded with ``self.seed``.
            n_trials: Number of trials. Defaults to ``sample_limit``.

        Returns:
            Accumulated counts for this batch.
        """
        if rng is None:
            rng = np.random.default_rng(self.seed)
        if n_trials is None:
            n_trials = self.sample_limit
        variables = tuple(network.topological_order())

        counts = SampleCounts()
        for _ in range(int(n_trials)):
            sample = self._trial(network, variables, evidence, rng)
            if sample is None:
                counts.reject()
            else:
                counts.record(sample)
        return counts

    @staticmethod
    def _trial(
        network: NetworkLike,
        variables: Sequence[RandomVariable],
        evidence: Assignment,
        rng: np.random.Generator,
    ) -> Optional[Assignment]:
        sample = evidence.copy()
        for var in variables:
            # Setting True reads P(var=True | parents) whatever var held before.
            sample.set(var, True)
            p_true = network.conditional_probability(var, sample)
            outcome = bool(rng.random() < p_true)
            sample.set(var, outcome)
            if contradicts_evidence(evidence, var.name, outcome):
                return None
        return sample

    @staticmethod
    def distribution_of(query: RandomVariable, counts: SampleCounts) -> Distribution:
        """
        Estimate P(query) from accepted-trial counts.

        Raises:
            NoAcceptedSamplesError: If no trial was accepted.
        """
        if counts.accepted == 0:
            raise NoAcceptedSamplesError(
                f"No sample out of {counts.trials} was consistent with the evidence"
            )
        p_true = counts.true_counts.get(query.name, 0) / counts.accepted
        dist = Distribution()
        dist[f"{query.name} true"] = p_true
        dist[f"{query.name} false"] = 1.0 - p_true
        return dist


def approximate_ask(
    network: NetworkLike,
    query: VariableKey,
    evidence: EvidenceLike = None,
    sample_limit: int = DEFAULT_SAMPLE_LIMIT,
    seed: Optional[int] = None,
    decimals: Optional[int] = DEFAULT_DECIMALS,
) -> Distribution:
    """Posterior of ``query`` given ``evidence`` estimated by rejection sampling."""
    return RejectionSampler(sample_limit=sample_limit, seed=seed, decimals=decimals).ask(
        network, query, evidence
    )
