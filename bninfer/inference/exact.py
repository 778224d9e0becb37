"""
Exact inference by enumeration.

The posterior of the query is computed by summing the full joint over every
hidden variable, visiting variables in topological order so each node's
parents are fixed before its own CPT is read.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from bninfer.errors import EmptyDomainError
from bninfer.inference.base import EvidenceLike, Inferencer, NetworkLike
from bninfer.types import DEFAULT_DECIMALS, Assignment, Distribution, RandomVariable, VariableKey

logger = logging.getLogger(__name__)


class ExactInferencer(Inferencer):
    """
    Enumeration-ask over a discrete Bayesian network.

    Works for any finite domains. Cost is exponential in the number of hidden
    variables; nothing is cached between branches.
    """

    def ask(
        self,
        network: NetworkLike,
        query: VariableKey,
        evidence: EvidenceLike = None,
    ) -> Distribution:
        query_var, e = self.prepare(network, query, evidence)
        if not query_var.domain:
            raise EmptyDomainError(f"Query variable {query_var.name!r} has an empty domain")
        variables = tuple(network.topological_order())

        dist = Distribution()
        for value in query_var.domain:
            extended = e.copy()
            extended.set(query_var, value)
            dist[value] = self.enumerate(network, variables, extended)
            logger.debug("P(%s=%r, e) = %g", query_var.name, value, dist[value])

        dist.normalize()
        return self.present(dist)

    def enumerate(
        self,
        network: NetworkLike,
        variables: Sequence[RandomVariable],
        assignment: Assignment,
        start: int = 0,
    ) -> float:
        """
        Sum the joint probability of ``assignment`` over unassigned variables.

        Args:
            network: Network to read CPTs from.
            variables: Variables in topological order.
            assignment: Values fixed so far. Not mutated.
            start: Index of the first variable still to visit.

        Returns:
            Unnormalized probability mass.
        """
        if start >= len(variables):
            return 1.0

        y = variables[start]
        if y in assignment:
            p = network.conditional_probability(y, assignment)
            return p * self.enumerate(network, variables, assignment, start + 1)

        if not y.domain:
            raise EmptyDomainError(f"Variable {y.name!r} has no domain values to enumerate over")
        total = 0.0
        for value in y.domain:
            branch = assignment.copy()
            branch.set(y, value)
            p = network.conditional_probability(y, branch)
            total += p * self.enumerate(network, variables, branch, start + 1)
        return total


def exact_ask(
    network: NetworkLike,
    query: VariableKey,
    evidence: EvidenceLike = None,
    decimals: Optional[int] = DEFAULT_DECIMALS,
) -> Distribution:
    """Posterior of ``query`` given ``evidence`` by enumeration."""
    return ExactInferencer(decimals=decimals).ask(network, query, evidence)
