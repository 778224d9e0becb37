"""
Shared contract and validation for inference engines.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional, Protocol, Sequence, Tuple, Union

from bninfer.errors import InconsistentEvidenceError, UnknownVariableError
from bninfer.types import DEFAULT_DECIMALS, Assignment, Distribution, RandomVariable, VariableKey

EvidenceLike = Union[Assignment, Mapping[VariableKey, Any], None]


class NetworkLike(Protocol):
    """What an engine reads from a network."""

    def topological_order(self) -> Sequence[RandomVariable]:
        ...

    def conditional_probability(self, variable: RandomVariable, assignment: Assignment) -> float:
        ...


def in_evidence(name: str, evidence: Assignment) -> bool:
    """Return True if a variable with this name is assigned in ``evidence``."""
    return str(name) in evidence


def variables_by_name(network: NetworkLike) -> Dict[str, RandomVariable]:
    return {var.name: var for var in network.topological_order()}


def coerce_evidence(known: Mapping[str, RandomVariable], evidence: EvidenceLike) -> Assignment:
    """
    Build a fresh evidence assignment over the network's own variables.

    Args:
        known: Network variables keyed by name.
        evidence: ``Assignment``, mapping from name or variable to value, or None.

    Raises:
        UnknownVariableError: If evidence names a variable not in the network.
        InconsistentEvidenceError: If a value is outside the variable's domain.
    """
    out = Assignment()
    if evidence is None:
        return out
    for key, value in evidence.items():
        name = key.name if isinstance(key, RandomVariable) else str(key)
        var = known.get(name)
        if var is None:
            raise UnknownVariableError(f"Evidence variable {name!r} is not in the network")
        var.index_of(value)
        out.set(var, value)
    return out


class Inferencer(ABC):
    """
    Base class for inference algorithms over a Bayesian network.

    Subclasses compute the posterior distribution of a query variable given
    evidence. Validation of the query and evidence is shared here.
    """

    def __init__(self, decimals: Optional[int] = DEFAULT_DECIMALS) -> None:
        if decimals is not None and int(decimals) < 0:
            raise ValueError("decimals must be non-negative")
        self.decimals = None if decimals is None else int(decimals)

    @abstractmethod
    def ask(
        self,
        network: NetworkLike,
        query: VariableKey,
        evidence: EvidenceLike = None,
    ) -> Distribution:
        """
        Return the distribution of ``query`` given ``evidence``.

        Args:
            network: Network exposing a topological order and CPT lookups.
            query: Query variable or its name.
            evidence: Observed values; never mutated.

        Returns:
            Normalized distribution, rounded for presentation.
        """
        pass

    def prepare(
        self,
        network: NetworkLike,
        query: VariableKey,
        evidence: EvidenceLike,
    ) -> Tuple[RandomVariable, Assignment]:
        """
        Resolve the query against the network and copy the evidence.

        Raises:
            UnknownVariableError: If the query or an evidence variable is unknown.
            InconsistentEvidenceError: If the evidence assigns the query or an
                out-of-domain value.
        """
        known = variables_by_name(network)
        name = query.name if isinstance(query, RandomVariable) else str(query)
        query_var = known.get(name)
        if query_var is None:
            raise UnknownVariableError(f"Query variable {name!r} is not in the network")
        e = coerce_evidence(known, evidence)
        if in_evidence(query_var.name, e):
            raise InconsistentEvidenceError(
                f"Evidence must not assign the query variable {query_var.name!r}"
            )
        return query_var, e

    def present(self, dist: Distribution) -> Distribution:
        if self.decimals is None:
            return dist
        return dist.rounded(self.decimals)
