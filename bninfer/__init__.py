"""
Exact and approximate inference over discrete Bayesian networks.

Given a network, a query variable and (possibly empty) evidence, the
enumeration engine computes the exact posterior and the rejection sampler
estimates it from ancestral samples.
"""

from bninfer.errors import (
    EmptyDomainError,
    InconsistentEvidenceError,
    InferenceError,
    NoAcceptedSamplesError,
    UndefinedProbabilityError,
    UnknownVariableError,
)
from bninfer.inference import (
    ExactInferencer,
    RejectionSampler,
    SampleCounts,
    approximate_ask,
    exact_ask,
)
from bninfer.network import BayesianNetwork, build_network
from bninfer.types import Assignment, Distribution, RandomVariable, round_half_up

__version__ = "0.1.0"

__all__ = [
    "Assignment",
    "BayesianNetwork",
    "Distribution",
    "EmptyDomainError",
    "ExactInferencer",
    "InconsistentEvidenceError",
    "InferenceError",
    "NoAcceptedSamplesError",
    "RandomVariable",
    "RejectionSampler",
    "SampleCounts",
    "UndefinedProbabilityError",
    "UnknownVariableError",
    "approximate_ask",
    "build_network",
    "exact_ask",
    "round_half_up",
]
