"""
Inference engines: exact enumeration and rejection sampling.
"""

from bninfer.inference.base import Inferencer
from bninfer.inference.exact import ExactInferencer, exact_ask
from bninfer.inference.sampling import (
    DEFAULT_SAMPLE_LIMIT,
    RejectionSampler,
    SampleCounts,
    approximate_ask,
)

__all__ = [
    "Inferencer",
    "ExactInferencer",
    "exact_ask",
    "RejectionSampler",
    "SampleCounts",
    "approximate_ask",
    "DEFAULT_SAMPLE_LIMIT",
]
