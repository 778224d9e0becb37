"""
Typed failures raised by the inference core.

Every error subclasses ``InferenceError``, which is itself a ``ValueError``,
so callers that already guard against invalid input keep working.
"""

from __future__ import annotations


class InferenceError(ValueError):
    """Base class for all inference failures."""


class UnknownVariableError(InferenceError):
    """A query, evidence entry or lookup names a variable absent from the network."""


class InconsistentEvidenceError(InferenceError):
    """Evidence assigns the query variable, or a value outside a variable's domain."""


class UndefinedProbabilityError(InferenceError):
    """A conditional probability cannot be resolved from the network."""


class NoAcceptedSamplesError(InferenceError):
    """Rejection sampling accepted no trial, so the estimate is undefined."""


class EmptyDomainError(InferenceError):
    """A variable has no domain values to enumerate over."""
