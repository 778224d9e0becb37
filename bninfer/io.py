"""
Evidence parsing and distribution formatting for command-line front ends.

Invalid input raises instead of exiting, so the caller decides whether to
terminate.
"""

from __future__ import annotations

from typing import Dict, Mapping, Sequence

from bninfer.errors import InconsistentEvidenceError
from bninfer.types import round_half_up

_TRUE = {"true", "t", "yes", "y", "1"}
_FALSE = {"false", "f", "no", "n", "0"}


def parse_boolean(text: str) -> bool:
    value = str(text).strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise InconsistentEvidenceError(f"Cannot read {text!r} as a boolean value")


def parse_evidence_args(tokens: Sequence[str]) -> Dict[str, bool]:
    """
    Turn ``[name, value, name, value, ...]`` into ``{name: bool}``.

    Raises:
        ValueError: If a name has no value.
        InconsistentEvidenceError: If a value is not a boolean literal.
    """
    tokens = list(tokens)
    if len(tokens) % 2 != 0:
        raise ValueError(
            f"Evidence must be given as name/value pairs, got {len(tokens)} tokens"
        )
    out: Dict[str, bool] = {}
    for name, value in zip(tokens[0::2], tokens[1::2]):
        name = str(name).strip()
        if not name:
            raise ValueError("Evidence variable name cannot be empty")
        out[name] = parse_boolean(value)
    return out


def format_distribution(dist: Mapping[object, float], decimals: int = 10) -> str:
    """Render ``{key=value, ...}`` in the distribution's own order."""
    parts = [f"{key}={round_half_up(value, decimals)}" for key, value in dist.items()]
    return "{" + ", ".join(parts) + "}"
