"""
Unit tests for evidence parsing and distribution formatting.
"""

import pytest

from bninfer.errors import InconsistentEvidenceError
from bninfer.io import format_distribution, parse_boolean, parse_evidence_args
from bninfer.types import Distribution


class TestEvidenceParsing:
    """Test suite for command-line evidence helpers."""

    def test_parse_boolean(self) -> None:
        assert parse_boolean("true") is True
        assert parse_boolean(" FALSE ") is False
        assert parse_boolean("1") is True
        assert parse_boolean("no") is False
        with pytest.raises(InconsistentEvidenceError):
            parse_boolean("maybe")

    def test_parse_pairs(self) -> None:
        assert parse_evidence_args(["J", "true", "M", "false"]) == {"J": True, "M": False}
        assert parse_evidence_args([]) == {}

    def test_odd_token_count_raises(self) -> None:
        with pytest.raises(ValueError, match="name/value pairs"):
            parse_evidence_args(["J", "true", "M"])

    def test_empty_name_raises(self) -> None:
        with pytest.raises(ValueError, match="cannot be empty"):
            parse_evidence_args(["", "true"])


def test_format_distribution_keeps_order() -> None:
    dist = Distribution([("B true", 0.284), ("B false", 0.716)])
    assert format_distribution(dist) == "{B true=0.284, B false=0.716}"
    assert format_distribution({True: 2 / 3}, decimals=3) == "{True=0.667}"
