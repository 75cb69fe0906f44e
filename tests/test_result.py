"""Tests for the Result type."""

import pytest

from fishcore.result import Err, Ok


class TestResult:
    def test_ok(self) -> None:
        result = Ok(4.2)
        assert result.is_ok() and not result.is_err()
        assert result.unwrap() == 4.2
        assert result.error is None

    def test_err(self) -> None:
        result = Err("No active round")
        assert result.is_err() and not result.is_ok()
        assert result.value is None
        with pytest.raises(ValueError, match="No active round"):
            result.unwrap()
