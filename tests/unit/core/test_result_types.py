"""Unit tests for the Ok/Err result types."""

import pytest

from brandvoice_xliff.core.result import Err, Ok


class TestOk:

    def test_value(self):
        result = Ok("Hello")
        assert result.is_ok() and not result.is_err()
        assert result.unwrap() == "Hello"
        assert result.unwrap_or("x") == "Hello"


class TestErr:

    def test_error(self):
        result = Err(RuntimeError("boom"))
        assert result.is_err() and not result.is_ok()
        assert result.unwrap_or("fallback") == "fallback"

    def test_unwrap_raises(self):
        with pytest.raises(ValueError, match="boom"):
            Err("boom").unwrap()
