"""Tests for counter coercion (services/coercion.py)."""

from __future__ import annotations

import pytest

from yt_pulse.services.coercion import safe_int


class TestSafeInt:
    def test_decimal_string(self) -> None:
        assert safe_int("12345") == 12345

    def test_none_is_zero(self) -> None:
        assert safe_int(None) == 0

    def test_not_a_number_is_zero(self) -> None:
        assert safe_int("not-a-number") == 0

    def test_empty_is_zero(self) -> None:
        assert safe_int("") == 0

    def test_int_passthrough(self) -> None:
        assert safe_int(42) == 42

    def test_surrounding_whitespace(self) -> None:
        assert safe_int(" 7 ") == 7

    @pytest.mark.parametrize("value", ["-5", "1.5", "1e3", "abc", None, "", [], {}, True])
    def test_never_negative_never_raises(self, value) -> None:
        assert safe_int(value) >= 0
