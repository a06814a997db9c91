"""Tests for form value coercion."""

import pytest
from marketplace.shared.parsing import is_blank, parse_float, parse_int
from protean.exceptions import ValidationError


class TestParseInt:
    @pytest.mark.parametrize(("raw", "expected"), [("5", 5), (" 12 ", 12), (7, 7), ("0", 0)])
    def test_valid(self, raw, expected):
        assert parse_int(raw, "quantity", "bad") == expected

    @pytest.mark.parametrize("raw", ["abc", "1.5", "", None])
    def test_invalid(self, raw):
        with pytest.raises(ValidationError) as exc:
            parse_int(raw, "quantity", "Quantity harus berupa angka positif")
        assert exc.value.messages == {"quantity": ["Quantity harus berupa angka positif"]}

    def test_minimum(self):
        with pytest.raises(ValidationError):
            parse_int("0", "quantity", "bad", minimum=1)
        assert parse_int("1", "quantity", "bad", minimum=1) == 1


class TestParseFloat:
    def test_valid(self):
        assert parse_float("10000.50", "base_price", "bad") == 10000.5

    @pytest.mark.parametrize("raw", ["nan", "inf", "sepuluh", "-1"])
    def test_invalid(self, raw):
        with pytest.raises(ValidationError):
            parse_float(raw, "base_price", "bad", minimum=0)


class TestIsBlank:
    def test_blank_values(self):
        assert is_blank("a", None)
        assert is_blank("a", "  ")
        assert not is_blank("a", "b", 0)
