"""Tests for duet.domain.currency pure functions."""

from duet.domain.currency import (
    format_currency,
    format_input_currency,
    format_money_display,
    parse_currency,
)


class TestFormatCurrency:
    """Tests for format_currency."""

    def test_thousands_and_cents(self) -> None:
        """Should group thousands with dots and separate cents with a comma."""
        assert format_currency(1234.56) == "1.234,56"

    def test_millions(self) -> None:
        """Should group every thousand."""
        assert format_currency(1234567.8) == "1.234.567,80"

    def test_small_amount(self) -> None:
        """Should always show two decimals."""
        assert format_currency(5) == "5,00"

    def test_numeric_string(self) -> None:
        """Should accept numeric strings."""
        assert format_currency("42.5") == "42,50"

    def test_invalid_string(self) -> None:
        """Should format non-numeric text as zero."""
        assert format_currency("abc") == "0,00"

    def test_empty_string(self) -> None:
        """Should format an empty string as zero."""
        assert format_currency("") == "0,00"

    def test_negative(self) -> None:
        """Should keep the sign of negative amounts."""
        assert format_currency(-10.5) == "-10,50"


class TestParseCurrency:
    """Tests for parse_currency."""

    def test_formatted_amount(self) -> None:
        """Should read dots as grouping and the comma as decimal separator."""
        assert parse_currency("1.234,56") == 1234.56

    def test_with_symbol(self) -> None:
        """Should ignore the currency symbol and spaces."""
        assert parse_currency("R$ 10,00") == 10.0

    def test_negative(self) -> None:
        """Should parse negative amounts."""
        assert parse_currency("-5,5") == -5.5

    def test_empty(self) -> None:
        """Should return zero for empty input."""
        assert parse_currency("") == 0.0

    def test_garbage(self) -> None:
        """Should return zero instead of raising."""
        assert parse_currency("twelve") == 0.0

    def test_round_trip(self) -> None:
        """Should parse a formatted value back to the same amount."""
        for value in (0.01, 99.9, 1234.56, 1000000.0):
            assert round(parse_currency(format_currency(value)), 2) == round(value, 2)


class TestFormatInputCurrency:
    """Tests for format_input_currency."""

    def test_digits_read_as_cents(self) -> None:
        """Should treat typed digits as cents."""
        assert format_input_currency("123456") == "1.234,56"

    def test_strips_non_digits(self) -> None:
        """Should drop every non-digit character."""
        assert format_input_currency("R$ 1.0a5") == "1,05"

    def test_no_digits(self) -> None:
        """Should return an empty string when nothing numeric was typed."""
        assert format_input_currency("abc") == ""


class TestFormatMoneyDisplay:
    """Tests for format_money_display."""

    def test_positive(self) -> None:
        """Should prefix the currency symbol."""
        assert format_money_display(1234.5) == "R$ 1.234,50"

    def test_negative(self) -> None:
        """Should put the minus sign before the symbol."""
        assert format_money_display(-12.34) == "-R$ 12,34"

    def test_include_sign(self) -> None:
        """Should add a plus sign on request."""
        assert format_money_display(10, include_sign=True) == "+R$ 10,00"
