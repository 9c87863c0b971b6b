"""
Fixed-Point Encoder Unit Tests
==============================
Exact decimal string <-> scaled integer conversion.
"""

import pytest


class TestEncode:
    """encode(display_value, exponent)."""

    def test_basic_price(self):
        from feed_updater.execution.fixed_point import encode

        assert encode("123.45", -8) == 12345000000

    def test_integer_input(self):
        from feed_updater.execution.fixed_point import encode

        assert encode("64000", -8) == 6400000000000

    def test_full_precision(self):
        from feed_updater.execution.fixed_point import encode

        assert encode("0.00000001", -8) == 1

    def test_negative_value(self):
        from feed_updater.execution.fixed_point import encode

        assert encode("-0.25", -8) == -25000000

    def test_leading_and_trailing_dot(self):
        """'.5' and '5.' are valid decimal numerals."""
        from feed_updater.execution.fixed_point import encode

        assert encode(".5", -2) == 50
        assert encode("5.", -2) == 500

    def test_surrounding_whitespace_ignored(self):
        from feed_updater.execution.fixed_point import encode

        assert encode("  1.5 ", -8) == 150000000

    def test_only_magnitude_of_exponent_matters(self):
        from feed_updater.execution.fixed_point import encode

        assert encode("1.23", 2) == encode("1.23", -2) == 123

    def test_zero_exponent(self):
        from feed_updater.execution.fixed_point import encode

        assert encode("42", 0) == 42

    def test_no_float_rounding(self):
        """0.1 + 0.2 style artifacts must not appear."""
        from feed_updater.execution.fixed_point import encode

        assert encode("0.3", -18) == 300000000000000000
        assert encode("92233720368.54775807", -8) == 9223372036854775807

    @pytest.mark.parametrize("value", ["", "abc", "1.2.3", "1e5", ".", "-", "1,5", "0x10", "nan", "inf", "١٢"])
    def test_bad_format(self, value):
        from feed_updater.execution.execution_result import ValidationError, ValidationErrorKind
        from feed_updater.execution.fixed_point import encode

        with pytest.raises(ValidationError) as exc_info:
            encode(value, -8)

        assert exc_info.value.kind == ValidationErrorKind.BAD_FORMAT

    def test_non_string_rejected(self):
        from feed_updater.execution.execution_result import ValidationError, ValidationErrorKind
        from feed_updater.execution.fixed_point import encode

        with pytest.raises(ValidationError) as exc_info:
            encode(1.5, -8)

        assert exc_info.value.kind == ValidationErrorKind.BAD_FORMAT

    def test_precision_exceeded(self):
        from feed_updater.execution.execution_result import ValidationError, ValidationErrorKind
        from feed_updater.execution.fixed_point import encode

        with pytest.raises(ValidationError, match=r"9 decimals.*precision \(8\)") as exc_info:
            encode("1.123456789", -8)

        assert exc_info.value.kind == ValidationErrorKind.PRECISION_EXCEEDED

    @pytest.mark.parametrize("value", ["9" * 5000, "1" * 4400 + ".5", "-" + "9" * 20, "100000000000"])
    def test_oversized_numeral_overflows(self, value):
        """Too many digits for any i64 is an encoding error, never a raw int() failure."""
        from feed_updater.execution.execution_result import EncodingError, EncodingErrorKind
        from feed_updater.execution.fixed_point import encode

        with pytest.raises(EncodingError) as exc_info:
            encode(value, -8)

        assert exc_info.value.kind == EncodingErrorKind.OVERFLOW

    def test_leading_zeros_do_not_count_towards_size(self):
        from feed_updater.execution.fixed_point import encode

        assert encode("0" * 5000 + "1.5", -8) == 150000000

    def test_trailing_zeros_still_count_as_precision(self):
        from feed_updater.execution.execution_result import ValidationError
        from feed_updater.execution.fixed_point import encode

        with pytest.raises(ValidationError):
            encode("1.500", -2)


class TestDecodeAndNormalize:
    """decode() is the inverse of encode() in normalized form."""

    @pytest.mark.parametrize("value,expected", [
        ("123.45", "123.45"),
        ("007.50", "7.5"),
        ("+1", "1"),
        ("-0.0", "0"),
        (".5", "0.5"),
        ("5.", "5"),
        ("-12.340", "-12.34"),
    ])
    def test_normalize(self, value, expected):
        from feed_updater.execution.fixed_point import normalize

        assert normalize(value) == expected

    @pytest.mark.parametrize("value", ["123.45", "0.00000001", "-0.25", "+0", "1000", "00.10"])
    def test_decode_inverts_encode(self, value):
        from feed_updater.execution.fixed_point import decode, encode, normalize

        assert decode(encode(value, -8), -8) == normalize(value)

    def test_decode_zero_exponent(self):
        from feed_updater.execution.fixed_point import decode

        assert decode(-42, 0) == "-42"


class TestFixedPointEncoder:
    """Encoder bound to one exponent."""

    def test_bound_exponent(self):
        from feed_updater.execution.fixed_point import FixedPointEncoder

        encoder = FixedPointEncoder(-8)

        assert encoder.encode("123.45") == 12345000000
        assert encoder.decode(12345000000) == "123.45"
