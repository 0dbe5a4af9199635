"""
Unit Tests for the Present/Absent mark type.

Blank marks must never be confused with a recorded zero.
"""

import pytest

from grade_matrix.core.models.marks import BLANK_MARK, Absent, Present, format_number, total_of


class TestPresent:
    """Tests for the Present dataclass."""

    def test_init_when_zero_then_is_not_blank(self):
        """A recorded zero is a real grade."""
        m = Present(0)
        assert m.value == 0
        assert not m.is_blank

    def test_init_when_not_number_then_raises_type_error(self):
        with pytest.raises(TypeError, match="must be a number"):
            Present("5")  # type: ignore

    def test_init_when_bool_then_raises_type_error(self):
        with pytest.raises(TypeError):
            Present(True)  # type: ignore

    def test_init_when_nan_then_raises_value_error(self):
        with pytest.raises(ValueError, match="finite"):
            Present(float("nan"))

    def test_init_when_frozen_then_immutable(self):
        m = Present(5)
        with pytest.raises(AttributeError):
            m.value = 10  # type: ignore

    def test_str_when_integral_float_then_drops_decimal(self):
        assert str(Present(5.0)) == "5"
        assert str(Present(7.5)) == "7.5"

    def test_repr_when_called_then_shows_value(self):
        assert repr(Present(5)) == "Present(5)"


class TestAbsent:
    """Tests for the Absent sentinel."""

    def test_eq_when_compared_to_zero_then_not_equal(self):
        assert BLANK_MARK != Present(0)
        assert BLANK_MARK != 0

    def test_eq_when_new_instance_then_equal_to_blank_mark(self):
        assert Absent() == BLANK_MARK

    def test_str_when_called_then_empty_string(self):
        assert str(BLANK_MARK) == ""
        assert BLANK_MARK.is_blank


class TestTotalOf:
    """Tests for total_of()."""

    def test_total_of_when_all_blank_then_returns_blank(self):
        assert total_of([BLANK_MARK, BLANK_MARK]) == BLANK_MARK

    def test_total_of_when_empty_then_returns_blank(self):
        assert total_of([]) == BLANK_MARK

    def test_total_of_when_mixed_then_sums_present_only(self):
        assert total_of([Present(5), BLANK_MARK, Present(2.5)]) == Present(7.5)

    def test_total_of_when_present_zeros_then_returns_present_zero(self):
        result = total_of([Present(0), BLANK_MARK])
        assert result == Present(0)
        assert result != BLANK_MARK

    def test_total_of_when_not_a_mark_then_raises(self):
        with pytest.raises(TypeError):
            total_of([5])  # type: ignore


class TestFormatNumber:

    @pytest.mark.parametrize("value, expected", [
        (10, "10"),
        (10.0, "10"),
        (0.0, "0"),
        (2.25, "2.25"),
        (100 / 3, str(100 / 3)),
    ])
    def test_format_number_when_called_then_returns_literal_text(self, value, expected):
        assert format_number(value) == expected
