"""
Unit Tests for the aggregation engine.

Covers blank-vs-zero propagation through totals, percentages and the
released average.
"""

import pytest

from grade_matrix.aggregation import (
    all_blank_grades,
    out_of_total,
    released_average,
    total_mark,
    total_percent,
)
from grade_matrix.core.models import BLANK_MARK, Form, Item, Present, StudentRow
from grade_matrix.errors import DegenerateFormError


class TestOutOfTotal:

    def test_out_of_total_when_items_then_sums_out_of(self, quiz_form):
        assert out_of_total(quiz_form) == 20

    def test_out_of_total_when_no_items_then_zero(self):
        assert out_of_total(Form("Empty")) == 0


class TestTotalMark:

    def test_total_mark_when_some_grades_present_then_sums_them(self, quiz_form):
        assert total_mark(quiz_form, "alice") == Present(5)

    def test_total_mark_when_all_cells_absent_then_blank(self, quiz_form):
        assert total_mark(quiz_form, "bob") == BLANK_MARK

    def test_total_mark_when_no_row_then_blank(self, quiz_form):
        assert total_mark(quiz_form, "nobody") == BLANK_MARK

    def test_total_mark_when_row_has_no_cells_then_blank(self, quiz_form):
        quiz_form.rows["carol"] = StudentRow("carol")
        assert total_mark(quiz_form, "carol") == BLANK_MARK

    def test_total_mark_when_recorded_zeros_then_present_zero(self, quiz_form):
        """A student who scored 0 is not blank."""
        quiz_form.rows["carol"] = StudentRow("carol", cells={"Q1": Present(0), "Q2": BLANK_MARK})
        result = total_mark(quiz_form, "carol")
        assert result == Present(0)
        assert result != BLANK_MARK

    def test_total_mark_when_cell_for_unknown_item_then_ignored(self, quiz_form):
        """Only cells for the form's items are added up."""
        quiz_form.rows["alice"].cells["Q9"] = Present(100)
        assert total_mark(quiz_form, "alice") == Present(5)


class TestTotalPercent:

    def test_total_percent_when_total_present_then_percentage(self, quiz_form):
        assert total_percent(quiz_form, "alice") == Present(25)

    def test_total_percent_when_total_blank_then_blank(self, quiz_form):
        assert total_percent(quiz_form, "bob") == BLANK_MARK

    def test_total_percent_when_matches_total_over_out_of(self, quiz_form):
        quiz_form.rows["carol"] = StudentRow("carol", cells={"Q1": Present(7), "Q2": Present(6)})
        expected = 13 / 20 * 100
        assert total_percent(quiz_form, "carol").value == pytest.approx(expected)

    def test_total_percent_when_out_of_total_zero_then_raises(self):
        form = Form("Ungraded", items=[Item("Bonus", 0, 1)])
        form.rows["alice"] = StudentRow("alice", cells={"Bonus": Present(1)})
        with pytest.raises(DegenerateFormError, match="Ungraded"):
            total_percent(form, "alice")

    def test_total_percent_when_degenerate_but_blank_then_blank(self):
        """Blank totals never reach the division."""
        form = Form("Empty")
        assert total_percent(form, "alice") == BLANK_MARK


class TestReleasedAverage:

    def test_released_average_when_none_released_then_zero(self, quiz_form):
        result = released_average(quiz_form)
        assert result == 0
        assert result != BLANK_MARK

    def test_released_average_when_no_items_and_none_released_then_zero(self):
        """The empty case never raises DegenerateFormError."""
        assert released_average(Form("Empty")) == 0

    def test_released_average_when_released_students_then_averages_percent(self, quiz_form):
        quiz_form.rows["alice"].released = True
        quiz_form.rows["carol"] = StudentRow(
            "carol", released=True, cells={"Q1": Present(10), "Q2": Present(5)}
        )
        # (5 + 15) / 2 = 10 out of 20
        assert released_average(quiz_form) == pytest.approx(50)

    def test_released_average_when_blank_total_then_skipped(self, quiz_form):
        """Blank students count in neither numerator nor denominator."""
        quiz_form.rows["alice"].released = True
        quiz_form.rows["bob"].released = True
        assert released_average(quiz_form) == pytest.approx(25)

    def test_released_average_when_released_zero_then_counted(self, quiz_form):
        quiz_form.rows["alice"].released = True
        quiz_form.rows["carol"] = StudentRow("carol", released=True, cells={"Q1": Present(0)})
        assert released_average(quiz_form) == pytest.approx(12.5)

    def test_released_average_when_unreleased_then_ignored(self, quiz_form):
        quiz_form.rows["alice"].released = True
        quiz_form.rows["carol"] = StudentRow("carol", cells={"Q1": Present(10), "Q2": Present(10)})
        assert released_average(quiz_form) == pytest.approx(25)


class TestAllBlankGrades:

    def test_all_blank_grades_when_none_then_true(self):
        assert all_blank_grades(None)

    def test_all_blank_grades_when_only_absent_then_true(self, quiz_form):
        assert all_blank_grades(quiz_form.rows["bob"])

    def test_all_blank_grades_when_present_then_false(self, quiz_form):
        assert not all_blank_grades(quiz_form.rows["alice"])
