"""
Unit tests for the in-memory store collaborators.
"""

import pytest

from grade_matrix.core.models import BLANK_MARK, Form, Item, Present, Student
from grade_matrix.errors import ItemSyncError, RowSyncError
from grade_matrix.store import (
    InMemoryItemSync,
    InMemoryStudentDirectory,
    InMemoryStudentRowSync,
    ItemSync,
    StudentDirectory,
    StudentRowSync,
    parse_number,
)


class TestParseNumber:

    @pytest.mark.parametrize("text, expected", [
        ("5", 5.0),
        (" 7.5 ", 7.5),
        ("0", 0.0),
        ("-2", -2.0),
    ])
    def test_parse_number_when_numeric_then_value(self, text, expected):
        assert parse_number(text) == expected

    @pytest.mark.parametrize("text", ["", "abc", "nan", "inf", "5%"])
    def test_parse_number_when_not_finite_number_then_none(self, text):
        assert parse_number(text) is None


class TestInMemoryStudentDirectory:

    def test_list_visible_when_hidden_students_then_excluded_and_sorted(self, students):
        directory = InMemoryStudentDirectory(reversed(students))
        assert [s.user_name for s in directory.list_visible()] == ["alice", "bob", "carol"]

    def test_all_when_hidden_students_then_included(self, students):
        directory = InMemoryStudentDirectory(students)
        assert len(directory.all()) == 4
        assert len(directory) == 4

    def test_add_when_duplicate_user_name_then_raises(self):
        with pytest.raises(ValueError, match="Duplicate"):
            InMemoryStudentDirectory([Student("alice"), Student("alice")])

    def test_protocol_when_checked_then_satisfied(self):
        assert isinstance(InMemoryStudentDirectory(), StudentDirectory)


class TestInMemoryItemSync:

    def test_create_or_update_when_new_form_then_creates_items_in_order(self):
        form = Form("Quiz")
        InMemoryItemSync().create_or_update(["", "Q1", "Q2"], ["", "10", "5.5"], form)
        assert form.items == [Item("Q1", 10, 1), Item("Q2", 5.5, 2)]

    def test_create_or_update_when_existing_item_then_updates_total(self, quiz_form):
        InMemoryItemSync().create_or_update(["", "Q2", "Q1"], ["", "20", "10"], quiz_form)
        assert quiz_form.items == [Item("Q2", 20, 1), Item("Q1", 10, 2)]

    def test_create_or_update_when_item_not_in_header_then_kept_after(self, quiz_form):
        InMemoryItemSync().create_or_update(["", "Q3"], ["", "4"], quiz_form)
        assert [item.name for item in quiz_form.items] == ["Q3", "Q1", "Q2"]
        assert [item.position for item in quiz_form.items] == [1, 2, 3]

    def test_create_or_update_when_lengths_differ_then_raises(self):
        with pytest.raises(ItemSyncError, match="differ in length"):
            InMemoryItemSync().create_or_update(["", "Q1", "Q2"], ["", "10"], Form("Quiz"))

    @pytest.mark.parametrize("total", ["ten", "-1", ""])
    def test_create_or_update_when_total_invalid_then_raises(self, total):
        with pytest.raises(ItemSyncError, match="Invalid total"):
            InMemoryItemSync().create_or_update(["", "Q1"], ["", total], Form("Quiz"))

    def test_create_or_update_when_failed_then_form_unchanged(self, quiz_form):
        before = list(quiz_form.items)
        with pytest.raises(ItemSyncError):
            InMemoryItemSync().create_or_update(["", "Q1", "Q3"], ["", "10", "x"], quiz_form)
        assert quiz_form.items == before

    def test_create_or_update_when_blank_name_then_raises(self):
        with pytest.raises(ItemSyncError, match="blank"):
            InMemoryItemSync().create_or_update(["", " "], ["", "3"], Form("Quiz"))

    def test_create_or_update_when_duplicate_name_then_raises(self):
        with pytest.raises(ItemSyncError, match="Duplicate"):
            InMemoryItemSync().create_or_update(["", "Q1", "Q1"], ["", "1", "2"], Form("Quiz"))

    def test_protocol_when_checked_then_satisfied(self):
        assert isinstance(InMemoryItemSync(), ItemSync)


class TestInMemoryStudentRowSync:

    @pytest.fixture
    def row_sync(self, students) -> InMemoryStudentRowSync:
        return InMemoryStudentRowSync(InMemoryStudentDirectory(students))

    def test_create_or_update_when_valid_row_then_sets_cells(self, row_sync, quiz_form):
        row_sync.create_or_update(["carol", "7", "", "35"], quiz_form)
        row = quiz_form.row_for("carol")
        assert row.cells == {"Q1": Present(7), "Q2": BLANK_MARK}
        assert not row.released

    def test_create_or_update_when_existing_row_then_overwrites(self, row_sync, quiz_form):
        quiz_form.rows["alice"].released = True
        row_sync.create_or_update(["alice", "", "9", ""], quiz_form)
        row = quiz_form.row_for("alice")
        assert row.cells == {"Q1": BLANK_MARK, "Q2": Present(9)}
        assert row.released

    def test_create_or_update_when_zero_grade_then_present_zero(self, row_sync, quiz_form):
        row_sync.create_or_update(["carol", "0", "0", "0"], quiz_form)
        assert quiz_form.row_for("carol").cells["Q1"] == Present(0)

    def test_create_or_update_when_three_fields_for_two_items_then_raises(self, row_sync, quiz_form):
        with pytest.raises(RowSyncError, match="Expected 4 fields"):
            row_sync.create_or_update(["carol", "1", "2"], quiz_form)

    def test_create_or_update_when_grade_not_numeric_then_raises(self, row_sync, quiz_form):
        with pytest.raises(RowSyncError, match="Invalid grade 'abc' for item 'Q2'"):
            row_sync.create_or_update(["carol", "4", "abc", ""], quiz_form)

    def test_create_or_update_when_rejected_then_no_partial_update(self, row_sync, quiz_form):
        with pytest.raises(RowSyncError):
            row_sync.create_or_update(["alice", "9", "abc", ""], quiz_form)
        assert quiz_form.row_for("alice").cells["Q1"] == Present(5)

    def test_create_or_update_when_unknown_student_then_raises(self, row_sync, quiz_form):
        with pytest.raises(RowSyncError, match="Unknown student"):
            row_sync.create_or_update(["zed", "1", "2", ""], quiz_form)

    def test_create_or_update_when_blank_user_name_then_raises(self, row_sync, quiz_form):
        with pytest.raises(RowSyncError, match="Missing user name"):
            row_sync.create_or_update([" ", "1", "2", ""], quiz_form)

    def test_protocol_when_checked_then_satisfied(self, row_sync):
        assert isinstance(row_sync, StudentRowSync)
