import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import grade_matrix
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from grade_matrix.core.models import BLANK_MARK, Form, Item, Present, Student, StudentRow
from grade_matrix.store import GradeMatrixStore, InMemoryStudentDirectory


# Common test fixtures
@pytest.fixture
def quiz_form() -> Form:
    """Two 10-mark items; alice has [5, blank], bob has [blank, blank]."""
    form = Form("Quiz 1", items=[Item("Q1", 10, 1), Item("Q2", 10, 2)])
    form.rows["alice"] = StudentRow("alice", cells={"Q1": Present(5), "Q2": BLANK_MARK})
    form.rows["bob"] = StudentRow("bob", cells={"Q1": BLANK_MARK, "Q2": BLANK_MARK})
    return form


@pytest.fixture
def students() -> list[Student]:
    return [
        Student("alice", last_name="Albert", first_name="Alice"),
        Student("bob", last_name="Auric", first_name="Bob"),
        Student("carol", last_name="Baker", first_name="Carol"),
        Student("dave", last_name="Hidden", hidden=True),
    ]


@pytest.fixture
def store(quiz_form, students) -> GradeMatrixStore:
    return GradeMatrixStore(quiz_form, InMemoryStudentDirectory(students))
