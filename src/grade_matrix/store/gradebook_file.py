"""
Module: store.gradebook_file

Purpose:
    JSON gradebook file holding one form and its student directory.
    Writes hold an exclusive portalocker lock, so two imports against the
    same file are applied one after the other.

Key Functions:
    - load_gradebook: Read a gradebook file into a GradeMatrixStore
    - save_gradebook: Write a GradeMatrixStore with an exclusive lock
    - update_gradebook: Locked read-modify-write of a gradebook file
    - locked_file: Context manager for locked file access

Dependencies:
    - portalocker: Cross-platform file locking
    - core.utils.serialization

Used By:
    - cli
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Generator, TypeVar

import portalocker

from grade_matrix.core.utils.serialization import deserialize_gradebook, serialize_gradebook
from grade_matrix.errors import GradebookFileError

from .memory import GradeMatrixStore, InMemoryStudentDirectory

logger = logging.getLogger(__name__)

T = TypeVar("T")


@contextmanager
def locked_file(
    path: Path,
    mode: str = 'r',
    lock_type: int = portalocker.LOCK_EX,
) -> Generator:
    """
    Context manager for cross-platform locked file access.

    Args:
        path: Path to file.
        mode: File open mode ('r', 'r+', 'w', ...).
        lock_type: Lock type (LOCK_EX for exclusive, LOCK_SH for shared).

    Yields:
        Open file handle with lock held.
    """
    with open(path, mode, encoding='utf-8') as f:
        portalocker.lock(f, lock_type)
        try:
            yield f
        finally:
            portalocker.unlock(f)


def _decode(content: str, path: Path) -> GradeMatrixStore:
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise GradebookFileError(f"{path} is not valid JSON: {e}") from e

    form, students = deserialize_gradebook(data, strict=True)
    return GradeMatrixStore(form, InMemoryStudentDirectory(students))


def _encode(store: GradeMatrixStore) -> str:
    data = serialize_gradebook(store.form, store.directory.all())
    return json.dumps(data, indent=2, ensure_ascii=False)


def load_gradebook(path: Path) -> GradeMatrixStore:
    """
    Load a gradebook file.

    Raises:
        GradebookFileError: If the file is missing or not JSON
        ValidationError: If the document fails validation
    """
    if not path.exists():
        raise GradebookFileError(f"Gradebook not found: {path}")

    with locked_file(path, 'r', portalocker.LOCK_SH) as f:
        store = _decode(f.read(), path)

    logger.debug(
        f"Loaded gradebook {path.name}: form {store.form.identifier!r}, "
        f"{len(store.directory)} students"
    )
    return store


def save_gradebook(path: Path, store: GradeMatrixStore) -> None:
    """Write a gradebook file, holding an exclusive lock while writing."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.touch(exist_ok=True)

    with locked_file(path, 'r+', portalocker.LOCK_EX) as f:
        f.seek(0)
        f.truncate()
        f.write(_encode(store))

    logger.debug(f"Saved gradebook {path.name}")


def update_gradebook(path: Path, modifier: Callable[[GradeMatrixStore], T]) -> T:
    """
    Read a gradebook, apply modifier, write it back - all with exclusive lock.

    Args:
        path: Path to an existing gradebook file.
        modifier: Function that updates the store in place; its return
            value is passed through.

    Returns:
        Whatever ``modifier`` returned.

    Example:
        >>> result = update_gradebook(path, lambda store: import_csv(
        ...     lines, store.form, store.item_sync, store.row_sync))
    """
    if not path.exists():
        raise GradebookFileError(f"Gradebook not found: {path}")

    with locked_file(path, 'r+', portalocker.LOCK_EX) as f:
        f.seek(0)
        store = _decode(f.read(), path)

        outcome = modifier(store)

        f.seek(0)
        f.truncate()
        f.write(_encode(store))

    logger.debug(f"Updated gradebook {path.name}")
    return outcome
