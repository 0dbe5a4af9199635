"""
Module: pagination.alpha

Purpose:
    Label pages of an alphabetically sorted list with the range of names
    they cover, e.g. "Al-And" for a page running from "Alwyn" to
    "Anderson" when the next page starts at "Antheil".

Key Functions:
    - construct_alpha_category(): Shortest distinguishing prefixes of two names
    - alpha_paginate(): One "<low>-<high>" label per page
    - page_of(): Entries on a single 1-based page

Algorithm:
    Only the boundary names are read: the first and last entry of each
    page and the first entry of the following page.
    1. Keep 2 candidate slots per page (low bound, high bound)
    2. For page p (not last): compare first/last of p, feeding slots
       (low_p, high_p); compare last of p with first of p+1, feeding
       slots (high_p, low_p+1)
    3. Last page: compare its own first/last only
    4. Each label is max(low candidates) + "-" + max(high candidates)

Dependencies:
    - math (std)

Used By:
    - cli: paginate command
"""

from __future__ import annotations

import logging
import math
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def construct_alpha_category(name1: str, name2: str) -> Tuple[str, str]:
    """
    Construct the alphabetical category boundaries for two names.

    Scans at most ``min(len(name1), len(name2))`` characters for the first
    difference and cuts both names just after it. When one name is a
    prefix of the other, the longer one keeps one extra character.

    Args:
        name1: The alphabetically earlier name
        name2: The alphabetically later name

    Returns:
        Tuple of (prefix of name1, prefix of name2)

    Example:
        >>> construct_alpha_category("Albert", "Auric")
        ('Al', 'Au')
        >>> construct_alpha_category("Ann", "Anne")
        ('Ann', 'Anne')
    """
    same_so_far = True
    index = 0
    length_of_shorter_name = min(len(name1), len(name2))

    while same_so_far and index < length_of_shorter_name:
        same_so_far = name1[index] == name2[index]
        index += 1

    if same_so_far and index < len(name1):
        # At least one character remaining in the first name
        return name1[:index + 1], name2[:index]
    if same_so_far and index < len(name2):
        # At least one character remaining in the second name
        return name1[:index], name2[:index + 1]
    return name1[:index], name2[:index]


def page_of(entries: Sequence[T], page: int, per_page: int) -> Sequence[T]:
    """
    Entries shown on a 1-based page.

    Args:
        entries: Full sorted sequence
        page: Page number, starting at 1
        per_page: Entries per page

    Returns:
        Slice of ``entries`` (empty past the last page)
    """
    if per_page <= 0:
        raise ValueError(f"per_page must be positive: {per_page}")
    if page < 1:
        raise ValueError(f"page must be >= 1: {page}")
    start = (page - 1) * per_page
    return entries[start:start + per_page]


def alpha_paginate(
    entries: Sequence[T],
    per_page: int,
    total_pages: Optional[int] = None,
    key: Callable[[T], str] = str,
) -> List[str]:
    """
    Compute one alphabetical range label per page.

    The entries must already be sorted by ``key``; they are only sliced,
    never re-sorted.

    Args:
        entries: Sorted entries (names, or objects with a sort key)
        per_page: Entries per page
        total_pages: Number of pages to label; computed from the length
            of ``entries`` when None
        key: Returns the name to label by (e.g. a student's last name)

    Returns:
        List of "<low>-<high>" labels, one per page; empty for 0 pages

    Raises:
        ValueError: If per_page is not positive or a requested page is empty

    Example:
        >>> alpha_paginate(["Alwyn", "Anderson", "Antheil", "Baker"], per_page=2)
        ['Al-And', 'Ant-B']
    """
    if per_page <= 0:
        raise ValueError(f"per_page must be positive: {per_page}")
    if total_pages is None:
        total_pages = math.ceil(len(entries) / per_page)
    if total_pages == 0:
        return []

    alpha_categories: List[List[str]] = [[] for _ in range(2 * total_pages)]

    def _add(name1: str, name2: str, i: int) -> None:
        prefix1, prefix2 = construct_alpha_category(name1, name2)
        alpha_categories[i].append(prefix1)
        alpha_categories[i + 1].append(prefix2)

    i = 0
    for page in range(1, total_pages):
        current = _page_bounds(entries, page, per_page, key)
        following = _page_bounds(entries, page + 1, per_page, key)

        first_name, last_name = current
        next_name = following[0]

        _add(first_name, last_name, i)
        _add(last_name, next_name, i + 1)
        i += 2

    first_name, last_name = _page_bounds(entries, total_pages, per_page, key)
    _add(first_name, last_name, i)

    labels = [
        f"{max(alpha_categories[j])}-{max(alpha_categories[j + 1])}"
        for j in range(0, 2 * total_pages, 2)
    ]
    logger.debug(f"Alphabetical pagination over {len(entries)} entries: {labels}")
    return labels


def _page_bounds(
    entries: Sequence[T],
    page: int,
    per_page: int,
    key: Callable[[T], str],
) -> Tuple[str, str]:
    """Return the keys of the first and last entry on a page."""
    page_entries = page_of(entries, page, per_page)
    if not page_entries:
        raise ValueError(
            f"Page {page} is empty ({len(entries)} entries, {per_page} per page)"
        )
    return key(page_entries[0]), key(page_entries[-1])
