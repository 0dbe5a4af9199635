"""
Module: pagination

Purpose:
    Alphabetical range labels for pages of sorted names.
"""

from .alpha import alpha_paginate, construct_alpha_category, page_of

__all__ = [
    "alpha_paginate",
    "construct_alpha_category",
    "page_of",
]
