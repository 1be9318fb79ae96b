"""
Page arithmetic shared by every listing endpoint.
"""
import math
from typing import Tuple


def page_bounds(page: int, per_page: int) -> Tuple[int, int]:
    """Zero-based (first, last) row indexes of a 1-based page, both inclusive."""
    start = (page - 1) * per_page
    return start, start + per_page - 1


def total_pages(count: int, per_page: int) -> int:
    """Number of pages for ``count`` rows; an empty listing still has one page."""
    if not count:
        return 1
    return math.ceil(count / per_page)
