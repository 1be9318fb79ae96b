"""
Tests for page arithmetic.
"""
from app.core.pagination import page_bounds, total_pages


class TestPageBounds:
    def test_first_page(self):
        assert page_bounds(1, 9) == (0, 8)

    def test_later_page(self):
        assert page_bounds(3, 9) == (18, 26)

    def test_other_page_size(self):
        assert page_bounds(2, 24) == (24, 47)


class TestTotalPages:
    def test_empty_listing_has_one_page(self):
        assert total_pages(0, 9) == 1

    def test_exact_multiple(self):
        assert total_pages(18, 9) == 2

    def test_partial_last_page(self):
        assert total_pages(19, 9) == 3

    def test_fewer_rows_than_page(self):
        assert total_pages(4, 10) == 1
