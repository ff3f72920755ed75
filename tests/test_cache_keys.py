"""
Tests for cache key builders.
"""

import pytest

from texttv_mcp.services.cache_keys import category_key, page_key, page_range_key, search_key


@pytest.mark.unit
class TestCacheKeys:
    def test_page_key(self):
        assert page_key(100) == "page:100:html"
        assert page_key(100, include_plain_text=True) == "page:100:plain"

    def test_page_range_key(self):
        assert page_range_key(101, 103) == "range:101-103:html"
        assert page_range_key(600, 669, include_plain_text=True) == "range:600-669:plain"

    def test_search_key(self):
        assert search_key("hockey", 300, 399) == "search:hockey:300-399"

    def test_category_key(self):
        assert category_key("news") == "category:news:meta"
        assert category_key("news", include_content=True) == "category:news:content"

    def test_keys_are_deterministic(self):
        assert page_key(377, True) == page_key(377, True)
        assert search_key("val", 100, 199) == search_key("val", 100, 199)

    def test_format_is_part_of_the_key(self):
        assert page_key(100, False) != page_key(100, True)
        assert page_range_key(100, 100, False) != page_range_key(100, 100, True)

    def test_families_do_not_collide(self):
        keys = {
            page_key(100),
            page_range_key(100, 100),
            f"news:{page_range_key(100, 100)}",
            f"subpages:{page_key(100)}",
            f"weather:{page_key(100)}",
            search_key("100", 100, 100),
            category_key("news"),
        }
        assert len(keys) == 7
