"""
Unit tests for path expression parsing.
"""

import os
import sys
import pytest

# Add the parent directory to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from xmlsimple.xml.path import PathSegment, is_root_path, join_path, normalize_path, parse_path


class TestParsePath:
    """Test suite for parse_path and its helpers."""

    @pytest.mark.parametrize("path", ["", "."])
    def test_root_paths(self, path):
        assert is_root_path(path)
        assert parse_path(path) == []

    def test_dot_separated(self):
        assert parse_path("a.b.c") == [PathSegment("a"), PathSegment("b"), PathSegment("c")]

    def test_arrow_and_dot_are_interchangeable(self):
        assert parse_path("a->b.c") == parse_path("a.b->c") == parse_path("a->b->c")

    def test_arrow_alone_is_root(self):
        assert normalize_path("->") == "."
        assert parse_path("->") == []

    def test_namespace_segment(self):
        segments = parse_path("order->inv:summary.inv:total")
        assert segments == [
            PathSegment("order"),
            PathSegment("summary", "inv"),
            PathSegment("total", "inv"),
        ]
        assert segments[1].prefix == "inv"
        assert segments[1].name == "summary"

    def test_more_than_one_colon_is_a_plain_name(self):
        assert parse_path("a:b:c") == [PathSegment("a:b:c")]

    def test_segment_str(self):
        assert str(PathSegment("total", "inv")) == "inv:total"
        assert str(PathSegment("total")) == "total"

    def test_join_path(self):
        assert join_path(["root", "inv:item"]) == "root.inv:item"
        assert join_path([]) == ""
