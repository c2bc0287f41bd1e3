"""
Integration tests for reading XML files from disk.
"""

import os
import sys
import pytest
from datetime import datetime
from pathlib import Path

# Add the parent directory to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from xmlsimple import XmlSimpleParser, stream, iter_nodes
from xmlsimple.core.exceptions import XmlNodeNotFoundError

ORDERS_XML = Path(__file__).resolve().parent.parent / "fixtures" / "xml" / "orders.xml"


@pytest.mark.integration
class TestStreamFiles:
    """Integration tests streaming and loading files."""

    @pytest.fixture
    def large_xml(self, tmp_path):
        """Write a document with many repeated records."""
        path = tmp_path / "large.xml"
        with open(path, "w", encoding="utf-8") as f:
            f.write('<?xml version="1.0" encoding="UTF-8"?>\n<records>\n')
            for i in range(5000):
                f.write(f'  <record n="{i}">\n    <qty>{i % 7}</qty>\n    <price>{i},25</price>\n  </record>\n')
            f.write('</records>\n')
        return path

    def test_stream_orders(self):
        orders = []

        def on_match(parser):
            orders.append({
                "id": parser.get_attribute_value("id"),
                "customer": parser.get_node_value("customer", default=None),
                "total": parser.get_node_value_float("total", default=None),
                "tag": parser.get_node_value("meta:tag", default=""),
            })

        count = stream(ORDERS_XML, "export.orders.order", on_match, decimal_separator=",")

        assert count == 4
        assert [order["id"] for order in orders] == ["1001", "1002", "1003", "1004"]
        assert [order["customer"] for order in orders] == ["Alice", "Bob", None, "Carol"]
        assert orders[0]["total"] == pytest.approx(19.99)
        assert orders[2]["total"] is None
        assert orders[3]["total"] == pytest.approx(100.5)
        assert [order["tag"] for order in orders] == ["gift", "", "", ""]

    def test_stream_fragment_filename(self):
        filenames = {parser.filename for parser in iter_nodes(str(ORDERS_XML), "export.orders.order")}
        assert filenames == {str(ORDERS_XML)}

    def test_load_orders(self):
        parser = XmlSimpleParser.from_file(ORDERS_XML)

        assert parser.get_node_value_datetime("header.created") == datetime(2021, 6, 30, 12, 0)
        assert len(parser.get_children("order", "orders")) == 4
        assert parser.get_attribute_value("status", node="orders.order") == "paid"

        with pytest.raises(XmlNodeNotFoundError) as exc_info:
            parser.get_node("orders.order.invoice")
        assert exc_info.value.path == "orders.order.invoice"
        assert exc_info.value.node.attributes["id"] == "1001"

    def test_stream_large_file(self, large_xml):
        totals = {"count": 0, "qty": 0}

        def on_match(parser):
            totals["count"] += 1
            totals["qty"] += parser.get_node_value_int("qty")

        assert stream(large_xml, "records.record", on_match) == 5000
        assert totals["count"] == 5000
        assert totals["qty"] == sum(i % 7 for i in range(5000))

    def test_stream_large_file_early_stop(self, large_xml):
        first = []
        for parser in iter_nodes(large_xml, "records.record", decimal_separator=","):
            first.append(parser.get_node_value_float("price"))
            if len(first) == 3:
                break
        assert first == [0.25, 1.25, 2.25]
