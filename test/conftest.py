"""
Test configuration for the xmlsimple test suite.
"""

import os
import sys
import pytest
from pathlib import Path

# Add the parent directory to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from xmlsimple.xml.parser import XmlSimpleParser

# Constants for testing
TEST_DIR = Path(__file__).resolve().parent
FIXTURES_DIR = TEST_DIR / "fixtures"
TEST_XML_DIR = FIXTURES_DIR / "xml"
ORDERS_XML = TEST_XML_DIR / "orders.xml"

ORDER_XML = """<?xml version="1.0" encoding="UTF-8"?>
<order id="42" xmlns:inv="http://example.com/invoice">
  <customer type="company">
    <name>ACME</name>
    <address>
      <city>Springfield</city>
    </address>
  </customer>
  <item>
    <sku>A-1</sku>
    <qty>3</qty>
    <price>3,14</price>
  </item>
  <item>
    <sku>B-2</sku>
    <qty>1</qty>
    <price>10.5</price>
  </item>
  <inv:summary inv:ref="X1">
    <inv:total currency="EUR">13,64</inv:total>
  </inv:summary>
  <paid>TRUE</paid>
  <shipped>no</shipped>
  <created>2020-01-02 03:04:05</created>
  <note/>
</order>
"""


@pytest.fixture
def order_xml():
    """Sample order document."""
    return ORDER_XML


@pytest.fixture
def order_parser():
    """Parser loaded with the sample order document."""
    return XmlSimpleParser.from_string(ORDER_XML)
