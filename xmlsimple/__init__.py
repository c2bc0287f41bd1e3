"""
xmlsimple - path-addressed access to XML documents.

This package provides tools for reading nodes, attributes and typed values from
XML documents using simple dot or arrow separated paths, either from a document
held in memory or from a large document streamed element by element.
"""

__version__ = '1.0.0'
__author__ = 'xmlsimple Team'

from xmlsimple.core.exceptions import (
    XmlSimpleError,
    XmlNodeNotFoundError,
    XmlAttributeNotFoundError,
    XmlParseError,
    XmlSourceError,
)
from xmlsimple.xml.node import Node
from xmlsimple.xml.parser import XmlSimpleParser
from xmlsimple.xml.streaming import StreamParser, iter_nodes, stream, stream_string

__all__ = [
    'XmlSimpleError',
    'XmlNodeNotFoundError',
    'XmlAttributeNotFoundError',
    'XmlParseError',
    'XmlSourceError',
    'Node',
    'XmlSimpleParser',
    'StreamParser',
    'iter_nodes',
    'stream',
    'stream_string',
]
