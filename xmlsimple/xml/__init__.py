"""XML processing module for xmlsimple.

This module provides tools for reading XML documents by path, either fully
loaded into memory or streamed element by element.
"""

from .node import Node
from .parser import XmlSimpleParser
from .streaming import StreamParser

__all__ = ['Node', 'XmlSimpleParser', 'StreamParser']
