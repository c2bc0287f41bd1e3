"""
Path based XML access for xmlsimple.

This module provides XmlSimpleParser, which loads a document into a Node tree
and reads nodes, attributes and typed values from it using path expressions
such as ``order.customer.name`` or ``order->ns:customer->name``.

Every lookup either raises when the path cannot be resolved or, if the caller
passes a ``default``, returns that default instead.
"""

import os
import re
import logging
from typing import Any, Dict, List, Optional, Pattern, Tuple, Union

import pandas as pd
from lxml import etree

from xmlsimple.core.constants import DEFAULT_DECIMAL_SEPARATOR, TRUE_VALUES
from xmlsimple.core.exceptions import (
    ConfigurationError,
    XmlAttributeNotFoundError,
    XmlNodeNotFoundError,
    XmlParseError,
    XmlSimpleError,
    XmlSourceError,
)
from xmlsimple.xml.node import Node
from xmlsimple.xml.path import parse_path, parse_segment

logger = logging.getLogger(__name__)

# Passed as default to request an exception instead of a fallback value
RAISE = object()

NodeRef = Union[Node, str, None]


class Resolution:
    """
    Outcome of resolving a path: the node found, or the error describing the miss.
    """

    def __init__(self, node: Optional[Node] = None, error: Optional[XmlSimpleError] = None):
        self.node = node
        self.error = error

    @property
    def found(self) -> bool:
        return self.error is None

    def unwrap(self, default: Any = RAISE) -> Any:
        """
        Get the resolved node.

        Args:
            default: Value to return instead of raising if resolution failed

        Returns:
            The node, or the default on failure
        """
        if self.error is None:
            return self.node
        if default is RAISE:
            raise self.error
        return default


def make_xml_parser(encoding: Optional[str] = None) -> etree.XMLParser:
    """
    Create the lxml parser used for all documents and fragments.

    Args:
        encoding: Encoding that overrides the document's XML declaration
    """
    return etree.XMLParser(remove_blank_text=True, encoding=encoding)


def _check_decimal_separator(decimal_separator: str) -> str:
    if not isinstance(decimal_separator, str) or len(decimal_separator) != 1:
        raise ConfigurationError(f"Decimal separator must be a single character, got {decimal_separator!r}")
    return decimal_separator


def _read_content(filename: str) -> Optional[str]:
    """Read a file's raw content for error reporting, None if unreadable."""
    try:
        with open(filename, 'r', encoding='utf-8', errors='replace') as f:
            return f.read()
    except OSError:
        return None


class XmlSimpleParser:
    """
    Reader for XML documents addressed by path expressions.

    A parser is bound to a context node, which is used as the starting point of
    every lookup that does not pass an explicit node. The context node is fixed
    at construction; use create_child_parser() to obtain a parser scoped to a
    descendant.
    """

    def __init__(self, node: Optional[Node] = None,
                 decimal_separator: str = DEFAULT_DECIMAL_SEPARATOR,
                 filename: str = '', content: Optional[str] = None):
        """
        Initialize the parser.

        Args:
            node: The context node
            decimal_separator: Decimal separator used when reading float values
            filename: Name of the file the document was loaded from
            content: Markup the document was loaded from, if loaded from a string
        """
        self._node = node
        self._decimal_separator = _check_decimal_separator(decimal_separator)
        self.filename = filename
        self.content = content

    @property
    def root(self) -> Optional[Node]:
        """The context node of this parser."""
        return self._node

    @property
    def decimal_separator(self) -> str:
        return self._decimal_separator

    @classmethod
    def from_settings(cls, settings=None, node: Optional[Node] = None) -> 'XmlSimpleParser':
        """
        Create a parser configured from a Settings instance.

        Args:
            settings: Settings to read the "parser" section from (default: global instance)
            node: The context node

        Returns:
            New parser instance
        """
        if settings is None:
            from xmlsimple.config.settings import Settings
            settings = Settings.get_instance()
        params = settings.get_parser_params()
        return cls(node, decimal_separator=params['decimal_separator'])

    @classmethod
    def from_file(cls, filename: Union[str, os.PathLike],
                  decimal_separator: str = DEFAULT_DECIMAL_SEPARATOR) -> 'XmlSimpleParser':
        """
        Load an XML file.

        Args:
            filename: Path to the XML file
            decimal_separator: Decimal separator used when reading float values

        Returns:
            Parser whose context node is the document root

        Raises:
            XmlSourceError: If the file cannot be opened
            XmlParseError: If the file is not well-formed XML
        """
        filename = os.fspath(filename)
        try:
            with open(filename, 'rb') as f:
                tree = etree.parse(f, make_xml_parser())
        except OSError as e:
            logger.error(f"Error reading XML file {filename}: {e}")
            raise XmlSourceError(filename, None, f'Could not read "{filename}": {e}') from e
        except etree.XMLSyntaxError as e:
            logger.error(f"Error parsing XML file {filename}: {e}")
            raise XmlParseError(filename, _read_content(filename)) from e

        logger.debug(f"Loaded XML file {filename}")
        return cls(Node.from_element(tree.getroot()), decimal_separator, filename=filename)

    @classmethod
    def from_string(cls, markup: Union[str, bytes],
                    decimal_separator: str = DEFAULT_DECIMAL_SEPARATOR,
                    filename: str = '') -> 'XmlSimpleParser':
        """
        Load an XML document from a string.

        Args:
            markup: The XML content
            decimal_separator: Decimal separator used when reading float values
            filename: Name to report in errors (empty for inline markup)

        Returns:
            Parser whose context node is the document root

        Raises:
            XmlParseError: If the markup is not well-formed XML
        """
        # A str has already been decoded, whatever its declaration says
        encoding = 'utf-8' if isinstance(markup, str) else None
        data = markup.encode('utf-8') if isinstance(markup, str) else markup
        try:
            element = etree.fromstring(data, make_xml_parser(encoding))
        except etree.XMLSyntaxError as e:
            logger.error(f"Error parsing XML string: {e}")
            raise XmlParseError(filename, markup) from e

        return cls(Node.from_element(element), decimal_separator, filename=filename, content=markup)

    @classmethod
    def from_element(cls, element, decimal_separator: str = DEFAULT_DECIMAL_SEPARATOR) -> 'XmlSimpleParser':
        """
        Load an element that was already parsed with lxml.

        Args:
            element: An lxml element or element tree
            decimal_separator: Decimal separator used when reading float values

        Returns:
            Parser whose context node is the converted element
        """
        if isinstance(element, etree._ElementTree):
            element = element.getroot()
        if not isinstance(element, etree._Element) or not isinstance(element.tag, str):
            raise XmlParseError('', None, f"Could not import {type(element).__name__} as XML element")
        return cls(Node.from_element(element), decimal_separator)

    def create_child_parser(self, node: Union[Node, str]) -> 'XmlSimpleParser':
        """
        Create a parser scoped to another node, keeping this parser's settings.

        Args:
            node: The new context node, either a Node or a path from the context node

        Returns:
            New parser instance

        Raises:
            XmlNodeNotFoundError: If node is a path that cannot be resolved
        """
        if isinstance(node, str):
            node = self.get_node(node)
        return XmlSimpleParser(node, self._decimal_separator, filename=self.filename)

    def resolve(self, path: str, node: Optional[Node] = None) -> Resolution:
        """
        Walk a path from a start node.

        Each segment is looked up among the direct children of the node
        reached so far. If several children share the name, the first one in
        document order is taken. The walk stops at the first segment that has
        no match.

        Args:
            path: Path expression ("" or "." for the start node itself)
            node: Start node (default: the context node)

        Returns:
            Resolution holding either the target node or an XmlNodeNotFoundError
        """
        current = self._node if node is None else node
        segments = parse_path(path)
        if not segments:
            return Resolution(current)

        for segment in segments:
            child = current.find_child(segment.name, segment.prefix) if current is not None else None
            if child is None:
                return Resolution(error=XmlNodeNotFoundError(path, current))
            current = child
        return Resolution(current)

    def get_node(self, path: str, default: Any = RAISE, node: Optional[Node] = None) -> Any:
        """
        Get a node by its path.

        Args:
            path: Path using "." or "->" as separator; "" or "." returns the start node
            default: Value to return if the node does not exist (raises if omitted)
            node: Start node (default: the context node)

        Returns:
            The node, or the default

        Raises:
            XmlNodeNotFoundError: If the node does not exist and no default was given
        """
        return self.resolve(path, node).unwrap(default)

    def _node_ref(self, node: NodeRef) -> Node:
        if node is None:
            return self._node
        if isinstance(node, str):
            return self.get_node(node)
        return node

    def get_children(self, tag_name: str, node: NodeRef = None) -> List[Node]:
        """
        Get all direct children with the given tag name.

        Args:
            tag_name: Tag name, optionally as "prefix:name"
            node: Parent node or path to it (default: the context node)

        Returns:
            Matching children in document order
        """
        node = self._node_ref(node)
        if node is None:
            return []
        segment = parse_segment(tag_name)
        return node.find_children(segment.name, segment.prefix)

    def get_children_match(self, tag_name_pattern: Union[str, Pattern], node: NodeRef = None) -> List[Node]:
        """Get all direct children whose tag name matches a regular expression."""
        node = self._node_ref(node)
        if node is None:
            return []
        pattern = re.compile(tag_name_pattern)
        return [child for child in node.children if pattern.search(child.name)]

    def get_attributes(self, node: NodeRef = None) -> Dict[str, str]:
        """
        Get the attributes of a node.

        Args:
            node: The node or path to it (default: the context node)

        Returns:
            Dictionary mapping attribute names to values
        """
        node = self._node_ref(node)
        if node is None:
            return {}
        return dict(node.attributes)

    def get_attribute_value(self, name: str, default: Any = RAISE, node: NodeRef = None) -> Any:
        """
        Get the value of an attribute of a node.

        Args:
            name: Attribute name
            default: Value to return if the attribute does not exist (raises if omitted)
            node: The node or path to it (default: the context node)

        Returns:
            The attribute value, or the default

        Raises:
            XmlAttributeNotFoundError: If the attribute does not exist and no default was given
            XmlNodeNotFoundError: If node is a path that cannot be resolved
        """
        node = self._node_ref(node)
        if node is not None and name in node.attributes:
            return node.attributes[name]
        if default is RAISE:
            raise XmlAttributeNotFoundError(name, node)
        return default

    def _lookup_value(self, path: str, default: Any, node: Optional[Node]) -> Tuple[bool, Any]:
        """Resolve a path to its text; the flag is False if the default was used."""
        resolution = self.resolve(path, node)
        if not resolution.found:
            return False, resolution.unwrap(default)
        if resolution.node is None:
            return True, ''
        return True, resolution.node.text or ''

    def get_node_value(self, path: str, default: Any = RAISE, node: Optional[Node] = None) -> Any:
        """
        Get the text of a node by its path.

        Args:
            path: Path using "." or "->" as separator
            default: Value to return if the node does not exist (raises if omitted)
            node: Start node (default: the context node)

        Returns:
            The node text ("" for an empty node), or the default
        """
        return self._lookup_value(path, default, node)[1]

    def get_node_value_int(self, path: str, default: Any = RAISE, node: Optional[Node] = None) -> Any:
        """Get the value of a node as integer. The default is returned as is."""
        found, value = self._lookup_value(path, default, node)
        if found:
            value = int(value.strip())
        return value

    def get_node_value_float(self, path: str, default: Any = RAISE,
                             decimal_separator: Optional[str] = None,
                             node: Optional[Node] = None) -> Any:
        """
        Get the value of a node as float.

        Args:
            path: Path using "." or "->" as separator
            default: Value to return if the node does not exist (raises if omitted)
            decimal_separator: Separator to use instead of the parser's one
            node: Start node (default: the context node)

        Returns:
            The parsed float, or the default unchanged
        """
        if decimal_separator is None:
            decimal_separator = self._decimal_separator

        found, value = self._lookup_value(path, default, node)
        if found:
            value = float(value.replace(decimal_separator, '.').strip())
        return value

    def get_node_value_bool(self, path: str, default: Any = RAISE, node: Optional[Node] = None) -> Any:
        """Get the value of a node as boolean; "true" and "1" are true, ignoring case."""
        found, value = self._lookup_value(path, default, node)
        if found:
            value = value.lower() in TRUE_VALUES
        return value

    def get_node_value_timestamp(self, path: str, default: Any = RAISE, node: Optional[Node] = None) -> Any:
        """
        Get the value of a date node as Unix timestamp.

        Dates without time zone are taken as UTC. Relative expressions such as
        "+1 day" or "next monday" are not understood and give None; "now" and
        "today" are.

        Returns:
            Seconds since the epoch, None if the text is not a date, or the default
        """
        found, value = self._lookup_value(path, default, node)
        if found:
            parsed = pd.to_datetime(value.strip(), errors='coerce')
            value = None if pd.isna(parsed) else int(parsed.timestamp())
        return value

    def get_node_value_datetime(self, path: str, default: Any = RAISE, node: Optional[Node] = None) -> Any:
        """
        Get the value of a date node as datetime.

        Uses the same parsing as get_node_value_timestamp(), so relative
        expressions other than "now" and "today" are not supported.

        Raises:
            ValueError: If the text cannot be read as date
        """
        found, value = self._lookup_value(path, default, node)
        if found:
            parsed = pd.to_datetime(value.strip())
            if pd.isna(parsed):
                raise ValueError(f"Could not parse date value {value!r}")
            value = parsed.to_pydatetime()
        return value

    def __repr__(self) -> str:
        return f"<XmlSimpleParser root={self._node!r}>"
