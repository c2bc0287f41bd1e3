"""
Node tree used by the xmlsimple parsers.

Documents are parsed with lxml and then converted into a tree of Node objects.
A Node holds its tag name, namespace information, attributes, text and child
nodes in document order. Nodes hold no reference to their parent.
"""

from typing import Dict, Iterator, List, Optional
from lxml import etree

from xmlsimple.core.constants import NAMESPACE_SEPARATOR

XML_NAMESPACE = 'http://www.w3.org/XML/1998/namespace'


class Node:
    """
    An element of a parsed XML document.

    A node is considered empty if it has neither children nor text.
    """

    def __init__(self, name: str, text: Optional[str] = None,
                 attributes: Optional[Dict[str, str]] = None,
                 children: Optional[List['Node']] = None,
                 prefix: Optional[str] = None, namespace: Optional[str] = None,
                 nsmap: Optional[Dict[Optional[str], str]] = None):
        """
        Initialize a node.

        Args:
            name: Local tag name
            text: Text content of the node itself (None if it has none)
            attributes: Attribute values by name, namespaced ones as "prefix:name"
            children: Child nodes in document order
            prefix: Namespace prefix the tag was written with
            namespace: Namespace URI of the tag
            nsmap: Namespace prefixes in scope for this node
        """
        self.name = name
        self.text = text
        self.attributes = attributes or {}
        self.children = children or []
        self.prefix = prefix
        self.namespace = namespace
        self.nsmap = nsmap or {}

    @property
    def qualified_name(self) -> str:
        """Tag name as written in the document, including the prefix."""
        if self.prefix:
            return f"{self.prefix}{NAMESPACE_SEPARATOR}{self.name}"
        return self.name

    def is_empty(self) -> bool:
        return not self.children and self.text is None

    def iter_children(self, name: str, prefix: Optional[str] = None) -> Iterator['Node']:
        """
        Iterate over the direct children with the given name.

        Args:
            name: Local tag name to match
            prefix: Namespace prefix the children must carry (None for unprefixed)

        Yields:
            Matching children in document order
        """
        for child in self.children:
            if child.name == name and child.prefix == prefix:
                yield child

    def find_children(self, name: str, prefix: Optional[str] = None) -> List['Node']:
        return list(self.iter_children(name, prefix))

    def find_child(self, name: str, prefix: Optional[str] = None) -> Optional['Node']:
        """Return the first direct child with the given name, or None."""
        return next(self.iter_children(name, prefix), None)

    def to_element(self, parent: Optional[etree._Element] = None) -> etree._Element:
        """
        Convert this node and its descendants back into an lxml element.

        Args:
            parent: Element to attach the new element to

        Returns:
            The created element
        """
        tag = self.name if self.namespace is None else f"{{{self.namespace}}}{self.name}"
        if parent is None:
            element = etree.Element(tag, nsmap=self.nsmap)
        else:
            element = etree.SubElement(parent, tag, nsmap=self.nsmap)

        for key, value in self.attributes.items():
            element.set(self._attribute_key(key), value)

        element.text = self.text
        for child in self.children:
            child.to_element(element)
        return element

    def to_xml(self) -> str:
        """Serialize the node for diagnostics."""
        return etree.tostring(self.to_element(), encoding='unicode')

    def _attribute_key(self, name: str) -> str:
        # Translate "prefix:name" back into lxml's "{uri}name" notation
        prefix, sep, local = name.partition(NAMESPACE_SEPARATOR)
        if not sep:
            return name
        if prefix == 'xml':
            return f"{{{XML_NAMESPACE}}}{local}"
        uri = self.nsmap.get(prefix)
        return f"{{{uri}}}{local}" if uri else local

    @classmethod
    def from_element(cls, element: etree._Element) -> 'Node':
        """
        Build a node tree from an lxml element.

        Comments and processing instructions are skipped, but the text that
        follows them still counts towards the parent's text.

        Args:
            element: The lxml element to convert

        Returns:
            Root node of the converted tree
        """
        qname = etree.QName(element)
        texts = [element.text] if element.text is not None else []
        children = []

        for child in element:
            if isinstance(child.tag, str):
                children.append(cls.from_element(child))
            if child.tail is not None:
                texts.append(child.tail)

        return cls(
            name=qname.localname,
            text=''.join(texts) if texts else None,
            attributes=_convert_attributes(element),
            children=children,
            prefix=element.prefix,
            namespace=qname.namespace,
            nsmap=dict(element.nsmap),
        )

    def __repr__(self) -> str:
        return f"<Node {self.qualified_name} children={len(self.children)}>"


def _convert_attributes(element: etree._Element) -> Dict[str, str]:
    """Map lxml attribute keys to "name" or "prefix:name"."""
    prefixes = {uri: prefix for prefix, uri in element.nsmap.items() if prefix is not None}
    prefixes[XML_NAMESPACE] = 'xml'

    attributes = {}
    for key, value in element.attrib.items():
        if key.startswith('{'):
            qname = etree.QName(key)
            prefix = prefixes.get(qname.namespace)
            key = f"{prefix}{NAMESPACE_SEPARATOR}{qname.localname}" if prefix else qname.localname
        attributes[key] = value
    return attributes
