"""
Custom exceptions for the xmlsimple package.
"""

class XmlSimpleError(Exception):
    """Base class for all xmlsimple exceptions."""
    pass

class ConfigurationError(XmlSimpleError):
    """Raised when there's a configuration issue."""
    pass

class XmlNodeNotFoundError(XmlSimpleError):
    """
    Raised when a node path cannot be resolved.

    Attributes:
        path: The full path that was requested
        node: The node at which resolution failed
        xml: Markup of that node, for diagnostics
    """

    def __init__(self, path: str, node=None):
        super().__init__(f"XML node {path} not found")
        self.path = path
        self.node = node
        self.xml = node.to_xml() if node is not None else None

class XmlAttributeNotFoundError(XmlSimpleError):
    """
    Raised when a node has no attribute with the requested name.

    Attributes:
        attribute_name: The requested attribute name
        node: The node that was inspected
        xml: Markup of that node, for diagnostics
    """

    def __init__(self, attribute_name: str, node=None):
        super().__init__(f"XML attribute {attribute_name} not found")
        self.attribute_name = attribute_name
        self.node = node
        self.xml = node.to_xml() if node is not None else None

class XmlParseError(XmlSimpleError):
    """
    Raised when markup cannot be parsed into a node tree.

    Attributes:
        filename: Name of the source file, empty for inline markup
        content: The raw content that failed to parse, if available
    """

    def __init__(self, filename: str = '', content=None, message: str = ''):
        super().__init__(message or f'Could not parse "{filename}".')
        self.filename = filename
        self.content = content

class XmlSourceError(XmlParseError):
    """Raised when the underlying source cannot be opened or read."""
    pass
