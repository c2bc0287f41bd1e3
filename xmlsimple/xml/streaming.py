"""
Streaming XML parser for memory-efficient XML processing.

This module processes large XML files by streaming through them rather than
loading them entirely into memory. Elements found at a configured path are cut
out of the stream one at a time, parsed on their own and handed to a callback
as an XmlSimpleParser scoped to the element.
"""

import io
import os
import contextlib
import logging
from typing import IO, Callable, Iterator, List, Optional, Union
from lxml import etree

from xmlsimple.core.exceptions import XmlParseError, XmlSourceError
from xmlsimple.xml.parser import XmlSimpleParser
from xmlsimple.xml.path import join_path, parse_path

logger = logging.getLogger(__name__)

Source = Union[str, os.PathLike, IO[bytes]]
NodeCallback = Callable[[XmlSimpleParser], None]


def _qualified_name(element: etree._Element) -> str:
    """Tag name as written in the document."""
    localname = etree.QName(element).localname
    return f"{element.prefix}:{localname}" if element.prefix else localname


def _release(element: etree._Element) -> None:
    """Free an element that has been fully processed, along with its preceding siblings."""
    element.clear()
    parent = element.getparent()
    if parent is not None:
        while element.getprevious() is not None:
            del parent[0]


class StreamParser:
    """
    A memory-efficient XML parser that streams through large XML files.

    While reading, the parser keeps the names of all open elements on a stack.
    Whenever the stack joined with dots equals the process path, the complete
    element is parsed as a fragment and passed to process_node(). Elements
    outside the process path are discarded once they have been read.

    Subclasses may override process_node() instead of passing a callback, and
    init_parser() to configure the parser created for each fragment.
    """

    def __init__(self, source: Source, process_path: str,
                 on_match: Optional[NodeCallback] = None, settings=None,
                 decimal_separator: Optional[str] = None, encoding: Optional[str] = None):
        """
        Initialize the stream parser.

        Args:
            source: Path to the XML file, or a binary file object
            process_path: Path of the elements to process, e.g. "root.item"
            on_match: Callback invoked with a parser for each matching element
            settings: Settings to read parser options from
            decimal_separator: Decimal separator for the fragment parsers
            encoding: Encoding that overrides the document's XML declaration
        """
        self.source = source
        self.process_path = join_path([str(segment) for segment in parse_path(process_path)])
        self.on_match = on_match
        self.content = None
        self.encoding = encoding

        if decimal_separator is None and settings is not None:
            decimal_separator = settings.get_parser_params()['decimal_separator']
        self.decimal_separator = decimal_separator

    @property
    def source_name(self) -> str:
        """File name of the source, empty if it has none."""
        if isinstance(self.source, (str, os.PathLike)):
            return os.fspath(self.source)
        name = getattr(self.source, 'name', '')
        return name if isinstance(name, str) else ''

    def process_node(self, node_parser: XmlSimpleParser) -> None:
        """
        Gets called for every element found at the process path.

        Args:
            node_parser: Parser whose context node is the matched element
        """
        if self.on_match is None:
            raise NotImplementedError("Pass on_match or override process_node()")
        self.on_match(node_parser)

    def init_parser(self, fragment: str) -> XmlSimpleParser:
        """
        Create the parser for a matched element.

        Args:
            fragment: Complete markup of the matched element

        Returns:
            Parser whose context node is the fragment root

        Raises:
            XmlParseError: If the fragment is not well-formed
        """
        kwargs = {'filename': self.source_name}
        if self.decimal_separator is not None:
            kwargs['decimal_separator'] = self.decimal_separator
        return XmlSimpleParser.from_string(fragment, **kwargs)

    @contextlib.contextmanager
    def _open(self) -> Iterator[IO[bytes]]:
        if not isinstance(self.source, (str, os.PathLike)):
            yield self.source
            return

        filename = os.fspath(self.source)
        try:
            f = open(filename, 'rb')
        except OSError as e:
            logger.error(f"Error opening XML file {filename}: {e}")
            raise XmlSourceError(filename, None, f'Could not read "{filename}": {e}') from e
        with f:
            yield f

    def _iterparse(self, f: IO[bytes]) -> Iterator:
        """Parse events for the open source."""
        return etree.iterparse(f, events=('start', 'end'), remove_blank_text=True,
                               encoding=self.encoding)

    def iter_nodes(self) -> Iterator[XmlSimpleParser]:
        """
        Stream through the source and yield a parser for each matching element.

        Yields:
            Parsers scoped to the matched elements, in document order

        Raises:
            XmlSourceError: If the source cannot be opened
            XmlParseError: If the source or a fragment is not well-formed
        """
        with self._open() as f:
            stack: List[str] = []
            match_depth = None

            try:
                for event, element in self._iterparse(f):
                    if event == 'start':
                        stack.append(_qualified_name(element))
                        if match_depth is None and join_path(stack) == self.process_path:
                            match_depth = len(stack)
                        continue

                    if match_depth == len(stack):
                        match_depth = None
                        fragment = etree.tostring(element, encoding='unicode', with_tail=False)
                        yield self.init_parser(fragment)

                    # Children of an open match are still needed for its fragment
                    if match_depth is None:
                        _release(element)
                    stack.pop()
            except etree.XMLSyntaxError as e:
                logger.error(f"Error streaming XML {self.source_name or 'string'}: {e}")
                raise XmlParseError(self.source_name, self.content) from e

    def parse(self) -> int:
        """
        Start streaming and processing the source.

        Returns:
            Number of processed elements
        """
        logger.debug(f"Streaming {self.source_name or 'string'} for {self.process_path}")
        count = 0
        with contextlib.closing(self.iter_nodes()) as nodes:
            for node_parser in nodes:
                self.process_node(node_parser)
                count += 1

        logger.debug(f"Processed {count} elements at {self.process_path}")
        return count


def iter_nodes(source: Source, process_path: str, **kwargs) -> Iterator[XmlSimpleParser]:
    """Yield a parser for each element at process_path in source."""
    return StreamParser(source, process_path, **kwargs).iter_nodes()


def stream(source: Source, process_path: str, on_match: NodeCallback, **kwargs) -> int:
    """
    Stream an XML file and call on_match for every element at process_path.

    Args:
        source: Path to the XML file, or a binary file object
        process_path: Path of the elements to process
        on_match: Callback receiving a parser scoped to each element
        **kwargs: Further StreamParser options

    Returns:
        Number of processed elements
    """
    return StreamParser(source, process_path, on_match=on_match, **kwargs).parse()


def stream_string(markup: Union[str, bytes], process_path: str, on_match: NodeCallback, **kwargs) -> int:
    """Like stream(), but reads the document from a string."""
    if isinstance(markup, str):
        # Already decoded, whatever its declaration says
        kwargs.setdefault('encoding', 'utf-8')
        data = markup.encode('utf-8')
    else:
        data = markup
    parser = StreamParser(io.BytesIO(data), process_path, on_match=on_match, **kwargs)
    parser.content = markup
    return parser.parse()
