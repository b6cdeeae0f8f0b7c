"""Generic queries over parsed XML element trees.

Nothing in here knows about feeds. A node is an ElementTree ``Element``;
its children, in document order, are its leading ``text`` fragment followed
by each child element and that element's ``tail`` fragment.
"""

import xml.etree.ElementTree as ET
from collections.abc import Callable, Iterator

Predicate = Callable[[ET.Element], bool]


def local_name(tag: str) -> str:
    """Return a tag without its ``{namespace-uri}`` prefix."""
    if tag.startswith("{"):
        return tag.rpartition("}")[2]
    return tag


def named(name: str) -> Predicate:
    """Build a predicate matching elements whose local name equals ``name``."""

    def predicate(element: ET.Element) -> bool:
        return isinstance(element.tag, str) and local_name(element.tag) == name

    return predicate


def find_all(root: ET.Element, predicate: Predicate, recurse: bool) -> list[ET.Element]:
    """Find every element under (and including) ``root`` matching ``predicate``.

    Traversal is depth-first pre-order, so results come back in document
    order. When ``recurse`` is false the children of a matching element are
    not searched, but its siblings still are.

    Args:
        root: Element to start from
        predicate: Test applied to each element
        recurse: Whether to keep searching inside matching elements

    Returns:
        Matching elements in document order
    """
    finds: list[ET.Element] = []
    stack = [root]
    while stack:
        element = stack.pop()
        if predicate(element):
            finds.append(element)
            if not recurse:
                continue
        stack.extend(reversed(element))
    return finds


def find_all_text(node: ET.Element, recurse: bool) -> str:
    """Concatenate the text fragments below ``node`` in document order.

    With ``recurse`` the text inside child elements is included as well.
    Tag names never appear in the result.
    """
    parts = [node.text or ""]
    for child in node:
        if recurse:
            parts.append(find_all_text(child, recurse))
        parts.append(child.tail or "")
    return "".join(parts)


def find_tag_text(node: ET.Element, predicate: Predicate) -> str:
    """Return the immediate text of the single element matching ``predicate``.

    Zero or multiple matches give an empty string rather than an error, so
    optional fields simply come back blank.
    """
    finds = find_all(node, predicate, recurse=False)
    if len(finds) != 1:
        return ""
    return find_all_text(finds[0], recurse=False)


class TreeBuilder:
    """Incremental XML parser producing complete element trees.

    Data is pushed in with :meth:`feed`; every tree whose root element closes
    within that chunk is yielded. :meth:`close` ends the stream and raises
    ``ET.ParseError`` if a tree is still open, including when no element was
    ever seen.
    """

    def __init__(self):
        self._parser = ET.XMLPullParser(events=("start", "end"))
        self._depth = 0

    def feed(self, data: bytes | str) -> Iterator[ET.Element]:
        """Push a chunk of the document and iterate over trees it completes."""
        self._parser.feed(data)
        return self._completed_trees()

    def close(self) -> Iterator[ET.Element]:
        """End the stream and iterate over any trees still queued."""
        self._parser.close()
        return self._completed_trees()

    def _completed_trees(self) -> Iterator[ET.Element]:
        for event, element in self._parser.read_events():
            if event == "start":
                self._depth += 1
                continue
            self._depth -= 1
            if self._depth == 0:
                yield element
