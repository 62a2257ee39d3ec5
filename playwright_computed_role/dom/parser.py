"""Build an in-process document from HTML markup."""

from html.parser import HTMLParser
from typing import List, Optional, Tuple

from .nodes import Document, Element, Node, ShadowRoot, Text
from .tracker import EncapsulationTracker, tracker as default_tracker

VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta",
    "param", "source", "track", "wbr",
})


class _TreeBuilder(HTMLParser):
    """Streams parser events into a node tree.

    Declarative shadow roots (``<template shadowrootmode="...">``) become a
    shadow root of the template's parent, attached through the tracker.
    """

    def __init__(self, tracker: EncapsulationTracker) -> None:
        super().__init__(convert_charrefs=True)
        self.tracker = tracker
        self.document = Document()
        self._open: List[Tuple[str, Node]] = [("#document", self.document)]

    @property
    def _current(self) -> Node:
        return self._open[-1][1]

    def handle_starttag(self, tag: str, attrs_in: List[Tuple[str, Optional[str]]]) -> None:
        attrs = {name: value or "" for name, value in attrs_in}
        mode = attrs.get("shadowrootmode")
        if tag == "template" and isinstance(self._current, Element) and mode in ("open", "closed"):
            root = self.tracker.attach_shadow(self._current, mode)
            self._open.append((tag, root))
            return

        element = Element(tag, attrs)
        self._current.append_child(element)
        if tag not in VOID_ELEMENTS:
            self._open.append((tag, element))

    def handle_startendtag(self, tag: str, attrs_in: List[Tuple[str, Optional[str]]]) -> None:
        attrs = {name: value or "" for name, value in attrs_in}
        self._current.append_child(Element(tag, attrs))

    def handle_endtag(self, tag: str) -> None:
        # Close up to the nearest matching open tag; stray end tags are ignored.
        for index in range(len(self._open) - 1, 0, -1):
            if self._open[index][0] == tag:
                del self._open[index:]
                return

    def handle_data(self, data: str) -> None:
        current = self._current
        if current.child_nodes and isinstance(current.child_nodes[-1], Text):
            current.child_nodes[-1].data += data
        else:
            current.append_child(Text(data))


def parse_html(markup: str, tracker: Optional[EncapsulationTracker] = None) -> Document:
    """
    Parse HTML into a Document.

    Args:
        markup: HTML source
        tracker: Tracker that records declarative shadow roots
            (defaults to the process-wide tracker)

    Returns:
        Parsed document
    """
    builder = _TreeBuilder(tracker if tracker is not None else default_tracker)
    builder.feed(markup)
    builder.close()
    return builder.document


def parse_fragment(markup: str, tracker: Optional[EncapsulationTracker] = None) -> Element:
    """Parse markup and return its first top-level element."""
    document = parse_html(markup, tracker)
    if not document.children:
        raise ValueError(f"markup contains no element: {markup[:40]!r}")
    return document.children[0]
