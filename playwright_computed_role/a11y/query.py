"""
Query engine: find elements by computed role, accessible name and description.

Selectors are JSON payloads such as ``{"role": "button", "name": "Save"}``.
Matching walks the composed tree lazily, so ``query`` stops at the first hit.
"""

import json
from typing import Any, Iterator, List, Mapping, Optional, Set, Union

from pydantic import ValidationError

from ..core.errors import SelectorParseError
from ..dom.nodes import Element, Node, TEXT_NODE
from ..dom.tracker import EncapsulationTracker
from ..types import RoleFilter
from ..utils.logger import ComputedRoleLogger, get_logger
from .context import AccessibilityContext

FilterLike = Union[RoleFilter, Mapping[str, Any], str]


def parse_selector(selector: FilterLike) -> RoleFilter:
    """
    Turn a selector payload into a RoleFilter.

    Args:
        selector: JSON text, a mapping, or an existing RoleFilter

    Returns:
        Parsed filter

    Raises:
        SelectorParseError: If the JSON is malformed or does not describe a filter
    """
    if isinstance(selector, RoleFilter):
        return selector
    raw = selector
    if isinstance(selector, str):
        try:
            raw = json.loads(selector)
        except json.JSONDecodeError as e:
            raise SelectorParseError(selector, str(e)) from e
    if not isinstance(raw, Mapping):
        raise SelectorParseError(str(selector), "payload must be a JSON object")
    try:
        return RoleFilter.model_validate(dict(raw))
    except ValidationError as e:
        raise SelectorParseError(str(selector), str(e)) from e


class TreeWalker:
    """
    Depth-first, pre-order iterator over the elements below ``root``.

    Hidden elements are pruned together with their subtree. A slot with
    assigned elements continues into those elements only, and a host with a
    tracked shadow root continues into that root only.
    """

    def __init__(self, root: Node, context: AccessibilityContext):
        self._context = context
        self._stack: List[Node] = [root]
        self._visited: Set[Node] = set()

    def __iter__(self) -> "TreeWalker":
        return self

    def __next__(self) -> Element:
        while self._stack:
            node = self._stack.pop()
            if node in self._visited:
                continue
            self._visited.add(node)

            if isinstance(node, Element):
                if self._context.is_hidden(node):
                    continue
                self._push(self._content_of(node))
                return node
            self._push(node.child_nodes)
        raise StopIteration

    def _push(self, nodes: List[Node]) -> None:
        self._stack.extend(node for node in reversed(nodes) if node.node_type != TEXT_NODE)

    def _content_of(self, element: Element) -> List[Node]:
        if element.local_name == "slot":
            assigned = element.assigned_elements(flatten=True)
            if assigned:
                return list(assigned)
        shadow_root = self._context.tracker.lookup_detached_root(element)
        if shadow_root is not None:
            return [shadow_root]
        return element.child_nodes


def _text_matches(actual: str, expected: str, exact: Optional[bool]) -> bool:
    if not actual:
        return False
    if exact:
        return actual == expected
    return expected.lower() in actual.lower()


def matches_filter(element: Element, role_filter: RoleFilter, context: AccessibilityContext) -> bool:
    """Check one element against a filter. The role check runs first since it is cheapest."""
    role = context.role(element)
    if role != role_filter.role:
        return False
    if role_filter.name:
        name = context.accessible_name(element, known_role=role)
        if not _text_matches(name, role_filter.name, role_filter.exact):
            return False
    if role_filter.description:
        description = context.description(element)
        if not _text_matches(description, role_filter.description, role_filter.exact):
            return False
    return True


def iter_matches(
    root: Node,
    selector: FilterLike,
    tracker: Optional[EncapsulationTracker] = None,
) -> Iterator[Element]:
    """
    Lazily yield elements under ``root`` (inclusive) that match ``selector``, in document order.

    A fresh computation context is created for the iteration, so nothing is
    cached between separate calls.
    """
    role_filter = parse_selector(selector)
    if not role_filter.role:
        return iter(())
    return _matches(root, role_filter, AccessibilityContext(tracker))


def _matches(root: Node, role_filter: RoleFilter, context: AccessibilityContext) -> Iterator[Element]:
    for element in TreeWalker(root, context):
        if matches_filter(element, role_filter, context):
            yield element


def query(root: Node, selector: FilterLike, tracker: Optional[EncapsulationTracker] = None) -> Optional[Element]:
    """Return the first matching element, or None."""
    return next(iter_matches(root, selector, tracker), None)


def query_all(root: Node, selector: FilterLike, tracker: Optional[EncapsulationTracker] = None) -> List[Element]:
    """Return every matching element in document order."""
    return list(iter_matches(root, selector, tracker))


class SelectorEngine:
    """
    The ``query``/``queryAll`` pair registered under an engine name.

    Args:
        tracker: Tracker holding shadow roots and role overrides
        logger: Category logger; defaults to the package logger
    """

    def __init__(
        self,
        tracker: Optional[EncapsulationTracker] = None,
        logger: Optional[ComputedRoleLogger] = None,
    ):
        self.tracker = tracker
        self.logger = logger or get_logger()

    def query(self, root: Node, selector: FilterLike) -> Optional[Element]:
        element = query(root, selector, self.tracker)
        self.logger.debug("query:run", "Query finished", selector=str(selector), found=element is not None)
        return element

    def query_all(self, root: Node, selector: FilterLike) -> List[Element]:
        elements = query_all(root, selector, self.tracker)
        self.logger.debug("query:run", "Query finished", selector=str(selector), count=len(elements))
        return elements

    def iter_matches(self, root: Node, selector: FilterLike) -> Iterator[Element]:
        return iter_matches(root, selector, self.tracker)
