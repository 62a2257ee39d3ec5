"""Per-query computation state."""

from typing import Dict, Optional, Set, Tuple

from ..dom.nodes import Element, Node
from ..dom.tracker import EncapsulationTracker, tracker as default_tracker
from .index import ScopeIndex
from .names import as_text, compute_element_description, compute_element_name
from .roles import compute_element_role
from .visibility import VisibilityResolver

_UNSET = object()


class AccessibilityContext:
    """
    Caches shared by one top-level computation.

    The document can change between queries, so a context must never be
    reused across them; create a new one per call. The tracker is the only
    long-lived collaborator and is only read.

    ``cycle_hit`` is raised whenever a name lookup runs into an element
    already on the call chain. A name computed while it is raised depends on
    where the chain started, so it is never stored in ``names``.
    """

    def __init__(self, tracker: Optional[EncapsulationTracker] = None):
        self.tracker = tracker if tracker is not None else default_tracker
        self.visibility = VisibilityResolver()
        self.names: Dict[Tuple[Element, bool], Tuple[str, str]] = {}
        self.in_progress: Set[Element] = set()
        self.cycle_hit = False
        self._roles: Dict[Element, Optional[str]] = {}
        self._indexes: Dict[Node, ScopeIndex] = {}

    def is_hidden(self, node: Node) -> bool:
        return self.visibility.is_hidden(node)

    def scope_index(self, node: Node) -> ScopeIndex:
        """Id and label index of the tree ``node`` belongs to, built on first use."""
        root = node.root_node()
        index = self._indexes.get(root)
        if index is None:
            index = self._indexes[root] = ScopeIndex(root)
        return index

    def role(self, element: Element) -> Optional[str]:
        role = self._roles.get(element, _UNSET)
        if role is _UNSET:
            role = self._roles[element] = compute_element_role(element, self)
        return role

    def accessible_name(
        self,
        element: Element,
        known_role: Optional[str] = None,
        allow_name_from_content: bool = True,
    ) -> str:
        return compute_element_name(element, self, known_role, allow_name_from_content)

    def description(self, element: Element) -> str:
        return compute_element_description(element, self)

    def text(self, node: Node) -> str:
        return as_text(node, self)
