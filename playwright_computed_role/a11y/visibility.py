"""Accessibility-tree exclusion (hidden elements)."""

from typing import Dict, List

from ..dom.nodes import Element, Node, composed_parent
from ..dom.style import Presentation, resolve_presentation


class VisibilityResolver:
    """
    Decides whether nodes are excluded from the accessibility tree.

    A node is hidden when it or any composed ancestor carries ``hidden``,
    ``aria-hidden="true"`` or ``inert``, or resolves to ``display: none`` or
    ``visibility: hidden``. Presentation lookups and verdicts are cached, so
    one resolver must only live as long as one query.
    """

    def __init__(self) -> None:
        self._presentation: Dict[Element, Presentation] = {}
        self._hidden: Dict[Node, bool] = {}

    def presentation(self, element: Element) -> Presentation:
        cached = self._presentation.get(element)
        if cached is None:
            cached = self._presentation[element] = resolve_presentation(element)
        return cached

    def hides_itself(self, element: Element) -> bool:
        if element.has_attribute("hidden"):
            return True
        if (element.get_attribute("aria-hidden") or "").strip().lower() == "true":
            return True
        presentation = self.presentation(element)
        if presentation.display == "none" or presentation.visibility == "hidden":
            return True
        return element.inert

    def is_hidden(self, target: Node) -> bool:
        path: List[Node] = []
        hidden = False
        node = target
        while node is not None:
            cached = self._hidden.get(node)
            if cached is not None:
                hidden = cached
                break
            path.append(node)
            if isinstance(node, Element) and self.hides_itself(node):
                hidden = True
                break
            node = composed_parent(node)
        # Every node walked so far sits at or below the deciding node.
        for walked in path:
            self._hidden[walked] = hidden
        return hidden
