"""Id and label lookups for one tree, built in a single pass."""

from typing import Dict, List, Optional

from ..dom.nodes import Element, Node, TreeScope


class ScopeIndex:
    """
    Element ids and label associations of the tree rooted at ``root``.

    ``by_id`` keeps the first element in tree order for each id, matching
    ``getElementById``. ``labels_for`` maps a ``for`` value to the labels
    carrying it, and ``labels_of`` maps a labelable control to its labels.
    Both lists are in tree order.
    """

    def __init__(self, root: Node):
        self.root = root
        self.by_id: Dict[str, Element] = {}
        self.labels_for: Dict[str, List[Element]] = {}
        self.labels_of: Dict[Element, List[Element]] = {}

        labels: List[Element] = []
        for node in root.iter_descendants():
            if not isinstance(node, Element):
                continue
            if node.id:
                self.by_id.setdefault(node.id, node)
            if node.local_name == "label":
                labels.append(node)
                target = node.get_attribute("for")
                if target is not None:
                    self.labels_for.setdefault(target, []).append(node)

        for label in labels:
            control = self._control(label)
            if control is not None:
                self.labels_of.setdefault(control, []).append(label)

    def _control(self, label: Element) -> Optional[Element]:
        if label.has_attribute("for"):
            if not isinstance(self.root, TreeScope):
                return None
            target = self.by_id.get(label.get_attribute("for") or "")
            return target if target is not None and target.is_labelable else None
        for node in label.iter_descendants():
            if isinstance(node, Element) and node.is_labelable:
                return node
        return None

    def get_element_by_id(self, element_id: str) -> Optional[Element]:
        return self.by_id.get(element_id)
