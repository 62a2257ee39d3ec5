"""
In-process document model.

A small subset of the DOM: elements, text, documents and shadow roots, with
just enough behaviour (tree scopes, label association, slot assignment) for
role and accessible-name computation. Nodes compare by identity, so they can
key caches and weak references.
"""

import weakref
from typing import Dict, Iterator, List, Optional

from ..core.errors import InvalidStateError

ELEMENT_NODE = 1
TEXT_NODE = 3
DOCUMENT_NODE = 9
DOCUMENT_FRAGMENT_NODE = 11

INPUT_TYPES = frozenset({
    "button", "checkbox", "color", "date", "datetime-local", "email", "file",
    "hidden", "image", "month", "number", "password", "radio", "range", "reset",
    "search", "submit", "tel", "text", "time", "url", "week",
})

LABELABLE_TAGS = frozenset({"button", "input", "meter", "output", "progress", "select", "textarea"})


class Node:
    """Base class for every node in the tree."""

    node_type = 0

    def __init__(self) -> None:
        self.parent: Optional["Node"] = None
        self.child_nodes: List["Node"] = []

    @property
    def parent_element(self) -> Optional["Element"]:
        return self.parent if isinstance(self.parent, Element) else None

    @property
    def owner_document(self) -> Optional["Document"]:
        root = self.root_node()
        while isinstance(root, ShadowRoot) and root.host is not None:
            root = root.host.root_node()
        return root if isinstance(root, Document) else None

    def root_node(self) -> "Node":
        """Return the root of this node's tree (a document, shadow root or detached node)."""
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def append_child(self, child: "Node") -> "Node":
        if child.parent is not None:
            child.parent.remove_child(child)
        child.parent = self
        self.child_nodes.append(child)
        return child

    def remove_child(self, child: "Node") -> "Node":
        self.child_nodes.remove(child)
        child.parent = None
        return child

    @property
    def children(self) -> List["Element"]:
        return [node for node in self.child_nodes if isinstance(node, Element)]

    def iter_descendants(self) -> Iterator["Node"]:
        """Pre-order walk of the light tree below this node (shadow roots are not entered)."""
        stack = list(reversed(self.child_nodes))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.child_nodes))

    @property
    def text_content(self) -> str:
        return "".join(node.data for node in self.iter_descendants() if isinstance(node, Text))


class Text(Node):
    node_type = TEXT_NODE

    def __init__(self, data: str = "") -> None:
        super().__init__()
        self.data = data

    def append_child(self, child: Node) -> Node:
        raise InvalidStateError("append child", "text nodes cannot have children")

    def __repr__(self) -> str:
        return f"<Text {self.data[:20]!r}>"


class TreeScope(Node):
    """Shared behaviour of documents and shadow roots: id lookup within the scope."""

    def get_element_by_id(self, element_id: str) -> Optional["Element"]:
        if not element_id:
            return None
        for element in self.iter_elements():
            if element.id == element_id:
                return element
        return None

    def iter_elements(self) -> Iterator["Element"]:
        for node in self.iter_descendants():
            if isinstance(node, Element):
                yield node


class Document(TreeScope):
    node_type = DOCUMENT_NODE

    def create_element(self, tag: str, attributes: Optional[Dict[str, str]] = None) -> "Element":
        return Element(tag, attributes)

    def __repr__(self) -> str:
        return f"<Document children={len(self.child_nodes)}>"


class ShadowRoot(TreeScope):
    """Encapsulated sub-tree owned by a host element."""

    node_type = DOCUMENT_FRAGMENT_NODE

    def __init__(self, host: "Element", mode: str = "open") -> None:
        super().__init__()
        self._host = weakref.ref(host)
        self.mode = mode

    @property
    def host(self) -> Optional["Element"]:
        return self._host()

    def __repr__(self) -> str:
        return f"<ShadowRoot mode={self.mode}>"


class ElementInternals:
    """Semantics an element declares programmatically instead of via attributes.

    Referenced elements are held weakly; reading a reference list drops
    entries whose element is gone. ``None`` means "not set", which is
    different from an empty list.
    """

    def __init__(
        self,
        role: Optional[str] = None,
        aria_label: Optional[str] = None,
        aria_labelled_by_elements: Optional[List["Element"]] = None,
        aria_description: Optional[str] = None,
        aria_described_by_elements: Optional[List["Element"]] = None,
    ) -> None:
        self.role = role
        self.aria_label = aria_label
        self.aria_description = aria_description
        self._labelled_by: Optional[List[weakref.ref]] = None
        self._described_by: Optional[List[weakref.ref]] = None
        self.aria_labelled_by_elements = aria_labelled_by_elements
        self.aria_described_by_elements = aria_described_by_elements

    @staticmethod
    def _deref(refs: Optional[List[weakref.ref]]) -> Optional[List["Element"]]:
        if refs is None:
            return None
        return [element for element in (ref() for ref in refs) if element is not None]

    @property
    def aria_labelled_by_elements(self) -> Optional[List["Element"]]:
        return self._deref(self._labelled_by)

    @aria_labelled_by_elements.setter
    def aria_labelled_by_elements(self, elements: Optional[List["Element"]]) -> None:
        self._labelled_by = None if elements is None else [weakref.ref(e) for e in elements]

    @property
    def aria_described_by_elements(self) -> Optional[List["Element"]]:
        return self._deref(self._described_by)

    @aria_described_by_elements.setter
    def aria_described_by_elements(self, elements: Optional[List["Element"]]) -> None:
        self._described_by = None if elements is None else [weakref.ref(e) for e in elements]

    def __repr__(self) -> str:
        return f"<ElementInternals role={self.role!r} aria_label={self.aria_label!r}>"


class Element(Node):
    node_type = ELEMENT_NODE

    def __init__(self, tag: str, attributes: Optional[Dict[str, str]] = None) -> None:
        super().__init__()
        self.local_name = tag.lower()
        self.attributes: Dict[str, str] = {k.lower(): v for k, v in (attributes or {}).items()}
        # Presentation resolved by a browser (snapshots); None means "derive from markup".
        self.computed_style: Optional[Dict[str, str]] = None
        self._value: Optional[str] = None
        self._inert: Optional[bool] = None
        self._assigned: Optional[List[Node]] = None
        self._shadow_root: Optional[ShadowRoot] = None
        self._internals: Optional[ElementInternals] = None

    def __repr__(self) -> str:
        attrs = "".join(f" {k}={v!r}" for k, v in list(self.attributes.items())[:3])
        return f"<{self.local_name}{attrs}>"

    @property
    def tag_name(self) -> str:
        return self.local_name.upper()

    # Attributes

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name.lower())

    def has_attribute(self, name: str) -> bool:
        return name.lower() in self.attributes

    def set_attribute(self, name: str, value: str) -> None:
        self.attributes[name.lower()] = value

    def remove_attribute(self, name: str) -> None:
        self.attributes.pop(name.lower(), None)

    @property
    def id(self) -> str:
        return self.attributes.get("id", "")

    @property
    def title(self) -> str:
        return self.attributes.get("title", "")

    @property
    def alt(self) -> str:
        return self.attributes.get("alt", "")

    @property
    def type(self) -> str:
        """Input type; unknown or missing values fall back to ``text``."""
        value = self.attributes.get("type", "").strip().lower()
        return value if value in INPUT_TYPES else "text"

    @property
    def value(self) -> str:
        if self._value is not None:
            return self._value
        return self.attributes.get("value", "")

    @value.setter
    def value(self, value: str) -> None:
        self._value = value

    @property
    def multiple(self) -> bool:
        return "multiple" in self.attributes

    @property
    def inert(self) -> bool:
        if self._inert is not None:
            return self._inert
        return "inert" in self.attributes

    @inert.setter
    def inert(self, value: bool) -> None:
        self._inert = value

    # Labels

    @property
    def is_labelable(self) -> bool:
        if self.local_name == "input":
            return self.type != "hidden"
        return self.local_name in LABELABLE_TAGS

    @property
    def control(self) -> Optional["Element"]:
        """For ``label`` elements, the labelable control it is associated with."""
        if self.local_name != "label":
            return None
        if self.has_attribute("for"):
            scope = self.root_node()
            target = scope.get_element_by_id(self.get_attribute("for")) if isinstance(scope, TreeScope) else None
            return target if target is not None and target.is_labelable else None
        for node in self.iter_descendants():
            if isinstance(node, Element) and node.is_labelable:
                return node
        return None

    @property
    def labels(self) -> Optional[List["Element"]]:
        """Labels associated with this control, in tree order; None if not labelable."""
        if not self.is_labelable:
            return None
        scope = self.root_node()
        return [
            node for node in scope.iter_descendants()
            if isinstance(node, Element) and node.local_name == "label" and node.control is self
        ]

    # Slots

    def assign(self, nodes: Optional[List[Node]]) -> None:
        """Set this slot's assigned nodes explicitly, overriding name-based assignment."""
        self._assigned = None if nodes is None else list(nodes)

    def assigned_nodes(self, flatten: bool = False) -> List[Node]:
        if self.local_name != "slot":
            return []
        assigned = self._assigned if self._assigned is not None else self._find_slottables()
        if not flatten:
            return list(assigned)
        if not assigned:
            assigned = self.child_nodes
        result: List[Node] = []
        for node in assigned:
            if isinstance(node, Element) and node.local_name == "slot" and isinstance(node.root_node(), ShadowRoot):
                result.extend(node.assigned_nodes(flatten=True))
            else:
                result.append(node)
        return result

    def assigned_elements(self, flatten: bool = False) -> List["Element"]:
        return [node for node in self.assigned_nodes(flatten=flatten) if isinstance(node, Element)]

    def _find_slottables(self) -> List[Node]:
        root = self.root_node()
        if not isinstance(root, ShadowRoot) or root.host is None:
            return []
        name = self.get_attribute("name") or ""
        first = next(
            (slot for slot in root.iter_elements()
             if slot.local_name == "slot" and (slot.get_attribute("name") or "") == name),
            None,
        )
        if first is not self:
            return []
        slottables: List[Node] = []
        for child in root.host.child_nodes:
            if isinstance(child, Element):
                if (child.get_attribute("slot") or "") == name:
                    slottables.append(child)
            elif isinstance(child, Text) and not name:
                slottables.append(child)
        return slottables

    # Encapsulation primitives. These are the raw operations; the tracker
    # wraps them so the association becomes visible to queries.

    def attach_shadow(self, mode: str = "open") -> ShadowRoot:
        if self._shadow_root is not None:
            raise InvalidStateError("attach shadow root", f"{self!r} already hosts a shadow root")
        if mode not in ("open", "closed"):
            raise InvalidStateError("attach shadow root", f"unknown mode {mode!r}")
        self._shadow_root = ShadowRoot(self, mode)
        return self._shadow_root

    @property
    def shadow_root(self) -> Optional[ShadowRoot]:
        """The shadow root, only when it is open (as in the DOM)."""
        if self._shadow_root is not None and self._shadow_root.mode == "open":
            return self._shadow_root
        return None

    def attach_internals(self) -> ElementInternals:
        if self._internals is not None:
            raise InvalidStateError("attach internals", f"{self!r} already has internals")
        self._internals = ElementInternals()
        return self._internals


def composed_parent(node: Node) -> Optional[Node]:
    """Parent in the composed tree: a shadow root hands over to its host."""
    if isinstance(node, ShadowRoot):
        return node.host
    return node.parent
