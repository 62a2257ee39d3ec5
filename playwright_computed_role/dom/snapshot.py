"""
Rebuild a live page as an in-process tree.

The snapshot script serializes the document, including the shadow roots and
element internals recorded by the init script, with each node tagged by a
stable in-page ref. ``build_tree`` replays that payload into ``dom`` nodes,
registering shadow roots and internals with a fresh tracker, so the query
engine can run in Python and report matches back as refs.
"""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from ..core.errors import SnapshotError
from ..types import DocumentSnapshot, SnapshotNode
from ..utils.logger import ComputedRoleLogger, get_logger
from .nodes import DOCUMENT_NODE, ELEMENT_NODE, TEXT_NODE, Document, Element, Node, Text
from .scripts import SNAPSHOT_SCRIPT
from .tracker import EncapsulationTracker


class SnapshotTree:
    """A rebuilt document plus the mapping between nodes and in-page refs."""

    def __init__(self, document: Document, tracker: EncapsulationTracker):
        self.document = document
        self.tracker = tracker
        self.roots: List[Node] = []
        self._by_ref: Dict[int, Node] = {}
        self._refs: Dict[Node, int] = {}

    def bind(self, ref: int, node: Node) -> None:
        self._by_ref[ref] = node
        self._refs[node] = ref

    def node(self, ref: int) -> Optional[Node]:
        return self._by_ref.get(ref)

    def ref_of(self, node: Node) -> int:
        return self._refs[node]

    def __len__(self) -> int:
        return len(self._by_ref)


def _load(payload: Any) -> DocumentSnapshot:
    if isinstance(payload, DocumentSnapshot):
        return payload
    try:
        return DocumentSnapshot.model_validate(payload)
    except ValidationError as e:
        raise SnapshotError(f"invalid snapshot payload: {e}") from e


def build_tree(payload: Any, tracker: Optional[EncapsulationTracker] = None) -> SnapshotTree:
    """
    Rebuild a snapshot payload as nodes.

    Args:
        payload: Snapshot as returned by SNAPSHOT_SCRIPT (dict or DocumentSnapshot)
        tracker: Tracker to record shadow roots and internals in; a new one by default

    Returns:
        SnapshotTree with the document, query roots and ref mapping

    Raises:
        SnapshotError: If the payload is malformed
    """
    snapshot = _load(payload)
    if snapshot.document.type != DOCUMENT_NODE:
        raise SnapshotError(f"snapshot root has node type {snapshot.document.type}, expected a document")

    tree = SnapshotTree(Document(), tracker if tracker is not None else EncapsulationTracker())
    tree.bind(snapshot.document.ref, tree.document)

    # References (slots, internals) may point forward, so resolve them after the walk.
    pending: List[Tuple[Element, SnapshotNode]] = []
    stack: List[Tuple[Node, SnapshotNode]] = [(tree.document, snapshot.document)]
    while stack:
        parent, source = stack.pop()
        for child_source in source.children:
            child = _create(child_source)
            if child is None:
                continue
            parent.append_child(child)
            tree.bind(child_source.ref, child)
            if isinstance(child, Element):
                if child_source.assigned is not None or child_source.internals is not None:
                    pending.append((child, child_source))
                if child_source.shadow_root is not None:
                    root = tree.tracker.attach_shadow(child, child_source.shadow_mode)
                    tree.bind(child_source.shadow_root.ref, root)
                    stack.append((root, child_source.shadow_root))
            stack.append((child, child_source))

    for element, source in pending:
        if source.assigned is not None:
            element.assign(_resolve_refs(tree, source.assigned))
        if source.internals is not None:
            internals = tree.tracker.attach_internals(element)
            internals.role = source.internals.role
            internals.aria_label = source.internals.aria_label
            internals.aria_description = source.internals.aria_description
            if source.internals.labelled_by is not None:
                internals.aria_labelled_by_elements = _resolve_elements(tree, source.internals.labelled_by)
            if source.internals.described_by is not None:
                internals.aria_described_by_elements = _resolve_elements(tree, source.internals.described_by)

    for ref in snapshot.roots:
        root_node = tree.node(ref)
        if root_node is not None:
            tree.roots.append(root_node)
    return tree


def _create(source: SnapshotNode) -> Optional[Node]:
    if source.type == TEXT_NODE:
        return Text(source.text or "")
    if source.type != ELEMENT_NODE or not source.tag:
        return None
    element = Element(source.tag, source.attributes)
    if source.display is not None or source.visibility is not None:
        element.computed_style = {
            "display": source.display or "inline",
            "visibility": source.visibility or "visible",
        }
    element.inert = source.inert
    if source.value is not None:
        element.value = source.value
    return element


def _resolve_refs(tree: SnapshotTree, refs: List[int]) -> List[Node]:
    return [node for node in map(tree.node, refs) if node is not None]


def _resolve_elements(tree: SnapshotTree, refs: List[int]) -> List[Element]:
    return [node for node in _resolve_refs(tree, refs) if isinstance(node, Element)]


async def capture_snapshot(target: Any, logger: Optional[ComputedRoleLogger] = None) -> DocumentSnapshot:
    """
    Evaluate the snapshot script in the browser.

    Args:
        target: Playwright Page (queries the document) or Locator (queries
            under each element it matches)
        logger: Category logger

    Returns:
        Validated DocumentSnapshot
    """
    logger = logger or get_logger()
    if hasattr(target, "evaluate_all"):
        payload = await target.evaluate_all(SNAPSHOT_SCRIPT)
    else:
        payload = await target.evaluate(SNAPSHOT_SCRIPT)
    snapshot = _load(payload)
    logger.debug("snapshot:capture", "Captured page snapshot", roots=len(snapshot.roots))
    return snapshot
