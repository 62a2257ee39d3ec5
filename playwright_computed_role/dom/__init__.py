"""Document model, encapsulation tracking and page snapshots."""

from .nodes import Document, Element, ElementInternals, Node, ShadowRoot, Text, TreeScope
from .parser import parse_fragment, parse_html
from .snapshot import SnapshotTree, build_tree, capture_snapshot
from .tracker import EncapsulationTracker, attach_internals, attach_shadow, tracker

__all__ = [
    "Document",
    "Element",
    "ElementInternals",
    "EncapsulationTracker",
    "Node",
    "ShadowRoot",
    "SnapshotTree",
    "Text",
    "TreeScope",
    "attach_internals",
    "attach_shadow",
    "build_tree",
    "capture_snapshot",
    "parse_fragment",
    "parse_html",
    "tracker",
]
