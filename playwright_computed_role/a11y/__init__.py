"""Role, accessible name and visibility computation, plus the query engine."""

from typing import Optional

from ..dom.nodes import Element, Node
from ..dom.tracker import EncapsulationTracker
from .context import AccessibilityContext
from .names import ROLES_ALLOWING_NAME_FROM_CONTENT
from .query import SelectorEngine, TreeWalker, iter_matches, matches_filter, parse_selector, query, query_all
from .roles import INPUT_ROLES, TAG_ROLES


def compute_role(element: Element, tracker: Optional[EncapsulationTracker] = None) -> Optional[str]:
    """Effective role of ``element``, or None."""
    return AccessibilityContext(tracker).role(element)


def compute_accessible_name(
    element: Element,
    known_role: Optional[str] = None,
    allow_name_from_content: bool = True,
    tracker: Optional[EncapsulationTracker] = None,
) -> str:
    """Accessible name of ``element``; empty when it has none."""
    return AccessibilityContext(tracker).accessible_name(element, known_role, allow_name_from_content)


def compute_accessible_description(element: Element, tracker: Optional[EncapsulationTracker] = None) -> str:
    """Accessible description of ``element``; empty when it has none."""
    return AccessibilityContext(tracker).description(element)


def is_hidden(node: Node) -> bool:
    """True when ``node`` is excluded from the accessibility tree."""
    return AccessibilityContext().is_hidden(node)


__all__ = [
    "AccessibilityContext",
    "INPUT_ROLES",
    "ROLES_ALLOWING_NAME_FROM_CONTENT",
    "SelectorEngine",
    "TAG_ROLES",
    "TreeWalker",
    "compute_accessible_description",
    "compute_accessible_name",
    "compute_role",
    "is_hidden",
    "iter_matches",
    "matches_filter",
    "parse_selector",
    "query",
    "query_all",
]
