"""
Accessible name and description computation.

Follows the order of the W3C "Accessible Name and Description Computation":
explicit references, explicit label, native label association, element
specific attributes, title, then content. Each computation is memoized in
the query's context, and an element already being computed on the current
call chain resolves to an empty string so reference cycles terminate. A name
that ran into such a cycle is not memoized.
"""

from typing import TYPE_CHECKING, List, Optional, Tuple

from ..dom.nodes import Element, Node, Text, TreeScope
from ..utils.text import join_normalised, normalise_spaces

if TYPE_CHECKING:
    from .context import AccessibilityContext

ROLES_ALLOWING_NAME_FROM_CONTENT = frozenset({
    "button",
    "link",
    "menuitem",
    "menuitemcheckbox",
    "menuitemradio",
    "option",
    "tab",
    "switch",
    "checkbox",
    "radio",
    "treeitem",
    "heading",
    "term",
    "definition",
    "toolbar",
    "group",
    "region",
})

BUTTON_INPUT_TYPES = ("button", "submit", "reset")


def resolve_id_refs(element: Element, ids: Optional[str], context: "AccessibilityContext") -> List[Element]:
    """Resolve a space separated id list within the element's tree scope, skipping misses."""
    if not ids or not isinstance(element.root_node(), TreeScope):
        return []
    index = context.scope_index(element)
    found = (index.get_element_by_id(token) for token in ids.split())
    return [target for target in found if target is not None]


def as_text(node: Node, context: "AccessibilityContext") -> str:
    """Visible text of ``node`` and its composed subtree, whitespace-normalised."""
    if isinstance(node, Text):
        return node.data
    if not isinstance(node, Element) or context.is_hidden(node):
        return ""

    if node.local_name == "img":
        return node.alt
    if node.local_name == "input":
        if node.type in BUTTON_INPUT_TYPES:
            return node.value
        if node.type == "image":
            return node.alt
        return ""

    if node.local_name == "slot":
        assigned = node.assigned_nodes(flatten=True)
        if assigned:
            return join_normalised(*(as_text(child, context) for child in assigned))

    shadow_root = context.tracker.lookup_detached_root(node)
    if shadow_root is not None:
        return join_normalised(*(as_text(child, context) for child in shadow_root.child_nodes))

    return join_normalised(*(as_text(child, context) for child in node.child_nodes))


def associated_label_text(element: Element, context: "AccessibilityContext") -> str:
    """Text of ``label[for=id]`` elements in scope, else of the control's associated labels."""
    index = context.scope_index(element)
    if element.id and isinstance(index.root, TreeScope):
        text = join_normalised(*(
            as_text(label, context) for label in index.labels_for.get(element.id, ())
        ))
        if text:
            return text

    labels = index.labels_of.get(element)
    if labels:
        return join_normalised(*(as_text(label, context) for label in labels))
    return ""


def compute_element_name(
    element: Element,
    context: "AccessibilityContext",
    known_role: Optional[str] = None,
    allow_name_from_content: bool = True,
) -> str:
    return compute_name_with_source(element, context, known_role, allow_name_from_content)[0]


def compute_name_with_source(
    element: Element,
    context: "AccessibilityContext",
    known_role: Optional[str] = None,
    allow_name_from_content: bool = True,
) -> Tuple[str, str]:
    """
    Compute the accessible name and report which step produced it.

    Args:
        element: Element to name
        context: Per-query computation context
        known_role: Role already resolved by the caller, if any
        allow_name_from_content: False skips the content steps entirely

    Returns:
        Tuple of (name, source); source is "" when the name is empty
    """
    key = (element, allow_name_from_content)
    cached = context.names.get(key)
    if cached is not None:
        return cached
    if element in context.in_progress:
        context.cycle_hit = True
        return "", ""

    outer_hit = context.cycle_hit
    context.cycle_hit = False
    context.in_progress.add(element)
    try:
        result = _resolve_name(element, context, known_role, allow_name_from_content)
    finally:
        context.in_progress.discard(element)
        hit = context.cycle_hit
        context.cycle_hit = outer_hit or hit
    if not hit:
        context.names[key] = result
    return result


def _resolve_name(
    element: Element,
    context: "AccessibilityContext",
    known_role: Optional[str],
    allow_name_from_content: bool,
) -> Tuple[str, str]:
    override = context.tracker.lookup_role_override(element)

    refs = override.aria_labelled_by_elements if override is not None else None
    if refs is None:
        refs = resolve_id_refs(element, element.get_attribute("aria-labelledby"), context)
    if refs:
        text = join_normalised(*(
            compute_element_name(ref, context, allow_name_from_content=True) for ref in refs
        ))
        if text:
            return text, "labelledby"

    label = override.aria_label if override is not None and override.aria_label else None
    if label is None:
        label = element.get_attribute("aria-label")
    label = normalise_spaces(label or "")
    if label:
        return label, "label"

    text = associated_label_text(element, context)
    if text:
        return text, "native-label"

    tag = element.local_name
    if tag == "img" and element.alt:
        return normalise_spaces(element.alt), "alt"
    if tag == "input" and element.type == "image" and element.alt:
        return normalise_spaces(element.alt), "alt"
    if tag == "input" and element.type in BUTTON_INPUT_TYPES and element.value:
        return normalise_spaces(element.value), "value"

    title = normalise_spaces(element.title)
    if title:
        return title, "title"

    if not allow_name_from_content:
        return "", ""

    text = as_text(element, context)
    if not text:
        return "", ""
    role = known_role or context.role(element)
    if role in ROLES_ALLOWING_NAME_FROM_CONTENT:
        return text, "contents"
    return text, "text"


def compute_element_description(element: Element, context: "AccessibilityContext") -> str:
    """
    Compute the accessible description.

    Order: described-by references (internals, then ``aria-describedby``),
    ``aria-description`` (internals, then attribute), then ``title`` unless the
    title already supplied the name.
    """
    override = context.tracker.lookup_role_override(element)

    refs = override.aria_described_by_elements if override is not None else None
    if refs is None:
        refs = resolve_id_refs(element, element.get_attribute("aria-describedby"), context)
    if refs:
        text = join_normalised(*(
            compute_element_name(ref, context, allow_name_from_content=True) for ref in refs
        ))
        if text:
            return text

    description = override.aria_description if override is not None and override.aria_description else None
    if description is None:
        description = element.get_attribute("aria-description")
    description = normalise_spaces(description or "")
    if description:
        return description

    title = normalise_spaces(element.title)
    if title and compute_name_with_source(element, context)[1] != "title":
        return title
    return ""
