"""Effective role computation."""

from typing import TYPE_CHECKING, Dict, Optional

from ..dom.nodes import Element

if TYPE_CHECKING:
    from .context import AccessibilityContext

# Implicit roles that depend on the tag alone.
TAG_ROLES: Dict[str, str] = {
    "article": "article",
    "aside": "complementary",
    "button": "button",
    "dd": "definition",
    "details": "group",
    "dialog": "dialog",
    "dt": "term",
    "fieldset": "group",
    "footer": "contentinfo",
    "form": "form",
    "h1": "heading",
    "h2": "heading",
    "h3": "heading",
    "h4": "heading",
    "h5": "heading",
    "h6": "heading",
    "header": "banner",
    "hr": "separator",
    "img": "img",
    "label": "label",
    "li": "listitem",
    "main": "main",
    "meter": "progressbar",
    "nav": "navigation",
    "ol": "list",
    "option": "option",
    "output": "status",
    "progress": "progressbar",
    "table": "table",
    "textarea": "textbox",
    "ul": "list",
}

INPUT_ROLES: Dict[str, str] = {
    "button": "button",
    "submit": "button",
    "reset": "button",
    "image": "button",
    "checkbox": "checkbox",
    "radio": "radio",
    "range": "slider",
    "number": "spinbutton",
    "search": "searchbox",
}


def input_role(element: Element) -> str:
    return INPUT_ROLES.get(element.type, "textbox")


def compute_element_role(element: Element, context: "AccessibilityContext") -> Optional[str]:
    """
    Resolve the role of ``element``.

    Priority: explicit ``role`` attribute (verbatim, unvalidated), then the
    tag mapping, then a role declared through element internals.

    Args:
        element: Element to inspect
        context: Per-query computation context

    Returns:
        Role string, or None when the element has no role
    """
    explicit = element.get_attribute("role")
    if explicit:
        return explicit

    tag = element.local_name
    role = TAG_ROLES.get(tag)
    if role is not None:
        return role

    if tag == "input":
        return input_role(element)
    if tag == "section":
        named = context.accessible_name(element, known_role="region", allow_name_from_content=False)
        return "region" if named else "generic"
    if tag == "select":
        return "listbox" if element.multiple else "combobox"
    if tag in ("a", "area"):
        if element.has_attribute("href"):
            return "link"
        return None

    override = context.tracker.lookup_role_override(element)
    if override is not None and override.role:
        return override.role
    return None
