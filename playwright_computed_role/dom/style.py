"""Resolution of the two presentation properties that affect visibility."""

import re
from dataclasses import dataclass
from typing import Dict

from .nodes import Element

# Elements the user-agent stylesheet renders with ``display: none``.
HIDDEN_BY_DEFAULT = frozenset({
    "area", "base", "datalist", "head", "link", "meta", "noscript", "param",
    "rp", "script", "style", "template", "title",
})

_DECLARATION = re.compile(r"^\s*([a-zA-Z-]+)\s*:\s*(.+?)\s*$")


@dataclass(frozen=True)
class Presentation:
    display: str = "inline"
    visibility: str = "visible"


def parse_inline_style(style: str) -> Dict[str, str]:
    """Parse a ``style`` attribute into lower-cased property/value pairs."""
    declarations: Dict[str, str] = {}
    for chunk in (style or "").split(";"):
        match = _DECLARATION.match(chunk)
        if not match:
            continue
        value = match.group(2).lower().replace("!important", "").strip()
        declarations[match.group(1).lower()] = value
    return declarations


def resolve_presentation(element: Element) -> Presentation:
    """
    Resolve display and visibility for one element.

    A browser-computed style (from a page snapshot) wins. Otherwise the
    inline ``style`` attribute is applied over user-agent defaults.

    Args:
        element: Element to resolve

    Returns:
        Presentation with the resolved display and visibility keywords
    """
    if element.computed_style is not None:
        return Presentation(
            display=element.computed_style.get("display") or "inline",
            visibility=element.computed_style.get("visibility") or "visible",
        )

    declared = parse_inline_style(element.get_attribute("style") or "")
    display = "inline"
    if element.local_name in HIDDEN_BY_DEFAULT:
        display = "none"
    elif element.local_name == "input" and element.type == "hidden":
        display = "none"
    display = declared.get("display", display)

    visibility = declared.get("visibility", "visible")
    if visibility == "inherit":
        # Ancestors are checked separately, so an inherited value adds nothing here.
        visibility = "visible"
    return Presentation(display=display, visibility=visibility)
