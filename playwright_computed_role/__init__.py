"""
playwright-computed-role - locate elements by computed ARIA role.

Finds elements the way assistive technology perceives them: by effective
role and accessible name, through shadow roots, slots and roles set with
ElementInternals.
"""

__version__ = "0.1.0"

from .core import (
    ComputedRole,
    ComputedRoleContext,
    ComputedRolePage,
    ComputedRoleLocator,
    ComputedRoleError,
    NotInitializedError,
    SelectorParseError,
    InitializationError,
    register_selector_engine,
    selectors,
)

from .a11y import (
    SelectorEngine,
    compute_accessible_description,
    compute_accessible_name,
    compute_role,
    is_hidden,
    query,
    query_all,
)

from .dom import attach_internals, attach_shadow, parse_html, tracker

from .types import ConstructorParams, DEFAULT_ENGINE_NAME, RoleFilter

__all__ = [
    # Version
    "__version__",
    # Main classes
    "ComputedRole",
    "ComputedRoleContext",
    "ComputedRolePage",
    "ComputedRoleLocator",
    "SelectorEngine",
    # Engine
    "compute_accessible_description",
    "compute_accessible_name",
    "compute_role",
    "is_hidden",
    "query",
    "query_all",
    # Tracker
    "attach_internals",
    "attach_shadow",
    "parse_html",
    "tracker",
    # Selectors
    "register_selector_engine",
    "selectors",
    # Types
    "ConstructorParams",
    "DEFAULT_ENGINE_NAME",
    "RoleFilter",
    # Common errors
    "ComputedRoleError",
    "NotInitializedError",
    "SelectorParseError",
    "InitializationError",
]
