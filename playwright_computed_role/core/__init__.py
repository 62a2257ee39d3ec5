"""Core playwright-computed-role components."""

from .errors import (
    ComputedRoleError,
    NotInitializedError,
    BrowserNotAvailableError,
    ConfigurationError,
    SelectorParseError,
    UnknownSelectorEngineError,
    InitializationError,
    InvalidStateError,
    SnapshotError,
)
from .selectors import SelectorRegistry, register_selector_engine, selectors, split_selector
from .locator import ComputedRoleLocator, LOCATOR_METHODS, LOCATOR_PROPERTIES
from .page import ComputedRolePage
from .context import ComputedRoleContext
from .computed_role import ComputedRole

__all__ = [
    # Main classes
    "ComputedRole",
    "ComputedRoleContext",
    "ComputedRolePage",
    "ComputedRoleLocator",
    "LOCATOR_METHODS",
    "LOCATOR_PROPERTIES",
    # Selector registration
    "SelectorRegistry",
    "register_selector_engine",
    "selectors",
    "split_selector",
    # Errors
    "ComputedRoleError",
    "NotInitializedError",
    "BrowserNotAvailableError",
    "ConfigurationError",
    "SelectorParseError",
    "UnknownSelectorEngineError",
    "InitializationError",
    "InvalidStateError",
    "SnapshotError",
]
