"""Locator wrapper that keeps ``get_by_computed_role`` available across chained calls."""

import functools
import json
from typing import Any, Dict, List, Optional

from playwright.async_api import Locator

from ..a11y.query import SelectorEngine
from ..dom.snapshot import build_tree, capture_snapshot
from ..types import DEFAULT_ENGINE_NAME, RoleFilter
from ..utils.logger import ComputedRoleLogger, get_logger

# Operations of Playwright's Page/Locator that return a Locator. Only these
# are re-tagged; everything else is delegated untouched.
LOCATOR_METHODS = frozenset({
    "and_",
    "filter",
    "get_by_alt_text",
    "get_by_label",
    "get_by_placeholder",
    "get_by_role",
    "get_by_test_id",
    "get_by_text",
    "get_by_title",
    "locator",
    "nth",
    "or_",
})

LOCATOR_PROPERTIES = frozenset({"first", "last"})


class ComputedRoleCapability:
    """
    Shared behaviour of the page and locator wrappers.

    Delegates attribute access to the wrapped Playwright object. Results of
    the operations in LOCATOR_METHODS / LOCATOR_PROPERTIES that are plain
    Playwright locators come back as ComputedRoleLocator, so the extra method
    survives chaining; wrapped arguments are unwrapped on the way in.
    """

    _target: Any
    _engine_name: str
    _logger: ComputedRoleLogger

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        attr = getattr(self._target, name)

        if name in LOCATOR_PROPERTIES:
            return self._retag(attr)

        if name in LOCATOR_METHODS and callable(attr):
            @functools.wraps(attr)
            def wrapper(*args: Any, **kwargs: Any) -> Any:
                args = tuple(_unwrap(arg) for arg in args)
                kwargs = {key: _unwrap(value) for key, value in kwargs.items()}
                return self._retag(attr(*args, **kwargs))
            return wrapper

        return attr

    def _retag(self, value: Any) -> Any:
        if isinstance(value, ComputedRoleLocator):
            return value
        if isinstance(value, Locator):
            return ComputedRoleLocator(value, self._engine_name, self._logger)
        return value

    def get_by_computed_role(
        self,
        role: str,
        *,
        name: Optional[str] = None,
        description: Optional[str] = None,
        exact: Optional[bool] = None,
    ) -> "ComputedRoleLocator":
        """
        Locate elements by computed role and accessible name.

        The filter is handed to the in-page engine, which runs again every
        time Playwright resolves the locator, so it auto-waits and retries
        like any built-in locator.

        Args:
            role: Role to match, e.g. "button"
            name: Accessible name filter
            description: Accessible description filter
            exact: Case-sensitive whole-string matching instead of substring

        Returns:
            ComputedRoleLocator over the matching elements
        """
        role_filter = _role_filter(role, name, description, exact)
        self._logger.debug("page:query", "Built computed role locator", role=role, name=name)
        return self._locate(role_filter.to_payload())

    async def snapshot_by_computed_role(
        self,
        role: str,
        *,
        name: Optional[str] = None,
        description: Optional[str] = None,
        exact: Optional[bool] = None,
    ) -> "ComputedRoleLocator":
        """
        Match once against a snapshot and pin the result.

        The document is snapshotted and matched by the Python engine. The
        returned locator resolves to exactly the elements that matched then,
        as long as they stay connected.

        Returns:
            ComputedRoleLocator over the pinned elements
        """
        role_filter = _role_filter(role, name, description, exact)

        snapshot = await capture_snapshot(self._target, self._logger)
        tree = build_tree(snapshot)
        engine = SelectorEngine(tracker=tree.tracker, logger=self._logger)

        refs: List[int] = []
        for root in tree.roots:
            for element in engine.iter_matches(root, role_filter):
                ref = tree.ref_of(element)
                if ref not in refs:
                    refs.append(ref)

        self._logger.debug(
            "page:query",
            "Resolved computed role snapshot query",
            role=role,
            name=name,
            matches=len(refs),
        )
        return self._locate(role_filter.to_payload(refs=refs))

    def _locate(self, payload: Dict[str, Any]) -> "ComputedRoleLocator":
        return self._retag(self._target.locator(f"{self._engine_name}={json.dumps(payload)}"))


def _role_filter(
    role: str,
    name: Optional[str],
    description: Optional[str],
    exact: Optional[bool],
) -> RoleFilter:
    return RoleFilter(
        role=role,
        name=str(name) if name else None,
        description=str(description) if description else None,
        exact=bool(exact) if exact else None,
    )


class ComputedRoleLocator(ComputedRoleCapability):
    """Playwright Locator with ``get_by_computed_role``."""

    def __init__(
        self,
        locator: Any,
        engine_name: str = DEFAULT_ENGINE_NAME,
        logger: Optional[ComputedRoleLogger] = None,
    ):
        if isinstance(locator, ComputedRoleLocator):
            locator = locator._target
        self._target = locator
        self._engine_name = engine_name
        self._logger = logger or get_logger()

    @property
    def locator_object(self) -> Locator:
        """The wrapped Playwright Locator."""
        return self._target

    def __repr__(self) -> str:
        return f"<ComputedRoleLocator {self._target!r}>"


def _unwrap(value: Any) -> Any:
    if isinstance(value, ComputedRoleLocator):
        return value.locator_object
    return value
