"""Selector engine registration, in-process and with Playwright."""

from typing import Any, Callable, Dict, List, Optional, Tuple

from playwright.async_api import Error as PlaywrightError

from ..a11y.names import BUTTON_INPUT_TYPES, ROLES_ALLOWING_NAME_FROM_CONTENT
from ..a11y.query import SelectorEngine
from ..a11y.roles import INPUT_ROLES, TAG_ROLES
from ..dom.nodes import Element, Node
from ..dom.scripts import selector_engine_script
from ..types import DEFAULT_ENGINE_NAME
from ..utils.logger import ComputedRoleLogger, get_logger
from .errors import InitializationError, SelectorParseError, UnknownSelectorEngineError

EngineFactory = Callable[[], SelectorEngine]

# In-page rendition of the query engine, built from the same rule tables.
ENGINE_SCRIPT = selector_engine_script(
    TAG_ROLES,
    INPUT_ROLES,
    ROLES_ALLOWING_NAME_FROM_CONTENT,
    BUTTON_INPUT_TYPES,
)


def split_selector(selector: str) -> Tuple[str, str]:
    """
    Split ``<engine-name>=<body>`` into its two parts.

    Raises:
        SelectorParseError: If there is no engine prefix
    """
    engine, sep, body = selector.partition("=")
    if not sep or not engine.strip():
        raise SelectorParseError(selector, "expected '<engine-name>=<json-filter>'")
    return engine.strip(), body


class SelectorRegistry:
    """
    Maps engine names to engine factories for in-process trees.

    Each lookup builds a new engine from its factory, mirroring how a host
    framework instantiates a registered engine per query.
    """

    def __init__(self, logger: Optional[ComputedRoleLogger] = None):
        self._factories: Dict[str, EngineFactory] = {}
        self.logger = logger or get_logger()

    def register(self, name: str, factory: EngineFactory) -> None:
        if name in self._factories:
            raise InitializationError("register selector engine", f"'{name}' is already registered")
        self._factories[name] = factory
        self.logger.debug("selectors:register", "Registered selector engine", engine=name)

    def unregister(self, name: str) -> None:
        self._factories.pop(name, None)

    def __contains__(self, name: str) -> bool:
        return name in self._factories

    def engine(self, name: str) -> SelectorEngine:
        factory = self._factories.get(name)
        if factory is None:
            raise UnknownSelectorEngineError(name)
        return factory()

    def query_selector(self, root: Node, selector: str) -> Optional[Element]:
        name, body = split_selector(selector)
        return self.engine(name).query(root, body)

    def query_selector_all(self, root: Node, selector: str) -> List[Element]:
        name, body = split_selector(selector)
        return self.engine(name).query_all(root, body)


selectors = SelectorRegistry()
selectors.register(DEFAULT_ENGINE_NAME, SelectorEngine)


async def register_selector_engine(
    playwright_selectors: Any,
    name: str = DEFAULT_ENGINE_NAME,
    logger: Optional[ComputedRoleLogger] = None,
) -> None:
    """
    Register the in-page query engine with Playwright under ``name``.

    Must run once per Playwright instance, before the contexts that use it
    are created.

    Args:
        playwright_selectors: ``playwright.selectors``
        name: Engine name used in ``<name>=<json>`` selectors
        logger: Category logger

    Raises:
        InitializationError: If Playwright rejects the registration
    """
    logger = logger or get_logger()
    try:
        await playwright_selectors.register(name, ENGINE_SCRIPT)
    except PlaywrightError as e:
        logger.error("selectors:register", f"Selector engine registration failed: {e}", engine=name)
        raise InitializationError("register selector engine", str(e)) from e
    logger.info("selectors:register", "Registered Playwright selector engine", engine=name)
