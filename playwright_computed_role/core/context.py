"""ComputedRoleContext: installs role/shadow-root interception on a BrowserContext."""

import weakref
from typing import Optional, Any, List

from playwright.async_api import BrowserContext, Page, Error as PlaywrightError

from ..dom.scripts import INIT_SCRIPT
from ..types import DEFAULT_ENGINE_NAME
from ..utils.logger import ComputedRoleLogger, get_logger
from .errors import InitializationError
from .page import ComputedRolePage


class ComputedRoleContext:
    """
    Enhanced browser context that wraps Playwright's BrowserContext.

    ``install()`` must run once, before the pages whose shadow roots and
    element internals should be visible to queries are loaded.
    """

    def __init__(
        self,
        context: BrowserContext,
        engine_name: str = DEFAULT_ENGINE_NAME,
        logger: Optional[ComputedRoleLogger] = None,
    ):
        """
        Initialize ComputedRoleContext.

        Args:
            context: Playwright BrowserContext instance
            engine_name: Name the ref selector engine was registered under
            logger: Category logger
        """
        self._context = context
        self._engine_name = engine_name
        self._logger = (logger or get_logger()).child(component="context")
        self._pages: List[weakref.ref] = []
        self._installed = False

    @property
    def installed(self) -> bool:
        return self._installed

    async def install(self) -> None:
        """
        Add the init script that records shadow roots and element internals.

        Raises:
            InitializationError: If already installed or Playwright rejects the script
        """
        if self._installed:
            raise InitializationError("install interception", "already installed on this context")
        try:
            await self._context.add_init_script(INIT_SCRIPT)
        except PlaywrightError as e:
            self._logger.error("context:install", f"Failed to add init script: {e}", error=str(e))
            raise InitializationError("install interception", str(e)) from e
        self._installed = True
        self._logger.info("context:install", "Interception installed")

    def wrap(self, page: Page) -> ComputedRolePage:
        """Wrap an existing Playwright page from this context."""
        wrapped = ComputedRolePage(page, self, self._engine_name, self._logger)
        self._pages.append(weakref.ref(wrapped))
        return wrapped

    async def new_page(self, **kwargs: Any) -> ComputedRolePage:
        """
        Create a new ComputedRolePage.

        Args:
            **kwargs: Options for page creation

        Returns:
            ComputedRolePage instance
        """
        page = self.wrap(await self._context.new_page(**kwargs))
        self._logger.info("context:new_page", "Created new page", page_id=id(page))
        return page

    async def pages(self) -> List[ComputedRolePage]:
        """Live page wrappers created through this context."""
        self._pages = [ref for ref in self._pages if ref() is not None]
        return [page for page in (ref() for ref in self._pages) if page is not None]

    async def close(self) -> None:
        """Close the context and all pages."""
        self._logger.info("context:close", "Closing context")
        await self._context.close()
        self._pages = []

    def __getattr__(self, name: str) -> Any:
        """Proxy other attributes to the Playwright context."""
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._context, name)

    def __repr__(self) -> str:
        return f"<ComputedRoleContext id={id(self)} installed={self._installed}>"
