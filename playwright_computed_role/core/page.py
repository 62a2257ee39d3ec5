"""ComputedRolePage: a Playwright Page with ``get_by_computed_role``."""

from typing import Any, Optional, TYPE_CHECKING

from playwright.async_api import Page

from ..types import DEFAULT_ENGINE_NAME
from ..utils.logger import ComputedRoleLogger, get_logger
from .locator import ComputedRoleCapability

if TYPE_CHECKING:
    from .context import ComputedRoleContext


class ComputedRolePage(ComputedRoleCapability):
    """
    Page wrapper that adds ``get_by_computed_role``.

    Everything else is proxied to the Playwright page; locator-returning
    operations hand back ComputedRoleLocator so the added method survives
    chains such as ``page.locator("form").get_by_computed_role(...)``.
    """

    def __init__(
        self,
        page: Page,
        context: Optional["ComputedRoleContext"] = None,
        engine_name: str = DEFAULT_ENGINE_NAME,
        logger: Optional[ComputedRoleLogger] = None,
    ):
        """
        Initialize ComputedRolePage.

        Args:
            page: Playwright Page instance
            context: Parent ComputedRoleContext, if the page came from one
            engine_name: Name the ref selector engine was registered under
            logger: Category logger
        """
        self._target = page
        self._context = context
        self._engine_name = engine_name
        self._logger = (logger or get_logger()).child(component="page")
        self._page_id = id(self)

        self._logger.debug("page:init", "ComputedRolePage created", page_id=self._page_id)

    @property
    def page(self) -> Page:
        """The wrapped Playwright Page."""
        return self._target

    @property
    def context(self) -> Optional["ComputedRoleContext"]:
        """Parent context wrapper."""
        return self._context

    async def close(self, **kwargs: Any) -> None:
        """Close the page."""
        self._logger.info("page:close", "Closing page")
        await self._target.close(**kwargs)

    def __repr__(self) -> str:
        return f"<ComputedRolePage id={self._page_id} url='{self._target.url}'>"
