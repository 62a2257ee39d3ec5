"""Core ComputedRole launcher implementation."""

from typing import Optional, Any, Dict, List

from playwright.async_api import async_playwright, Browser, Playwright
from pydantic import ValidationError

from ..types import ConstructorParams, DEFAULT_ENGINE_NAME
from ..utils.logger import configure_logging, ComputedRoleLogger
from .context import ComputedRoleContext
from .errors import (
    BrowserNotAvailableError,
    ComputedRoleError,
    ConfigurationError,
    NotInitializedError,
)
from .page import ComputedRolePage
from .selectors import register_selector_engine


class ComputedRole:
    """
    Launches a browser with computed-role queries enabled.

    Registers the selector engine with Playwright, starts the browser and
    creates a context with interception installed, so every page handed out
    supports ``get_by_computed_role``.
    """

    def __init__(
        self,
        verbose: int = 0,
        headless: bool = True,
        browser: str = "chromium",
        browser_args: Optional[List[str]] = None,
        engine_name: str = DEFAULT_ENGINE_NAME,
        context_options: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize ComputedRole with configuration.

        Args:
            verbose: Logging verbosity (0-3)
            headless: Run browser in headless mode
            browser: Browser type ("chromium", "firefox", "webkit")
            browser_args: Additional browser arguments
            engine_name: Name to register the selector engine under
            context_options: Extra options for ``browser.new_context``

        Raises:
            ConfigurationError: If any option fails validation
        """
        try:
            self.config = ConstructorParams(
                verbose=verbose,
                headless=headless,
                browser=browser,  # type: ignore
                browser_args=browser_args or [],
                engine_name=engine_name,
                context_options=context_options or {},
            )
        except ValidationError as e:
            raise ConfigurationError(str(e)) from e

        self.logger = ComputedRoleLogger(configure_logging(verbose), verbose)

        self.initialized = False
        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self.context: Optional[ComputedRoleContext] = None

        self.logger.info(
            "computed_role:init",
            "ComputedRole configured",
            browser=self.config.browser,
            engine=self.config.engine_name,
        )

    async def init(self) -> None:
        """
        Start Playwright, register the engine and open an installed context.

        Raises:
            BrowserNotAvailableError: If the browser fails to start
            InitializationError: If engine registration or install fails
        """
        if self.initialized:
            self.logger.warn("computed_role:init", "Already initialized")
            return

        self.playwright = await async_playwright().start()
        try:
            await register_selector_engine(
                self.playwright.selectors,
                self.config.engine_name,
                self.logger,
            )
            await self._launch()
            await self._create_context()
        except ComputedRoleError:
            await self.close()
            raise

        self.initialized = True
        self.logger.info("computed_role:init", "Initialization complete")

    async def _launch(self) -> None:
        browser_type = getattr(self.playwright, self.config.browser)
        try:
            self.browser = await browser_type.launch(
                headless=self.config.headless,
                args=list(self.config.browser_args),
            )
        except Exception as e:
            self.logger.error("computed_role:init", f"Browser launch failed: {e}", error=str(e))
            raise BrowserNotAvailableError(str(e)) from e

    async def _create_context(self) -> None:
        if not self.browser:
            raise BrowserNotAvailableError("Browser not initialized")

        playwright_context = await self.browser.new_context(**self.config.context_options)
        self.context = ComputedRoleContext(
            playwright_context,
            engine_name=self.config.engine_name,
            logger=self.logger,
        )
        await self.context.install()

    async def page(self, **kwargs: Any) -> ComputedRolePage:
        """
        Create a new page supporting ``get_by_computed_role``.

        Raises:
            NotInitializedError: If init() has not completed
        """
        if not self.initialized or not self.context:
            raise NotInitializedError()
        return await self.context.new_page(**kwargs)

    @property
    def context_manager(self) -> ComputedRoleContext:
        """
        Get the current context.

        Raises:
            NotInitializedError: If not initialized
        """
        if not self.context:
            raise NotInitializedError()
        return self.context

    async def close(self) -> None:
        """Clean up resources."""
        self.logger.info("computed_role:close", "Closing ComputedRole")

        if self.context:
            await self.context.close()
            self.context = None

        if self.browser:
            await self.browser.close()
            self.browser = None

        if self.playwright:
            await self.playwright.stop()
            self.playwright = None

        self.initialized = False

    async def __aenter__(self) -> "ComputedRole":
        await self.init()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
