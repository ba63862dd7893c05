"""Page automation capability set consumed by the booking pipeline.

The pipeline never touches Playwright directly; it talks to a
:class:`PageAutomationAdapter` with selector strings from
``srt_bot.constants``. :class:`PlaywrightPageAdapter` is the production
implementation; tests drive the pipeline with an in-memory fake.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, List, Optional, Protocol

from loguru import logger
from playwright.async_api import Dialog, Locator, Page
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from ...constants import Timeouts
from ...core.exceptions import AutomationError, SessionLostError, SRTBotError

# Returns True to accept the dialog, False to dismiss it
DialogHandler = Callable[[str], bool]

SESSION_LOST_MARKERS = (
    "target page, context or browser has been closed",
    "target closed",
    "browser has been closed",
    "connection closed",
    "browser has disconnected",
)


class ElementHandle(Protocol):
    """A located element that can be searched, read and clicked."""

    async def locate_all(self, selector: str) -> List["ElementHandle"]: ...

    async def count(self, selector: str) -> int: ...

    async def text(self, selector: Optional[str] = None) -> Optional[str]: ...

    async def click(self, selector: Optional[str] = None) -> None: ...


class PageAutomationAdapter(Protocol):
    """Capabilities of a remote page the pipeline relies on."""

    async def fill(self, selector: str, value: str) -> None: ...

    async def select(self, selector: str, value: str) -> None: ...

    async def click(self, selector: str) -> None: ...

    async def locate_all(self, selector: str) -> List[ElementHandle]: ...

    async def count(self, selector: str) -> int: ...

    async def wait_for_hidden(self, selector: str, timeout_ms: float) -> bool: ...

    def current_url(self) -> str: ...

    async def type_keystrokes(self, text: str) -> None: ...

    async def press_key(self, name: str) -> None: ...

    async def reload(self) -> None: ...

    def on_dialog(self, handler: DialogHandler) -> None: ...


def _is_session_lost(error: Exception) -> bool:
    text = str(error).lower()
    return any(marker in text for marker in SESSION_LOST_MARKERS)


@asynccontextmanager
async def translate_errors(action: str, selector: Optional[str] = None) -> AsyncIterator[None]:
    """
    Convert Playwright failures into the bot's error taxonomy.

    Raises:
        SessionLostError: When the page/browser is gone
        AutomationError: For any other Playwright failure
    """
    details = {"action": action}
    if selector:
        details["selector"] = selector
    try:
        yield
    except SRTBotError:
        raise
    except PlaywrightTimeoutError as e:
        raise AutomationError(f"{action} timed out", details=details) from e
    except PlaywrightError as e:
        if _is_session_lost(e):
            raise SessionLostError(f"Browser session lost during {action}") from e
        raise AutomationError(f"{action} failed: {e.message}", details=details) from e


@asynccontextmanager
async def describe_failure(description: str) -> AsyncIterator[None]:
    """Prefix an AutomationError raised inside the block with what was being done."""
    try:
        yield
    except AutomationError as e:
        raise AutomationError(f"{description} failed: {e.message}", details=e.details) from e


class PlaywrightElement:
    """ElementHandle backed by a Playwright locator."""

    def __init__(self, locator: Locator, timeout_ms: int = Timeouts.ACTION):
        self._locator = locator
        self._timeout = timeout_ms

    def _target(self, selector: Optional[str]) -> Locator:
        return self._locator.locator(selector) if selector else self._locator

    async def locate_all(self, selector: str) -> List["PlaywrightElement"]:
        async with translate_errors("locate", selector):
            locators = await self._locator.locator(selector).all()
        return [PlaywrightElement(loc, self._timeout) for loc in locators]

    async def count(self, selector: str) -> int:
        async with translate_errors("count", selector):
            return await self._locator.locator(selector).count()

    async def text(self, selector: Optional[str] = None) -> Optional[str]:
        target = self._target(selector)
        async with translate_errors("read text", selector):
            # text_content() on an empty match would block until timeout
            if await target.count() == 0:
                return None
            return await target.first.text_content(timeout=self._timeout)

    async def click(self, selector: Optional[str] = None) -> None:
        async with translate_errors("click", selector):
            await self._target(selector).first.click(timeout=self._timeout)


class PlaywrightPageAdapter:
    """PageAutomationAdapter over a single Playwright page."""

    def __init__(self, page: Page, timeout_ms: int = Timeouts.ACTION):
        """
        Args:
            page: Playwright page owned by BrowserManager
            timeout_ms: Per-action timeout
        """
        self.page = page
        self._timeout = timeout_ms

    async def fill(self, selector: str, value: str) -> None:
        async with translate_errors("fill", selector):
            await self.page.locator(selector).fill(value, timeout=self._timeout)

    async def select(self, selector: str, value: str) -> None:
        async with translate_errors("select", selector):
            await self.page.locator(selector).select_option(value, timeout=self._timeout)

    async def click(self, selector: str) -> None:
        async with translate_errors("click", selector):
            await self.page.locator(selector).first.click(timeout=self._timeout)

    async def locate_all(self, selector: str) -> List[PlaywrightElement]:
        async with translate_errors("locate", selector):
            locators = await self.page.locator(selector).all()
        return [PlaywrightElement(loc, self._timeout) for loc in locators]

    async def count(self, selector: str) -> int:
        async with translate_errors("count", selector):
            return await self.page.locator(selector).count()

    async def wait_for_hidden(self, selector: str, timeout_ms: float) -> bool:
        """
        Wait until ``selector`` is hidden or detached.

        Returns:
            True if hidden within ``timeout_ms``, False on timeout
        """
        try:
            async with translate_errors("wait for hidden", selector):
                await self.page.locator(selector).first.wait_for(
                    state="hidden", timeout=timeout_ms
                )
        except AutomationError as e:
            if isinstance(e.__cause__, PlaywrightTimeoutError):
                return False
            raise
        return True

    def current_url(self) -> str:
        return self.page.url

    async def type_keystrokes(self, text: str) -> None:
        async with translate_errors("type"):
            await self.page.keyboard.type(text)

    async def press_key(self, name: str) -> None:
        async with translate_errors(f"press {name}"):
            await self.page.keyboard.press(name)

    async def reload(self) -> None:
        async with translate_errors("reload"):
            await self.page.reload(timeout=Timeouts.PAGE_LOAD)

    def on_dialog(self, handler: DialogHandler) -> None:
        async def _on_dialog(dialog: Dialog) -> None:
            logger.info(f"Dialog detected: {dialog.message}")
            if handler(dialog.message):
                await dialog.accept()
            else:
                await dialog.dismiss()

        self.page.on("dialog", _on_dialog)
