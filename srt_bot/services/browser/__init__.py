"""Page automation adapter and browser lifecycle."""

from .adapter import (
    DialogHandler,
    ElementHandle,
    PageAutomationAdapter,
    PlaywrightElement,
    PlaywrightPageAdapter,
    describe_failure,
    translate_errors,
)
from .browser_manager import BrowserManager

__all__ = [
    "DialogHandler",
    "ElementHandle",
    "PageAutomationAdapter",
    "PlaywrightElement",
    "PlaywrightPageAdapter",
    "describe_failure",
    "translate_errors",
    "BrowserManager",
]
