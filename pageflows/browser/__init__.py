"""Browser sessions built on Playwright."""

from .playwright_session import PlaywrightSession

__all__ = ["PlaywrightSession"]
