from squirrel.driver.base import BrowserDriver
from squirrel.driver.playwright_driver import PlaywrightDriver, open_driver

__all__ = ["BrowserDriver", "PlaywrightDriver", "open_driver"]
