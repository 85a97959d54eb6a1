from bs4 import BeautifulSoup
from playwright.sync_api import sync_playwright

from . import get_menu


class MenuScraper(get_menu.MenuScraper):
    """Link locator for listing pages that only build their links in the browser."""

    def __init__(self, url, headless=True, timeout_ms=30000):
        super().__init__(url)
        self.headless = headless
        self.timeout_ms = timeout_ms

    def get_soup(self):
        with sync_playwright() as p:
            browser = p.chromium.launch(headless=self.headless)
            try:
                page = browser.new_page()
                page.goto(self.url, wait_until="networkidle", timeout=self.timeout_ms)
                html = page.content()
            finally:
                browser.close()
        return BeautifulSoup(html, "html.parser")
