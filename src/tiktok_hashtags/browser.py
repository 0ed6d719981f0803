"""
Browser utilities for the hashtag scraper.
Handles browser initialization, page navigation and cleanup.
"""

import asyncio
from datetime import datetime
from urllib.parse import urlparse

from bs4 import BeautifulSoup
from playwright.async_api import async_playwright

from tiktok_hashtags.config import SCRAPER_CONFIG
from tiktok_hashtags.errors import PageLoadError
from tiktok_hashtags.logger import setup_logger

logger = setup_logger('browser')


class BrowserSession:
    """
    One browser and context owned by a single scraper run.

    Used as an async context manager; the browser is closed on exit
    whether or not the body raised. Each fetch opens its own page so
    that concurrent fetches do not navigate the same tab.
    """

    def __init__(self, manager):
        self.manager = manager
        self.playwright = None
        self.browser = None
        self.context = None

    async def __aenter__(self):
        self.playwright = await async_playwright().start()
        try:
            self.browser = await self.playwright.chromium.launch(
                headless=SCRAPER_CONFIG['HEADLESS'],
                args=SCRAPER_CONFIG['BROWSER_ARGS'],
            )
            self.context = await self.browser.new_context(
                user_agent=SCRAPER_CONFIG['USER_AGENT'],
                viewport=SCRAPER_CONFIG['VIEWPORT'],
            )
        except Exception:
            await self.close()
            raise
        logger.info("Browser initialized successfully")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """
        Closes the context, the browser and the Playwright driver.

        Every step runs even if an earlier one raised; the first error is
        re-raised once all of them have been attempted.
        """
        steps = []
        if self.context:
            steps.append(self.context.close)
        if self.browser:
            steps.append(self.browser.close)
        if self.playwright:
            steps.append(self.playwright.stop)
        self.context = self.browser = self.playwright = None

        first_error = None
        for step in steps:
            try:
                await step()
            except Exception as e:
                logger.error(f"Error while closing browser: {str(e)}")
                if first_error is None:
                    first_error = e

        if first_error is not None:
            raise first_error
        if steps:
            logger.info("Browser closed")

    async def fetch(self, url, timeout_ms, settle_ms=0):
        """
        Loads a page and returns its parsed DOM.

        Args:
            url: URL to load
            timeout_ms: Navigation timeout in milliseconds
            settle_ms: Extra wait after load for client-side rendering

        Returns:
            BeautifulSoup object of the rendered page

        Raises:
            PageLoadError: if the page could not be loaded
        """
        await self.manager._check_rate_limit(urlparse(url).netloc)

        page = await self.context.new_page()
        try:
            if not await self.manager._handle_page_load(page, url, timeout_ms):
                raise PageLoadError(f"Failed to load {url} after all retries")

            if settle_ms:
                await page.wait_for_timeout(settle_ms)

            content = await page.content()
            return BeautifulSoup(content, 'html.parser')
        finally:
            await page.close()


class BrowserManager:
    """Manages browser interactions for web scraping"""

    def __init__(self):
        """Initialize the browser manager"""
        self.last_request_time = {}
        self._rate_lock = asyncio.Lock()

    async def _check_rate_limit(self, domain):
        """
        Implements rate limiting per domain

        Args:
            domain: The domain to check rate limits for
        """
        async with self._rate_lock:
            now = datetime.now().timestamp()
            if domain in self.last_request_time:
                time_passed = now - self.last_request_time[domain]
                if time_passed < SCRAPER_CONFIG['DELAY_BETWEEN_REQUESTS']:
                    await asyncio.sleep(
                        SCRAPER_CONFIG['DELAY_BETWEEN_REQUESTS'] - time_passed
                    )
            self.last_request_time[domain] = datetime.now().timestamp()

    async def _handle_page_load(self, page, url, timeout_ms):
        """
        Handles page loading with retries

        Args:
            page: Playwright page object
            url: URL to load
            timeout_ms: Navigation timeout per attempt

        Returns:
            True if the page loaded successfully, False otherwise
        """
        for attempt in range(SCRAPER_CONFIG['MAX_RETRIES']):
            try:
                logger.info(f"Attempting to load {url} (attempt {attempt + 1})")
                await page.goto(url, wait_until='networkidle', timeout=timeout_ms)
                return True
            except Exception as e:
                logger.error(
                    f"Failed to load {url} on attempt {attempt + 1}: {str(e)}"
                )
                if attempt < SCRAPER_CONFIG['MAX_RETRIES'] - 1:
                    await asyncio.sleep(SCRAPER_CONFIG['RETRY_DELAY'])
        return False

    def session(self):
        """
        Opens a browser session for one scraper run.

        Returns:
            BrowserSession to be used with 'async with'
        """
        return BrowserSession(self)
