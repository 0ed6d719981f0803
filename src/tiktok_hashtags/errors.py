class ScraperError(RuntimeError):
    """Base class for errors raised by the hashtag scraper."""


class InputError(ScraperError):
    """Raised when the scraper input is missing or invalid."""


class UnknownModeError(InputError):
    """Raised when the requested scrape mode is not recognized."""


class PageLoadError(ScraperError):
    """Raised when a page could not be loaded after all retries."""
