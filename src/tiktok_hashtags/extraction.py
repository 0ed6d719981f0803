"""
Hashtag extraction from TikTok pages.

Trending mode reads the discover page once and falls back to the reference
list as a whole when that fails. Search and monitor modes look up each
hashtag on its own tag page; a failed lookup only affects its own record.
"""

import asyncio
from urllib.parse import quote

from tiktok_hashtags.config import SCRAPER_CONFIG, normalize_hashtag
from tiktok_hashtags.errors import UnknownModeError
from tiktok_hashtags.logger import setup_logger
from tiktok_hashtags.models import (
    NOT_AVAILABLE,
    ORIGIN_SEARCHED,
    ORIGIN_TRENDING,
    HashtagRecord,
)

logger = setup_logger('extraction')

SEARCH_ERROR = 'Failed to fetch data'
TRENDING_ERROR = 'Failed to fetch trending data'


def parse_trending_entries(soup, max_results):
    """
    Extracts ranked hashtag entries from the discover page.

    Args:
        soup: BeautifulSoup object of the discover page
        max_results: Maximum number of entries to look at

    Returns:
        List of HashtagRecord; entries without a name are skipped
    """
    selectors = SCRAPER_CONFIG['SELECTORS']
    records = []

    for index, element in enumerate(soup.select(selectors['trending_entry'])):
        if index >= max_results:
            break

        name_element = element.select_one(selectors['trending_name'])
        if not name_element:
            continue
        name = name_element.get_text().strip().replace('#', '').strip()
        if not name:
            continue

        views_element = element.select_one(selectors['trending_views'])
        views = views_element.get_text().strip() if views_element else ''

        records.append(HashtagRecord(
            hashtag=name,
            origin=ORIGIN_TRENDING,
            views_display=views or NOT_AVAILABLE,
            posts_display=NOT_AVAILABLE,
            position=index + 1,
        ))

    return records


def find_stat(soup, markers):
    """
    Returns the text of the first stat node containing one of the markers.

    Args:
        soup: BeautifulSoup object of a tag page
        markers: Substrings identifying the stat, e.g. ('view', 'View')

    Returns:
        Stripped text of the first matching node, or None
    """
    for element in soup.select(SCRAPER_CONFIG['SELECTORS']['search_stats']):
        text = element.get_text().strip()
        if any(marker in text for marker in markers):
            return text
    return None


class TrendingStrategy:
    """Discovery of currently trending hashtags."""

    origin = ORIGIN_TRENDING

    async def extract(self, engine, targets, session, max_results):
        logger.info("Scraping trending hashtags...")
        try:
            soup = await engine.fetch(
                session,
                SCRAPER_CONFIG['DISCOVER_URL'],
                SCRAPER_CONFIG['TRENDING_SETTLE_MS'],
            )
            records = parse_trending_entries(soup, max_results)
        except Exception as e:
            logger.error(f"Error scraping trending hashtags: {e}")
            return engine.fallback.trending_fallback(max_results, error=TRENDING_ERROR)

        logger.info(f"Found {len(records)} trending hashtags")
        return records


class SearchStrategy:
    """Per-hashtag lookup, shared by search and monitor modes."""

    origin = ORIGIN_SEARCHED

    async def extract(self, engine, targets, session, max_results):
        hashtags = [normalize_hashtag(t) for t in targets]
        hashtags = [t for t in hashtags if t]
        logger.info(f"Searching {len(hashtags)} hashtags...")

        semaphore = asyncio.Semaphore(engine.max_concurrency)

        async def bounded_lookup(hashtag):
            async with semaphore:
                return await self._lookup(engine, hashtag, session)

        # gather keeps input order regardless of completion order
        return list(await asyncio.gather(*(bounded_lookup(t) for t in hashtags)))

    async def _lookup(self, engine, hashtag, session):
        url = SCRAPER_CONFIG['TAG_URL'].format(hashtag=quote(hashtag, safe=''))
        logger.info(f"Searching for hashtag: {hashtag}")

        try:
            soup = await engine.fetch(session, url, SCRAPER_CONFIG['SEARCH_SETTLE_MS'])
        except Exception as e:
            logger.error(f"Error searching hashtag {hashtag}: {e!r}")
            return HashtagRecord(
                hashtag=hashtag,
                origin=self.origin,
                extraction_error=SEARCH_ERROR,
            )

        views = find_stat(soup, SCRAPER_CONFIG['VIEW_MARKERS'])
        posts = find_stat(soup, SCRAPER_CONFIG['POST_MARKERS'])
        if views is None:
            logger.debug(f"No view count found for {hashtag}")

        return HashtagRecord(
            hashtag=hashtag,
            origin=self.origin,
            views_display=views or NOT_AVAILABLE,
            posts_display=posts or NOT_AVAILABLE,
        )


_SEARCH = SearchStrategy()

STRATEGIES = {
    'trending': TrendingStrategy(),
    'search': _SEARCH,
    'monitor': _SEARCH,
}


def resolve_strategy(mode):
    """
    Returns the extraction strategy for a scrape mode.

    Raises:
        UnknownModeError: if mode is not trending, search or monitor
    """
    try:
        return STRATEGIES[mode]
    except (KeyError, TypeError):
        raise UnknownModeError(f"Unknown mode: {mode}") from None


class ExtractionEngine:
    """Runs the strategy for a mode against a browser session."""

    def __init__(self, fallback, max_concurrency=None, fetch_timeout=None,
                 page_load_timeout=None):
        """
        Args:
            fallback: FallbackSynthesizer used when trending extraction fails
            max_concurrency: Maximum number of tag pages loaded at once
            fetch_timeout: Upper bound in seconds for a single page fetch
            page_load_timeout: Navigation timeout in milliseconds
        """
        self.fallback = fallback
        self.max_concurrency = max(1, max_concurrency or SCRAPER_CONFIG['MAX_CONCURRENCY'])
        self.fetch_timeout = fetch_timeout or SCRAPER_CONFIG['FETCH_TIMEOUT']
        self.page_load_timeout = page_load_timeout or SCRAPER_CONFIG['PAGE_LOAD_TIMEOUT']

    async def fetch(self, session, url, settle_ms):
        # Timeouts are handled like any other fetch failure by the callers
        return await asyncio.wait_for(
            session.fetch(url, self.page_load_timeout, settle_ms=settle_ms),
            timeout=self.fetch_timeout,
        )

    async def extract(self, mode, targets, session, max_results):
        """
        Extracts hashtag records for a mode.

        Args:
            mode: 'trending', 'search' or 'monitor'
            targets: Hashtags to look up (ignored in trending mode)
            session: Object with an async fetch(url, timeout_ms, settle_ms=...)
            max_results: Maximum number of trending entries

        Returns:
            List of HashtagRecord in discovery or input order
        """
        strategy = resolve_strategy(mode)
        return await strategy.extract(self, targets, session, max_results)
