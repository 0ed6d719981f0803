"""
Hashtag scraper run: mode dispatch, extraction, enrichment and saving.
"""

import random
from datetime import datetime, timezone

from tiktok_hashtags.browser import BrowserManager
from tiktok_hashtags.enrichment import EnrichmentPipeline
from tiktok_hashtags.errors import InputError
from tiktok_hashtags.extraction import ExtractionEngine, resolve_strategy
from tiktok_hashtags.fallback import FallbackSynthesizer
from tiktok_hashtags.logger import setup_logger
from tiktok_hashtags.sinks import CsvSink, DatasetSink

logger = setup_logger('scraper')


def _utc_now():
    return datetime.now(timezone.utc).isoformat()


class HashtagScraper:
    """
    Runs one scrape from input to saved records.

    Every collaborator can be replaced, which is how the tests drive a run
    without a real browser.
    """

    def __init__(self, scraper_input, browser_manager=None, dataset_sink=None,
                 csv_sink=None, rng=None, scorer=None, max_concurrency=None,
                 fetch_timeout=None, clock=None):
        """
        Args:
            scraper_input: ScraperInput for this run
            browser_manager: Object whose session() is an async context manager
                yielding something with fetch(url, timeout_ms, settle_ms=...)
            dataset_sink: Object with append(records)
            csv_sink: Object with write(records), used for csv output
            rng: random.Random used by the fabricated enrichment data
            scorer: Sentiment scorer with analyze(text)
            max_concurrency: Maximum number of tag pages loaded at once
            fetch_timeout: Upper bound in seconds for a single page fetch
            clock: Callable returning the scraped_at timestamp string
        """
        if scraper_input is None:
            raise InputError('No input provided')

        self.input = scraper_input
        self.browser_manager = browser_manager or BrowserManager()
        self.dataset_sink = dataset_sink or DatasetSink()
        self.csv_sink = csv_sink or CsvSink()
        self.clock = clock or _utc_now

        synthesizer = FallbackSynthesizer(rng or random.Random())
        self.engine = ExtractionEngine(
            synthesizer,
            max_concurrency=max_concurrency,
            fetch_timeout=fetch_timeout,
        )
        self.pipeline = EnrichmentPipeline(synthesizer, scorer=scorer)

    def stamp(self, records):
        scraped_at = self.clock()
        for record in records:
            record.scraped_at = scraped_at
            record.scrape_mode = self.input.mode
        return records

    def save(self, records):
        self.dataset_sink.append(records)
        if self.input.output_format == 'csv':
            self.csv_sink.write(records)
        logger.info(f"Successfully saved {len(records)} hashtag records")

    async def collect(self):
        """
        Extracts, enriches and stamps records without saving them.

        Returns:
            List of HashtagRecord

        Raises:
            UnknownModeError: before any browser work if the mode is unknown
        """
        resolve_strategy(self.input.mode)

        async with self.browser_manager.session() as session:
            records = await self.engine.extract(
                self.input.mode,
                self.input.hashtags,
                session,
                self.input.max_results,
            )

        records = self.pipeline.run(records, self.input)
        return self.stamp(records)

    async def run(self):
        """
        Runs the scrape and hands the records to the sinks.

        Returns:
            List of saved HashtagRecord
        """
        logger.info(f"Starting TikTok hashtag scraper in {self.input.mode} mode")
        try:
            records = await self.collect()
            self.save(records)
        except Exception as e:
            logger.error(f"Error in TikTok hashtag scraper: {e}")
            raise

        logger.info("TikTok hashtag scraper completed successfully")
        return records
