"""
Enrichment stages applied to extracted hashtag records.

Each stage is gated by an input flag, reads only the hashtag and writes only
its own field. A failure on one record leaves that record's field unset and
does not stop the stage.
"""

from tiktok_hashtags.logger import setup_logger
from tiktok_hashtags.sentiment import LexiconSentimentScorer, summarize

logger = setup_logger('enrichment')


def _collect(records, produce):
    """
    Computes one outcome per record, capturing failures.

    Returns:
        List of (value, error) tuples aligned with records
    """
    outcomes = []
    for record in records:
        try:
            outcomes.append((produce(record), None))
        except Exception as e:
            outcomes.append((None, e))
    return outcomes


class EnrichmentStage:
    """A flag-gated transformation that sets one record field."""

    name = ''
    flag = ''
    field = ''
    description = ''

    def __init__(self, synthesizer):
        self.synthesizer = synthesizer

    def produce(self, record):
        raise NotImplementedError

    def enabled(self, scraper_input):
        return bool(getattr(scraper_input, self.flag))

    def apply(self, records, scraper_input):
        """
        Enriches every record in place when the stage is enabled.

        Args:
            records: List of HashtagRecord
            scraper_input: ScraperInput holding the stage flags

        Returns:
            The same list of records
        """
        if not self.enabled(scraper_input):
            return records

        logger.info(f"{self.description}...")
        failed = 0
        for record, (value, error) in zip(records, _collect(records, self.produce)):
            if error is not None:
                failed += 1
                logger.warning(f"Error in {self.name} for {record.hashtag}: {error!r}")
                continue
            setattr(record, self.field, value)

        if failed:
            logger.warning(f"{self.name}: {failed}/{len(records)} records left without {self.field}")
        return records


class VideoDetailsStage(EnrichmentStage):
    name = 'video details'
    flag = 'include_video_details'
    field = 'top_videos'
    description = 'Enhancing with video details'

    def produce(self, record):
        return [self.synthesizer.fabricate_video(record.hashtag)]


class RelatedHashtagsStage(EnrichmentStage):
    name = 'related hashtags'
    flag = 'include_related_hashtags'
    field = 'related_hashtags'
    description = 'Adding related hashtags'

    def produce(self, record):
        return self.synthesizer.related_hashtags(record.hashtag)


class SentimentStage(EnrichmentStage):
    name = 'sentiment analysis'
    flag = 'include_sentiment_analysis'
    field = 'sentiment_summary'
    description = 'Performing sentiment analysis'

    def __init__(self, synthesizer, scorer=None):
        super().__init__(synthesizer)
        self._scorer = scorer

    @property
    def scorer(self):
        # The lexicon is only loaded when the stage actually runs
        if self._scorer is None:
            self._scorer = LexiconSentimentScorer()
        return self._scorer

    def produce(self, record):
        return summarize(self.synthesizer.reference_comments(), self.scorer)


class InfluencerStage(EnrichmentStage):
    name = 'influencer identification'
    flag = 'include_influencers'
    field = 'top_influencers'
    description = 'Identifying top influencers'

    def produce(self, record):
        return [self.synthesizer.fabricate_influencer(record.hashtag)]


class EnrichmentPipeline:
    """Runs the enrichment stages in their fixed order."""

    def __init__(self, synthesizer, scorer=None):
        self.stages = [
            VideoDetailsStage(synthesizer),
            RelatedHashtagsStage(synthesizer),
            SentimentStage(synthesizer, scorer=scorer),
            InfluencerStage(synthesizer),
        ]

    def run(self, records, scraper_input):
        for stage in self.stages:
            records = stage.apply(records, scraper_input)
        return records
