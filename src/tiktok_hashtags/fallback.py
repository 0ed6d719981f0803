"""
Substitute data used when live extraction is unavailable.

The trending list is fixed so that a failed discovery run always yields the
same output. The per-record fabricators draw from an injected random source
and only guarantee shape and value ranges.
"""

import random
import string

from tiktok_hashtags.logger import setup_logger
from tiktok_hashtags.models import (
    NOT_AVAILABLE,
    ORIGIN_TRENDING,
    HashtagRecord,
    InfluencerSummary,
    VideoSummary,
)

logger = setup_logger('fallback')

# Rank-ordered, views never increase down the list
TRENDING_REFERENCE = [
    ('fyp', '2.1B'),
    ('foryou', '1.8B'),
    ('viral', '1.5B'),
    ('trending', '1.2B'),
    ('tiktok', '1.1B'),
    ('dance', '950M'),
    ('comedy', '800M'),
    ('music', '750M'),
    ('funny', '700M'),
    ('love', '650M'),
]

REFERENCE_COMMENTS = [
    'This is amazing!',
    'Love this trend',
    'Not my favorite',
    'So cool and creative',
    'This is boring',
]

_ID_ALPHABET = string.digits + string.ascii_lowercase


class FallbackSynthesizer:
    """Builds stand-in records and enrichment values."""

    def __init__(self, rng=None):
        """
        Args:
            rng: random.Random instance; a fresh unseeded one when omitted
        """
        self.rng = rng or random.Random()

    def trending_fallback(self, max_results, error=None):
        """
        Returns the reference trending list, truncated to max_results.

        Args:
            max_results: Maximum number of records to return
            error: Diagnostic stored on every record, if any

        Returns:
            List of HashtagRecord in rank order
        """
        logger.info("Using reference trending hashtags")
        records = []
        for position, (hashtag, views) in enumerate(TRENDING_REFERENCE[:max_results], start=1):
            records.append(HashtagRecord(
                hashtag=hashtag,
                origin=ORIGIN_TRENDING,
                views_display=views,
                posts_display=NOT_AVAILABLE,
                position=position,
                extraction_error=error,
            ))
        return records

    def _token(self, length):
        return ''.join(self.rng.choice(_ID_ALPHABET) for _ in range(length))

    def fabricate_video(self, hashtag):
        return VideoSummary(
            video_id=f'video_{self._token(9)}',
            author=f'user_{self._token(6)}',
            likes=self.rng.randrange(100000),
            comments=self.rng.randrange(10000),
            shares=self.rng.randrange(5000),
            views=self.rng.randrange(1000000),
        )

    def related_hashtags(self, hashtag):
        """Derives up to three related hashtags from the hashtag itself."""
        candidates = [
            f'{hashtag}challenge',
            f'{hashtag}trend',
            f'viral{hashtag}',
            f'{hashtag}2024',
        ]
        return candidates[:3]

    def reference_comments(self):
        return list(REFERENCE_COMMENTS)

    def fabricate_influencer(self, hashtag):
        return InfluencerSummary(
            username=f'influencer_{self._token(6)}',
            follower_count=self.rng.randrange(1000000),
            engagement_score=self.rng.randint(1, 10),
            post_count=self.rng.randint(1, 50),
        )
