"""
Record types produced by the scraper.
"""

from dataclasses import asdict, dataclass
from typing import List, Optional

NOT_AVAILABLE = 'N/A'

ORIGIN_TRENDING = 'trending'
ORIGIN_SEARCHED = 'searched'

# Omitted from serialized output while unset
OPTIONAL_FIELDS = (
    'position',
    'extraction_error',
    'top_videos',
    'related_hashtags',
    'sentiment_summary',
    'top_influencers',
)


@dataclass
class VideoSummary:
    video_id: str
    author: str
    likes: int
    comments: int
    shares: int
    views: int


@dataclass
class SentimentSummary:
    average_score: float
    average_comparative: float
    sample_size: int
    classification: str


@dataclass
class InfluencerSummary:
    username: str
    follower_count: int
    engagement_score: int
    post_count: int


@dataclass
class HashtagRecord:
    """
    One hashtag and everything collected about it during a run.

    Enrichment fields stay None unless their stage ran. scraped_at and
    scrape_mode are filled in once, after enrichment.
    """

    hashtag: str
    origin: str
    views_display: str = NOT_AVAILABLE
    posts_display: str = NOT_AVAILABLE
    position: Optional[int] = None
    extraction_error: Optional[str] = None
    top_videos: Optional[List[VideoSummary]] = None
    related_hashtags: Optional[List[str]] = None
    sentiment_summary: Optional[SentimentSummary] = None
    top_influencers: Optional[List[InfluencerSummary]] = None
    scraped_at: Optional[str] = None
    scrape_mode: Optional[str] = None

    def to_dict(self):
        """
        Converts the record to a JSON-ready dictionary.

        Returns:
            Dictionary without the optional fields that were never set
        """
        data = asdict(self)
        for name in OPTIONAL_FIELDS:
            if data[name] is None:
                del data[name]
        return data
