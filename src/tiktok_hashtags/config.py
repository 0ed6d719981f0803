"""
Configuration for the TikTok hashtag scraper.
Holds browser/scraping settings and the run input accepted by the scraper.
"""

import json
import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional, Union

from tiktok_hashtags.errors import InputError
from tiktok_hashtags.logger import setup_logger

logger = setup_logger('config')


def _env_flag(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() not in ('0', 'false', 'no', 'off')


SCRAPER_CONFIG = {
    'DISCOVER_URL': 'https://www.tiktok.com/discover',
    'TAG_URL': 'https://www.tiktok.com/tag/{hashtag}',

    'HEADLESS': _env_flag('SCRAPER_HEADLESS', True),
    'USER_AGENT': (
        'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
        '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
    ),
    'VIEWPORT': {'width': 1920, 'height': 1080},
    'BROWSER_ARGS': [
        '--no-sandbox',
        '--disable-setuid-sandbox',
        '--disable-dev-shm-usage',
        '--disable-accelerated-2d-canvas',
        '--no-first-run',
        '--no-zygote',
        '--disable-gpu',
    ],

    # Milliseconds, handed to Playwright
    'PAGE_LOAD_TIMEOUT': 30000,
    'TRENDING_SETTLE_MS': 3000,
    'SEARCH_SETTLE_MS': 2000,

    # Seconds
    # Covers every page-load attempt, the retry delays and the settle wait
    'FETCH_TIMEOUT': 75.0,
    'DELAY_BETWEEN_REQUESTS': 1.0,
    'RETRY_DELAY': 2.0,
    'MAX_RETRIES': 2,

    'MAX_CONCURRENCY': int(os.environ.get('SCRAPER_MAX_CONCURRENCY', '3')),

    'SELECTORS': {
        'trending_entry': '[data-e2e="discover-hashtag"]',
        'trending_name': 'h3, h4, .hashtag-name',
        'trending_views': '.view-count, .stats',
        'search_stats': '.number, .count, .stats',
    },
    'VIEW_MARKERS': ('view', 'View'),
    'POST_MARKERS': ('post', 'Post', 'video', 'Video'),

    'OUTPUT_DIR': 'data',
    'DATASET_FILE': 'dataset.jsonl',
    'CSV_FILE': 'hashtag_results.csv',
}

MODES = ('trending', 'search', 'monitor')
OUTPUT_FORMATS = ('json', 'csv')

DEFAULT_INPUT = {
    'mode': 'trending',
    'hashtags': [],
    'max_results': 50,
    'include_video_details': True,
    'include_related_hashtags': True,
    'include_sentiment_analysis': False,
    'include_influencers': False,
    'output_format': 'json',
}

# Actor-style input keys
_CAMEL_CASE_KEYS = {
    'maxResults': 'max_results',
    'includeVideoDetails': 'include_video_details',
    'includeRelatedHashtags': 'include_related_hashtags',
    'includeSentimentAnalysis': 'include_sentiment_analysis',
    'includeInfluencers': 'include_influencers',
    'outputFormat': 'output_format',
}

_BOOL_KEYS = (
    'include_video_details',
    'include_related_hashtags',
    'include_sentiment_analysis',
    'include_influencers',
)


def normalize_hashtag(value):
    """Strips whitespace and a leading '#' from a hashtag."""
    tag = (value or '').strip()
    if tag.startswith('#'):
        tag = tag[1:].strip()
    return tag


@dataclass
class ScraperInput:
    """Options for one scraper run. The mode is checked by the scraper itself."""

    mode: str = 'trending'
    hashtags: List[str] = field(default_factory=list)
    max_results: int = 50
    include_video_details: bool = True
    include_related_hashtags: bool = True
    include_sentiment_analysis: bool = False
    include_influencers: bool = False
    output_format: str = 'json'

    def __post_init__(self):
        if not isinstance(self.hashtags, (list, tuple)):
            raise InputError('hashtags must be a list of strings')
        cleaned = []
        for tag in self.hashtags:
            if not isinstance(tag, str):
                raise InputError(f'hashtags must be strings, got {tag!r}')
            tag = normalize_hashtag(tag)
            if tag:
                cleaned.append(tag)
        self.hashtags = cleaned

        if isinstance(self.max_results, bool) or not isinstance(self.max_results, int):
            raise InputError(f'max_results must be an integer, got {self.max_results!r}')
        if self.max_results < 1:
            raise InputError('max_results must be >= 1')

        for key in _BOOL_KEYS:
            if not isinstance(getattr(self, key), bool):
                raise InputError(f'{key} must be a boolean')

        if self.output_format not in OUTPUT_FORMATS:
            raise InputError(
                f"output_format must be one of {', '.join(OUTPUT_FORMATS)}, "
                f"got {self.output_format!r}"
            )

        if self.mode in ('search', 'monitor') and not self.hashtags:
            raise InputError(f'At least one hashtag is required in {self.mode} mode')

    def to_dict(self):
        return {f.name: getattr(self, f.name) for f in fields(self)}


def load_input(source: Union[str, os.PathLike, Mapping[str, Any], None]) -> ScraperInput:
    """
    Builds a ScraperInput from a mapping or a JSON input file.

    Args:
        source: Mapping of options, or path to a JSON file holding one

    Returns:
        ScraperInput with defaults merged under the provided values
    """
    if source is None:
        raise InputError('No input provided')

    if isinstance(source, Mapping):
        raw = dict(source)
    else:
        raw = read_input_file(source)

    if raw is None:
        raise InputError('No input provided')

    options: Dict[str, Any] = {}
    known = set(DEFAULT_INPUT)
    for key, value in raw.items():
        name = _CAMEL_CASE_KEYS.get(key, key)
        if name not in known:
            logger.warning(f"Ignoring unknown input option: {key}")
            continue
        options[name] = value

    merged = {**DEFAULT_INPUT, **options}
    if merged['hashtags'] is None:
        merged['hashtags'] = []
    logger.info(f"Input: {json.dumps(merged, indent=2, default=str)}")
    return ScraperInput(**merged)


def read_input_file(path) -> Optional[Dict[str, Any]]:
    if not os.path.exists(path):
        raise InputError(f'Input file not found: {path}')

    try:
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()
    except OSError as e:
        raise InputError(f'Failed to read input file: {path}') from e

    if not text.strip():
        return None

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InputError(f'Failed to parse JSON in {path}: {e}') from e

    if not isinstance(data, dict):
        raise InputError(f'Top-level JSON in {path} must be an object')
    return data
