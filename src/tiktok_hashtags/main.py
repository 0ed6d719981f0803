import argparse
import asyncio
import sys

from tiktok_hashtags.config import (
    DEFAULT_INPUT,
    MODES,
    OUTPUT_FORMATS,
    load_input,
    read_input_file,
)
from tiktok_hashtags.errors import InputError
from tiktok_hashtags.logger import setup_logger
from tiktok_hashtags.scraper import HashtagScraper
from tiktok_hashtags.sinks import CsvSink, DatasetSink

# Configure logging
logger = setup_logger('main')


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Discover or look up TikTok hashtags and enrich them with secondary data"
    )

    parser.add_argument(
        "--input",
        type=str,
        help="JSON input file; other options override its values"
    )

    # Mode is validated by the scraper so that unknown modes fail the run
    parser.add_argument(
        "--mode",
        type=str,
        help=f"Scrape mode: {', '.join(MODES)} (default: {DEFAULT_INPUT['mode']})"
    )

    parser.add_argument(
        "--hashtag",
        dest="hashtags",
        action="append",
        help="Hashtag to look up in search or monitor mode (repeatable)"
    )

    parser.add_argument(
        "--max-results",
        type=int,
        help=f"Maximum number of trending hashtags (default: {DEFAULT_INPUT['max_results']})"
    )

    parser.add_argument(
        "--video-details",
        dest="include_video_details",
        action=argparse.BooleanOptionalAction,
        help="Add top video details to each hashtag (default: on)"
    )

    parser.add_argument(
        "--related-hashtags",
        dest="include_related_hashtags",
        action=argparse.BooleanOptionalAction,
        help="Add related hashtags to each hashtag (default: on)"
    )

    parser.add_argument(
        "--sentiment",
        dest="include_sentiment_analysis",
        action=argparse.BooleanOptionalAction,
        help="Add a sentiment summary to each hashtag (default: off)"
    )

    parser.add_argument(
        "--influencers",
        dest="include_influencers",
        action=argparse.BooleanOptionalAction,
        help="Add top influencers to each hashtag (default: off)"
    )

    parser.add_argument(
        "--output-format",
        choices=OUTPUT_FORMATS,
        help="Also write a CSV file when set to csv (default: json)"
    )

    parser.add_argument(
        "--output-dir",
        type=str,
        default="data",
        help="Directory for the dataset and CSV files (default: data)"
    )

    parser.add_argument(
        "--max-concurrency",
        type=int,
        help="Maximum number of hashtag pages loaded at once"
    )

    return parser.parse_args(argv)


def build_input(args):
    """Merges the input file, if any, with the command line options."""
    options = {}
    if args.input:
        data = read_input_file(args.input)
        if data is None:
            raise InputError(f"No input provided in {args.input}")
        options.update(data)

    for key in DEFAULT_INPUT:
        value = getattr(args, key, None)
        if value is not None:
            options[key] = value

    return load_input(options)


async def main_async(argv=None):
    args = parse_args(argv)
    scraper_input = build_input(args)

    scraper = HashtagScraper(
        scraper_input,
        dataset_sink=DatasetSink(args.output_dir),
        csv_sink=CsvSink(args.output_dir),
        max_concurrency=args.max_concurrency,
    )
    return await scraper.run()


def main(argv=None):
    """Simple wrapper for async main function."""
    logger.info("Starting TikTok Hashtag Scraper...")
    try:
        records = asyncio.run(main_async(argv))
    except InputError as e:
        logger.error(str(e))
        return 1

    print(f"Saved {len(records)} hashtag records")
    return 0


if __name__ == "__main__":
    sys.exit(main())
