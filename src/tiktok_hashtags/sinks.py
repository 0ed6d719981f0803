"""
Persistence of finished hashtag records.
"""

import json
import os

import pandas as pd

from tiktok_hashtags.config import SCRAPER_CONFIG
from tiktok_hashtags.logger import setup_logger

logger = setup_logger('sinks')

CSV_COLUMNS = [
    ('hashtag', 'Hashtag'),
    ('views_display', 'Views'),
    ('posts_display', 'Posts'),
    ('origin', 'Origin'),
    ('position', 'Position'),
]


def _ensure_dir(output_file):
    output_dir = os.path.dirname(output_file)
    if output_dir and not os.path.exists(output_dir):
        os.makedirs(output_dir, exist_ok=True)
        logger.info(f"Created output directory: {output_dir}")


def records_to_dataframe(records):
    """
    Builds the tabular view of a record set.

    Args:
        records: List of HashtagRecord

    Returns:
        DataFrame with the CSV columns, in order
    """
    rows = []
    for record in records:
        data = record.to_dict()
        rows.append({title: data.get(key) for key, title in CSV_COLUMNS})

    df = pd.DataFrame(rows, columns=[title for _, title in CSV_COLUMNS])
    # Keep positions as integers next to missing values
    df['Position'] = df['Position'].astype('Int64')
    return df


class DatasetSink:
    """Appends records to a JSON lines dataset file."""

    def __init__(self, output_dir=None):
        output_dir = output_dir or SCRAPER_CONFIG['OUTPUT_DIR']
        self.path = os.path.join(output_dir, SCRAPER_CONFIG['DATASET_FILE'])

    def append(self, records):
        """
        Appends one JSON object per record.

        Args:
            records: List of HashtagRecord
        """
        logger.info("Saving results to dataset...")
        _ensure_dir(self.path)
        with open(self.path, 'a', encoding='utf-8') as f:
            for record in records:
                f.write(json.dumps(record.to_dict(), ensure_ascii=False))
                f.write('\n')
        logger.info(f"Appended {len(records)} records to {self.path}")


class CsvSink:
    """Writes the summary columns of a record set to a CSV file."""

    def __init__(self, output_dir=None):
        output_dir = output_dir or SCRAPER_CONFIG['OUTPUT_DIR']
        self.path = os.path.join(output_dir, SCRAPER_CONFIG['CSV_FILE'])

    def write(self, records):
        if not records:
            logger.warning("No hashtag records to save")
            return

        _ensure_dir(self.path)
        df = records_to_dataframe(records)
        df.to_csv(self.path, index=False)
        logger.info(f"CSV file created: {self.path}")
