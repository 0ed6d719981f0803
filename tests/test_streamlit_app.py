import importlib.util
import os
import unittest
from unittest.mock import patch

from fakes import DISCOVER_HTML, FakeBrowserManager, FakeSession
from tiktok_hashtags.config import SCRAPER_CONFIG, load_input

APP_PATH = os.path.join(os.path.dirname(__file__), os.pardir, 'streamlit_app.py')


def load_app():
    spec = importlib.util.spec_from_file_location('streamlit_app', APP_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@unittest.skipUnless(
    importlib.util.find_spec('streamlit'), 'streamlit is not installed'
)
class TestStreamlitRun(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.app = load_app()

    async def test_run_keeps_records_in_memory(self):
        manager = FakeBrowserManager(
            FakeSession(pages={SCRAPER_CONFIG['DISCOVER_URL']: DISCOVER_HTML})
        )
        scraper_input = load_input({'include_influencers': True})

        with patch('tiktok_hashtags.scraper.CsvSink') as csv_sink:
            records = await self.app.run_scraper(scraper_input, browser_manager=manager)

        self.assertEqual([r.hashtag for r in records], ['dance', 'cooking', 'booktok'])
        self.assertEqual(manager.closed, 1)
        csv_sink.return_value.write.assert_not_called()

        df = self.app.process_records_for_export(records)
        self.assertEqual(list(df['hashtag']), ['dance', 'cooking', 'booktok'])
        self.assertIn('top_influencer', df.columns)
        self.assertIn('top_video_author', df.columns)

    def test_export_of_no_records(self):
        self.assertTrue(self.app.process_records_for_export([]).empty)


if __name__ == '__main__':
    unittest.main()
