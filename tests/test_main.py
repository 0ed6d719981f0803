import json
import os
import tempfile
import unittest

from tiktok_hashtags.errors import InputError
from tiktok_hashtags.main import build_input, main, parse_args


class TestCommandLine(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmp.cleanup()

    def test_flags(self):
        args = parse_args([
            '--mode', 'search',
            '--hashtag', 'dance',
            '--hashtag', '#food',
            '--no-video-details',
            '--sentiment',
            '--output-format', 'csv',
        ])
        scraper_input = build_input(args)

        self.assertEqual(scraper_input.mode, 'search')
        self.assertEqual(scraper_input.hashtags, ['dance', 'food'])
        self.assertFalse(scraper_input.include_video_details)
        self.assertTrue(scraper_input.include_related_hashtags)
        self.assertTrue(scraper_input.include_sentiment_analysis)
        self.assertEqual(scraper_input.output_format, 'csv')

    def test_flags_override_input_file(self):
        path = os.path.join(self.tmp.name, 'input.json')
        with open(path, 'w', encoding='utf-8') as f:
            json.dump({'mode': 'search', 'maxResults': 20, 'includeInfluencers': True}, f)

        scraper_input = build_input(parse_args([
            '--input', path, '--hashtag', 'fyp', '--max-results', '7',
        ]))

        self.assertEqual(scraper_input.mode, 'search')
        self.assertEqual(scraper_input.hashtags, ['fyp'])
        self.assertEqual(scraper_input.max_results, 7)
        self.assertTrue(scraper_input.include_influencers)

    def test_empty_input_file(self):
        path = os.path.join(self.tmp.name, 'input.json')
        open(path, 'w').close()

        with self.assertRaises(InputError):
            build_input(parse_args(['--input', path]))

    def test_unknown_mode_exits_with_error(self):
        output_dir = os.path.join(self.tmp.name, 'out')
        status = main(['--mode', 'bogus', '--output-dir', output_dir])

        self.assertEqual(status, 1)
        self.assertFalse(os.path.exists(output_dir))


if __name__ == '__main__':
    unittest.main()
