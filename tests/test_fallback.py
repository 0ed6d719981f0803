import random
import re
import unittest

from tiktok_hashtags.fallback import TRENDING_REFERENCE, FallbackSynthesizer

_SUFFIXES = {'K': 1e3, 'M': 1e6, 'B': 1e9}


def views_to_number(text):
    match = re.fullmatch(r'([\d.]+)([KMB]?)', text)
    return float(match.group(1)) * _SUFFIXES.get(match.group(2), 1)


class TestTrendingFallback(unittest.TestCase):
    def setUp(self):
        self.synthesizer = FallbackSynthesizer(random.Random(0))

    def test_truncates_to_max_results(self):
        records = self.synthesizer.trending_fallback(3)

        self.assertEqual([r.hashtag for r in records], ['fyp', 'foryou', 'viral'])
        self.assertEqual([r.views_display for r in records], ['2.1B', '1.8B', '1.5B'])
        self.assertEqual([r.position for r in records], [1, 2, 3])

    def test_never_padded(self):
        records = self.synthesizer.trending_fallback(50)
        self.assertEqual(len(records), len(TRENDING_REFERENCE))

    def test_views_do_not_increase(self):
        views = [views_to_number(r.views_display) for r in self.synthesizer.trending_fallback(10)]
        self.assertEqual(views, sorted(views, reverse=True))

    def test_shape_matches_live_records(self):
        for record in self.synthesizer.trending_fallback(10):
            self.assertEqual(record.origin, 'trending')
            self.assertIsInstance(record.views_display, str)
            self.assertEqual(record.posts_display, 'N/A')
            self.assertIsNone(record.extraction_error)

    def test_independent_of_random_source(self):
        other = FallbackSynthesizer(random.Random(99))
        self.assertEqual(
            [r.to_dict() for r in self.synthesizer.trending_fallback(5, error='x')],
            [r.to_dict() for r in other.trending_fallback(5, error='x')],
        )


class TestFabricators(unittest.TestCase):
    def test_related_hashtags(self):
        synthesizer = FallbackSynthesizer()
        self.assertEqual(
            synthesizer.related_hashtags('food'),
            ['foodchallenge', 'foodtrend', 'viralfood'],
        )

    def test_reference_comments_are_a_copy(self):
        synthesizer = FallbackSynthesizer()
        comments = synthesizer.reference_comments()
        comments.append('extra')
        self.assertEqual(len(synthesizer.reference_comments()), 5)

    def test_seeded_fabrication_repeats(self):
        first = FallbackSynthesizer(random.Random(5))
        second = FallbackSynthesizer(random.Random(5))

        self.assertEqual(first.fabricate_video('x'), second.fabricate_video('x'))
        self.assertEqual(first.fabricate_influencer('x'), second.fabricate_influencer('x'))


if __name__ == '__main__':
    unittest.main()
