import unittest

from tiktok_hashtags.fallback import REFERENCE_COMMENTS
from tiktok_hashtags.sentiment import LexiconSentimentScorer, classify, summarize


class TableScorer:
    """Returns known scores per comment."""

    def __init__(self, table):
        self.table = table

    def analyze(self, text):
        score, comparative = self.table[text]
        return {'score': score, 'comparative': comparative}


class TestClassify(unittest.TestCase):
    def test_sign_rule(self):
        self.assertEqual(classify(0.5), 'positive')
        self.assertEqual(classify(-0.01), 'negative')
        self.assertEqual(classify(0), 'neutral')


class TestSummarize(unittest.TestCase):
    def test_reference_sample_with_known_scores(self):
        scorer = TableScorer({
            'This is amazing!': (4, 1.3333),
            'Love this trend': (3, 1.0),
            'Not my favorite': (2, 0.6667),
            'So cool and creative': (3, 0.75),
            'This is boring': (-3, -1.0),
        })
        summary = summarize(REFERENCE_COMMENTS, scorer)

        self.assertEqual(summary.sample_size, 5)
        self.assertAlmostEqual(summary.average_score, 9 / 5)
        self.assertAlmostEqual(summary.average_comparative, 2.75 / 5)
        self.assertEqual(summary.classification, 'positive')

    def test_negative_total(self):
        scorer = TableScorer({'bad': (-2, -1.0), 'meh': (1, 0.5)})
        summary = summarize(['bad', 'meh'], scorer)

        self.assertAlmostEqual(summary.average_score, -0.5)
        self.assertEqual(summary.classification, 'negative')

    def test_balanced_total_is_neutral(self):
        scorer = TableScorer({'up': (2, 1.0), 'down': (-2, -1.0)})
        summary = summarize(['up', 'down'], scorer)

        self.assertEqual(summary.average_score, 0.0)
        self.assertEqual(summary.classification, 'neutral')

    def test_empty_sample(self):
        summary = summarize([], TableScorer({}))

        self.assertEqual(summary.sample_size, 0)
        self.assertEqual(summary.average_score, 0.0)
        self.assertEqual(summary.classification, 'neutral')


class TestLexiconScorer(unittest.TestCase):
    def test_custom_lexicon(self):
        scorer = LexiconSentimentScorer(lexicon={'love': 3.0, 'boring': -1.5})

        result = scorer.analyze('Love this trend')
        self.assertEqual(result['score'], 3.0)
        self.assertAlmostEqual(result['comparative'], 1.0)
        self.assertEqual(result['tokens'], ['love', 'this', 'trend'])

        result = scorer.analyze('This is boring')
        self.assertEqual(result['score'], -1.5)
        self.assertAlmostEqual(result['comparative'], -0.5)

    def test_empty_text(self):
        scorer = LexiconSentimentScorer(lexicon={})
        result = scorer.analyze('')

        self.assertEqual(result['score'], 0.0)
        self.assertEqual(result['comparative'], 0.0)

    def test_negation_flips_valence(self):
        scorer = LexiconSentimentScorer(lexicon={'favorite': 2.0, 'love': 3.0})

        self.assertAlmostEqual(scorer.analyze('Not my favorite')['score'], -1.48)
        self.assertAlmostEqual(scorer.analyze("Don't love it")['score'], -2.22)
        # Only the three words before a lexicon word can negate it
        self.assertAlmostEqual(scorer.analyze('not one two three love')['score'], 3.0)

    def test_vader_lexicon_scores(self):
        scorer = LexiconSentimentScorer()

        self.assertLess(scorer.analyze('Not my favorite')['score'], 0)
        self.assertAlmostEqual(scorer.analyze('Not my favorite')['score'], 2.0 * -0.74)
        self.assertAlmostEqual(scorer.analyze('This is amazing!')['score'], 2.8)
        self.assertAlmostEqual(scorer.analyze('This is boring')['score'], -1.3)

    def test_vader_lexicon_on_reference_comments(self):
        summary = summarize(REFERENCE_COMMENTS, LexiconSentimentScorer())

        # 2.8 + 3.2 - 1.48 + (1.3 + 1.9) - 1.3
        self.assertEqual(summary.sample_size, 5)
        self.assertAlmostEqual(summary.average_score, 6.42 / 5)
        self.assertEqual(summary.classification, 'positive')


if __name__ == '__main__':
    unittest.main()
