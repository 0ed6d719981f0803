"""Sentiment analysis modules."""

import re
from typing import Any, Dict, Iterable

from vaderSentiment.vaderSentiment import N_SCALAR, SentimentIntensityAnalyzer, negated

from tiktok_hashtags.models import SentimentSummary

_TOKEN_RE = re.compile(r"[a-z0-9']+")

# How many preceding words can negate a lexicon word
NEGATION_WINDOW = 3


def classify(score: float) -> str:
    """Maps an aggregate score to a label by its sign."""
    if score > 0:
        return 'positive'
    if score < 0:
        return 'negative'
    return 'neutral'


class LexiconSentimentScorer:
    """
    Word-level lexicon scorer over the VADER lexicon.

    score is the sum of the valences of the words found in the lexicon. A
    word preceded by a negation (VADER's negated() over the previous three
    words) has its valence scaled by N_SCALAR, so "not my favorite" scores
    below zero. comparative is that score divided by the number of words in
    the text.
    """

    def __init__(self, lexicon=None):
        if lexicon is None:
            lexicon = SentimentIntensityAnalyzer().lexicon
        self.lexicon = lexicon

    def tokenize(self, text):
        return _TOKEN_RE.findall((text or '').lower())

    def valence(self, tokens, i):
        value = float(self.lexicon.get(tokens[i], 0.0))
        if value and negated(tokens[max(0, i - NEGATION_WINDOW):i]):
            value *= N_SCALAR
        return value

    def analyze(self, text: str) -> Dict[str, Any]:
        """Analyze sentiment of text."""
        tokens = self.tokenize(text)
        score = sum(self.valence(tokens, i) for i in range(len(tokens)))
        comparative = score / len(tokens) if tokens else 0.0
        return {
            'score': score,
            'comparative': comparative,
            'tokens': tokens,
        }


def summarize(comments: Iterable[str], scorer) -> SentimentSummary:
    """
    Averages score and comparative over a sample of comments.

    Args:
        comments: Texts to score
        scorer: Object with analyze(text) returning 'score' and 'comparative'

    Returns:
        SentimentSummary classified by the sign of the total score
    """
    total_score = 0.0
    total_comparative = 0.0
    count = 0
    for comment in comments:
        result = scorer.analyze(comment)
        total_score += result['score']
        total_comparative += result['comparative']
        count += 1

    if not count:
        return SentimentSummary(
            average_score=0.0,
            average_comparative=0.0,
            sample_size=0,
            classification='neutral',
        )

    return SentimentSummary(
        average_score=total_score / count,
        average_comparative=total_comparative / count,
        sample_size=count,
        classification=classify(total_score),
    )
