"""NLP processing: language detection and rule/lexicon sentiment."""
import re
from collections import Counter
from typing import Iterable, Optional
from socialpulse.common.logger import setup_logger
from socialpulse.preprocessor.lexicons import (
    POSITIVE_WORDS, NEGATIVE_WORDS, NEGATION_WORDS, INTENSIFIERS,
    POSITIVE_PHRASES, NEGATIVE_PHRASES, HEART_EMOJI, POSITIVE_EMOJI,
)
from socialpulse.preprocessor.rules import (
    DEFAULT_RULES, SentimentResult, SentimentRule, TELUGU_PATTERN, first_match,
)

logger = setup_logger(__name__)

EMOJI_PATTERN = re.compile(r"[\U0001F300-\U0001FAFF\u2600-\u27BF\u2B50\u2B55]")
EMOJI_RUN_PATTERN = re.compile(r"[\U0001F300-\U0001FAFF\u2600-\u27BF\u2B50\u2B55]{3,}")
# Variation selector, zero-width joiner and skin tone modifiers
EMOJI_MODIFIER_PATTERN = re.compile(r"[\uFE0F\u200D\U0001F3FB-\U0001F3FF]")

TOKEN_STRIP = ".,!?;:\"'()[]{}"
CONTEXT_WINDOW = 5
MAX_SCORE = 10.0


class NLPProcessor:
    """Deterministic bilingual sentiment classifier.

    Layers are tried in order and the first one that decides wins:
    emoji heuristics, then the override rules (praise phrases followed by
    domain patterns), then lexicon scoring.
    """

    def __init__(self, rules: Optional[Iterable[SentimentRule]] = None):
        self.rules = list(DEFAULT_RULES if rules is None else rules)
        logger.info(f"Initialized NLP processor with {len(self.rules)} override rules")

    def detect_language(self, text: str) -> str:
        """Telugu if any code point falls in the Telugu block, else English."""
        if text and TELUGU_PATTERN.search(text):
            return "Telugu"
        return "English"

    def classify(self, text: str) -> SentimentResult:
        """Map text to (sentiment, score); never raises."""
        if not text or not text.strip():
            return SentimentResult("neutral", 0.0)

        result = self._emoji_sentiment(text)
        if result is not None:
            return result

        result = first_match(self.rules, text.lower())
        if result is not None:
            return result

        return self._lexicon_sentiment(text)

    def _emoji_sentiment(self, text: str) -> Optional[SentimentResult]:
        cleaned = EMOJI_MODIFIER_PATTERN.sub("", text)
        emojis = EMOJI_PATTERN.findall(cleaned)
        if not emojis:
            return None

        if any(e in HEART_EMOJI for e in emojis):
            base = 8.5
        elif any(e in POSITIVE_EMOJI for e in emojis):
            base = 8.0
        elif EMOJI_RUN_PATTERN.search(cleaned) or max(Counter(emojis).values()) >= 3:
            base = 7.0
        else:
            return None

        return SentimentResult("positive", min(base + len(emojis) - 1, MAX_SCORE))

    def _lexicon_sentiment(self, text: str) -> SentimentResult:
        normalized = text.lower()
        words = normalized.split()

        positive_score = 0.0
        negative_score = 0.0
        context_modifier = 1.0

        for i, word in enumerate(words):
            bare = word.strip(TOKEN_STRIP)

            if bare in NEGATION_WORDS:
                context_modifier = -1.0
                continue

            if bare in INTENSIFIERS:
                context_modifier *= 1.5
                continue

            # Negative first so "unhappy" does not count as "happy"
            if any(nw in word for nw in NEGATIVE_WORDS):
                negative_score += context_modifier
                context_modifier = 1.0
                continue

            if any(pw in word for pw in POSITIVE_WORDS):
                positive_score += context_modifier
                context_modifier = 1.0
                continue

            if i % CONTEXT_WINDOW == 0:
                context_modifier = 1.0

        if any(phrase in normalized for phrase in POSITIVE_PHRASES):
            positive_score += 2
        if any(phrase in normalized for phrase in NEGATIVE_PHRASES):
            negative_score += 2

        positive_score = max(0.0, positive_score)
        negative_score = max(0.0, negative_score)
        total = positive_score + negative_score + 0.1

        if positive_score > negative_score and positive_score > 0:
            return SentimentResult("positive", positive_score / total * MAX_SCORE)
        if negative_score > positive_score and negative_score > 0:
            return SentimentResult("negative", negative_score / total * MAX_SCORE)
        return SentimentResult("neutral", 1.0)


_default_processor = NLPProcessor()


def classify(text: str) -> SentimentResult:
    return _default_processor.classify(text)


def detect_language(text: str) -> str:
    return _default_processor.detect_language(text)
