"""Ordered override rules evaluated before lexicon scoring.

A rule is a predicate over the lowercased text plus the fixed result it
forces. The classifier walks its rule list in order and the first match wins,
so content-specific layers can be swapped or dropped without touching the
general scorer.
"""
import re
from dataclasses import dataclass
from typing import Callable, Iterable, List, NamedTuple, Optional, Sequence

TELUGU_PATTERN = re.compile(r"[\u0C00-\u0C7F]")
_TOKEN_STRIP = ".,!?;:\"'()[]{}"


class SentimentResult(NamedTuple):
    sentiment: str
    score: float


@dataclass(frozen=True)
class SentimentRule:
    name: str
    predicate: Callable[[str], bool]
    sentiment: str = "positive"
    score: float = 8.0

    def apply(self, text: str) -> Optional[SentimentResult]:
        if self.predicate(text):
            return SentimentResult(self.sentiment, self.score)
        return None


def contains_any(*terms: str) -> Callable[[str], bool]:
    return lambda text: any(term in text for term in terms)


def co_occurs(*groups: Sequence[str]) -> Callable[[str], bool]:
    """Every group must contribute at least one term."""
    return lambda text: all(any(term in text for term in group) for group in groups)


def leads_with(*tokens: str) -> Callable[[str], bool]:
    """First whitespace token (punctuation stripped) is one of ``tokens``."""
    wanted = frozenset(tokens)

    def predicate(text: str) -> bool:
        parts = text.split(None, 1)
        return bool(parts) and parts[0].strip(_TOKEN_STRIP) in wanted

    return predicate


def requires_telugu(predicate: Callable[[str], bool]) -> Callable[[str], bool]:
    return lambda text: bool(TELUGU_PATTERN.search(text)) and predicate(text)


HONORIFICS = ("garu", "గారు", "anna", "అన్న")
PRAISED_NAMES = ("suresh", "సురేష్")

PRAISE_RULES: List[SentimentRule] = [
    SentimentRule(
        "leading_praise",
        leads_with("super", "superb", "hatsoff", "సూపర్", "జయహో", "జై"),
        score=8.0,
    ),
    SentimentRule("hats_off", contains_any("hats off", "hatsoff"), score=8.0),
    SentimentRule("honorific_name", co_occurs(HONORIFICS, PRAISED_NAMES), score=9.5),
    SentimentRule(
        "admiration",
        contains_any("proud of you", "great work", "well done", "keep it up",
                     "god bless", "role model"),
        score=9.0,
    ),
    SentimentRule(
        "gratitude",
        contains_any("thank you so much", "thanks a lot", "ధన్యవాదాలు",
                     "కృతజ్ఞతలు", "అభినందనలు", "శుభాకాంక్షలు"),
        score=8.5,
    ),
    SentimentRule("salute", contains_any("salute", "సెల్యూట్"), score=7.5),
]

# Political-commentary overrides (Telugu text only)
POLITICAL_RULES: List[SentimentRule] = [
    SentimentRule(
        "rival_with_victory",
        requires_telugu(co_occurs(("కాంగ్రెస్", "congress"), PRAISED_NAMES,
                                  ("విజయం", "jayaho", "జయహో"))),
        score=8.5,
    ),
    SentimentRule(
        "corruption_versus_service",
        requires_telugu(co_occurs(("అవినీతి",), ("ప్రజాసేవ",))),
        score=7.5,
    ),
    SentimentRule(
        "landslide_victory",
        requires_telugu(contains_any("ఘనవిజయం", "ఖాయమైంది")),
        score=8.0,
    ),
    SentimentRule(
        "untainted_record",
        requires_telugu(contains_any("శ్వేతం", "మరకలంటని")),
        score=7.0,
    ),
]

DEFAULT_RULES: List[SentimentRule] = PRAISE_RULES + POLITICAL_RULES


def first_match(rules: Iterable[SentimentRule], text: str) -> Optional[SentimentResult]:
    for rule in rules:
        result = rule.apply(text)
        if result is not None:
            return result
    return None
