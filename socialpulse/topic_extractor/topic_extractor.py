"""Topic extractor: bilingual keyword table -> topic categories."""
from typing import Dict, List, Optional, Sequence
from socialpulse.common.logger import setup_logger
from socialpulse.common.models import Comment

logger = setup_logger(__name__)

# Telugu keywords live under the English category they normalize to
TOPIC_KEYWORDS: Dict[str, Sequence[str]] = {
    "infrastructure": (
        "road", "roads", "bridge", "construction", "build", "infrastructure",
        "facility", "facilities", "రోడ్లు", "రహదారి", "రహదారులు", "వంతెన",
    ),
    "water issues": (
        "water", "drinking", "irrigation", "supply", "pipeline", "shortage", "dam",
        "నీరు", "నీటి", "తాగునీరు", "సాగునీరు",
    ),
    "education": (
        "school", "education", "student", "college", "university", "literacy",
        "teacher", "classroom", "విద్య", "పాఠశాల", "చదువు",
    ),
    "healthcare": (
        "hospital", "health", "doctor", "medical", "patient", "treatment", "clinic",
        "ఆసుపత్రి", "వైద్యం", "ఆరోగ్యం",
    ),
    "agriculture": (
        "farm", "agriculture", "farmer", "crop", "cultivation", "harvest", "seed",
        "fertilizer", "వ్యవసాయం", "రైతు", "పంట",
    ),
    "employment": (
        "job", "employment", "unemployment", "salary", "wage", "work", "worker",
        "career", "ఉద్యోగం", "ఉపాధి",
    ),
    "governance": (
        "governance", "government", "administration", "policy", "scheme",
        "implementation", "ప్రభుత్వం", "పథకం",
    ),
    "development": (
        "development", "progress", "growth", "improve", "improvement",
        "అభివృద్ధి", "పురోగతి", "మెరుగుదల",
    ),
}

GRATITUDE_TOKENS = ("thank", "thanks", "ధన్యవాదాలు", "appreciation")
COMPLAINT_TOKENS = ("problem", "issue", "సమస్య", "complaint")
DEFAULT_TOPIC = "general"


class TopicExtractor:
    """Assigns keyword-driven topic categories to comments."""

    def __init__(self, topic_keywords: Optional[Dict[str, Sequence[str]]] = None):
        self.topic_keywords = topic_keywords or TOPIC_KEYWORDS
        logger.info(f"Initialized topic extractor ({len(self.topic_keywords)} categories)")

    def extract_topics(self, text: str, language: Optional[str], sentiment: str) -> List[str]:
        """Topics for one text; never empty."""
        normalized = (text or "").lower()
        topics: List[str] = []

        for topic, keywords in self.topic_keywords.items():
            if any(keyword.lower() in normalized for keyword in keywords):
                topics.append(topic)

        if sentiment == "positive" and any(t in normalized for t in GRATITUDE_TOKENS):
            topics.append("appreciation")
        elif sentiment == "negative" and any(t in normalized for t in COMPLAINT_TOKENS):
            topics.append("complaints")

        return topics or [DEFAULT_TOPIC]

    def tag(self, comment: Comment) -> Comment:
        """Return the comment with topics; already-tagged comments pass through."""
        if comment.topics:
            return comment
        topics = self.extract_topics(comment.text, comment.language, comment.sentiment)
        return comment.model_copy(update={"topics": topics})

    def tag_batch(self, comments: List[Comment]) -> List[Comment]:
        return [self.tag(comment) for comment in comments]
