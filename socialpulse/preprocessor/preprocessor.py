"""Preprocessor: language, sentiment and topic enrichment for collected comments."""
import time
from typing import List, Optional
from socialpulse.common.logger import setup_logger
from socialpulse.common.models import Comment
from socialpulse.common.metrics import comments_processed_total, processing_duration_seconds
from socialpulse.preprocessor.nlp_processor import NLPProcessor
from socialpulse.topic_extractor.topic_extractor import TopicExtractor

logger = setup_logger(__name__)


class Preprocessor:
    """Enriches raw comments before aggregation."""

    def __init__(self, nlp: Optional[NLPProcessor] = None,
                 topic_extractor: Optional[TopicExtractor] = None):
        """Initialize preprocessor."""
        self.nlp = nlp or NLPProcessor()
        self.topic_extractor = topic_extractor or TopicExtractor()
        logger.info("Initialized preprocessor")

    def process_comment(self, comment: Comment) -> Comment:
        """Classify and tag a single comment; pseudo-records pass through."""
        if not comment.is_actual:
            comments_processed_total.labels(status="skipped").inc()
            return comment

        language = comment.language or self.nlp.detect_language(comment.text)
        result = self.nlp.classify(comment.text)

        enriched = comment.model_copy(update={
            "language": language,
            "sentiment": result.sentiment,
            "sentiment_score": round(result.score, 2),
        })
        enriched = self.topic_extractor.tag(enriched)

        comments_processed_total.labels(status="success").inc()
        return enriched

    def process_batch(self, comments: List[Comment]) -> List[Comment]:
        """Process a batch in order."""
        start_time = time.time()

        processed = [self.process_comment(comment) for comment in comments]

        duration = time.time() - start_time
        processing_duration_seconds.observe(duration)

        actual_count = sum(1 for c in processed if c.is_actual)
        logger.info(f"Sentiment analysis complete for {actual_count} comments in {duration:.2f}s")
        return processed
