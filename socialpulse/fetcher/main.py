"""Main entry point for one-shot comment collection."""
import argparse
from socialpulse.common.config import settings
from socialpulse.common.logger import setup_logger
from socialpulse.common.models import PLATFORM_CHOICES
from socialpulse.fetcher.collector import MediaCollector

logger = setup_logger(__name__)


def main():
    """Main function."""
    parser = argparse.ArgumentParser(description="Social comment collector")
    parser.add_argument("keyword", help="Search keyword (or exact video title with --video-title)")
    parser.add_argument("--timeperiod", type=int, default=settings.DEFAULT_TIMEPERIOD,
                        help="Lookback window in days")
    parser.add_argument("--platform", default="all", choices=PLATFORM_CHOICES)
    parser.add_argument("--video-title", action="store_true",
                        help="Treat keyword as an exact YouTube video title")

    args = parser.parse_args()

    collector = MediaCollector()
    if not collector.has_credentials():
        logger.warning("No platform credentials configured; every platform returns sample data")

    comments = collector.collect(
        args.keyword,
        args.timeperiod,
        platform="youtube" if args.video_title else args.platform,
        is_video_title_search=args.video_title,
    )
    logger.info(f"Collected {len(comments)} records total")
    for comment in comments:
        if comment.is_actual:
            print(f"[{comment.platform}] {comment.user_name}: {comment.text[:80]}")


if __name__ == "__main__":
    main()
