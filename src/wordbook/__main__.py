"""Print the review badge for an owner: ``python -m wordbook [owner_id]``."""
import sys

from wordbook.config import settings
from wordbook.logging_config import get_logger, setup_logging
from wordbook.models.base import SessionLocal, init_db
from wordbook.monitoring import start_monitoring
from wordbook.services.review_service import ReviewService


def main(argv: list[str]) -> int:
    """Run the badge report."""
    setup_logging("Starting wordbook ...")
    logger = get_logger("wordbook")

    try:
        owner_id = int(argv[0]) if argv else 1
    except ValueError:
        logger.error(f"Owner id must be an integer, got {argv[0]!r}")
        return 2

    if settings.monitoring.enabled:
        start_monitoring(settings.monitoring.port)
        logger.info(f"Metrics server listening on port {settings.monitoring.port}")

    init_db()
    db = SessionLocal()
    try:
        service = ReviewService(db)
        due = service.due_count(owner_id)
        total = service.total_count(owner_id)
    finally:
        db.close()

    logger.info(f"Owner {owner_id}: {due} due for review, {total} words in total")
    print(f"{due} due / {total} total")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
