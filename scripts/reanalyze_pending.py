"""
Re-run the resume analysis for applications still in the pending state.

Applications stay pending when the LLM call failed during submission.
Run: python -m scripts.reanalyze_pending [--limit N]
"""
import argparse
import logging
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core import config
from app.core.errors import HireScreenError
from app.core.logging_config import setup_logging
from app.db.session import SessionLocal
from app.db.models.application import Application, ApplicationStatus
from app.services.application_service import reanalyze_application
from app.services.storage_service import get_storage

logger = logging.getLogger(__name__)


def reanalyze_pending(limit: int = 50) -> int:
    """Analyze up to ``limit`` pending applications; returns how many succeeded."""
    db = SessionLocal()
    storage = get_storage()
    analyzed = 0
    try:
        pending = (
            db.query(Application)
            .filter(Application.status == ApplicationStatus.PENDING.value)
            .order_by(Application.created_at.asc())
            .limit(limit)
            .all()
        )
        logger.info(f"Found {len(pending)} pending application(s)")

        for application in pending:
            try:
                reanalyze_application(db, storage, application)
                analyzed += 1
            except (HireScreenError, OSError) as e:
                db.rollback()
                logger.warning(f"Application {application.id} still pending: {e}")

        logger.info(f"Analyzed {analyzed} of {len(pending)} pending application(s)")
        return analyzed
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--limit", type=int, default=50)
    args = parser.parse_args()
    setup_logging(config.LOG_LEVEL, config.LOG_DIR)
    reanalyze_pending(args.limit)
