import logging

from app.db.session import engine
from app.db.base import Base

logger = logging.getLogger(__name__)


def init_db():
    """Create the jobs and applications tables if they do not exist."""
    from app.db.models import Job, Application  # noqa: F401  registers models

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured")
