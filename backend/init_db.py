from database import engine, Base
from sqlalchemy import inspect
import logging

import models  # noqa: F401  (registers tables on Base.metadata)

logger = logging.getLogger(__name__)


def init_database(bind=None):
    """
    Create any missing tables.

    Existing tables are left as they are; altering schemas is out of scope
    for this service.

    Args:
        bind: Engine to create tables on (defaults to the application engine)
    """
    bind = bind or engine
    existing = set(inspect(bind).get_table_names())
    Base.metadata.create_all(bind)
    created = sorted(set(Base.metadata.tables) - existing)
    if created:
        logger.info(f"Created tables: {', '.join(created)}")
    else:
        logger.info("Database schema up to date")
    return created


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_database()
