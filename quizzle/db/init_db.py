"""Database initialization."""
import logging
from sqlalchemy.engine import Engine
from quizzle.db.database import engine as default_engine, Base
from quizzle.db import models  # noqa: F401  registers tables on Base.metadata

logger = logging.getLogger(__name__)


def init_db(engine: Engine = None) -> None:
    """
    Initialize database: create the key-value table if it does not exist.

    Safe to call multiple times - table creation is idempotent.

    Args:
        engine: Engine to initialize. Defaults to the configured engine.
    """
    engine = engine or default_engine
    logger.info("Initializing database...")
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        logger.error(f"Error during database initialization: {e}")
        raise
    logger.info("Database initialization complete.")


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    init_db()
    print("Database initialization complete.")
