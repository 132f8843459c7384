"""Database initialization utilities."""

from projecthub.db.base import Base
from projecthub.db.session import engine
from projecthub.core.logging import get_logger

# Register models on Base.metadata
from projecthub.modules.users import models as _user_models  # noqa: F401
from projecthub.modules.projects import models as _project_models  # noqa: F401

logger = get_logger(__name__)


def create_database(bind=engine) -> None:
    """Create all database tables that do not exist yet."""
    logger.info("creating database tables")
    Base.metadata.create_all(bind=bind)
    logger.info("database tables ready", tables=sorted(Base.metadata.tables))


if __name__ == "__main__":
    create_database()
