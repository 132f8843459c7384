# projecthub/db/session.py
from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker

from projecthub.core.config import settings
from projecthub.core.logging import get_logger

logger = get_logger(__name__)

_url = make_url(settings.DATABASE_URL)
_connect_args = {"check_same_thread": False} if _url.get_backend_name() == "sqlite" else {}

engine = create_engine(
    _url,
    pool_pre_ping=True,
    connect_args=_connect_args,
)

logger.info("database engine created", database=_url.render_as_string(hide_password=True))

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)
