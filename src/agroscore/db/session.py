# agroscore/db/session.py
import logging
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from agroscore.core.config import settings
from agroscore.core.errors import PersistenceError

logger = logging.getLogger(__name__)

is_sqlite = settings.DATABASE_URL.startswith("sqlite")
connect_args = {"check_same_thread": False} if is_sqlite else {}

engine = create_engine(
    settings.DATABASE_URL,
    echo=False,
    future=True,
    connect_args=connect_args,
    pool_pre_ping=True,
)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def persistence_scope(db: Session, message: str):
    """
    Run a read/write sequence against the store.

    Store failures roll back the open transaction, are logged with their
    detail, and surface as PersistenceError carrying only ``message``.
    """
    try:
        yield db
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("%s: %s", message, e)
        raise PersistenceError(message) from e
