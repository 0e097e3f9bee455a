import logging
import os

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from taskboard.config import settings

logger = logging.getLogger(__name__)

# Default to a local SQLite database if no DATABASE_URL is provided or usable
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.abspath(os.path.join(BASE_DIR, ".."))
DEFAULT_DB_PATH = os.path.join(PROJECT_ROOT, "taskboard.db")


def _build_engine():
    """Create the SQLAlchemy engine, preferring the configured DATABASE_URL."""
    database_url = settings.DATABASE_URL if getattr(settings, "DATABASE_URL", None) else None

    if database_url:
        try:
            engine = create_engine(database_url)
            # Ensure the target database is reachable; otherwise fall back to SQLite
            with engine.connect() as connection:  # noqa: F841
                pass
            return engine
        except ModuleNotFoundError:
            logger.warning("Driver for %s is not installed, falling back to SQLite", engine_name(database_url))
        except Exception:
            logger.warning("Database %s is unreachable, falling back to SQLite", engine_name(database_url))

    sqlite_path = settings.SQLITE_PATH or DEFAULT_DB_PATH
    return create_engine(f"sqlite:///{sqlite_path}", connect_args={"check_same_thread": False})


def engine_name(database_url: str) -> str:
    """Strip credentials from a database URL before it is logged."""
    scheme, _, rest = database_url.partition("://")
    host = rest.rsplit("@", 1)[-1]
    return f"{scheme}://{host}"


engine = _build_engine()

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for the models
Base = declarative_base()


def init_db(bind=None) -> None:
    """Create all tables that do not exist yet."""
    import taskboard.models  # noqa: F401 - register the mappers on Base

    Base.metadata.create_all(bind=bind or engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
