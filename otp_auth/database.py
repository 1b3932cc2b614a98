from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from otp_auth.config import settings
import logging

logger = logging.getLogger(__name__)


def build_engine(url: str):
    """Create an engine with pooling suited to the backend behind ``url``."""
    if url.startswith("sqlite"):
        # SQLite connections are shared across FastAPI's worker threads
        return create_engine(url, connect_args={"check_same_thread": False})

    return create_engine(
        url,
        pool_pre_ping=True,  # Auto-reconnect on broken connections
        pool_size=5,
        max_overflow=10,
        pool_timeout=30,     # Connection timeout in seconds
        pool_recycle=1800,   # Recycle connections after 30 minutes
    )


engine = build_engine(settings.DATABASE_URL)
logger.info(f"Database engine created for dialect: {engine.dialect.name}")

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """Create all tables registered on ``Base``."""
    from otp_auth import models  # noqa: F401  registers the mappers

    Base.metadata.create_all(bind=bind or engine)
