from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from contracthub.config import settings

_connect_args = {"check_same_thread": False} if settings.database_url_fixed.startswith("sqlite") else {}

engine = create_engine(settings.database_url_fixed, pool_pre_ping=True, connect_args=_connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Yield a session per request; always closed afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
