# config/db.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from config.settings import DB_URL

engine = create_engine(DB_URL, pool_pre_ping=True, future=True)

SessionLocal = sessionmaker(bind=engine, autoflush=False)


def get_db():
    """Yield one session per request; roll back anything left uncommitted on error."""
    db: Session = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
