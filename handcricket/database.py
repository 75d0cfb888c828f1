from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from handcricket.config import settings

DATABASE_URL = f"sqlite:///{settings.DATABASE_PATH}"

# FastAPI runs sync endpoints in a threadpool
engine = create_engine(DATABASE_URL, echo=False, connect_args={"check_same_thread": False})
SessionLocal = sessionmaker(bind=engine)


class Base(DeclarativeBase):
    pass


def init_db():
    """Create all tables"""
    from handcricket.models import setting  # noqa
    Base.metadata.create_all(bind=engine)
