import os
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from smart_campus.config import DATABASE_URL


def make_engine(url):
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args)


engine = make_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def init_database(bind=engine):
    path = bind.url.database
    if bind.url.get_backend_name() == "sqlite" and path and path != ":memory:":
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    import smart_campus.models.collection  # noqa: F401  registers the table
    Base.metadata.create_all(bind=bind)
