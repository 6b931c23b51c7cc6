"""Database engine, session and metadata configuration."""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from .config import get_settings

Base = declarative_base()


def build_engine(database_url: str, *, serialize_sqlite: bool = True) -> Engine:
    """Create an engine; SQLite transactions optionally begin IMMEDIATE.

    SQLite ignores ``SELECT ... FOR UPDATE``, so serializing whole
    transactions is what keeps concurrent use cases from interleaving there.
    """

    engine = create_engine(database_url, future=True)

    if serialize_sqlite and engine.dialect.name == "sqlite":

        @event.listens_for(engine, "connect")
        def _disable_pysqlite_begin(dbapi_connection, connection_record) -> None:
            dbapi_connection.isolation_level = None

        @event.listens_for(engine, "begin")
        def _begin_immediate(conn) -> None:
            conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False, future=True)


settings = get_settings()

engine = build_engine(settings.database_url, serialize_sqlite=settings.serialize_sqlite_transactions)
SessionLocal = build_session_factory(engine)
