from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from core.config import settings


def enable_sqlite_write_locking(sqlite_engine: Engine):
    """
    Make every SQLite transaction take the database write lock when it begins.

    pysqlite normally defers BEGIN until the first write, so two sessions can
    read the same row and then both write a value computed from it. With
    BEGIN IMMEDIATE the second transaction waits (up to the connection
    timeout) until the first commits, and then reads the committed value.
    SQLite ignores SELECT ... FOR UPDATE, this is its equivalent.
    """

    @event.listens_for(sqlite_engine, "connect")
    def disable_implicit_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(sqlite_engine, "begin")
    def begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # FastAPI may resolve the session in a worker thread
    connect_args = {"check_same_thread": False, "timeout": 30}

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)

if settings.DATABASE_URL.startswith("sqlite"):
    enable_sqlite_write_locking(engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()
