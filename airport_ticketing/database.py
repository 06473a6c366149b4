from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from typing import Any, Dict, Generator
from airport_ticketing.config import settings

Base = declarative_base()

def _engine_options(url: str) -> Dict[str, Any]:
    """Dialect specific connection options, including the lock-wait timeout"""
    if url.startswith("sqlite"):
        return {
            "connect_args": {
                "timeout": settings.LOCK_TIMEOUT_MS / 1000,
                "check_same_thread": False,
            }
        }
    if url.startswith("postgresql"):
        return {
            "pool_pre_ping": True,
            "connect_args": {"options": f"-c lock_timeout={settings.LOCK_TIMEOUT_MS}"},
        }
    return {"pool_pre_ping": True}

def _install_sqlite_locking(sqlite_engine: Engine) -> None:
    """Make every SQLite transaction take the write lock on BEGIN.

    pysqlite defers BEGIN until the first write, which lets two issuance
    transactions read the same seat count. Emitting BEGIN IMMEDIATE ourselves
    serializes them the way row locks do on PostgreSQL.
    """
    
    @event.listens_for(sqlite_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
    
    @event.listens_for(sqlite_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

def build_engine(url: str) -> Engine:
    new_engine = create_engine(url, **_engine_options(url))
    if new_engine.dialect.name == "sqlite":
        _install_sqlite_locking(new_engine)
    return new_engine

engine = build_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def get_db() -> Generator:
    """Request scoped database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db() -> None:
    """Create all tables"""
    # Import models so they register on Base.metadata
    from airport_ticketing import models  # noqa: F401
    Base.metadata.create_all(bind=engine)
