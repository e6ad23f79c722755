from typing import Optional
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from .settings import settings

def build_engine(database_url: str, lock_timeout: Optional[float] = None, **kwargs) -> Engine:
    """
    Crear engine; en SQLite se activan las llaves foráneas por conexión.

    `lock_timeout` (segundos) acota la espera por bloqueos de otra
    transacción: `timeout` del driver en SQLite, `lock_timeout` en PostgreSQL.
    """
    is_sqlite = database_url.startswith("sqlite")
    if is_sqlite:
        connect_args = {"check_same_thread": False}
        if lock_timeout is not None:
            connect_args["timeout"] = lock_timeout
        kwargs.setdefault("connect_args", connect_args)
    else:
        kwargs.setdefault("pool_pre_ping", True)
        kwargs.setdefault("pool_recycle", 300)
        if lock_timeout is not None and database_url.startswith("postgresql"):
            kwargs.setdefault(
                "connect_args",
                {"options": f"-c lock_timeout={int(lock_timeout * 1000)}"}
            )

    new_engine = create_engine(database_url, **kwargs)

    if is_sqlite:
        @event.listens_for(new_engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return new_engine

# Create engine
engine = build_engine(
    settings.database_url,
    lock_timeout=settings.sale_transaction_timeout_seconds,
    echo=settings.debug
)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()

# Database dependency
def get_db():
    """Database dependency for FastAPI"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
