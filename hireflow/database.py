import logging

from sqlalchemy import create_engine, event, inspect
from sqlalchemy.orm import sessionmaker, declarative_base

from hireflow.config import settings

logger = logging.getLogger(__name__)

IS_SQLITE = settings.database_url.startswith("sqlite")

engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
    # SQLite connections are shared across the threadpool FastAPI runs sync routes on
    connect_args={"check_same_thread": False} if IS_SQLITE else {},
)


def enable_sqlite_foreign_keys(target_engine) -> None:
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection."""

    @event.listens_for(target_engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


if IS_SQLITE:
    enable_sqlite_foreign_keys(engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _register_models() -> None:
    # Importing the package attaches every table to Base.metadata
    import hireflow.models  # noqa: F401


def init_db():
    _register_models()
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database ready (%s)", engine.url.get_backend_name())
    except Exception as e:
        logger.exception("Database initialization failed: %s", e)
        raise


def ensure_tables_exist() -> list[str]:
    """Create whichever tables are missing and return their names; existing tables are left alone."""
    _register_models()
    try:
        before = set(inspect(engine).get_table_names())
        Base.metadata.create_all(bind=engine)
        created = sorted(set(Base.metadata.tables) - before)
    except Exception as e:
        logger.exception("Ensure tables failed: %s", e)
        raise
    if created:
        logger.info("Created missing tables: %s", ", ".join(created))
    else:
        logger.info("Schema up to date; no tables created")
    return created
