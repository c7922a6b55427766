# storefront/database.py
from sqlalchemy.engine import make_url
from sqlmodel import SQLModel, create_engine, Session

from storefront.core.config import get_settings

settings = get_settings()


def build_engine(database_url: str, echo: bool = False, sslmode: str | None = None):
    """
    Create the SQLAlchemy engine for the configured database.

    - SQLite: allow use across threads (FastAPI runs sync endpoints in a
      threadpool).
    - Postgres: small pool with pre-ping, and `sslmode` appended when
      configured and not already part of the URL.
    """
    url = make_url(database_url)

    if url.get_backend_name() == "sqlite":
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
        )

    if sslmode and "sslmode" not in url.query:
        url = url.update_query_dict({"sslmode": sslmode})

    return create_engine(
        url,
        echo=echo,          # set to True if you want to debug SQL queries
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=5,
    )


engine = build_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    sslmode=settings.DB_SSLMODE,
)


def create_db_and_tables() -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup.
    """
    SQLModel.metadata.create_all(engine)


def get_session():
    """
    FastAPI dependency that yields a SQLModel Session.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    with Session(engine) as session:
        yield session
