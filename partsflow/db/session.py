from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from partsflow.core.config import Settings


def build_engine(database_url: str, settings: Settings | None = None) -> Engine:
    engine_kwargs: dict[str, object] = {
        # Detect and recover from stale pooled connections.
        "pool_pre_ping": True,
    }

    url = database_url.lower()
    if url in {"sqlite://", "sqlite:///:memory:"}:
        # One shared connection, otherwise every session sees its own empty database.
        engine_kwargs.update(
            {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
        )
    elif url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {"check_same_thread": False}
    elif settings is not None:
        # Tune SQLAlchemy pool for networked databases (e.g., Postgres).
        engine_kwargs.update(
            {
                "pool_size": settings.db_pool_size,
                "max_overflow": settings.db_max_overflow,
                "pool_timeout": settings.db_pool_timeout_seconds,
                "pool_recycle": settings.db_pool_recycle_seconds,
            }
        )

    return create_engine(database_url, **engine_kwargs)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
