from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from ai_server.core.settings import settings

_engine: Engine | None = None


def get_engine(database_url: str | None = None) -> Engine:
    """
    Engine for the place database.

    The default engine is created lazily from settings so importing the
    package never opens a connection. Passing a URL builds a fresh engine.
    """
    global _engine

    if database_url:
        return create_engine(database_url, pool_pre_ping=True)

    if _engine is None:
        _engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True)
    return _engine
