"""Database engine management."""

from sqlalchemy import Engine, create_engine

from factory_helper.config import get_settings


def get_engine(db_url: str | None = None, **kwargs) -> Engine:
    """Create a synchronous engine for schema reflection."""
    url = db_url or get_settings().database_url
    kwargs.setdefault("echo", False)
    kwargs.setdefault("pool_pre_ping", True)
    return create_engine(url, **kwargs)
