"""
Shared test fixtures for factory-helper tests.

Provides settings pointing at the sample application, an in-memory
SQLite database holding its tables, and the wired-up generator services.
"""

from collections.abc import Generator
from pathlib import Path

import pytest
from sqlalchemy import Engine, create_engine
from sqlalchemy.pool import StaticPool

from factory_helper.config import Settings
from factory_helper.services import (
    FactoryGenerator,
    FactoryRenderer,
    SchemaInferenceEngine,
    SchemaIntrospector,
    TypeRegistry,
)

# Import models so they're registered with Base.metadata before table creation
from sample_app import models  # noqa: F401
from sample_shop import models as shop_models  # noqa: F401
from sample_app.database import Base

TESTS_DIR = Path(__file__).resolve().parent


# --- Settings Fixtures ---


@pytest.fixture
def settings() -> Settings:
    """Settings for the sample application, ignoring any local .env file."""
    return Settings(
        _env_file=None,
        database_url="sqlite://",
        project_root=str(TESTS_DIR),
        model_base="sample_app.database.Base",
        model_dirs=["sample_app"],
    )


# --- Database Fixtures ---


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """
    In-memory SQLite database with the sample tables.

    StaticPool keeps the single connection so reflection sees the tables.
    """
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


# --- Service Fixtures ---


@pytest.fixture
def introspector(engine: Engine) -> SchemaIntrospector:
    return SchemaIntrospector(engine)


@pytest.fixture
def inference(introspector: SchemaIntrospector, settings: Settings) -> SchemaInferenceEngine:
    return SchemaInferenceEngine(introspector, settings)


@pytest.fixture
def registry() -> TypeRegistry:
    return TypeRegistry(Base)


@pytest.fixture
def generator(registry: TypeRegistry, inference: SchemaInferenceEngine) -> FactoryGenerator:
    return FactoryGenerator(registry, inference, FactoryRenderer())


@pytest.fixture
def build_factories():
    """Execute a generated factories module and return its namespace."""

    def _build_factories(document: str) -> dict:
        namespace: dict = {}
        exec(compile(document, "factories.py", "exec"), namespace)
        return namespace

    return _build_factories
