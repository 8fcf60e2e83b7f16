"""Schema introspection over a live database connection."""

import logging
from typing import Any

from sqlalchemy import Engine, inspect, types
from sqlalchemy.exc import SQLAlchemyError

from factory_helper.exceptions import IntrospectionError
from factory_helper.schemas import ColumnInfo

logger = logging.getLogger(__name__)

# Most specific first: Text/Enum subclass String, Float subclasses Numeric,
# BigInteger/SmallInteger subclass Integer.
_GENERIC_TYPES: list[tuple[type, str]] = [
    (types.Enum, "string"),
    (types.Text, "text"),
    (types.String, "string"),
    (types.Uuid, "guid"),
    (types.BigInteger, "bigint"),
    (types.SmallInteger, "smallint"),
    (types.Integer, "integer"),
    (types.Float, "float"),
    (types.Numeric, "decimal"),
    (types.Boolean, "boolean"),
    (types.Date, "date"),
    (types.Time, "time"),
]


def raw_type_name(column_type: Any) -> str:
    """Engine-level name of a reflected type, e.g. ``varchar`` or ``tsvector``."""
    return str(getattr(column_type, "__visit_name__", type(column_type).__name__)).lower()


def split_table_name(table: str) -> tuple[str | None, str]:
    """Split ``schema.table`` on the first dot."""
    if table.find(".") > 0:
        schema, table = table.split(".", 1)
        return schema, table
    return None, table


class SchemaIntrospector:
    """Reflect table columns and report a storage type name for each."""

    def __init__(self, engine: Engine, table_prefix: str = ""):
        self.engine = engine
        self.table_prefix = table_prefix
        self._type_mappings: dict[str, str] = {}

    @property
    def dialect_name(self) -> str:
        return self.engine.dialect.name

    def register_type_mapping(self, raw_type: str, semantic_type: str) -> None:
        """Report columns of ``raw_type`` as ``semantic_type`` from now on."""
        self._type_mappings[raw_type.lower()] = semantic_type

    def table_name(self, model: Any) -> str:
        """Prefixed table name, qualified with its schema when it has one."""
        table = model.__table__
        name = f"{self.table_prefix}{table.name}"
        if table.schema:
            return f"{table.schema}.{name}"
        return name

    def storage_type(self, column_type: Any) -> str:
        raw = raw_type_name(column_type)
        if raw in self._type_mappings:
            return self._type_mappings[raw]
        if isinstance(column_type, types.DateTime):
            return "datetimetz" if getattr(column_type, "timezone", False) else "datetime"
        for generic, name in _GENERIC_TYPES:
            if isinstance(column_type, generic):
                return name
        return raw

    def list_columns(self, table: str, schema: str | None = None) -> list[ColumnInfo]:
        """Columns of ``table`` in table order."""
        logger.debug("Reflecting columns of %s", f"{schema}.{table}" if schema else table)
        try:
            columns = inspect(self.engine).get_columns(table, schema=schema)
        except SQLAlchemyError as exc:
            raise IntrospectionError(f"{schema}.{table}" if schema else table, str(exc)) from exc
        return [
            ColumnInfo(name=column["name"], storage_type=self.storage_type(column["type"]))
            for column in columns
        ]
