"""Infer factory attributes from a model's reflected table."""

import logging
from typing import Any

from factory_helper.config import Settings
from factory_helper.schemas import FieldDescriptor, PropertyDescriptor
from factory_helper.services.introspection import SchemaIntrospector, split_table_name

logger = logging.getLogger(__name__)

# Semantic type given to every managed date column
DATETIME_TYPE = "datetime"

FAKEABLE_TYPES: dict[str, str] = {
    "string": 'factory.Faker("word")',
    "text": 'factory.Faker("text")',
    "date": 'factory.Faker("date_object")',
    "time": 'factory.Faker("time_object")',
    "guid": 'factory.Faker("uuid4")',
    "datetimetz": 'factory.Faker("date_time_between")',
    "datetime": 'factory.Faker("date_time_between")',
    "integer": 'factory.Faker("random_int")',
    "bigint": 'factory.Faker("random_int")',
    "smallint": 'factory.Faker("random_int")',
    "decimal": 'factory.Faker("pydecimal", left_digits=8, right_digits=2)',
    "float": 'factory.Faker("pyfloat")',
    "boolean": 'factory.Faker("pybool")',
}

FAKEABLE_NAMES: dict[str, str] = {
    "name": 'factory.Faker("name")',
    "firstname": 'factory.Faker("first_name")',
    "first_name": 'factory.Faker("first_name")',
    "lastname": 'factory.Faker("last_name")',
    "last_name": 'factory.Faker("last_name")',
    "street": 'factory.Faker("street_name")',
    "zip": 'factory.Faker("postcode")',
    "postcode": 'factory.Faker("postcode")',
    "city": 'factory.Faker("city")',
    "country": 'factory.Faker("country")',
    "latitude": 'factory.Faker("latitude")',
    "lat": 'factory.Faker("latitude")',
    "longitude": 'factory.Faker("longitude")',
    "lng": 'factory.Faker("longitude")',
    "phone": 'factory.Faker("phone_number")',
    "phone_number": 'factory.Faker("phone_number")',
    "company": 'factory.Faker("company")',
    "email": 'factory.Faker("safe_email")',
    "username": 'factory.Faker("user_name")',
    "user_name": 'factory.Faker("user_name")',
    "password": 'factory.Faker("password")',
    "url": 'factory.Faker("url")',
    "remember_token": 'factory.Faker("pystr", max_chars=10)',
}


def set_property(
    properties: dict[str, PropertyDescriptor],
    name: str,
    semantic_type: str | None = None,
) -> PropertyDescriptor:
    """
    Add or upgrade one factory attribute.

    A well-known field name wins over the column type; a fake value chosen
    by name is never replaced by a type-based one.
    """
    prop = properties.get(name)
    if prop is None:
        prop = properties[name] = PropertyDescriptor(name=name)
    if semantic_type is not None:
        prop.type_label = semantic_type

    if name in FAKEABLE_NAMES:
        prop.fake_expression = FAKEABLE_NAMES[name]
    elif semantic_type in FAKEABLE_TYPES and not prop.is_fakeable:
        prop.fake_expression = FAKEABLE_TYPES[semantic_type]
    return prop


class ModelConventions:
    """Timestamp and key metadata of a model, with project-wide defaults."""

    def __init__(self, model: Any, settings: Settings):
        cls = model if isinstance(model, type) else type(model)
        self.table = cls.__table__
        self.created_at = getattr(cls, "__created_at__", settings.created_at_column)
        self.updated_at = getattr(cls, "__updated_at__", settings.updated_at_column)
        self.timestamps = getattr(cls, "__timestamps__", True)
        self.extra_dates = tuple(getattr(cls, "__dates__", ()))

    @property
    def dates(self) -> set[str]:
        dates = set(self.extra_dates)
        if self.timestamps:
            dates.update((self.created_at, self.updated_at))
        return dates

    @property
    def primary_key(self) -> set[str]:
        return {column.name for column in self.table.primary_key.columns}

    @property
    def autoincrement_column(self) -> str | None:
        column = self.table.autoincrement_column
        return column.name if column is not None else None


class SchemaInferenceEngine:
    """Build the ordered property mapping for one model."""

    def __init__(self, introspector: SchemaIntrospector, settings: Settings):
        self.introspector = introspector
        self.settings = settings

    def register_type_mappings(self) -> None:
        self.introspector.register_type_mapping("enum", "string")
        for raw_type, semantic_type in self.settings.dialect_types(self.introspector.dialect_name).items():
            self.introspector.register_type_mapping(raw_type, semantic_type)

    def fields(self, model: Any, conventions: ModelConventions | None = None) -> list[FieldDescriptor]:
        """Reflected columns of ``model`` tagged with key/timestamp flags."""
        conventions = conventions or ModelConventions(model, self.settings)
        schema, table = split_table_name(self.introspector.table_name(model))

        self.register_type_mappings()
        columns = self.introspector.list_columns(table, schema)

        primary_key = conventions.primary_key
        return [
            FieldDescriptor(
                name=column.name,
                storage_type=column.storage_type,
                is_primary_key=column.name in primary_key,
                is_auto_increment=column.name == conventions.autoincrement_column,
                is_created_timestamp=column.name == conventions.created_at,
                is_updated_timestamp=column.name == conventions.updated_at,
            )
            for column in columns
        ]

    def infer(self, model: Any) -> dict[str, PropertyDescriptor]:
        conventions = ModelConventions(model, self.settings)
        dates = conventions.dates
        properties: dict[str, PropertyDescriptor] = {}

        for field in self.fields(model, conventions):
            if field.is_excluded:
                logger.debug("Excluding column %s", field.name)
                continue
            semantic_type = DATETIME_TYPE if field.name in dates else field.storage_type
            set_property(properties, field.name, semantic_type)
        return properties
