"""Pydantic schemas shared by the generator services."""

from factory_helper.schemas.properties import ColumnInfo, FieldDescriptor, PropertyDescriptor

__all__ = ["ColumnInfo", "FieldDescriptor", "PropertyDescriptor"]
