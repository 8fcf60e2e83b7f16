"""Column and factory property schemas."""

from pydantic import BaseModel


class ColumnInfo(BaseModel):
    """A reflected column as reported by the schema introspector."""

    name: str
    storage_type: str


class FieldDescriptor(BaseModel):
    """A reflected column combined with the model's key/timestamp metadata."""

    name: str
    storage_type: str
    is_primary_key: bool = False
    is_auto_increment: bool = False
    is_created_timestamp: bool = False
    is_updated_timestamp: bool = False

    @property
    def is_excluded(self) -> bool:
        """Auto-increment keys and managed timestamps never get a factory field."""
        return (
            (self.is_primary_key and self.is_auto_increment)
            or self.is_created_timestamp
            or self.is_updated_timestamp
        )


class PropertyDescriptor(BaseModel):
    """One factory attribute handed to the renderer."""

    name: str
    type_label: str = "mixed"
    fake_expression: str | None = None

    @property
    def is_fakeable(self) -> bool:
        return self.fake_expression is not None
