"""Services for factory-helper."""

from factory_helper.services.discovery import DirectoryScanner, discover
from factory_helper.services.generator import FactoryGenerator
from factory_helper.services.inference import SchemaInferenceEngine, set_property
from factory_helper.services.introspection import SchemaIntrospector
from factory_helper.services.registry import TypeRegistry
from factory_helper.services.renderer import FactoryRenderer

__all__ = [
    "DirectoryScanner",
    "discover",
    "FactoryGenerator",
    "FactoryRenderer",
    "SchemaInferenceEngine",
    "SchemaIntrospector",
    "TypeRegistry",
    "set_property",
]
