"""Append generated factories to an existing factories module."""

import logging
from collections.abc import Iterable

from factory_helper.services.inference import SchemaInferenceEngine
from factory_helper.services.registry import TypeRegistry
from factory_helper.services.renderer import FactoryRenderer

logger = logging.getLogger(__name__)


def parse_ignore(ignore: str | None) -> set[str]:
    """Comma-separated model names to skip; blank entries are dropped."""
    if not ignore:
        return set()
    return {name.strip() for name in ignore.split(",") if name.strip()}


class FactoryGenerator:
    """Drive discovery results through inference and rendering."""

    def __init__(
        self,
        registry: TypeRegistry,
        engine: SchemaInferenceEngine,
        renderer: FactoryRenderer | None = None,
    ):
        self.registry = registry
        self.engine = engine
        self.renderer = renderer or FactoryRenderer()

    def generate(
        self,
        model_names: Iterable[str],
        ignore: str | None = "",
        existing_document: str = "",
        reset: bool = False,
    ) -> str:
        """
        Return ``existing_document`` with a factory appended for every new model.

        Args:
            model_names: Dotted model names, in processing order
            ignore: Comma-separated names to skip
            existing_document: Current content of the factories module
            reset: Start from an empty module instead of appending

        A failure while analysing one model is logged and that model is
        left out; the remaining models are still generated.
        """
        ignored = parse_ignore(ignore)
        if reset or not existing_document.strip():
            output = self.renderer.header()
        else:
            output = existing_document

        for name in model_names:
            name = name.strip()
            if name in ignored:
                logger.info("Ignoring model '%s'", name)
                continue

            try:
                block = self._generate_one(name, output, reset)
            except Exception as exc:
                logger.error("Exception: %s\nCould not analyze class %s.", exc, name)
                continue

            if block is not None:
                output += block
                ignored.add(name)

        return output

    def _generate_one(self, name: str, document: str, reset: bool) -> str | None:
        if not self.registry.type_exists(name):
            return None
        model_cls = self.registry.load(name)

        if not self.registry.is_subtype_of(model_cls):
            return None

        if not reset and self.renderer.has_factory(document, model_cls):
            logger.info("Model '%s' already has a factory", name)
            return None

        logger.info("Loading model '%s'", name)

        # abstract and unmapped classes cannot be built
        if not self.registry.is_concrete(model_cls):
            return None

        model = self.registry.instantiate(model_cls)
        properties = self.engine.infer(model)
        return self.renderer.render(model_cls, properties, document)
