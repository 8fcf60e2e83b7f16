"""Render factory_boy classes for inferred models."""

import keyword
import re

from factory_helper.schemas import PropertyDescriptor

HEADER = '''"""Model factories generated by factory-helper."""

import factory
'''

# Names listed after ``import``, on one line or inside parentheses
_IMPORTED_NAMES = r"(?:\([\w\s,]*?|[\w \t,]*?)"


def _is_attribute_name(name: str) -> bool:
    return name.isidentifier() and not keyword.iskeyword(name)


def _imports(document: str, module: str, name: str) -> list[str]:
    """Names under which ``document`` binds ``module.name``."""
    pattern = (
        rf"^from\s+{re.escape(module)}\s+import\s+{_IMPORTED_NAMES}"
        rf"\b{re.escape(name)}\b(?:\s+as\s+(\w+))?"
    )
    return [match.group(1) or name for match in re.finditer(pattern, document, re.MULTILINE)]


def _defines_factory_for(document: str, binding: str) -> bool:
    pattern = (
        rf"^class\s+\w+\([\w.]*Factory\):(?:(?!^class\s).)*?"
        rf"^\s+model\s*=\s*{re.escape(binding)}[ \t]*$"
    )
    return re.search(pattern, document, re.MULTILINE | re.DOTALL) is not None


class FactoryRenderer:
    """Produce one appendable factory block per model."""

    def header(self) -> str:
        return HEADER

    def factory_name(self, model_cls: type, qualified: bool = False) -> str:
        if not qualified:
            return f"{model_cls.__name__}Factory"
        prefix = "".join(part[:1].upper() + part[1:] for part in re.split(r"[._]", model_cls.__module__))
        return f"{prefix}{model_cls.__name__}Factory"

    def model_alias(self, model_cls: type) -> str:
        return f"{model_cls.__module__.replace('.', '_')}_{model_cls.__name__}"

    def is_bound(self, document: str, model_cls: type) -> bool:
        """True if the model's short name or factory name is already taken in ``document``."""
        name = re.escape(model_cls.__name__)
        if re.search(rf"^class\s+{name}Factory\b", document, re.MULTILINE):
            return True
        imported = rf"^(?:from\s+[\w.]+\s+)?import\s+{_IMPORTED_NAMES}\b{name}\b(?!\s+as\b)"
        return re.search(imported, document, re.MULTILINE) is not None

    def render(
        self,
        model_cls: type,
        properties: dict[str, PropertyDescriptor],
        document: str = "",
    ) -> str:
        """
        Render the factory block for ``model_cls``.

        When ``document`` already binds the model's class name, the import is
        aliased and the factory named after the model's module so both stay
        reachable.
        """
        module, name = model_cls.__module__, model_cls.__name__
        qualified = self.is_bound(document, model_cls)
        if qualified:
            binding = self.model_alias(model_cls)
            statement = f"from {module} import {name} as {binding}  # noqa: E402"
        else:
            binding = name
            statement = f"from {module} import {name}  # noqa: E402"

        lines = [
            "",
            "",
            statement,
            "",
            "",
            f"class {self.factory_name(model_cls, qualified)}(factory.Factory):",
            f'    """Factory for :class:`{module}.{model_cls.__qualname__}`."""',
            "",
            "    class Meta:",
            f"        model = {binding}",
        ]

        attributes = []
        for prop in properties.values():
            if prop.is_fakeable and _is_attribute_name(prop.name):
                attributes.append(f"    {prop.name} = {prop.fake_expression}")
            else:
                attributes.append(f"    # {prop.name}: {prop.type_label}")
        if attributes:
            lines.append("")
            lines.extend(attributes)

        return "\n".join(lines) + "\n"

    def has_factory(self, document: str, model_cls: type) -> bool:
        """
        Return True if ``document`` already defines a factory for ``model_cls``.

        Matched on the text rather than parsed so hand-edited modules that
        no longer compile are still recognised. The model must be imported
        from its own module (possibly under an alias) and some factory class
        must name that binding as its ``Meta.model``.
        """
        return any(
            _defines_factory_for(document, binding)
            for binding in _imports(document, model_cls.__module__, model_cls.__name__)
        )
