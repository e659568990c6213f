"""
definition.py - typed view of a validated provider definition.

The raw document is validated once with
:data:`~provider_schema.schema.PROVIDER_DEFINITION_SCHEMA`; only then is it
turned into immutable records.  Component descriptors, which may be a plain
name, a callable or a detailed mapping, are sorted into one of three
variants here so that nothing downstream has to inspect them again.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Callable, Tuple, Union

from . import loader
from .generators import Generators
from .schema import COMPONENT_SCHEMA, ROOT_PATH, validate_provider_definition
from .utils import TypeTag, camel_to_snake, pascal_case, type_tag
from .validator import CombinatorError

__all__ = [
    "Options",
    "ComponentDefinition",
    "NamedComponent",
    "CallableComponent",
    "DetailedComponent",
    "ComponentDescriptor",
    "GeneratorContext",
    "ProviderDefinition",
    "parse_descriptor",
]

log = logging.getLogger(__name__)


def _snake_kwargs(cls: type, mapping: Mapping[str, Any]) -> dict[str, Any]:
    """camelCase document keys -> dataclass kwargs, dropping nulls."""
    known = {f.name for f in fields(cls)}
    out: dict[str, Any] = {}
    for key, value in mapping.items():
        attr = camel_to_snake(key)
        if attr in known and value is not None:
            out[attr] = value
    return out

# --------------------------------------------------------------------------- #
# Options                                                                     #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class Options:
    imports_prefix: str
    file_extension: str = "ts"
    components_folder: str = "components"
    src_folder: str = "src"
    index_filename: str = "index"
    definition_filename: str = "definition"
    definition_name: str = "Definition"
    component_name_prefix: str = ""
    java_namespace: str = "org.framjet.blastdom.provider"

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> "Options":
        """Fill in defaults for everything but ``importsPrefix``."""
        kwargs = _snake_kwargs(cls, mapping or {})
        if not kwargs.get("imports_prefix"):
            raise ValueError("ProviderDefinition.options.importsPrefix is missing")
        return cls(**kwargs)

# --------------------------------------------------------------------------- #
# Components                                                                  #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class ComponentDefinition:
    name: str
    component_name: str | None = None
    file_name: str | None = None
    file_path: str | None = None
    import_path: str | None = None
    import_name: str | None = None
    import_statement: str | None = None
    use_lazy_load: bool = True

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any], path: str = "component") -> "ComponentDefinition":
        COMPONENT_SCHEMA(mapping, path).raise_for_errors(path)
        return cls(**_snake_kwargs(cls, mapping))


@dataclass(frozen=True)
class GeneratorContext:
    """What a callable component descriptor receives."""

    provider: "ProviderDefinition"
    options: Options
    generators: Generators


@dataclass(frozen=True)
class NamedComponent:
    name: str

    def resolve(self, context: GeneratorContext) -> ComponentDefinition:
        return ComponentDefinition(name=self.name)


@dataclass(frozen=True)
class CallableComponent:
    factory: Callable[[GeneratorContext], Any]

    def resolve(self, context: GeneratorContext) -> ComponentDefinition:
        produced = self.factory(context)
        if isinstance(produced, ComponentDefinition):
            return produced
        if isinstance(produced, Mapping):
            label = getattr(self.factory, "__name__", "factory")
            return ComponentDefinition.from_mapping(produced, f"{label}()")
        raise CombinatorError(
            f"component factory returned {type(produced).__name__}, "
            "expected a ComponentDefinition or a mapping"
        )


@dataclass(frozen=True)
class DetailedComponent:
    definition: ComponentDefinition

    def resolve(self, context: GeneratorContext) -> ComponentDefinition:
        return self.definition


ComponentDescriptor = Union[NamedComponent, CallableComponent, DetailedComponent]


def parse_descriptor(raw: Any, path: str = "component") -> ComponentDescriptor:
    """Sort one raw ``components`` entry into its variant."""
    if isinstance(raw, ComponentDefinition):
        return DetailedComponent(raw)

    tag = type_tag(raw)
    if tag is TypeTag.STRING:
        return NamedComponent(raw)
    if tag is TypeTag.FUNCTION:
        return CallableComponent(raw)
    if tag is TypeTag.OBJECT:
        return DetailedComponent(ComponentDefinition.from_mapping(raw, path))
    raise CombinatorError(f"Unknown component type {tag} at {path}")

# --------------------------------------------------------------------------- #
# Provider                                                                    #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class ProviderDefinition:
    name: str
    description: str
    version: str
    author: str
    url: str
    source: str
    options: Options
    components: Tuple[ComponentDescriptor, ...] = ()
    generators: Generators = field(default_factory=Generators)

    @classmethod
    def from_document(cls, document: Any, path: str = ROOT_PATH) -> "ProviderDefinition":
        """Validate *document* and build the typed definition.

        Raises :class:`SchemaError` carrying every validation error when the
        document does not match the provider-definition schema.
        """
        result = validate_provider_definition(document, path)
        if not result.valid:
            log.debug("provider definition rejected with %d error(s)", len(result.errors))
            result.raise_for_errors(path)

        components = tuple(
            parse_descriptor(raw, f"{path}.components[{idx}]")
            for idx, raw in enumerate(document["components"])
        )
        definition = cls(
            name=document["name"],
            description=document["description"],
            version=document["version"],
            author=document["author"],
            url=document["url"],
            source=document["source"],
            options=Options.from_mapping(document["options"]),
            components=components,
            generators=Generators().with_overrides(document.get("generators")),
        )
        log.debug("loaded provider %s %s with %d component(s)",
                  definition.name, definition.version, len(components))
        return definition

    @classmethod
    def load(cls, path: str | Path) -> "ProviderDefinition":
        """Read the file at *path* and build the definition from it."""
        return cls.from_document(loader.load_document(path))

    def context(self) -> GeneratorContext:
        return GeneratorContext(provider=self, options=self.options, generators=self.generators)

    def resolve_components(self) -> Tuple[ComponentDefinition, ...]:
        ctx = self.context()
        return tuple(descriptor.resolve(ctx) for descriptor in self.components)

    def describe(self) -> dict[str, Any]:
        """Summary mapping (metadata, options and component naming).

        ``components`` holds one row per resolved component with every name
        the naming strategies produce for it.
        """
        gen, opts = self.generators, self.options
        rows = []
        for comp in self.resolve_components():
            file_name = gen.component_file_name(comp, opts, self)
            direct_name = gen.component_file_name_direct(comp, opts, self)
            import_name = gen.component_import_name(comp, opts, self)
            rows.append(
                {
                    "component": gen.component_name(comp, opts, self),
                    "file": gen.component_file_path(file_name, comp, opts, self),
                    "direct_file": gen.component_file_path(direct_name, comp, opts, self),
                    "import": f"{import_name} from {gen.component_import_path(comp, opts, self)}",
                    "java": gen.java_component_name(pascal_case(comp.name), comp, opts, self),
                    "lazy": comp.use_lazy_load,
                }
            )
        return {
            "provider": f"{self.name} {self.version}",
            "description": self.description,
            "details": {"author": self.author, "url": self.url, "source": self.source},
            "options": {f.name: getattr(opts, f.name) for f in fields(opts)},
            "java": {
                "provider": gen.java_provider_name(opts, self),
                "base_component": gen.java_base_component_name(opts, self),
            },
            "components": rows,
        }
