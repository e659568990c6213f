"""
provider_schema – composable structural validators and the provider-definition
schema built from them.
"""
__version__ = "1.0.0"

from .validator import Type, ValidationResult, FieldError, SchemaError, CombinatorError, validate
from .utils import UNDEFINED, TypeTag, type_tag
from .schema import PROVIDER_DEFINITION_SCHEMA, validate_provider_definition
from .definition import ProviderDefinition, ComponentDefinition, Options
from .generators import Generators
from .report import format_errors, to_markdown_card, errors_frame

__all__ = [
    "Type",
    "ValidationResult",
    "FieldError",
    "SchemaError",
    "CombinatorError",
    "validate",
    "UNDEFINED",
    "TypeTag",
    "type_tag",
    "PROVIDER_DEFINITION_SCHEMA",
    "validate_provider_definition",
    "ProviderDefinition",
    "ComponentDefinition",
    "Options",
    "Generators",
    "format_errors",
    "to_markdown_card",
    "errors_frame",
]
