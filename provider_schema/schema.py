"""
schema.py - the provider-definition document schema.

A provider definition looks like::

    {
        "name": "fancy-ui", "description": "...", "version": "1.0.0",
        "author": "...", "url": "...", "source": "...",
        "options": {"importsPrefix": "@fancy/ui/"},
        "components": ["Button", {"name": "Dialog", "useLazyLoad": False}],
    }

``components`` entries may also be callables when the definition is written
as a Python module (see :mod:`provider_schema.loader`).
"""

from __future__ import annotations

from typing import Any

from .validator import Type, ValidationResult

__all__ = [
    "OPTIONS_SCHEMA",
    "COMPONENT_SCHEMA",
    "PROVIDER_DEFINITION_SCHEMA",
    "validate_provider_definition",
]

ROOT_PATH = "config"

OPTIONS_SCHEMA = Type.schema(
    {
        "fileExtension": Type.optional(Type.string()),
        "componentsFolder": Type.optional(Type.string()),
        "srcFolder": Type.optional(Type.string()),
        "importsPrefix": Type.required(Type.string()),
        "componentNamePrefix": Type.optional(Type.string()),
        "indexFilename": Type.optional(Type.string()),
        "definitionFilename": Type.optional(Type.string()),
        "definitionName": Type.optional(Type.string()),
        "javaNamespace": Type.optional(Type.string()),
    },
    False,
)

COMPONENT_SCHEMA = Type.schema(
    {
        "name": Type.required(Type.string()),
        "componentName": Type.optional(Type.string()),
        "fileName": Type.optional(Type.string()),
        "filePath": Type.optional(Type.string()),
        "importPath": Type.optional(Type.string()),
        "importName": Type.optional(Type.string()),
        "importStatement": Type.optional(Type.string()),
        "useLazyLoad": Type.optional(Type.boolean()),
    },
    False,
)

PROVIDER_DEFINITION_SCHEMA = Type.schema(
    {
        "name": Type.required(Type.string()),
        "description": Type.required(Type.string()),
        "version": Type.required(Type.string()),
        "author": Type.required(Type.string()),
        "url": Type.required(Type.string()),
        "source": Type.required(Type.string()),
        "options": Type.required(OPTIONS_SCHEMA),
        "generators": Type.optional(Type.object()),
        "components": Type.required(
            Type.array(
                Type.union(
                    Type.string(),
                    Type.function(),
                    COMPONENT_SCHEMA,
                )
            )
        ),
    },
    False,
)


def validate_provider_definition(document: Any, path: str = ROOT_PATH) -> ValidationResult:
    """Validate a parsed provider-definition document."""
    return PROVIDER_DEFINITION_SCHEMA(document, path)
