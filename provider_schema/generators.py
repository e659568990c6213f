"""
generators.py - naming strategies for components.

A :class:`Generators` table holds one callable per naming decision.  The
defaults reproduce the conventions of the component generator; a provider
definition may replace any subset through its ``generators`` mapping::

    Generators().with_overrides({"componentName": lambda c, o, p: c.name.upper()})

Tables are frozen; ``with_overrides`` always returns a new one.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from .utils import camel_to_snake, dot_case, pascal_case
from .validator import CombinatorError

if TYPE_CHECKING:  # pragma: no cover
    from .definition import ComponentDefinition, Options, ProviderDefinition

__all__ = ["Generators", "TEMPLATE_GENERATORS"]

log = logging.getLogger(__name__)

# Source-emitting strategies a definition may carry; nothing here renders
# code, so they are accepted and left unused.
TEMPLATE_GENERATORS = frozenset({
    "component_properties",
    "component_import_statement",
    "component_creator_import_statement",
    "component_export_statement",
})

# --------------------------------------------------------------------------- #
# Default strategies                                                          #
# --------------------------------------------------------------------------- #

def _first(explicit: str | None, fallback: str) -> str:
    """Explicit per-component value wins, even when empty."""
    return fallback if explicit is None else explicit


def _component_name(c: "ComponentDefinition", o: "Options", p: "ProviderDefinition") -> str:
    return _first(c.component_name, f"{o.component_name_prefix}{dot_case(c.name)}")


def _component_file_name(c: "ComponentDefinition", o: "Options", p: "ProviderDefinition") -> str:
    return _first(c.file_name, f"{c.name}.{o.file_extension}")


def _component_file_name_direct(c: "ComponentDefinition", o: "Options", p: "ProviderDefinition") -> str:
    return _first(c.file_name, f"{c.name}.direct.{o.file_extension}")


def _component_file_path(
    filename: str, c: "ComponentDefinition", o: "Options", p: "ProviderDefinition"
) -> str:
    return _first(c.file_path, f"{o.src_folder}/{o.components_folder}/{filename}")


def _component_import_path(c: "ComponentDefinition", o: "Options", p: "ProviderDefinition") -> str:
    return _first(c.import_path, f"{o.imports_prefix}{c.name}")


def _component_import_name(c: "ComponentDefinition", o: "Options", p: "ProviderDefinition") -> str:
    return _first(c.import_name, c.name)


def _java_provider_name(o: "Options", p: "ProviderDefinition") -> str:
    return f"{pascal_case(p.name)}Provider"


def _java_base_component_name(o: "Options", p: "ProviderDefinition") -> str:
    return f"Base{pascal_case(p.name)}Component"


def _java_component_name(
    name: str, c: "ComponentDefinition", o: "Options", p: "ProviderDefinition"
) -> str:
    return _first(c.component_name, f"{pascal_case(o.component_name_prefix)}{name}")

# --------------------------------------------------------------------------- #
# Strategy table                                                              #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class Generators:
    component_name: Callable[..., str] = _component_name
    component_file_name: Callable[..., str] = _component_file_name
    component_file_name_direct: Callable[..., str] = _component_file_name_direct
    component_file_path: Callable[..., str] = _component_file_path
    component_import_path: Callable[..., str] = _component_import_path
    component_import_name: Callable[..., str] = _component_import_name
    java_provider_name: Callable[..., str] = _java_provider_name
    java_base_component_name: Callable[..., str] = _java_base_component_name
    java_component_name: Callable[..., str] = _java_component_name

    @classmethod
    def names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in dataclasses.fields(cls))

    def with_overrides(self, overrides: Mapping[str, Any] | None) -> "Generators":
        """Return a copy with the strategies in *overrides* swapped in.

        Keys may be camelCase (as written in definition documents) or
        snake_case.  Keys in :data:`TEMPLATE_GENERATORS` are skipped; other
        unknown keys and non-callables are assembly errors.
        """
        if not overrides:
            return self

        known = set(self.names())
        replacements: dict[str, Callable[..., str]] = {}
        for key, fn in overrides.items():
            attr = camel_to_snake(key)
            if attr in TEMPLATE_GENERATORS:
                log.debug("ignoring template generator %r", key)
                continue
            if attr not in known:
                raise CombinatorError(f"unknown generator '{key}'")
            if not callable(fn):
                raise CombinatorError(
                    f"generator '{key}' must be callable, got {type(fn).__name__}"
                )
            replacements[attr] = fn
        return dataclasses.replace(self, **replacements)
