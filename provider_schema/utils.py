"""
utils.py – shared, low-level utilities for the provider-schema package.

This module consolidates common helpers for:
- Type tags (the closed set of value kinds the validators understand)
- The ``UNDEFINED`` sentinel for absent values
- Case conversion used by the naming strategies
"""

from __future__ import annotations

import enum
import re
from collections.abc import Mapping
from typing import Any

__all__ = [
    "TypeTag",
    "UNDEFINED",
    "type_tag",
    "is_absent",
    "dot_case",
    "pascal_case",
    "camel_to_snake",
]

# --------------------------------------------------------------------------- #
# Absent-value sentinel                                                       #
# --------------------------------------------------------------------------- #

class _Undefined:
    """Marker for a value that is not there at all (as opposed to ``None``)."""

    _instance: "_Undefined | None" = None

    def __new__(cls) -> "_Undefined":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "_Undefined":
        return self

    def __deepcopy__(self, memo: dict) -> "_Undefined":
        return self


UNDEFINED: Any = _Undefined()

# --------------------------------------------------------------------------- #
# Type tags                                                                   #
# --------------------------------------------------------------------------- #

class TypeTag(str, enum.Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    FUNCTION = "function"
    NULL = "null"
    UNDEFINED = "undefined"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


def type_tag(value: Any) -> TypeTag:
    """Return the :class:`TypeTag` of *value*.

    ``bool`` is checked before numbers because it subclasses ``int``.
    """
    if value is UNDEFINED:
        return TypeTag.UNDEFINED
    if value is None:
        return TypeTag.NULL
    if isinstance(value, bool):
        return TypeTag.BOOLEAN
    if isinstance(value, (int, float)):
        return TypeTag.NUMBER
    if isinstance(value, str):
        return TypeTag.STRING
    if isinstance(value, Mapping):
        return TypeTag.OBJECT
    if isinstance(value, (list, tuple)):
        return TypeTag.ARRAY
    if callable(value):
        return TypeTag.FUNCTION
    return TypeTag.UNKNOWN


def is_absent(value: Any) -> bool:
    """True for ``None`` and ``UNDEFINED``."""
    return value is None or value is UNDEFINED

# --------------------------------------------------------------------------- #
# Case conversion                                                             #
# --------------------------------------------------------------------------- #

_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z0-9])|[A-Z]?[a-z0-9]+|[A-Z]+")


def _words(text: str) -> list[str]:
    return _WORD_RE.findall(text)


def dot_case(text: str) -> str:
    """``"FancyButton"`` -> ``"fancy.button"``."""
    return ".".join(w.lower() for w in _words(text))


def pascal_case(text: str) -> str:
    """``"fancy-button"`` -> ``"FancyButton"``."""
    return "".join(w[:1].upper() + w[1:].lower() for w in _words(text))


def camel_to_snake(text: str) -> str:
    """``"importPath"`` -> ``"import_path"``."""
    return "_".join(w.lower() for w in _words(text))
