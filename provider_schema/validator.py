"""
validator.py - composable structural validators
===============================================

Validators are small immutable objects built once from the constructors on
:class:`Type` and then called as ``validator(value, path)``.  Every call
returns a fresh :class:`ValidationResult`; nothing is raised for bad data, so
a single call reports *every* problem in a document.

Public API
----------
Type
    Namespace of constructors: ``string``, ``number``, ``boolean``,
    ``object``, ``function``, ``null``, ``undefined`` (primitives) and the
    combinators ``array``, ``schema``, ``union``, ``required``, ``optional``.

ValidationResult / FieldError
    The result record and one diagnostic inside it.

validate(value, validator, path="root") -> ValidationResult
    Convenience call-through.

SchemaError
    Raised by callers (never by the validators) that want an exception for an
    invalid document; carries the full result.

CombinatorError
    Raised while *building* a validator tree that makes no sense.

```python
person = Type.schema({
    "name": Type.required(Type.string()),
    "tags": Type.optional(Type.array(Type.string())),
})
result = person({"name": "Ada", "tags": ["x", 1]}, "doc")
result.valid           # False
result.errors[0].path  # "doc.tags[1]"
```
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Tuple

from .utils import UNDEFINED, TypeTag, is_absent, type_tag

__all__ = [
    "SchemaError",
    "CombinatorError",
    "FieldError",
    "ValidationResult",
    "Validator",
    "Type",
    "validate",
]

# --------------------------------------------------------------------------- #
# Exceptions                                                                  #
# --------------------------------------------------------------------------- #

class SchemaError(ValueError):
    """Raised when a document violates the supplied schema."""

    def __init__(self, message: str, result: "ValidationResult | None" = None):
        super().__init__(message)
        self.result = result

    @property
    def errors(self) -> Tuple["FieldError", ...]:
        return self.result.errors if self.result is not None else ()


class CombinatorError(TypeError):
    """Raised when a validator tree is assembled incorrectly."""

# --------------------------------------------------------------------------- #
# Result records                                                              #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class FieldError:
    """One diagnostic: where, what went wrong, and what was expected."""

    path: str
    message: str
    value: Any = UNDEFINED
    expected: str | None = None


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one validator call.

    ``type_match`` is True when the value was the right *kind* for the
    validator even if its content failed deeper checks.  Unions use it to
    tell an intended-but-malformed branch from a branch that never applied.
    """

    valid: bool
    type: str
    type_match: bool
    errors: Tuple[FieldError, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.errors, tuple):
            object.__setattr__(self, "errors", tuple(self.errors))
        if self.valid == bool(self.errors):
            raise CombinatorError(
                f"inconsistent result: valid={self.valid} with {len(self.errors)} error(s)"
            )

    @property
    def messages(self) -> list[str]:
        return [e.message for e in self.errors]

    def raise_for_errors(self, label: str = "document") -> None:
        """Raise :class:`SchemaError` if the result is not valid."""
        if self.valid:
            return
        raise SchemaError(
            f"{label} failed validation with {len(self.errors)} error(s): "
            + "; ".join(self.messages),
            result=self,
        )

# --------------------------------------------------------------------------- #
# Validator base                                                              #
# --------------------------------------------------------------------------- #

def _check_validator(candidate: Any, where: str) -> None:
    if not isinstance(candidate, Validator):
        raise CombinatorError(
            f"{where} expects a validator, got {type(candidate).__name__}"
        )


class Validator:
    """Base class; subclasses are frozen dataclasses."""

    @property
    def type_name(self) -> str:
        raise NotImplementedError

    def validate(self, value: Any, path: str) -> ValidationResult:
        raise NotImplementedError

    def __call__(self, value: Any, path: str = "root") -> ValidationResult:
        return self.validate(value, path)


def _kind_failure(
    value: Any, path: str, expected: str, article: str = "a", type_name: str | None = None
) -> ValidationResult:
    return ValidationResult(
        valid=False,
        type=expected if type_name is None else type_name,
        type_match=False,
        errors=(
            FieldError(
                path=path,
                message=f'{path} should be {article} "{expected}", but "{type_tag(value)}" was given',
                value=value,
                expected=expected,
            ),
        ),
    )

# --------------------------------------------------------------------------- #
# Primitives                                                                  #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class Primitive(Validator):
    tag: TypeTag

    def __post_init__(self) -> None:
        if not isinstance(self.tag, TypeTag):
            raise CombinatorError(f"unknown type tag: {self.tag!r}")

    @property
    def type_name(self) -> str:
        return self.tag.value

    def validate(self, value: Any, path: str) -> ValidationResult:
        if type_tag(value) is self.tag:
            return ValidationResult(valid=True, type=self.type_name, type_match=True)
        return _kind_failure(value, path, self.type_name)

# --------------------------------------------------------------------------- #
# Combinators                                                                 #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class ArrayOf(Validator):
    inner: Validator

    def __post_init__(self) -> None:
        _check_validator(self.inner, "array()")

    @property
    def type_name(self) -> str:
        return f"{self.inner.type_name}[]"

    def validate(self, value: Any, path: str) -> ValidationResult:
        if type_tag(value) is not TypeTag.ARRAY:
            return _kind_failure(value, path, "array", article="an")

        errors: list[FieldError] = []
        for idx, item in enumerate(value):
            result = self.inner(item, f"{path}[{idx}]")
            if not result.valid:
                errors.extend(result.errors)

        return ValidationResult(
            valid=not errors, type=self.type_name, type_match=True, errors=tuple(errors)
        )


@dataclass(frozen=True)
class Schema(Validator):
    fields: Tuple[Tuple[str, Validator], ...]
    allow_extra_fields: bool = False

    def __post_init__(self) -> None:
        for key, validator in self.fields:
            if not isinstance(key, str):
                raise CombinatorError(f"schema field names must be strings, got {key!r}")
            _check_validator(validator, f"schema field '{key}'")

    @property
    def type_name(self) -> str:
        return json.dumps({key: v.type_name for key, v in self.fields})

    def validate(self, value: Any, path: str) -> ValidationResult:
        if type_tag(value) is not TypeTag.OBJECT:
            return _kind_failure(value, path, "object", article="an", type_name=self.type_name)

        errors: list[FieldError] = []
        types: dict[str, str] = {}
        declared = set()

        for key, validator in self.fields:
            declared.add(key)
            result = validator(value.get(key, UNDEFINED), f"{path}.{key}")
            if not result.valid:
                errors.extend(result.errors)
            types[key] = result.type

        if not self.allow_extra_fields:
            for key in value:
                if key in declared:
                    continue
                errors.append(
                    FieldError(
                        path=f"{path}.{key}",
                        message=f"{path}.{key} is unexpected field",
                        value=value[key],
                        expected="never",
                    )
                )

        return ValidationResult(
            valid=not errors, type=json.dumps(types), type_match=True, errors=tuple(errors)
        )


@dataclass(frozen=True)
class UnionOf(Validator):
    candidates: Tuple[Validator, ...]

    def __post_init__(self) -> None:
        if not self.candidates:
            raise CombinatorError("union() needs at least one validator")
        for candidate in self.candidates:
            _check_validator(candidate, "union()")

    @staticmethod
    def _join(names: list[str]) -> str:
        # dict.fromkeys keeps first-seen order while dropping duplicates
        return " | ".join(dict.fromkeys(names))

    @property
    def type_name(self) -> str:
        return f"({self._join([c.type_name for c in self.candidates])})"

    def validate(self, value: Any, path: str) -> ValidationResult:
        results = [candidate(value, path) for candidate in self.candidates]
        joined = self._join([r.type for r in results])
        type_name = f"({joined})"

        if any(r.valid for r in results):
            return ValidationResult(valid=True, type=type_name, type_match=True)

        matched = [r for r in results if r.type_match]
        if matched:
            errors = tuple(e for r in matched for e in r.errors)
            return ValidationResult(valid=False, type=type_name, type_match=True, errors=errors)

        return ValidationResult(
            valid=False,
            type=type_name,
            type_match=False,
            errors=(
                FieldError(
                    path=path,
                    message=f'{path} should be a "{type_name}", but "{type_tag(value)}" was given',
                    value=value,
                    expected=joined,
                ),
            ),
        )


@dataclass(frozen=True)
class RequiredOf(Validator):
    inner: Validator

    def __post_init__(self) -> None:
        _check_validator(self.inner, "required()")

    @property
    def type_name(self) -> str:
        return self.inner.type_name

    def validate(self, value: Any, path: str) -> ValidationResult:
        if is_absent(value):
            return ValidationResult(
                valid=False,
                type=self.type_name,
                type_match=False,
                errors=(
                    FieldError(
                        path=path,
                        message=f'{path} is required, but "{type_tag(value)}" was given',
                        value=value,
                    ),
                ),
            )
        return self.inner(value, path)


@dataclass(frozen=True)
class OptionalOf(Validator):
    inner: Validator

    def __post_init__(self) -> None:
        _check_validator(self.inner, "optional()")

    @property
    def type_name(self) -> str:
        return self.inner.type_name

    def validate(self, value: Any, path: str) -> ValidationResult:
        if is_absent(value):
            return ValidationResult(valid=True, type=self.type_name, type_match=True)
        return self.inner(value, path)

# --------------------------------------------------------------------------- #
# Constructors                                                                #
# --------------------------------------------------------------------------- #

class Type:
    """Constructors for every validator kind."""

    @staticmethod
    def string() -> Validator:
        return Primitive(TypeTag.STRING)

    @staticmethod
    def number() -> Validator:
        return Primitive(TypeTag.NUMBER)

    @staticmethod
    def boolean() -> Validator:
        return Primitive(TypeTag.BOOLEAN)

    @staticmethod
    def object() -> Validator:
        return Primitive(TypeTag.OBJECT)

    @staticmethod
    def function() -> Validator:
        return Primitive(TypeTag.FUNCTION)

    @staticmethod
    def null() -> Validator:
        return Primitive(TypeTag.NULL)

    @staticmethod
    def undefined() -> Validator:
        return Primitive(TypeTag.UNDEFINED)

    @staticmethod
    def array(inner: Validator) -> Validator:
        return ArrayOf(inner)

    @staticmethod
    def schema(fields: Mapping[str, Validator], allow_extra_fields: bool = False) -> Validator:
        if not isinstance(fields, Mapping):
            raise CombinatorError(
                f"schema() expects a mapping of field validators, got {type(fields).__name__}"
            )
        return Schema(tuple(fields.items()), bool(allow_extra_fields))

    @staticmethod
    def union(*validators: Validator) -> Validator:
        return UnionOf(tuple(validators))

    @staticmethod
    def required(inner: Validator) -> Validator:
        return RequiredOf(inner)

    @staticmethod
    def optional(inner: Validator) -> Validator:
        return OptionalOf(inner)


def validate(value: Any, validator: Validator, path: str = "root") -> ValidationResult:
    """Run *validator* against *value* rooted at *path*."""
    _check_validator(validator, "validate()")
    return validator(value, path)
