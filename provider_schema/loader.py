"""
loader.py - read a provider definition from one explicitly named file.

Public API
----------
load_document(path) : parse a ``.json``, ``.yaml``/``.yml`` or ``.py`` file
                      into a plain mapping (no validation).
"""

from __future__ import annotations

import copy
import importlib.util
import json
import logging
from pathlib import Path
from typing import Any

import yaml

__all__ = ["load_document", "SUPPORTED_SUFFIXES"]

log = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".json", ".yaml", ".yml", ".py")

# --------------------------------------------------------------------------- #
# Helpers                                                                     #
# --------------------------------------------------------------------------- #

def _read_json(path: Path) -> Any:
    try:
        with path.open(encoding="utf-8") as fd:
            return json.load(fd)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc


def _read_yaml(path: Path) -> Any:
    try:
        with path.open(encoding="utf-8") as fd:
            return yaml.safe_load(fd)
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc


def _read_module(path: Path) -> Any:
    """Execute *path* and return its ``PROVIDER`` (or ``provider()``)."""
    spec = importlib.util.spec_from_file_location(f"_provider_definition_{path.stem}", path)
    if spec is None or spec.loader is None:
        raise ValueError(f"Cannot import provider module {path}")
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        raise ValueError(f"Cannot load provider module {path}: {exc}") from exc

    if hasattr(module, "PROVIDER"):
        return module.PROVIDER
    factory = getattr(module, "provider", None)
    if callable(factory):
        return factory()
    raise ValueError(f"{path} defines neither PROVIDER nor provider()")

# --------------------------------------------------------------------------- #
# Public utilities                                                            #
# --------------------------------------------------------------------------- #

def load_document(path: str | Path) -> Any:
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"Definition not found: {p}")

    suffix = p.suffix.lower()
    log.debug("loading provider definition %s", p)

    if suffix == ".json":
        return copy.deepcopy(_read_json(p))
    if suffix in (".yaml", ".yml"):
        doc = _read_yaml(p)
        if doc is None:
            raise ValueError(f"Empty definition file: {p}")
        return copy.deepcopy(doc)
    if suffix == ".py":
        # callables must survive, so no deep copy here
        return _read_module(p)

    raise ValueError(
        f"Unsupported definition format '{p.suffix}' (expected one of {', '.join(SUPPORTED_SUFFIXES)})"
    )
