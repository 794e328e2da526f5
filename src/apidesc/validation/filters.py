from __future__ import annotations

import importlib
import json
from typing import Any, Callable

from apidesc.domain.errors import UnknownFilterError

Filter = Callable[[Any], Any]


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _lower(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def _upper(value: Any) -> Any:
    return value.upper() if isinstance(value, str) else value


def _title(value: Any) -> Any:
    return value.title() if isinstance(value, str) else value


def _number(cast: Callable[[Any], Any]) -> Filter:
    # blank values pass through untouched
    def apply(value: Any) -> Any:
        if value is None or value == "":
            return value
        return cast(value.strip() if isinstance(value, str) else value)

    apply.__name__ = cast.__name__
    return apply


def _to_bool(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


BUILTIN_FILTERS: dict[str, Filter] = {
    "strip": _strip,
    "lower": _lower,
    "upper": _upper,
    "title": _title,
    "int": _number(int),
    "float": _number(float),
    "str": str,
    "bool": _to_bool,
    "json": json.dumps,
}


def resolve_filter(name: str) -> Filter:
    """
    Resolve a filter name to a callable.

    Accepts a registered short name ("strip", "lower", ...) or an import
    path: "package.module.func" or "package.module:func".
    """
    key = (name or "").strip()
    if key in BUILTIN_FILTERS:
        return BUILTIN_FILTERS[key]

    if ":" in key:
        module_name, _, attr = key.partition(":")
    elif "." in key:
        module_name, _, attr = key.rpartition(".")
    else:
        raise UnknownFilterError(key)

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise UnknownFilterError(key) from exc

    fn = module
    for part in attr.split("."):
        fn = getattr(fn, part, None)
        if fn is None:
            raise UnknownFilterError(key)

    if not callable(fn):
        raise UnknownFilterError(key)
    return fn
