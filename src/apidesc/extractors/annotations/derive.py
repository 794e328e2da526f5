from __future__ import annotations

import importlib
import inspect
import logging
from typing import Optional, Union

from apidesc.domain.errors import HandlerNotFoundError
from apidesc.domain.models import CommandSpec
from apidesc.extractors.annotations.naming import command_name_from_handler
from apidesc.extractors.annotations.parser import (
    AnnotationParser,
    RegexAnnotationParser,
    collect_params,
)

logger = logging.getLogger(__name__)

Handler = Union[type, str]


def handler_identifier(handler: Handler) -> str:
    if isinstance(handler, str):
        return handler.strip()
    return f"{handler.__module__}.{handler.__qualname__}"


def resolve_handler(handler: Handler) -> tuple[str, type]:
    """
    Return (identifier, class) for a handler class or an import string
    ("pkg.module:Class" or "pkg.module.Class").
    """
    if not isinstance(handler, str):
        return handler_identifier(handler), handler

    identifier = handler.strip()
    if ":" in identifier:
        module_name, _, qualname = identifier.partition(":")
    else:
        module_name, _, qualname = identifier.rpartition(".")

    if not module_name or not qualname:
        raise HandlerNotFoundError(identifier, "expected a module path and a class name")

    try:
        obj = importlib.import_module(module_name)
    except ImportError as exc:
        raise HandlerNotFoundError(identifier, str(exc)) from exc

    for part in qualname.split("."):
        obj = getattr(obj, part, None)
        if obj is None:
            raise HandlerNotFoundError(identifier, f"{module_name} has no attribute {qualname}")

    if not isinstance(obj, type):
        raise HandlerNotFoundError(identifier, "not a class")
    return identifier, obj


def derive_command(handler: Handler, parser: Optional[AnnotationParser] = None) -> CommandSpec:
    """
    Build a CommandSpec from the parameter annotations in a handler's docstring.
    Method, URI and doc are left empty.
    """
    identifier, cls = resolve_handler(handler)
    parser = parser or RegexAnnotationParser()

    # own docstring only; annotations are not inherited
    annotations = parser.parse(inspect.cleandoc(cls.__doc__ or ""))
    params = collect_params(annotations)
    logger.debug("derived %d parameter(s) from %s", len(params), identifier)

    return CommandSpec(
        name=command_name_from_handler(identifier),
        handler_class=identifier,
        params=params,
    )
