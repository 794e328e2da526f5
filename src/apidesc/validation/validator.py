from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from apidesc.domain.collection import Collection
from apidesc.domain.errors import CommandValidationError, UnknownFilterError
from apidesc.validation.inspector import Inspector

if TYPE_CHECKING:
    from apidesc.domain.models import CommandSpec

logger = logging.getLogger(__name__)


def _length(value: Any) -> int:
    if value is None:
        return 0
    try:
        return len(value)
    except TypeError:
        return len(str(value))


def validate_command(command: "CommandSpec", config: Collection, inspector: Inspector) -> None:
    """
    Validate and normalize `config` against the parameters of `command`.

    Per parameter, in declaration order:
      - resolve the effective value (default/static/prepend/append)
      - inject {{ placeholders }} into text values
      - required check (stops further checks for the parameter)
      - type constraint check (stops further checks for the parameter)
      - filters (a failing filter is recorded as an error), then write back
        if the value changed
      - min/max length checks

    `config` is mutated in place, including for parameters processed before
    a failure. Raises CommandValidationError with every collected message.
    """
    errors: list[str] = []

    for name, param in command.params.items():
        current = config.get(name)
        value = param.get_value(current)

        if value and isinstance(value, str):
            value = config.inject(value)

        if param.required and (value is None or value == ""):
            message = f"Requires that the {name} argument be supplied."
            if param.doc:
                message += f"  ({param.doc})."
            errors.append(message)
            continue

        if inspector.type_validation and value is not None and param.type:
            result = inspector.validate_constraint(param.type, value, param.type_args)
            if result is not True:
                errors.append(f"{name}: {result}")
                config.set(name, value)
                continue

        try:
            value = param.filter(value)
        except (TypeError, ValueError, UnknownFilterError) as exc:
            errors.append(f"{name}: {exc}")
            continue

        if value != current:
            config.set(name, value)

        if param.min_length and _length(value) < param.min_length:
            errors.append(f"Requires that the {name} argument be >= {param.min_length} characters.")

        if param.max_length and _length(value) > param.max_length:
            errors.append(f"Requires that the {name} argument be <= {param.max_length} characters.")

    if errors:
        logger.info("command %s failed validation with %d error(s)", command.name or "-", len(errors))
        raise CommandValidationError(errors)

    logger.debug("command %s validated %d parameter(s)", command.name or "-", len(command.params))
