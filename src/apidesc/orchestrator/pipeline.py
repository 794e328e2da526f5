from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional

from apidesc.domain.collection import Collection
from apidesc.domain.description import ServiceDescription
from apidesc.domain.errors import CommandValidationError
from apidesc.domain.models import CommandSpec
from apidesc.settings import ApidescSettings
from apidesc.validation.inspector import Inspector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidateResult:
    command: CommandSpec
    ok: bool
    config: dict[str, Any]
    errors: list[str] = field(default_factory=list)


def parse_assignments(pairs: Iterable[str]) -> dict[str, str]:
    """
    ["a=1", "b=x=y"] -> {"a": "1", "b": "x=y"}
    Raises ValueError for items without "=" or with an empty key.
    """
    out: dict[str, str] = {}
    for item in pairs:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Expected key=value, got: {item!r}")
        out[key] = value
    return out


def load_description(path: Path, settings: Optional[ApidescSettings] = None) -> ServiceDescription:
    settings = settings or ApidescSettings()
    return ServiceDescription.from_file(path, inspector=Inspector.from_settings(settings))


def run_validate(
    description_path: Path,
    command_name: str,
    values: dict[str, Any],
    settings: Optional[ApidescSettings] = None,
) -> ValidateResult:
    """
    Load a description, validate `values` against one of its commands and
    report the normalized config. Validation failures are returned, not raised.
    """
    description = load_description(description_path, settings)
    command = description.get_command(command_name)
    config = Collection(values)

    try:
        description.validate(command_name, config)
    except CommandValidationError as exc:
        logger.debug("validation of %s failed: %s", command_name, exc)
        return ValidateResult(command=command, ok=False, config=config.to_dict(), errors=exc.errors)

    return ValidateResult(command=command, ok=True, config=config.to_dict())
