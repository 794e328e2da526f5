from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional

import yaml

from apidesc.domain.collection import Collection
from apidesc.domain.errors import UnknownCommandError
from apidesc.domain.models import CommandSpec
from apidesc.validation.inspector import Inspector

if TYPE_CHECKING:
    from apidesc.extractors.annotations.derive import Handler
    from apidesc.registry.cache import CommandCache

logger = logging.getLogger(__name__)


class ServiceDescription:
    """Named set of CommandSpecs for one remote service.

    Owns the Inspector used when validating its commands.
    """

    def __init__(
        self,
        commands: Iterable[CommandSpec] = (),
        inspector: Optional[Inspector] = None,
        name: str = "",
    ) -> None:
        self.name = name
        self.inspector = inspector or Inspector()
        self._commands: dict[str, CommandSpec] = {}
        for command in commands:
            self.add_command(command)

    # ----------------------------
    # Loading
    # ----------------------------

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], inspector: Optional[Inspector] = None) -> "ServiceDescription":
        commands: list[CommandSpec] = []
        for key, record in (data.get("commands") or {}).items():
            if isinstance(record, CommandSpec):
                commands.append(record)
                continue
            record = dict(record or {})
            record.setdefault("name", key)
            commands.append(CommandSpec.from_config(record))
        return cls(commands, inspector=inspector, name=str(data.get("name") or "").strip())

    @classmethod
    def from_file(cls, path: Path, inspector: Optional[Inspector] = None) -> "ServiceDescription":
        """Load a description from a .json, .yaml or .yml file."""
        path = Path(path)
        text = path.read_text(encoding="utf-8")
        suffix = path.suffix.lower()

        if suffix in (".yaml", ".yml"):
            data = yaml.safe_load(text) or {}
        elif suffix == ".json":
            data = json.loads(text)
        else:
            raise ValueError(f"Unsupported description format: {path.name} (expected .json, .yaml or .yml)")

        if not isinstance(data, Mapping):
            raise ValueError(f"Description root must be a mapping: {path}")

        description = cls.from_dict(data, inspector=inspector)
        logger.debug("loaded %d command(s) from %s", len(description), path)
        return description

    # ----------------------------
    # Commands
    # ----------------------------

    def add_command(self, command: CommandSpec) -> None:
        if command.name in self._commands:
            raise ValueError(f"duplicate command: {command.name}")
        self._commands[command.name] = command

    def add_handler(self, handler: "Handler", cache: "CommandCache") -> CommandSpec:
        command = cache.get_or_derive(handler)
        self.add_command(command)
        return command

    def has_command(self, name: str) -> bool:
        return name in self._commands

    def get_command(self, name: str) -> CommandSpec:
        command = self._commands.get(name)
        if command is None:
            raise UnknownCommandError(name)
        return command

    @property
    def commands(self) -> list[CommandSpec]:
        return list(self._commands.values())

    def validate(self, name: str, config: Collection) -> CommandSpec:
        command = self.get_command(name)
        command.validate_config(config, self.inspector)
        return command

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "commands": {
                name: {**command.to_dict(), "params": {k: p.model_dump() for k, p in command.params.items()}}
                for name, command in self._commands.items()
            },
        }

    def __len__(self) -> int:
        return len(self._commands)

    def __contains__(self, name: object) -> bool:
        return name in self._commands
