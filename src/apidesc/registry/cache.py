from __future__ import annotations

import logging
import threading
from typing import Optional

from apidesc.domain.models import CommandSpec
from apidesc.extractors.annotations.derive import Handler, derive_command, handler_identifier
from apidesc.extractors.annotations.parser import AnnotationParser, RegexAnnotationParser

logger = logging.getLogger(__name__)


class CommandCache:
    """Handler identifier -> derived CommandSpec, derived once per identifier.

    Create one per application and pass it to every place that derives
    commands from handlers.
    """

    def __init__(self, parser: Optional[AnnotationParser] = None) -> None:
        self.parser = parser or RegexAnnotationParser()
        self._commands: dict[str, CommandSpec] = {}
        self._lock = threading.Lock()

    def get_or_derive(self, handler: Handler) -> CommandSpec:
        key = handler_identifier(handler)

        cached = self._commands.get(key)
        if cached is not None:
            return cached

        with self._lock:
            # re-check: another thread may have derived it while we waited
            cached = self._commands.get(key)
            if cached is not None:
                return cached
            logger.debug("deriving command for %s", key)
            command = derive_command(handler, self.parser)
            self._commands[key] = command
            return command

    def get(self, identifier: str) -> Optional[CommandSpec]:
        return self._commands.get(identifier)

    def clear(self) -> None:
        with self._lock:
            self._commands.clear()

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._commands

    def __len__(self) -> int:
        return len(self._commands)
