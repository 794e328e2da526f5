from __future__ import annotations

from typing import Iterable


class CommandValidationError(Exception):
    """Raised when a configuration does not satisfy a command's parameters.

    `errors` keeps one human-readable message per failed check, in the
    order the parameters were validated.
    """

    def __init__(self, errors: Iterable[str]):
        self.errors: list[str] = list(errors)
        super().__init__("Validation errors: " + "\n".join(self.errors))


class UnknownFilterError(LookupError):
    """Raised when a parameter filter name cannot be resolved to a callable."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown filter: {name}")


class HandlerNotFoundError(LookupError):
    """Raised when a handler identifier cannot be imported."""

    def __init__(self, identifier: str, reason: str = ""):
        self.identifier = identifier
        message = f"Handler not found: {identifier}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class UnknownCommandError(LookupError):
    """Raised when a service description has no command with the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown command: {name}")
