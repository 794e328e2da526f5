from __future__ import annotations

import importlib
import logging
from typing import Any, Mapping, Optional, Sequence

from apidesc.settings import ApidescSettings
from apidesc.validation.constraints import DEFAULT_CONSTRAINTS, Constraint, ConstraintResult

logger = logging.getLogger(__name__)


class Inspector:
    """Type-constraint registry used while validating command parameters.

    Constraint names map to callables `fn(value, args) -> True | message`.
    A dotted name that is not registered ("decimal.Decimal") is imported
    and checked with isinstance.
    """

    def __init__(
        self,
        type_validation: bool = True,
        constraints: Optional[Mapping[str, Constraint]] = None,
    ) -> None:
        self.type_validation = type_validation
        self._constraints: dict[str, Constraint] = dict(DEFAULT_CONSTRAINTS)
        if constraints:
            self._constraints.update(constraints)

    @classmethod
    def from_settings(cls, settings: ApidescSettings) -> "Inspector":
        return cls(type_validation=settings.type_validation)

    def register_constraint(self, name: str, constraint: Constraint) -> None:
        self._constraints[name] = constraint

    def has_constraint(self, name: str) -> bool:
        return name in self._constraints

    def constraint_names(self) -> list[str]:
        return sorted(self._constraints)

    def validate_constraint(
        self,
        name: str,
        value: Any,
        args: Optional[Sequence[Any]] = None,
    ) -> ConstraintResult:
        constraint = self._constraints.get(name)
        if constraint is not None:
            return constraint(value, list(args or ()))

        if "." in name:
            return self._validate_instance(name, value)

        return f"{name} is not a registered constraint"

    def _validate_instance(self, dotted: str, value: Any) -> ConstraintResult:
        module_name, _, attr = dotted.rpartition(".")
        try:
            cls = getattr(importlib.import_module(module_name), attr)
        except (ImportError, AttributeError):
            logger.debug("type %s could not be imported", dotted)
            return f"{dotted} is not a registered constraint"

        if isinstance(cls, type) and isinstance(value, cls):
            return True
        return f"Value must be an instance of {dotted}"
