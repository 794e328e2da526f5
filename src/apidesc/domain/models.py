from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from apidesc.domain.collection import Collection
from apidesc.validation.filters import resolve_filter
from apidesc.validation.inspector import Inspector
from apidesc.validation.validator import validate_command

DEFAULT_HANDLER_CLASS = "DynamicCommand"

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"", "0", "false", "no", "off"})

# types whose inline argument is one value, never a comma list
_WHOLE_ARG_TYPES = frozenset({"regex"})

logger = logging.getLogger(__name__)


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def _split_csv(value: Any) -> Any:
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return value


class ParamSpec(BaseModel):
    """Validation rules for a single command parameter."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = ""
    type: Optional[str] = None
    type_args: list[Any] = Field(default_factory=list)
    required: bool = False
    default: Any = None
    doc: str = ""
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    location: Optional[str] = None  # query/path/header/body
    location_key: Optional[str] = None
    static: bool = False
    prepend: Optional[str] = None
    append: Optional[str] = None
    filters: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _split_type_args(cls, data: Any) -> Any:
        # "choice:a,b,c" -> type="choice", type_args="a,b,c"
        if not isinstance(data, dict):
            return data
        t = data.get("type")
        if isinstance(t, str) and ":" in t and not data.get("type_args"):
            data = dict(data)
            name, _, args = t.partition(":")
            data["type"] = name.strip()
            data["type_args"] = args
        return data

    @field_validator("type_args", mode="before")
    @classmethod
    def _type_args(cls, v: Any, info: ValidationInfo) -> Any:
        # a regex pattern may itself contain commas
        if isinstance(v, str) and info.data.get("type") in _WHOLE_ARG_TYPES:
            return [v] if v else []
        return _split_csv(v)

    @field_validator("filters", mode="before")
    @classmethod
    def _csv_list(cls, v: Any) -> Any:
        return _split_csv(v)

    @field_validator("type", "location", "location_key", "prepend", "append", mode="before")
    @classmethod
    def _blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("min_length", "max_length", mode="before")
    @classmethod
    def _lenient_length(cls, v: Any, info: ValidationInfo) -> Any:
        if not isinstance(v, str):
            return v
        try:
            return int(v.strip())
        except ValueError:
            if v.strip():
                logger.debug("ignoring %s=%r: not an integer", info.field_name, v)
            return None

    @field_validator("required", "static", mode="before")
    @classmethod
    def _lenient_flag(cls, v: Any, info: ValidationInfo) -> Any:
        if not isinstance(v, str):
            return v
        flag = v.strip().lower()
        if flag in _TRUE:
            return True
        if flag in _FALSE:
            return False
        logger.debug("ignoring %s=%r: not a boolean", info.field_name, v)
        return False

    @field_validator("name", "doc", mode="before")
    @classmethod
    def _trim(cls, v: Any) -> Any:
        return "" if v is None else str(v).strip()

    def get_value(self, value: Any) -> Any:
        """
        Effective value for `value`: the default when the parameter is static
        or the value is blank, wrapped with prepend/append when non-blank.
        """
        if self.static or (self.default is not None and _is_blank(value)):
            check = self.default
        else:
            check = value

        if not _is_blank(check) and (self.prepend or self.append):
            check = f"{self.prepend or ''}{check}{self.append or ''}"
        return check

    def filter(self, value: Any) -> Any:
        for name in self.filters:
            value = resolve_filter(name)(value)
        return value


class CommandSpec(BaseModel):
    """
    Declarative description of one API command: name, HTTP method, URI
    template, handler class and its parameters.

    Built from a configuration record with the keys name, doc, method,
    uri, class and params. `params` maps parameter names to ParamSpec
    objects or raw records; raw records are wrapped, ParamSpec objects
    are kept as-is.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = ""
    doc: str = ""
    method: str = ""
    uri: str = ""
    handler_class: str = Field(DEFAULT_HANDLER_CLASS, alias="class")
    params: dict[str, ParamSpec] = Field(default_factory=dict)

    @field_validator("name", "doc", "method", "uri", mode="before")
    @classmethod
    def _trim(cls, v: Any) -> Any:
        return "" if v is None else str(v).strip()

    @field_validator("handler_class", mode="before")
    @classmethod
    def _trim_class(cls, v: Any) -> Any:
        if v is None:
            return DEFAULT_HANDLER_CLASS
        return str(v).strip()

    @field_validator("params", mode="before")
    @classmethod
    def _normalize_params(cls, v: Any) -> Any:
        if not v:
            return {}
        out: dict[str, Any] = {}
        for name, param in dict(v).items():
            if isinstance(param, ParamSpec):
                out[name] = param
                continue
            record = dict(param or {})
            record.setdefault("name", name)
            out[name] = ParamSpec.model_validate(record)
        return out

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "CommandSpec":
        return cls.model_validate(config)

    def get_param(self, name: str) -> Optional[ParamSpec]:
        return self.params.get(name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "doc": self.doc,
            "method": self.method,
            "uri": self.uri,
            "class": self.handler_class,
            "params": dict(self.params),
        }

    def validate_config(self, config: Collection, inspector: Optional[Inspector] = None) -> None:
        """
        Check `config` against every parameter, applying defaults and filters
        in place. Raises CommandValidationError listing every failed check.
        """
        validate_command(self, config, inspector if inspector is not None else Inspector())
