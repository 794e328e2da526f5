from __future__ import annotations

import datetime as dt
import ipaddress
import re
from typing import Any, Callable, Literal, Sequence, Union
from urllib.parse import urlparse

ConstraintResult = Union[Literal[True], str]
Constraint = Callable[[Any, Sequence[Any]], ConstraintResult]

_INT_TEXT = re.compile(r"^[+-]?\d+$")
_FLOAT_TEXT = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_BOOL_TEXT = {"true", "false", "1", "0", "yes", "no", "on", "off"}


def _is_int(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, str) and bool(_INT_TEXT.match(value.strip()))


def _is_float(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    return isinstance(value, str) and bool(_FLOAT_TEXT.match(value.strip()))


def string(value: Any, args: Sequence[Any]) -> ConstraintResult:
    return True if isinstance(value, str) else "Value must be a string"


def integer(value: Any, args: Sequence[Any]) -> ConstraintResult:
    return True if _is_int(value) else "Value must be an integer"


def float_(value: Any, args: Sequence[Any]) -> ConstraintResult:
    return True if _is_float(value) else "Value must be a float"


def numeric(value: Any, args: Sequence[Any]) -> ConstraintResult:
    return True if _is_float(value) else "Value must be numeric"


def boolean(value: Any, args: Sequence[Any]) -> ConstraintResult:
    if isinstance(value, bool):
        return True
    if isinstance(value, str) and value.strip().lower() in _BOOL_TEXT:
        return True
    return "Value must be boolean"


def array(value: Any, args: Sequence[Any]) -> ConstraintResult:
    return True if isinstance(value, (list, tuple)) else "Value must be an array"


def object_(value: Any, args: Sequence[Any]) -> ConstraintResult:
    return True if isinstance(value, dict) else "Value must be an object"


def choice(value: Any, args: Sequence[Any]) -> ConstraintResult:
    options = [str(a) for a in args or ()]
    if str(value) in options:
        return True
    return f"Value must be one of: {', '.join(options)}"


def regex(value: Any, args: Sequence[Any]) -> ConstraintResult:
    if not args:
        return "A regex pattern is required"
    pattern = str(args[0])
    try:
        matched = re.search(pattern, str(value))
    except re.error as exc:
        return f"Invalid regular expression {pattern}: {exc}"
    if matched:
        return True
    return f"{value} does not match the regular expression {pattern}"


def email(value: Any, args: Sequence[Any]) -> ConstraintResult:
    if isinstance(value, str) and _EMAIL.match(value):
        return True
    return "Value is not a valid email address"


def url(value: Any, args: Sequence[Any]) -> ConstraintResult:
    if isinstance(value, str):
        parsed = urlparse(value)
        if parsed.scheme and parsed.netloc:
            return True
    return "Value is not a valid URL"


def ip(value: Any, args: Sequence[Any]) -> ConstraintResult:
    try:
        ipaddress.ip_address(str(value))
    except ValueError:
        return "Value is not a valid IP address"
    return True


def date(value: Any, args: Sequence[Any]) -> ConstraintResult:
    if isinstance(value, dt.date):
        return True
    if isinstance(value, str):
        try:
            dt.date.fromisoformat(value.strip())
            return True
        except ValueError:
            pass
        try:
            dt.datetime.fromisoformat(value.strip())
            return True
        except ValueError:
            pass
    return "Value is not a valid date"


def blank(value: Any, args: Sequence[Any]) -> ConstraintResult:
    if value is None or value == "" or value == [] or value == {}:
        return True
    return "Value must be blank"


def not_blank(value: Any, args: Sequence[Any]) -> ConstraintResult:
    if blank(value, args) is True:
        return "Value must not be blank"
    return True


DEFAULT_CONSTRAINTS: dict[str, Constraint] = {
    "string": string,
    "integer": integer,
    "int": integer,
    "float": float_,
    "numeric": numeric,
    "boolean": boolean,
    "bool": boolean,
    "array": array,
    "list": array,
    "object": object_,
    "dict": object_,
    "choice": choice,
    "enum": choice,
    "regex": regex,
    "email": email,
    "url": url,
    "ip": ip,
    "date": date,
    "blank": blank,
    "not_blank": not_blank,
}
