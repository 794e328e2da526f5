import datetime as dt
from decimal import Decimal

import pytest

from apidesc.settings import ApidescSettings
from apidesc.validation.inspector import Inspector


@pytest.mark.parametrize(
    "name,value",
    [
        ("string", "x"),
        ("integer", 5),
        ("integer", "-12"),
        ("float", "1.5"),
        ("numeric", 3),
        ("boolean", "true"),
        ("array", [1, 2]),
        ("object", {"a": 1}),
        ("email", "dev@example.com"),
        ("url", "https://example.com/x"),
        ("ip", "10.0.0.1"),
        ("date", "2024-02-29"),
        ("date", dt.date(2024, 1, 1)),
        ("blank", ""),
        ("not_blank", "x"),
    ],
)
def test_builtin_constraints_accept(name, value):
    assert Inspector().validate_constraint(name, value) is True


@pytest.mark.parametrize(
    "name,value",
    [
        ("string", 1),
        ("integer", True),
        ("integer", "1.5"),
        ("float", "abc"),
        ("boolean", "maybe"),
        ("array", "a,b"),
        ("email", "nope"),
        ("url", "example.com"),
        ("ip", "999.1.1.1"),
        ("date", "2024-13-01"),
        ("not_blank", ""),
    ],
)
def test_builtin_constraints_reject(name, value):
    result = Inspector().validate_constraint(name, value)
    assert isinstance(result, str) and result


def test_choice_and_regex_use_args():
    i = Inspector()
    assert i.validate_constraint("choice", "b", ["a", "b"]) is True
    assert "one of: a, b" in i.validate_constraint("choice", "c", ["a", "b"])
    assert i.validate_constraint("regex", "abc123", [r"^[a-z]+\d+$"]) is True
    assert i.validate_constraint("regex", "123", [r"^[a-z]+$"]) is not True


def test_dotted_name_checks_instance():
    i = Inspector()
    assert i.validate_constraint("decimal.Decimal", Decimal("1.0")) is True
    assert i.validate_constraint("decimal.Decimal", 1.0) == "Value must be an instance of decimal.Decimal"


def test_unknown_constraint_returns_message():
    assert Inspector().validate_constraint("widget", 1) == "widget is not a registered constraint"
    assert Inspector().validate_constraint("no.such.Type", 1) == "no.such.Type is not a registered constraint"


def test_register_custom_constraint():
    i = Inspector()
    i.register_constraint("even", lambda v, args: True if int(v) % 2 == 0 else "Value must be even")
    assert i.has_constraint("even")
    assert i.validate_constraint("even", 4) is True
    assert i.validate_constraint("even", 3) == "Value must be even"


def test_from_settings(monkeypatch):
    monkeypatch.setenv("APIDESC_TYPE_VALIDATION", "false")
    assert Inspector.from_settings(ApidescSettings()).type_validation is False


def test_invalid_regex_returns_message():
    result = Inspector().validate_constraint("regex", "x", ["[a-z"])
    assert isinstance(result, str)
    assert result.startswith("Invalid regular expression [a-z")
