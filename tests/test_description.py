import json
from pathlib import Path
import textwrap

import pytest

from apidesc.domain.collection import Collection
from apidesc.domain.description import ServiceDescription
from apidesc.domain.errors import CommandValidationError, UnknownCommandError
from apidesc.domain.models import CommandSpec
from apidesc.registry.cache import CommandCache
from apidesc.validation.inspector import Inspector


DATA = {
    "name": "users",
    "commands": {
        "get_user": {
            "method": "GET",
            "uri": "/users/{id}",
            "params": {"id": {"required": True, "type": "integer"}},
        },
        "ping": {"name": "health", "method": "GET", "uri": "/ping"},
    },
}


class DeleteUser:
    """@cmd id required="true\""""


def write(p: Path, s: str) -> None:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(textwrap.dedent(s), encoding="utf-8")


def test_from_dict_names_commands_from_keys():
    d = ServiceDescription.from_dict(DATA)

    assert d.name == "users"
    assert [c.name for c in d.commands] == ["get_user", "health"]
    assert d.has_command("get_user")
    assert not d.has_command("ping")
    assert d.get_command("get_user").method == "GET"


def test_get_unknown_command_raises():
    with pytest.raises(UnknownCommandError):
        ServiceDescription.from_dict(DATA).get_command("nope")


def test_duplicate_command_rejected():
    d = ServiceDescription([CommandSpec(name="a")])
    with pytest.raises(ValueError):
        d.add_command(CommandSpec(name="a"))


def test_validate_uses_description_inspector():
    strict = ServiceDescription.from_dict(DATA)
    with pytest.raises(CommandValidationError):
        strict.validate("get_user", Collection({"id": "abc"}))

    lax = ServiceDescription.from_dict(DATA, inspector=Inspector(type_validation=False))
    lax.validate("get_user", Collection({"id": "abc"}))


def test_from_json_file(tmp_path: Path):
    path = tmp_path / "desc.json"
    path.write_text(json.dumps(DATA), encoding="utf-8")

    d = ServiceDescription.from_file(path)
    assert len(d) == 2
    assert d.get_command("get_user").get_param("id").required is True


def test_from_yaml_file(tmp_path: Path):
    path = tmp_path / "desc.yaml"
    write(
        path,
        """
        name: users
        commands:
          list_users:
            method: GET
            uri: /users
            params:
              limit:
                type: integer
                default: 25
              q:
        """,
    )

    d = ServiceDescription.from_file(path)
    c = d.get_command("list_users")
    assert c.get_param("limit").default == 25
    assert c.get_param("q").name == "q"


def test_unsupported_extension(tmp_path: Path):
    path = tmp_path / "desc.txt"
    path.write_text("{}", encoding="utf-8")
    with pytest.raises(ValueError):
        ServiceDescription.from_file(path)


def test_add_handler_uses_cache():
    cache = CommandCache()
    d = ServiceDescription()
    command = d.add_handler(DeleteUser, cache)

    assert d.get_command("delete_user") is command
    assert cache.get(command.handler_class) is command


def test_to_dict_reloads():
    d = ServiceDescription.from_dict(DATA)
    again = ServiceDescription.from_dict(json.loads(json.dumps(d.to_dict())))
    assert [c for c in again.commands] == d.commands
