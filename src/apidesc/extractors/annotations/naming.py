from __future__ import annotations

import re

COMMAND_MARKER = "Command"

# marker plus the separator that follows it
_MARKER_SKIP = len(COMMAND_MARKER) + 1

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_SEPARATORS = re.compile(r"[\s\-]+")
_MODULE_MARKER = re.compile(r"(?:^|\.)(command)(?:\.|$)")


def snake_case(text: str) -> str:
    # GetUserList -> get_user_list, HTTPClient -> http_client
    s = _CAMEL_BOUNDARY.sub("_", (text or "").strip())
    s = _SEPARATORS.sub("_", s)
    return re.sub(r"_{2,}", "_", s).strip("_").lower()


def _marker_index(ident: str) -> int:
    idx = ident.find(COMMAND_MARKER)
    if idx >= 0:
        return idx
    # lowercase module paths only count as a whole "command" segment
    m = _MODULE_MARKER.search(ident)
    return m.start(1) if m else -1


def command_name_from_handler(identifier: str) -> str:
    """
    Derive a command name from a handler identifier.

    Everything up through the first "Command" marker and the separator after
    it is dropped, then each remaining segment is snake_cased:
      Guzzle\\Service\\Command\\Widget    -> widget
      acme.command.users.GetUserList    -> users.get_user_list

    "Command" is matched case-sensitively anywhere in the identifier; the
    lowercase form only counts as a whole path segment, so acme.commander.Foo
    keeps its name. Identifiers without the marker use their last segment.
    """
    ident = (identifier or "").strip().replace("\\", ".").replace(":", ".")

    idx = _marker_index(ident)
    if idx >= 0:
        rest = ident[idx + _MARKER_SKIP:]
    else:
        rest = ident.rsplit(".", 1)[-1]

    segments = [snake_case(seg) for seg in rest.split(".")]
    return ".".join(seg for seg in segments if seg)
