from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Protocol

DEFAULT_MARKER = "@cmd"

_ATTR = re.compile(r'([A-Za-z0-9_]+)="(.+)')


@dataclass(frozen=True)
class ParamAnnotation:
    name: str
    attrs: dict[str, str] = field(default_factory=dict)
    line: int = 0


class AnnotationParser(Protocol):
    def parse(self, text: str) -> list[ParamAnnotation]: ...


class RegexAnnotationParser:
    """
    Line-oriented parser for parameter annotations in docstrings:

      @cmd argument_name attr="value" other="value"

    Attribute values cannot contain `" ` (quote + space); there is no escaping.
    """

    def __init__(self, marker: str = DEFAULT_MARKER) -> None:
        self.marker = marker
        self._pattern = re.compile(re.escape(marker) + r'\s+([A-Za-z0-9_\-.]+)[ \t]*([A-Za-z0-9_]+=".*)?')

    def parse(self, text: str) -> list[ParamAnnotation]:
        if not text:
            return []

        out: list[ParamAnnotation] = []
        for m in self._pattern.finditer(text):
            line = text.count("\n", 0, m.start()) + 1
            out.append(ParamAnnotation(name=m.group(1), attrs=_parse_attrs(m.group(2) or ""), line=line))
        return out


def _parse_attrs(text: str) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for part in text.rstrip().split('" '):
        m = _ATTR.search(part)
        if m is None:
            continue
        value = m.group(2)
        # only the last chunk keeps its closing quote
        if value.endswith('"'):
            value = value[:-1]
        attrs[m.group(1)] = value
    return attrs


def collect_params(annotations: Iterable[ParamAnnotation]) -> dict[str, dict[str, str]]:
    """One parameter record per argument name; a repeated name replaces the earlier one."""
    params: dict[str, dict[str, str]] = {}
    for a in annotations:
        params.pop(a.name, None)
        params[a.name] = dict(a.attrs)
    return params
