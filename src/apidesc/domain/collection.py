from __future__ import annotations

import re
from typing import Any, Iterator, Mapping, Optional


_PLACEHOLDER = re.compile(r"\{\{\s*([A-Za-z_\-.0-9]+)\s*\}\}")


class Collection:
    """Mutable key/value holder for the arguments of a single command call."""

    def __init__(self, data: Optional[Mapping[str, Any]] = None) -> None:
        self._data: dict[str, Any] = dict(data or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data.keys())

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)

    def inject(self, text: str) -> str:
        """
        Replace {{ key }} placeholders with the stored values.
        Missing keys render as an empty string.
        """
        if "{{" not in text:
            return text
        return _PLACEHOLDER.sub(self._placeholder_value, text)

    def _placeholder_value(self, match: re.Match) -> str:
        value = self.get(match.group(1))
        return "" if value is None else str(value)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __repr__(self) -> str:
        return f"Collection({self._data!r})"
