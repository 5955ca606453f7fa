"""Case-insensitive mapping used for variables, replacements and contexts.

Keys are compared with ``str.casefold`` on every read and write. The
original spelling of the first write is kept for iteration.
"""

from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from typing import Any


class CaseInsensitiveDict(MutableMapping):
    """A dict whose string keys match regardless of case."""

    def __init__(self, data: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None, **kwargs: Any):
        self._store: dict[str, tuple[str, Any]] = {}
        if data is not None:
            self.update(data)
        if kwargs:
            self.update(kwargs)

    @staticmethod
    def _fold(key: str) -> str:
        return key.casefold()

    def __setitem__(self, key: str, value: Any) -> None:
        folded = self._fold(key)
        existing = self._store.get(folded)
        original = existing[0] if existing else key
        self._store[folded] = (original, value)

    def __getitem__(self, key: str) -> Any:
        return self._store[self._fold(key)][1]

    def __delitem__(self, key: str) -> None:
        del self._store[self._fold(key)]

    def __iter__(self) -> Iterator[str]:
        return (original for original, _ in self._store.values())

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return self._fold(key) in self._store

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Mapping):
            other = CaseInsensitiveDict(other)
        else:
            return NotImplemented
        return {k: v for k, (_, v) in self._store.items()} == {
            k: v for k, (_, v) in other._store.items()
        }

    def copy(self) -> "CaseInsensitiveDict":
        return CaseInsensitiveDict(self.items())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self.items())!r})"
