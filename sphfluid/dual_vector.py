"""A growable sequence of records stored either as records or as per-field columns."""

from __future__ import annotations

import copy
import dataclasses
from enum import Enum
from typing import Any, Iterable, Iterator


class Layout(Enum):
    """Memory layout of a :class:`DualVector`."""

    AOS = "aos"
    SOA = "soa"


def _record_fields(record_type: type) -> tuple[str, ...]:
    if not (isinstance(record_type, type) and dataclasses.is_dataclass(record_type)):
        raise TypeError(f"record type must be a dataclass, got {record_type!r}")
    names = tuple(f.name for f in dataclasses.fields(record_type))
    if not names:
        raise TypeError(f"record type {record_type.__name__} has no fields")
    return names


class Proxy:
    """A view of one element of a :class:`DualVector`.

    Reading an attribute returns the stored field value; assigning one writes
    it back into the container, whatever its layout.
    """

    __slots__ = ("_vector", "_index")

    def __init__(self, vector: DualVector, index: int) -> None:
        object.__setattr__(self, "_vector", vector)
        object.__setattr__(self, "_index", index)

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails; the slots themselves never get here
        # once set, so guard against recursion on a half-built proxy.
        if name in Proxy.__slots__:
            raise AttributeError(name)
        return self._vector._get_field(self._index, name)

    def __setattr__(self, name: str, value: Any) -> None:
        self._vector._set_field(self._index, name, value)

    def load(self) -> Any:
        """A copy of the element as a record."""
        vector = self._vector
        return vector.record_type(
            **{name: copy.copy(vector._get_field(self._index, name)) for name in vector.field_names}
        )

    def store(self, value: Any) -> Proxy:
        """Overwrite every field of the element with those of ``value``."""
        vector = self._vector
        if not isinstance(value, vector.record_type):
            raise TypeError(
                f"expected {vector.record_type.__name__}, got {type(value).__name__}"
            )
        for name in vector.field_names:
            vector._set_field(self._index, name, copy.copy(getattr(value, name)))
        return self

    def __repr__(self) -> str:
        return f"Proxy({self.load()!r})"


class DualVector:
    """Sequence of dataclass records kept as a list of records or as one list per field."""

    def __init__(
        self, record_type: type, items: Iterable[Any] = (), layout: Layout = Layout.AOS
    ) -> None:
        self.record_type = record_type
        self.field_names = _record_fields(record_type)
        self.layout = Layout(layout)
        self._records: list[Any] = []
        self._columns: dict[str, list[Any]] = {name: [] for name in self.field_names}
        for item in items:
            self.append(item)

    def _copied_fields(self, item: Any) -> dict[str, Any]:
        if isinstance(item, Proxy):
            if item._vector.record_type is not self.record_type:
                raise TypeError("proxy refers to a different record type")
            source = item._vector
            return {
                name: copy.copy(source._get_field(item._index, name))
                for name in self.field_names
            }
        if isinstance(item, self.record_type):
            return {name: copy.copy(getattr(item, name)) for name in self.field_names}
        raise TypeError(
            f"expected {self.record_type.__name__} or a proxy of it, got {type(item).__name__}"
        )

    def append(self, item: Any) -> None:
        """Append a copy of a record, or of the element a proxy refers to."""
        values = self._copied_fields(item)
        if self.layout is Layout.AOS:
            self._records.append(self.record_type(**values))
        else:
            for name, value in values.items():
                self._columns[name].append(value)

    def _get_field(self, index: int, name: str) -> Any:
        if name not in self._columns:
            raise AttributeError(f"{self.record_type.__name__} has no member {name!r}")
        if self.layout is Layout.AOS:
            return getattr(self._records[index], name)
        return self._columns[name][index]

    def _set_field(self, index: int, name: str, value: Any) -> None:
        if name not in self._columns:
            raise AttributeError(f"{self.record_type.__name__} has no member {name!r}")
        if self.layout is Layout.AOS:
            setattr(self._records[index], name, value)
        else:
            self._columns[name][index] = value

    def _normalize(self, index: int) -> int:
        size = len(self)
        if index < 0:
            index += size
        if not 0 <= index < size:
            raise IndexError("DualVector index out of range")
        return index

    def __getitem__(self, index: int) -> Proxy:
        return Proxy(self, self._normalize(index))

    def front(self) -> Proxy:
        """Proxy of the first element."""
        return self[0]

    def back(self) -> Proxy:
        """Proxy of the last element."""
        return self[-1]

    def __len__(self) -> int:
        if self.layout is Layout.AOS:
            return len(self._records)
        return len(self._columns[self.field_names[0]])

    def __iter__(self) -> Iterator[Proxy]:
        for index in range(len(self)):
            yield Proxy(self, index)

    def _snapshot(self) -> list[tuple[Any, ...]]:
        return [
            tuple(self._get_field(index, name) for name in self.field_names)
            for index in range(len(self))
        ]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DualVector):
            return NotImplemented
        if other.record_type is not self.record_type:
            return False
        return self._snapshot() == other._snapshot()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        records = [proxy.load() for proxy in self]
        return f"DualVector({self.record_type.__name__}, {records!r}, layout={self.layout})"