# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Key-value storage with unit-of-work staging.

The ledger treats its backing store as a set of namespaced maps. Every
mutating operation runs inside a ``UnitOfWork``: writes are staged in an
overlay and only reach the store when the whole operation succeeds.

Usage:
    store = MemoryStore()
    with UnitOfWork(store) as txn:
        txn.put("verifications", 0, record)
    # committed here; an exception inside the block discards the overlay
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Hashable, Iterator
from typing import Any, Protocol, runtime_checkable

from .exceptions import StoreError

logger = logging.getLogger(__name__)

# Marks a key deleted inside an uncommitted overlay
_TOMBSTONE = object()


class KeyValueStore(ABC):
    """Abstract namespaced map storage."""

    @abstractmethod
    def get(self, namespace: str, key: Hashable, default: Any = None) -> Any:
        """Return the value stored under ``key`` or ``default``."""

    @abstractmethod
    def put(self, namespace: str, key: Hashable, value: Any) -> None:
        """Store ``value`` under ``key``, overwriting any previous value."""

    @abstractmethod
    def delete(self, namespace: str, key: Hashable) -> bool:
        """Remove ``key``; returns False when it was absent."""

    @abstractmethod
    def keys(self, namespace: str) -> list[Hashable]:
        """List keys of a namespace in insertion order."""

    def contains(self, namespace: str, key: Hashable) -> bool:
        return self.get(namespace, key, _TOMBSTONE) is not _TOMBSTONE

    def items(self, namespace: str) -> Iterator[tuple[Hashable, Any]]:
        for key in self.keys(namespace):
            yield key, self.get(namespace, key)


class MemoryStore(KeyValueStore):
    """In-memory store. Not persistent."""

    def __init__(self) -> None:
        self._data: dict[str, dict[Hashable, Any]] = {}

    def get(self, namespace: str, key: Hashable, default: Any = None) -> Any:
        return self._data.get(namespace, {}).get(key, default)

    def put(self, namespace: str, key: Hashable, value: Any) -> None:
        self._data.setdefault(namespace, {})[key] = value

    def delete(self, namespace: str, key: Hashable) -> bool:
        bucket = self._data.get(namespace)
        if bucket is None or key not in bucket:
            return False
        del bucket[key]
        return True

    def keys(self, namespace: str) -> list[Hashable]:
        return list(self._data.get(namespace, {}).keys())


@runtime_checkable
class Transactional(Protocol):
    """A participant whose side effects can be staged alongside store writes."""

    def begin(self) -> None: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


class UnitOfWork(KeyValueStore):
    """Staging overlay over a ``KeyValueStore``.

    Reads see staged writes first. ``commit()`` applies the overlay to the
    underlying store in write order; ``rollback()`` drops it. Enlisted
    ``Transactional`` participants are committed or rolled back with it.
    """

    def __init__(self, store: KeyValueStore, participants: list[Any] | None = None):
        self._store = store
        self._overlay: dict[tuple[str, Hashable], Any] = {}
        self._closed = False
        self._participants: list[Transactional] = []
        for participant in participants or []:
            self.enlist(participant)

    @property
    def closed(self) -> bool:
        return self._closed

    def enlist(self, participant: Any) -> None:
        """Enlist a collaborator if it supports staging; others are ignored."""
        if isinstance(participant, Transactional) and participant not in self._participants:
            participant.begin()
            self._participants.append(participant)

    def _check_open(self) -> None:
        if self._closed:
            raise StoreError("Unit of work is already closed")

    def get(self, namespace: str, key: Hashable, default: Any = None) -> Any:
        self._check_open()
        if (namespace, key) in self._overlay:
            staged = self._overlay[(namespace, key)]
            return default if staged is _TOMBSTONE else staged
        return self._store.get(namespace, key, default)

    def put(self, namespace: str, key: Hashable, value: Any) -> None:
        self._check_open()
        self._overlay[(namespace, key)] = value

    def delete(self, namespace: str, key: Hashable) -> bool:
        self._check_open()
        existed = self.contains(namespace, key)
        self._overlay[(namespace, key)] = _TOMBSTONE
        return existed

    def keys(self, namespace: str) -> list[Hashable]:
        self._check_open()
        result = [k for k in self._store.keys(namespace) if self._overlay.get((namespace, k)) is not _TOMBSTONE]
        for ns, key in self._overlay:
            if ns == namespace and key not in result and self._overlay[(ns, key)] is not _TOMBSTONE:
                result.append(key)
        return result

    @property
    def pending_writes(self) -> int:
        return len(self._overlay)

    def commit(self) -> None:
        self._check_open()
        for (namespace, key), value in self._overlay.items():
            if value is _TOMBSTONE:
                self._store.delete(namespace, key)
            else:
                self._store.put(namespace, key, value)
        for participant in self._participants:
            participant.commit()
        logger.debug(f"Committed {len(self._overlay)} staged writes")
        self._overlay.clear()
        self._closed = True

    def rollback(self) -> None:
        if self._closed:
            return
        for participant in self._participants:
            participant.rollback()
        logger.debug(f"Discarded {len(self._overlay)} staged writes")
        self._overlay.clear()
        self._closed = True

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.commit()
        else:
            self.rollback()
