"""Generic thread-safe in-memory entity store."""

import copy
import threading
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from parcel_router.exceptions import DuplicateKeyError, EntityNotFoundError, NullArgumentError

T = TypeVar("T")


def _identity(value: str) -> str:
    return value


@dataclass(frozen=True)
class UniqueIndex(Generic[T]):
    """Secondary unique business key maintained alongside the primary map.

    Parameters
    ----------
    key : Callable[[T], str]
        Extracts the raw business key from an entity.
    normalize : Callable[[str], str]
        Applied to both stored keys and lookup values, e.g. ``str.casefold``
        for case-insensitive names.
    """

    key: Callable[[T], str]
    normalize: Callable[[str], str] = _identity

    def value_for(self, entity: T) -> str:
        return self.normalize(self.key(entity))


class EntityStore(Generic[T]):
    """Keyed collection safe under concurrent access.

    Every operation, including secondary index maintenance, runs inside one
    lock owned by this instance. Entities are stored by reference; a failed
    ``add`` or ``update`` leaves the primary map and every index untouched.

    Parameters
    ----------
    entity_id : Callable[[T], str]
        Extracts the identifier the store is keyed by.
    entity_name : str
        Used in error messages (``"Parcel"``, ``"Department"``...).
    indexes : dict[str, UniqueIndex[T]] | None
        Named unique secondary indices.
    """

    def __init__(
        self,
        entity_id: Callable[[T], str],
        entity_name: str = "Entity",
        indexes: dict[str, UniqueIndex[T]] | None = None,
    ) -> None:
        self._entity_id = entity_id
        self._entity_name = entity_name
        self._entities: dict[str, T] = {}
        self._indexes: dict[str, UniqueIndex[T]] = dict(indexes or {})
        # index name -> business key -> entity id, and the reverse per entity
        self._forward: dict[str, dict[str, str]] = {name: {} for name in self._indexes}
        self._reverse: dict[str, dict[str, str]] = {name: {} for name in self._indexes}
        self._lock = threading.Lock()

    def get(self, entity_id: str) -> T | None:
        with self._lock:
            return self._entities.get(entity_id)

    def get_all(self) -> list[T]:
        with self._lock:
            return list(self._entities.values())

    def exists(self, entity_id: str) -> bool:
        with self._lock:
            return entity_id in self._entities

    def count(self) -> int:
        with self._lock:
            return len(self._entities)

    def add(self, entity: T) -> T:
        if entity is None:
            raise NullArgumentError(f"{self._entity_name} cannot be null")
        entity_id = self._entity_id(entity)
        with self._lock:
            if entity_id in self._entities:
                raise DuplicateKeyError(f"{self._entity_name} with ID {entity_id} already exists")
            keys = self._index_keys(entity, entity_id)
            self._entities[entity_id] = entity
            self._write_index_keys(entity_id, keys)
            return entity

    def update(self, entity: T) -> T:
        """Replace the stored entity; last writer wins."""
        if entity is None:
            raise NullArgumentError(f"{self._entity_name} cannot be null")
        entity_id = self._entity_id(entity)
        with self._lock:
            if entity_id not in self._entities:
                raise EntityNotFoundError(f"{self._entity_name} with ID {entity_id} not found")
            keys = self._index_keys(entity, entity_id)
            self._entities[entity_id] = entity
            self._drop_index_keys(entity_id)
            self._write_index_keys(entity_id, keys)
            return entity

    def modify(self, entity_id: str, change: Callable[[T], None]) -> T:
        """Apply ``change`` to the stored entity in place, inside the lock.

        ``change`` first runs against a shallow copy; the stored entity is only
        changed once the copy passes every unique index. References held
        elsewhere keep pointing at the stored object.
        """
        with self._lock:
            entity = self._entities.get(entity_id)
            if entity is None:
                raise EntityNotFoundError(f"{self._entity_name} with ID {entity_id} not found")
            trial = copy.copy(entity)
            change(trial)
            keys = self._index_keys(trial, entity_id)
            change(entity)
            self._drop_index_keys(entity_id)
            self._write_index_keys(entity_id, keys)
            return entity

    def delete(self, entity_id: str) -> None:
        with self._lock:
            if entity_id not in self._entities:
                raise EntityNotFoundError(f"{self._entity_name} with ID {entity_id} not found")
            del self._entities[entity_id]
            self._drop_index_keys(entity_id)

    def get_by_key(self, index_name: str, value: str) -> T | None:
        """Look up an entity through a unique secondary index."""
        index = self._indexes[index_name]
        with self._lock:
            entity_id = self._forward[index_name].get(index.normalize(value))
            return self._entities.get(entity_id) if entity_id is not None else None

    def find(self, predicate: Callable[[T], bool]) -> list[T]:
        with self._lock:
            return [entity for entity in self._entities.values() if predicate(entity)]

    def find_first(self, predicate: Callable[[T], bool]) -> T | None:
        with self._lock:
            return next((e for e in self._entities.values() if predicate(e)), None)

    # Index helpers below expect the caller to hold self._lock.

    def _index_keys(self, entity: T, entity_id: str) -> dict[str, str]:
        keys: dict[str, str] = {}
        for name, index in self._indexes.items():
            value = index.value_for(entity)
            owner = self._forward[name].get(value)
            if owner is not None and owner != entity_id:
                raise DuplicateKeyError(
                    f"{self._entity_name} with {name} {index.key(entity)!r} already exists"
                )
            keys[name] = value
        return keys

    def _write_index_keys(self, entity_id: str, keys: dict[str, str]) -> None:
        for name, value in keys.items():
            self._forward[name][value] = entity_id
            self._reverse[name][entity_id] = value

    def _drop_index_keys(self, entity_id: str) -> None:
        for name in self._indexes:
            old = self._reverse[name].pop(entity_id, None)
            if old is not None and self._forward[name].get(old) == entity_id:
                del self._forward[name][old]
