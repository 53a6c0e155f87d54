"""Read-only indexed store abstraction and an in-memory implementation."""

import threading
from collections.abc import Callable, Iterable
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IndexedStore(Protocol):
    """Keyed and listable cache of kubernetes objects.

    Namespaced objects are indexed by "<namespace>/<name>", cluster scoped objects
    by their bare name. Implementations raise an exception when the lookup itself
    fails; a missing key is not a failure.
    """

    def get_by_key(self, key: str) -> tuple[Any, bool]:
        """Return the object stored with the given key and whether it exists."""

    def list(self) -> list[Any]:
        """Return all the stored objects."""


def namespaced_key(namespace: str, name: str) -> str:
    """Build the store key of a namespaced object, always "<namespace>/<name>"."""
    return f"{namespace}/{name}"


def meta_namespace_key(obj: Any) -> str:
    """Build the store key of a kubernetes object from its metadata.

    Raises:
        ValueError: if the object has no metadata or no name.

    """
    metadata = getattr(obj, "metadata", None)
    if metadata is None or not metadata.name:
        raise ValueError(f"object has no name in its metadata: {obj!r}")
    if not metadata.namespace:
        return metadata.name
    return namespaced_key(metadata.namespace, metadata.name)


class InMemoryStore:
    """Thread safe dict backed implementation of IndexedStore."""

    def __init__(
        self,
        objects: Iterable[Any] | None = None,
        *,
        key_func: Callable[[Any], str] = meta_namespace_key,
    ) -> None:
        self.key_func = key_func
        self._items: dict[str, Any] = {}
        self._lock = threading.Lock()
        for obj in objects or []:
            self.add(obj)

    def add(self, obj: Any) -> None:
        """Insert or replace an object."""
        key = self.key_func(obj)
        with self._lock:
            self._items[key] = obj

    def update(self, obj: Any) -> None:
        """Insert or replace an object."""
        self.add(obj)

    def delete(self, obj: Any) -> None:
        """Remove an object. Deleting a missing object is a no-op."""
        key = self.key_func(obj)
        with self._lock:
            self._items.pop(key, None)

    def replace(self, objects: Iterable[Any]) -> None:
        """Replace the whole content of the store."""
        items = {self.key_func(obj): obj for obj in objects}
        with self._lock:
            self._items = items

    def get(self, obj: Any) -> tuple[Any, bool]:
        """Return the stored version of the given object."""
        return self.get_by_key(self.key_func(obj))

    def get_by_key(self, key: str) -> tuple[Any, bool]:
        with self._lock:
            if key in self._items:
                return self._items[key], True
        return None, False

    def list_keys(self) -> list[str]:
        """Return the keys of all the stored objects."""
        with self._lock:
            return list(self._items.keys())

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    # Keep last: later annotations in the class body would see this method as list.
    def list(self) -> list[Any]:
        with self._lock:
            return list(self._items.values())
