"""
PrettyBytes Collections
"""

# Standard library -----------------------------------------------------------------------------------------------------
from collections.abc import Mapping, Iterable, Iterator, KeysView, ValuesView, ItemsView
from typing import Any, TypeVar, Generic

# Local ----------------------------------------------------------------------------------------------------------------
from .tools import fmt_value

# Classes --------------------------------------------------------------------------------------------------------------

K = TypeVar("K")
V = TypeVar("V")


class FrozenBiMap(Mapping[K, V], Generic[K, V]):
    """
    An immutable bidirectional map with Mapping-compatible API on the forward direction.

    - Forward direction (key -> value) implements the stdlib Mapping protocol.
      Membership (x in bimap) applies to KEYS only, like dict.
    - Reverse direction (value -> key) available via get_key(value) and has_value(value).
    - Keys and values must both be unique and hashable; duplicates are rejected at construction.
    - Contents are fixed once built, so instances are safe to share as module constants.
    """

    __slots__ = ("_forward_map", "_backward_map")

    def __init__(self, initial: Mapping[K, V] | Iterable[tuple[K, V]] = ()) -> None:
        forward: dict[K, V] = {}
        backward: dict[V, K] = {}
        pairs = initial.items() if isinstance(initial, Mapping) else initial
        for key, value in pairs:
            if key in forward:
                raise ValueError(f"Key {fmt_value(key)} already exists (maps to {forward[key]!r})")
            if value in backward:
                raise ValueError(f"Value {fmt_value(value)} already exists (mapped from {backward[value]!r})")
            forward[key] = value
            backward[value] = key
        object.__setattr__(self, "_forward_map", forward)
        object.__setattr__(self, "_backward_map", backward)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    # ----- Mapping required methods -----

    def __getitem__(self, key: K) -> V:
        return self._forward_map[key]

    def __iter__(self) -> Iterator[K]:
        return iter(self._forward_map)

    def __len__(self) -> int:
        return len(self._forward_map)

    def keys(self) -> KeysView[K]:
        return self._forward_map.keys()

    def values(self) -> ValuesView[V]:
        return self._forward_map.values()

    def items(self) -> ItemsView[K, V]:
        return self._forward_map.items()

    # ----- Reverse lookups -----

    def get_key(self, value: V) -> K:
        """Lookup key by value, raises KeyError if absent."""
        return self._backward_map[value]

    def has_value(self, value: V) -> bool:
        """True if value exists in reverse map."""
        return value in self._backward_map

    # ----- Equality and representation -----

    def __repr__(self) -> str:
        return f"FrozenBiMap({self._forward_map!r})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Mapping):
            return dict(self._forward_map.items()) == dict(other.items())
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self._forward_map.items()))
