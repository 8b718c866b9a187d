"""
universe_sets.registry
======================

Universe registries: the mapping from domain values to dense indices.

A registry has a two-phase lifecycle:

``open``
    Values are registered one at a time.  Each registration appends the
    value (and an optional label) at index ``size`` and returns a
    :class:`Handle` carrying that index.
``sealed``
    After :meth:`Registry.seal` no further registration is possible, the
    backing storage is trimmed to exactly ``size`` entries, and sets can be
    built over the universe.  Sealing is irreversible and happens once:
    a second ``seal`` is an error, not a no-op.

The split exists because a set's bit vector length is fixed when the set is
created and must equal the universe size; registration after sets exist
would silently invalidate their indexing.

Storage
-------
Values and labels are kept in two parallel lists whose length (the
*capacity*) may exceed ``size`` while the registry is open.  When full, the
capacity grows to ``max(min_capacity, growth_factor * capacity)`` (64 and 2
by default, see :mod:`universe_sets.config`) and existing entries are copied
over, so n registrations cost O(n) copying in total.  Indices are never
renumbered by growth.

Handles and universes
---------------------
``Registry``, ``Handle`` and :class:`~universe_sets.bitset.BitSet` are
generic over a *universe marker* type ``U`` that only exists for the type
checker::

    class Colors: ...

    colors: Registry[Colors, str] = declare("colors")
    red: Handle[Colors] = colors.register("red")

A ``Handle[Shapes]`` passed to ``colors`` is then a static type error.  Two
registries declared with the same marker cannot be told apart statically, so
every handle also carries the issuing registry's ``universe_id`` and every
lookup checks it at run time.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import (
    Any,
    Generic,
    Iterator,
    List,
    Optional,
    Tuple,
    TypeVar,
)

from .config import DEFAULT_CONFIG, RegistryConfig
from .errors import (
    IndexOutOfRangeError,
    SealedRegistryError,
    UniverseMismatchError,
    UnsealedRegistryError,
)

logger = logging.getLogger(__name__)


U = TypeVar("U")          # Universe marker (phantom)
E = TypeVar("E")          # Domain value type

_universe_ids = itertools.count(1)


# ===========================================================================
# HANDLE
# ===========================================================================

@dataclass(frozen=True, order=True)
class Handle(Generic[U]):
    """Opaque dense index of one registered value.

    A handle stores neither the value nor its label; look those up through
    the owning registry.  ``universe`` is the owner's ``universe_id``.
    """
    __slots__ = ("index", "universe")

    index: int
    universe: int

    def __int__(self) -> int:
        return self.index

    def __repr__(self) -> str:
        return f"Handle({self.index}, universe={self.universe})"


# ===========================================================================
# REGISTRY
# ===========================================================================

class Registry(Generic[U, E]):
    """Open-then-sealed registry of a finite universe.

    Parameters
    ----------
    tag : str
        Diagnostic name of the universe, used in errors and ``repr``.
    config : RegistryConfig, optional
        Growth policy; defaults to :data:`~universe_sets.config.DEFAULT_CONFIG`.
    """

    def __init__(self, tag: str, config: Optional[RegistryConfig] = None) -> None:
        self._tag = tag
        self._config = (config or DEFAULT_CONFIG).check()
        self._universe_id = next(_universe_ids)
        self._sealed = False
        self._values: List[Any] = []
        self._labels: List[Optional[str]] = []
        self._size = 0
        logger.debug("declared universe %r (id=%d)", tag, self._universe_id)

    # ── accessors ───────────────────────────────────────────────────────

    @property
    def tag(self) -> str:
        return self._tag

    @property
    def size(self) -> int:
        """Number of registered values (current count while open)."""
        return self._size

    @property
    def capacity(self) -> int:
        """Length of the backing storage; equals ``size`` once sealed."""
        return len(self._values)

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def universe_id(self) -> int:
        return self._universe_id

    @property
    def config(self) -> RegistryConfig:
        return self._config

    # ── registration ────────────────────────────────────────────────────

    def register(self, value: E, label: Optional[str] = None) -> Handle[U]:
        """Append *value* to the universe and return its handle.

        Raises
        ------
        SealedRegistryError
            If the registry is sealed.
        """
        if self._sealed:
            raise SealedRegistryError(self._tag, "register")

        index = self._size
        if index == len(self._values):
            self._grow(value, label)
        self._values[index] = value
        self._labels[index] = label
        self._size = index + 1
        return Handle(index, self._universe_id)

    element = register

    def _grow(self, value: E, label: Optional[str]) -> None:
        old = len(self._values)
        new = self._config.next_capacity(old)
        # slack is filled with the incoming entry; slots >= size are unreachable
        values: List[Any] = [value] * new
        labels: List[Optional[str]] = [label] * new
        values[:old] = self._values
        labels[:old] = self._labels
        self._values = values
        self._labels = labels
        logger.debug(
            "universe %r grew from %d to %d slots", self._tag, old, new
        )

    def seal(self) -> None:
        """Freeze the universe.

        Raises
        ------
        SealedRegistryError
            If the registry is already sealed.
        """
        if self._sealed:
            raise SealedRegistryError(self._tag, "seal")
        slack = len(self._values) - self._size
        del self._values[self._size:]
        del self._labels[self._size:]
        self._sealed = True
        logger.debug(
            "sealed universe %r with %d members (trimmed %d slots)",
            self._tag, self._size, slack,
        )

    def require_sealed(self) -> None:
        """Raise :class:`UnsealedRegistryError` if the registry is open."""
        if not self._sealed:
            raise UnsealedRegistryError(self._tag)

    # ── lookup ──────────────────────────────────────────────────────────

    def check_handle(self, handle: Handle[U]) -> int:
        """Validate *handle* against this registry and return its index."""
        if handle.universe != self._universe_id:
            raise UniverseMismatchError(
                self._tag, f"<universe #{handle.universe}>"
            )
        index = handle.index
        if not 0 <= index < self._size:
            raise IndexOutOfRangeError(self._tag, index, self._size)
        return index

    def lookup_value(self, handle: Handle[U]) -> E:
        return self._values[self.check_handle(handle)]

    def lookup_label(self, handle: Handle[U]) -> Optional[str]:
        return self._labels[self.check_handle(handle)]

    def value_at(self, index: int) -> E:
        """Value at a raw *index* (no handle)."""
        if not 0 <= index < self._size:
            raise IndexOutOfRangeError(self._tag, index, self._size)
        return self._values[index]

    # ── handle <-> int ──────────────────────────────────────────────────

    def handle_of_int(self, index: int) -> Handle[U]:
        if not 0 <= index < self._size:
            raise IndexOutOfRangeError(self._tag, index, self._size)
        return Handle(index, self._universe_id)

    def int_of_handle(self, handle: Handle[U]) -> int:
        return self.check_handle(handle)

    # ── enumeration ─────────────────────────────────────────────────────

    def handles(self) -> Iterator[Handle[U]]:
        uid = self._universe_id
        return (Handle(i, uid) for i in range(self._size))

    def items(self) -> Iterator[Tuple[Handle[U], E, Optional[str]]]:
        """``(handle, value, label)`` triples in registration order."""
        uid = self._universe_id
        for i in range(self._size):
            yield Handle(i, uid), self._values[i], self._labels[i]

    def __iter__(self) -> Iterator[E]:
        return iter(self._values[: self._size])

    def __len__(self) -> int:
        return self._size

    # A universe has one identity; copies are the registry itself.
    def __copy__(self) -> "Registry[U, E]":
        return self

    def __deepcopy__(self, memo: dict) -> "Registry[U, E]":
        return self

    def __repr__(self) -> str:
        phase = "sealed" if self._sealed else "open"
        return f"<Registry {self._tag!r} size={self._size} {phase}>"


def declare(tag: str, config: Optional[RegistryConfig] = None) -> Registry[Any, Any]:
    """Create an empty, open registry named *tag*."""
    return Registry(tag, config)
