"""
universe_sets.bitset
====================

Sets over a sealed universe, backed by a :class:`~universe_sets.bitv.BitVector`.

A :class:`BitSet` holds one bit per member of its registry: bit ``i`` is set
iff the value registered at index ``i`` belongs to the set.  The registry
reference is fixed at construction, and every binary operation requires both
operands to come from the *same* registry instance (identity, not equal size
or content); anything else raises :class:`UniverseMismatchError`.

Mutation comes in two flavours:

Imperative
    :meth:`BitSet.set_bit` / :meth:`BitSet.get_bit` modify or read the set in
    place in O(1).
Persistent
    :meth:`BitSet.add` / :meth:`BitSet.remove` always copy the bits and
    modify the copy, leaving the receiver unchanged.  This costs an O(n)
    copy per call; callers that need amortized in-place updates use the
    imperative operations.

The boolean algebra (:meth:`union`, :meth:`inter`, :meth:`diff`,
:meth:`complement`) always returns a new set and never mutates an operand,
so a set that is no longer imperatively mutated may be shared by readers.

Traversal (:meth:`iterate`, :meth:`fold`, ``iter(s)``) visits members in
ascending index order, i.e. registration order, and hands out the domain
values looked up in the registry.

Usage example
-------------
::

    from universe_sets import declare, create

    letters = declare("letters")
    a, b, c = (letters.register(x) for x in "ABC")
    letters.seal()

    s = create(letters, False).add(b)       # {B}
    t = s | create(letters, False).add(c)   # {B, C}
    assert t.elements() == ["B", "C"]
    assert (~s).cardinality() == 2
"""

from __future__ import annotations

from typing import (
    Any,
    Callable,
    Generic,
    Iterable,
    Iterator,
    List,
    TypeVar,
)

from .bitv import BitVector
from .errors import UniverseMismatchError
from .registry import Handle, Registry

U = TypeVar("U")
E = TypeVar("E")
A = TypeVar("A")          # fold accumulator


class BitSet(Generic[U, E]):
    """A set of members of one sealed universe.

    Build sets with :meth:`create` (or the module-level :func:`create`).
    The constructor also accepts a raw vector, which must have exactly one
    bit per member of a sealed registry.
    """

    __slots__ = ("_registry", "_bits")

    def __init__(self, registry: Registry[U, E], bits: BitVector) -> None:
        """Wrap *bits* as a set over *registry*.

        Raises
        ------
        UnsealedRegistryError
            If *registry* is still open.
        UniverseMismatchError
            If ``len(bits)`` differs from the universe size.
        """
        registry.require_sealed()
        if bits.length != registry.size:
            raise UniverseMismatchError(
                f"{registry.tag} ({registry.size} members)",
                f"<{bits.length}-bit vector>",
            )
        self._registry = registry
        self._bits = bits

    # ── construction ────────────────────────────────────────────────────

    @classmethod
    def create(cls, registry: Registry[U, E], initial: bool = False) -> "BitSet[U, E]":
        """A set with every member present (``initial=True``) or none."""
        return cls(registry, BitVector(registry.size, initial))

    @classmethod
    def of(cls, registry: Registry[U, E], handles: Iterable[Handle[U]]) -> "BitSet[U, E]":
        """A set containing exactly *handles*."""
        s = cls.create(registry, False)
        for h in handles:
            s.set_bit(h, True)
        return s

    def copy(self) -> "BitSet[U, E]":
        return BitSet(self._registry, self._bits.copy())

    __copy__ = copy

    def __deepcopy__(self, memo: dict) -> "BitSet[U, E]":
        return self.copy()

    def _derive(self, bits: BitVector) -> "BitSet[U, E]":
        return BitSet(self._registry, bits)

    # ── accessors ───────────────────────────────────────────────────────

    @property
    def registry(self) -> Registry[U, E]:
        return self._registry

    @property
    def tag(self) -> str:
        return self._registry.tag

    @property
    def length(self) -> int:
        """Size of the universe (not of the set)."""
        return self._bits.length

    @property
    def bits(self) -> BitVector:
        return self._bits

    def _same_universe(self, other: "BitSet[U, E]") -> None:
        if other._registry is not self._registry:
            raise UniverseMismatchError(self._registry.tag, other._registry.tag)

    # ── imperative ──────────────────────────────────────────────────────

    def set_bit(self, handle: Handle[U], value: bool) -> None:
        self._bits.set(self._registry.check_handle(handle), value)

    def get_bit(self, handle: Handle[U]) -> bool:
        return self._bits.get(self._registry.check_handle(handle))

    # ── persistent ──────────────────────────────────────────────────────

    def add(self, handle: Handle[U]) -> "BitSet[U, E]":
        index = self._registry.check_handle(handle)
        bits = self._bits.copy()
        bits.set(index, True)
        return self._derive(bits)

    def remove(self, handle: Handle[U]) -> "BitSet[U, E]":
        index = self._registry.check_handle(handle)
        bits = self._bits.copy()
        bits.set(index, False)
        return self._derive(bits)

    def mem(self, handle: Handle[U]) -> bool:
        return self.get_bit(handle)

    # ── boolean algebra ─────────────────────────────────────────────────

    def union(self, other: "BitSet[U, E]") -> "BitSet[U, E]":
        self._same_universe(other)
        return self._derive(self._bits.bw_or(other._bits))

    def inter(self, other: "BitSet[U, E]") -> "BitSet[U, E]":
        self._same_universe(other)
        return self._derive(self._bits.bw_and(other._bits))

    def diff(self, other: "BitSet[U, E]") -> "BitSet[U, E]":
        """Members of ``self`` that are not in *other*."""
        self._same_universe(other)
        return self._derive(self._bits.bw_and_not(other._bits))

    def complement(self) -> "BitSet[U, E]":
        return self._derive(self._bits.bw_not())

    intersection = inter
    difference = diff

    # ── predicates ──────────────────────────────────────────────────────

    def is_empty(self) -> bool:
        return self._bits.all_zeros()

    def equal(self, other: "BitSet[U, E]") -> bool:
        self._same_universe(other)
        return self._bits == other._bits

    def compare(self, other: "BitSet[U, E]") -> int:
        """Total order over bit patterns (-1, 0 or 1), for sort keys."""
        self._same_universe(other)
        return self._bits.compare(other._bits)

    def subset(self, other: "BitSet[U, E]") -> bool:
        """Every member of ``self`` is a member of *other*."""
        return self.inter(other).equal(self)

    # ── traversal ───────────────────────────────────────────────────────

    def handles(self) -> Iterator[Handle[U]]:
        uid = self._registry.universe_id
        return (Handle(i, uid) for i in self._bits.iter_true())

    def iterate(self, visit: Callable[[E], Any]) -> None:
        value_at = self._registry.value_at
        for i in self._bits.iter_true():
            visit(value_at(i))

    iter = iterate

    def fold(self, combine: Callable[[E, A], A], initial: A) -> A:
        acc = initial
        value_at = self._registry.value_at
        for i in self._bits.iter_true():
            acc = combine(value_at(i), acc)
        return acc

    def elements(self) -> List[E]:
        """Member values in registration order."""
        value_at = self._registry.value_at
        return [value_at(i) for i in self._bits.iter_true()]

    def cardinality(self) -> int:
        return self._bits.pop()

    count = cardinality

    # ── Python protocols ────────────────────────────────────────────────

    def __iter__(self) -> Iterator[E]:
        value_at = self._registry.value_at
        return (value_at(i) for i in self._bits.iter_true())

    def __len__(self) -> int:
        return self._bits.pop()

    def __bool__(self) -> bool:
        return not self._bits.all_zeros()

    def __contains__(self, handle: object) -> bool:
        if not isinstance(handle, Handle):
            return False
        return self.get_bit(handle)

    def __or__(self, other: "BitSet[U, E]") -> "BitSet[U, E]":
        return self.union(other)

    def __and__(self, other: "BitSet[U, E]") -> "BitSet[U, E]":
        return self.inter(other)

    def __sub__(self, other: "BitSet[U, E]") -> "BitSet[U, E]":
        return self.diff(other)

    def __invert__(self) -> "BitSet[U, E]":
        return self.complement()

    def __le__(self, other: "BitSet[U, E]") -> bool:
        return self.subset(other)

    def __ge__(self, other: "BitSet[U, E]") -> bool:
        return other.subset(self)

    # ``==`` across universes is False; ``equal`` raises instead.
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitSet):
            return NotImplemented
        return other._registry is self._registry and self._bits == other._bits

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        """Hash of the universe id and the bit pattern.

        The hash follows the current contents, so a set used as a dict key
        must not be changed with :meth:`set_bit` afterwards.
        """
        return hash((self._registry.universe_id, self._bits.bits))

    def __repr__(self) -> str:
        members = ", ".join(repr(v) for v in self)
        return f"<BitSet {self._registry.tag!r} {{{members}}}>"


def create(registry: Registry[U, E], initial: bool = False) -> BitSet[U, E]:
    """Module-level form of :meth:`BitSet.create`."""
    return BitSet.create(registry, initial)
