"""
universe_sets.lattice
=====================

Powerset lattices over a sealed universe, for dataflow-style analyses.

A dataflow analysis needs a lattice ``(L, ⊑, ⊥, ⊤, ⊔)``.  When the facts are
sets drawn from a universe known up front (variables, definition sites,
expressions), :class:`BitsetLattice` gives that lattice with bit-vector
values: join is a single OR per word instead of a hash-set union.

Public API
----------
    Lattice                 - abstract base for lattices of sets over one universe
    BitsetLattice           - ``(2^U, ⊆, ∅, U, ∪)``, for may-analyses
    InvertedBitsetLattice   - the dual, join = intersection, for must-analyses

Usage example
-------------
::

    defs = declare("definitions")
    d1 = defs.register(("x", 3))
    d2 = defs.register(("y", 7))
    defs.seal()

    lat = BitsetLattice(defs)
    a = lat.bottom().add(d1)
    b = lat.bottom().add(d2)
    assert lat.leq(a, lat.join(a, b))
"""

from __future__ import annotations

import abc
from typing import Generic, Iterable, TypeVar

from .bitset import BitSet
from .registry import Registry

U = TypeVar("U")
E = TypeVar("E")


# ===========================================================================
# LATTICE: ABSTRACT BASE
# ===========================================================================

class Lattice(abc.ABC, Generic[U, E]):
    """Abstract base for a lattice whose values are sets over one universe.

    Subclasses choose the direction of the order by providing:

    - ``bottom()``  → the least element ⊥.
    - ``top()``     → the greatest element ⊤.
    - ``join(a, b)`` → the least upper bound ``a ⊔ b``.
    - ``meet(a, b)`` → the greatest lower bound ``a ⊓ b``.

    The order is derived from join: ``a ⊑ b`` iff ``a ⊔ b = b``.  Every
    value is a :class:`BitSet` over :attr:`registry`, so copies share the
    registry and stay combinable with the originals.

    Parameters
    ----------
    registry : Registry
        A sealed registry; every value of the lattice is a set over it.
    """

    def __init__(self, registry: Registry[U, E]) -> None:
        registry.require_sealed()
        self.registry = registry

    @abc.abstractmethod
    def bottom(self) -> BitSet[U, E]:
        """Return the least element ⊥."""
        ...

    @abc.abstractmethod
    def top(self) -> BitSet[U, E]:
        """Return the greatest element ⊤."""
        ...

    @abc.abstractmethod
    def join(self, a: BitSet[U, E], b: BitSet[U, E]) -> BitSet[U, E]:
        """Return the least upper bound ``a ⊔ b``."""
        ...

    @abc.abstractmethod
    def meet(self, a: BitSet[U, E], b: BitSet[U, E]) -> BitSet[U, E]:
        """Return the greatest lower bound ``a ⊓ b``."""
        ...

    def leq(self, a: BitSet[U, E], b: BitSet[U, E]) -> bool:
        """Return ``True`` iff ``a ⊑ b``."""
        return self.join(a, b).equal(b)

    def eq(self, a: BitSet[U, E], b: BitSet[U, E]) -> bool:
        return a.equal(b)

    def is_bottom(self, a: BitSet[U, E]) -> bool:
        return a.equal(self.bottom())

    def is_top(self, a: BitSet[U, E]) -> bool:
        return a.equal(self.top())

    def widen(self, a: BitSet[U, E], b: BitSet[U, E]) -> BitSet[U, E]:
        """Widening.  The lattice has finite height, so this is ``join``."""
        return self.join(a, b)

    def narrow(self, a: BitSet[U, E], b: BitSet[U, E]) -> BitSet[U, E]:
        """Narrowing.  Returns ``b`` (no narrowing)."""
        return b

    def join_all(self, values: Iterable[BitSet[U, E]]) -> BitSet[U, E]:
        """Join a sequence of values; ⊥ for an empty sequence."""
        result = self.bottom()
        for v in values:
            result = self.join(result, v)
        return result

    def copy_value(self, v: BitSet[U, E]) -> BitSet[U, E]:
        """Return an independent copy of *v* over the same registry."""
        return v.copy()


# ===========================================================================
# BIT-SET LATTICES
# ===========================================================================

class BitsetLattice(Lattice[U, E]):
    """Powerset lattice ``(2^U, ⊆, ∅, U, ∪)`` over a sealed universe.

    Unlike a hash-set powerset lattice, ``top()`` always exists: the
    universe is the registry.
    """

    def bottom(self) -> BitSet[U, E]:
        return BitSet.create(self.registry, False)

    def top(self) -> BitSet[U, E]:
        return BitSet.create(self.registry, True)

    def join(self, a: BitSet[U, E], b: BitSet[U, E]) -> BitSet[U, E]:
        return a.union(b)

    def meet(self, a: BitSet[U, E], b: BitSet[U, E]) -> BitSet[U, E]:
        return a.inter(b)

    def is_bottom(self, a: BitSet[U, E]) -> bool:
        return a.is_empty()


class InvertedBitsetLattice(Lattice[U, E]):
    """Powerset lattice with intersection as join (for must-analyses).

    In this lattice:
    - ⊥ = the full universe
    - ⊤ = the empty set
    - join = intersection (must hold on all paths)
    - ``a ⊑ b`` iff ``a ⊇ b``
    """

    def bottom(self) -> BitSet[U, E]:
        return BitSet.create(self.registry, True)

    def top(self) -> BitSet[U, E]:
        return BitSet.create(self.registry, False)

    def join(self, a: BitSet[U, E], b: BitSet[U, E]) -> BitSet[U, E]:
        """Intersection."""
        return a.inter(b)

    def meet(self, a: BitSet[U, E], b: BitSet[U, E]) -> BitSet[U, E]:
        """Union."""
        return a.union(b)

    def is_top(self, a: BitSet[U, E]) -> bool:
        return a.is_empty()
