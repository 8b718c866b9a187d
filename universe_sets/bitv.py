"""
universe_sets.bitv
==================

Fixed-length bit vectors.

A :class:`BitVector` is a Python ``int`` used as a bit mask together with an
explicit length.  Bit ``i`` of the integer is element ``i`` of the vector;
bits at or above ``length`` are always zero, so two vectors of the same
length are equal exactly when their integers are equal.

Python integers already provide word-at-a-time AND/OR/XOR/NOT and a
population count (``int.bit_count``), which gives every operation here
O(length / word size) cost without a native extension.

Contract
--------
- fixed length, set at construction, with an initial fill value;
- ``get``/``set`` by index, O(1) amortized;
- ``bw_and``, ``bw_or``, ``bw_xor``, ``bw_and_not``, ``bw_not``, each returning
  a new vector; binary operations require equal lengths;
- equality, a total order (:meth:`BitVector.compare`), population count.
"""

from __future__ import annotations

from typing import Iterator


class BitVector:
    """A mutable, fixed-length vector of bits.

    Parameters
    ----------
    length : int
        Number of bits; must be non-negative.
    fill : bool
        Initial value of every bit.
    """

    __slots__ = ("_bits", "_length")

    def __init__(self, length: int, fill: bool = False) -> None:
        if length < 0:
            raise ValueError(f"BitVector length must be non-negative, got {length}")
        self._length = length
        self._bits = ((1 << length) - 1) if fill else 0

    @classmethod
    def from_int(cls, length: int, bits: int) -> "BitVector":
        """Build a vector from an integer pattern, truncated to *length*."""
        v = cls(length)
        v._bits = bits & v.mask
        return v

    # ── accessors ───────────────────────────────────────────────────────

    @property
    def length(self) -> int:
        return self._length

    @property
    def bits(self) -> int:
        """The pattern as a non-negative integer."""
        return self._bits

    @property
    def mask(self) -> int:
        return (1 << self._length) - 1

    def _check_index(self, i: int) -> None:
        if not 0 <= i < self._length:
            raise IndexError(f"bit index {i} out of range [0, {self._length})")

    def _check_length(self, other: "BitVector") -> None:
        if other._length != self._length:
            raise ValueError(
                f"bit vector length mismatch: {self._length} vs {other._length}"
            )

    # ── imperative ──────────────────────────────────────────────────────

    def get(self, i: int) -> bool:
        self._check_index(i)
        return (self._bits >> i) & 1 == 1

    def set(self, i: int, value: bool) -> None:
        self._check_index(i)
        if value:
            self._bits |= 1 << i
        else:
            self._bits &= ~(1 << i)

    def copy(self) -> "BitVector":
        return BitVector.from_int(self._length, self._bits)

    # ── bitwise ─────────────────────────────────────────────────────────

    def bw_and(self, other: "BitVector") -> "BitVector":
        self._check_length(other)
        return BitVector.from_int(self._length, self._bits & other._bits)

    def bw_or(self, other: "BitVector") -> "BitVector":
        self._check_length(other)
        return BitVector.from_int(self._length, self._bits | other._bits)

    def bw_xor(self, other: "BitVector") -> "BitVector":
        self._check_length(other)
        return BitVector.from_int(self._length, self._bits ^ other._bits)

    def bw_and_not(self, other: "BitVector") -> "BitVector":
        """``self & ~other``."""
        self._check_length(other)
        return BitVector.from_int(self._length, self._bits & ~other._bits)

    def bw_not(self) -> "BitVector":
        return BitVector.from_int(self._length, ~self._bits)

    # ── queries ─────────────────────────────────────────────────────────

    def all_zeros(self) -> bool:
        return self._bits == 0

    def all_ones(self) -> bool:
        return self._bits == self.mask

    def pop(self) -> int:
        """Population count."""
        return self._bits.bit_count()

    def iter_true(self) -> Iterator[int]:
        """Yield the indices of set bits in ascending order."""
        bits = self._bits
        while bits:
            low = bits & -bits
            yield low.bit_length() - 1
            bits ^= low

    def compare(self, other: "BitVector") -> int:
        """Total order: by length, then by the unsigned integer pattern.

        Returns -1, 0 or 1.
        """
        a = (self._length, self._bits)
        b = (other._length, other._bits)
        return (a > b) - (a < b)

    # ── dunder ──────────────────────────────────────────────────────────

    def __len__(self) -> int:
        return self._length

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitVector):
            return NotImplemented
        return self._length == other._length and self._bits == other._bits

    def __hash__(self) -> int:
        return hash((self._length, self._bits))

    def __repr__(self) -> str:
        if self._length == 0:
            return "BitVector('')"
        # index 0 first, to read left-to-right in registration order
        pattern = format(self._bits, f"0{self._length}b")[::-1]
        return f"BitVector({pattern!r})"
