# universe_sets/errors.py
"""
Error Types for Universe Registries and Bit Sets

Every error raised by this package is a programmer error: a lifecycle
violation on a registry, a handle or set presented to the wrong universe, or
an index outside the universe.  None of them is transient, so none is ever
retried or recovered from inside the library.  They propagate to the caller
carrying the offending universe tag and index for diagnosis.

Error Hierarchy:
────────────────
┌─────────────────────────────────────────────────────────────────────────┐
│  UniverseError (base)                                                   │
│  ├── SealedRegistryError     - register/seal on a sealed registry       │
│  ├── UnsealedRegistryError   - set or lattice built on an open registry │
│  ├── UniverseMismatchError   - operands from two different registries   │
│  └── IndexOutOfRangeError    - index outside [0, size)                  │
└─────────────────────────────────────────────────────────────────────────┘

Each concrete error also derives from the closest builtin exception
(``RuntimeError``, ``ValueError``, ``IndexError``) so that generic handlers
written against the builtins keep working.

Error Codes:
────────────
Each error kind has a code ``USET-NNNN``:
  - 0001-0099: Registry lifecycle errors
  - 0100-0199: Universe identity errors
  - 0200-0299: Index errors

Example Usage:
──────────────
    from universe_sets import declare
    from universe_sets.errors import SealedRegistryError

    colors = declare("colors")
    colors.register("red")
    colors.seal()
    try:
        colors.register("green")
    except SealedRegistryError as exc:
        print(exc.code, exc.tag)        # USET-0001 colors
"""

from __future__ import annotations

from enum import Enum, auto, unique
from typing import Any, Dict, Optional


# ═══════════════════════════════════════════════════════════════════════════════
# ERROR CATEGORIES
# ═══════════════════════════════════════════════════════════════════════════════

@unique
class ErrorCategory(Enum):
    """Fine-grained error categories for filtering and statistics."""

    SEALED_REGISTRY = auto()
    UNSEALED_REGISTRY = auto()
    UNIVERSE_MISMATCH = auto()
    INDEX_OUT_OF_RANGE = auto()


# ═══════════════════════════════════════════════════════════════════════════════
# ERROR CODES
# ═══════════════════════════════════════════════════════════════════════════════

class ErrorCode:
    """
    Structured error code of the form ``PREFIX-NNNN``.

    Codes compare equal to each other by (prefix, number), and to their
    string rendering, so tests and callers can match on ``"USET-0001"``.
    """

    __slots__ = ("prefix", "number", "category")

    def __init__(self, prefix: str, number: int, category: ErrorCategory) -> None:
        self.prefix = prefix
        self.number = number
        self.category = category

    @property
    def code(self) -> str:
        """Get the full error code string."""
        return f"{self.prefix}-{self.number:04d}"

    def __str__(self) -> str:
        return self.code

    def __repr__(self) -> str:
        return f"ErrorCode({self.code!r}, {self.category.name})"

    def __hash__(self) -> int:
        return hash((self.prefix, self.number))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ErrorCode):
            return self.prefix == other.prefix and self.number == other.number
        if isinstance(other, str):
            return self.code == other
        return False


class UniverseErrorCodes:
    """Predefined error codes."""

    # Registry lifecycle (0001-0099)
    SEALED_REGISTRY = ErrorCode("USET", 1, ErrorCategory.SEALED_REGISTRY)
    UNSEALED_REGISTRY = ErrorCode("USET", 2, ErrorCategory.UNSEALED_REGISTRY)

    # Universe identity (0100-0199)
    UNIVERSE_MISMATCH = ErrorCode("USET", 100, ErrorCategory.UNIVERSE_MISMATCH)

    # Indices (0200-0299)
    INDEX_OUT_OF_RANGE = ErrorCode("USET", 200, ErrorCategory.INDEX_OUT_OF_RANGE)


# ═══════════════════════════════════════════════════════════════════════════════
# EXCEPTION CLASSES
# ═══════════════════════════════════════════════════════════════════════════════

class UniverseError(Exception):
    """
    Base exception for all universe/bit-set errors.

    Carries an :class:`ErrorCode` and an optional hint; ``str(exc)``
    renders ``"USET-NNNN: message"`` followed by the hint when present.
    """

    default_code: ErrorCode = UniverseErrorCodes.UNIVERSE_MISMATCH

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        hint: str = "",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.hint = hint

    def to_dict(self) -> Dict[str, Any]:
        """Structured form, for logging or test assertions."""
        return {
            "code": self.code.code,
            "category": self.code.category.name,
            "message": self.message,
            "hint": self.hint,
        }

    def __str__(self) -> str:
        text = f"{self.code}: {self.message}"
        if self.hint:
            text += f" (hint: {self.hint})"
        return text


# ───────────────────────────────────────────────────────────────────────────────
# REGISTRY LIFECYCLE ERRORS
# ───────────────────────────────────────────────────────────────────────────────

class SealedRegistryError(UniverseError, RuntimeError):
    """Registration or sealing attempted on an already sealed registry."""

    default_code = UniverseErrorCodes.SEALED_REGISTRY

    def __init__(self, tag: str, operation: str = "register") -> None:
        super().__init__(
            message=f"cannot {operation} on sealed universe {tag!r}",
            hint="declare every member before sealing; seal exactly once",
        )
        self.tag = tag
        self.operation = operation


class UnsealedRegistryError(UniverseError, RuntimeError):
    """A set (or lattice) was requested over a registry that is still open."""

    default_code = UniverseErrorCodes.UNSEALED_REGISTRY

    def __init__(self, tag: str) -> None:
        super().__init__(
            message=f"universe {tag!r} must be sealed before building sets",
            hint="call seal() once every member has been registered",
        )
        self.tag = tag


# ───────────────────────────────────────────────────────────────────────────────
# UNIVERSE IDENTITY ERRORS
# ───────────────────────────────────────────────────────────────────────────────

class UniverseMismatchError(UniverseError, ValueError):
    """Two operands (sets, or a set/registry and a handle) belong to
    different registries."""

    default_code = UniverseErrorCodes.UNIVERSE_MISMATCH

    def __init__(self, expected: str, got: str) -> None:
        super().__init__(
            message=f"universe mismatch: expected {expected!r}, got {got!r}",
        )
        self.expected = expected
        self.got = got


# ───────────────────────────────────────────────────────────────────────────────
# INDEX ERRORS
# ───────────────────────────────────────────────────────────────────────────────

class IndexOutOfRangeError(UniverseError, IndexError):
    """An index outside ``[0, size)`` of a universe."""

    default_code = UniverseErrorCodes.INDEX_OUT_OF_RANGE

    def __init__(self, tag: str, index: int, size: int) -> None:
        super().__init__(
            message=f"index {index} out of range for universe {tag!r} of size {size}",
        )
        self.tag = tag
        self.index = index
        self.size = size


__all__ = [
    "ErrorCategory",
    "ErrorCode",
    "UniverseErrorCodes",
    "UniverseError",
    "SealedRegistryError",
    "UnsealedRegistryError",
    "UniverseMismatchError",
    "IndexOutOfRangeError",
]
