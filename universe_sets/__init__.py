"""
universe_sets: Typed Finite Sets over Compact Bitmaps
=====================================================

Register every member of a finite universe up front, get a dense handle for
each, then manipulate sets of those handles as bit vectors instead of boxed
collections.  Intended for symbol tables, flag sets, enumerations and
analysis lattices, where the possible elements are known in advance.

Core modules
------------
errors
    Exception hierarchy and error codes.
config
    Growth policy for registry storage.
bitv
    Fixed-length bit vectors over Python integers.
registry
    Open-then-sealed universe registries and universe-tagged handles.
bitset
    Sets over a sealed registry: imperative, persistent and boolean algebra.
lattice
    Powerset lattices over a sealed registry for dataflow analyses.

Quick start
-----------
>>> from universe_sets import declare, create
>>> letters = declare("letters")
>>> a, b, c = (letters.register(x) for x in "ABC")
>>> letters.seal()
>>> s = create(letters, False).add(b)
>>> (s | create(letters).add(c)).elements()
['B', 'C']
>>> (~s).cardinality()
2

Package layout
--------------
::

    universe_sets/
    ├── __init__.py            ← this file
    ├── errors.py
    ├── config.py
    ├── bitv.py
    ├── registry.py
    ├── bitset.py
    └── lattice.py
"""

from __future__ import annotations

import importlib
import logging
import sys
from typing import TYPE_CHECKING, List

# ---------------------------------------------------------------------------
# Package metadata
# ---------------------------------------------------------------------------

__version__ = "0.1.0"
__license__ = "MIT"
__all__: List[str] = []          # populated below

_log = logging.getLogger(__name__)
_log.addHandler(logging.NullHandler())

# ---------------------------------------------------------------------------
# Submodules and the public names each one contributes, in dependency order
# ---------------------------------------------------------------------------

_CORE_MODULES = {
    "errors": [
        "UniverseError",
        "SealedRegistryError",
        "UnsealedRegistryError",
        "UniverseMismatchError",
        "IndexOutOfRangeError",
        "ErrorCode",
        "UniverseErrorCodes",
    ],
    "config": [
        "RegistryConfig",
        "DEFAULT_CONFIG",
    ],
    "bitv": [
        "BitVector",
    ],
    "registry": [
        "Registry",
        "Handle",
        "declare",
    ],
    "bitset": [
        "BitSet",
        "create",
    ],
    "lattice": [
        "Lattice",
        "BitsetLattice",
        "InvertedBitsetLattice",
    ],
}


def _import_names(module_rel_name: str, names: List[str]) -> None:
    """Import *names* from a submodule and bind them in the package namespace."""
    fq_name = f"{__name__}.{module_rel_name}"
    try:
        mod = importlib.import_module(fq_name)
    except ImportError as exc:
        raise ImportError(
            f"universe_sets: required submodule '{module_rel_name}' "
            f"failed to import: {exc}"
        ) from exc

    current_module = sys.modules[__name__]
    for name in names:
        obj = getattr(mod, name, None)
        if obj is None:
            raise AttributeError(
                f"universe_sets.{module_rel_name} does not export '{name}'"
            )
        setattr(current_module, name, obj)
        __all__.append(name)

    # universe_sets.registry.Registry works as well as universe_sets.Registry
    setattr(current_module, module_rel_name, mod)
    if module_rel_name not in __all__:
        __all__.append(module_rel_name)


for _mod, _names in _CORE_MODULES.items():
    _import_names(_mod, _names)

del _mod, _names


# ---------------------------------------------------------------------------
# Package-level utilities
# ---------------------------------------------------------------------------

def list_submodules() -> List[str]:
    """Return the names of all submodules in the package."""
    return sorted(_CORE_MODULES)


def package_info() -> dict:
    """Return a dict of metadata about the package, for diagnostics."""
    return {
        "package": __name__,
        "version": __version__,
        "python": sys.version,
        "submodules": list_submodules(),
        "all_exports": list(__all__),
    }


__all__ += ["list_submodules", "package_info", "__version__"]

# ---------------------------------------------------------------------------
# TYPE_CHECKING block: full visibility for IDEs and type checkers
# ---------------------------------------------------------------------------

if TYPE_CHECKING:
    from .errors import (
        UniverseError as UniverseError,
        SealedRegistryError as SealedRegistryError,
        UnsealedRegistryError as UnsealedRegistryError,
        UniverseMismatchError as UniverseMismatchError,
        IndexOutOfRangeError as IndexOutOfRangeError,
        ErrorCode as ErrorCode,
        UniverseErrorCodes as UniverseErrorCodes,
    )
    from .config import (
        RegistryConfig as RegistryConfig,
        DEFAULT_CONFIG as DEFAULT_CONFIG,
    )
    from .bitv import BitVector as BitVector
    from .registry import (
        Registry as Registry,
        Handle as Handle,
        declare as declare,
    )
    from .bitset import (
        BitSet as BitSet,
        create as create,
    )
    from .lattice import (
        Lattice as Lattice,
        BitsetLattice as BitsetLattice,
        InvertedBitsetLattice as InvertedBitsetLattice,
    )
