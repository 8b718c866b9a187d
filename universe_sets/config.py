"""
universe_sets.config
====================

Tuning knobs for universe registries.

Registries grow their backing storage by amortized doubling: when an open
registry is full, the new capacity is
``max(min_capacity, growth_factor * capacity)``.  Both numbers live in a
:class:`RegistryConfig`; the defaults (64 and 2) are what every registry uses
unless it is declared with an explicit config.

Environment overrides
---------------------
``UNIVERSE_SETS_MIN_CAPACITY``
    Integer, replaces ``min_capacity``.
``UNIVERSE_SETS_GROWTH_FACTOR``
    Integer, replaces ``growth_factor``.

They are only consulted by :meth:`RegistryConfig.from_env`; importing the
package never reads the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import List, Mapping, Optional


ENV_MIN_CAPACITY = "UNIVERSE_SETS_MIN_CAPACITY"
ENV_GROWTH_FACTOR = "UNIVERSE_SETS_GROWTH_FACTOR"


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class RegistryConfig:
    """Growth policy for a registry's backing storage."""
    min_capacity: int = 64
    growth_factor: int = 2

    def validate(self) -> List[str]:
        """Return a list of problems (empty if valid)."""
        problems: List[str] = []
        if not _is_int(self.min_capacity):
            problems.append("min_capacity must be an int")
        elif self.min_capacity <= 0:
            problems.append("min_capacity must be positive")
        if not _is_int(self.growth_factor):
            problems.append("growth_factor must be an int")
        elif self.growth_factor < 2:
            problems.append("growth_factor must be at least 2")
        return problems

    def check(self) -> "RegistryConfig":
        """Raise ``ValueError`` listing every problem, else return ``self``."""
        problems = self.validate()
        if problems:
            raise ValueError("invalid RegistryConfig: " + "; ".join(problems))
        return self

    def next_capacity(self, capacity: int) -> int:
        return max(self.min_capacity, self.growth_factor * capacity)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        base: Optional["RegistryConfig"] = None,
    ) -> "RegistryConfig":
        """Build a config from environment variables layered over *base*.

        Unset or empty variables leave the corresponding field untouched.
        A variable that is not an integer raises ``ValueError``.
        """
        env = os.environ if environ is None else environ
        cfg = base or cls()
        overrides = {}
        for var, field_name in (
            (ENV_MIN_CAPACITY, "min_capacity"),
            (ENV_GROWTH_FACTOR, "growth_factor"),
        ):
            raw = env.get(var, "").strip()
            if not raw:
                continue
            try:
                overrides[field_name] = int(raw)
            except ValueError as exc:
                raise ValueError(f"{var} must be an integer, got {raw!r}") from exc
        return replace(cfg, **overrides).check()


DEFAULT_CONFIG = RegistryConfig()
