# tests/test_registry.py
"""
Tests for universe registries: registration, growth, sealing and lookup.
"""

import logging

import pytest

from universe_sets import (
    Handle,
    IndexOutOfRangeError,
    Registry,
    RegistryConfig,
    SealedRegistryError,
    UniverseMismatchError,
    UnsealedRegistryError,
    declare,
)


# ── Registration ─────────────────────────────────────────────────

class TestRegistration:

    def test_declare_is_empty_and_open(self):
        reg = declare("colors")
        assert reg.tag == "colors"
        assert reg.size == 0
        assert len(reg) == 0
        assert not reg.sealed
        assert reg.capacity == 0

    def test_handles_follow_registration_order(self, open_registry):
        handles = [open_registry.register(f"v{i}") for i in range(10)]
        assert [h.index for h in handles] == list(range(10))
        assert open_registry.size == 10

    def test_element_is_register(self, open_registry):
        h = open_registry.element("x", label="ex")
        assert open_registry.lookup_value(h) == "x"
        assert open_registry.lookup_label(h) == "ex"

    def test_size_reflects_current_count_while_open(self, open_registry):
        open_registry.register("a")
        assert open_registry.size == 1
        open_registry.register("b")
        assert open_registry.size == 2

    def test_values_are_opaque(self, open_registry):
        class NoEq:
            def __eq__(self, other):
                raise AssertionError("registry must not compare values")
            __hash__ = None

        v = NoEq()
        h = open_registry.register(v)
        open_registry.seal()
        assert open_registry.lookup_value(h) is v

    def test_duplicates_get_distinct_handles(self, open_registry):
        h1 = open_registry.register("same")
        h2 = open_registry.register("same")
        assert h1 != h2


# ── Amortized growth ─────────────────────────────────────────────

class TestGrowth:

    def test_default_capacity_sequence(self, open_registry):
        seen = []
        for i in range(300):
            open_registry.register(i)
            if not seen or seen[-1] != open_registry.capacity:
                seen.append(open_registry.capacity)
        assert seen == [64, 128, 256, 512]

    def test_custom_config(self):
        reg = declare("small", RegistryConfig(min_capacity=4, growth_factor=3))
        caps = []
        for i in range(13):
            reg.register(i)
            caps.append(reg.capacity)
        assert caps[0] == 4
        assert caps[4] == 12
        assert caps[12] == 36

    def test_invalid_config_rejected(self):
        with pytest.raises(ValueError):
            declare("bad", RegistryConfig(min_capacity=0))

    @pytest.mark.parametrize("n", [0, 1, 63, 64, 65, 128, 129, 1000])
    def test_growth_preserves_order(self, n):
        reg = declare(f"n{n}")
        handles = [reg.register(i * 7) for i in range(n)]
        reg.seal()
        assert reg.size == n
        assert reg.capacity == n
        assert [reg.lookup_value(h) for h in handles] == [i * 7 for i in range(n)]
        assert list(reg) == [i * 7 for i in range(n)]

    def test_growth_logged(self, open_registry, caplog):
        with caplog.at_level(logging.DEBUG, logger="universe_sets.registry"):
            open_registry.register("first")
        assert any("grew from 0 to 64" in r.getMessage() for r in caplog.records)


# ── Sealing ──────────────────────────────────────────────────────

class TestSeal:

    def test_seal_trims_storage(self, open_registry):
        for i in range(5):
            open_registry.register(i)
        assert open_registry.capacity == 64
        open_registry.seal()
        assert open_registry.sealed
        assert open_registry.capacity == 5

    def test_register_after_seal(self, letters):
        reg, _ = letters
        with pytest.raises(SealedRegistryError) as info:
            reg.register("D")
        assert info.value.tag == "letters"
        assert info.value.code == "USET-0001"
        assert reg.size == 3

    def test_double_seal_is_an_error(self, letters):
        reg, _ = letters
        with pytest.raises(SealedRegistryError) as info:
            reg.seal()
        assert info.value.operation == "seal"
        assert reg.size == 3

    def test_sealed_error_is_runtime_error(self, letters):
        reg, _ = letters
        with pytest.raises(RuntimeError):
            reg.register("D")

    def test_indices_stable_across_seal(self, open_registry):
        handles = [open_registry.register(c) for c in "xyz"]
        before = [open_registry.lookup_value(h) for h in handles]
        open_registry.seal()
        assert [h.index for h in handles] == [0, 1, 2]
        assert [open_registry.lookup_value(h) for h in handles] == before

    def test_require_sealed(self, open_registry):
        with pytest.raises(UnsealedRegistryError):
            open_registry.require_sealed()
        open_registry.seal()
        open_registry.require_sealed()

    def test_empty_universe_can_be_sealed(self, open_registry):
        open_registry.seal()
        assert open_registry.size == 0
        assert list(open_registry.handles()) == []


# ── Lookup ───────────────────────────────────────────────────────

class TestLookup:

    def test_values_and_labels(self, digits):
        reg, handles = digits
        assert reg.lookup_value(handles[3]) == 3
        assert reg.lookup_label(handles[3]) == "three"

    def test_missing_label_is_none(self, letters):
        reg, (a, _, _) = letters
        assert reg.lookup_label(a) is None

    def test_lookup_while_open(self, open_registry):
        h = open_registry.register("early", "e")
        assert open_registry.lookup_value(h) == "early"
        assert open_registry.lookup_label(h) == "e"

    def test_foreign_handle(self, letters, digits):
        letters_reg, _ = letters
        _, digit_handles = digits
        with pytest.raises(UniverseMismatchError):
            letters_reg.lookup_value(digit_handles[0])

    def test_out_of_range_handle(self, letters):
        reg, _ = letters
        bogus = Handle(7, reg.universe_id)
        with pytest.raises(IndexOutOfRangeError) as info:
            reg.lookup_value(bogus)
        assert info.value.index == 7
        assert info.value.size == 3
        assert isinstance(info.value, IndexError)

    def test_handle_int_conversion(self, letters):
        reg, handles = letters
        assert reg.handle_of_int(2) == handles[2]
        assert reg.int_of_handle(handles[1]) == 1
        assert int(handles[1]) == 1
        with pytest.raises(IndexOutOfRangeError):
            reg.handle_of_int(3)
        with pytest.raises(IndexOutOfRangeError):
            reg.handle_of_int(-1)

    def test_items_and_handles(self, digits):
        reg, handles = digits
        assert list(reg.handles()) == handles
        triples = list(reg.items())
        assert triples[0] == (handles[0], 0, "zero")
        assert triples[-1] == (handles[9], 9, "nine")

    def test_value_at(self, letters):
        reg, _ = letters
        assert reg.value_at(0) == "A"
        with pytest.raises(IndexOutOfRangeError):
            reg.value_at(3)


# ── Handles ──────────────────────────────────────────────────────

class TestHandle:

    def test_handles_are_immutable(self, letters):
        _, (a, _, _) = letters
        with pytest.raises(AttributeError):
            a.index = 5

    def test_handles_hashable_and_ordered(self, letters):
        _, (a, b, c) = letters
        assert sorted([c, a, b]) == [a, b, c]
        assert len({a, b, c, a}) == 3

    def test_same_index_different_universe(self, letters, digits):
        _, (a, _, _) = letters
        _, (zero, *_) = digits
        assert a.index == zero.index
        assert a != zero

    def test_universe_ids_unique(self):
        ids = {Registry(f"r{i}").universe_id for i in range(20)}
        assert len(ids) == 20

    def test_repr(self, open_registry):
        assert "open" in repr(open_registry)
        open_registry.seal()
        assert "sealed" in repr(open_registry)
