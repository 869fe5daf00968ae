"""Tests for the ambient generator."""

from __future__ import annotations

import warnings

import numpy as np
import pytest

from seedstream import ambient
from seedstream.ambient import (
    DEFAULT_KIND,
    LECUYER_CMRG,
    MERSENNE_TWISTER,
    AmbientGenerator,
    kind_for_code,
    lookup_kind,
)
from seedstream.errors import InvalidStateWarning


class TestKinds:
    def test_codes(self):
        assert lookup_kind(MERSENNE_TWISTER).code == 10403
        assert lookup_kind(LECUYER_CMRG).code == 10407

    def test_kind_for_code(self):
        assert kind_for_code(10407).name == LECUYER_CMRG
        assert kind_for_code(407).name == LECUYER_CMRG
        assert kind_for_code(10403).name == MERSENNE_TWISTER

    def test_kind_for_unknown_code(self):
        assert kind_for_code(10499) is None
        assert kind_for_code(10307) is None
        assert kind_for_code(20407) is None

    def test_unknown_kind_raises(self):
        with pytest.raises(ValueError, match="Unknown generator kind"):
            lookup_kind("Knuth-TAOCP")

    def test_seed_state_shapes(self):
        mt = lookup_kind(MERSENNE_TWISTER).seed_state(1)
        assert len(mt) == 626
        assert mt[:2] == (10403, 624)
        cmrg = lookup_kind(LECUYER_CMRG).seed_state(1)
        assert len(cmrg) == 7
        assert cmrg[0] == 10407


class TestStateAccessor:
    def test_starts_unseeded(self):
        gen = AmbientGenerator()
        assert gen.get_state() is None
        assert gen.kind() == DEFAULT_KIND

    def test_round_trip(self):
        gen = AmbientGenerator()
        gen.set_seed(42)
        state = gen.get_state()
        gen.set_state(gen.get_state())
        assert gen.get_state() == state

    def test_round_trip_unseeded(self):
        gen = AmbientGenerator()
        gen.set_state(gen.get_state())
        assert gen.get_state() is None

    def test_set_state_restores_sequence(self):
        gen = AmbientGenerator()
        gen.set_seed(42)
        saved = gen.get_state()
        first = [gen.draw() for _ in range(3)]
        gen.set_state(saved)
        assert [gen.draw() for _ in range(3)] == first

    def test_set_state_none_with_kind(self):
        gen = AmbientGenerator()
        gen.set_seed(1)
        gen.set_state(None, kind=LECUYER_CMRG)
        assert gen.get_state() is None
        assert gen.kind() == LECUYER_CMRG

    def test_set_state_list_becomes_tuple(self):
        gen = AmbientGenerator()
        gen.set_state([10407, 1, 2, 3, 4, 5, 6])
        assert gen.get_state() == (10407, 1, 2, 3, 4, 5, 6)

    def test_kind_follows_state(self):
        gen = AmbientGenerator()
        gen.set_state((10407, 1, 2, 3, 4, 5, 6))
        assert gen.kind() == LECUYER_CMRG


class TestDraw:
    def test_draw_seeds_unseeded_generator(self):
        gen = AmbientGenerator()
        u = gen.draw()
        assert 0.0 < u < 1.0
        state = gen.get_state()
        assert state[0] == 10403
        assert len(state) == 626

    def test_draw_advances_state(self):
        gen = AmbientGenerator()
        gen.set_seed(7)
        before = gen.get_state()
        gen.draw()
        assert gen.get_state() != before

    def test_mersenne_twister_position(self):
        gen = AmbientGenerator()
        gen.set_seed(7)
        gen.draw()
        assert gen.get_state()[1] == 1

    def test_lecuyer_draws(self):
        gen = AmbientGenerator(kind=LECUYER_CMRG)
        gen.set_seed(7)
        values = [gen.draw() for _ in range(10)]
        assert all(0.0 < u < 1.0 for u in values)
        assert len(set(values)) == 10
        assert len(gen.get_state()) == 7

    def test_numpy_state_accepted(self):
        gen = AmbientGenerator()
        gen.set_seed(3, kind=LECUYER_CMRG)
        state = gen.get_state()
        gen.set_state(np.array(state, dtype=np.int64))
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            gen.draw()

    def test_all_zero_lecuyer_state_reseeds_quietly(self):
        gen = AmbientGenerator()
        gen.set_state((10407, 0, 0, 0, 0, 0, 0))
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            gen.draw()
        state = gen.get_state()
        assert state[0] == 10407
        assert any(state[1:])

    def test_unknown_code_warns(self):
        gen = AmbientGenerator()
        gen.set_state((99, 1, 2))
        with pytest.warns(InvalidStateWarning, match="invalid kind code"):
            gen.draw()
        assert gen.get_state()[0] == 10403

    def test_wrong_length_warns(self):
        gen = AmbientGenerator()
        gen.set_state((10407, 1, 2, 3))
        with pytest.warns(InvalidStateWarning, match="wrong length"):
            gen.draw()

    def test_non_integer_state_warns(self):
        gen = AmbientGenerator()
        gen.set_state((10407, 1.5, 2, 3, 4, 5, 6))
        with pytest.warns(InvalidStateWarning, match="not an integer vector"):
            gen.draw()

    def test_lecuyer_word_above_modulus_reseeds_quietly(self):
        gen = AmbientGenerator()
        gen.set_state((10407, 2**32 - 1, 1, 2, 3, 4, 5))
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            gen.draw()
        assert gen.get_state()[0] == 10407
        assert max(gen.get_state()[1:4]) < 4294967087

    def test_all_zero_mersenne_key_reseeds_quietly(self):
        gen = AmbientGenerator()
        gen.set_state((10403, 624, *([0] * 624)))
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            gen.draw()
        assert any(gen.get_state()[2:])

    @pytest.mark.parametrize("pos", [0, -3, 700])
    def test_out_of_range_mersenne_position_reset(self, pos):
        gen = AmbientGenerator()
        gen.set_seed(1)
        state = list(gen.get_state())
        expected = AmbientGenerator()
        expected.set_state(state)
        expected.draw()
        state[1] = pos
        gen.set_state(state)
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            u = gen.draw()
        assert gen.get_state() == expected.get_state()
        assert 0.0 < u < 1.0

    def test_zero_dimensional_array_state_warns(self):
        gen = AmbientGenerator()
        gen.set_state(np.array(10407))
        with pytest.warns(InvalidStateWarning, match="not an integer vector"):
            gen.draw()


class TestKindSwitching:
    def test_rng_kind_returns_previous(self):
        gen = AmbientGenerator()
        assert gen.rng_kind(LECUYER_CMRG) == MERSENNE_TWISTER
        assert gen.rng_kind() == LECUYER_CMRG

    def test_switch_is_seeded_from_previous_kind(self):
        a = AmbientGenerator()
        b = AmbientGenerator()
        a.set_seed(11)
        b.set_seed(11)
        a.rng_kind(LECUYER_CMRG)
        b.rng_kind(LECUYER_CMRG)
        assert a.get_state() == b.get_state()

    def test_set_seed_with_kind(self):
        gen = AmbientGenerator()
        gen.set_seed(42, kind=LECUYER_CMRG)
        state = gen.get_state()
        assert state[0] == 10407
        other = AmbientGenerator()
        other.set_seed(42, kind=LECUYER_CMRG)
        assert other.get_state() == state

    def test_set_seed_differs_by_seed(self):
        a = AmbientGenerator(kind=LECUYER_CMRG)
        b = AmbientGenerator(kind=LECUYER_CMRG)
        a.set_seed(1)
        b.set_seed(2)
        assert a.get_state() != b.get_state()

    def test_set_seed_accepts_negative(self):
        gen = AmbientGenerator(kind=LECUYER_CMRG)
        gen.set_seed(-5)
        assert gen.get_state()[0] == 10407


class TestModuleFunctions:
    def test_module_round_trip(self):
        ambient.set_seed(5)
        state = ambient.get_state()
        ambient.set_state(ambient.get_state())
        assert ambient.get_state() == state

    def test_preserved_state_restores(self):
        ambient.set_seed(5)
        before = ambient.get_state()
        with ambient.preserved_state() as saved:
            assert saved == before
            ambient.set_seed(9, kind=LECUYER_CMRG)
        assert ambient.get_state() == before
        assert ambient.rng_kind() == MERSENNE_TWISTER

    def test_preserved_state_restores_on_error(self):
        ambient.set_seed(5)
        before = ambient.get_state()
        with pytest.raises(RuntimeError):
            with ambient.preserved_state():
                ambient.rng_kind(LECUYER_CMRG)
                raise RuntimeError("boom")
        assert ambient.get_state() == before
        assert ambient.rng_kind() == MERSENNE_TWISTER

    def test_preserved_state_keeps_unseeded(self):
        with ambient.preserved_state():
            ambient.draw()
        assert ambient.get_state() is None
        assert ambient.rng_kind() == DEFAULT_KIND
