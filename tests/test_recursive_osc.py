import numpy as np
import pytest

from pfdsp.recursive_osc import RecursiveOscillator


def _expected(phase, rate, n):
    return np.exp(1j * (phase + rate * np.pi * np.arange(n)))


@pytest.mark.parametrize("lanes", [4, 8])
def test_generate_follows_phase_ramp(lanes):
    osc = RecursiveOscillator(0.1, 0.3, lanes)
    out = osc.generate(64)
    assert out.size == 64
    np.testing.assert_allclose(out, _expected(0.3, 0.1, 64), atol=1e-4)


def test_zero_phase_starts_at_one():
    osc = RecursiveOscillator(0.25)
    out = osc.generate(8)
    assert out[0] == 1 + 0j


def test_shift_matches_generated_phasor():
    rng = np.random.default_rng(1)
    data = rng.standard_normal(32) + 1j * rng.standard_normal(32)
    shifted = RecursiveOscillator(0.05, 1.0).shift(data)
    phasor = RecursiveOscillator(0.05, 1.0).generate(32)
    np.testing.assert_allclose(shifted, data * phasor, atol=1e-4)


def test_phase_continues_across_calls():
    one = RecursiveOscillator(0.07, 0.2)
    two = RecursiveOscillator(0.07, 0.2)
    whole = one.generate(48)
    parts = np.concatenate([two.generate(16), two.generate(32)])
    np.testing.assert_allclose(parts, whole, atol=1e-6)


def test_shift_inplace_equals_shift():
    data = np.exp(1j * np.linspace(0, 3, 40)).astype(np.complex64)
    expected = RecursiveOscillator(-0.1, 0.5).shift(data)
    work = data.copy()
    RecursiveOscillator(-0.1, 0.5).shift_inplace(work)
    np.testing.assert_allclose(work, expected, atol=1e-6)


def test_tail_left_unshifted_with_eight_lanes():
    data = np.full(10, 2 + 1j, dtype=np.complex128)
    out = RecursiveOscillator(0.3).shift(data)
    np.testing.assert_allclose(out[8:], data[8:])
    np.testing.assert_allclose(out[:8], data[:8] * _expected(0.0, 0.3, 8), atol=1e-4)


def test_four_lanes_reject_partial_group():
    osc = RecursiveOscillator(0.1, 0.0, 4)
    with pytest.raises(ValueError):
        osc.shift(np.ones(6, dtype=complex))
    with pytest.raises(ValueError):
        osc.generate(10)


def test_invalid_lane_count():
    with pytest.raises(ValueError):
        RecursiveOscillator(0.1, 0.0, 5)


def test_inplace_needs_complex_array():
    with pytest.raises(TypeError):
        RecursiveOscillator(0.1).shift_inplace([1.0, 2.0])


def test_magnitude_stays_unit_over_long_run():
    osc = RecursiveOscillator(0.013, 0.4)
    out = osc.generate(8 * 4000)
    np.testing.assert_allclose(np.abs(out), 1.0, atol=1e-5)


def test_update_rate_keeps_phase():
    osc = RecursiveOscillator(0.1, 0.3)
    first = osc.generate(16)
    osc.update_rate(0.2)
    second = osc.generate(16)
    np.testing.assert_allclose(first, _expected(0.3, 0.1, 16), atol=1e-4)
    np.testing.assert_allclose(
        second, _expected(0.3 + 16 * 0.1 * np.pi, 0.2, 16), atol=1e-4
    )


def test_lane_counts_agree():
    a = RecursiveOscillator(0.09, 0.7, 8).generate(64)
    b = RecursiveOscillator(0.09, 0.7, 4).generate(64)
    np.testing.assert_allclose(a, b, atol=1e-5)