import math

import numpy as np
import pytest

from pfdsp.mixer import (
    LIMITED_UNROLL_SIZE,
    PI,
    AddFastShifter,
    LimitedUnrollShifter,
    ShiftTable,
    UnrollShifter,
    have_sse_shift_mixer_impl,
    shift_math_cc,
)

N = 256
BIN = 8
RATE = BIN / N


def _peak_bin(samples):
    return int(np.argmax(np.abs(np.fft.fft(samples))))


def _ones(n=N):
    return np.ones(n, dtype=np.complex64)


def test_have_vector_impl():
    assert have_sse_shift_mixer_impl() is True


def test_math_rate_zero_is_identity():
    data = np.arange(16) + 1j * np.arange(16)
    out, phase = shift_math_cc(data, 0.0, 0.0)
    np.testing.assert_allclose(out, data, atol=1e-5)
    assert phase == 0.0


def test_math_moves_peak():
    out, _ = shift_math_cc(_ones(), RATE, 0.0)
    assert _peak_bin(out) == BIN
    np.testing.assert_allclose(np.abs(out), 1.0, atol=1e-5)


def test_math_phase_continuity():
    data = _ones()
    whole, _ = shift_math_cc(data, RATE, 0.3)
    first, phase = shift_math_cc(data[:100], RATE, 0.3)
    second, _ = shift_math_cc(data[100:], RATE, phase)
    np.testing.assert_allclose(np.concatenate([first, second]), whole, atol=1e-4)


def test_math_phase_range():
    _, phase = shift_math_cc(_ones(37), 0.37, 1.0)
    assert 0.0 <= phase <= 2 * PI


def test_table_contents():
    table = ShiftTable(64)
    assert table.table.size == 64
    assert table.table[0] == 0.0
    assert np.all(np.diff(table.table) > 0)


def test_table_invalid_size():
    with pytest.raises(ValueError):
        ShiftTable(0)


def test_table_moves_peak():
    out, phase = ShiftTable(1024).shift(_ones(), RATE, 0.0)
    assert _peak_bin(out) == BIN
    np.testing.assert_allclose(np.abs(out), 1.0, atol=1e-2)
    assert 0.0 <= phase <= 2 * PI


def test_table_close_to_math():
    data = np.exp(1j * np.linspace(0, 3, 64))
    ref, ref_phase = shift_math_cc(data, 0.05, 0.2)
    out, phase = ShiftTable(4096).shift(data, 0.05, 0.2)
    np.testing.assert_allclose(out, ref, atol=2e-3)
    assert phase == pytest.approx(ref_phase)


def test_addfast_first_sample_offset():
    shifter = AddFastShifter(0.1)
    out, _ = shifter.shift(_ones(8), 0.5)
    assert out[0] == pytest.approx(np.exp(1j * (0.5 + 2 * 0.1 * PI)), abs=1e-5)


def test_addfast_moves_peak_and_phase_range():
    out, phase = AddFastShifter(RATE).shift(_ones(), 0.0)
    assert _peak_bin(out) == BIN
    assert -PI <= phase <= PI


def test_addfast_leaves_tail():
    data = np.arange(10) + 0j
    out, _ = AddFastShifter(0.2).shift(data, 0.0)
    np.testing.assert_allclose(out[8:], data[8:])


def test_addfast_inplace_matches():
    shifter = AddFastShifter(0.07)
    data = np.exp(1j * np.arange(32) * 0.3).astype(np.complex64)
    expected, expected_phase = shifter.shift(data, 0.4)
    buf = data.copy()
    phase = shifter.shift_inplace(buf, 0.4)
    np.testing.assert_allclose(buf, expected, atol=1e-6)
    assert phase == expected_phase


def test_inplace_rejects_list():
    with pytest.raises(TypeError):
        AddFastShifter(0.1).shift_inplace([1j, 2j, 3j, 4j], 0.0)


def test_unroll_rate_zero_is_identity():
    data = np.arange(20) * (1 - 1j)
    out, phase = UnrollShifter(0.0, 20).shift(data, 0.0)
    np.testing.assert_allclose(out, data, atol=1e-4)
    assert phase == 0.0


def test_unroll_too_long_raises():
    with pytest.raises(ValueError):
        UnrollShifter(0.1, 8).shift(_ones(9), 0.0)


def test_unroll_matches_math():
    data = np.exp(1j * np.arange(N) * 0.01)
    ref, _ = shift_math_cc(data, RATE, 0.25)
    out, phase = UnrollShifter(RATE, N).shift(data, 0.25)
    np.testing.assert_allclose(out, ref, atol=1e-4)
    assert -PI <= phase <= PI
    assert math.cos(phase) == pytest.approx(math.cos(0.25 + N * 2 * RATE * PI), abs=1e-6)


def test_unroll_inplace_matches():
    shifter = UnrollShifter(0.03, 64)
    data = np.exp(1j * np.arange(64) * 0.5).astype(np.complex128)
    expected, expected_phase = shifter.shift(data, 0.0)
    buf = data.copy()
    phase = shifter.shift_inplace(buf, 0.0)
    np.testing.assert_allclose(buf, expected, atol=1e-6)
    assert phase == expected_phase


def test_limited_moves_peak_and_keeps_unit_phase():
    shifter = LimitedUnrollShifter(RATE)
    out = shifter.shift(_ones())
    assert _peak_bin(out) == BIN
    assert abs(shifter.complex_phase) == pytest.approx(1.0)


def test_limited_state_continuity():
    data = np.exp(1j * np.arange(2 * LIMITED_UNROLL_SIZE) * 0.2)
    whole = LimitedUnrollShifter(0.013).shift(data)
    shifter = LimitedUnrollShifter(0.013)
    first = shifter.shift(data[:LIMITED_UNROLL_SIZE])
    second = shifter.shift(data[LIMITED_UNROLL_SIZE:])
    np.testing.assert_allclose(np.concatenate([first, second]), whole, atol=1e-5)


def test_limited_matches_math():
    data = _ones(3 * LIMITED_UNROLL_SIZE)
    ref, _ = shift_math_cc(data, 0.021, 0.0)
    out = LimitedUnrollShifter(0.021).shift(data)
    np.testing.assert_allclose(out, ref, atol=1e-4)


def test_limited_inplace_matches():
    data = np.exp(1j * np.arange(200) * 0.1).astype(np.complex64)
    expected = LimitedUnrollShifter(0.05).shift(data)
    buf = data.copy()
    shifter = LimitedUnrollShifter(0.05)
    shifter.shift_inplace(buf)
    np.testing.assert_allclose(buf, expected, atol=1e-6)
    assert abs(shifter.complex_phase) == pytest.approx(1.0)