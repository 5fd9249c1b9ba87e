"""Complex frequency shifters (mixers) for blocks of complex samples.

Every shifter multiplies each sample by a rotating unit phasor, which
shifts the spectrum of the signal by ``rate`` times the sample rate.
The variants differ in how the phasor is produced:

* :func:`shift_math_cc` evaluates cosine and sine for every sample.
* :class:`ShiftTable` looks the phasor up in a quarter-wave sine table.
* :class:`AddFastShifter` advances the phasor four samples at a time.
* :class:`UnrollShifter` uses a precomputed table as long as the input.
* :class:`LimitedUnrollShifter` uses a fixed table of 128 steps and
  keeps the phase between calls, renormalising it after every block.

Shifted data is returned as ``complex64``. The ``shift_inplace`` methods
overwrite a complex NumPy array and return the phase for the next call.
"""

from __future__ import annotations

import math

import numpy as np

__all__ = [
    "PI",
    "LIMITED_UNROLL_SIZE",
    "LIMITED_SIMD_SIZE",
    "have_sse_shift_mixer_impl",
    "shift_math_cc",
    "ShiftTable",
    "AddFastShifter",
    "UnrollShifter",
    "LimitedUnrollShifter",
]

PI = float(np.float32(math.pi))
TWO_PI = 2.0 * PI
HALF_PI = PI / 2.0

LIMITED_UNROLL_SIZE = 128
LIMITED_SIMD_SIZE = 4


def have_sse_shift_mixer_impl() -> bool:
    """Return True: the four-lane vector shifter variants are available."""
    return True


def _wrap_positive(phase):
    """Bring phases outside [0, 2*pi] back into that range."""
    p = np.asarray(phase, dtype=np.float64)
    return np.where((p > TWO_PI) | (p < 0.0), np.mod(p, TWO_PI), p)


def _wrap_pi(phase):
    """Bring phases outside [-pi, pi] back into that range."""
    p = np.asarray(phase, dtype=np.float64)
    return np.where((p > PI) | (p < -PI), np.mod(p + PI, TWO_PI) - PI, p)


def _as_samples(data) -> np.ndarray:
    """Return a fresh one-dimensional complex128 copy of ``data``."""
    return np.array(data, dtype=np.complex128).ravel()


def _check_inplace(data) -> np.ndarray:
    if not isinstance(data, np.ndarray) or not np.iscomplexobj(data):
        raise TypeError("in-place shifting needs a complex numpy array")
    if data.ndim != 1:
        raise ValueError("in-place shifting needs a one-dimensional array")
    return data


def _phasor(phase) -> np.ndarray:
    return np.exp(1j * np.asarray(phase, dtype=np.float64))


def shift_math_cc(data, rate: float, starting_phase: float = 0.0):
    """Shift ``data`` by ``rate`` with cosine and sine per sample.

    Returns the shifted samples and the phase, normalised to [0, 2*pi],
    at which the next block has to start.
    """
    x = _as_samples(data)
    increment = 2.0 * rate * PI
    n = x.size
    if n == 0:
        return x.astype(np.complex64), float(starting_phase)
    phases = starting_phase + increment * np.arange(n, dtype=np.float64)
    phases[1:] = _wrap_positive(phases[1:])
    out = (x * _phasor(phases)).astype(np.complex64)
    return out, float(_wrap_positive(starting_phase + n * increment))


class ShiftTable:
    """Shifter that reads the phasor from a quarter-wave sine table."""

    def __init__(self, table_size: int):
        if table_size <= 0:
            raise ValueError("table size must be positive")
        self.table_size = table_size
        steps = np.arange(table_size, dtype=np.float64) / table_size
        self.table = np.sin(steps * HALF_PI).astype(np.float32)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(table_size={self.table_size})"

    def shift(self, data, rate: float, starting_phase: float = 0.0):
        """Shift ``data`` by ``rate``; return samples and next start phase."""
        x = _as_samples(data)
        increment = 2.0 * rate * PI
        n = x.size
        if n == 0:
            return x.astype(np.complex64), float(starting_phase)
        size = self.table_size
        phases = starting_phase + increment * np.arange(n, dtype=np.float64)
        phases[1:] = _wrap_positive(phases[1:])

        quadrant = np.trunc(phases / HALF_PI).astype(np.int64)
        vphase = phases - quadrant * HALF_PI
        sin_index = np.clip((vphase / HALF_PI * size).astype(np.int64), 0, size - 1)
        cos_index = size - 1 - sin_index
        odd = (quadrant & 1) == 1
        sin_index, cos_index = (
            np.where(odd, cos_index, sin_index),
            np.where(odd, sin_index, cos_index),
        )
        sin_sign = np.where(quadrant > 1, -1.0, 1.0)
        cos_sign = np.where((quadrant != 0) & (quadrant < 3), -1.0, 1.0)
        sinval = sin_sign * self.table[sin_index]
        cosval = cos_sign * self.table[cos_index]

        out = (x * (cosval + 1j * sinval)).astype(np.complex64)
        return out, float(_wrap_positive(starting_phase + n * increment))


class AddFastShifter:
    """Shifter that advances the phasor in steps of four samples.

    Only whole groups of four samples are shifted; a shorter tail is left
    as it is. The returned phase is normalised to [-pi, pi].
    """

    def __init__(self, rate: float):
        self.rate = rate
        self.phase_increment = 2.0 * rate * PI
        steps = self.phase_increment * np.arange(1, 5, dtype=np.float64)
        self.dsin = np.sin(steps).astype(np.float32)
        self.dcos = np.cos(steps).astype(np.float32)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(rate={self.rate})"

    def _apply(self, x: np.ndarray, starting_phase: float) -> float:
        n = x.size
        blocks = n // 4
        if blocks:
            steps = self.dcos.astype(np.float64) + 1j * self.dsin.astype(np.float64)
            growth = np.empty(blocks, dtype=np.complex128)
            growth[0] = 1.0
            growth[1:] = np.cumprod(np.full(blocks - 1, steps[3]))
            starts = _phasor(starting_phase) * growth
            vals = starts[:, None] * steps[None, :]
            x[: 4 * blocks] = x[: 4 * blocks] * vals.ravel()
        return float(_wrap_pi(starting_phase + n * self.phase_increment))

    def shift(self, data, starting_phase: float = 0.0):
        """Return the shifted samples and the next start phase."""
        x = _as_samples(data)
        phase = self._apply(x, starting_phase)
        return x.astype(np.complex64), phase

    def shift_inplace(self, data, starting_phase: float = 0.0) -> float:
        """Shift a complex array in place; return the next start phase."""
        arr = _check_inplace(data)
        x = arr.astype(np.complex128)
        phase = self._apply(x, starting_phase)
        arr[:] = x
        return phase


class UnrollShifter:
    """Shifter with a phasor table of one step per sample of a block."""

    def __init__(self, rate: float, size: int):
        if size < 0:
            raise ValueError("table size must not be negative")
        self.rate = rate
        self.size = size
        self.phase_increment = 2.0 * rate * PI
        phases = _wrap_pi(self.phase_increment * np.arange(1, size + 1, dtype=np.float64))
        self.dsin = np.sin(phases).astype(np.float32)
        self.dcos = np.cos(phases).astype(np.float32)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(rate={self.rate}, size={self.size})"

    def _apply(self, x: np.ndarray, starting_phase: float) -> float:
        n = x.size
        if n > self.size:
            raise ValueError(f"block of {n} samples exceeds table size {self.size}")
        if n:
            start = _phasor(starting_phase)
            vals = np.empty(n, dtype=np.complex128)
            vals[0] = start
            steps = self.dcos[: n - 1].astype(np.float64) + 1j * self.dsin[: n - 1]
            vals[1:] = start * steps
            x *= vals
        return float(_wrap_pi(starting_phase + n * self.phase_increment))

    def shift(self, data, starting_phase: float = 0.0):
        """Return the shifted samples and the next start phase."""
        x = _as_samples(data)
        phase = self._apply(x, starting_phase)
        return x.astype(np.complex64), phase

    def shift_inplace(self, data, starting_phase: float = 0.0) -> float:
        """Shift a complex array in place; return the next start phase."""
        arr = _check_inplace(data)
        x = arr.astype(np.complex128)
        phase = self._apply(x, starting_phase)
        arr[:] = x
        return phase


class LimitedUnrollShifter:
    """Shifter with a 128-step table that keeps its phase between calls.

    Blocks should be a multiple of four samples long; within each block of
    128 samples a shorter tail is left unshifted.
    """

    def __init__(self, rate: float):
        self.rate = rate
        self.phase_increment = 2.0 * rate * PI
        steps = np.arange(1, LIMITED_UNROLL_SIZE + 1, dtype=np.float64)
        phases = _wrap_pi(self.phase_increment * steps)
        self.dcos = np.cos(phases).astype(np.float32)
        self.dsin = np.sin(phases).astype(np.float32)
        self.complex_phase = complex(1.0, 0.0)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(rate={self.rate})"

    def _apply(self, x: np.ndarray) -> None:
        steps = self.dcos.astype(np.float64) + 1j * self.dsin.astype(np.float64)
        start = self.complex_phase
        val = start
        for offset in range(0, x.size, LIMITED_UNROLL_SIZE):
            count = min(LIMITED_UNROLL_SIZE, x.size - offset)
            done = (count // LIMITED_SIMD_SIZE) * LIMITED_SIMD_SIZE
            if done:
                vals = np.empty(done, dtype=np.complex128)
                vals[0] = start
                vals[1:] = start * steps[: done - 1]
                x[offset : offset + done] *= vals
                val = start * steps[done - 1]
            val = val / abs(val)
            start = val
        self.complex_phase = complex(val)

    def shift(self, data) -> np.ndarray:
        """Return the shifted samples; the phase is kept for the next call."""
        x = _as_samples(data)
        self._apply(x)
        return x.astype(np.complex64)

    def shift_inplace(self, data) -> None:
        """Shift a complex array in place; the phase is kept for the next call."""
        arr = _check_inplace(data)
        x = arr.astype(np.complex128)
        self._apply(x)
        arr[:] = x