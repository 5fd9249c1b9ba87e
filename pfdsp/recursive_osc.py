"""Recursive quadrature oscillator used as a frequency shifter.

The oscillator keeps one complex phasor per lane. Lanes are ``rate * pi``
apart in phase, and every update rotates all lanes by ``lanes`` single
steps with the two-coefficient recursion::

    w = u - k1 * v
    v = v + k2 * w
    u = w - k1 * v

with ``k1 = tan(step / 2)`` and ``k2 = 2 * k1 / (1 + k1**2)``. The
recursion is an exact rotation, so the magnitude stays at one over long
runs without renormalisation.

Samples are handled in groups of ``lanes`` samples. With eight lanes a
shorter tail is left as it is. With four lanes, the vector variant, the
length must be a multiple of four.
"""

from __future__ import annotations

import math

import numpy as np

from pfdsp.mixer import PI, _as_samples, _check_inplace, _wrap_pi

__all__ = ["RecursiveOscillator", "RECURSIVE_LANES", "RECURSIVE_VECTOR_LANES"]

RECURSIVE_LANES = 8
RECURSIVE_VECTOR_LANES = 4


def _step(u, v, k1: float, k2: float):
    """Rotate the phasor(s) ``u + i*v`` by the angle that k1 and k2 encode."""
    tmp = u - k1 * v
    v = v + k2 * tmp
    u = tmp - k1 * v
    return u, v


def _coefficients(increment: float) -> tuple[float, float]:
    k1 = math.tan(0.5 * increment)
    return k1, 2.0 * k1 / (1.0 + k1 * k1)


class RecursiveOscillator:
    """Multi-lane recursive oscillator that keeps its phase between calls.

    ``rate`` is the phase step per sample in units of pi, so a step of
    ``rate * pi`` radians separates consecutive samples.
    """

    def __init__(self, rate: float, starting_phase: float = 0.0, lanes: int = RECURSIVE_LANES):
        if lanes not in (RECURSIVE_LANES, RECURSIVE_VECTOR_LANES):
            raise ValueError(
                f"lanes must be {RECURSIVE_LANES} or {RECURSIVE_VECTOR_LANES}, got {lanes}"
            )
        self.lanes = lanes
        self.u_cos = np.zeros(lanes, dtype=np.float64)
        self.v_sin = np.zeros(lanes, dtype=np.float64)
        if starting_phase != 0.0:
            self.u_cos[0] = math.cos(starting_phase)
            self.v_sin[0] = math.sin(starting_phase)
        else:
            self.u_cos[0] = 1.0
            self.v_sin[0] = 0.0
        self.update_rate(rate)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(rate={self.rate}, lanes={self.lanes})"

    def update_rate(self, rate: float) -> None:
        """Change the rate; the lanes are reseeded from the first lane's phase."""
        increment = rate * PI
        k1, k2 = _coefficients(increment)
        u, v = float(self.u_cos[0]), float(self.v_sin[0])
        us, vs = [u], [v]
        for _ in range(self.lanes - 1):
            u, v = _step(u, v, k1, k2)
            us.append(u)
            vs.append(v)
        self.u_cos = np.array(us, dtype=np.float64)
        self.v_sin = np.array(vs, dtype=np.float64)

        block_increment = float(_wrap_pi(increment * self.lanes))
        self.k1, self.k2 = _coefficients(block_increment)
        self.rate = rate

    def _groups(self, n: int) -> int:
        if n < 0:
            raise ValueError("size must not be negative")
        if self.lanes == RECURSIVE_VECTOR_LANES and n % self.lanes:
            raise ValueError(f"length {n} is not a multiple of {self.lanes}")
        return n // self.lanes

    def _phasors(self, groups: int) -> np.ndarray:
        """Return ``groups`` rows of lane phasors and advance the state."""
        out = np.empty((groups, self.lanes), dtype=np.complex128)
        u, v = self.u_cos, self.v_sin
        for row in out:
            row[:] = u + 1j * v
            u, v = _step(u, v, self.k1, self.k2)
        self.u_cos, self.v_sin = u, v
        return out.ravel()

    def _apply(self, x: np.ndarray) -> None:
        done = self._groups(x.size) * self.lanes
        x[:done] *= self._phasors(done // self.lanes)

    def shift(self, data) -> np.ndarray:
        """Return the shifted samples as complex64; the phase is kept."""
        x = _as_samples(data)
        self._apply(x)
        return x.astype(np.complex64)

    def shift_inplace(self, data) -> None:
        """Shift a complex array in place; the phase is kept."""
        arr = _check_inplace(data)
        x = arr.astype(np.complex128)
        self._apply(x)
        arr[:] = x

    def generate(self, size: int) -> np.ndarray:
        """Return the oscillator output for the whole groups within ``size``."""
        groups = self._groups(size)
        return self._phasors(groups).astype(np.complex64)