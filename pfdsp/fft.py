"""Single-precision FFT for sizes made of the factors 2, 3 and 5.

Real transforms of length N work on N floats. Complex transforms work on
2*N floats with the real and imaginary parts interleaved.

The spectrum of a real transform keeps the DC and Nyquist components,
which are both real, together in the first complex entry as
``F(0) + i*F(N/2)``. The remaining entries are the interleaved complex
bins 1 .. N/2-1. The internal layout produced by :meth:`Setup.transform`
is the canonical order, so :meth:`Setup.zreorder` is a copy.

Transforms are not scaled: ``backward(forward(x)) == N * x``.
"""

from __future__ import annotations

import enum

import numpy as np

SIMD_SIZE = 4

__all__ = [
    "Direction",
    "TransformType",
    "Setup",
    "next_power_of_two",
    "is_power_of_two",
    "simd_size",
    "simd_arch",
    "min_fft_size",
    "is_valid_size",
    "nearest_transform_size",
]


class Direction(enum.IntEnum):
    """Direction of a transform."""

    FORWARD = 0
    BACKWARD = 1


class TransformType(enum.IntEnum):
    """Kind of input a transform works on."""

    REAL = 0
    COMPLEX = 1


def next_power_of_two(n: int) -> int:
    """Return the smallest power of two that is >= n, computed on 32 bits."""
    if n <= 0:
        return 0
    return (1 << (n - 1).bit_length()) & 0xFFFFFFFF


def is_power_of_two(n: int) -> bool:
    """Return True if n is a positive power of two."""
    return n > 0 and (n & (n - 1)) == 0


def simd_size() -> int:
    """Return the vector width the size rules are built on."""
    return SIMD_SIZE


def simd_arch() -> str:
    """Return the name of the computing backend."""
    return "numpy"


def min_fft_size(transform) -> int:
    """Return the smallest transform length for the given transform type."""
    kind = TransformType(transform)
    if kind is TransformType.REAL:
        return 2 * SIMD_SIZE * SIMD_SIZE
    return SIMD_SIZE * SIMD_SIZE


def is_valid_size(n: int, transform) -> bool:
    """Return True if n is the minimum size times a product of 2, 3 and 5."""
    n_min = min_fft_size(transform)
    if n < n_min or n % n_min:
        return False
    rest = n // n_min
    for factor in (5, 3, 2):
        while rest % factor == 0:
            rest //= factor
    return rest == 1


def nearest_transform_size(n: int, transform, higher: bool = True) -> int:
    """Return the nearest valid size above (higher) or below n."""
    step = min_fft_size(transform)
    if n <= step:
        return step
    if higher:
        candidate = -(-n // step) * step
        while not is_valid_size(candidate, transform):
            candidate += step
    else:
        candidate = (n // step) * step
        while not is_valid_size(candidate, transform):
            candidate -= step
    return candidate


class Setup:
    """Prepared transform of one length and type."""

    dtype = np.float32
    _size_check = staticmethod(is_valid_size)

    def __init__(self, n: int, transform=TransformType.REAL):
        kind = TransformType(transform)
        if not self._size_check(n, kind):
            raise ValueError(f"invalid transform size {n} for {kind.name} transform")
        self.n = n
        self.kind = kind

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n={self.n}, transform={self.kind.name})"

    @property
    def layout_size(self) -> int:
        """Number of floats in one input, output or spectrum buffer."""
        return 2 * self.n if self.kind is TransformType.COMPLEX else self.n

    def _as_layout(self, data) -> np.ndarray:
        arr = np.asarray(data)
        if np.iscomplexobj(arr):
            if self.kind is TransformType.REAL:
                raise ValueError("complex data given to a real transform")
            flat = arr.ravel()
            arr = np.empty(2 * flat.size, dtype=np.float64)
            arr[0::2] = flat.real
            arr[1::2] = flat.imag
        arr = np.asarray(arr, dtype=np.float64).ravel()
        if arr.size != self.layout_size:
            raise ValueError(
                f"expected {self.layout_size} values, got {arr.size}"
            )
        return arr

    def _output(self, values: np.ndarray) -> np.ndarray:
        return np.asarray(values, dtype=self.dtype)

    def _forward(self, x: np.ndarray) -> np.ndarray:
        n = self.n
        out = np.empty(self.layout_size, dtype=np.float64)
        if self.kind is TransformType.REAL:
            spec = np.fft.rfft(x)
            out[0] = spec[0].real
            out[1] = spec[n // 2].real
            out[2::2] = spec[1 : n // 2].real
            out[3::2] = spec[1 : n // 2].imag
        else:
            spec = np.fft.fft(x[0::2] + 1j * x[1::2])
            out[0::2] = spec.real
            out[1::2] = spec.imag
        return out

    def _backward(self, y: np.ndarray) -> np.ndarray:
        n = self.n
        if self.kind is TransformType.REAL:
            spec = np.empty(n // 2 + 1, dtype=np.complex128)
            spec[0] = y[0]
            spec[n // 2] = y[1]
            spec[1 : n // 2] = y[2::2] + 1j * y[3::2]
            return np.fft.irfft(spec, n) * n
        z = np.fft.ifft(y[0::2] + 1j * y[1::2]) * n
        out = np.empty(self.layout_size, dtype=np.float64)
        out[0::2] = z.real
        out[1::2] = z.imag
        return out

    def transform(self, data, direction) -> np.ndarray:
        """Transform into or out of the internal spectrum layout."""
        arr = self._as_layout(data)
        if Direction(direction) is Direction.FORWARD:
            return self._output(self._forward(arr))
        return self._output(self._backward(arr))

    def transform_ordered(self, data, direction) -> np.ndarray:
        """Transform with the spectrum in canonical interleaved order."""
        return self.transform(data, direction)

    def zreorder(self, data, direction) -> np.ndarray:
        """Convert between internal layout and canonical order."""
        Direction(direction)
        return self._output(self._as_layout(data))

    def _product(self, dft_a, dft_b) -> np.ndarray:
        a = self._as_layout(dft_a)
        b = self._as_layout(dft_b)
        out = np.empty(self.layout_size, dtype=np.float64)
        start = 0
        if self.kind is TransformType.REAL:
            out[:2] = a[:2] * b[:2]
            start = 2
        za = a[start::2] + 1j * a[start + 1 :: 2]
        zb = b[start::2] + 1j * b[start + 1 :: 2]
        zab = za * zb
        out[start::2] = zab.real
        out[start + 1 :: 2] = zab.imag
        return out

    def zconvolve_accumulate(self, dft_a, dft_b, dft_ab, scaling) -> np.ndarray:
        """Return ``dft_ab + dft_a * dft_b * scaling`` on spectra."""
        acc = self._as_layout(dft_ab)
        return self._output(acc + self._product(dft_a, dft_b) * scaling)

    def zconvolve_no_accu(self, dft_a, dft_b, scaling) -> np.ndarray:
        """Return ``dft_a * dft_b * scaling`` on spectra."""
        return self._output(self._product(dft_a, dft_b) * scaling)