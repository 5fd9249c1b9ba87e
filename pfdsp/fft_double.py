"""Double-precision FFT for sizes made of the factors 2, 3 and 5.

This module mirrors :mod:`pfdsp.fft` with 64-bit floats. Buffers, spectrum
layout and scaling are the same: real transforms work on N values, complex
transforms on 2*N interleaved values, and the real spectrum keeps DC and
Nyquist together in the first entry as ``F(0) + i*F(N/2)``.
"""

from __future__ import annotations

import numpy as np

from pfdsp import fft as _single
from pfdsp.fft import Direction, Setup, TransformType, is_power_of_two, next_power_of_two

SIMD_SIZE = 4

__all__ = [
    "Direction",
    "TransformType",
    "DoubleSetup",
    "next_power_of_two",
    "is_power_of_two",
    "simd_size",
    "simd_arch",
    "min_fft_size",
    "is_valid_size",
    "nearest_transform_size",
]


def simd_size() -> int:
    """Return the vector width the size rules are built on."""
    return SIMD_SIZE


def simd_arch() -> str:
    """Return the name of the computing backend."""
    return "numpy"


def min_fft_size(transform) -> int:
    """Return the smallest transform length for the given transform type."""
    return _single.min_fft_size(transform)


def is_valid_size(n: int, transform) -> bool:
    """Return True if n is the minimum size times a product of 2, 3 and 5."""
    return _single.is_valid_size(n, transform)


def nearest_transform_size(n: int, transform, higher: bool = True) -> int:
    """Return the nearest valid size above (higher) or below n."""
    return _single.nearest_transform_size(n, transform, higher)


class DoubleSetup(Setup):
    """Prepared double-precision transform of one length and type."""

    dtype = np.float64
    _size_check = staticmethod(is_valid_size)

    def __init__(self, n: int, transform=TransformType.REAL):
        super().__init__(n, transform)