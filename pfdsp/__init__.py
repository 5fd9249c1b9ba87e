"""FFTs, complex frequency-shift mixers and a recursive oscillator built on NumPy."""

__version__ = "0.1.0"
__all__ = ["fft", "fft_double", "mixer", "recursive_osc"]