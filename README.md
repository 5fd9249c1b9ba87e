# pfdsp

Small DSP building blocks on top of NumPy.

- `pfdsp.fft` – single-precision real and complex FFTs (`Setup`) for sizes
  that are the minimum size times a product of 2, 3 and 5. The minimum size
  is 32 for real and 16 for complex transforms (`min_fft_size`). Helpers:
  `next_power_of_two`, `is_power_of_two`, `is_valid_size`,
  `nearest_transform_size`, `simd_size`, `simd_arch`, and the enums
  `Direction` and `TransformType`.
- `pfdsp.fft_double` – the same transforms in double precision
  (`DoubleSetup`), with the same helpers.
- `pfdsp.mixer` – complex frequency shifters: `shift_math_cc`, `ShiftTable`,
  `AddFastShifter`, `UnrollShifter` and `LimitedUnrollShifter`.
- `pfdsp.recursive_osc` – a recursive quadrature oscillator
  (`RecursiveOscillator`) with eight or four lanes, for shifting and tone
  generation.

## Installation

```
pip install .
```

Run the tests with `pip install .[test]` and then `pytest`.

## FFT

Real transforms of length N work on N floats; complex transforms work on
2*N floats with real and imaginary parts interleaved (complex NumPy arrays
are accepted as input for complex transforms). The spectrum of a real
transform holds DC and Nyquist, both real, in the first entry as
`F(0) + i*F(N/2)`, followed by the bins 1 .. N/2-1. Transforms are not
scaled: a backward transform of a forward transform returns N times the
input. `Setup` raises `ValueError` for an invalid size.

```python
import numpy as np
from pfdsp.fft import Setup, TransformType, Direction

setup = Setup(64, TransformType.COMPLEX)
x = np.exp(2j * np.pi * 4 * np.arange(64) / 64).astype(np.complex64)
spectrum = setup.transform_ordered(x, Direction.FORWARD)
back = setup.transform_ordered(spectrum, Direction.BACKWARD) / 64
```

The internal layout returned by `Setup.transform` is already the canonical
order, so `Setup.zreorder` returns a copy. `Setup.zconvolve_no_accu`
returns `dft_a * dft_b * scaling` and `Setup.zconvolve_accumulate` returns
`dft_ab + dft_a * dft_b * scaling`, multiplying the packed DC and Nyquist
values as real numbers.

## Frequency shifters

In `pfdsp.mixer`, `rate` is the shift as a fraction of the sample rate
(a phase step of `2 * pi * rate` per sample). Results are `complex64`.

- `shift_math_cc(data, rate, starting_phase)` and
  `ShiftTable(table_size).shift(data, rate, starting_phase)` return the
  shifted samples and the next start phase in [0, 2*pi].
- `AddFastShifter(rate)` and `UnrollShifter(rate, size)` have `shift`
  (returns samples and next phase in [-pi, pi]) and `shift_inplace`
  (overwrites a one-dimensional complex NumPy array, returns the next
  phase). `AddFastShifter` leaves a tail shorter than four samples as it is;
  `UnrollShifter` raises `ValueError` for blocks longer than its table.
- `LimitedUnrollShifter(rate)` keeps its phase between calls and
  renormalises it after every 128 samples.

```python
import numpy as np
from pfdsp.mixer import LimitedUnrollShifter

shifter = LimitedUnrollShifter(0.25)
samples = np.ones(256, dtype=np.complex64)
shifted = shifter.shift(samples)   # the phase carries over to the next call
```

## Recursive oscillator

For `RecursiveOscillator`, `rate` is the phase step per sample in units of
pi. Samples are processed in groups of `lanes` samples; with eight lanes a
shorter tail is left unchanged, with four lanes the length must be a
multiple of four. `update_rate` changes the rate and keeps the phase.

```python
from pfdsp.recursive_osc import RecursiveOscillator

osc = RecursiveOscillator(0.1, 0.0, 8)
tone = osc.generate(64)
```

## What this package does not do

- There is no ready-made block-wise fast convolution or correlation; build
  it from `Setup.transform` and `Setup.zconvolve_no_accu`.
- There is no four-lane block shifter with a 128-step table beyond
  `LimitedUnrollShifter` and the four-lane `RecursiveOscillator`.
- There is no command-line tool; the package is a library only.