# fmtones

Fixed-point building blocks for a six-operator FM synthesizer. Values are
plain Python integers in fixed Q-formats (mostly Q24), so every function
gives the same result on every machine.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

The package has no dependencies outside the standard library.

## Modules

- `fmtones.module`: `Module`, the abstract base for block processors. Its
  `process(inbufs, control_in, control_last)` handles one block of
  `Module.n` (64) samples and returns a list of output buffers.
- `fmtones.exp2`: `exp2_lookup(x)` and `tanh_lookup(x)`, Q24 in and Q24 out,
  by interpolated table lookup.
- `fmtones.log2`: `log2_lookup(x)`, the base-2 logarithm of an unsigned
  32-bit Q24 value, as Q24. Zero is treated like the smallest value.
- `fmtones.sin`: `sin_lookup(phase)` reads an interpolated table;
  `sin_compute(phase)` uses an 8th-order polynomial (Q24 phase, where
  `1 << 24` is a full cycle, and Q24 result); `sin_compute10(phase)` uses a
  10th-order polynomial with Q30 phase and result.
- `fmtones.patch`: `unpack_patch(bulk)` turns a 128-byte packed voice, as
  found in a 32-voice bank dump, into the 156-byte unpacked parameter form.
  It raises `ValueError` for input of any other length.
- `fmtones.env`: `Envelope(rates, levels, outlevel, rate_scaling)`, the
  four-stage operator envelope, with `getsample()`, `keydown(down)` and
  `setparam(param, value)`; and `scale_outlevel(outlevel)`.
- `fmtones.pitchenv`: `PitchEnvelope(rates, levels, sample_rate)`, with
  `getsample()` returning a pitch offset in Q24 per octave, and
  `keydown(down)`.
- `fmtones.scaling`: `midinote_to_logfreq`, `osc_freq` (ratio or fixed
  frequency mode), `scale_velocity`, `scale_rate`, `scale_curve` and
  `scale_level`.
- `fmtones.ringbuffer`: `RingBuffer`, a 64 KiB thread-safe byte queue with
  `write(data)` (which waits while full), `read(size)`,
  `bytes_available()` and `write_bytes_available()`.
- `fmtones.sawtooth`: `Sawtooth(sample_rate)`, a band-limited sawtooth
  `Module`; `control_last[0]` is the log2 frequency in Hz, in Q24.
- `fmtones.fir`: `SimpleFirFilter(kernel)` and `HalfRateFirFilter(kernel, n)`.
  `process(samples, n)` takes `n + len(kernel) - 1` input samples and
  returns `n` outputs; the half-rate filter needs an even `n` no larger than
  the one it was built with.
- `fmtones.resofilter`: `state_transition(f0, k)` computes the per-sample
  transition matrix of a four-pole ladder filter for a Q24 cutoff
  coefficient and resonance; `format_matrix(a)` renders it as text.
- `fmtones.algorithms`: the 32 operator routings in `ALGORITHMS`, the
  `OperatorFlags` bits, `n_out(ops)`, `format_algorithm(index)` and
  `dump()`.
- `fmtones.wavout`: `WavWriter(path, sample_rate, n_samples)`, which writes
  a mono 16-bit WAV file from Q24 samples, dithered and clipped; usable as a
  context manager.

## Example

```python
from fmtones.env import Envelope
from fmtones.exp2 import exp2_lookup
from fmtones.wavout import WavWriter

env = Envelope([70, 50, 30, 80], [99, 90, 70, 0], 99 * 32, 0)
gains = [exp2_lookup(env.getsample() - (14 << 24)) for _ in range(64)]

with WavWriter("out.wav", 44100, 64) as wav:
    wav.write_data(gains)
```

In log form `1 << 24` stands for one doubling; in linear form it is full
scale.

## What the package does not do

These are parts, not a finished instrument. The package has no FM operator
kernel and no voice that renders a note from an unpacked patch, no LFO, no
handling of MIDI messages, no audio device output and no command-line
program. `fmtones.algorithms` describes the routings but does not compute
audio through them.