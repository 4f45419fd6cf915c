"""Fixed-point building blocks for six-operator FM synthesis: lookup tables,
envelopes, patch unpacking, scaling, a sawtooth oscillator, filters and WAV
output."""

__version__ = "0.1.0"