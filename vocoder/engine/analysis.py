"""STFT analysis: signal -> sequence of polar frames.

Per frame: copy size samples at i * hop -> multiply by the window table ->
cyclic shift (zero-phase windowing) -> forward FFT -> polar form.
"""

import numpy as np

from primitives.arrays import fill, mult, zeros
from primitives.errors import ConfigurationError
from primitives.fft import FFT
from primitives.shift import fftshift
from primitives.spectrum import ComplexFrame, polar
from primitives.windows import rectangular


def analysis(signal, size, hop, window_fn=None, ft=None, window=None):
    """Slice signal into overlapping windowed frames and transform each one.

    Args:
        signal: 1D float array
        size: FFT length (power of two)
        hop: stride between frames in samples
        window_fn: w(n, N) generator, rectangular if omitted
        ft: FFT engine of this size, built if omitted
        window: precomputed window table (overrides window_fn)

    Returns:
        list of PolarFrame, floor((len(signal) - size) / hop) of them; an
        empty list when the signal is shorter than one frame. Every frame
        owns its arrays.
    """
    if hop < 1:
        raise ConfigurationError(f"Hop must be at least 1, and was: {hop}")
    signal = np.asarray(signal, dtype=np.float64)
    num_frames = max(0, (len(signal) - size) // hop)
    if ft is None:
        ft = FFT(size)
    if window is None:
        window = fill(size, window_fn or rectangular())

    frames = []
    frame = zeros(size)
    fd_frame = ComplexFrame.zeros(size)
    for i in range(num_frames):
        start = i * hop
        frame[:] = signal[start:start + size]
        mult(size, window, frame, frame)
        fftshift(frame)
        ft.forward(frame, fd_frame)
        frames.append(polar(fd_frame))
    return frames
