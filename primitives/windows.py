"""Analysis window generators.

Each factory returns a function w(n, N) giving the weight of sample n in a
window of N samples. The functions broadcast over numpy index arrays, so a
whole table is built with primitives.arrays.fill(N, window_fn).

All windows are symmetric (denominator N - 1), matching
scipy.signal.windows.*(N, sym=True).
"""

import numpy as np

PI2 = 2.0 * np.pi


def _angle(n, N):
    # A single-sample window is all center: z = pi gives weight 1 everywhere.
    if N <= 1:
        return np.full_like(np.asarray(n, dtype=np.float64), np.pi)
    return PI2 * np.asarray(n, dtype=np.float64) / (N - 1)


def rectangular():
    """No weighting. Analysis falls back to it when given no window."""
    return lambda n, N: np.ones_like(np.asarray(n, dtype=np.float64))


def hanning():
    def w(n, N):
        z = _angle(n, N)
        return 0.5 * (1.0 - np.cos(z))
    return w


def hamming():
    def w(n, N):
        z = _angle(n, N)
        return 0.54 - 0.46 * np.cos(z)
    return w


def blackman(a=0.16):
    """Blackman window; a=0.16 gives the classic 0.42/0.5/0.08 weights."""
    def w(n, N):
        z = _angle(n, N)
        return (1.0 - a) / 2.0 - 0.5 * np.cos(z) + a * np.cos(2.0 * z) / 2.0
    return w


def blackman_harris():
    """4-term Blackman-Harris (~92 dB sidelobes)."""
    def w(n, N):
        z = _angle(n, N)
        return (0.35875 - 0.48829 * np.cos(z)
                + 0.14128 * np.cos(2.0 * z)
                - 0.01168 * np.cos(3.0 * z))
    return w


WINDOWS = {
    "rectangular": rectangular,
    "hanning": hanning,
    "hamming": hamming,
    "blackman": blackman,
    "blackman-harris": blackman_harris,
}


def get_window_fn(name):
    """Window function by name (see WINDOWS)."""
    try:
        factory = WINDOWS[name]
    except KeyError:
        raise ValueError(f"Unknown window '{name}'. Options: {list(WINDOWS.keys())}") from None
    return factory()
