"""Array helpers shared by the FFT, spectrum and vocoder modules.

The first argument of the elementwise helpers is the number of samples to
process, the last one an optional output buffer so callers can work in place:

    add(n, a, b)        # new array
    add(n, a, b, a)     # in place, result stored in a
"""

import numpy as np


def zeros(size):
    """Float64 array filled with zeros."""
    return np.zeros(int(size), dtype=np.float64)


def fill(size, fn, output=None):
    """Fill an array with fn(n, size), where n is the index array 0..size-1.

    fn is evaluated once on the whole index array, so it must broadcast
    (every window generator in primitives.windows does). A scalar result
    fills the whole array.
    """
    if output is None:
        output = zeros(size)
    output[:size] = fn(np.arange(size, dtype=np.float64), size)
    return output


def concat(a, b, dest=None, offset=0):
    """Copy a then b into dest starting at offset.

    If dest is given it must hold at least len(a) + len(b) + offset samples.
    """
    al, bl = len(a), len(b)
    if dest is None:
        dest = zeros(al + bl + offset)
    dest[offset:offset + al] = a
    dest[offset + al:offset + al + bl] = b
    return dest


def add(n, a, b, out=None):
    if out is None:
        out = zeros(n)
    np.add(a[:n], b[:n], out=out[:n])
    return out


def mult(n, a, b, out=None):
    if out is None:
        out = zeros(n)
    np.multiply(a[:n], b[:n], out=out[:n])
    return out


def subtract(n, a, b, out=None):
    if out is None:
        out = zeros(n)
    np.subtract(a[:n], b[:n], out=out[:n])
    return out


def round_to(decimals):
    """Build a rounding function with a default number of decimals.

    The returned function writes up to the overlap of the input and output
    lengths and turns negative zeros into plain zeros, which keeps printed
    spectra and test fixtures stable.
    """
    def _round(arr, n=decimals, output=None):
        arr = np.asarray(arr, dtype=np.float64)
        if output is None:
            output = zeros(len(arr))
        limit = min(len(arr), len(output))
        m = 10.0 ** n
        r = np.floor(arr[:limit] * m + 0.5) / m  # half up
        r[r == 0.0] = 0.0  # -0 -> 0
        output[:limit] = r
        return output
    return _round


round_array = round_to(8)


def test_all(n, fn, array):
    """True if fn holds for the first n items of array."""
    for i in range(n):
        if not fn(array[i]):
            return False
    return True


# not a pytest test
test_all.__test__ = False
