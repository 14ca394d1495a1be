"""Cyclic buffer rotation for zero-phase windowing.

fftshift moves the temporal center of a windowed frame to index 0 before the
forward transform; ifftshift undoes it after the inverse transform. Both rotate
in place with three reversals (O(N) time, O(1) extra space) and return the same
buffer, so ifftshift(fftshift(x)) is x again for any length, odd included.
"""

from numba import njit


@njit(cache=True)
def _reverse(src, start, stop):
    """Reverse src[start:stop] in place."""
    i = start
    j = stop - 1
    while i < j:
        tmp = src[i]
        src[i] = src[j]
        src[j] = tmp
        i += 1
        j -= 1


@njit(cache=True)
def _rotate(src, n):
    """Triple-reversal rotation kernel."""
    length = len(src)
    _reverse(src, 0, length)
    _reverse(src, 0, n)
    _reverse(src, n, length)


def rotate(src, n):
    """Rotate src right by n positions in place (src[0] ends up at src[n])."""
    _rotate(src, n)
    return src


def fftshift(src):
    return rotate(src, len(src) // 2)


def ifftshift(src):
    return rotate(src, (len(src) + 1) // 2)
