"""Radix-2 Cooley-Tukey FFT with precomputed tables.

TransformTables holds everything that depends only on the size: the
bit-reversal permutation and the per-stage twiddle steps sin(-pi/i) and
cos(-pi/i). The arrays are frozen after construction, so one set of tables can
be shared by any number of FFT engines (and threads) of the same size.

Usage:
    ft = FFT(1024)
    spectrum = ft.forward(signal)              # real input, imag = 0
    ft.forward(ComplexFrame(re, im), out)      # complex input, reuse out
    back = ft.inverse(spectrum).real           # normalized by 1 / size

Output buffers shorter than size receive the first len(output) bins only,
e.g. size // 2 + 1 bins for the symmetric spectrum of a real signal.

The inverse conjugates the input, runs the forward butterflies and divides by
size. Its real part is the inverse DFT; for complex input the imaginary part
comes out with the opposite sign of np.fft.ifft.
"""

import numpy as np
from numba import njit

from primitives.errors import ConfigurationError, LengthMismatchError
from primitives.spectrum import ComplexFrame


def is_pow2(v):
    v = int(v)
    return v > 0 and (v & (v - 1)) == 0


class TransformTables:
    """Read-only lookup tables for one transform size."""

    def __init__(self, size: int):
        if not is_pow2(size):
            raise ConfigurationError(f"Size must be a power of 2, and was: {size}")
        self.size = int(size)

        reverse = np.zeros(self.size, dtype=np.int64)
        limit = 1
        bit = self.size >> 1
        while limit < self.size:
            reverse[limit:2 * limit] = reverse[:limit] + bit
            limit <<= 1
            bit >>= 1

        # Index 0 is never read by the butterfly loop (stage widths start at 1).
        i = np.arange(1, self.size, dtype=np.float64)
        sin_table = np.zeros(self.size)
        cos_table = np.ones(self.size)
        sin_table[1:] = np.sin(-np.pi / i)
        cos_table[1:] = np.cos(-np.pi / i)

        for arr in (reverse, sin_table, cos_table):
            arr.flags.writeable = False
        self.reverse_table = reverse
        self.sin_table = sin_table
        self.cos_table = cos_table


@njit(cache=True)
def _transform(direction, reverse_table, cos_table, sin_table,
               in_real, in_imag, real, imag):
    """In-place iterative butterflies. direction: 1 forward, -1 inverse."""
    size = len(reverse_table)
    for i in range(size):
        real[i] = in_real[reverse_table[i]]
        imag[i] = direction * in_imag[reverse_table[i]]

    half = 1
    while half < size:
        step_re = cos_table[half]
        step_im = sin_table[half]
        cur_re = 1.0
        cur_im = 0.0
        for fft_step in range(half):
            i = fft_step
            while i < size:
                off = i + half
                tr = cur_re * real[off] - cur_im * imag[off]
                ti = cur_re * imag[off] + cur_im * real[off]
                real[off] = real[i] - tr
                imag[off] = imag[i] - ti
                real[i] += tr
                imag[i] += ti
                i += half << 1
            tmp = cur_re
            cur_re = tmp * step_re - cur_im * step_im
            cur_im = tmp * step_im + cur_im * step_re
        half <<= 1

    if direction == -1:
        # normalization is applied on the inverse only
        for i in range(size):
            real[i] /= size
            imag[i] /= size


class FFT:
    """Forward/inverse transform engine for a fixed power-of-two size.

    Pass `tables` to share TransformTables between engines. The engine keeps
    one scratch pair for truncated or aliased outputs; use one engine per
    thread and share the tables instead.
    """

    def __init__(self, size: int, tables: TransformTables | None = None):
        if tables is None:
            tables = TransformTables(size)
        elif tables.size != size:
            raise ConfigurationError(
                f"Tables were built for size {tables.size}, not {size}")
        self.tables = tables
        self.size = tables.size
        self._zero_imag = np.zeros(self.size)
        self._zero_imag.flags.writeable = False
        self._scratch = ComplexFrame.zeros(self.size)

    def forward(self, input, output=None):
        return self._process(1, input, output)

    def inverse(self, input, output=None):
        return self._process(-1, input, output)

    def _split(self, input):
        if isinstance(input, ComplexFrame):
            real = np.asarray(input.real, dtype=np.float64)
            imag = np.asarray(input.imag, dtype=np.float64)
        else:
            real = np.asarray(input, dtype=np.float64)
            imag = self._zero_imag
        if len(real) != self.size:
            raise LengthMismatchError(
                f"Real buffer length must be {self.size} but was {len(real)}")
        if len(imag) != self.size:
            raise LengthMismatchError(
                f"Imag buffer length must be {self.size} but was {len(imag)}")
        return real, imag

    def _process(self, direction, input, output):
        in_real, in_imag = self._split(input)
        t = self.tables
        if output is None:
            output = ComplexFrame.zeros(self.size)

        direct = (len(output.real) >= self.size and len(output.imag) >= self.size
                  and not np.may_share_memory(output.real, in_real)
                  and not np.may_share_memory(output.real, in_imag)
                  and not np.may_share_memory(output.imag, in_real)
                  and not np.may_share_memory(output.imag, in_imag))
        if direct:
            _transform(direction, t.reverse_table, t.cos_table, t.sin_table,
                       in_real, in_imag,
                       output.real[:self.size], output.imag[:self.size])
            return output

        work = self._scratch
        _transform(direction, t.reverse_table, t.cos_table, t.sin_table,
                   in_real, in_imag, work.real, work.imag)
        n_re = min(len(output.real), self.size)
        n_im = min(len(output.imag), self.size)
        output.real[:n_re] = work.real[:n_re]
        output.imag[:n_im] = work.imag[:n_im]
        return output
