"""Frequency-domain frames and polar/rectangular conversions.

A ComplexFrame holds one transform frame in rectangular form, a PolarFrame the
same data as magnitudes and phases. polar() and rectangular() write up to the
overlap of the input and output lengths, so a real signal's spectrum can be
stored in size // 2 + 1 bins by passing shorter output buffers.
"""

from dataclasses import dataclass

import numpy as np

from primitives.arrays import zeros

PI2 = 2.0 * np.pi


@dataclass
class ComplexFrame:
    real: np.ndarray
    imag: np.ndarray

    @classmethod
    def zeros(cls, size):
        return cls(zeros(size), zeros(size))

    def __len__(self):
        return len(self.real)


@dataclass
class PolarFrame:
    magnitudes: np.ndarray
    phases: np.ndarray

    @classmethod
    def zeros(cls, size):
        return cls(zeros(size), zeros(size))

    def __len__(self):
        return len(self.magnitudes)


def band_width(size, sample_rate):
    """Width of one bin in Hz."""
    return 2.0 / size * sample_rate / 2.0


def band_frequency(index, size, sample_rate):
    """Center frequency (Hz) of bin `index`. Works on index arrays too."""
    width = band_width(size, sample_rate)
    return width * index + width / 2.0


def phmod(ph):
    """Phase modulo 2*pi, in [0, 2*pi)."""
    return np.mod(ph, PI2)


def polar(frame, output=None):
    """Rectangular {real, imag} -> polar {magnitudes, phases}.

    magnitude = sqrt(re^2 + im^2), phase = atan2(im, re) in (-pi, pi].
    """
    real, imag = frame.real, frame.imag
    if output is None:
        output = PolarFrame.zeros(len(real))
    limit = min(len(real), len(output.magnitudes))
    re = real[:limit]
    im = imag[:limit]
    np.hypot(re, im, out=output.magnitudes[:limit])
    np.arctan2(im, re, out=output.phases[:limit])
    return output


def rectangular(spectrum, output=None):
    """Polar {magnitudes, phases} -> rectangular {real, imag}."""
    magnitudes, phases = spectrum.magnitudes, spectrum.phases
    if output is None:
        output = ComplexFrame.zeros(len(magnitudes))
    limit = min(len(magnitudes), len(output.real))
    mags = magnitudes[:limit]
    ph = phases[:limit]
    np.multiply(mags, np.cos(ph), out=output.real[:limit])
    np.multiply(mags, np.sin(ph), out=output.imag[:limit])
    return output


def unwrap(data, output=None):
    """Remove 2*pi jumps from a phase sequence.

    Every value is first taken modulo 2*pi; whenever two neighbours differ by
    more than pi a running multiple of 2*pi is added to the rest.
    """
    size = len(data)
    if output is None:
        output = zeros(size)
    if size == 0:
        return output
    wrapped = phmod(np.asarray(data, dtype=np.float64))
    diff = np.diff(wrapped)
    steps = np.where(diff < -np.pi, PI2, np.where(diff > np.pi, -PI2, 0.0))
    output[0] = wrapped[0]
    output[1:size] = wrapped[1:] + np.cumsum(steps)
    return output
