"""Phase tracker: rewrite frame phases before resynthesis.

Two policies, selected by the config's algorithm:

  phase-vocoder -- keep each bin's locally measured frequency but advance its
                   phase by the synthesis hop instead of the analysis hop.
  paul-stretch  -- replace every phase with an independent uniform random
                   value in [0, 2*pi); magnitudes are left untouched.

Both mutate the frames in place.
"""

import numpy as np

from primitives.spectrum import band_frequency

PI2 = 2.0 * np.pi


def bin_frequencies(size, sample_rate):
    """Center frequency of every bin (the omega table)."""
    return band_frequency(np.arange(size, dtype=np.float64), size, sample_rate)


def recalc_phases(frames, config, omega=None):
    """Propagate phases with the instantaneous-frequency estimate.

    Frames 0 and 1 keep their analysis phases. For frame i >= 2 and every
    bin, the phase difference to frame i - 1 (already rewritten, since the
    frames are updated in place) gives a deviation from the bin's center
    frequency. The deviation is wrapped with ((d + pi) mod 2*pi) - pi and the
    new phase is the previous phase plus modified_hop_time times the
    corrected frequency.
    """
    size = config.size
    if omega is None:
        omega = bin_frequencies(size, config.sample_rate)
    original = config.original_hop_time
    modified = config.modified_hop_time

    for i in range(2, len(frames)):
        prev = frames[i - 1].phases[:size]
        current = frames[i].phases[:size]

        # prev was already rewritten on the previous pass
        delta_phi = current - prev
        delta_freq = delta_phi / original - omega
        wrapped = np.mod(delta_freq + np.pi, PI2) - np.pi
        current[:] = prev + modified * (omega + wrapped)
    return frames


def random_phases(frames, config, rng=None):
    """Give every bin of every frame a uniform random phase in [0, 2*pi)."""
    if rng is None:
        rng = np.random.RandomState(config.seed)
    size = config.size
    for frame in frames:
        frame.phases[:size] = rng.uniform(0.0, PI2, size)
    return frames
