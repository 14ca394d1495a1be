"""Phase vocoder time-stretch engine.

Signal flow:
    signal -> analysis (window + shift + FFT + polar) -> [process hook]
           -> phase tracker (phase-vocoder | paul-stretch)
           -> synthesis (rectangular + inverse FFT + unshift + overlap-add)
           -> output

The engine validates its config once and precomputes everything that only
depends on it: FFT tables, the window table, the bin center frequencies and
the random source. stretch() can then be called any number of times.
"""

import logging
import time

import numpy as np

from primitives.arrays import fill, zeros
from primitives.fft import FFT
from primitives.windows import get_window_fn
from vocoder.engine.analysis import analysis
from vocoder.engine.params import PAUL_STRETCH, PHASE_VOCODER, StretchConfig
from vocoder.engine.phases import bin_frequencies, random_phases, recalc_phases
from vocoder.engine.synthesis import synthesis

log = logging.getLogger(__name__)


class PhaseVocoder:
    """STFT time-stretcher for one fixed configuration.

    Usage:
        pv = PhaseVocoder(size=2048, hop=512, sample_rate=44100)
        out = pv.stretch(signal, factor=2.0)

    `tables` lets several engines of the same size share one set of
    TransformTables.
    """

    def __init__(self, config: StretchConfig | None = None, tables=None, **kwargs):
        if config is None:
            config = StretchConfig(**kwargs)
        elif kwargs:
            raise TypeError("Pass either a StretchConfig or keyword arguments, not both")
        self.config = config.validate()

        self.ft = FFT(config.size, tables)
        self.window = fill(config.size, get_window_fn(config.window))
        self.omega = bin_frequencies(config.size, config.sample_rate)
        self.rng = np.random.RandomState(config.seed)
        log.debug("phase vocoder: size=%d hop=%d window=%s algorithm=%s",
                  config.size, config.hop, config.window, config.algorithm)

    def analyze(self, signal):
        c = self.config
        return analysis(signal, c.size, c.hop, ft=self.ft, window=self.window)

    def track_phases(self, frames, config=None):
        config = config or self.config
        if config.algorithm == PHASE_VOCODER:
            recalc_phases(frames, config, self.omega)
        elif config.algorithm == PAUL_STRETCH:
            random_phases(frames, config, self.rng)
        return frames

    def synthesize(self, frames, config=None, output=None):
        return synthesis(frames, config or self.config, ft=self.ft, output=output)

    def stretch(self, signal, factor=None, output=None, process=None):
        """Time-stretch `signal` by `factor` (config.factor if omitted).

        `process(frames, config)` runs between analysis and phase tracking
        and may edit the frames in place.

        A signal shorter than one frame gives zeros of length size (or the
        caller's output, untouched).
        """
        config = self.config
        if factor is not None and factor != config.factor:
            config = StretchConfig(**dict(config.to_params(), factor=factor)).validate()

        frames = self.analyze(signal)
        if not frames:
            log.debug("signal of %d samples is shorter than one frame", len(signal))
            return zeros(config.size) if output is None else output

        if process is not None:
            process(frames, config)
        self.track_phases(frames, config)
        return self.synthesize(frames, config, output)


def paul_stretch(size=512, hop=125, sample_rate=44100, seed=None):
    """Random-phase stretcher for extreme factors.

    Returns stretch(factor, signal) using a rectangular window. hop is clamped
    so it stays below size.
    """
    hop = min(hop, size - 1)
    config = StretchConfig(size=size, hop=hop, sample_rate=sample_rate,
                           window="rectangular", algorithm=PAUL_STRETCH, seed=seed)
    pv = PhaseVocoder(config)

    def stretch(factor, signal, output=None):
        return pv.stretch(signal, factor=factor, output=output)

    return stretch


def render_stretch(input_audio: np.ndarray, params: dict) -> np.ndarray:
    """The single entry point for CLI and batch rendering.

    Args:
        input_audio: float64 array, mono (samples,) or multichannel (samples, ch)
        params: parameter dict (see vocoder/engine/params.py)

    Returns:
        stretched audio with the same channel layout
    """
    config = StretchConfig.from_params(params)
    pv = PhaseVocoder(config)
    t0 = time.perf_counter()

    if input_audio.ndim == 2:
        channels = [pv.stretch(input_audio[:, ch]) for ch in range(input_audio.shape[1])]
        result = np.column_stack(channels)
    else:
        result = pv.stretch(input_audio)

    elapsed = time.perf_counter() - t0
    duration = input_audio.shape[0] / config.sample_rate
    rtf = duration / elapsed if elapsed > 0 else float('inf')
    log.info("stretch %.1fs audio x%.2f in %.3fs (%s, %.0fx RT)",
             duration, config.factor, elapsed, config.algorithm, rtf)
    return result
