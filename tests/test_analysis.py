"""Test STFT analysis and overlap-add synthesis in isolation.

Run: uv run python tests/test_analysis.py
"""

import numpy as np
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from primitives.errors import ConfigurationError
from primitives.fft import FFT
from primitives.spectrum import PolarFrame
from primitives.windows import hanning
from vocoder.engine.analysis import analysis
from vocoder.engine.params import StretchConfig
from vocoder.engine.synthesis import synthesis


# ---------------------------------------------------------------------------
# Test 1: 16-sample ramp, size 8, hop 4 -> 2 frames of 8 bins
# ---------------------------------------------------------------------------
def test_ramp_frames():
    print("Test 1: ramp analysis")
    signal = np.arange(16, dtype=np.float64)
    frames = analysis(signal, size=8, hop=4)
    assert len(frames) == 2, f"expected floor((16 - 8) / 4) = 2 frames, got {len(frames)}"
    for i, frame in enumerate(frames):
        assert len(frame.magnitudes) == 8 and len(frame.phases) == 8

        # rectangular window -> fftshift -> FFT
        ref = np.fft.fft(np.fft.fftshift(signal[i * 4:i * 4 + 8]))
        ours = frame.magnitudes * np.exp(1j * frame.phases)
        assert np.allclose(ours, ref, atol=1e-9), f"frame {i} spectrum differs"


def test_windowed_frames():
    print("Test 2: Hann-windowed analysis vs numpy")
    rng = np.random.RandomState(0)
    signal = rng.randn(1000)
    size, hop = 64, 16
    frames = analysis(signal, size, hop, window_fn=hanning(), ft=FFT(size))
    assert len(frames) == (1000 - size) // hop
    w = 0.5 * (1 - np.cos(2 * np.pi * np.arange(size) / (size - 1)))
    for i in [0, 7, len(frames) - 1]:
        ref = np.fft.fft(np.fft.fftshift(signal[i * hop:i * hop + size] * w))
        assert np.allclose(frames[i].magnitudes, np.abs(ref), atol=1e-9)


# ---------------------------------------------------------------------------
# Test 3: degenerate lengths and independent storage
# ---------------------------------------------------------------------------
def test_short_signal():
    print("Test 3: signals shorter than one frame")
    assert analysis(np.zeros(5), 8, 4) == []
    assert analysis(np.zeros(8), 8, 4) == []
    assert analysis(np.zeros(0), 8, 4) == []
    assert len(analysis(np.zeros(12), 8, 4)) == 1


def test_frames_do_not_alias():
    print("Test 4: frames own their arrays")
    frames = analysis(np.random.RandomState(1).randn(64), 16, 4)
    assert len(frames) == 12
    for a, b in zip(frames, frames[1:]):
        assert not np.shares_memory(a.magnitudes, b.magnitudes)
        assert not np.shares_memory(a.phases, b.phases)
    before = frames[1].phases.copy()
    frames[0].phases[:] = 0.0
    assert np.array_equal(frames[1].phases, before)


def test_analysis_rejects_bad_hop():
    print("Test 5: analysis with a zero or negative hop")
    for hop in [0, -4]:
        try:
            analysis(np.zeros(64), 8, hop)
        except ConfigurationError:
            pass
        else:
            raise AssertionError(f"hop {hop} accepted")



# ---------------------------------------------------------------------------
# Test 6: overlap-add synthesis
# ---------------------------------------------------------------------------
def test_synthesis_requires_frames():
    print("Test 6: synthesis without frames")
    config = StretchConfig(size=8, hop=4, sample_rate=8)
    for empty in ([], None):
        try:
            synthesis(empty, config)
        except ConfigurationError:
            pass
        else:
            raise AssertionError("synthesis accepted no frames")


def test_synthesis_overlap_add():
    print("Test 7: synthesis adds hop-length segments")
    size, hop = 8, 4
    signal = np.arange(24, dtype=np.float64)
    frames = analysis(signal, size, hop)
    config = StretchConfig(size=size, hop=hop, sample_rate=8, factor=1.0)
    out = synthesis(frames, config)
    assert len(out) == len(frames) * hop + size
    n = len(frames) * hop
    assert np.allclose(out[:n], signal[:n], atol=1e-9)
    assert np.all(out[n:] == 0.0)

    # adds into an existing buffer instead of overwriting it
    base = np.ones(len(out))
    synthesis(frames, config, output=base)
    assert np.allclose(base[:n], signal[:n] + 1.0, atol=1e-9)

    # a short output buffer only takes what fits
    short = np.zeros(6)
    synthesis(frames, config, output=short)
    assert np.allclose(short, signal[:6], atol=1e-9)


def test_synthesis_long_hop():
    print("Test 8: synthesis hop longer than the frame")
    frames = [PolarFrame(np.ones(8), np.zeros(8)) for _ in range(3)]
    config = StretchConfig(size=8, hop=4, sample_rate=8, factor=3.0)
    out = synthesis(frames, config)
    assert len(out) == 3 * 12 + 8
    assert np.all(out[8:12] == 0.0), "gap between frames must stay silent"


if __name__ == "__main__":
    test_ramp_frames()
    test_windowed_frames()
    test_short_signal()
    test_frames_do_not_alias()
    test_analysis_rejects_bad_hop()
    test_synthesis_requires_frames()
    test_synthesis_overlap_add()
    test_synthesis_long_hop()
    print("\nDone!")
