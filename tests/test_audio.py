"""Test WAV load/save helpers and the params schema.

Run: uv run python tests/test_audio.py
"""

import numpy as np
from scipy.io import wavfile
import os
import sys
import tempfile

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from shared.audio import load_wav, save_wav
from shared.params import ParamDef, ParamSchema, ParamType as T


def test_load_formats():
    print("Test 1: int16 / uint8 / float WAV loading")
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "a.wav")
        wavfile.write(path, 8000, np.array([0, 16384, -32768], dtype=np.int16))
        audio, sr = load_wav(path)
        assert sr == 8000 and audio.tolist() == [0.0, 0.5, -1.0]

        wavfile.write(path, 8000, np.array([128, 192, 0], dtype=np.uint8))
        audio, _ = load_wav(path)
        assert audio.tolist() == [0.0, 0.5, -1.0]

        stereo = np.zeros((100, 2), dtype=np.float32)
        wavfile.write(path, 8000, stereo)
        audio, _ = load_wav(path)
        assert audio.shape == (100, 2) and audio.dtype == np.float64


def test_resample_and_save():
    print("Test 2: resampling and 16-bit save")
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "b.wav")
        t = np.arange(11025) / 22050
        save_wav(path, 2.0 * np.sin(2 * np.pi * 440 * t), 22050)
        sr, raw = wavfile.read(path)
        assert sr == 22050 and raw.dtype == np.int16
        assert np.max(np.abs(raw)) <= int(0.95 * 32767) + 1, "peak not normalized"

        audio, sr = load_wav(path, sr=44100)
        assert sr == 44100 and len(audio) == 22050

        # a stretch of a too-short input can be empty
        empty = os.path.join(tmp, "empty.wav")
        save_wav(empty, np.zeros(0), 22050)
        sr, raw = wavfile.read(empty)
        assert sr == 22050 and len(raw) == 0


def test_schema():
    print("Test 3: ParamSchema validation")
    schema = ParamSchema([
        ParamDef("gain", T.FLOAT, default=0.5, section="a", range=(0.0, 1.0)),
        ParamDef("taps", T.INT, default=4, section="a", range=(1, 8)),
        ParamDef("shape", T.CHOICE, default="sine", section="b", choices=["sine", "saw"]),
        ParamDef("seed", T.OPTIONAL_INT, default=None, section="b"),
    ])
    assert schema.default_params() == {"gain": 0.5, "taps": 4, "shape": "sine", "seed": None}
    assert schema.param_ranges() == {"gain": (0.0, 1.0), "taps": (1, 8)}
    assert schema.param_sections() == {"a": ["gain", "taps"], "b": ["shape", "seed"]}
    assert schema.choice_names() == {"shape": ["sine", "saw"]}

    clean = schema.validate_and_clamp(
        {"gain": 3, "taps": 2.6, "shape": "square", "seed": None, "x": 1})
    assert clean == {"gain": 1.0, "taps": 3, "seed": None}
    assert schema.validate_and_clamp({"gain": "loud", "taps": "7"}) == {"taps": 7}
    assert len(schema) == 4 and schema.get("taps").range == (1, 8)
    assert schema.get("missing") is None


if __name__ == "__main__":
    test_load_formats()
    test_resample_and_save()
    test_schema()
    print("\nDone!")
