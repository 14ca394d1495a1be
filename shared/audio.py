"""WAV I/O shared by the offline renderer and the listening tests."""

from math import gcd

import numpy as np
from scipy.io import wavfile


def load_wav(path, sr=None):
    """Load a WAV file as float64 in [-1, 1].

    Resamples to `sr` when given, otherwise keeps the file's rate.
    Returns (audio_array, sample_rate); stereo comes back as (samples, 2).
    """
    file_sr, data = wavfile.read(path)
    if data.dtype == np.int16:
        audio = data.astype(np.float64) / 32768.0
    elif data.dtype == np.int32:
        audio = data.astype(np.float64) / 2147483648.0
    elif data.dtype == np.uint8:
        audio = (data.astype(np.float64) - 128.0) / 128.0
    else:
        audio = data.astype(np.float64)
    if sr is None or file_sr == sr:
        return audio, file_sr
    from scipy.signal import resample_poly
    g = gcd(sr, file_sr)
    audio = resample_poly(audio, sr // g, file_sr // g, axis=0)
    return audio, sr


def save_wav(path, audio, sr=44100):
    """Save audio to a 16-bit WAV file with peak normalization.

    Stretched output has an arbitrary length (frames * synthesis hop + size)
    and may be empty when the input was shorter than one frame; an empty
    buffer is written as a zero-length file instead of failing on max().
    Mono (samples,) and multichannel (samples, ch) layouts are both accepted.
    """
    peak = np.max(np.abs(audio)) if len(audio) else 0.0
    if peak > 1.0:
        audio = audio / peak * 0.95
    elif 0 < peak < 0.1:
        audio = audio / peak * 0.9
    out = (np.clip(audio, -1.0, 1.0) * 32767).astype(np.int16)
    wavfile.write(path, sr, out)
