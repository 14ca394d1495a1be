"""Offline WAV rendering for the time stretcher.

Usage:
    python -m vocoder.audio.render input.wav output.wav [--preset preset.json] [--factor 2.0]
"""

import argparse
import json
import logging

from shared.audio import load_wav, save_wav
from vocoder.engine.params import ALGORITHMS, CHOICE_NAMES, SCHEMA, default_params
from vocoder.engine.vocoder import render_stretch

log = logging.getLogger(__name__)


def load_preset(path):
    with open(path) as f:
        preset = json.load(f)
    preset.pop("_meta", None)
    return SCHEMA.validate_and_clamp(preset)


def build_parser():
    parser = argparse.ArgumentParser(description="Phase vocoder offline renderer")
    parser.add_argument("input", help="Input WAV file")
    parser.add_argument("output", help="Output WAV file")
    parser.add_argument("--preset", help="Preset JSON file")
    parser.add_argument("--factor", type=float, help="Time-stretch factor (>1 is slower)")
    parser.add_argument("--size", type=int, help="FFT size (power of two)")
    parser.add_argument("--hop", type=int, help="Analysis hop in samples")
    parser.add_argument("--window", choices=CHOICE_NAMES["window"])
    parser.add_argument("--algorithm", choices=ALGORITHMS)
    parser.add_argument("--seed", type=int, help="Random phase seed (paul-stretch)")
    parser.add_argument("--sr", type=int, help="Resample input to this rate first")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    params = default_params()
    if args.preset:
        params.update(load_preset(args.preset))
    for key in ("factor", "size", "hop", "window", "algorithm", "seed"):
        value = getattr(args, key)
        if value is not None:
            params[key] = value

    audio, sr = load_wav(args.input, args.sr)
    params["sample_rate"] = sr
    n = audio.shape[0]
    ch = "stereo" if audio.ndim == 2 else "mono"
    log.info("Loaded %s: %d samples, %d Hz, %s", args.input, n, sr, ch)

    output = render_stretch(audio, params)
    save_wav(args.output, output, sr)
    log.info("Saved %s (%d samples)", args.output, output.shape[0])
    return output


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(name)s %(levelname)s: %(message)s")
    main()
