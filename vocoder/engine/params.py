"""Parameter contract for the time-stretch engine.

The CLI, JSON presets and batch scripts all describe a stretch as a params
dict in this format. StretchConfig is the validated, typed form the engine
runs on.
"""

from dataclasses import asdict, dataclass

from primitives.errors import ConfigurationError
from primitives.fft import is_pow2
from primitives.windows import WINDOWS
from shared.params import ParamType as T, ParamDef, ParamSchema

SR = 44100

PHASE_VOCODER = "phase-vocoder"
PAUL_STRETCH = "paul-stretch"
ALGORITHMS = [PHASE_VOCODER, PAUL_STRETCH]

# ── Schema ────────────────────────────────────────────────────────────

_PARAMS = [
    ParamDef("size", T.INT, section="analysis", default=4096,
             range=(2, 65536), help="FFT length, a power of two"),

    ParamDef("hop", T.OPTIONAL_INT, section="analysis", default=None,
             range=(1, 65535), help="analysis stride in samples (default size / 2)"),

    ParamDef("window", T.CHOICE, section="analysis", default="hanning",
             choices=list(WINDOWS.keys())),

    ParamDef("sample_rate", T.INT, section="analysis", default=SR,
             range=(1, 384000)),

    ParamDef("factor", T.FLOAT, section="stretch", default=1.0,
             range=(0.01, 100.0), help="output/input hop ratio, >1 stretches"),

    ParamDef("algorithm", T.CHOICE, section="stretch", default=PHASE_VOCODER,
             choices=ALGORITHMS),

    ParamDef("seed", T.OPTIONAL_INT, section="stretch", default=None,
             help="random phase seed for paul-stretch"),
]

SCHEMA = ParamSchema(_PARAMS)

default_params = SCHEMA.default_params
PARAM_RANGES = SCHEMA.param_ranges()
PARAM_SECTIONS = SCHEMA.param_sections()
CHOICE_NAMES = SCHEMA.choice_names()


@dataclass
class StretchConfig:
    size: int = 4096
    hop: int | None = None
    sample_rate: int = SR
    factor: float = 1.0
    window: str = "hanning"
    algorithm: str = PHASE_VOCODER
    seed: int | None = None

    def __post_init__(self):
        if self.hop is None and is_pow2(self.size):
            self.hop = int(self.size) // 2

    @property
    def synthesis_hop(self) -> int:
        """Output stride in whole samples, round(hop * factor)."""
        return int(round(self.hop * self.factor))

    @property
    def original_hop_time(self) -> float:
        return self.hop / self.sample_rate

    @property
    def modified_hop_time(self) -> float:
        return self.synthesis_hop / self.sample_rate

    def num_frames(self, signal_length: int) -> int:
        """floor((length - size) / hop), never negative."""
        return max(0, (int(signal_length) - self.size) // self.hop)

    def output_length(self, num_frames: int) -> int:
        return num_frames * self.synthesis_hop + self.size

    def validate(self):
        """Raise ConfigurationError for anything the engine cannot run."""
        if not is_pow2(self.size):
            raise ConfigurationError(f"Size must be a power of 2, and was: {self.size}")
        if self.hop is None or not 1 <= self.hop < self.size:
            raise ConfigurationError(
                f"Hop must be in [1, {self.size}), and was: {self.hop}")
        if self.sample_rate <= 0:
            raise ConfigurationError(f"Sample rate must be positive, and was: {self.sample_rate}")
        if self.factor <= 0:
            raise ConfigurationError(f"Factor must be positive, and was: {self.factor}")
        if self.synthesis_hop < 1:
            raise ConfigurationError(
                f"Factor {self.factor} with hop {self.hop} gives an empty synthesis hop")
        if self.window not in WINDOWS:
            raise ConfigurationError(
                f"Unknown window '{self.window}'. Options: {list(WINDOWS.keys())}")
        if self.algorithm not in ALGORITHMS:
            raise ConfigurationError(
                f"Unknown algorithm '{self.algorithm}'. Options: {ALGORITHMS}")
        return self

    def to_params(self) -> dict:
        return asdict(self)

    @classmethod
    def from_params(cls, params: dict) -> "StretchConfig":
        """Build a config from a (possibly partial) params dict.

        Values are cast and clamped through SCHEMA first; missing keys take
        their defaults.
        """
        merged = default_params()
        merged.update(SCHEMA.validate_and_clamp(params))
        return cls(**merged)
