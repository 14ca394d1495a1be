"""Error types raised by the transform engine.

All of them are deterministic programming/config errors, raised synchronously
at the offending call.
"""


class VocoderError(Exception):
    """Base class for every engine error."""


class ConfigurationError(VocoderError, ValueError):
    """Bad transform size, hop, factor, window, algorithm, or missing input."""


class LengthMismatchError(VocoderError, ValueError):
    """A real/imag buffer does not match the configured transform size."""
