"""Overlap-add resynthesis: polar frames -> signal.

Per frame: polar -> rectangular -> inverse FFT -> undo the cyclic shift ->
add the first synthesis_hop samples into the output at the write position,
then advance the position by synthesis_hop.
"""

from primitives.arrays import add, zeros
from primitives.errors import ConfigurationError
from primitives.fft import FFT
from primitives.shift import ifftshift
from primitives.spectrum import ComplexFrame, rectangular


def synthesis(frames, config, ft=None, output=None):
    """Resynthesize frames into a time-domain signal.

    Args:
        frames: non-empty list of PolarFrame (read only)
        config: StretchConfig (size, hop, factor)
        ft: FFT engine of config.size, built if omitted
        output: buffer to add into; a zeroed one of
            len(frames) * synthesis_hop + size samples if omitted. A shorter
            buffer only receives the samples that fit.

    Returns:
        the output buffer
    """
    if not frames:
        raise ConfigurationError('"frames" parameter is required in synthesis')

    size = config.size
    hop_s = config.synthesis_hop
    if ft is None:
        ft = FFT(size)
    if output is None:
        output = zeros(config.output_length(len(frames)))

    # A synthesis hop longer than the frame leaves a silent gap.
    segment = min(hop_s, size)
    rect = ComplexFrame.zeros(size)
    time_domain = ComplexFrame.zeros(size)
    position = 0
    for frame in frames:
        n = min(segment, len(output) - position)
        if n <= 0:
            break
        rectangular(frame, rect)
        signal = ft.inverse(rect, time_domain).real
        ifftshift(signal)
        write = output[position:position + n]
        add(n, signal, write, write)
        position += hop_s
    return output
