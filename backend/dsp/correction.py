"""
Window correction factors.

Tapering windows attenuate the signal. Two independent corrections undo
that for downstream comparisons:

- Energy factor: size / sum(window), rescales time-domain energy
  estimates of a block.
- Amplitude constant: a fixed per-family multiplier for magnitude peaks
  read from the spectrum. The constants were measured, not derived.
"""

from types import MappingProxyType

import numpy as np

from dsp.windows import WindowFamily

AMPLITUDE_CORRECTION = MappingProxyType({
    WindowFamily.NONE: 1.0,
    WindowFamily.TUKEY: 1.2122,
    WindowFamily.FLAT_TOP: 4.63899,
    WindowFamily.HANN: 1.99986,
    WindowFamily.HAMMING: 1.85196,
})


def window_energy_factor(coefficients):
    """
    Energy correction for a window array.

    Args:
        coefficients: Window values

    Returns:
        float len(coefficients) / sum(coefficients), 1.0 for an empty window
    """
    coefficients = np.asarray(coefficients, dtype=np.float64)
    total = float(np.sum(coefficients))
    if coefficients.size == 0 or total == 0.0:
        return 1.0
    return coefficients.size / total


def energy_correction_factor(manager, frames, frame_rate=None):
    """
    Energy correction for the window a block of `frames` was served.

    Args:
        manager: WindowManager holding the window
        frames: Block length in frames
        frame_rate: Frames per second of the block's signal. Without it
            the window last served for `frames` is used, which is ambiguous
            when signals with different frame rates share the manager.

    Returns:
        float factor, 1.0 when the manager has no active family or no
        window has been built for that block yet
    """
    if manager is None or not manager.active:
        return 1.0

    entry = manager.entry_for_frames(frames, frame_rate)
    if entry is None:
        return 1.0
    return window_energy_factor(entry.coefficients)


def amplitude_correction(value, family):
    """
    Compensate a magnitude reading for the window it was measured with.

    Args:
        value: Magnitude (scalar or numpy array)
        family: WindowFamily or selector character

    Returns:
        value scaled by the family's constant; unchanged for families
        without one
    """
    if not isinstance(family, WindowFamily):
        family = WindowFamily.from_selector(family)
    factor = AMPLITUDE_CORRECTION.get(family)
    if factor is None or factor == 1.0:
        return value
    return value * factor
