"""
Window functions for block spectra.

Each window trades frequency resolution for leakage differently:
- Tukey: Flat top, tapers only the edges (least energy loss)
- Flat-top: Best amplitude accuracy, widest main lobe
- Hann: Good general purpose, -31 dB sidelobes
- Hamming: Lower first sidelobe than Hann, slower rolloff
- Dolph-Chebyshev: Equiripple sidelobes at a chosen attenuation
- None: No windowing (samples are used as-is)

Symmetric windows are built by computing the first half with the closed
form and mirroring it into the second half. For odd lengths the midpoint
belongs to the first half and has no mirror partner.
"""

import logging
from enum import Enum
from types import MappingProxyType

import numpy as np

logger = logging.getLogger(__name__)

TUKEY_ALPHA = 0.65
CHEBYSHEV_ATTENUATION = 60.0  # dB

# 5-term flat-top coefficients
FLATTOP_COEFFICIENTS = (0.21557895, 0.41663158, 0.277263158, 0.083578947, 0.006947368)


class WindowFamily(Enum):
    """Window families a run can be configured with."""
    NONE = "none"
    TUKEY = "tukey"
    FLAT_TOP = "flat-top"
    HANN = "hann"
    HAMMING = "hamming"
    DOLPH_CHEBYSHEV = "dolph-chebyshev"  # reserved, no selector character

    @classmethod
    def from_selector(cls, selector):
        """
        Resolve a single-character selector.

        Unknown selectors fall back to NONE, so the run proceeds without
        windowing.
        """
        if isinstance(selector, cls):
            return selector
        family = SELECTORS.get(selector)
        if family is None:
            logger.warning("Unknown window selector %r, windowing disabled", selector)
            return cls.NONE
        return family

    @property
    def selector(self):
        """Selector character, or None for families without one."""
        for char, family in SELECTORS.items():
            if family is self:
                return char
        return None


SELECTORS = MappingProxyType({
    "n": WindowFamily.NONE,
    "t": WindowFamily.TUKEY,
    "f": WindowFamily.FLAT_TOP,
    "h": WindowFamily.HANN,
    "m": WindowFamily.HAMMING,
})


def _check_length(n):
    if n < 1:
        raise ValueError(f"Window length must be at least 1, got {n}")
    return int(n)


def _half_length(n):
    return n // 2 if n % 2 == 0 else (n + 1) // 2


def _mirror(w, half):
    """Fill w[half:] with the first half reversed, skipping the odd midpoint."""
    n = len(w)
    w[half:] = w[:n - half][::-1]
    return w


def tukey_window(n, alpha=TUKEY_ALPHA):
    """
    Tukey (tapered cosine) window.

    Samples farther than alpha*M from the center M = (n-1)/2 follow a
    raised cosine down to the edges; everything closer is 1.

    Args:
        n: Window length in samples
        alpha: Fraction of the half-width left untapered

    Returns:
        float64 numpy array of length n
    """
    n = _check_length(n)
    if n == 1:
        return np.ones(1)

    m = (n - 1) / 2
    distance = np.abs(np.arange(n) - m)
    taper = distance >= alpha * m
    w = np.ones(n)
    w[taper] = 0.5 * (1 + np.cos(np.pi * (distance[taper] - alpha * m) / ((1 - alpha) * m)))
    return w


def flattop_window(n):
    """Flat-top window, reduces scalloping loss."""
    n = _check_length(n)
    if n == 1:
        return np.ones(1)

    w = np.zeros(n)
    half = _half_length(n)
    factor = 2 * np.pi * np.arange(half) / (n - 1)
    a0, a1, a2, a3, a4 = FLATTOP_COEFFICIENTS
    w[:half] = (a0 - a1 * np.cos(factor) + a2 * np.cos(2 * factor)
                - a3 * np.cos(3 * factor) + a4 * np.cos(4 * factor))
    return _mirror(w, half)


def hann_window(n):
    """Hann window without the zero-valued endpoints."""
    n = _check_length(n)
    w = np.zeros(n)
    half = _half_length(n)
    i = np.arange(half)
    w[:half] = 0.5 * (1 - np.cos(2 * np.pi * (i + 1) / (n + 1)))
    return _mirror(w, half)


def hamming_window(n):
    """Hamming window."""
    n = _check_length(n)
    if n == 1:
        return np.ones(1)

    w = np.zeros(n)
    half = _half_length(n)
    i = np.arange(half)
    w[:half] = 0.54 - 0.46 * np.cos(2 * np.pi * i / (n - 1))
    return _mirror(w, half)


def chebyshev_polynomial(order, x):
    """
    Chebyshev polynomial of the first kind, T_order(x).

    Uses cos(order*acos(x)) inside [-1, 1] and the hyperbolic form outside.
    """
    x = np.asarray(x, dtype=np.float64)
    magnitude = np.abs(x)
    inside = np.cos(order * np.arccos(np.clip(x, -1.0, 1.0)))
    with np.errstate(over="ignore"):
        outside = np.cosh(order * np.arccosh(np.maximum(magnitude, 1.0)))
    outside = np.where(x < -1.0, (-1.0) ** order * outside, outside)
    result = np.where(magnitude <= 1.0, inside, outside)
    return float(result) if result.ndim == 0 else result


def chebyshev_window(n, attenuation=CHEBYSHEV_ATTENUATION):
    """
    Dolph-Chebyshev window, normalized so the peak coefficient is 1.

    Args:
        n: Window length in samples
        attenuation: Sidelobe attenuation in dB (60 for -60 dB)

    Returns:
        float64 numpy array of length n
    """
    n = _check_length(n)
    if n == 1:
        return np.ones(1)

    tg = 10 ** (attenuation / 20)
    x0 = np.cosh(np.arccosh(tg) / (n - 1))
    m = (n - 1) / 2

    i = np.arange(1, int(np.floor(m)) + 1)
    poly = chebyshev_polynomial(n - 1, x0 * np.cos(np.pi * i / n))

    w = np.zeros(n)
    for nn in range(n // 2 + 1):
        k = nn - m
        w[nn] = tg + 2 * np.sum(poly * np.cos(2.0 * k * np.pi * i / n))
        w[n - nn - 1] = w[nn]

    return w / np.max(w)


GENERATORS = MappingProxyType({
    WindowFamily.TUKEY: tukey_window,
    WindowFamily.FLAT_TOP: flattop_window,
    WindowFamily.HANN: hann_window,
    WindowFamily.HAMMING: hamming_window,
    WindowFamily.DOLPH_CHEBYSHEV: chebyshev_window,
})


def generate(family, n, **params):
    """
    Build a window for `family`.

    Args:
        family: WindowFamily or selector character
        n: Window length in samples
        **params: Family parameters (alpha for Tukey, attenuation for
            Dolph-Chebyshev)

    Returns:
        float64 numpy array, or None for WindowFamily.NONE
    """
    family = WindowFamily.from_selector(family)
    if family is WindowFamily.NONE:
        return None
    return GENERATORS[family](n, **params)


def apply_window(samples, window):
    """
    Multiply a block of samples by a window.

    Args:
        samples: numpy array, shape (n,) or (n, channels)
        window: Window coefficients of length n, or None for no windowing

    Returns:
        Windowed samples (the input itself when window is None)
    """
    samples = np.asarray(samples)
    if window is None:
        return samples
    if samples.shape[0] != len(window):
        raise ValueError(
            f"Window length {len(window)} does not match block length {samples.shape[0]}"
        )
    if samples.ndim == 2:
        return samples * window[:, np.newaxis]
    return samples * window


def available_windows():
    """Return the selector characters and the families they choose."""
    return {char: family.value for char, family in SELECTORS.items()}
