"""
Window analysis configuration with validation.

All magic numbers live here. Dataclass-based for type safety and defaults.
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from dsp.windows import CHEBYSHEV_ATTENUATION, TUKEY_ALPHA, WindowFamily


@dataclass
class WindowConfig:
    """Windowing configuration for one analysis run."""
    # Selector ('n' none, 't' tukey, 'f' flat-top, 'h' hann, 'm' hamming) or a
    # WindowFamily member; WindowFamily.DOLPH_CHEBYSHEV has no selector
    window_type: Union[str, WindowFamily] = "n"
    sampling_rate: float = 44100.0   # Hz
    frame_rate: float = 60.0         # frames/s of the block structure
    max_windows: Optional[int] = None  # None = unbounded cache
    tukey_alpha: float = TUKEY_ALPHA
    chebyshev_attenuation: float = CHEBYSHEV_ATTENUATION  # dB

    def __post_init__(self):
        if self.sampling_rate <= 0:
            raise ValueError(f"sampling_rate must be positive, got {self.sampling_rate}")
        if self.frame_rate <= 0:
            raise ValueError(f"frame_rate must be positive, got {self.frame_rate}")
        if self.max_windows is not None and self.max_windows < 1:
            raise ValueError(f"max_windows must be at least 1, got {self.max_windows}")
        if not 0.0 <= self.tukey_alpha < 1.0:
            raise ValueError(f"tukey_alpha must be in [0, 1), got {self.tukey_alpha}")

    @property
    def family(self):
        return WindowFamily.from_selector(self.window_type)


@dataclass
class Config:
    """Top-level configuration."""
    debug: bool = False
    log_dir: Optional[str] = None     # None = console only
    window: WindowConfig = field(default_factory=WindowConfig)

    @classmethod
    def from_args(cls, args):
        """Build from an argparse namespace produced by main.build_parser()."""
        return cls(
            debug=args.debug,
            log_dir=args.log_dir,
            window=WindowConfig(
                window_type=args.window,
                sampling_rate=args.sample_rate,
                frame_rate=args.frame_rate,
                max_windows=args.max_windows,
            ),
        )
