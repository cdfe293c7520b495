"""
Window cache for block analysis.

A multi-block audio structure repeats the same block lengths many times
across both signals. The manager builds each window once, the first time
a block of that sample count is analyzed, and serves the stored
coefficients on every later request.

Windows are keyed by sample count, not frame count: different frame
counts can discretize to the same length at a given sampling rate.
"""

import functools
import logging
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np

from dsp import correction
from dsp.errors import CapacityExceededError, WindowAllocationError
from dsp.timing import duration_to_sample_count, frames_to_seconds, samples_to_seconds
from dsp.windows import GENERATORS, WindowFamily

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class WindowEntry:
    """One cached window. Compared by identity."""
    sample_count: int            # cache key
    duration_seconds: float      # duration that produced it
    coefficients: np.ndarray     # read-only, len == sample_count
    frames: Optional[float] = None  # frame count of the first request


class WindowManager:
    """
    Lazily built, append-only store of windows for one window family.

    Create one per analysis run, request windows per block with
    `get_window()`, and call `release()` once both signals are done.
    """

    def __init__(self, family, sampling_rate, max_windows=None, **generator_params):
        """
        Args:
            family: WindowFamily or selector character ('n', 't', 'f', 'h', 'm')
            sampling_rate: Samples per second
            max_windows: Maximum distinct window lengths, None for unbounded
            **generator_params: Passed to the family's generator (alpha,
                attenuation)
        """
        if sampling_rate <= 0:
            raise ValueError(f"Sampling rate must be positive, got {sampling_rate}")
        if max_windows is not None and max_windows < 1:
            raise ValueError(f"max_windows must be at least 1, got {max_windows}")

        self._family = WindowFamily.from_selector(family)
        self._sampling_rate = sampling_rate
        self._max_windows = max_windows

        if self._family is WindowFamily.NONE:
            self._generator = None
        else:
            self._generator = functools.partial(GENERATORS[self._family], **generator_params)

        self._entries: Dict[int, WindowEntry] = {}
        self._frames_index: Dict[float, int] = {}
        self._generated = 0

        # Guards check-then-insert so parallel block analysis cannot
        # build the same length twice
        self._lock = threading.Lock()

        logger.info(
            "Window manager: family=%s, sampling_rate=%g, max_windows=%s",
            self._family.value, sampling_rate, max_windows or "unbounded",
        )

    @classmethod
    def from_config(cls, config):
        """Build a manager from a WindowConfig."""
        params = {}
        family = WindowFamily.from_selector(config.window_type)
        if family is WindowFamily.TUKEY:
            params["alpha"] = config.tukey_alpha
        elif family is WindowFamily.DOLPH_CHEBYSHEV:
            params["attenuation"] = config.chebyshev_attenuation
        return cls(family, config.sampling_rate, max_windows=config.max_windows, **params)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
        return False

    def __len__(self):
        return len(self._entries)

    def __contains__(self, sample_count):
        return sample_count in self._entries

    @property
    def family(self):
        return self._family

    @property
    def sampling_rate(self):
        return self._sampling_rate

    @property
    def max_windows(self):
        return self._max_windows

    @property
    def active(self):
        """False when the family is NONE and no windowing takes place."""
        return self._generator is not None

    @property
    def generated_count(self):
        """Number of times a generator has been invoked since creation."""
        return self._generated

    @property
    def entries(self) -> Tuple[WindowEntry, ...]:
        """Cached windows in creation order."""
        with self._lock:
            return tuple(self._entries.values())

    def sample_count(self, frames, frame_rate):
        """Sample count a block of `frames` maps to."""
        return duration_to_sample_count(frames, frame_rate, self._sampling_rate)

    def get_window(self, frames, frame_rate):
        """
        Window for a block, built on first request.

        Args:
            frames: Block length in frames
            frame_rate: Frames per second of the signal

        Returns:
            Read-only coefficient array shared by every block of the same
            sample count, or None when windowing does not apply (family
            NONE, or the block is shorter than one sample)

        Raises:
            CapacityExceededError: max_windows distinct lengths already cached
            WindowAllocationError: the coefficient buffer could not be allocated
        """
        if not self.active:
            return None

        size = self.sample_count(frames, frame_rate)
        if not size:
            logger.error(
                "Asked for window with null size: %s frames at %g frames/s",
                frames, frame_rate,
            )
            return None

        entry = self._get_or_create(size, frames_to_seconds(frames, frame_rate), frames)
        with self._lock:
            self._frames_index[frames] = size
        return entry.coefficients

    def get_window_by_samples(self, sample_count):
        """Window of exactly `sample_count` samples, built on first request."""
        if not self.active:
            return None
        if sample_count < 1:
            logger.error("Asked for window with null size: %s samples", sample_count)
            return None
        sample_count = int(sample_count)
        seconds = samples_to_seconds(sample_count, self._sampling_rate)
        return self._get_or_create(sample_count, seconds, None).coefficients

    def _get_or_create(self, size, seconds, frames):
        with self._lock:
            entry = self._entries.get(size)
            if entry is not None:
                return entry

            if self._max_windows is not None and len(self._entries) >= self._max_windows:
                logger.error("Reached max window limit %d", self._max_windows)
                raise CapacityExceededError(self._max_windows, size)

            try:
                coefficients = self._generator(size)
            except MemoryError as e:
                logger.error("%s window creation failed (%d samples): %s",
                             self._family.value, size, e)
                raise WindowAllocationError(self._family, size) from e
            self._generated += 1

            coefficients.flags.writeable = False
            entry = WindowEntry(
                sample_count=size,
                duration_seconds=seconds,
                coefficients=coefficients,
                frames=frames,
            )
            self._entries[size] = entry

        logger.debug("Created %s window: %d samples (%s frames)",
                     self._family.value, size, frames)
        return entry

    def entry_for_frames(self, frames, frame_rate=None):
        """
        Cached window for a block of `frames`.

        With `frame_rate`, the block's sample count selects the entry.
        Without it, the window last served for that frame count is used,
        falling back to an entry first created by that frame count.
        """
        if frame_rate is not None:
            size = self.sample_count(frames, frame_rate)
            with self._lock:
                return self._entries.get(size)

        with self._lock:
            size = self._frames_index.get(frames)
            if size is not None:
                return self._entries.get(size)
            for entry in self._entries.values():
                if entry.frames == frames:
                    return entry
        return None

    def energy_correction_factor(self, frames, frame_rate=None):
        """size / sum(window) for the window served to `frames`, else 1.0."""
        return correction.energy_correction_factor(self, frames, frame_rate)

    def amplitude_correction(self, value):
        """Apply this manager's family amplitude constant to `value`."""
        return correction.amplitude_correction(value, self._family)

    def describe(self) -> List[dict]:
        """Summary of each cached window for diagnostics."""
        summary = []
        for entry in self.entries:
            summary.append({
                'sample_count': entry.sample_count,
                'seconds': entry.duration_seconds,
                'frames': entry.frames,
                'sum': float(np.sum(entry.coefficients)),
                'energy_factor': correction.window_energy_factor(entry.coefficients),
            })
        return summary

    def log_windows(self, level=logging.INFO):
        """Log the cached windows."""
        logger.log(level, "%d %s window(s) cached", len(self), self._family.value)
        for item in self.describe():
            logger.log(
                level, "  %d samples (%.6f s, frames=%s) energy factor %.6f",
                item['sample_count'], item['seconds'], item['frames'],
                item['energy_factor'],
            )

    def release(self):
        """Drop every cached window. Safe to call on an empty manager."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            self._frames_index.clear()
        if count:
            logger.debug("Released %d window(s)", count)
