"""
Exceptions raised by the windowing subsystem.

A zero-length window is not an error: the cache returns None and the
caller skips windowing for that block.
"""


class WindowError(Exception):
    """Base class for window cache failures."""


class WindowAllocationError(WindowError):
    """Coefficient buffer for a window could not be allocated."""

    def __init__(self, family, sample_count):
        self.family = family
        self.sample_count = sample_count
        super().__init__(
            f"{family} window creation failed for {sample_count} samples"
        )


class CapacityExceededError(WindowError):
    """The cache already holds the configured maximum of distinct lengths."""

    def __init__(self, max_windows, sample_count):
        self.max_windows = max_windows
        self.sample_count = sample_count
        super().__init__(
            f"Reached max window limit {max_windows} "
            f"(requested {sample_count} samples)"
        )
