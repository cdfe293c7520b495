"""
Duration to sample-count conversion.

Audio blocks are measured in frames of the signal's logical frame rate
(e.g. video frames for frame-synchronized test tones). Windows are
cached by the number of samples a block spans at the sampling rate,
so distinct frame counts that discretize to the same length share a
window.
"""

import math


def frames_to_seconds(frames, frame_rate):
    """
    Convert a frame count to seconds.

    Args:
        frames: Number of frames in the block
        frame_rate: Frames per second

    Returns:
        float duration in seconds
    """
    if frame_rate <= 0:
        raise ValueError(f"Frame rate must be positive, got {frame_rate}")
    return frames / frame_rate


def seconds_to_samples(seconds, sampling_rate):
    """Whole samples spanned by `seconds` (truncated toward zero)."""
    return int(math.floor(sampling_rate * seconds))


def samples_to_seconds(samples, sampling_rate):
    """Duration of `samples` at `sampling_rate`."""
    if sampling_rate <= 0:
        raise ValueError(f"Sampling rate must be positive, got {sampling_rate}")
    return samples / sampling_rate


def duration_to_sample_count(frames, frame_rate, sampling_rate):
    """
    Sample count of a block, the key windows are cached under.

    Args:
        frames: Block length in frames
        frame_rate: Frames per second of the signal
        sampling_rate: Samples per second

    Returns:
        int sample count; 0 means no window applies to this block
    """
    seconds = frames_to_seconds(frames, frame_rate)
    return max(seconds_to_samples(seconds, sampling_rate), 0)
