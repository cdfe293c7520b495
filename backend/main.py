#!/usr/bin/env python3
"""
Window inspection tool - Main Entry Point

Builds the windows an analysis run would use for a list of block lengths
and reports the sample count and correction factors of each.
"""

import argparse
import logging
import sys
import os

# Add backend directory to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config import Config
from dsp.correction import amplitude_correction
from dsp.errors import WindowError
from dsp.window_manager import WindowManager
from dsp.windows import SELECTORS
from logging_config import setup_logging


def build_parser():
    parser = argparse.ArgumentParser(description='Block window inspector')
    parser.add_argument('frames', type=float, nargs='+',
                        help='Block lengths in frames')
    parser.add_argument('--window', '-w', choices=sorted(SELECTORS), default='h',
                        help='Window type: n, t, f, h, m (default: h)')
    parser.add_argument('--sample-rate', '-s', type=float, default=44100.0,
                        help='Sampling rate in Hz (default: 44100)')
    parser.add_argument('--frame-rate', '-r', type=float, default=60.0,
                        help='Frames per second (default: 60)')
    parser.add_argument('--max-windows', type=int, default=None,
                        help='Maximum distinct window lengths (default: unbounded)')
    parser.add_argument('--log-dir', type=str, default=None,
                        help='Write log files to this directory')
    parser.add_argument('--debug', '-d', action='store_true',
                        help='Enable debug logging')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    # Setup logging
    console_level = logging.DEBUG if args.debug else logging.WARNING
    setup_logging(console_level=console_level, log_dir=args.log_dir)

    logger = logging.getLogger(__name__)

    try:
        config = Config.from_args(args)
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    window_config = config.window
    logger.info("Window=%s, sampling rate=%g Hz, frame rate=%g",
                window_config.family.value, window_config.sampling_rate,
                window_config.frame_rate)

    with WindowManager.from_config(window_config) as manager:
        print(f"{'frames':>10} {'samples':>10} {'energy':>10} {'amplitude':>10}")
        for frames in args.frames:
            try:
                window = manager.get_window(frames, window_config.frame_rate)
            except WindowError as e:
                logger.error("Window analysis aborted: %s", e)
                return 1

            samples = manager.sample_count(frames, window_config.frame_rate)
            status = "" if window is not None else "  (no window)"
            print(f"{frames:>10g} {samples:>10d} "
                  f"{manager.energy_correction_factor(frames, window_config.frame_rate):>10.6f} "
                  f"{amplitude_correction(1.0, manager.family):>10.5f}{status}")

        print(f"{len(manager)} distinct window(s), "
              f"{manager.generated_count} generated")
        manager.log_windows(logging.DEBUG)

    return 0


if __name__ == '__main__':
    sys.exit(main())
