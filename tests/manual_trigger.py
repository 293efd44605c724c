#!/usr/bin/env python3
"""
Manual trigger script for testing the notification sound.

This script lets you hear the reminder sound without scheduling a reminder
and waiting for it to fire.

Usage:
    # From project root (plays the bundled sound):
    python -m tests.manual_trigger

    # Play another file:
    python -m tests.manual_trigger --sound /path/to/sound.wav

    # Schedule it through the scheduler instead of playing right away:
    python -m tests.manual_trigger --in 3s
"""

import sys
import argparse
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from reminder_cli.delay import DelayFormatError, parse_delay
from reminder_cli.logger import setup_logging
from reminder_cli.notifier import ReminderSound
from reminder_cli.scheduler import ReminderScheduler


def main():
    parser = argparse.ArgumentParser(
        description="Manually trigger the reminder notification sound"
    )
    parser.add_argument(
        "--sound", "-s",
        type=Path,
        default=None,
        help="Sound file to play (uses the bundled sound if not specified)"
    )
    parser.add_argument(
        "--in", "-i",
        dest="delay",
        default=None,
        help="Play the sound after a delay such as 3s, using the scheduler"
    )

    args = parser.parse_args()
    setup_logging("DEBUG")

    sound = ReminderSound(sound_path=args.sound)

    print("=" * 50)
    print("MANUAL SOUND TRIGGER TEST")
    print("=" * 50)
    print(f"Sound: {sound.sound_path}")
    print(f"Platform: {sound.platform}")
    print("Methods, in order:")
    for method in sound.methods:
        state = "available" if method.is_available() else "missing"
        print(f"  - {method.name} ({state})")
    print("=" * 50)

    if args.delay is None:
        played = sound.play_sound()
        print("Played." if played else "Nothing was played, see warnings above.")
        sys.exit(0 if played else 1)

    try:
        run_at = parse_delay(args.delay)
    except DelayFormatError as e:
        print(f"Error: {e}")
        sys.exit(1)

    scheduler = ReminderScheduler()
    scheduler.add_reminder("manual", run_at, sound.play_sound)
    scheduler.start()
    print(f"Sound scheduled for {run_at:%H:%M:%S}. Press Ctrl+C to cancel.")
    try:
        scheduler.wait()
    except KeyboardInterrupt:
        print("\nCancelled.")
    finally:
        scheduler.stop()


if __name__ == "__main__":
    main()
