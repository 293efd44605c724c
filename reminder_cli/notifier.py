"""Notification sound playback."""

import shutil
import subprocess
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from loguru import logger

DEFAULT_SOUND_PATH = Path(__file__).parent / "sounds" / "notification.wav"


class PlaybackMethod:
    """One way of playing a sound file. Reports success instead of raising."""

    name = "playback"

    def is_available(self) -> bool:
        raise NotImplementedError

    def play(self, sound_path: Path) -> bool:
        raise NotImplementedError


class CommandPlayback(PlaybackMethod):
    """
    Plays a sound by running an external command and waiting for it.

    ``{path}`` in the argument template is replaced with the sound file.
    Success is the command's exit status, so a missing or failing player
    lets the caller move on to the next method.
    """

    TIMEOUT = 15.0  # seconds

    def __init__(self, name: str, argv: Sequence[str], timeout: Optional[float] = None):
        self.name = name
        self.argv = list(argv)
        self.timeout = timeout or self.TIMEOUT

    @property
    def executable(self) -> str:
        return self.argv[0]

    def is_available(self) -> bool:
        return shutil.which(self.executable) is not None

    def play(self, sound_path: Path) -> bool:
        args = [arg.format(path=sound_path) for arg in self.argv]
        try:
            result = subprocess.run(
                args,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                timeout=self.timeout,
                check=False,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.warning(f"{self.name} sound playback failed: {e}")
            return False

        if result.returncode != 0:
            logger.warning(f"{self.name} exited with status {result.returncode}")
            return False
        return True

    def __repr__(self) -> str:
        return f"CommandPlayback({self.name!r}, {self.argv!r})"


# Ordered fallbacks per platform; the first method that succeeds wins
PLATFORM_METHODS: Dict[str, List[PlaybackMethod]] = {
    "win32": [
        CommandPlayback("PowerShell", [
            "powershell", "-c",
            "(New-Object Media.SoundPlayer '{path}').PlaySync()",
        ]),
        CommandPlayback("Windows Media Player", ["wmplayer", "{path}"]),
    ],
    "darwin": [
        CommandPlayback("afplay", ["afplay", "{path}"]),
        CommandPlayback("say", ["say", "-v", "Alex", "Notification"]),
    ],
    "linux": [
        CommandPlayback("mpv", ["mpv", "--no-video", "--really-quiet", "{path}"]),
        CommandPlayback("aplay", ["aplay", "-q", "{path}"]),
        CommandPlayback("paplay", ["paplay", "{path}"]),
    ],
}


def platform_key(platform: Optional[str] = None) -> str:
    """Normalize sys.platform values ("linux2", "linux") to a PLATFORM_METHODS key."""
    platform = platform or sys.platform
    if platform.startswith("linux"):
        return "linux"
    return platform


class ReminderSound:
    """Best-effort notification sound. Never raises to the caller."""

    def __init__(
        self,
        sound_path: Optional[Path] = None,
        platform: Optional[str] = None,
        methods: Optional[List[PlaybackMethod]] = None,
    ):
        self.sound_path = Path(sound_path) if sound_path else DEFAULT_SOUND_PATH
        self.platform = platform_key(platform)
        self.methods = methods if methods is not None else PLATFORM_METHODS.get(self.platform, [])

    def play_sound(self) -> bool:
        """
        Play the notification sound with the first working method.

        Returns:
            True if some method played the sound
        """
        if not self.sound_path.exists():
            logger.warning(f"Sound file not found: {self.sound_path}")
            return False

        if not self.methods:
            logger.warning(f"Sound playback not supported on platform: {self.platform}")
            return False

        try:
            for method in self.methods:
                if not method.is_available():
                    logger.debug(f"{method.name} is not available")
                    continue
                if method.play(self.sound_path):
                    return True
                logger.warning(f"{method.name} sound playback failed. Trying alternative...")
        except Exception as e:
            logger.warning(f"Sound playback error: {e}")
            return False

        logger.warning(f"No {self.platform} sound playback method worked.")
        return False
