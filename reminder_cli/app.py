"""Command-line interface for the reminder CLI."""

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

from loguru import logger

from . import __version__
from .config import CliConfig, ConfigManager
from .delay import DelayFormatError
from .logger import setup_logging
from .notifier import ReminderSound
from .scheduler import ReminderScheduler
from .store import Reminder, ReminderStore, ReminderValidationError, StorageError


class ReminderApp:
    """
    Coordinates the reminder commands.

    Manages:
    - The reminder store
    - Scheduling of delayed reminders
    - The notification sound when a reminder fires
    """

    def __init__(
        self,
        config: Optional[CliConfig] = None,
        notifier: Optional[ReminderSound] = None,
        scheduler: Optional[ReminderScheduler] = None,
        cwd: Optional[Path] = None,
    ):
        """
        Initialize the ReminderApp.

        Args:
            config: CLI configuration; defaults apply when omitted
            notifier: Sound player used when a reminder fires
            scheduler: Scheduler for delayed reminders
            cwd: Directory the storage file is resolved against
        """
        self.config = config or CliConfig()
        self.store = ReminderStore(self.config.general.storage_path(cwd))
        self.notifier = notifier or ReminderSound(sound_path=self.config.sound.file)
        self.scheduler = scheduler or ReminderScheduler(
            check_interval=self.config.general.check_interval
        )

    def init(self) -> bool:
        """Create the storage file and greet the user."""
        print("Initializing... reminder-cli tool! Wait a few seconds ;)")
        try:
            created = self.store.initialize()
        except StorageError as e:
            logger.error(f"Error during initialization: {e}")
            return False

        if created:
            logger.info(f"Created {self.store.path}")

        time.sleep(self.config.general.welcome_delay)
        print("Welcome to reminder-cli tool 🤗.")
        print("Your personal task management system is now operational.")
        print("Centralize your tasks, enhance your productivity.")
        print("\nQuick Start: Type 'reminder --help' to view available commands.")
        return True

    def set_reminder(self, text: str, delay: Optional[str] = None) -> Optional[Reminder]:
        """
        Add a reminder, scheduling it when a delay is given.

        Returns:
            The stored reminder, or None if it was rejected or not saved
        """
        try:
            reminder = self.store.append(text, delay, schedule=self._schedule_reminder)
        except (ReminderValidationError, DelayFormatError) as e:
            print(f"Error: {e}")
            return None
        except StorageError as e:
            logger.error(f"Error saving the reminder: {e}")
            return None

        print(f'Reminder Set: "{reminder.text}"')
        print(f"You now have {reminder.id} reminder(s).")
        if reminder.scheduled_at:
            print(f"Scheduled for {reminder.scheduled_at:%d/%m/%Y %H:%M:%S}.")
        return reminder

    def list_reminders(self) -> List[Reminder]:
        """Print every stored reminder."""
        reminders = self.store.list()
        if not reminders:
            print("No reminders set yet.")
            return reminders

        print("Your Reminders:")
        for reminder in reminders:
            line = f"ID: {reminder.id}, Message: {reminder.text}"
            if reminder.created_at:
                line += f", Created: {reminder.created_at:%d/%m/%Y}"
            if reminder.scheduled_at:
                line += f", Scheduled: {reminder.scheduled_at:%d/%m/%Y %H:%M:%S}"
            print(line)
        return reminders

    def clear_reminders(self) -> bool:
        """Remove all reminders. Returns True if anything was removed."""
        try:
            cleared = self.store.clear()
        except StorageError as e:
            logger.error(f"An error occurred while clearing reminders: {e}")
            return False

        if cleared:
            print("All reminders have been cleared.")
        else:
            print("No reminders set yet.")
        return cleared

    def _schedule_reminder(self, reminder: Reminder) -> None:
        """Register a one-shot callback for a delayed reminder."""
        self.scheduler.add_reminder(
            name=f"reminder-{reminder.id}",
            run_at=reminder.scheduled_at,
            callback=lambda: self._on_reminder_due(reminder),
        )
        self.scheduler.start()

    def _on_reminder_due(self, reminder: Reminder) -> None:
        """Announce a reminder whose time has come."""
        print(f"\n⏰ Reminder #{reminder.id}: {reminder.text}", flush=True)
        if self.config.sound.enabled:
            self.notifier.play_sound()

    def wait_for_scheduled(self) -> None:
        """Keep the process alive until every scheduled reminder has fired."""
        if not self.scheduler.has_pending():
            return

        print("Waiting for scheduled reminders. Press Ctrl+C to quit.", flush=True)
        try:
            self.scheduler.wait()
        except KeyboardInterrupt:
            print("\nStopped waiting. Pending reminders will not fire.")
        finally:
            self.scheduler.stop()


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``reminder`` command."""
    parser = argparse.ArgumentParser(
        prog="reminder",
        description="Reminder CLI - your personal task management tool",
        epilog='Example: reminder set "Buy milk" --in 1h',
    )
    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=None,
        help=f"Configuration directory (default: {ConfigManager.DEFAULT_CONFIG_DIR})",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")
    subparsers.required = True

    subparsers.add_parser(
        "init",
        help="Initialize the reminder-cli tool and create storage file",
    )

    set_parser = subparsers.add_parser(
        "set",
        help="Set a new reminder",
        description='Add a reminder. Use double quotes for multi-word reminders, '
                    'e.g. reminder set "Meeting with team at 2 PM" --in 1h',
    )
    set_parser.add_argument("reminder", help="Text of the reminder")
    set_parser.add_argument(
        "--in", "-i",
        dest="delay",
        metavar="DELAY",
        default=None,
        help="Schedule the reminder (e.g. '10s', '30m', '1h')",
    )

    subparsers.add_parser("list", aliases=["ls"], help="Display all existing reminders")
    subparsers.add_parser("clear", aliases=["cls"], help="Clear all existing reminders")

    return parser


COMMAND_ALIASES = {"ls": "list", "cls": "clear"}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    if argv is None:
        argv = sys.argv[1:]
    if not argv:
        parser.error("You must provide a valid command. Use --help for assistance.")
    args = parser.parse_args(argv)

    setup_logging()
    config = ConfigManager(args.config_dir).load_config()
    setup_logging(config.general.log_level)

    app = ReminderApp(config)
    command = COMMAND_ALIASES.get(args.command, args.command)

    if command == "init":
        app.init()
    elif command == "set":
        app.set_reminder(args.reminder, args.delay)
        app.wait_for_scheduled()
    elif command == "list":
        app.list_reminders()
    elif command == "clear":
        app.clear_reminders()

    return 0


if __name__ == "__main__":
    sys.exit(main())
