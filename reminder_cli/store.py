"""JSON file storage for reminders."""

import json
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Callable, List, Optional

from loguru import logger

from .delay import parse_delay

DATE_FORMAT = "%d/%m/%Y"


class ReminderValidationError(ValueError):
    """Raised when a reminder cannot be created from user input."""


class StorageError(Exception):
    """Raised when the reminder file cannot be written."""


@dataclass
class Reminder:
    """A single stored reminder."""
    id: int
    text: str
    created_at: Optional[date] = None
    scheduled_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Serialize to the on-disk representation."""
        return {
            "id": self.id,
            "text": self.text,
            "createdAt": self.created_at.strftime(DATE_FORMAT) if self.created_at else None,
            "scheduledAt": self.scheduled_at.isoformat() if self.scheduled_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Reminder":
        """
        Build a Reminder from its on-disk representation.

        Files written by older versions only carry ``id`` and ``text``, so the
        date fields are optional.
        """
        if not isinstance(data.get("id"), int) or isinstance(data.get("id"), bool):
            raise ValueError(f"Reminder has no valid 'id': {data!r}")
        if not isinstance(data.get("text"), str):
            raise ValueError(f"Reminder has no valid 'text': {data!r}")

        created_at = data.get("createdAt")
        scheduled_at = data.get("scheduledAt")
        return cls(
            id=data["id"],
            text=data["text"],
            created_at=datetime.strptime(created_at, DATE_FORMAT).date() if created_at else None,
            scheduled_at=datetime.fromisoformat(scheduled_at) if scheduled_at else None,
        )


class ReminderStore:
    """
    Reminder collection persisted as a single JSON array.

    The whole file is read on every operation and rewritten wholesale on every
    change. There is no locking: two processes writing at once race and the
    last writer wins.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def initialize(self) -> bool:
        """
        Create the storage file with an empty array if it does not exist.

        Returns:
            True if the file was created, False if it already existed
        """
        if self.path.exists():
            return False
        self.write([])
        logger.debug(f"Created reminder storage at {self.path}")
        return True

    def load(self) -> List[Reminder]:
        """
        Read all reminders from the storage file.

        Missing, blank, unparsable and non-array files all read as an empty
        store. Failures are logged and never raised.
        """
        try:
            data = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error reading reminders from {self.path}: {e}")
            return []

        if not data.strip():
            return []

        try:
            parsed = json.loads(data)
        except json.JSONDecodeError as e:
            logger.error(f"Error reading reminders from {self.path}: {e}")
            return []

        if not isinstance(parsed, list):
            logger.warning(f"Reminder storage {self.path} does not hold an array, ignoring it")
            return []

        reminders = []
        for entry in parsed:
            if not isinstance(entry, dict):
                logger.warning(f"Skipping malformed reminder entry: {entry!r}")
                continue
            try:
                reminders.append(Reminder.from_dict(entry))
            except (TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed reminder entry: {e}")
        return reminders

    def write(self, reminders: List[Reminder]) -> None:
        """Overwrite the storage file with the given reminders."""
        data = json.dumps([r.to_dict() for r in reminders], indent=2, ensure_ascii=False)
        try:
            self.path.write_text(data, encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Could not write reminders to {self.path}: {e}") from e

    def append(
        self,
        text: str,
        delay: Optional[str] = None,
        schedule: Optional[Callable[[Reminder], None]] = None,
    ) -> Reminder:
        """
        Add a reminder and persist the whole collection.

        Args:
            text: Reminder text; surrounding whitespace is trimmed
            delay: Optional delay string ("10s", "30m", "1h")
            schedule: Called with the new reminder before it is written,
                only when a delay was given

        Returns:
            The stored reminder

        Raises:
            ReminderValidationError: If the text is empty
            DelayFormatError: If the delay string is malformed
            StorageError: If the file cannot be written
        """
        text = (text or "").strip()
        if not text:
            raise ReminderValidationError("Reminder text cannot be empty.")

        scheduled_at = parse_delay(delay) if delay is not None else None

        reminders = self.load()
        reminder = Reminder(
            id=len(reminders) + 1,
            text=text,
            created_at=date.today(),
            scheduled_at=scheduled_at,
        )

        if scheduled_at is not None and schedule is not None:
            schedule(reminder)

        reminders.append(reminder)
        self.write(reminders)
        return reminder

    def list(self) -> List[Reminder]:
        """Return every stored reminder in insertion order."""
        return self.load()

    def clear(self) -> bool:
        """
        Remove all reminders.

        Returns:
            True if reminders were removed, False if the store was already
            empty (in which case nothing is written)
        """
        if not self.load():
            return False
        self.write([])
        return True
