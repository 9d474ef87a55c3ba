import logging
from dataclasses import dataclass
from typing import List

logger = logging.getLogger(__name__)

DESTRUCTIVE = "destructive"
SUCCESS = "success"
DEFAULT = "default"


@dataclass(frozen=True)
class Notification:
    title: str
    description: str = ""
    variant: str = DEFAULT


class Notifier:
    """Queue of toasts; the shell drains it once per run."""

    def __init__(self):
        self._pending: List[Notification] = []

    def push(self, title, description="", variant=DEFAULT):
        note = Notification(title, description, variant)
        if variant == DESTRUCTIVE:
            logger.info("notify error: %s - %s", title, description)
        self._pending.append(note)
        return note

    def success(self, title, description=""):
        return self.push(title, description, SUCCESS)

    def error(self, title, description=""):
        return self.push(title, description, DESTRUCTIVE)

    @property
    def pending(self) -> List[Notification]:
        return list(self._pending)

    def drain(self) -> List[Notification]:
        notes, self._pending = self._pending, []
        return notes
