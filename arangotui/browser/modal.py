"""Single-field numeric prompt layered over the current view.

While open, the modal swallows every key.  It shares no state with the view
transition table: the controller only learns about it through the
:class:`ModalResult` returned from :meth:`InputModal.handle_key`.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

DEFAULT_LIMIT = 10


class ModalOutcome(str, enum.Enum):
    EDITED = "edited"
    CANCELLED = "cancelled"
    CONFIRMED = "confirmed"


@dataclass(frozen=True)
class ModalResult:
    outcome: ModalOutcome
    value: Optional[int] = None


def parse_limit(buffer: str, default: int = DEFAULT_LIMIT) -> int:
    """Parse *buffer* as a non-negative integer, else return *default*."""
    try:
        value = int(buffer)
    except ValueError:
        return default
    return value if value >= 0 else default


class InputModal:
    def __init__(self, prompt: str = "Number of documents", default: int = DEFAULT_LIMIT) -> None:
        self.prompt = prompt
        self.default = default
        self._buffer: Optional[str] = None

    @property
    def active(self) -> bool:
        return self._buffer is not None

    @property
    def buffer(self) -> str:
        return self._buffer or ""

    def open(self) -> None:
        self._buffer = ""

    def close(self) -> None:
        self._buffer = None

    def handle_key(self, key: str) -> ModalResult:
        """Consume one key.  Must only be called while :attr:`active`."""
        if not self.active:
            raise RuntimeError("input modal is not open")

        if key == "escape":
            self.close()
            return ModalResult(ModalOutcome.CANCELLED)
        if key == "enter":
            value = parse_limit(self.buffer, self.default)
            self.close()
            return ModalResult(ModalOutcome.CONFIRMED, value)
        if key == "backspace":
            self._buffer = self._buffer[:-1]
        elif len(key) == 1 and key.isdigit():
            self._buffer += key
        return ModalResult(ModalOutcome.EDITED)
