"""Interactive reading session over a ReadingList.

The session is an explicit state machine::

    SELECTING -> DISPLAYING -> CONFIRMING_MARK -> SELECTING
    SELECTING -> EXITED   (exit choice, quit key, interrupt, empty list)

The list is never re-fetched. Its only mutation is removing an entry after
the service confirmed the mark-as-read call.
"""

import enum
import logging
from typing import Protocol, TypeVar

from .client import FeedbinClient, MutationError
from .credentials import Credential
from .models import Entry, ReadingList
from .renderer import format_published, render

logger = logging.getLogger(__name__)

T = TypeVar("T")

SELECT_MESSAGE = "Select an entry to read (Press 'q' to quit):"
CONFIRM_QUESTION = "Mark this entry as read?"


class State(enum.Enum):
    SELECTING = "selecting"
    DISPLAYING = "displaying"
    CONFIRMING_MARK = "confirming_mark"
    EXITED = "exited"


class TerminalUI(Protocol):
    def clear(self) -> None: ...

    def show(self, text: str) -> None: ...

    def notify(self, message: str, err: bool = False) -> None: ...

    def pause(self) -> None: ...

    def confirm(self, question: str) -> bool: ...

    def select(
        self, message: str, choices: list[tuple[str, T]], exit_label: str = "Exit"
    ) -> T | None: ...


def choice_label(entry: Entry) -> str:
    """Menu label for an entry: ``[Feed] Title (YYYY-MM-DD HH:MM)``."""
    prefix = f"[{entry.feed_title}] " if entry.feed_title else ""
    return f"{prefix}{entry.title} ({format_published(entry)})"


class ReadingSession:
    """Drives selection, display and mark-as-read over one reading list."""

    def __init__(
        self,
        client: FeedbinClient,
        credential: Credential,
        reading_list: ReadingList,
        terminal: TerminalUI,
    ):
        self.client = client
        self.credential = credential
        self.reading_list = reading_list
        self.terminal = terminal
        self.state = State.SELECTING
        self.current: Entry | None = None
        self._handlers = {
            State.SELECTING: self._select,
            State.DISPLAYING: self._display,
            State.CONFIRMING_MARK: self._confirm_mark,
        }

    def run(self) -> None:
        """Run until the user exits or the list is exhausted."""
        while self.state is not State.EXITED:
            handler = self._handlers[self.state]
            try:
                self.state = handler()
            except KeyboardInterrupt:
                logger.debug("Interrupted while %s", self.state.value)
                self.state = State.EXITED
        self.current = None

    def _select(self) -> State:
        if not len(self.reading_list):
            logger.info("Reading list exhausted")
            return State.EXITED

        choices = [(choice_label(entry), entry) for entry in self.reading_list]
        selected = self.terminal.select(SELECT_MESSAGE, choices, exit_label="Exit")
        if selected is None:
            return State.EXITED

        self.current = selected
        return State.DISPLAYING

    def _display(self) -> State:
        self.terminal.clear()
        self.terminal.show(render(self.current))
        self.terminal.pause()
        return State.CONFIRMING_MARK

    def _confirm_mark(self) -> State:
        entry = self.current
        if self.terminal.confirm(CONFIRM_QUESTION):
            try:
                self.client.mark_as_read(self.credential, [entry.id])
            except MutationError as e:
                logger.warning("Mark as read failed for entry %d: %s", entry.id, e)
                self.terminal.notify("Failed to mark entry as read.", err=True)
            else:
                self.reading_list.remove(entry.id)
                self.terminal.notify("Entry marked as read.")

        self.current = None
        return State.SELECTING


def run(
    client: FeedbinClient,
    credential: Credential,
    reading_list: ReadingList,
    terminal: TerminalUI,
) -> None:
    """Run a reading session to completion."""
    ReadingSession(client, credential, reading_list, terminal).run()
