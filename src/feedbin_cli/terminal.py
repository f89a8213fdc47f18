"""Terminal primitives used by the reading session, built on click."""

from collections.abc import Sequence
from typing import TypeVar

import click

T = TypeVar("T")

UP_KEYS = ("k", "\x1b[A", "\xe0H", "\x00H")
DOWN_KEYS = ("j", "\x1b[B", "\xe0P", "\x00P")
SELECT_KEYS = ("\r", "\n")
QUIT_KEYS = ("q", "Q")


class Terminal:
    """Interactive prompts on the controlling terminal.

    ``select`` pages through the choices with cyclic navigation. The quit key
    behaves exactly like Ctrl-C would: both end the selection without a
    choice. Ctrl-C inside click prompts surfaces as KeyboardInterrupt.
    """

    def __init__(self, page_size: int = 15):
        self.page_size = page_size

    def clear(self) -> None:
        click.clear()

    def show(self, text: str) -> None:
        click.echo(text)

    def notify(self, message: str, err: bool = False) -> None:
        click.echo(message, err=err)

    def pause(self) -> None:
        click.pause("Press any key to continue...")

    def confirm(self, question: str) -> bool:
        try:
            return click.confirm(question, default=False)
        except click.Abort as e:
            raise KeyboardInterrupt from e

    def select(
        self,
        message: str,
        choices: Sequence[tuple[str, T]],
        exit_label: str = "Exit",
    ) -> T | None:
        """Let the user pick one value from ``choices``.

        Returns:
            The chosen value, or None for the exit choice and the quit key
        """
        labels = [label for label, _ in choices] + [exit_label]
        cursor = 0
        while True:
            self._draw(message, labels, cursor)
            try:
                key = click.getchar()
            except EOFError:
                return None

            if key in QUIT_KEYS:
                return None
            if key in UP_KEYS:
                cursor = (cursor - 1) % len(labels)
            elif key in DOWN_KEYS:
                cursor = (cursor + 1) % len(labels)
            elif key in SELECT_KEYS:
                if cursor == len(choices):
                    return None
                return choices[cursor][1]

    def _draw(self, message: str, labels: list[str], cursor: int) -> None:
        pages = (len(labels) + self.page_size - 1) // self.page_size
        page = cursor // self.page_size
        start = page * self.page_size

        click.clear()
        click.echo(click.style(message, bold=True))
        for index, label in enumerate(labels[start : start + self.page_size], start=start):
            if index == cursor:
                click.echo(click.style(f"> {label}", fg="green"))
            else:
                click.echo(f"  {label}")
        click.echo(
            click.style(
                f"(page {page + 1}/{pages}, j/k to move, enter to select, q to quit)",
                dim=True,
            )
        )
