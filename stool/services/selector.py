"""Interactive selector.

Menus and prompts are rendered with rich on stderr so that stdout stays
clean. Ctrl-C or end of input at any prompt cancels the command.
"""

import glob
import logging
import os
import readline
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from rich.console import Console
from rich.prompt import Prompt

from stool.errors import OperatorCancelled
from stool.models import Target
from stool.services.catalog import TargetCatalog
from stool.utils.validation import validate_address, validate_user

logger = logging.getLogger(__name__)

T = TypeVar("T")

MENU_MANUAL_INPUT = "Manual input"
MENU_CANCEL = "Cancel"


@dataclass(frozen=True)
class Chosen:
    """A catalog entry was picked."""

    target: Target


@dataclass(frozen=True)
class Manual:
    """The operator typed an address and user."""

    address: str
    user: str


@dataclass(frozen=True)
class Cancelled:
    """The operator cancelled the selection."""


SelectionResult = Chosen | Manual | Cancelled


class TransferMode(Enum):
    """Direction of a file transfer."""

    UPLOAD = "upload"
    DOWNLOAD = "download"


class InteractiveSelector:
    """Numbered menus and prompts on the terminal."""

    def __init__(self, console: Console | None = None):
        """Initialize selector.

        Args:
            console: rich console to render on (default: stderr)
        """
        self.console = console or Console(stderr=True)

    def choose(self, catalog: TargetCatalog) -> SelectionResult:
        """Let the operator pick a target.

        Args:
            catalog: Known targets

        Returns:
            Chosen target, manual address and user, or Cancelled
        """
        targets = catalog.list()
        items = [target.label for target in targets]
        items += [MENU_MANUAL_INPUT, MENU_CANCEL]

        try:
            index = self._select("Select server:", items)
            if index == len(items) - 1:
                return Cancelled()
            if index < len(targets):
                target = targets[index]
                self.console.print(f"Selected server: {target.label}", markup=False)
                return Chosen(target)

            user = self._ask_valid("Enter username", validate_user)
            address = self._ask_valid("Enter IP address", validate_address)
        except OperatorCancelled:
            return Cancelled()

        self.console.print(f"Target: {user}@{address}", markup=False)
        return Manual(address=address, user=user)

    def choose_transfer_mode(self) -> TransferMode | None:
        """Ask for the transfer direction.

        Returns:
            Selected mode, or None when cancelled
        """
        items = [
            "Upload (local -> remote)",
            "Download (remote -> local)",
            MENU_CANCEL,
        ]
        try:
            index = self._select("Transfer mode:", items)
        except OperatorCancelled:
            return None
        if index == 0:
            return TransferMode.UPLOAD
        if index == 1:
            return TransferMode.DOWNLOAD
        return None

    def ask_text(self, prompt: str, default: str = "") -> str:
        """Ask for one line of text.

        Raises:
            OperatorCancelled: On Ctrl-C or end of input
        """
        answer = self._ask(
            lambda: Prompt.ask(prompt, console=self.console, default=default, show_default=False)
        )
        return answer.strip() or default

    def ask_secret(self, prompt: str) -> str:
        """Ask for a secret; input is not echoed.

        Raises:
            OperatorCancelled: On Ctrl-C or end of input
        """
        return self._ask(
            lambda: Prompt.ask(
                prompt,
                console=self.console,
                password=True,
                default="",
                show_default=False,
            )
        )

    def ask_path(self, prompt: str, default: str = "") -> str:
        """Ask for a local path with tab completion of file names.

        Raises:
            OperatorCancelled: On Ctrl-C or end of input
        """
        previous = readline.get_completer()
        delims = readline.get_completer_delims()
        readline.set_completer(_complete_path)
        readline.set_completer_delims(" \t\n")
        if "libedit" in (readline.__doc__ or ""):
            readline.parse_and_bind("bind ^I rl_complete")
        else:
            readline.parse_and_bind("tab: complete")
        try:
            return self.ask_text(prompt, default)
        finally:
            readline.set_completer(previous)
            readline.set_completer_delims(delims)

    def _select(self, title: str, items: list[str]) -> int:
        """Render a numbered menu and return the 0-based choice."""
        self.console.print(f"[bold]{title}[/bold]")
        for number, item in enumerate(items, start=1):
            self.console.print(f"  {number}. {item}", markup=False, highlight=False)

        choices = [str(number) for number in range(1, len(items) + 1)]
        answer = self._ask(
            lambda: Prompt.ask(
                "Choice",
                console=self.console,
                choices=choices,
                show_choices=False,
                default="1",
            )
        )
        return int(answer) - 1

    def _ask_valid(self, prompt: str, validate: Callable[[str], str]) -> str:
        """Ask until ``validate`` accepts the answer."""
        while True:
            try:
                return validate(self.ask_text(prompt))
            except ValueError as e:
                self.console.print(str(e), style="red", markup=False, highlight=False)

    @staticmethod
    def _ask(question: Callable[[], T]) -> T:
        try:
            return question()
        except (KeyboardInterrupt, EOFError) as e:
            raise OperatorCancelled() from e


def _complete_path(text: str, state: int) -> str | None:
    """readline completer for local file names."""
    pattern = os.path.expanduser(text) + "*"
    matches = [m + "/" if os.path.isdir(m) else m for m in sorted(glob.glob(pattern))]
    if state < len(matches):
        return matches[state]
    return None
