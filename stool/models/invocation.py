"""Subprocess invocation data models."""

import shlex
from dataclasses import dataclass, field

from stool.models.plan import Operation


@dataclass
class AutomationScript:
    """Generated expect program driving password and host-key prompts.

    ``text`` embeds the secret. It lives only in memory and in the argv of
    the one expect process that runs it.
    """

    text: str
    spawn_argv: list[str]
    host_key_pattern: str
    password_pattern: str

    def __repr__(self) -> str:
        return (
            f"AutomationScript(spawn_argv={self.spawn_argv!r}, "
            f"text=<{len(self.text)} chars redacted>)"
        )


@dataclass
class Invocation:
    """Exact subprocess to run for one session.

    ``operation`` carries the paths after defaults were applied. Use as a
    context manager so the argv and script are dropped once the session
    is over.
    """

    argv: list[str]
    operation: Operation
    display: str
    script: AutomationScript | None = None
    interactive: bool = field(default=True)

    def describe(self) -> str:
        """Command line safe for logs and error messages."""
        if self.script is not None:
            return f"{self.argv[0]} -c <script: {shlex.join(self.script.spawn_argv)}>"
        return shlex.join(self.argv)

    def discard(self) -> None:
        """Drop the argv and automation script."""
        self.argv = []
        self.script = None

    def __enter__(self) -> "Invocation":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.discard()

    def __repr__(self) -> str:
        return f"Invocation(display={self.display!r}, command={self.describe()!r})"
