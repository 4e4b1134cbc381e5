"""Protocol interfaces for dependency inversion.

Components depend on these interfaces rather than on the rich-based
selector or on ``subprocess.Popen`` directly, so tests can pass doubles:

    class ScriptedPrompter:
        def __init__(self, answers):
            self.answers = list(answers)

        def ask_text(self, prompt, default=""):
            return self.answers.pop(0)

        def ask_secret(self, prompt):
            return self.answers.pop(0)

    resolver = CredentialResolver(ScriptedPrompter([""]))
"""

import subprocess
from typing import IO, Any, Protocol, runtime_checkable


@runtime_checkable
class Prompter(Protocol):
    """Protocol for operator prompts.

    Implementations raise ``OperatorCancelled`` when the operator aborts
    (Ctrl-C or end of input).
    """

    def ask_text(self, prompt: str, default: str = "") -> str:
        """Ask for one line of text.

        Args:
            prompt: Question shown to the operator
            default: Value returned for empty input

        Returns:
            Entered text, or ``default``
        """
        ...

    def ask_secret(self, prompt: str) -> str:
        """Ask for a secret with masked input.

        Returns:
            Entered text (may be empty)
        """
        ...


class SpawnProcess(Protocol):
    """The subset of ``subprocess.Popen`` the session executor uses."""

    stderr: IO[str] | None

    def wait(self, timeout: float | None = None) -> int: ...


class Spawn(Protocol):
    """Callable that starts a process, ``subprocess.Popen`` compatible."""

    def __call__(self, args: list[str], **kwargs: Any) -> SpawnProcess: ...


def default_spawn(args: list[str], **kwargs: Any) -> subprocess.Popen[str]:
    """Start a process with ``subprocess.Popen``."""
    return subprocess.Popen(args, **kwargs)
