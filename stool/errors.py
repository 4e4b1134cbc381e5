"""Exception hierarchy for stool.

Every error carries the process exit code the CLI reports for it. Messages
identify targets and paths but never contain a resolved secret.
"""

from pathlib import Path

from stool.models import OutcomeKind, SessionOutcome


class StoolError(Exception):
    """Base class for errors reported to the operator."""

    exit_code: int = 1


class ConfigInvalid(StoolError):
    """Catalog source missing, unreadable or malformed."""

    exit_code = 7

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid config {source}: {reason}")


class CredentialResolutionFailed(StoolError):
    """An explicitly configured key file does not exist."""

    exit_code = 8

    def __init__(self, destination: str, key_path: Path | str):
        self.destination = destination
        self.key_path = str(key_path)
        super().__init__(f"Key file for {destination} not found: {key_path}")


class InvalidInput(StoolError):
    """Operator input rejected before any subprocess was spawned."""

    exit_code = 9


class ToolMissing(StoolError):
    """A required external program is not on PATH."""

    exit_code = OutcomeKind.TOOL_MISSING.exit_code

    def __init__(self, tool: str):
        self.tool = tool
        super().__init__(f"Required program not found on PATH: {tool}")


class SessionFailed(StoolError):
    """A spawned session ended with a non-success outcome."""

    def __init__(self, display: str, outcome: SessionOutcome):
        self.display = display
        self.outcome = outcome
        self.exit_code = outcome.kind.exit_code
        super().__init__(_describe(display, outcome))


def _describe(display: str, outcome: SessionOutcome) -> str:
    if outcome.kind is OutcomeKind.AUTH_FAILURE:
        text = f"Authentication failed for {display}"
    elif outcome.kind is OutcomeKind.CONNECTION_FAILURE:
        text = f"Cannot connect to {display}"
    elif outcome.kind is OutcomeKind.TOOL_MISSING:
        text = f"Required program missing for session to {display}"
    else:
        text = f"Session to {display} failed (exit {outcome.returncode})"
    if outcome.message:
        # Keep the report to a single line
        text = f"{text}: {' '.join(outcome.message.split())}"
    return text


class OperatorCancelled(Exception):
    """The operator aborted a prompt. Not an error: exits 0 silently."""
