"""Session outcome data models."""

from dataclasses import dataclass
from enum import Enum


class OutcomeKind(Enum):
    """Classification of a finished session."""

    SUCCESS = "success"
    AUTH_FAILURE = "auth_failure"
    CONNECTION_FAILURE = "connection_failure"
    USER_CANCELLED = "user_cancelled"
    TOOL_MISSING = "tool_missing"
    OTHER_FAILURE = "other_failure"

    @property
    def exit_code(self) -> int:
        """Process exit code reported by the CLI for this outcome."""
        return _EXIT_CODES[self]


_EXIT_CODES = {
    OutcomeKind.SUCCESS: 0,
    OutcomeKind.USER_CANCELLED: 0,
    OutcomeKind.AUTH_FAILURE: 3,
    OutcomeKind.CONNECTION_FAILURE: 4,
    OutcomeKind.TOOL_MISSING: 5,
    OutcomeKind.OTHER_FAILURE: 6,
}


@dataclass(frozen=True)
class SessionOutcome:
    """Result of one executor run."""

    kind: OutcomeKind
    returncode: int | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        """True for success and operator cancellation."""
        return self.kind in (OutcomeKind.SUCCESS, OutcomeKind.USER_CANCELLED)
