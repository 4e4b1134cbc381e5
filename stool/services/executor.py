"""Session executor.

Runs one invocation in the foreground. stdin and stdout stay attached to
the operator's terminal; stderr is relayed line by line and its tail is
kept to classify failures.
"""

import logging
import re
import subprocess
import sys
from collections import deque
from typing import IO

from stool.models import Invocation, OutcomeKind, SessionOutcome
from stool.protocols import Spawn, default_spawn

logger = logging.getLogger(__name__)

# scp reports unreadable or unwritable remote files as "scp: <path>: Permission denied"
REMOTE_FILE_DENIED_PATTERN = re.compile(
    r"^scp: .*Permission denied.*$",
    re.IGNORECASE | re.MULTILINE,
)

AUTH_FAILURE_PATTERNS = [
    re.compile(r"Permission denied", re.IGNORECASE),
    re.compile(r"Too many authentication failures", re.IGNORECASE),
    re.compile(r"no more authentication methods", re.IGNORECASE),
    re.compile(r"Authentication failed", re.IGNORECASE),
]

CONNECTION_FAILURE_PATTERNS = [
    re.compile(r"Connection timed out", re.IGNORECASE),
    re.compile(r"Operation timed out", re.IGNORECASE),
    re.compile(r"Connection refused", re.IGNORECASE),
    re.compile(r"No route to host", re.IGNORECASE),
    re.compile(r"Network is unreachable", re.IGNORECASE),
    re.compile(r"Could not resolve hostname", re.IGNORECASE),
    re.compile(r"Name or service not known", re.IGNORECASE),
    re.compile(r"Connection closed by", re.IGNORECASE),
    re.compile(r"Connection reset by", re.IGNORECASE),
]


def classify(returncode: int, diagnostic: str) -> SessionOutcome:
    """Classify a finished process.

    Args:
        returncode: Process exit status
        diagnostic: Captured stderr text

    Returns:
        SessionOutcome; failures keep the diagnostic text
    """
    message = diagnostic.strip()
    if returncode == 0:
        return SessionOutcome(OutcomeKind.SUCCESS, returncode)

    auth_text = REMOTE_FILE_DENIED_PATTERN.sub("", message)
    if any(p.search(auth_text) for p in AUTH_FAILURE_PATTERNS):
        kind = OutcomeKind.AUTH_FAILURE
    elif any(p.search(message) for p in CONNECTION_FAILURE_PATTERNS):
        kind = OutcomeKind.CONNECTION_FAILURE
    else:
        kind = OutcomeKind.OTHER_FAILURE
    return SessionOutcome(kind, returncode, message)


class SessionExecutor:
    """Spawns an invocation and waits for it."""

    def __init__(
        self,
        spawn: Spawn = default_spawn,
        relay: IO[str] | None = None,
        tail_lines: int = 20,
    ):
        """Initialize executor.

        Args:
            spawn: Process factory (``subprocess.Popen`` compatible)
            relay: Where captured stderr is echoed (default: sys.stderr)
            tail_lines: Number of stderr lines kept for classification
        """
        self._spawn = spawn
        self._relay = relay
        self.tail_lines = tail_lines

    def run(self, invocation: Invocation) -> SessionOutcome:
        """Run the invocation to completion.

        Blocks until the process exits. No retry is attempted.

        Args:
            invocation: What to run

        Returns:
            Classified outcome
        """
        logger.info("Starting session to %s: %s", invocation.display, invocation.describe())
        try:
            process = self._spawn(
                invocation.argv,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
            )
        except FileNotFoundError:
            tool = invocation.argv[0] if invocation.argv else "<none>"
            logger.info("Cannot start %s for %s", tool, invocation.display)
            return SessionOutcome(OutcomeKind.TOOL_MISSING, None, f"{tool}: not found")

        relay = self._relay or sys.stderr
        tail: deque[str] = deque(maxlen=self.tail_lines)
        try:
            if process.stderr is not None:
                for line in process.stderr:
                    relay.write(line)
                    relay.flush()
                    tail.append(line)
            returncode = process.wait()
        except KeyboardInterrupt:
            returncode = process.wait()
            logger.info("Session to %s interrupted (exit %s)", invocation.display, returncode)
            return SessionOutcome(OutcomeKind.USER_CANCELLED, returncode)
        finally:
            if process.stderr is not None:
                process.stderr.close()

        outcome = classify(returncode, "".join(tail))
        if outcome.kind is OutcomeKind.SUCCESS:
            logger.info("Session to %s completed", invocation.display)
        else:
            logger.info(
                "Session to %s failed: %s (exit %d)",
                invocation.display,
                outcome.kind.value,
                returncode,
            )
        return outcome
