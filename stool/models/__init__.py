"""Data models for stool."""

from stool.models.invocation import AutomationScript, Invocation
from stool.models.outcome import OutcomeKind, SessionOutcome
from stool.models.plan import (
    AuthMode,
    ConnectionPlan,
    Default,
    Download,
    KeyFile,
    Operation,
    Password,
    Shell,
    Upload,
)
from stool.models.secret import Secret
from stool.models.target import Target

__all__ = [
    "AuthMode",
    "AutomationScript",
    "ConnectionPlan",
    "Default",
    "Download",
    "Invocation",
    "KeyFile",
    "Operation",
    "OutcomeKind",
    "Password",
    "Secret",
    "SessionOutcome",
    "Shell",
    "Target",
    "Upload",
]
