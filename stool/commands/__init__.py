"""Operator command flows."""

from stool.commands.session import run_session
from stool.commands.ssh import connect
from stool.commands.transfer import transfer

__all__ = ["connect", "run_session", "transfer"]
