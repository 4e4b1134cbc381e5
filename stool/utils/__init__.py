"""Utilities for stool."""

from stool.utils.console import ColorfulFormatter
from stool.utils.shell import tcl_escape, tcl_list, tcl_quote
from stool.utils.validation import (
    validate_address,
    validate_port,
    validate_remote_path,
    validate_user,
)

__all__ = [
    "ColorfulFormatter",
    "tcl_escape",
    "tcl_list",
    "tcl_quote",
    "validate_address",
    "validate_port",
    "validate_remote_path",
    "validate_user",
]
