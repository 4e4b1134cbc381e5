"""Quoting helpers for expect (Tcl) script text."""

# Characters with special meaning inside a Tcl double-quoted word
_TCL_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "$": "\\$",
    "[": "\\[",
    "]": "\\]",
    "{": "\\{",
    "}": "\\}",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def tcl_escape(value: str) -> str:
    """Escape text for use inside a Tcl double-quoted word."""
    return "".join(_TCL_ESCAPES.get(c, c) for c in value)


def tcl_quote(value: str) -> str:
    """Quote a value as one Tcl word.

    The result is a double-quoted word in which no command, variable or
    backslash substitution can change the value.

    Args:
        value: Literal text

    Returns:
        Tcl-safe quoted word
    """
    return f'"{tcl_escape(value)}"'


def tcl_list(args: list[str]) -> str:
    """Quote a command line as space-separated Tcl words."""
    return " ".join(tcl_quote(a) for a in args)
