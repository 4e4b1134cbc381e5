"""Address and input validation utilities."""

from typing import Final

# Characters that would let a value escape its argv slot or the expect script
SUSPICIOUS_CHARS: Final[list[str]] = ["/", "\\", ";", "&", "|", "$", "`", "\n", "\r", "\x00", " "]


def validate_address(address: str) -> str:
    """Validate a host name or IP address.

    Args:
        address: The address to validate

    Returns:
        Address with surrounding whitespace removed

    Raises:
        ValueError: If address is invalid
    """
    address = address.strip()
    if not address:
        raise ValueError("Address cannot be empty")

    if len(address) > 253:
        raise ValueError(f"Address too long: {len(address)} chars")

    # ssh would read a leading dash as an option
    if address.startswith("-"):
        raise ValueError(f"Address cannot start with '-': {address!r}")

    for char in SUSPICIOUS_CHARS:
        if char in address:
            raise ValueError(f"Address contains invalid characters: {address!r}")

    return address


def validate_user(user: str) -> str:
    """Validate a remote user name.

    Raises:
        ValueError: If user name is empty or contains invalid characters
    """
    user = user.strip()
    if not user:
        raise ValueError("User cannot be empty")
    if user.startswith("-") or "@" in user:
        raise ValueError(f"Invalid user name: {user!r}")
    for char in SUSPICIOUS_CHARS:
        if char in user:
            raise ValueError(f"User contains invalid characters: {user!r}")
    return user


def validate_port(port: object) -> int:
    """Validate a TCP port number.

    Raises:
        ValueError: If port is not an integer in 1-65535
    """
    # bool is an int subclass; `port: true` in YAML is a mistake
    if isinstance(port, bool) or not isinstance(port, int):
        raise ValueError(f"Port must be an integer: {port!r}")
    if not 1 <= port <= 65535:
        raise ValueError(f"Port out of range: {port}")
    return port


def validate_remote_path(path: str) -> str:
    """Validate a remote path typed by the operator.

    Remote paths are expanded by the remote shell, so ``~`` is kept as-is.

    Raises:
        ValueError: If path is empty or contains control characters
    """
    path = path.strip()
    if not path:
        raise ValueError("Remote path cannot be empty")
    if "\x00" in path or "\n" in path or "\r" in path:
        raise ValueError(f"Remote path contains control characters: {path!r}")
    return path
