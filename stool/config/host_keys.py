"""SSH host key lookup.

Checks ~/.ssh/known_hosts before a password session so that automatic
trust-on-first-use acceptance of an unknown host key is flagged to the
operator instead of happening silently.
"""

import ipaddress
import logging
from pathlib import Path

import asyncssh

logger = logging.getLogger(__name__)


class HostKeyVerifier:
    """known_hosts lookup and host-key policy.

    ``strict_checking`` turns off automatic acceptance of unknown host keys
    in password sessions.
    """

    def __init__(
        self,
        known_hosts_path: str | None = None,
        strict_checking: bool = False,
    ):
        """Initialize host key verifier.

        Args:
            known_hosts_path: Path to known_hosts file or 'none' to disable
            strict_checking: Refuse unknown host keys instead of accepting them
        """
        self.strict_checking = strict_checking
        self._known_hosts = self._resolve_known_hosts(known_hosts_path)

    def _resolve_known_hosts(self, env_value: str | None) -> str | None:
        """Resolve known_hosts path.

        Returns:
            Path to known_hosts file or None when lookups are disabled
        """
        if env_value and env_value.lower() == "none":
            logger.debug("known_hosts lookup disabled")
            return None

        if env_value:
            path = Path(env_value).expanduser()
        else:
            path = Path.home() / ".ssh" / "known_hosts"

        # ssh creates the file on first accepted key
        if not path.exists():
            logger.debug("known_hosts not found at %s", path)
            return None
        return str(path)

    def is_known(self, address: str, port: int = 22) -> bool:
        """Check whether known_hosts holds a key for the address.

        Args:
            address: Host name or IP address
            port: SSH port

        Returns:
            True if a host key or CA key matches
        """
        if self._known_hosts is None:
            return False

        try:
            ipaddress.ip_address(address)
            addr = address
        except ValueError:
            addr = ""

        try:
            known_hosts = asyncssh.read_known_hosts(self._known_hosts)
            matched = known_hosts.match(address, addr, port)
        except (OSError, ValueError) as e:
            logger.warning("Cannot read known_hosts %s: %s", self._known_hosts, e)
            return False

        host_keys, ca_keys = matched[0], matched[1]
        return bool(host_keys or ca_keys)

    def check_before_auto_accept(self, address: str, port: int = 22) -> None:
        """Flag an upcoming automatic host-key decision for the address.

        Logs a warning when the host is unknown: in strict mode the session
        will refuse the key, otherwise it will be trusted on first use.
        """
        if self.is_known(address, port):
            logger.debug("Host key for %s:%d already known", address, port)
            return

        if self.strict_checking:
            logger.warning(
                "Host key for %s:%d is not in known_hosts; strict mode will refuse it",
                address,
                port,
            )
        else:
            logger.warning(
                "Host key for %s:%d is not in known_hosts; it will be accepted "
                "without verification (trust on first use)",
                address,
                port,
            )
