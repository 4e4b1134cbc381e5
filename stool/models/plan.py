"""Connection plan data models.

Authentication modes and operation kinds are closed unions of frozen
dataclasses. Consumers dispatch with ``isinstance`` and raise ``TypeError``
on anything else.
"""

from dataclasses import dataclass

from stool.models.secret import Secret


@dataclass(frozen=True)
class KeyFile:
    """Authenticate with an identity file (``ssh -i``)."""

    path: str


@dataclass(frozen=True)
class Password:
    """Authenticate by answering the password prompt through expect."""

    secret: Secret


@dataclass(frozen=True)
class Default:
    """Defer to ssh-agent and ~/.ssh/config; pass no credential."""


AuthMode = KeyFile | Password | Default


@dataclass(frozen=True)
class Shell:
    """Interactive remote shell."""


@dataclass(frozen=True)
class Upload:
    """Copy a local file or directory to the remote host."""

    local_path: str
    remote_path: str = ""


@dataclass(frozen=True)
class Download:
    """Copy a remote file to the local machine."""

    remote_path: str
    local_path: str = ""


Operation = Shell | Upload | Download


@dataclass(frozen=True)
class ConnectionPlan:
    """Resolved, executable form of a target for one session attempt."""

    address: str
    user: str
    auth: AuthMode
    operation: Operation
    port: int = 22

    @property
    def destination(self) -> str:
        return f"{self.user}@{self.address}"

    @property
    def display(self) -> str:
        """``user@address:port`` for log and error messages."""
        return f"{self.destination}:{self.port}"

    @property
    def auth_name(self) -> str:
        if isinstance(self.auth, KeyFile):
            return "key"
        if isinstance(self.auth, Password):
            return "password"
        if isinstance(self.auth, Default):
            return "default"
        raise TypeError(f"Unknown auth mode: {type(self.auth).__name__}")
