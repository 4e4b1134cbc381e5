"""Remote target data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Target:
    """One remote endpoint from the catalog or from manual input.

    At most one of ``key_path`` and ``password`` is set. Neither set means
    the credential is resolved interactively.
    """

    address: str
    user: str
    name: str | None = None
    port: int = 22
    key_path: str | None = None
    password: str | None = None

    def __post_init__(self) -> None:
        if self.key_path and self.password:
            raise ValueError(
                f"Target {self.destination} sets both key_path and password"
            )

    @property
    def destination(self) -> str:
        """``user@address`` as passed to ssh."""
        return f"{self.user}@{self.address}"

    @property
    def label(self) -> str:
        """Menu label: display name followed by the destination."""
        if self.name:
            return f"{self.name} ({self.destination})"
        return self.destination

    def __repr__(self) -> str:
        password = "'***'" if self.password else "None"
        return (
            f"Target(address={self.address!r}, user={self.user!r}, "
            f"name={self.name!r}, port={self.port}, "
            f"key_path={self.key_path!r}, password={password})"
        )
