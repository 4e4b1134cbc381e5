"""Scoped secret value."""

import hmac


class Secret:
    """A password held in a zeroable buffer.

    ``str()`` and ``repr()`` are masked. Use as a context manager to clear
    the buffer when the session that needs it is over::

        with Secret(value) as secret:
            run_session(secret)
    """

    __slots__ = ("_buffer",)

    def __init__(self, value: str) -> None:
        if not value:
            raise ValueError("Secret cannot be empty")
        self._buffer = bytearray(value.encode("utf-8"))

    def reveal(self) -> str:
        """Return the plaintext. Raises ValueError once cleared."""
        if self.cleared:
            raise ValueError("Secret has been cleared")
        return self._buffer.decode("utf-8")

    def clear(self) -> None:
        """Zero the backing buffer."""
        for i in range(len(self._buffer)):
            self._buffer[i] = 0
        self._buffer = bytearray()

    @property
    def cleared(self) -> bool:
        return not self._buffer

    def __enter__(self) -> "Secret":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.clear()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Secret):
            return NotImplemented
        return hmac.compare_digest(bytes(self._buffer), bytes(other._buffer))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return "Secret('***')"

    def __str__(self) -> str:
        return "***"
