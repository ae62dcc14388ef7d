"""SSH-related data models."""

from dataclasses import dataclass

SSH_PORT = 22


@dataclass(frozen=True)
class ConnectionCredentials:
    """Connection settings for a node.

    password and private_key hold ciphertext; they are only decrypted
    for the duration of a connection attempt.
    """

    host: str
    username: str
    password: str | None = None
    private_key: str | None = None
    port: int = SSH_PORT

    def __repr__(self) -> str:
        return (
            f"ConnectionCredentials(host={self.host!r}, "
            f"username={self.username!r}, port={self.port})"
        )

    @property
    def address(self) -> str:
        """user@host:port string for log messages."""
        return f"{self.username}@{self.host}:{self.port}"


@dataclass(frozen=True)
class Node:
    """A resolved node and its credentials."""

    id: str
    credentials: ConnectionCredentials
