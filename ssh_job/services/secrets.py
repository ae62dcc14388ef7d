"""Secret decryption services for node credentials."""

import logging

from cryptography.fernet import Fernet, InvalidToken

logger = logging.getLogger(__name__)


class PlaintextDecryptor:
    """Treats stored secrets as plaintext."""

    def decrypt(self, ciphertext: str | None) -> str | None:
        return ciphertext


class FernetDecryptor:
    """Decrypts Fernet tokens produced with a shared key."""

    def __init__(self, key: str | bytes) -> None:
        """Initialize decryptor.

        Args:
            key: URL-safe base64-encoded 32-byte Fernet key

        Raises:
            ValueError: If the key is malformed
        """
        self._fernet = Fernet(key)

    def encrypt(self, plaintext: str) -> str:
        """Encrypt plaintext into a token (used when writing inventories)."""
        return self._fernet.encrypt(plaintext.encode("utf-8")).decode("ascii")

    def decrypt(self, ciphertext: str | None) -> str | None:
        """Decrypt a token.

        Raises:
            ValueError: If the token is invalid or was encrypted with another key
        """
        if ciphertext is None:
            return None
        try:
            return self._fernet.decrypt(ciphertext.encode("ascii")).decode("utf-8")
        except (InvalidToken, UnicodeError) as e:
            logger.error("Failed to decrypt credential secret")
            raise ValueError("Invalid encrypted secret") from e
