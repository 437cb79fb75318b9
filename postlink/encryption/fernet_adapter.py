from cryptography.fernet import Fernet

from postlink.encryption.base import BaseEncryptor
from postlink.encryption.exceptions import EncryptionError


class FernetEncryptor(BaseEncryptor):
    """Symmetric encryption with a Fernet key from configuration."""

    def __init__(self, key: str | bytes) -> None:
        if not key:
            raise EncryptionError("encryption_key is required for encryption_provider=fernet")
        try:
            self._fernet = Fernet(key)
        except (ValueError, TypeError) as exc:
            raise EncryptionError(f"Invalid Fernet key: {exc}") from exc

    def encrypt(self, data: bytes) -> bytes:
        try:
            return self._fernet.encrypt(data)
        except TypeError as exc:
            raise EncryptionError(f"Fernet encryption failed: {exc}") from exc
