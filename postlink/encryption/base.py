from abc import ABC, abstractmethod


class BaseEncryptor(ABC):
    """Contract for all encryption adapters."""

    @abstractmethod
    def encrypt(self, data: bytes) -> bytes:
        """Encrypt a byte sequence.

        Args:
            data: Plaintext bytes (UTF-8 encoded metadata).

        Returns:
            Opaque ciphertext bytes.

        Raises:
            EncryptionError: on any failure.
        """
