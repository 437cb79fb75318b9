import base64

from postlink.encryption.base import BaseEncryptor
from postlink.encryption.exceptions import EncryptionError


def encrypt_field(encryptor: BaseEncryptor, plaintext: str) -> str:
    """Encrypt UTF-8 text and return the ciphertext as base64 for the wire.

    Raises:
        EncryptionError: if the adapter fails for any reason.
    """
    try:
        ciphertext = encryptor.encrypt(plaintext.encode("utf-8"))
    except EncryptionError:
        raise
    except Exception as exc:
        raise EncryptionError(f"Encryption failed: {exc}") from exc
    return base64.b64encode(ciphertext).decode("ascii")
