"""Pass-through encryption adapter.

Use this module as a reference when implementing new encryption adapters.
Implement BaseEncryptor and register the provider in EncryptorFactory.
"""

from postlink.encryption.base import BaseEncryptor


class PlaintextEncryptor(BaseEncryptor):
    """Returns the input unchanged.

    No key material. Useful for local development and tests, never for
    data that leaves the machine.
    """

    def encrypt(self, data: bytes) -> bytes:
        return bytes(data)
