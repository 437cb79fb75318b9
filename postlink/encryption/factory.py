from postlink.config.settings import Settings
from postlink.encryption.base import BaseEncryptor
from postlink.encryption.fernet_adapter import FernetEncryptor
from postlink.encryption.plaintext_adapter import PlaintextEncryptor


class EncryptorFactory:
    """Creates the configured encryption adapter."""

    PROVIDERS = ("fernet", "plaintext")

    @classmethod
    def create(cls, settings: Settings) -> BaseEncryptor:
        provider = settings.encryption_provider.lower()
        if provider == "fernet":
            return FernetEncryptor(settings.encryption_key)
        if provider == "plaintext":
            return PlaintextEncryptor()
        raise ValueError(
            f"Unknown encryption provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
