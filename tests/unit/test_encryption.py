import base64
from unittest.mock import MagicMock

import pytest
from cryptography.fernet import Fernet

from postlink.config.settings import Settings
from postlink.encryption.base import BaseEncryptor
from postlink.encryption.exceptions import EncryptionError
from postlink.encryption.factory import EncryptorFactory
from postlink.encryption.fernet_adapter import FernetEncryptor
from postlink.encryption.fields import encrypt_field
from postlink.encryption.plaintext_adapter import PlaintextEncryptor


class TestFernetEncryptor:
    def test_ciphertext_decrypts_with_same_key(self, fernet_key: str) -> None:
        ciphertext = FernetEncryptor(fernet_key).encrypt(b"https://files/acme.pdf")

        assert ciphertext != b"https://files/acme.pdf"
        assert Fernet(fernet_key).decrypt(ciphertext) == b"https://files/acme.pdf"

    def test_missing_key_raises(self) -> None:
        with pytest.raises(EncryptionError, match="encryption_key is required"):
            FernetEncryptor("")

    def test_invalid_key_raises(self) -> None:
        with pytest.raises(EncryptionError, match="Invalid Fernet key"):
            FernetEncryptor("not-a-key")


class TestEncryptField:
    def test_returns_base64_of_ciphertext(self, fernet_key: str) -> None:
        encoded = encrypt_field(FernetEncryptor(fernet_key), "Acme Corp - Q2 Report.pdf")

        ciphertext = base64.b64decode(encoded)
        assert Fernet(fernet_key).decrypt(ciphertext).decode("utf-8") == (
            "Acme Corp - Q2 Report.pdf"
        )

    def test_encodes_text_as_utf8(self) -> None:
        encoded = encrypt_field(PlaintextEncryptor(), "Café ＆ Co")
        assert base64.b64decode(encoded) == "Café ＆ Co".encode("utf-8")

    def test_wraps_adapter_failures(self) -> None:
        encryptor = MagicMock(spec=BaseEncryptor)
        encryptor.encrypt.side_effect = RuntimeError("sdk offline")

        with pytest.raises(EncryptionError, match="sdk offline"):
            encrypt_field(encryptor, "name.pdf")

    def test_keeps_encryption_errors(self) -> None:
        encryptor = MagicMock(spec=BaseEncryptor)
        encryptor.encrypt.side_effect = EncryptionError("key revoked")

        with pytest.raises(EncryptionError, match="^key revoked$"):
            encrypt_field(encryptor, "name.pdf")


class TestEncryptorFactory:
    def test_creates_fernet(self, fernet_key: str) -> None:
        settings = Settings(encryption_provider="fernet", encryption_key=fernet_key)
        assert isinstance(EncryptorFactory.create(settings), FernetEncryptor)

    def test_creates_plaintext(self) -> None:
        settings = Settings(encryption_provider="PLAINTEXT")
        assert isinstance(EncryptorFactory.create(settings), PlaintextEncryptor)

    def test_unknown_provider_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown encryption provider 'rot13'"):
            EncryptorFactory.create(Settings(encryption_provider="rot13"))
