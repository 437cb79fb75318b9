class EncryptionError(Exception):
    """Raised when the encryption collaborator cannot produce ciphertext."""
