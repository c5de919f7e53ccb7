"""Encryption utility for server account passwords."""
import base64
import hashlib
from cryptography.fernet import Fernet, InvalidToken

from shared.core.config import settings


class EncryptionService:
    """Service for encrypting and decrypting sensitive data."""

    def __init__(self, hex_key: str | None = None, secret: str | None = None):
        if hex_key:
            # Fernet requires exactly 32 bytes, use first 32 bytes
            key_bytes = bytes.fromhex(hex_key)[:32]
        else:
            # stable across restarts so stored values stay readable
            key_bytes = hashlib.sha256((secret or settings.JWT_SECRET).encode()).digest()
        self.cipher = Fernet(base64.urlsafe_b64encode(key_bytes))

    def encrypt(self, data: str | None) -> str | None:
        if not data:
            return None
        return self.cipher.encrypt(data.encode()).decode()

    def decrypt(self, encrypted_data: str | None) -> str | None:
        if not encrypted_data:
            return None
        try:
            return self.cipher.decrypt(encrypted_data.encode()).decode()
        except InvalidToken:
            raise ValueError("Stored value cannot be decrypted with the configured key")


encryption_service = EncryptionService(settings.ENCRYPTION_KEY)
