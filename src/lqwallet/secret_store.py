"""
Mnemonic generation, validation, encryption, and the on-disk secret store.

The wallet keeps exactly one BIP39 phrase per data directory. The file is
plaintext unless a mnemonic password is configured, in which case it holds a
16-byte salt followed by a Fernet token.
"""

from __future__ import annotations

import base64
import os
from pathlib import Path

from loguru import logger

from lqwallet.constants import VALID_WORD_COUNTS

PBKDF2_ITERATIONS = 600_000
SALT_SIZE = 16


# ============================================================================
# Mnemonic Generation and Encryption
# ============================================================================


def generate_mnemonic_secure(word_count: int = 12) -> str:
    """
    Generate a BIP39 mnemonic from secure entropy.

    Args:
        word_count: Number of words (12, 15, 18, 21, or 24)

    Returns:
        BIP39 mnemonic phrase with valid checksum
    """
    from mnemonic import Mnemonic

    if word_count not in VALID_WORD_COUNTS:
        raise ValueError("word_count must be 12, 15, 18, 21, or 24")

    # 11 bits per word, one checksum bit per 32 bits of entropy
    entropy_bits = {12: 128, 15: 160, 18: 192, 21: 224, 24: 256}[word_count]

    m = Mnemonic("english")
    return m.generate(strength=entropy_bits)


def validate_mnemonic(mnemonic: str) -> bool:
    """
    Validate a BIP39 mnemonic phrase.

    Args:
        mnemonic: The mnemonic phrase to validate

    Returns:
        True if valid, False otherwise
    """
    from mnemonic import Mnemonic

    m = Mnemonic("english")
    return m.check(mnemonic)


def _derive_key(password: str, salt: bytes) -> bytes:
    from cryptography.hazmat.primitives import hashes
    from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=salt,
        iterations=PBKDF2_ITERATIONS,
    )
    return base64.urlsafe_b64encode(kdf.derive(password.encode("utf-8")))


def encrypt_mnemonic(mnemonic: str, password: str) -> bytes:
    """
    Encrypt a mnemonic with a password using Fernet (AES-128-CBC).

    Uses PBKDF2 to derive a key from the password.

    Returns:
        Salt followed by the Fernet token
    """
    from cryptography.fernet import Fernet

    salt = os.urandom(SALT_SIZE)
    fernet = Fernet(_derive_key(password, salt))
    return salt + fernet.encrypt(mnemonic.encode("utf-8"))


def decrypt_mnemonic(encrypted_data: bytes, password: str) -> str:
    """
    Decrypt a mnemonic with a password.

    Raises:
        ValueError: If decryption fails (wrong password or corrupted data)
    """
    from cryptography.fernet import Fernet, InvalidToken

    if len(encrypted_data) < SALT_SIZE:
        raise ValueError("Invalid encrypted data")

    salt = encrypted_data[:SALT_SIZE]
    token = encrypted_data[SALT_SIZE:]

    fernet = Fernet(_derive_key(password, salt))
    try:
        return fernet.decrypt(token).decode("utf-8")
    except InvalidToken as e:
        raise ValueError("Decryption failed - wrong password or corrupted file") from e


def _as_plaintext_mnemonic(data: bytes) -> str | None:
    """Return the phrase if ``data`` looks like a plaintext mnemonic, else None."""
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        return None
    words = text.strip().split()
    if len(words) in VALID_WORD_COUNTS and all(w.isalpha() for w in words):
        return " ".join(words)
    return None


# ============================================================================
# Secret Store
# ============================================================================


class SecretStore:
    """Single mnemonic file at a fixed path."""

    def __init__(self, path: Path, password: str | None = None) -> None:
        self.path = path
        self.password = password

    def exists(self) -> bool:
        return self.path.exists()

    def save(self, mnemonic: str) -> None:
        """
        Write the mnemonic to disk.

        Raises:
            FileExistsError: If a mnemonic file is already present
            OSError: If the data directory is not writable
        """
        if self.path.exists():
            raise FileExistsError(f"Mnemonic file already exists: {self.path}")

        self.path.parent.mkdir(parents=True, exist_ok=True)

        if self.password:
            data = encrypt_mnemonic(mnemonic, self.password)
        else:
            data = mnemonic.encode("utf-8")

        # "xb" refuses to clobber a file created since the check above
        with open(self.path, "xb") as f:
            f.write(data)
        os.chmod(self.path, 0o600)

        if self.password:
            logger.info(f"Encrypted mnemonic saved to {self.path}")
        else:
            logger.warning(
                f"Mnemonic saved to {self.path} (PLAINTEXT - set WALLET__MNEMONIC_PASSWORD "
                "to encrypt it)"
            )

    def load(self) -> str:
        """
        Read the mnemonic, decrypting it if necessary.

        Raises:
            FileNotFoundError: If no mnemonic file exists
            ValueError: If the file is encrypted and no password is configured,
                or the content is not a mnemonic
        """
        if not self.path.exists():
            raise FileNotFoundError(f"Mnemonic file not found: {self.path}")

        data = self.path.read_bytes()

        plaintext = _as_plaintext_mnemonic(data)
        if plaintext is not None:
            return plaintext

        if not self.password:
            raise ValueError(
                f"Mnemonic file appears to be encrypted. "
                f"Set WALLET__MNEMONIC_PASSWORD to decrypt: {self.path}"
            )

        mnemonic = decrypt_mnemonic(data, self.password).strip()
        if _as_plaintext_mnemonic(mnemonic.encode("utf-8")) is None:
            raise ValueError(f"Decrypted content is not a mnemonic: {self.path}")
        return mnemonic
