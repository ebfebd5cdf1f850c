"""
Symmetric encryption for job payloads.

Payloads are sealed as compact JWE tokens (direct key agreement,
A256GCM content encryption) with a process-wide octet key.
"""

import json
from typing import Protocol

from jwcrypto import jwe, jwk
from jwcrypto.common import JWException, json_encode

from rexport.logging import get_logger

logger = get_logger("rexport.exporter.crypto")

_PROTECTED_HEADER = json_encode({"alg": "dir", "enc": "A256GCM"})


class EncryptionError(Exception):
    """The key is missing, invalid, or cannot decrypt the given data."""


class Encrypter(Protocol):
    def encrypt(self, plaintext: str) -> bytes: ...

    def decrypt(self, ciphertext: bytes) -> str: ...


class JWEEncrypter:
    def __init__(self, key: jwk.JWK):
        if key.get("kty") != "oct":
            raise EncryptionError("payload key must be a symmetric (oct) JWK")
        self._key = key

    @classmethod
    def from_key_json(cls, key_json: str) -> "JWEEncrypter":
        try:
            return cls(jwk.JWK(**json.loads(key_json)))
        except (ValueError, TypeError, JWException) as e:
            raise EncryptionError(f"invalid payload key: {e}") from e

    @staticmethod
    def generate_key() -> str:
        """Return a fresh 256-bit key as JWK JSON."""
        return jwk.JWK.generate(kty="oct", size=256).export()

    def encrypt(self, plaintext: str) -> bytes:
        try:
            token = jwe.JWE(plaintext.encode("utf-8"), protected=_PROTECTED_HEADER)
            token.add_recipient(self._key)
            return token.serialize(compact=True).encode("ascii")
        except (ValueError, JWException) as e:
            raise EncryptionError(f"failed to encrypt payload: {e}") from e

    def decrypt(self, ciphertext: bytes) -> str:
        try:
            token = jwe.JWE()
            token.deserialize(ciphertext.decode("ascii"), key=self._key)
            return token.payload.decode("utf-8")
        except (ValueError, UnicodeDecodeError, JWException) as e:
            raise EncryptionError(f"failed to decrypt payload: {e}") from e


def load_encrypter(config_store) -> JWEEncrypter:
    """Build the process-wide encrypter from the key stored in the keyring."""
    key_json = config_store.get_payload_key()
    if not key_json:
        logger.error("No payload encryption key stored")
        raise EncryptionError(
            "no payload encryption key found; run 'rexport key generate' first"
        )
    return JWEEncrypter.from_key_json(key_json)
