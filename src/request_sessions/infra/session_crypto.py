"""Criptografia simétrica do payload de sessão — AES-256-GCM.

Formato do token (valor do cookie):
    base64url_sem_padding( nonce(12) || ciphertext || tag(16) )

A chave AES é derivada do segredo configurado via HKDF-SHA256.
"""

from __future__ import annotations

import base64
import binascii
import json
import os
from typing import Any

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.hashes import SHA256
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

AES_KEY_SIZE = 32  # 256 bits
NONCE_SIZE = 12  # 96 bits (recomendado para GCM)
TAG_SIZE = 16
HKDF_INFO = b"request_sessions.cookie_store.v1"


class SessionCryptoError(Exception):
    """Erro ao criptografar ou descriptografar payload de sessão."""

    pass


def derive_key(secret: str | bytes) -> bytes:
    """Deriva a chave AES-256 a partir do segredo configurado.

    Raises:
        ValueError: Se o segredo for vazio
    """
    if not secret:
        raise ValueError("Session encryption secret must not be empty")
    secret_bytes = secret.encode("utf-8") if isinstance(secret, str) else secret
    hkdf = HKDF(algorithm=SHA256(), length=AES_KEY_SIZE, salt=None, info=HKDF_INFO)
    return hkdf.derive(secret_bytes)


def _b64encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _b64decode(token: str) -> bytes:
    padding = "=" * (-len(token) % 4)
    return base64.urlsafe_b64decode(token + padding)


def encrypt_payload(data: dict[str, Any], key: bytes) -> str:
    """Serializa em JSON e criptografa com AES-256-GCM.

    Raises:
        SessionCryptoError: Se o payload não for serializável
    """
    try:
        plaintext = json.dumps(data, separators=(",", ":")).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SessionCryptoError(f"Session payload is not JSON serializable: {e}") from e

    nonce = os.urandom(NONCE_SIZE)
    ciphertext = AESGCM(key).encrypt(nonce, plaintext, None)
    return _b64encode(nonce + ciphertext)


def decrypt_payload(token: str, key: bytes) -> Any:
    """Descriptografa o token e decodifica o JSON.

    Raises:
        SessionCryptoError: Token malformado, adulterado ou chave errada
    """
    try:
        raw = _b64decode(token)
    except (binascii.Error, ValueError) as e:
        raise SessionCryptoError("Session token is not valid base64") from e

    if len(raw) < NONCE_SIZE + TAG_SIZE:
        raise SessionCryptoError("Session token too short")

    nonce, ciphertext = raw[:NONCE_SIZE], raw[NONCE_SIZE:]
    try:
        plaintext = AESGCM(key).decrypt(nonce, ciphertext, None)
    except InvalidTag as e:
        raise SessionCryptoError("Session token failed authentication") from e

    try:
        return json.loads(plaintext.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        raise SessionCryptoError("Session token payload is not valid JSON") from e
