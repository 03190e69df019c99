"""Password hashing in the crypt(3) formats: DES, MD5, SHA-256 and SHA-512."""

from __future__ import annotations

import secrets
from enum import IntEnum

from passlib.hash import des_crypt, md5_crypt, sha256_crypt, sha512_crypt

SALT_CHARSET = "./abdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"

# glibc's default number of rounds; with it the hash carries no "rounds=" field
_SHA_ROUNDS = 5000


class CryptoMech(IntEnum):
    DES = 0
    MD5 = 1
    SHA256 = 2
    SHA512 = 3


DEFAULT_MECHANISM = CryptoMech.SHA256

# mechanism -> (code in the "$code$" prefix, salt length)
_MODULAR = {
    CryptoMech.MD5: ("1", 8),
    CryptoMech.SHA256: ("5", 16),
    CryptoMech.SHA512: ("6", 16),
}

_BY_CODE = {
    "1": md5_crypt,
    "5": sha256_crypt,
    "6": sha512_crypt,
}


def _random_chars(n: int) -> str:
    return "".join(secrets.choice(SALT_CHARSET) for _ in range(n))


def make_salt(mechanism: CryptoMech = DEFAULT_MECHANISM) -> str:
    """A fresh salt: two characters for DES, ``$code$salt$`` for the others."""
    if mechanism not in _MODULAR:
        return _random_chars(2)
    code, size = _MODULAR[mechanism]
    return f"${code}${_random_chars(size)}$"


def _hash_with_salt(password: str, salt: str) -> str:
    if not salt.startswith("$"):
        return des_crypt.using(salt=salt[:2]).hash(password)
    parts = salt.split("$")
    code, raw_salt = parts[1], parts[2]
    handler = _BY_CODE.get(code)
    if handler is None:
        raise ValueError(f"unsupported crypt scheme: ${code}$")
    if handler is md5_crypt:
        return md5_crypt.using(salt=raw_salt).hash(password)
    return handler.using(salt=raw_salt, rounds=_SHA_ROUNDS).hash(password)


def crypt_password(password: str, mechanism: CryptoMech = DEFAULT_MECHANISM) -> str:
    """Hash ``password`` with a new random salt."""
    return _hash_with_salt(password, make_salt(mechanism))


def check_password(password: str, crypted: str) -> bool:
    """True when ``password`` matches the stored ``crypted`` hash."""
    if not crypted:
        return False
    if crypted.startswith("$"):
        _, _, digest = crypted.rpartition("$")
        if not digest:
            return False
        parts = crypted.split("$")
        handler = _BY_CODE.get(parts[1]) if len(parts) > 1 else None
        if handler is None:
            return False
    else:
        handler = des_crypt
    try:
        return bool(handler.verify(password, crypted))
    except (ValueError, TypeError):
        return False