"""
Shortcuts for the hash functions used by the wallet. Each function returns the bytes digest
"""
import hashlib
import hmac

import unicodedata
from ripemd.ripemd160 import ripemd160 as _ripemd160

from bacwallet.core import WALLET

__all__ = ["hash160", "hash256", "hmac_sha512", "pbkdf2", "ripemd160", "sha256", "sha512"]


# --- SHA --- #
def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def sha512(data: bytes) -> bytes:
    return hashlib.sha512(data).digest()


# --- RIPEMD --- #
def ripemd160(data: bytes) -> bytes:
    return _ripemd160(data)


# --- BTC HASH FUNCTIONS --- #
def hash256(data: bytes) -> bytes:
    """SHA256(SHA256(data))"""
    return sha256(sha256(data))


def hash160(data: bytes) -> bytes:
    """RIPEMD160(SHA256(data))"""
    return ripemd160(sha256(data))


# --- WALLET HASHES --- #
def hmac_sha512(key: bytes, message: bytes) -> bytes:
    return hmac.new(key=key, msg=message, digestmod=hashlib.sha512).digest()


def pbkdf2(mnemonic: str, passphrase: str = '', iterations: int = WALLET.SEED_ITERATIONS,
           dklen: int = WALLET.DKLEN) -> bytes:
    """
    Derives the wallet seed from a mnemonic phrase using PBKDF2-HMAC-SHA512.

    mnemonic: The space separated mnemonic phrase.
    passphrase: An optional passphrase string (default: empty string).
    iterations: Number of iterations for PBKDF2 (default: 2048).
    dklen: Length of the derived key in bytes (default: 64 bytes).
    return: The derived key as bytes.
    """
    # Both the phrase and the salt are NFKD normalized before encoding
    normalized_mnemonic = unicodedata.normalize('NFKD', mnemonic)
    salt = unicodedata.normalize('NFKD', f"{WALLET.SALT_PREFIX}{passphrase}")

    return hashlib.pbkdf2_hmac('sha512', normalized_mnemonic.encode('utf-8'), salt.encode('utf-8'), iterations,
                               dklen)
