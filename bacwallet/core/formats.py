"""
The bacwallet standard formats
"""
from typing import Final

__all__ = ["ECC", "WALLET", "XKEYS", "NETWORKS", "LOGGING"]


class ECC:
    """
    Sizes and prefixes for secp256k1 keys
    """
    COORD_BYTES: Final[int] = 32
    PRIVKEY_BYTES: Final[int] = 32
    COMPRESSED_BYTES: Final[int] = 33
    UNCOMPRESSED_BYTES: Final[int] = 65
    EVEN_PREFIX: Final[int] = 0x02
    ODD_PREFIX: Final[int] = 0x03
    UNCOMPRESSED_PREFIX: Final[int] = 0x04
    WIF_COMPRESSED_FLAG: Final[int] = 0x01


class WALLET:
    """
    Mnemonic and seed constants. Entropy must be a multiple of 32 bits, each word encodes 11 bits and the checksum
    contributes one bit per 32 bits of entropy.
    """
    DEFAULT_ENTROPY_BITS: Final[int] = 128
    MIN_ENTROPY_BITS: Final[int] = 128
    MAX_ENTROPY_BITS: Final[int] = 512
    ENTROPY_STEP_BITS: Final[int] = 32
    WORD_BITS: Final[int] = 11
    WORDLIST_SIZE: Final[int] = 2048
    HASH_BITS: Final[int] = 256
    SEED_ITERATIONS: Final[int] = 2048
    DKLEN: Final[int] = 64
    SALT_PREFIX: Final[str] = "mnemonic"
    DEFAULT_LANGUAGE: Final[str] = "english"


class XKEYS:
    """
    Constants related to the extended public and private keys
    """
    SEED_KEY: Final[bytes] = b'BAC seed'
    MIN_SEED_BYTES: Final[int] = 16  # 128 bits
    MAX_SEED_BYTES: Final[int] = 64  # 512 bits

    # Field sizes
    VERSION_SIZE: Final[int] = 4
    DEPTH_SIZE: Final[int] = 1
    PARENT_FINGERPRINT_SIZE: Final[int] = 4
    CHILD_INDEX_SIZE: Final[int] = 4
    CHAIN_CODE_SIZE: Final[int] = 32
    PRIVATE_KEY_SIZE: Final[int] = 32
    PUBLIC_KEY_SIZE: Final[int] = 33
    CHECKSUM_SIZE: Final[int] = 4

    SERIALIZED_BYTE_SIZE: Final[int] = 82


class NETWORKS:
    """
    Parameters for the networks every registry starts with
    """
    LIVENET: Final[dict] = {
        "name": "livenet",
        "alias": "mainnet",
        "pubkeyhash": 25,
        "privatekey": 0x80,
        "xpubkey": 0x0488b21e,
        "xprivkey": 0x0488ade4,
    }
    TESTNET: Final[dict] = {
        "name": "testnet",
        "alias": "regtest",
        "pubkeyhash": 64,
        "privatekey": 0xef,
        "xpubkey": 0x043587cf,
        "xprivkey": 0x04358394,
        "port": 18434,
        "magic": 0x0b110907,
    }
    REGTEST_PORT: Final[int] = 18525
    REGTEST_MAGIC: Final[int] = 0xfabfb5da
    DEFAULT: Final[str] = "livenet"


class LOGGING:
    """
    Package logger settings. Every module logger is a child of ROOT_NAME
    """
    ROOT_NAME: Final[str] = "bacwallet"
    DEFAULT_LEVEL: Final[str] = "INFO"
    FORMAT: Final[str] = '%(asctime)s [%(name)s] [%(levelname)s]: %(message)s'
