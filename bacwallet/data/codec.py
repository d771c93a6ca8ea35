"""
Methods for Base58 and Base58Check encoding and decoding
"""
from bacwallet.core import DataEncodingError, InvalidChecksum
from bacwallet.cryptography import hash256

__all__ = ["BASE58_ALPHABET", "encode_base58", "decode_base58", "base58_checksum", "encode_base58check",
           "decode_base58check"]

# --- BASE58 ENCODING --- #
BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
CHECKSUM_BYTES = 4


def encode_base58(data: bytes) -> str:
    """
    We return the base58 encoding of the given bytes data
    """
    base = len(BASE58_ALPHABET)
    n = int.from_bytes(data, byteorder="big")
    encoded_string = ""

    while n > 0:
        n, temp_index = divmod(n, base)
        encoded_string = BASE58_ALPHABET[temp_index] + encoded_string

    # Each leading zero byte is written as a leading '1'
    leading_zeros = len(data) - len(data.lstrip(b'\x00'))
    return ("1" * leading_zeros) + encoded_string


def decode_base58(data: str) -> bytes:
    """
    Given a base58 encoded string, return the underlying bytes
    """
    total = 0
    for char in data:
        char_i = BASE58_ALPHABET.find(char)
        if char_i < 0:
            raise DataEncodingError(f"Invalid Base58 character: {char!r}")
        total = total * 58 + char_i

    decoded_bytes = total.to_bytes((total.bit_length() + 7) // 8, "big")

    # Each leading '1' represents a leading zero byte
    leading_zeros = len(data) - len(data.lstrip("1"))
    return (b'\x00' * leading_zeros) + decoded_bytes


def base58_checksum(data: bytes) -> bytes:
    """First 4 bytes of HASH256(data)"""
    return hash256(data)[:CHECKSUM_BYTES]


def encode_base58check(data: bytes) -> str:
    """
    Given bytes data, we return the base58 encoding along with checksum
    """
    return encode_base58(data + base58_checksum(data))


def decode_base58check(data: str) -> bytes:
    """
    Given a string of base58Check chars, we decode it and return the payload without its checksum.
    Raises InvalidChecksum if the checksum fails
    """
    decoded = decode_base58(data)
    if len(decoded) < CHECKSUM_BYTES:
        raise DataEncodingError("Base58Check data shorter than its checksum")

    payload, checksum = decoded[:-CHECKSUM_BYTES], decoded[-CHECKSUM_BYTES:]
    if base58_checksum(payload) != checksum:
        raise InvalidChecksum("Decoded checksum does not equal given checksum")
    return payload
