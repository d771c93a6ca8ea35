"""
The custom exceptions used throughout bacwallet
"""
__all__ = ["DataEncodingError", "InvalidChecksum", "StreamError", "ReadError", "NetworkError", "WalletError",
           "UnrecognizedArgument", "ExtendedKeyError", "InvalidEntropyArgument", "NotEnoughEntropy",
           "TooMuchEntropy", "StructuralError", "ECCPrivateKeyError", "ZeroOrInvalidScalar", "ScalarTooLarge",
           "MissingNetwork", "PubKeyError", "PointNotOnCurve"]


class DataEncodingError(Exception):
    """
    For use in encoding/decoding algorithms
    """
    pass


class InvalidChecksum(DataEncodingError):
    """
    Recomputed checksum disagrees with the one supplied. Raised by Base58Check decoding and by extended key
    payload verification
    """
    pass


class StreamError(Exception):
    """
    Catchall for stream errors
    """
    pass


class ReadError(StreamError):
    """
    For when trying to read data of length n from the stream and receiving data of length < n
    """
    pass


class NetworkError(Exception):
    """
    For use in the NetworkRegistry and wherever a key disagrees with its network
    """
    pass


class WalletError(Exception):
    """
    Parent class for Mnemonic and wordlist errors
    """
    pass


class UnrecognizedArgument(TypeError):
    """
    Constructor input did not match any supported source shape
    """
    pass


class ExtendedKeyError(Exception):
    """Custom exception for extended key operations"""
    pass


class InvalidEntropyArgument(ExtendedKeyError):
    """
    Seed given to an extended key is not byte data
    """
    pass


class NotEnoughEntropy(InvalidEntropyArgument):
    """
    Seed shorter than the 128 bit minimum
    """
    pass


class TooMuchEntropy(InvalidEntropyArgument):
    """
    Seed longer than the 512 bit maximum
    """
    pass


class StructuralError(ExtendedKeyError):
    """
    A fixed-size field does not have its required byte length
    """
    pass


class ECCPrivateKeyError(Exception):
    """
    For if the private key is out of bounds
    """
    pass


class ZeroOrInvalidScalar(ECCPrivateKeyError):
    """
    Private scalar is zero (or missing)
    """
    pass


class ScalarTooLarge(ECCPrivateKeyError):
    """
    Private scalar is not less than the curve order
    """
    pass


class MissingNetwork(ECCPrivateKeyError):
    """
    No network could be resolved for a key
    """
    pass


class PubKeyError(Exception):
    """
    Used for Pubkey errors
    """
    pass


class PointNotOnCurve(PubKeyError):
    """
    Public key point fails curve validation
    """
    pass
