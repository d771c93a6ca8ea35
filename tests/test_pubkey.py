"""
We test the serialization methods for the PublicKey class
"""
import json

import pytest

from bacwallet.core import PointNotOnCurve, PubKeyError, UnrecognizedArgument
from bacwallet.cryptography import SECP256K1, Point
from bacwallet.wallet import PrivateKey, PublicKey

from tests.known_values import GENERATOR_COMPRESSED, GENERATOR_HASH160


def test_pubkey_recovery():
    """
    We verify that a random public key is recovered from its uncompressed and compressed DER encodings, its hex,
    its point and its coordinates
    """
    random_pubkey = PrivateKey().to_public_key()

    # From uncompressed
    unc_pubkey = random_pubkey.to_der(compressed=False)
    from_uncompressed = PublicKey(unc_pubkey)
    assert from_uncompressed.point == random_pubkey.point, "Failed to reconstruct PublicKey from uncompressed"
    assert not from_uncompressed.compressed, "Uncompressed encoding should give an uncompressed key"

    # From compressed
    from_compressed = PublicKey.from_der(random_pubkey.to_der())
    assert from_compressed == random_pubkey, "Failed to reconstruct PublicKey from compressed"

    # From hex, point and coordinates
    assert PublicKey(str(random_pubkey)) == random_pubkey, "Failed to reconstruct PublicKey from hex"
    assert PublicKey(random_pubkey.point) == random_pubkey, "Failed to reconstruct PublicKey from point"
    x, y = random_pubkey.point
    assert PublicKey({"x": x, "y": y}) == random_pubkey, "Failed to reconstruct PublicKey from coordinates"


def test_generator_encodings():
    generator_key = PublicKey(SECP256K1.generator)

    assert generator_key.to_der().hex() == GENERATOR_COMPRESSED, "Generator compressed encoding mismatch"
    assert generator_key.pubkey_hash().hex() == GENERATOR_HASH160, "Generator hash160 mismatch"
    assert len(generator_key.to_der(compressed=False)) == 65, "Uncompressed encoding should be 65 bytes"
    assert generator_key.network.name == "livenet", "Public key should fall back to the default network"

    # Odd y gets the 0x03 prefix
    negated = PublicKey(Point(SECP256K1.generator.x, SECP256K1.p - SECP256K1.generator.y))
    assert negated.to_der()[0] == 0x03, "Odd y coordinate should use the 0x03 prefix"
    assert PublicKey(negated.to_der()) == negated, "Failed to recover the odd parity point"


def test_to_dict():
    generator_key = PublicKey(SECP256K1.generator, network="testnet")
    key_dict = json.loads(generator_key.to_json())

    assert key_dict["der"] == GENERATOR_COMPRESSED, "Dict should carry the DER hex"
    assert key_dict["network"] == "testnet", "Dict should carry the network name"
    assert key_dict["compressed"] is True, "Dict should carry the compression flag"


def test_invalid_public_keys():
    """
    Points off the curve, x coordinates with no point, bad prefixes and bad inputs are rejected
    """
    with pytest.raises(PointNotOnCurve):
        PublicKey(Point(1, 1))
    with pytest.raises(PointNotOnCurve):
        PublicKey(Point())
    with pytest.raises(PointNotOnCurve):
        PublicKey(b'\x02' + b'\xff' * 32)

    with pytest.raises(PubKeyError):
        PublicKey(b'\x05' + SECP256K1.generator.x.to_bytes(32, "big"))
    with pytest.raises(PubKeyError):
        PublicKey("zz")

    with pytest.raises(UnrecognizedArgument):
        PublicKey(None)
    with pytest.raises(UnrecognizedArgument):
        PublicKey(1.5)


def test_pubkey_from_dict():
    """
    A public key is rebuilt from its own dict, whose coordinates are hex strings
    """
    random_pubkey = PrivateKey("testnet").to_public_key()
    from_dict = PublicKey(random_pubkey.to_dict())

    assert from_dict == random_pubkey, "Failed to reconstruct PublicKey from its dict"
    assert from_dict.network is random_pubkey.network, "Dict network not restored"

    uncompressed = PublicKey(SECP256K1.generator, compressed=False)
    assert PublicKey(uncompressed.to_dict()) == uncompressed, "Compression flag not restored from dict"

    with pytest.raises(PubKeyError):
        PublicKey({"x": "not hex", "y": "00"})
    with pytest.raises(UnrecognizedArgument):
        PublicKey({"x": 1.5, "y": 2.5})
