"""
The PublicKey class - a validated secp256k1 point with a compression flag and network
"""
import json

from bacwallet.core import ECC, PointNotOnCurve, PubKeyError, UnrecognizedArgument, get_stream, read_big_int, \
    read_stream
from bacwallet.cryptography import SECP256K1, Point, hash160
from bacwallet.data import DEFAULT_REGISTRY, Network, NetworkRegistry
from bacwallet.wallet.sources import (FromBytes, FromCoordinates, FromHex, FromPoint, FromPrivateKey,
                                      PublicKeySource, classify_public_key, is_hex)

__all__ = ["PublicKey"]

BYTE_LEN = ECC.COORD_BYTES


class PublicKey:
    """
    Immutable public key. Construct from a Point, an {"x", "y"} mapping, DER bytes or hex, or a PrivateKey.
    """
    __slots__ = ("_point", "_compressed", "_network")

    def __init__(self, data, compressed: bool | None = None, network=None,
                 registry: NetworkRegistry = DEFAULT_REGISTRY):
        if data is None:
            raise UnrecognizedArgument("First argument is required, please include public key data.")

        source = classify_public_key(data)
        point, source_compressed, source_network = self._normalize(source)

        if not point or not SECP256K1.is_point_on_curve(point):
            raise PointNotOnCurve("Public key point is not on the secp256k1 curve")

        if compressed is None:
            compressed = True if source_compressed is None else source_compressed
        if source_network is None:
            source_network = network
        if source_network is None:
            resolved = registry.default
        elif isinstance(source_network, Network):
            resolved = source_network
        else:
            resolved = registry.get(source_network)

        self._point = point
        self._compressed = compressed
        self._network = resolved

    # --- NORMALIZATION --- #
    @classmethod
    def _normalize(cls, source: PublicKeySource) -> tuple[Point, bool | None, Network | None]:
        """Reduce any source to (point, compressed, network). None means the caller decides"""
        match source:
            case FromPoint(point=point):
                return point, None, None
            case FromCoordinates(x=x, y=y, compressed=compressed, network=network):
                return Point(cls._coordinate(x, "x"), cls._coordinate(y, "y")), compressed, network
            case FromHex(hex_string=hex_string):
                if not is_hex(hex_string):
                    raise PubKeyError("Public key string is not valid hex")
                return cls._decode_der(bytes.fromhex(hex_string))
            case FromBytes(data=data):
                return cls._decode_der(data)
            case FromPrivateKey(private_key=private_key):
                point = SECP256K1.multiply_generator(private_key.scalar)
                return point, private_key.compressed, private_key.network
            case _:
                raise UnrecognizedArgument(f"Unsupported public key source: {source!r}")

    @staticmethod
    def _coordinate(value, name: str) -> int:
        """Coordinates are ints or hex strings, as written by to_dict"""
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, str):
            if not is_hex(value):
                raise PubKeyError(f"Public key {name} coordinate is not valid hex")
            return int(value, 16)
        raise UnrecognizedArgument(
            f"Public key {name} coordinate must be an int or hex string. Received: {type(value)}")

    @staticmethod
    def _decode_der(data: bytes) -> tuple[Point, bool, None]:
        """
        Compressed: 0x02 | 0x03 + X. Uncompressed: 0x04 + X + Y
        """
        if len(data) == ECC.UNCOMPRESSED_BYTES and data[0] == ECC.UNCOMPRESSED_PREFIX:
            stream = get_stream(data[1:])
            x = read_big_int(stream, BYTE_LEN, "pubkey_x")
            y = read_big_int(stream, BYTE_LEN, "pubkey_y")
            return Point(x, y), False, None

        if len(data) == ECC.COMPRESSED_BYTES and data[0] in (ECC.EVEN_PREFIX, ECC.ODD_PREFIX):
            stream = get_stream(data)
            prefix = read_stream(stream, 1, "prefix")[0]
            x = read_big_int(stream, BYTE_LEN, "pubkey_x")
            try:
                y = SECP256K1.find_y_from_x(x, odd=prefix == ECC.ODD_PREFIX)
            except ValueError as e:
                raise PointNotOnCurve("Compressed public key x coordinate is not on the curve") from e
            return Point(x, y), True, None

        raise PubKeyError("Unrecognized public key encoding")

    # --- CLASS METHODS --- #
    @classmethod
    def from_private_key(cls, private_key) -> "PublicKey":
        return cls(private_key)

    @classmethod
    def from_der(cls, data: bytes, network=None, registry: NetworkRegistry = DEFAULT_REGISTRY) -> "PublicKey":
        return cls(bytes(data), network=network, registry=registry)

    # --- OVERRIDES --- #
    def __eq__(self, other) -> bool:
        if not isinstance(other, PublicKey):
            return False
        return self._point == other.point and self._compressed == other.compressed

    def __hash__(self) -> int:
        return hash((self._point, self._compressed))

    def __str__(self):
        return self.to_der().hex()

    def __repr__(self):
        return f"<PublicKey {self} network={self._network}>"

    # --- PROPERTIES --- #
    @property
    def point(self) -> Point:
        return self._point

    @property
    def compressed(self) -> bool:
        return self._compressed

    @property
    def network(self) -> Network | None:
        return self._network

    # --- FORMATTING --- #
    def x_bytes(self) -> bytes:
        return self._point.x.to_bytes(BYTE_LEN, "big")

    def y_bytes(self) -> bytes:
        return self._point.y.to_bytes(BYTE_LEN, "big")

    def to_der(self, compressed: bool | None = None) -> bytes:
        """
        Returns the DER encoding. The compression flag of the key is used unless one is given
        """
        compressed = self._compressed if compressed is None else compressed
        if not compressed:
            return bytes([ECC.UNCOMPRESSED_PREFIX]) + self.x_bytes() + self.y_bytes()

        # Parity from the last byte of the big-endian Y encoding
        prefix = ECC.ODD_PREFIX if self.y_bytes()[-1] & 1 else ECC.EVEN_PREFIX
        return bytes([prefix]) + self.x_bytes()

    to_bytes = to_der

    def pubkey_hash(self) -> bytes:
        return hash160(self.to_der())

    # --- DISPLAY --- #
    def to_dict(self) -> dict:
        return {
            "x": self.x_bytes().hex(),
            "y": self.y_bytes().hex(),
            "compressed": self._compressed,
            "network": self._network.name if self._network else None,
            "der": self.to_der().hex(),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)
