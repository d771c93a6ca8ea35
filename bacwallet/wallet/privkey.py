"""
The PrivateKey class - a secp256k1 scalar tagged with a network and a compression flag
"""
import json
import threading
from secrets import randbelow

from bacwallet.core import (ECC, ECCPrivateKeyError, MissingNetwork, NetworkError, ScalarTooLarge, StructuralError,
                            UnrecognizedArgument, ZeroOrInvalidScalar, get_logger)
from bacwallet.cryptography import SECP256K1
from bacwallet.data import DEFAULT_REGISTRY, Network, NetworkRegistry, decode_base58check, encode_base58check
from bacwallet.wallet.sources import (FromBytes, FromEncodedString, FromFields, FromHex, FromRandom, FromScalar,
                                      PrivateKeySource, classify_private_key)

__all__ = ["PrivateKey"]

logger = get_logger(__name__)

SCALAR_BYTES = ECC.PRIVKEY_BYTES


class PrivateKey:
    """
    Immutable private key. Construct from nothing (random), an int scalar, 32 raw bytes, a hex string, a WIF string,
    a network identifier (random key on that network) or another key / {"scalar", "network"} mapping.
    """
    __slots__ = ("_scalar", "_compressed", "_network", "_public_key", "_lock")

    def __init__(self, data=None, network=None, registry: NetworkRegistry = DEFAULT_REGISTRY):
        source = classify_private_key(data, network, registry)
        scalar, compressed, resolved = self._normalize(source, network, registry)

        # --- Validation --- #
        if not isinstance(scalar, int) or scalar <= 0:
            raise ZeroOrInvalidScalar("Private key scalar must be a non-zero positive integer")
        if scalar >= SECP256K1.order:
            raise ScalarTooLarge("Private key scalar must be less than the curve order")
        if resolved is None:
            raise MissingNetwork(f"Could not resolve a network from {network!r}")

        self._scalar = scalar
        self._compressed = compressed
        self._network = resolved
        self._public_key = None
        self._lock = threading.Lock()

    # --- NORMALIZATION --- #
    @staticmethod
    def _normalize(source: PrivateKeySource, network, registry: NetworkRegistry) -> tuple[int, bool, Network | None]:
        """Reduce any source to (scalar, compressed, network)"""
        resolved = registry.get(network) if network is not None else registry.default

        match source:
            case FromRandom(network=source_network):
                # randbelow(n - 1) + 1 lies in [1, n - 1]
                scalar = randbelow(SECP256K1.order - 1) + 1
                network_used = source_network or resolved
                logger.debug(f"Generated random private key for network {network_used}")
                return scalar, True, network_used
            case FromScalar(scalar=scalar):
                return scalar, True, resolved
            case FromBytes(data=data):
                if len(data) != SCALAR_BYTES:
                    raise StructuralError(f"Private key bytes must be {SCALAR_BYTES} bytes. Found {len(data)}")
                return int.from_bytes(data, "big"), True, resolved
            case FromHex(hex_string=hex_string):
                return int(hex_string, 16), True, resolved
            case FromEncodedString(encoded=encoded):
                return PrivateKey._decode_wif(encoded, network, registry)
            case FromFields(scalar=scalar, network=fields_network, compressed=compressed):
                return scalar, compressed, registry.get(fields_network)
            case _:
                raise UnrecognizedArgument(f"Unsupported private key source: {source!r}")

    @staticmethod
    def _decode_wif(encoded: str, network, registry: NetworkRegistry) -> tuple[int, bool, Network | None]:
        """
        WIF = Base58Check(version || scalar[32] || [0x01 if compressed])
        """
        payload = decode_base58check(encoded)
        if len(payload) == 1 + SCALAR_BYTES:
            compressed = False
        elif len(payload) == 2 + SCALAR_BYTES and payload[-1] == ECC.WIF_COMPRESSED_FLAG:
            compressed = True
        else:
            raise ECCPrivateKeyError("Encoded private key has an invalid length or compression flag")

        wif_network = registry.get(payload[0], "privatekey")
        if wif_network is None:
            raise MissingNetwork(f"Unknown private key version byte {payload[0]:#04x}")
        if network is not None and registry.get(network) is not wif_network:
            raise NetworkError(f"Private key network mismatch: expected {network}, found {wif_network}")

        scalar = int.from_bytes(payload[1:1 + SCALAR_BYTES], "big")
        return scalar, compressed, wif_network

    # --- OVERRIDES --- #
    def __eq__(self, other) -> bool:
        if not isinstance(other, PrivateKey):
            return False
        return (self._scalar, self._compressed, self._network) == (other.scalar, other.compressed, other.network)

    def __hash__(self) -> int:
        return hash((self._scalar, self._compressed, self._network))

    def __str__(self):
        return self.to_hex()

    def __repr__(self):
        return f"<PrivateKey network={self._network} compressed={self._compressed}>"

    # --- PROPERTIES --- #
    @property
    def scalar(self) -> int:
        return self._scalar

    @property
    def compressed(self) -> bool:
        return self._compressed

    @property
    def network(self) -> Network:
        return self._network

    # --- METHODS --- #
    def to_bytes(self) -> bytes:
        return self._scalar.to_bytes(SCALAR_BYTES, "big")

    def to_hex(self) -> str:
        return self.to_bytes().hex()

    def to_wif(self) -> str:
        suffix = bytes([ECC.WIF_COMPRESSED_FLAG]) if self._compressed else b''
        return encode_base58check(bytes([self._network.privatekey]) + self.to_bytes() + suffix)

    def to_public_key(self):
        """
        Returns the PublicKey for this scalar. Computed on first call, the same object is returned afterwards
        """
        if self._public_key is None:
            with self._lock:
                if self._public_key is None:
                    from bacwallet.wallet.pubkey import PublicKey
                    self._public_key = PublicKey.from_private_key(self)
        return self._public_key

    def to_dict(self) -> dict:
        return {
            "network": self._network.name,
            "compressed": self._compressed,
            "private_key": self.to_hex(),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)
