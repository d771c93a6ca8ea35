"""
Extended Keys (xprv/xpub) for the bacwallet root key

Serialized layout, 82 bytes before Base58 encoding:

    version[4] | depth[1] | parent_fingerprint[4] | child_index[4] | chain_code[32] | key_data[33] | checksum[4]

key_data is 0x00 || private_key for private keys and the compressed public key for public keys. The checksum is
HASH256 of the first 78 bytes, truncated to 4 bytes. Supplied checksums are verified, never recomputed over.

Only root keys built from a seed, and keys parsed from their serialized form, are supported. Child key derivation
is not part of this module.
"""
import json
import threading
from dataclasses import dataclass
from secrets import token_bytes
from typing import Optional

from bacwallet.core import (XKEYS, DataEncodingError, ECCPrivateKeyError, ExtendedKeyError, InvalidChecksum,
                            InvalidEntropyArgument, MissingNetwork, NetworkError, NotEnoughEntropy, PubKeyError,
                            StructuralError, TooMuchEntropy, UnrecognizedArgument, get_logger, get_stream,
                            read_stream)
from bacwallet.cryptography import hash160, hmac_sha512
from bacwallet.data import DEFAULT_REGISTRY, Network, NetworkRegistry, base58_checksum, decode_base58, encode_base58
from bacwallet.wallet.privkey import PrivateKey
from bacwallet.wallet.pubkey import PublicKey
from bacwallet.wallet.sources import (FromJSON, FromObject, FromRandom, FromSerialized, classify_extended_key,
                                      is_hex)

__all__ = ["ExtendedKeyBuffers", "ExtendedKey", "HDPrivateKey", "HDPublicKey"]

logger = get_logger(__name__)

KEY_PAD = b'\x00'


@dataclass(frozen=True)
class ExtendedKeyBuffers:
    """The raw fields of an extended key. The key owns its buffers once built"""
    version: bytes
    depth: bytes
    parent_fingerprint: bytes
    child_index: bytes
    chain_code: bytes
    key: bytes
    checksum: bytes = b''


def _check_buffer(name: str, value, size: int):
    if not isinstance(value, bytes):
        raise StructuralError(f"{name} argument is not a buffer")
    if len(value) != size:
        raise StructuralError(f"{name} has not the expected size: found {len(value)}, expected {size}")


def _as_buffer(name: str, value, size: int) -> bytes:
    """Convert an int, hex string or bytes field to bytes of the given size"""
    if isinstance(value, bool):
        raise StructuralError(f"{name} can not be a boolean")
    if isinstance(value, int):
        try:
            return value.to_bytes(size, "big")
        except OverflowError as e:
            raise StructuralError(f"{name} does not fit in {size} bytes") from e
    if isinstance(value, str):
        if not is_hex(value):
            raise StructuralError(f"{name} is not a valid hex string")
        return bytes.fromhex(value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    raise StructuralError(f"{name} has an unsupported type: {type(value)}")


def _text_from(data) -> str:
    if isinstance(data, (bytes, bytearray)):
        return bytes(data).decode("ascii")
    if isinstance(data, str):
        return data
    raise UnrecognizedArgument(f"Serialized extended key must be text or bytes. Received: {type(data)}")


class ExtendedKey:
    """
    Shared layout, validation and serialization for HDPrivateKey and HDPublicKey
    """
    __slots__ = ("_buffers", "_network", "_fingerprint", "_text", "_registry")

    KEY_SIZE = XKEYS.PRIVATE_KEY_SIZE
    VERSION_FIELD = "xprivkey"

    # --- CONSTRUCTION --- #
    @classmethod
    def _create(cls, buffers: ExtendedKeyBuffers, registry: NetworkRegistry):
        obj = cls.__new__(cls)
        obj._build(buffers, registry)
        return obj

    def _build(self, buffers: ExtendedKeyBuffers, registry: NetworkRegistry):
        raise NotImplementedError(f"{self.__class__.__name__} must implement _build()")

    @classmethod
    def _validate_buffers(cls, buffers: ExtendedKeyBuffers):
        _check_buffer("version", buffers.version, XKEYS.VERSION_SIZE)
        _check_buffer("depth", buffers.depth, XKEYS.DEPTH_SIZE)
        _check_buffer("parent_fingerprint", buffers.parent_fingerprint, XKEYS.PARENT_FINGERPRINT_SIZE)
        _check_buffer("child_index", buffers.child_index, XKEYS.CHILD_INDEX_SIZE)
        _check_buffer("chain_code", buffers.chain_code, XKEYS.CHAIN_CODE_SIZE)
        _check_buffer("key", buffers.key, cls.KEY_SIZE)
        if buffers.checksum:
            _check_buffer("checksum", buffers.checksum, XKEYS.CHECKSUM_SIZE)

    @classmethod
    def _key_data(cls, key: bytes) -> bytes:
        return key

    @classmethod
    def _payload(cls, buffers: ExtendedKeyBuffers) -> bytes:
        """The 78 bytes the checksum covers"""
        return b''.join([
            buffers.version,
            buffers.depth,
            buffers.parent_fingerprint,
            buffers.child_index,
            buffers.chain_code,
            cls._key_data(buffers.key)
        ])

    @staticmethod
    def _verify_checksum(payload: bytes, checksum: bytes) -> bytes:
        """Returns the checksum for the payload. A supplied checksum must match it"""
        calc_checksum = base58_checksum(payload)
        if checksum and checksum != calc_checksum:
            raise InvalidChecksum("Extended key checksum doesn't match its payload")
        return calc_checksum

    @classmethod
    def _resolve_version(cls, version: bytes, registry: NetworkRegistry) -> Network:
        version_int = int.from_bytes(version, "big")
        network = registry.get(version_int, cls.VERSION_FIELD)
        if network is None:
            raise MissingNetwork(f"No network has {cls.VERSION_FIELD} version {version.hex()}")
        return network

    @classmethod
    def _read_key(cls, stream) -> bytes:
        return read_stream(stream, cls.KEY_SIZE, "key_data")

    @classmethod
    def _parse_buffers(cls, text: str) -> ExtendedKeyBuffers:
        """
        Base58-decode the text and slice it into fields. The checksum is carried along for verification
        """
        raw = decode_base58(_text_from(text))
        if len(raw) != XKEYS.SERIALIZED_BYTE_SIZE:
            raise StructuralError(
                f"Serialized extended key must be {XKEYS.SERIALIZED_BYTE_SIZE} bytes. Found {len(raw)}")

        stream = get_stream(raw)
        version = read_stream(stream, XKEYS.VERSION_SIZE, "version")
        depth = read_stream(stream, XKEYS.DEPTH_SIZE, "depth")
        parent_fingerprint = read_stream(stream, XKEYS.PARENT_FINGERPRINT_SIZE, "parent_fingerprint")
        child_index = read_stream(stream, XKEYS.CHILD_INDEX_SIZE, "child_index")
        chain_code = read_stream(stream, XKEYS.CHAIN_CODE_SIZE, "chain_code")
        key = cls._read_key(stream)
        checksum = read_stream(stream, XKEYS.CHECKSUM_SIZE, "checksum")

        return ExtendedKeyBuffers(version, depth, parent_fingerprint, child_index, chain_code, key, checksum)

    def _finish(self, buffers: ExtendedKeyBuffers, payload: bytes, network: Network, fingerprint: bytes,
                registry: NetworkRegistry):
        self._buffers = buffers
        self._network = network
        self._fingerprint = fingerprint
        self._text = encode_base58(payload + buffers.checksum)
        self._registry = registry

    @classmethod
    def from_string(cls, text: str, network=None, registry: NetworkRegistry = DEFAULT_REGISTRY):
        """
        Parse the Base58Check text form. If a network is given the key must belong to it
        """
        key = cls._create(cls._parse_buffers(text), registry)
        if network is not None and registry.get(network) is not key.network:
            raise NetworkError(f"Extended key belongs to {key.network}, expected {network}")
        return key

    parse = from_string

    @classmethod
    def get_serialized_error(cls, data, network=None,
                             registry: NetworkRegistry = DEFAULT_REGISTRY) -> Optional[Exception]:
        """
        Returns the error parsing the data would raise, or None if the data is a valid serialized key
        """
        try:
            cls.from_string(data, network=network, registry=registry)
        except (DataEncodingError, ExtendedKeyError, ECCPrivateKeyError, PubKeyError, NetworkError,
                UnrecognizedArgument, UnicodeDecodeError) as e:
            return e
        return None

    @classmethod
    def is_valid_serialized(cls, data, network=None, registry: NetworkRegistry = DEFAULT_REGISTRY) -> bool:
        return cls.get_serialized_error(data, network, registry) is None

    # --- OVERRIDES --- #
    def __eq__(self, other) -> bool:
        """
        Two extended keys are equal if and only if their serialized bytes are equal
        """
        if not isinstance(other, ExtendedKey):
            return False
        return self.to_bytes() == other.to_bytes()

    def __hash__(self) -> int:
        return hash(self.to_bytes())

    def __str__(self):
        return self._text

    def __repr__(self):
        return f"<{self.__class__.__name__}: {self._text}>"

    # --- PROPERTIES --- #
    @property
    def version(self) -> bytes:
        return self._buffers.version

    @property
    def depth(self) -> int:
        return self._buffers.depth[0]

    @property
    def parent_fingerprint(self) -> bytes:
        return self._buffers.parent_fingerprint

    @property
    def child_index(self) -> int:
        return int.from_bytes(self._buffers.child_index, "big")

    @property
    def chain_code(self) -> bytes:
        return self._buffers.chain_code

    @property
    def checksum(self) -> bytes:
        return self._buffers.checksum

    @property
    def network(self) -> Network:
        return self._network

    @property
    def fingerprint(self) -> bytes:
        return self._fingerprint

    @property
    def buffers(self) -> ExtendedKeyBuffers:
        return self._buffers

    @property
    def registry(self) -> NetworkRegistry:
        """The registry the version bytes were resolved in"""
        return self._registry

    # --- METHODS --- #
    def to_string(self) -> str:
        return self._text

    def to_bytes(self) -> bytes:
        """version || depth || parent fingerprint || index || chain code || key data || checksum"""
        return self._payload(self._buffers) + self._buffers.checksum

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    def to_dict(self) -> dict:
        raise NotImplementedError(f"{self.__class__.__name__} must implement to_dict()")


class HDPrivateKey(ExtendedKey):
    """
    Root extended private key. HDPrivateKey(data) accepts nothing (random key on the default network), a network
    identifier (random key on that network), the serialized text, its JSON form, or a dict of fields.
    """
    __slots__ = ("_private_key", "_public_key", "_hd_public_key", "_lock")

    def __init__(self, data=None, registry: NetworkRegistry = DEFAULT_REGISTRY):
        source = classify_extended_key(data, registry)
        match source:
            case FromRandom(network=network):
                buffers = self._seed_buffers(token_bytes(XKEYS.MAX_SEED_BYTES), network, registry, XKEYS.SEED_KEY)
            case FromSerialized(text=text):
                buffers = self._parse_buffers(text)
            case FromJSON(text=text):
                buffers = self._object_buffers(json.loads(text), registry)
            case FromObject(fields=fields):
                buffers = self._object_buffers(fields, registry)
            case _:
                raise UnrecognizedArgument(f"Unsupported extended key source: {source!r}")
        self._build(buffers, registry)

    # --- BUFFERS --- #
    @classmethod
    def _key_data(cls, key: bytes) -> bytes:
        return KEY_PAD + key

    @classmethod
    def _read_key(cls, stream) -> bytes:
        pad = read_stream(stream, 1, "key_pad")
        if pad != KEY_PAD:
            raise StructuralError("Private key data must be prefixed with a zero byte")
        return read_stream(stream, cls.KEY_SIZE, "private_key")

    @staticmethod
    def _seed_buffers(seed, network, registry: NetworkRegistry, seed_key: bytes) -> ExtendedKeyBuffers:
        # --- Seed validation --- #
        if isinstance(seed, str):
            if not is_hex(seed):
                raise InvalidEntropyArgument("Seed string is not valid hex")
            seed = bytes.fromhex(seed)
        if not isinstance(seed, (bytes, bytearray)):
            raise InvalidEntropyArgument(f"Seed must be bytes or a hex string. Received: {type(seed)}")
        if len(seed) < XKEYS.MIN_SEED_BYTES:
            raise NotEnoughEntropy(f"Seed must be at least {XKEYS.MIN_SEED_BYTES} bytes. Found {len(seed)}")
        if len(seed) > XKEYS.MAX_SEED_BYTES:
            raise TooMuchEntropy(f"Seed must be at most {XKEYS.MAX_SEED_BYTES} bytes. Found {len(seed)}")

        # --- Network --- #
        resolved = registry.get(network) if network is not None else registry.default
        if resolved is None:
            raise MissingNetwork(f"Could not resolve a network from {network!r}")

        # I = HMAC-SHA512(seed_key, seed). Left half is the key, right half the chain code
        seed_hash = hmac_sha512(key=seed_key, message=bytes(seed))
        return ExtendedKeyBuffers(
            version=resolved.xprivkey.to_bytes(XKEYS.VERSION_SIZE, "big"),
            depth=b'\x00',
            parent_fingerprint=b'\x00' * XKEYS.PARENT_FINGERPRINT_SIZE,
            child_index=b'\x00' * XKEYS.CHILD_INDEX_SIZE,
            chain_code=seed_hash[32:],
            key=seed_hash[:32]
        )

    @staticmethod
    def _object_buffers(fields: dict, registry: NetworkRegistry) -> ExtendedKeyBuffers:
        """
        Fields may be ints, hex strings or bytes. A network overrides any version given
        """
        if fields.get("network") is not None:
            network = registry.get(fields["network"])
            if network is None:
                raise MissingNetwork(f"Unknown network {fields['network']!r}")
            version = network.xprivkey.to_bytes(XKEYS.VERSION_SIZE, "big")
        else:
            version = _as_buffer("version", fields.get("version"), XKEYS.VERSION_SIZE)

        checksum = fields.get("checksum")
        return ExtendedKeyBuffers(
            version=version,
            depth=_as_buffer("depth", fields.get("depth"), XKEYS.DEPTH_SIZE),
            parent_fingerprint=_as_buffer("parent_fingerprint", fields.get("parent_fingerprint"),
                                          XKEYS.PARENT_FINGERPRINT_SIZE),
            child_index=_as_buffer("child_index", fields.get("child_index"), XKEYS.CHILD_INDEX_SIZE),
            chain_code=_as_buffer("chain_code", fields.get("chain_code"), XKEYS.CHAIN_CODE_SIZE),
            key=_as_buffer("private_key", fields.get("private_key"), XKEYS.PRIVATE_KEY_SIZE),
            checksum=b'' if checksum is None else _as_buffer("checksum", checksum, XKEYS.CHECKSUM_SIZE)
        )

    def _build(self, buffers: ExtendedKeyBuffers, registry: NetworkRegistry):
        self._validate_buffers(buffers)

        payload = self._payload(buffers)
        checksum = self._verify_checksum(payload, buffers.checksum)
        if not buffers.checksum:
            buffers = ExtendedKeyBuffers(buffers.version, buffers.depth, buffers.parent_fingerprint,
                                         buffers.child_index, buffers.chain_code, buffers.key, checksum)

        network = self._resolve_version(buffers.version, registry)
        private_key = PrivateKey(int.from_bytes(buffers.key, "big"), network=network, registry=registry)
        public_key = private_key.to_public_key()

        self._private_key = private_key
        self._public_key = public_key
        self._hd_public_key = None
        self._lock = threading.Lock()
        self._finish(buffers, payload, network, hash160(public_key.to_der())[:XKEYS.PARENT_FINGERPRINT_SIZE],
                     registry)

        logger.debug(f"Built extended private key: network={network}, depth={self.depth}")

    # --- CLASS METHODS --- #
    @classmethod
    def from_seed(cls, seed: bytes | str, network=None, registry: NetworkRegistry = DEFAULT_REGISTRY,
                  seed_key: bytes = XKEYS.SEED_KEY) -> "HDPrivateKey":
        """
        Root key from a 16 to 64 byte seed. The network falls back to the registry default when not given
        """
        return cls._create(cls._seed_buffers(seed, network, registry, seed_key), registry)

    @classmethod
    def generate(cls, network=None, registry: NetworkRegistry = DEFAULT_REGISTRY) -> "HDPrivateKey":
        return cls.from_seed(token_bytes(XKEYS.MAX_SEED_BYTES), network=network, registry=registry)

    @classmethod
    def from_buffers(cls, version: bytes, depth: bytes, parent_fingerprint: bytes, child_index: bytes,
                     chain_code: bytes, private_key: bytes, checksum: bytes = b'',
                     registry: NetworkRegistry = DEFAULT_REGISTRY) -> "HDPrivateKey":
        buffers = ExtendedKeyBuffers(version, depth, parent_fingerprint, child_index, chain_code, private_key,
                                     checksum or b'')
        return cls._create(buffers, registry)

    @classmethod
    def from_dict(cls, fields: dict, registry: NetworkRegistry = DEFAULT_REGISTRY) -> "HDPrivateKey":
        return cls._create(cls._object_buffers(fields, registry), registry)

    @classmethod
    def from_json(cls, text: str, registry: NetworkRegistry = DEFAULT_REGISTRY) -> "HDPrivateKey":
        return cls.from_dict(json.loads(text), registry)

    # --- PROPERTIES --- #
    @property
    def private_key(self) -> PrivateKey:
        return self._private_key

    @property
    def public_key(self) -> PublicKey:
        return self._public_key

    @property
    def xprivkey(self) -> str:
        return self._text

    # --- METHODS --- #
    def hd_public_key(self) -> "HDPublicKey":
        """
        The matching HDPublicKey. Computed on first call, the same object is returned afterwards
        """
        if self._hd_public_key is None:
            with self._lock:
                if self._hd_public_key is None:
                    self._hd_public_key = HDPublicKey.from_hd_private_key(self, self._registry)
        return self._hd_public_key

    def xpubkey(self) -> str:
        return self.hd_public_key().to_string()

    def to_dict(self) -> dict:
        return {
            "network": self._network.name,
            "depth": self.depth,
            "fingerprint": int.from_bytes(self._fingerprint, "big"),
            "parent_fingerprint": int.from_bytes(self.parent_fingerprint, "big"),
            "child_index": self.child_index,
            "chain_code": self.chain_code.hex(),
            "private_key": self._private_key.to_hex(),
            "checksum": int.from_bytes(self.checksum, "big"),
            "xprivkey": self._text
        }


class HDPublicKey(ExtendedKey):
    """
    Extended public key. Built from an HDPrivateKey or parsed from its serialized text
    """
    __slots__ = ("_public_key",)

    KEY_SIZE = XKEYS.PUBLIC_KEY_SIZE
    VERSION_FIELD = "xpubkey"

    def __init__(self, data, registry: Optional[NetworkRegistry] = None):
        match data:
            case HDPrivateKey():
                buffers = self._private_buffers(data)
                registry = data.registry if registry is None else registry
            case str() | bytes():
                buffers = self._parse_buffers(data)
                registry = DEFAULT_REGISTRY if registry is None else registry
            case _:
                raise UnrecognizedArgument(f"Cannot build an HDPublicKey from {type(data)}")
        self._build(buffers, registry)

    @staticmethod
    def _private_buffers(hd_private_key: HDPrivateKey) -> ExtendedKeyBuffers:
        return ExtendedKeyBuffers(
            version=hd_private_key.network.xpubkey.to_bytes(XKEYS.VERSION_SIZE, "big"),
            depth=hd_private_key.buffers.depth,
            parent_fingerprint=hd_private_key.parent_fingerprint,
            child_index=hd_private_key.buffers.child_index,
            chain_code=hd_private_key.chain_code,
            key=hd_private_key.public_key.to_der(compressed=True)
        )

    def _build(self, buffers: ExtendedKeyBuffers, registry: NetworkRegistry):
        self._validate_buffers(buffers)

        payload = self._payload(buffers)
        checksum = self._verify_checksum(payload, buffers.checksum)
        if not buffers.checksum:
            buffers = ExtendedKeyBuffers(buffers.version, buffers.depth, buffers.parent_fingerprint,
                                         buffers.child_index, buffers.chain_code, buffers.key, checksum)

        network = self._resolve_version(buffers.version, registry)
        self._public_key = PublicKey(buffers.key, compressed=True, network=network, registry=registry)
        self._finish(buffers, payload, network, hash160(buffers.key)[:XKEYS.PARENT_FINGERPRINT_SIZE], registry)

    # --- CLASS METHODS --- #
    @classmethod
    def from_hd_private_key(cls, hd_private_key: HDPrivateKey, registry: Optional[NetworkRegistry] = None):
        """The xpub resolves in the private key's registry unless another is given"""
        registry = hd_private_key.registry if registry is None else registry
        return cls._create(cls._private_buffers(hd_private_key), registry)

    @classmethod
    def from_buffers(cls, version: bytes, depth: bytes, parent_fingerprint: bytes, child_index: bytes,
                     chain_code: bytes, public_key: bytes, checksum: bytes = b'',
                     registry: NetworkRegistry = DEFAULT_REGISTRY) -> "HDPublicKey":
        buffers = ExtendedKeyBuffers(version, depth, parent_fingerprint, child_index, chain_code, public_key,
                                     checksum or b'')
        return cls._create(buffers, registry)

    # --- PROPERTIES --- #
    @property
    def public_key(self) -> PublicKey:
        return self._public_key

    @property
    def xpubkey(self) -> str:
        return self._text

    # --- METHODS --- #
    def to_dict(self) -> dict:
        return {
            "network": self._network.name,
            "depth": self.depth,
            "fingerprint": int.from_bytes(self._fingerprint, "big"),
            "parent_fingerprint": int.from_bytes(self.parent_fingerprint, "big"),
            "child_index": self.child_index,
            "chain_code": self.chain_code.hex(),
            "public_key": self._public_key.to_der().hex(),
            "checksum": int.from_bytes(self.checksum, "big"),
            "xpubkey": self._text
        }
