"""
Source types for the key constructors.

Every key constructor accepts several input shapes. Each shape gets its own small record, and a classifier turns
the raw constructor argument into exactly one of them. The key classes then match on the record, so the shape of
the input is decided once and in one place.
"""
import json
import string
from dataclasses import dataclass
from typing import Any, Optional, Union

from bacwallet.core import UnrecognizedArgument
from bacwallet.cryptography import Point
from bacwallet.data import Network, NetworkRegistry

__all__ = ["FromRandom", "FromScalar", "FromBytes", "FromHex", "FromEncodedString", "FromFields", "FromPoint",
           "FromCoordinates", "FromPrivateKey", "FromSerialized", "FromJSON", "FromObject", "PrivateKeySource",
           "PublicKeySource", "ExtendedKeySource", "is_hex", "classify_private_key", "classify_public_key",
           "classify_extended_key"]


# --- SOURCES --- #
@dataclass(frozen=True)
class FromRandom:
    network: Optional[Network] = None


@dataclass(frozen=True)
class FromScalar:
    scalar: int


@dataclass(frozen=True)
class FromBytes:
    data: bytes


@dataclass(frozen=True)
class FromHex:
    hex_string: str


@dataclass(frozen=True)
class FromEncodedString:
    encoded: str


@dataclass(frozen=True)
class FromFields:
    """Copy construction from an existing key's scalar and network"""
    scalar: int
    network: Any
    compressed: bool = True


@dataclass(frozen=True)
class FromPoint:
    point: Point


@dataclass(frozen=True)
class FromCoordinates:
    x: int
    y: int
    compressed: Optional[bool] = None
    network: Any = None


@dataclass(frozen=True)
class FromPrivateKey:
    private_key: Any


@dataclass(frozen=True)
class FromSerialized:
    text: str


@dataclass(frozen=True)
class FromJSON:
    text: str


@dataclass(frozen=True)
class FromObject:
    fields: dict


PrivateKeySource = Union[FromRandom, FromScalar, FromBytes, FromHex, FromEncodedString, FromFields]
PublicKeySource = Union[FromPoint, FromCoordinates, FromHex, FromBytes, FromPrivateKey]
ExtendedKeySource = Union[FromRandom, FromSerialized, FromJSON, FromObject]


# --- HELPERS --- #
def is_hex(value: str) -> bool:
    return len(value) > 0 and len(value) % 2 == 0 and all(c in string.hexdigits for c in value)


def _resolve_network(data, registry: NetworkRegistry) -> Optional[Network]:
    """Only plain identifiers are tried against the registry"""
    if isinstance(data, (Network, str, int)) and not isinstance(data, bool):
        return registry.get(data)
    return None


def _is_json_object(text: str) -> bool:
    try:
        return isinstance(json.loads(text), dict)
    except ValueError:
        return False


# --- CLASSIFIERS --- #
def classify_private_key(data, network, registry: NetworkRegistry) -> PrivateKeySource:
    if data is None:
        return FromRandom()
    if isinstance(data, int) and not isinstance(data, bool):
        return FromScalar(data)
    if isinstance(data, (bytes, bytearray)):
        return FromBytes(bytes(data))
    if isinstance(data, dict) and "scalar" in data and "network" in data:
        return FromFields(data["scalar"], data["network"], data.get("compressed", True))
    if hasattr(data, "scalar") and hasattr(data, "network"):
        return FromFields(data.scalar, data.network, getattr(data, "compressed", True))
    if network is None and _resolve_network(data, registry) is not None:
        return FromRandom(_resolve_network(data, registry))
    if isinstance(data, str):
        return FromHex(data) if is_hex(data) else FromEncodedString(data)
    raise UnrecognizedArgument(f"First argument is an unrecognized data type: {type(data)}")


def classify_public_key(data) -> PublicKeySource:
    # Local import: privkey imports this module
    from bacwallet.wallet.privkey import PrivateKey

    if isinstance(data, Point):
        return FromPoint(data)
    if isinstance(data, PrivateKey):
        return FromPrivateKey(data)
    if isinstance(data, dict) and "x" in data and "y" in data:
        return FromCoordinates(data["x"], data["y"], data.get("compressed"), data.get("network"))
    if isinstance(data, str):
        return FromHex(data)
    if isinstance(data, (bytes, bytearray)):
        return FromBytes(bytes(data))
    raise UnrecognizedArgument(f"First argument is an unrecognized data format: {type(data)}")


def classify_extended_key(data, registry: NetworkRegistry) -> ExtendedKeySource:
    if data is None:
        return FromRandom()
    network = _resolve_network(data, registry)
    if network is not None:
        return FromRandom(network)
    if isinstance(data, (bytes, bytearray)):
        try:
            data = bytes(data).decode("ascii")
        except UnicodeDecodeError as e:
            raise UnrecognizedArgument("Extended key bytes must hold the serialized text form") from e
    if isinstance(data, str):
        return FromJSON(data) if _is_json_object(data) else FromSerialized(data)
    if isinstance(data, dict):
        return FromObject(dict(data))
    raise UnrecognizedArgument(f"First argument is an unrecognized data type: {type(data)}")
